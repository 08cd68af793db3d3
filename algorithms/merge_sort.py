"""
merge_sort.py — Merge Sort
===========================
Top-down merge sort over ONE global working array.  Every step shows the
whole array indexed by absolute position: a sub-range being split or
merged is flagged SELECTED, and while a merge is in progress the slots
lo..hi hold `merged + left[a:] + right[b:]`, i.e. the values already
written followed by what is still waiting in each half.

Yields a Step at:
  1. Base case (single element)
  2. Split of a range
  3. Each merge comparison        →  the two heads COMPARING
  4. Each merge write             →  source and target slot SWAPPING (pre-write)
  5. Completed merge of a range
"""

from typing import Generator, List, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder, elements, highlight, finalize
from algorithms.validation import ensure_finite


PSEUDOCODE: List[str] = [
    "def merge_sort(arr, lo, hi):",                   # 0
    "    if hi - lo <= 1: return",                    # 1
    "    mid = (lo + hi) // 2",                       # 2
    "    merge_sort(arr, lo, mid)",                   # 3
    "    merge_sort(arr, mid, hi)",                   # 4
    "    merge(arr, lo, mid, hi)",                    # 5
    "",                                               # 6
    "def merge(arr, lo, mid, hi):",                   # 7
    "    left, right = arr[lo:mid], arr[mid:hi]",     # 8
    "    i = j = 0; k = lo",                          # 9
    "    while i < len(left) and j < len(right):",    # 10
    "        if left[i] <= right[j]:",                # 11
    "            arr[k] = left[i]; i += 1",           # 12
    "        else:",                                  # 13
    "            arr[k] = right[j]; j += 1",          # 14
    "        k += 1",                                 # 15
    "    arr[k:hi] = left[i:] + right[j:]",           # 16
]


def _select(array: Sequence[ArrayElement], lo: int, hi: int, **marks) -> List[ArrayElement]:
    out = highlight(array, **marks)
    return [el.but(is_selected=lo <= idx < hi) if el.is_selected != (lo <= idx < hi) else el
            for idx, el in enumerate(out)]


def _fmt(run: Sequence[ArrayElement]) -> str:
    return ", ".join(str(el.value) for el in run)


def merge_sort(values: Sequence[float]) -> Generator[Step, None, None]:
    ensure_finite(values)

    sb   = StepBuilder()
    work = elements(values)

    yield sb.build(work, "Starting Merge Sort algorithm", 0)

    def sort(lo: int, hi: int) -> Generator[Step, None, None]:
        if hi - lo <= 1:
            if hi - lo == 1:
                yield sb.build(
                    _select(work, lo, hi),
                    f"Base case: [{work[lo].value}]",
                    1, i=lo, j=lo,
                )
            return

        mid = (lo + hi) // 2
        yield sb.build(
            _select(work, lo, hi),
            f"Splitting [{_fmt(work[lo:hi])}] into [{_fmt(work[lo:mid])}] and [{_fmt(work[mid:hi])}]",
            2, i=lo, j=hi - 1, range=[lo, hi - 1],
        )

        yield from sort(lo, mid)
        yield from sort(mid, hi)
        yield from merge(lo, mid, hi)

    def merge(lo: int, mid: int, hi: int) -> Generator[Step, None, None]:
        left  = work[lo:mid]
        right = work[mid:hi]
        merged: List[ArrayElement] = []
        a = b = 0

        while a < len(left) and b < len(right):
            k     = lo + len(merged)
            pos_a = k
            pos_b = k + (len(left) - a)

            sb.compared()
            yield sb.build(
                _select(work, lo, hi, comparing=(pos_a, pos_b)),
                f"Comparing {left[a].value} and {right[b].value}",
                11, i=pos_a, j=pos_b, range=[lo, hi - 1],
            )

            if left[a].value <= right[b].value:
                source, pick, line = pos_a, left[a], 12
                a += 1
            else:
                source, pick, line = pos_b, right[b], 14
                b += 1

            sb.swapped()
            yield sb.build(
                _select(work, lo, hi, swapping={source, k}),
                f"Writing {pick.value} to index {k}",
                line, i=k, j=source, range=[lo, hi - 1],
            )

            merged.append(pick)
            work[lo:hi] = merged + left[a:] + right[b:]

        yield sb.build(
            _select(work, lo, hi),
            f"Merged into [{_fmt(work[lo:hi])}]",
            16, i=lo, j=hi - 1, range=[lo, hi - 1],
        )

    yield from sort(0, len(work))

    yield sb.build(finalize(work), "Merge Sort completed! Array is now sorted.", 5, is_final=True)
