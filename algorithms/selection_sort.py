"""
selection_sort.py — Selection Sort (stable variant)
====================================================
Each pass scans the unsorted suffix for its minimum and moves it to the
front of the suffix.  The move is a rotation (pop + insert) rather than
an exchange, so equal values keep their input order.

Yields a Step at:
  1. Start of a pass          →  slot i flagged COMPARING
  2. Each scan comparison     →  candidate and current minimum COMPARING
  3. New minimum found        →  new minimum COMPARING
  4. Minimum about to move    →  slot i and the minimum flagged SWAPPING
  5. End of pass              →  slot i SORTED
"""

from typing import Generator, List, Sequence

from algorithms.step import Step, StepBuilder, elements, highlight, settle, finalize
from algorithms.validation import ensure_finite


PSEUDOCODE: List[str] = [
    "def selection_sort(arr):",                          # 0
    "    n = len(arr)",                                  # 1
    "    for i in range(n - 1):",                        # 2
    "        min_index = i",                             # 3
    "        for j in range(i + 1, n):",                 # 4
    "            if arr[j] < arr[min_index]:",           # 5
    "                min_index = j",                     # 6
    "        # shift the block right, keeps ties stable",  # 7
    "        arr.insert(i, arr.pop(min_index))",         # 8
    "    return arr",                                    # 9
]


def selection_sort(values: Sequence[float]) -> Generator[Step, None, None]:
    ensure_finite(values)

    sb  = StepBuilder()
    arr = elements(values)
    n   = len(arr)

    yield sb.build(arr, "Starting Selection Sort algorithm", 0)

    for i in range(n - 1):
        min_index = i
        yield sb.build(
            highlight(arr, comparing=(i,)),
            f"Start of pass {i + 1}. Assuming min is at index {i} (value: {arr[i].value}).",
            3, i=i,
        )

        for j in range(i + 1, n):
            sb.compared()
            yield sb.build(
                highlight(arr, comparing=(j, min_index)),
                f"Comparing index {j} (value: {arr[j].value}) with min index "
                f"{min_index} (value: {arr[min_index].value})",
                5, i=i, j=j,
            )
            if arr[j].value < arr[min_index].value:
                min_index = j
                yield sb.build(
                    highlight(arr, comparing=(j,)),
                    f"Found new minimum at index {j} (value: {arr[j].value})",
                    6, i=i, j=j,
                )

        if min_index != i:
            sb.swapped()
            yield sb.build(
                highlight(arr, swapping=(i, min_index)),
                f"Moving minimum {arr[min_index].value} from index {min_index} to index {i}",
                8, i=i, j=min_index,
            )
            arr.insert(i, arr.pop(min_index))
        else:
            yield sb.build(
                settle(arr),
                f"Minimum {arr[i].value} is already at index {i}; nothing to move",
                8, i=i, j=min_index,
            )

        arr[i] = arr[i].but(is_sorted=True)
        yield sb.build(settle(arr), f"Element {arr[i].value} is now sorted in its correct position.", 2, i=i)

    yield sb.build(finalize(arr), "Selection Sort completed! Array is now sorted.", 9, is_final=True)
