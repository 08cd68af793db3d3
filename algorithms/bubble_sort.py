"""
bubble_sort.py — Bubble Sort
=============================
Yields a Step at every meaningful event:
  1. Compare a neighbouring pair      →  both flagged COMPARING
  2. Pair out of order                →  both flagged SWAPPING (pre-swap values)
  3. End of a pass                    →  the last unsorted slot becomes SORTED
  4. Final step                       →  every slot SORTED

Strict `>` comparison: equal neighbours are never exchanged, so the sort
is stable.
"""

from typing import Generator, List, Sequence

from algorithms.step import Step, StepBuilder, elements, highlight, settle, finalize
from algorithms.validation import ensure_finite


PSEUDOCODE: List[str] = [
    "def bubble_sort(arr):",                                # 0
    "    n = len(arr)",                                     # 1
    "    for i in range(n - 1):",                           # 2
    "        for j in range(n - i - 1):",                   # 3
    "            if arr[j] > arr[j + 1]:",                  # 4
    "                arr[j], arr[j + 1] = arr[j + 1], arr[j]",  # 5
    "    return arr",                                       # 6
]


def bubble_sort(values: Sequence[float]) -> Generator[Step, None, None]:
    ensure_finite(values)

    sb  = StepBuilder()
    arr = elements(values)
    n   = len(arr)

    yield sb.build(arr, "Starting Bubble Sort algorithm", 0)

    for i in range(n - 1):
        for j in range(n - i - 1):
            sb.compared()
            yield sb.build(
                highlight(arr, comparing=(j, j + 1)),
                f"Comparing elements at positions {j} and {j + 1}: "
                f"{arr[j].value} vs {arr[j + 1].value}",
                4, i=i, j=j,
            )

            if arr[j].value > arr[j + 1].value:
                sb.swapped()
                yield sb.build(
                    highlight(arr, swapping=(j, j + 1)),
                    f"Swapping {arr[j].value} and {arr[j + 1].value}",
                    5, i=i, j=j,
                )
                arr[j], arr[j + 1] = arr[j + 1], arr[j]

        last = n - 1 - i
        arr[last] = arr[last].but(is_sorted=True)
        yield sb.build(
            settle(arr),
            f"Element {arr[last].value} is now in its correct position",
            2, i=i,
        )

    yield sb.build(finalize(arr), "Bubble Sort completed! Array is now sorted.", 6, is_final=True)
