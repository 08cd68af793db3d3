"""
linear_search.py — Linear Search
=================================
Input format: [target, *values].  Each examined element is flagged
COMPARING, then marked checked (SORTED); the match, if any, is FOUND.
"""

from typing import Generator, List, Sequence

from algorithms.step import Step, StepBuilder, elements, highlight, settle, error_step
from algorithms.validation import ensure_finite


PSEUDOCODE: List[str] = [
    "def linear_search(arr, target):",       # 0
    "    for i in range(len(arr)):",         # 1
    "        if arr[i] == target: return i", # 2
    "    return -1",                         # 3
]


def linear_search(values: Sequence[float]) -> Generator[Step, None, None]:
    if len(values) < 2:
        yield error_step("Invalid input. Provide the target followed by at least one array value.")
        return
    ensure_finite(values)

    sb     = StepBuilder()
    target = values[0]
    arr    = elements(values[1:])

    yield sb.build(arr, f"Searching for {target} using Linear Search.", 0, target=target)

    for idx in range(len(arr)):
        sb.compared()
        yield sb.build(
            highlight(arr, comparing=(idx,)),
            f"Comparing target {target} with element at index {idx} ({arr[idx].value}).",
            2, i=idx, target=target,
        )

        if arr[idx].value == target:
            arr[idx] = arr[idx].but(is_sorted=True, is_found=True)
            yield sb.build(settle(arr), f"Found target {target} at index {idx}.", 2,
                           i=idx, target=target, found_index=idx)
            yield sb.build(settle(arr), f"Search complete. Found at index {idx}.", 2,
                           target=target, found_index=idx, is_final=True)
            return

        arr[idx] = arr[idx].but(is_sorted=True)
        yield sb.build(settle(arr), f"{arr[idx].value} is not the target; continue searching.", 1,
                       i=idx, target=target)

    yield sb.build(settle(arr), f"Target {target} not found in the array.", 3,
                   target=target, found_index=-1, is_final=True)
