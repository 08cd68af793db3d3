"""
binary_search.py — Binary Search
=================================
Input format: [target, *values].  The values are sorted first when they
are not already in order.  Each round shows the live window: `low` and
`high` are SELECTED, `mid` is COMPARING, and every slot already ruled
out is marked SORTED (checked).  The match, if any, is FOUND.

additional_info keys: target, low, high, mid, found_index.
"""

from typing import Generator, List, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder, elements, error_step
from algorithms.validation import ensure_finite


PSEUDOCODE: List[str] = [
    "def binary_search(arr, target):",          # 0
    "    low, high = 0, len(arr) - 1",          # 1
    "    while low <= high:",                   # 2
    "        mid = (low + high) // 2",          # 3
    "        if arr[mid] == target:",           # 4
    "            return mid",                   # 5
    "        elif arr[mid] < target:",          # 6
    "            low = mid + 1",                # 7
    "        else:",                            # 8
    "            high = mid - 1",               # 9
    "    return -1",                            # 10
]


def _window(arr: Sequence[ArrayElement], low: int, high: int, mid: int = -1) -> List[ArrayElement]:
    out = []
    for idx, el in enumerate(arr):
        out.append(el.but(
            is_comparing=idx == mid,
            is_selected=idx in (low, high) and low <= high,
            is_sorted=not low <= idx <= high,
        ))
    return out


def binary_search(values: Sequence[float]) -> Generator[Step, None, None]:
    if len(values) < 2:
        yield error_step("Invalid input. Provide the target followed by at least one array value.")
        return
    ensure_finite(values)

    sb     = StepBuilder()
    target = values[0]
    raw    = list(values[1:])
    arr    = sorted(elements(raw), key=lambda el: el.value)

    if [el.value for el in arr] != raw:
        text = f"Binary search needs sorted input; sorted the array first. Searching for {target}."
    else:
        text = f"Searching for {target} using Binary Search."
    yield sb.build(arr, text, 0, target=target)

    low, high = 0, len(arr) - 1
    yield sb.build(_window(arr, low, high), f"Search window is indices {low}..{high}.", 1,
                   i=low, j=high, target=target, low=low, high=high)

    while low <= high:
        mid = (low + high) // 2
        sb.compared()
        yield sb.build(
            _window(arr, low, high, mid),
            f"mid = ({low} + {high}) // 2 = {mid}. Comparing {arr[mid].value} with target {target}.",
            4, i=low, j=high, target=target, low=low, high=high, mid=mid,
        )

        if arr[mid].value == target:
            found = [el.but(is_sorted=True) for el in arr]
            found[mid] = found[mid].but(is_found=True)
            yield sb.build(found, f"Found target {target} at index {mid}.", 5,
                           i=mid, target=target, low=low, high=high, mid=mid, found_index=mid)
            yield sb.build(found, f"Search complete. Found at index {mid}.", 5,
                           target=target, found_index=mid, is_final=True)
            return

        if arr[mid].value < target:
            low = mid + 1
            text, line = f"{arr[mid].value} < {target}; discard the left half. low = {low}.", 7
        else:
            high = mid - 1
            text, line = f"{arr[mid].value} > {target}; discard the right half. high = {high}.", 9
        yield sb.build(_window(arr, low, high), text, line,
                       i=low, j=high, target=target, low=low, high=high)

    done = [el.but(is_sorted=True) for el in arr]
    yield sb.build(done, f"Target {target} not found in the array.", 10,
                   target=target, found_index=-1, is_final=True)
