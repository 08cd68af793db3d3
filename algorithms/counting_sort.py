"""
counting_sort.py — Counting Sort
=================================
Three phases, each with its own steps:

  counting    – examine each input element, then show count[value] + 1
  cumulative  – prefix-sum the count array left to right
  placing     – scan the INPUT right to left (this is what makes it stable),
                compute each element's slot, then write it

While the phases run, `array` is the input (with the element under
examination flagged) and the output lives in additional_info["output"],
one entry per slot, None while empty.  The final step's `array` is the
sorted output.

additional_info keys: phase, count, output, current_index, current_value,
highlight_count_index, target_slot.
"""

from typing import Generator, List, Optional, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder, elements, highlight, settle, finalize
from algorithms.validation import ensure_integers, ensure_max_value, ensure_non_negative
from config import Limits


PSEUDOCODE: List[str] = [
    "def counting_sort(arr):",                          # 0
    "    k = max(arr)",                                 # 1
    "    count = [0] * (k + 1)",                        # 2
    "    output = [None] * len(arr)",                   # 3
    "    for x in arr:",                                # 4
    "        count[x] += 1",                            # 5
    "    for v in range(1, k + 1):",                    # 6
    "        count[v] += count[v - 1]",                 # 7
    "    for idx in range(len(arr) - 1, -1, -1):",      # 8
    "        x = arr[idx]",                             # 9
    "        count[x] -= 1",                            # 10
    "        output[count[x]] = x",                     # 11
    "    return output",                                # 12
]


def counting_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    ensure_integers(values, "Counting sort input")
    ensure_non_negative(values, "Counting sort")
    ensure_max_value(values, Limits.counting_sort_max_key, "Counting sort")

    sb     = StepBuilder()
    arr    = elements(values)
    n      = len(arr)
    keys   = [int(v) for v in values]
    k      = max(keys) if keys else 0
    count  = [0] * (k + 1)
    output: List[Optional[ArrayElement]] = [None] * n

    yield sb.build(
        arr,
        f"Starting Counting Sort. Input size: {n}, Max value: {k}. Key range: [0, {k}]",
        0, phase="init", count=count, output=output,
    )

    # --- phase 1: count ---
    for idx in range(n):
        key = keys[idx]
        yield sb.build(
            highlight(arr, comparing=(idx,)),
            f"Counting element at index {idx}: value = {arr[idx].value}. Incrementing count[{key}]",
            4, i=idx, phase="counting", count=count, output=output,
            current_index=idx, current_value=key, highlight_count_index=key,
        )
        count[key] += 1
        times = "time" if count[key] == 1 else "times"
        yield sb.build(
            highlight(arr, comparing=(idx,)),
            f"count[{key}] is now {count[key]} (value {key} seen {count[key]} {times})",
            5, i=idx, phase="counting", count=count, output=output,
            current_index=idx, current_value=key, highlight_count_index=key,
        )

    # --- phase 2: prefix sums ---
    yield sb.build(
        settle(arr),
        "Phase 2: Converting to cumulative counts (determines final positions)",
        6, phase="cumulative", count=count, output=output,
    )
    for v in range(1, k + 1):
        own = count[v]
        count[v] += count[v - 1]
        yield sb.build(
            settle(arr),
            f"count[{v}] = {own} + count[{v - 1}] ({count[v - 1]}) = {count[v]}. "
            f"Elements <= {v} end before index {count[v]}",
            7, i=v, phase="cumulative", count=count, output=output, highlight_count_index=v,
        )

    # --- phase 3: place, right to left ---
    for idx in range(n - 1, -1, -1):
        key  = keys[idx]
        slot = count[key] - 1
        yield sb.build(
            highlight(arr, swapping=(idx,)),
            f"Processing arr[{idx}] = {arr[idx].value}. count[{key}] = {count[key]}, "
            f"so it goes to output[{slot}]",
            10, i=idx, j=slot, phase="placing", count=count, output=output,
            current_index=idx, current_value=key, highlight_count_index=key, target_slot=slot,
        )

        count[key] -= 1
        output[slot] = arr[idx]
        sb.swapped()
        yield sb.build(
            highlight(arr, comparing=(idx,)),
            f"Placed {arr[idx].value} at output[{slot}] and decremented count[{key}] to {count[key]}",
            11, i=idx, j=slot, phase="placing", count=count, output=output,
            current_index=idx, current_value=key, highlight_count_index=key, target_slot=slot,
        )

    result = finalize([el for el in output if el is not None])
    yield sb.build(
        result,
        "Counting Sort complete! Array is sorted stably in O(n + k) time.",
        12, phase="complete", count=count, output=result, is_final=True,
    )
