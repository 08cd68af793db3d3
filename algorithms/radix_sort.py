"""
radix_sort.py — LSD Radix Sort
===============================
One pass per decimal digit (exp = 1, 10, 100, … while max_key // exp > 0),
each pass a stable bucket sort by that digit into ten buckets.

Keys are `value - min(values)` when the input holds negatives, so every
key is non-negative and the numeric order is preserved.

The collection phase moves the actual element objects out of the buckets,
so the trace follows each duplicate exactly (the `origin` tag travels with
the element).

additional_info keys: buckets, pass_completed, total_passes, exp, digit.
"""

from typing import Generator, List, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder, elements, highlight, settle, finalize
from algorithms.validation import ensure_integers


PSEUDOCODE: List[str] = [
    "def radix_sort(arr):",                                  # 0
    "    shift = min(min(arr), 0)",                          # 1
    "    key = lambda x: x - shift",                         # 2
    "    exp = 1",                                           # 3
    "    while max(map(key, arr)) // exp > 0:",              # 4
    "        buckets = [[] for _ in range(10)]",             # 5
    "        for x in arr:",                                 # 6
    "            buckets[key(x) // exp % 10].append(x)",     # 7
    "        idx = 0",                                       # 8
    "        for bucket in buckets:",                        # 9
    "            for x in bucket:",                          # 10
    "                arr[idx] = x; idx += 1",                # 11
    "        exp *= 10",                                     # 12
    "    return arr",                                        # 13
]

_PLACE_NAMES = ["Ones", "Tens", "Hundreds", "Thousands", "Ten-thousands"]


def _pass_count(max_key: int) -> int:
    passes, exp = 0, 1
    while max_key // exp > 0:
        passes += 1
        exp *= 10
    return passes


def radix_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    ensure_integers(values, "Radix sort input")

    sb    = StepBuilder()
    arr   = elements(values)
    n     = len(arr)
    shift = min(min(int(v) for v in values), 0) if n else 0

    def key(el: ArrayElement) -> int:
        return int(el.value) - shift

    max_key      = max((key(el) for el in arr), default=0)
    total_passes = _pass_count(max_key)
    buckets: List[List[ArrayElement]] = [[] for _ in range(10)]

    intro = "Starting Radix Sort (LSD)"
    if shift < 0:
        intro += f". Negative values present, so keys are offset by {-shift}"
    yield sb.build(arr, intro, 0, buckets=[], pass_completed=0, total_passes=total_passes)

    exp = 1
    for p in range(total_passes):
        place  = _PLACE_NAMES[p] if p < len(_PLACE_NAMES) else f"10^{p}"
        prefix = f"Pass {p + 1}/{total_passes} ({place} place)"
        buckets = [[] for _ in range(10)]

        yield sb.build(
            settle(arr), f"{prefix}: Distributing elements to buckets...",
            5, buckets=buckets, pass_completed=p, total_passes=total_passes, exp=exp,
        )

        for idx, el in enumerate(arr):
            digit = key(el) // exp % 10
            sb.compared()
            yield sb.build(
                highlight(arr, comparing=(idx,)),
                f"{prefix}: Moving {el.value} to bucket {digit}",
                7, i=idx, buckets=buckets, pass_completed=p, total_passes=total_passes,
                exp=exp, digit=digit,
            )
            buckets[digit].append(el)
            yield sb.build(
                settle(arr),
                f"{prefix}: Placed {el.value} in bucket {digit}",
                7, i=idx, buckets=buckets, pass_completed=p, total_passes=total_passes,
                exp=exp, digit=digit,
            )

        yield sb.build(
            settle(arr), f"{prefix}: Collecting elements from buckets...",
            9, buckets=buckets, pass_completed=p, total_passes=total_passes, exp=exp,
        )

        idx = 0
        for digit in range(10):
            while buckets[digit]:
                el = buckets[digit][0]
                yield sb.build(
                    highlight(arr, swapping=(idx,)),
                    f"{prefix}: Collecting {el.value} from bucket {digit} into index {idx}",
                    11, i=idx, buckets=buckets, pass_completed=p, total_passes=total_passes,
                    exp=exp, digit=digit,
                )
                buckets[digit].pop(0)
                arr[idx] = el
                sb.swapped()
                yield sb.build(
                    settle(arr),
                    f"{prefix}: Placed {el.value} at index {idx}",
                    11, i=idx, buckets=buckets, pass_completed=p, total_passes=total_passes,
                    exp=exp, digit=digit,
                )
                idx += 1

        exp *= 10
        yield sb.build(
            settle(arr), f"{prefix}: Pass complete!",
            12, buckets=buckets, pass_completed=p + 1, total_passes=total_passes, exp=exp,
        )

    yield sb.build(
        finalize(arr), "Radix Sort complete!",
        13, buckets=[], pass_completed=total_passes, total_passes=total_passes, is_final=True,
    )
