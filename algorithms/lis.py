"""
lis.py — Longest Increasing Subsequence
========================================
Two methods over the same input, picked with the `method` option:

  dp        – O(n²) table: dp[i] is the length of the longest strictly
              increasing subsequence ending at index i.  The outer index
              is SELECTED, the inner index COMPARING.
  patience  – O(n log n) patience sorting: each value goes on the
              leftmost pile whose top is >= it, found by binary search
              over the pile tops.  The number of piles is the LIS length.

Both methods keep a back-pointer per index so the final step can flag
one actual subsequence as FOUND.

additional_info keys: method, dp / piles, prev, length, lis, lis_indices.
"""

from typing import Generator, List, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder, elements, highlight, finalize
from algorithms.validation import ensure_finite

METHODS = ("dp", "patience")

PSEUDOCODE: List[str] = [
    "def lis_dp(arr):",                                  # 0
    "    dp = [1] * len(arr)",                           # 1
    "    for i in range(1, len(arr)):",                  # 2
    "        for j in range(i):",                        # 3
    "            if arr[j] < arr[i]:",                   # 4
    "                dp[i] = max(dp[i], dp[j] + 1)",     # 5
    "    return max(dp)",                                # 6
    "",                                                  # 7
    "def lis_patience(arr):",                            # 8
    "    piles = []",                                    # 9
    "    for x in arr:",                                 # 10
    "        k = leftmost pile with top >= x",           # 11
    "        if k == len(piles): piles.append([x])",     # 12
    "        else: piles[k].append(x)",                  # 13
    "    return len(piles)",                             # 14
]


def _chain(prev: Sequence[int], end: int) -> List[int]:
    out = []
    while end != -1:
        out.append(end)
        end = prev[end]
    return out[::-1]


def _result(arr: List[ArrayElement], indices: List[int]) -> List[ArrayElement]:
    members = set(indices)
    return [el.but(is_found=True) if idx in members else el
            for idx, el in enumerate(finalize(arr))]


def lis(values: Sequence[float], method: str = "dp") -> Generator[Step, None, None]:
    ensure_finite(values)
    if method not in METHODS:
        raise ValueError(f"Unknown LIS method {method!r}; choose one of: {', '.join(METHODS)}")
    if method == "dp":
        yield from _dp(values)
    else:
        yield from _patience(values)


# ---------------------------------------------------------------------------
# O(n²) dynamic programming
# ---------------------------------------------------------------------------
def _dp(values: Sequence[float]) -> Generator[Step, None, None]:
    sb   = StepBuilder()
    arr  = elements(values)
    n    = len(arr)
    dp   = [1] * n
    prev = [-1] * n

    yield sb.build(arr, f"Initialized dp = [1] * {n}: every element alone is an increasing run.",
                   1, method="dp", dp=dp, prev=prev)

    for i in range(1, n):
        for j in range(i):
            sb.compared()
            marked = highlight(arr, comparing=(j,))
            marked[i] = marked[i].but(is_selected=True)
            yield sb.build(
                marked, f"Is arr[{j}] = {arr[j].value} < arr[{i}] = {arr[i].value}?",
                4, i=i, j=j, method="dp", dp=dp, prev=prev,
            )
            if arr[j].value < arr[i].value and dp[j] + 1 > dp[i]:
                dp[i] = dp[j] + 1
                prev[i] = j
                sb.swapped()
                yield sb.build(
                    marked, f"Updated dp[{i}] = dp[{j}] + 1 = {dp[i]}",
                    5, i=i, j=j, method="dp", dp=dp, prev=prev,
                )

    length  = max(dp) if dp else 0
    indices = _chain(prev, dp.index(length)) if dp else []
    yield sb.build(
        _result(arr, indices),
        f"LIS length = {length}: [{', '.join(str(arr[k].value) for k in indices)}]",
        6, method="dp", dp=dp, prev=prev, length=length,
        lis=[arr[k].value for k in indices], lis_indices=indices, is_final=True,
    )


# ---------------------------------------------------------------------------
# O(n log n) patience sorting
# ---------------------------------------------------------------------------
def _patience(values: Sequence[float]) -> Generator[Step, None, None]:
    sb    = StepBuilder()
    arr   = elements(values)
    n     = len(arr)
    piles: List[List[int]] = []      # indices into arr, top last
    prev  = [-1] * n

    def pile_values() -> List[List[float]]:
        return [[arr[k].value for k in pile] for pile in piles]

    yield sb.build(arr, "Start with no piles", 9, method="patience", piles=[], prev=prev)

    for idx in range(n):
        x = arr[idx].value
        lo, hi = 0, len(piles)
        while lo < hi:
            mid = (lo + hi) // 2
            top = piles[mid][-1]
            sb.compared()
            yield sb.build(
                highlight(arr, comparing=(idx, top)),
                f"Pile {mid + 1} top is {arr[top].value}; is it >= {x}?",
                11, i=idx, j=top, method="patience", piles=pile_values(), prev=prev, pile=mid,
            )
            if arr[top].value >= x:
                hi = mid
            else:
                lo = mid + 1

        if lo > 0:
            prev[idx] = piles[lo - 1][-1]
        if lo == len(piles):
            piles.append([idx])
            line = 12
        else:
            piles[lo].append(idx)
            line = 13
        sb.swapped()
        yield sb.build(
            highlight(arr, swapping=(idx,)),
            f"Placed {x} → pile {lo + 1}",
            line, i=idx, method="patience", piles=pile_values(), prev=prev, pile=lo,
        )

    length  = len(piles)
    indices = _chain(prev, piles[-1][-1]) if piles else []
    yield sb.build(
        _result(arr, indices),
        f"Final piles (LIS length = {length}): [{', '.join(str(arr[k].value) for k in indices)}]",
        14, method="patience", piles=pile_values(), prev=prev, length=length,
        lis=[arr[k].value for k in indices], lis_indices=indices, is_final=True,
    )
