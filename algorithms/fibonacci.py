"""
fibonacci.py — Fibonacci sequence, n terms
===========================================
Each new term is shown in two steps: the two previous terms COMPARING
(about to be added), then the sequence with the appended term SELECTED.
n = 0 and n = 1 end early with their own terminal steps.
"""

from typing import Generator, List, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder, finalize
from algorithms.validation import leading_int
from config import Limits


PSEUDOCODE: List[str] = [
    "def fibonacci(n):",                         # 0
    "    if n <= 0: return []",                  # 1
    "    if n == 1: return [0]",                 # 2
    "    seq = [0, 1]",                          # 3
    "    for i in range(2, n):",                 # 4
    "        seq.append(seq[i - 1] + seq[i - 2])",  # 5
    "",                                          # 6
    "    return seq",                            # 7
]

DEFAULT_N = 8


def _sequence(seq: Sequence[int], comparing=(), new_index: int = -1) -> List[ArrayElement]:
    return [
        ArrayElement(value=v, is_comparing=idx in comparing, is_selected=idx == new_index)
        for idx, v in enumerate(seq)
    ]


def fibonacci(values: Sequence[float]) -> Generator[Step, None, None]:
    n = max(0, leading_int(values, DEFAULT_N))
    if n > Limits.max_fibonacci_n:
        raise ValueError(f"Fibonacci supports at most {Limits.max_fibonacci_n} terms")

    sb = StepBuilder()
    yield sb.build([], "Starting Fibonacci generation", 0)

    if n == 0:
        yield sb.build([], "Requested 0 terms, nothing to generate", 1, is_final=True, sequence=[])
        return

    seq = [0]
    if n == 1:
        yield sb.build(finalize(_sequence(seq)), "First term: 0. Fibonacci generation completed", 2,
                       i=0, is_final=True, sequence=seq)
        return

    yield sb.build(_sequence(seq), "First term: 0", 2, i=0)
    seq.append(1)
    yield sb.build(_sequence(seq, comparing=(0,), new_index=1), "Second term: 1", 3, i=1, j=0)

    for i in range(2, n):
        yield sb.build(
            _sequence(seq, comparing=(i - 2, i - 1)),
            f"Computing term {i}: adding {seq[i - 2]} + {seq[i - 1]}",
            5, i=i - 2, j=i - 1,
        )
        seq.append(seq[i - 1] + seq[i - 2])
        yield sb.build(_sequence(seq, new_index=i), f"Appended {seq[i]} as term {i}", 5, i=i, j=i - 1)

    yield sb.build(finalize(_sequence(seq)), "Fibonacci generation completed", 7,
                   is_final=True, sequence=seq)
