"""
gcd.py — Euclidean GCD
=======================
Two registers, a and b.  Each iteration is shown as a pair of steps:
"compute remainder" (both registers COMPARING) and "reassign"
(both SWAPPING, still showing the old a, b).  The next step shows the
new pair.
"""

from typing import Generator, List, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder, error_step
from algorithms.validation import leading_int


PSEUDOCODE: List[str] = [
    "def gcd(a, b):",          # 0
    "    while b != 0:",       # 1
    "        r = a % b",       # 2
    "        a = b",           # 3
    "        b = r",           # 4
    "",                        # 5
    "    return abs(a)",       # 6
]

DEFAULT_A = 48
DEFAULT_B = 18


def _pair(a: int, b: int, **flags) -> List[ArrayElement]:
    return [ArrayElement(value=a, **flags), ArrayElement(value=b, **flags)]


def gcd(values: Sequence[float]) -> Generator[Step, None, None]:
    if len(values) > 2:
        listed = ", ".join(str(v) for v in values)
        yield error_step(
            f"Invalid input: expected exactly two integers but received {len(values)} values ({listed})"
        )
        return

    a = leading_int(values, DEFAULT_A)
    b = leading_int(values[1:], DEFAULT_B)
    sb = StepBuilder()

    yield sb.build(_pair(a, b), f"Starting GCD of {a} and {b}", 0, i=0, j=1)

    if a == 0 and b == 0:
        yield sb.build(
            _pair(0, 0, is_sorted=True),
            "GCD is undefined for 0 and 0, returning 0",
            6, is_final=True, gcd=0,
        )
        return

    a, b = abs(a), abs(b)
    while b != 0:
        r = a % b
        sb.compared()
        yield sb.build(_pair(a, b, is_comparing=True), f"Compute r = {a} % {b} = {r}", 2, i=a, j=b)

        sb.swapped()
        yield sb.build(_pair(a, b, is_swapping=True), f"Set a = {b}, b = {r}", 4, i=b, j=r)
        a, b = b, r

    yield sb.build(_pair(a, 0, is_sorted=True), f"GCD is {a}", 6, is_final=True, gcd=a)
