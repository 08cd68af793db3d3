"""
prime_factorization.py — Trial Division
========================================
array layout: [remainder, *factors found so far, candidate?]

The trial divisor, when one is being tested, is appended as the last
element and flagged COMPARING.  A successful division flags it SWAPPING
(the remainder has not been divided yet); the next step shows the new
factor and the reduced remainder.
"""

from typing import Generator, List, Optional, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder, error_step
from algorithms.validation import leading_int
from config import Limits


PSEUDOCODE: List[str] = [
    "def prime_factors(n):",                 # 0
    "    factors = []",                      # 1
    "    d = 2",                             # 2
    "    while d * d <= n:",                 # 3
    "        while n % d == 0:",             # 4
    "            factors.append(d)",         # 5
    "            n //= d",                   # 6
    "        d += 1 if d == 2 else 2",       # 7
    "",                                      # 8
    "    if n > 1: factors.append(n)",       # 9
    "    n = 1",                             # 10
    "    return factors",                    # 11
]

DEFAULT_N = 84


def _state(
    remainder: int,
    factors: Sequence[int],
    candidate: Optional[int] = None,
    matched: bool = False,
) -> List[ArrayElement]:
    arr = [ArrayElement(value=remainder)]
    arr.extend(ArrayElement(value=f, is_prime=True) for f in factors)
    if candidate is not None:
        arr.append(ArrayElement(value=candidate, is_comparing=not matched, is_swapping=matched))
    return arr


def prime_factorization(values: Sequence[float]) -> Generator[Step, None, None]:
    n = leading_int(values, DEFAULT_N)
    if n <= 0:
        yield error_step("Invalid input for prime factorization: enter a positive integer")
        return
    if n > Limits.max_factor_input:
        raise ValueError(f"Prime factorization supports n up to {Limits.max_factor_input}")

    sb = StepBuilder()
    yield sb.build(_state(n, []), f"Starting prime factorization for {n}", 0)

    if n == 1:
        yield sb.build([ArrayElement(value=1, is_sorted=True)], "1 has no prime factors", 0,
                       is_final=True, factors=[])
        return

    factors: List[int] = []
    d = 2
    while d * d <= n:
        sb.compared()
        yield sb.build(_state(n, factors, d), f"Testing divisor {d} against {n}", 3, i=d)

        while n % d == 0:
            sb.swapped()
            yield sb.build(_state(n, factors, d, matched=True),
                           f"Found factor {d}. Dividing {n} by {d}", 5, i=d)
            factors.append(d)
            n //= d
            yield sb.build(_state(n, factors), f"Remainder is now {n}", 6, i=d)

        d = 3 if d == 2 else d + 2

    if n > 1:
        sb.swapped()
        yield sb.build(_state(n, factors, n, matched=True),
                       f"{n} has no divisor up to its square root, so it is a prime factor", 9)
        factors.append(n)
        yield sb.build(_state(1, factors), "Remainder is now 1", 10)

    final = [el.but(is_sorted=True, is_comparing=False, is_swapping=False) for el in _state(1, factors)]
    yield sb.build(
        final,
        f"Prime factorization completed: {' × '.join(str(f) for f in factors)}",
        11, is_final=True, factors=factors,
    )
