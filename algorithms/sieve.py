"""
sieve.py — Sieve of Eratosthenes
=================================
array holds the numbers 2..n.  Every number starts with is_prime=True;
crossing one out clears the flag and marks it SORTED (settled).

Per candidate p (while p*p <= n):
  • a "consider p" step
  • if p was already crossed out, a skip step and nothing else
  • otherwise one marking step per multiple from p*p upward (the multiple
    SWAPPING, not yet crossed out) followed by the crossed-out state,
    and finally a "p confirmed prime" step
"""

import logging
from typing import Generator, List, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder, highlight, settle
from algorithms.validation import leading_int
from config import Limits

log = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def sieve(n):",                                 # 0
    "    is_prime = [True] * (n + 1)",               # 1
    "    is_prime[0] = is_prime[1] = False",         # 2
    "    for p in range(2, isqrt(n) + 1):",          # 3
    "        if is_prime[p]:",                       # 4
    "            for m in range(p * p, n + 1, p):",  # 5
    "                is_prime[m] = False",           # 6
    "",                                              # 7
    "        # p stays prime",                       # 8
    "",                                              # 9
    "    return [p for p in range(n + 1)",           # 10
    "            if is_prime[p]]",                   # 11
]

DEFAULT_N = 30


def sieve(values: Sequence[float]) -> Generator[Step, None, None]:
    n = leading_int(values, DEFAULT_N)
    if n < 2:
        n = DEFAULT_N
    if n - 1 > Limits.max_array_length:
        raise ValueError(f"Sieve supports n up to {Limits.max_array_length + 1}")

    sb  = StepBuilder()
    arr = [ArrayElement(value=v, is_prime=True) for v in range(2, n + 1)]

    def idx(v: int) -> int:
        return v - 2

    yield sb.build(arr, f"Initialize numbers 2 → {n}.", 0)

    p = 2
    while p * p <= n:
        sb.compared()
        yield sb.build(highlight(arr, comparing=(idx(p),)), f"Consider {p} as candidate prime.", 3, i=idx(p))

        if not arr[idx(p)].is_prime:
            yield sb.build(settle(arr), f"{p} already marked composite; skipping.", 4, i=idx(p))
            p += 1
            continue

        for multiple in range(p * p, n + 1, p):
            sb.compared()
            yield sb.build(
                highlight(arr, comparing=(idx(p),), swapping=(idx(multiple),)),
                f"Mark {multiple} as composite (multiple of {p}).",
                6, i=idx(p), j=idx(multiple),
            )
            arr[idx(multiple)] = arr[idx(multiple)].but(is_prime=False, is_sorted=True)
            yield sb.build(settle(arr), f"{multiple} is marked composite.", 6, i=idx(p))

        arr[idx(p)] = arr[idx(p)].but(is_sorted=True)
        yield sb.build(settle(arr), f"{p} confirmed prime.", 8, i=idx(p))
        p += 1

    arr = [el.but(is_sorted=True) for el in arr]
    yield sb.build(arr, f"Sieve complete up to {n}.", 10)

    primes = [int(el.value) for el in arr if el.is_prime]
    log.debug("sieve(%d) found %d primes in %d steps", n, len(primes), sb.step_number)
    yield sb.build(arr, f"Primes: {', '.join(str(q) for q in primes)}", 11, is_final=True, primes=primes)
