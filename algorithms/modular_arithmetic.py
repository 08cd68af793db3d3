"""
modular_arithmetic.py — Modular reduction and exponentiation
=============================================================
  [a, m]        →  a mod m (result is always in [0, m))
  [a, e, m]     →  a^e mod m by square-and-multiply, one group of steps
                   per bit of the exponent

Registers shown while exponentiating: [result, base, exp].
"""

from typing import Generator, List, Sequence

from algorithms.step import ArrayElement, Step, StepBuilder, error_step
from algorithms.validation import leading_int


PSEUDOCODE: List[str] = [
    "def mod(a, m):",                            # 0
    "    return a % m",                          # 1
    "",                                          # 2
    "",                                          # 3
    "def mod_pow(base, exp, m):",                # 4
    "    result = 1 % m",                        # 5
    "    base = base % m",                       # 6
    "    while exp > 0:",                        # 7
    "        if exp & 1: result = result * base % m",  # 8
    "        base = base * base % m",            # 9
    "        exp >>= 1",                         # 10
    "",                                          # 11
    "    return result",                         # 12
]


def _regs(values: Sequence[int], **flags) -> List[ArrayElement]:
    return [ArrayElement(value=v, **flags) for v in values]


def modular_arithmetic(values: Sequence[float]) -> Generator[Step, None, None]:
    if not values:
        yield error_step("No input provided")
        return
    if len(values) == 1 or len(values) > 3:
        listed = ", ".join(str(v) for v in values)
        yield error_step(
            f"Please enter two or three integers. Received {len(values)} values ({listed})"
        )
        return

    sb = StepBuilder()
    a  = leading_int(values, 0)
    b  = leading_int(values[1:], 0)

    if len(values) == 2:
        m = abs(b) or 1
        result = a % m
        yield sb.build(_regs([a, m]), f"Compute {a} mod {m}", 0, i=a, j=m)
        yield sb.build(_regs([result, m], is_sorted=True), f"Result: {result}", 1,
                       is_final=True, result=result)
        return

    c   = leading_int(values[2:], 1)
    mod = max(1, abs(c))
    exp = max(0, b)

    yield sb.build(_regs([a, b, c]), f"Compute ({a}^{b}) mod {mod}", 4, i=a, j=b)

    result = 1 % mod
    base   = a % mod
    yield sb.build(_regs([result, base, exp]),
                   f"Initial: result={result}, base={base}, exp={exp}", 5, i=result, j=exp)

    while exp > 0:
        if exp & 1:
            product = result * base % mod
            sb.compared()
            yield sb.build(_regs([result, base, exp], is_comparing=True),
                           f"exp is odd, so result = (result * base) % {mod} = {product}",
                           8, i=result, j=base)
            sb.swapped()
            yield sb.build(_regs([result, base, exp], is_swapping=True),
                           f"Updating result from {result} to {product}", 8, i=result, j=product)
            result = product

        squared = base * base % mod
        sb.compared()
        yield sb.build(_regs([result, base, exp], is_comparing=True),
                       f"Square base: base = (base * base) % {mod} = {squared}", 9, i=base, j=squared)
        sb.swapped()
        yield sb.build(_regs([result, base, exp], is_swapping=True),
                       f"Shift: base becomes {squared}, exp becomes {exp >> 1}", 10, i=result, j=exp >> 1)
        base = squared
        exp >>= 1

    yield sb.build(_regs([result, base, exp], is_sorted=True), f"Final result: {result}", 12,
                   is_final=True, result=result)
