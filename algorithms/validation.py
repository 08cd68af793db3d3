"""
validation.py — Domain checks shared by the generators
=======================================================
Parsing raw text is the caller's job.  These helpers only enforce the
domain rules a generator depends on, and raise ValueError with a message
that can be shown to the user as-is.
"""

import math
from numbers import Real
from typing import Sequence

from config import Limits


def ensure_finite(values: Sequence, name: str = "Input") -> None:
    for v in values:
        if isinstance(v, bool) or not isinstance(v, Real) or not math.isfinite(v):
            raise ValueError(f"{name} must contain finite numbers only (got {v!r})")


def ensure_integers(values: Sequence, name: str = "Input") -> None:
    ensure_finite(values, name)
    for v in values:
        if int(v) != v:
            raise ValueError(f"{name} must contain integers only (got {v!r})")


def ensure_non_negative(values: Sequence, name: str = "Input") -> None:
    for v in values:
        if v < 0:
            raise ValueError(f"{name} requires non-negative integers (got {v!r})")


def ensure_max_value(values: Sequence, limit: int, name: str = "Input") -> None:
    for v in values:
        if v > limit:
            raise ValueError(f"{name} supports values up to {limit} (got {v!r})")


def ensure_length(values: Sequence, name: str = "Input") -> None:
    if len(values) > Limits.max_array_length:
        raise ValueError(
            f"{name} has {len(values)} elements; at most {Limits.max_array_length} are supported"
        )


def leading_int(values: Sequence, default: int) -> int:
    """First value floored to an int, or `default` when absent or not finite."""
    if not values:
        return default
    v = values[0]
    if isinstance(v, bool) or not isinstance(v, Real) or not math.isfinite(v):
        return default
    return math.floor(v)
