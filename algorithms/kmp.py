"""
kmp.py — Knuth-Morris-Pratt pattern matching
=============================================
Two separately steppable traces sharing one LPS table:

  compute_lps(pattern)       → (lps, steps)     failure-function build
  kmp_search(text, pattern)  → (matches, steps) the search itself

`kmp(...)` is the registry entry: it plays the LPS build and then the
search as one continuous run.

In every step `array` is the LPS table (one element per pattern
position).  Slots already final are SORTED; the positions under
comparison are COMPARING.  Strings and pointers travel in
additional_info: phase, text, pattern, lps, i, length (LPS build) or
text_index, pattern_index, matches, shift (search).

The text pointer only ever moves forward.
"""

import logging
from typing import Any, Generator, List, Sequence, Tuple

from algorithms.step import ArrayElement, Step, StepBuilder, error_step
from config import Limits

log = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def compute_lps(p):",                           # 0
    "    lps = [0] * len(p); length = 0; i = 1",     # 1
    "    while i < len(p):",                         # 2
    "        if p[i] == p[length]:",                 # 3
    "            length += 1; lps[i] = length; i += 1",  # 4
    "        elif length != 0:",                     # 5
    "            length = lps[length - 1]",          # 6
    "        else:",                                 # 7
    "            lps[i] = 0; i += 1",                # 8
    "",                                              # 9
    "def kmp_search(text, p):",                      # 10
    "    i = j = 0",                                 # 11
    "    while i < len(text):",                      # 12
    "        if text[i] == p[j]:",                   # 13
    "            i += 1; j += 1",                    # 14
    "            if j == len(p):",                   # 15
    "                report(i - j); j = lps[j - 1]",  # 16
    "        elif j != 0:",                          # 17
    "            j = lps[j - 1]",                    # 18
    "        else:",                                 # 19
    "            i += 1",                            # 20
]


def _table(lps: Sequence[int], done: int, comparing=()) -> List[ArrayElement]:
    return [
        ArrayElement(value=v, is_sorted=k < done, is_comparing=k in comparing, origin=k)
        for k, v in enumerate(lps)
    ]


def _check(text: str, pattern: str) -> None:
    for name, s in (("Text", text), ("Pattern", pattern)):
        if not isinstance(s, str):
            raise ValueError(f"{name} must be a string")
        if len(s) > Limits.max_text_length:
            raise ValueError(f"{name} is longer than {Limits.max_text_length} characters")


# ---------------------------------------------------------------------------
# Shared step producers
# ---------------------------------------------------------------------------
def _lps_steps(pattern: str, sb: StepBuilder, final: bool = False) -> Generator[Step, None, List[int]]:
    m = len(pattern)
    lps = [0] * m
    length, i = 0, 1

    yield sb.build(_table(lps, 1), f"Building the LPS table for '{pattern}'. lps[0] is always 0", 1,
                   i=1, j=0, phase="lps", pattern=pattern, lps=lps, length=0)

    while i < m:
        sb.compared()
        yield sb.build(
            _table(lps, i, comparing=(i, length)),
            f"Compare pattern[{i}] = '{pattern[i]}' with pattern[{length}] = '{pattern[length]}'",
            3, i=i, j=length, phase="lps", pattern=pattern, lps=lps, length=length,
        )

        if pattern[i] == pattern[length]:
            length += 1
            lps[i] = length
            sb.swapped()
            yield sb.build(
                _table(lps, i + 1, comparing=(i,)),
                f"Match: length becomes {length}, so lps[{i}] = {length}",
                4, i=i, j=length, phase="lps", pattern=pattern, lps=lps, length=length,
            )
            i += 1
        elif length != 0:
            fallback = lps[length - 1]
            yield sb.build(
                _table(lps, i, comparing=(i, length - 1)),
                f"Mismatch with length {length}: fall back to length = lps[{length - 1}] = {fallback}",
                6, i=i, j=fallback, phase="lps", pattern=pattern, lps=lps, length=fallback,
            )
            length = fallback
        else:
            lps[i] = 0
            sb.swapped()
            yield sb.build(
                _table(lps, i + 1, comparing=(i,)),
                f"Mismatch with length 0: lps[{i}] = 0",
                8, i=i, j=0, phase="lps", pattern=pattern, lps=lps, length=0,
            )
            i += 1

    yield sb.build(_table(lps, m), f"LPS table complete: {lps}", 2, is_final=final,
                   phase="lps", pattern=pattern, lps=lps, length=length)
    return lps


def _search_steps(
    text: str, pattern: str, lps: List[int], sb: StepBuilder
) -> Generator[Step, None, List[int]]:
    n, m = len(text), len(pattern)
    matches: List[int] = []
    i = j = 0

    def info(**extra) -> dict:
        return dict(phase="search", text=text, pattern=pattern, lps=lps,
                    text_index=i, pattern_index=j, matches=matches, **extra)

    yield sb.build(_table(lps, m), f"Searching for '{pattern}' in '{text}'", 11, i=0, j=0, **info())

    while i < n:
        sb.compared()
        yield sb.build(
            _table(lps, m, comparing=(j,)),
            f"Compare text[{i}] = '{text[i]}' with pattern[{j}] = '{pattern[j]}'",
            13, i=i, j=j, **info(comparison=True),
        )

        if text[i] == pattern[j]:
            i += 1
            j += 1
            if j == m:
                matches.append(i - j)
                shift = j - lps[j - 1]
                yield sb.build(
                    _table(lps, m),
                    f"Pattern found at index {i - j}. Continue with j = lps[{j - 1}] = {lps[j - 1]}",
                    16, i=i, j=j, **info(is_match=True, shift=shift),
                )
                sb.swapped()
                j = lps[j - 1]
            else:
                yield sb.build(_table(lps, m, comparing=(j - 1,)), "Characters match, advance both pointers",
                               14, i=i, j=j, **info())
        elif j != 0:
            shift = j - lps[j - 1]
            yield sb.build(
                _table(lps, m, comparing=(j - 1,)),
                f"Mismatch after {j} matched characters: j = lps[{j - 1}] = {lps[j - 1]} "
                f"(pattern shifts by {shift}, text index stays at {i})",
                18, i=i, j=j, **info(shift=shift),
            )
            sb.swapped()
            j = lps[j - 1]
        else:
            yield sb.build(_table(lps, m), f"Mismatch at pattern start, advance text index to {i + 1}",
                           20, i=i, j=j, **info(shift=1))
            i += 1

    found = ", ".join(str(k) for k in matches) if matches else "none"
    yield sb.build(_table(lps, m), f"Search complete. Matches at: {found}", 12,
                   is_final=True, **info())
    return matches


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def _drain(gen: Generator[Step, None, Any], steps: List[Step]) -> Any:
    """Collect every step from `gen` and hand back its return value."""
    while True:
        try:
            steps.append(next(gen))
        except StopIteration as stop:
            return stop.value


def compute_lps(pattern: str) -> Tuple[List[int], List[Step]]:
    _check("", pattern)
    if not pattern:
        return [], []
    steps: List[Step] = []
    lps = _drain(_lps_steps(pattern, StepBuilder(), final=True), steps)
    return lps, steps


def kmp_search(text: str, pattern: str) -> Tuple[List[int], List[Step]]:
    _check(text, pattern)
    if not pattern:
        return [], [error_step("Pattern must not be empty")]
    lps, _ = compute_lps(pattern)
    steps: List[Step] = []
    matches = _drain(_search_steps(text, pattern, lps, StepBuilder()), steps)
    return matches, steps


def kmp(data: Any = None) -> Generator[Step, None, None]:
    """Registry entry.  `data` is {"text": ..., "pattern": ...} or [text, pattern]."""
    if data is None:
        data = {"text": "AABAACAADAABAABA", "pattern": "AABA"}
    if isinstance(data, dict):
        text, pattern = data.get("text", ""), data.get("pattern", "")
    else:
        text, pattern = data
    _check(text, pattern)
    if not pattern:
        yield error_step("Pattern must not be empty")
        return

    sb = StepBuilder()
    lps = yield from _lps_steps(pattern, sb)
    matches = yield from _search_steps(text, pattern, lps, sb)
    log.debug("kmp: %d matches in %d steps", len(matches), sb.step_number)
