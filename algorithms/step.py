"""
step.py — Algorithm Step Snapshot
==================================
Every generator in this package yields Step objects.
A Step is a frozen-in-time picture of everything the visualizer
needs to render one frame:

    • The primary array, one ArrayElement per slot, with role flags
      (comparing / swapping / sorted / selected / pivot / prime / found)
    • Which line of pseudocode is executing right now
    • Running comparison and swap totals
    • A plain-English narration of what just happened
    • Algorithm-specific extras (buckets, count arrays, grids, stacks, …)

Design decisions:
  - ArrayElement is an immutable value object, so steps may share
    elements.  What steps never share is a container: every Step gets
    its own `array` list and its own copy of `additional_info`.
  - Any step that flags `is_swapping` shows the state BEFORE the write.
    The following step shows the written value.  Every generator follows
    this one convention.
  - `origin` remembers the element's index in the original input, so
    stability can be checked independently of value.
"""

from dataclasses import dataclass, field, replace, asdict
from typing import Any, Dict, Iterable, List, Sequence


@dataclass(frozen=True)
class ArrayElement:
    value:        float = 0
    is_comparing: bool  = False
    is_swapping:  bool  = False
    is_sorted:    bool  = False
    is_selected:  bool  = False
    is_pivot:     bool  = False
    is_prime:     bool  = False
    is_found:     bool  = False
    origin:       int   = -1

    def but(self, **flags) -> "ArrayElement":
        """Copy with some fields replaced."""
        return replace(self, **flags)

    def plain(self) -> "ArrayElement":
        """Copy with the transient highlight flags cleared."""
        if not (self.is_comparing or self.is_swapping):
            return self
        return replace(self, is_comparing=False, is_swapping=False)


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        array           : Snapshot of the primary visual state.
        description     : Narration of what happened at this instant.
        code_line_index : 0-based index into the algorithm's pseudocode.
        comparisons     : Running total of comparisons (never a delta).
        swaps           : Running total of swaps / writes.
        i, j            : Secondary loop indices, -1 when not applicable.
        additional_info : Algorithm-specific extras; the shape is defined by
                          each generator.
        step_number     : 0-based position of this step in its sequence.
        is_final        : True on the very last step.
    """

    array:           List[ArrayElement] = field(default_factory=list)
    description:     str                = ""
    code_line_index: int                = 0
    comparisons:     int                = 0
    swaps:           int                = 0
    i:               int                = -1
    j:               int                = -1
    additional_info: Dict[str, Any]     = field(default_factory=dict)
    step_number:     int                = 0
    is_final:        bool               = False

    def values(self) -> List[float]:
        return [el.value for el in self.array]


# ---------------------------------------------------------------------------
# Array helpers
# ---------------------------------------------------------------------------
def elements(values: Iterable[float]) -> List[ArrayElement]:
    """One fresh element per input value, tagged with its input position."""
    return [ArrayElement(value=v, origin=idx) for idx, v in enumerate(values)]


def highlight(
    array: Sequence[ArrayElement],
    comparing: Iterable[int] = (),
    swapping: Iterable[int] = (),
) -> List[ArrayElement]:
    """Copy of `array` with only the given positions flagged."""
    comparing = set(comparing)
    swapping = set(swapping)
    out = []
    for idx, el in enumerate(array):
        c = idx in comparing
        s = idx in swapping
        if el.is_comparing == c and el.is_swapping == s:
            out.append(el)
        else:
            out.append(replace(el, is_comparing=c, is_swapping=s))
    return out


def settle(array: Sequence[ArrayElement]) -> List[ArrayElement]:
    """Copy of `array` with every transient flag cleared."""
    return [el.plain() for el in array]


def finalize(array: Sequence[ArrayElement]) -> List[ArrayElement]:
    """Copy of `array` with every element marked sorted and no highlights."""
    return [replace(el, is_comparing=False, is_swapping=False, is_sorted=True) for el in array]


def _detach(value: Any) -> Any:
    # copy containers all the way down; leaves are immutable
    if isinstance(value, list):
        return [_detach(v) for v in value]
    if isinstance(value, tuple):
        return tuple(_detach(v) for v in value)
    if isinstance(value, dict):
        return {k: _detach(v) for k, v in value.items()}
    if isinstance(value, set):
        return sorted(value)
    return value


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Scratch-pad that generators use to emit Steps.

    Keeps the running counters so they can only ever go up, numbers the
    steps, and copies every container it is handed.

    Usage inside a generator:
        sb = StepBuilder()
        yield sb.build(arr, "Starting Bubble Sort", 0)
        sb.compared()
        yield sb.build(highlight(arr, comparing=(j, j + 1)), "Comparing …", 4, i=i, j=j)
    """

    def __init__(self):
        self.comparisons: int = 0
        self.swaps:       int = 0
        self.step_number: int = 0

    def compared(self, count: int = 1) -> None:
        self.comparisons += count

    def swapped(self, count: int = 1) -> None:
        self.swaps += count

    def build(
        self,
        array: Sequence[ArrayElement],
        description: str,
        line: int,
        i: int = -1,
        j: int = -1,
        is_final: bool = False,
        **info: Any,
    ) -> Step:
        step = Step(
            array=list(array),
            description=description,
            code_line_index=line,
            comparisons=self.comparisons,
            swaps=self.swaps,
            i=i,
            j=j,
            additional_info=_detach(info),
            step_number=self.step_number,
            is_final=is_final,
        )
        self.step_number += 1
        return step


def error_step(description: str, line: int = 0) -> Step:
    """The single step returned for input of the wrong shape."""
    return Step(
        array=[],
        description=description,
        code_line_index=line,
        additional_info={"error": True},
        is_final=True,
    )


def step_to_dict(step: Step) -> Dict[str, Any]:
    """JSON-ready view of a Step."""
    return asdict(step)
