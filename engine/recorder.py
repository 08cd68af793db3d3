"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps), then computes the
analytics metrics the UI needs for the Analytics panel and Comparison
Mode.

Usage:
    rec = Recorder()
    rec.start("merge_sort", [5, 3, 1, 4])
    rec.run_to_completion()          # generates every step
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay

Comparison Mode:
    Hold two Recorders (one per algo), run both on the SAME input, then
    call compare(rec1, rec2) → ComparisonResult.
"""

import logging
import sys
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from algorithms import AlgoInfo, generate_steps, get_algorithm
from algorithms.step import Step, step_to_dict
from engine.stepper import Stepper

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    input_size:    int   = 0          # len() of the input where that makes sense
    total_steps:   int   = 0          # number of Steps produced
    comparisons:   int   = 0          # final running total
    swaps:         int   = 0          # final running total
    wall_time_ms:  float = 0.0        # wall-clock time to generate the run
    memory_bytes:  int   = 0          # approx size of the step buffer (sys.getsizeof)
    completed:     bool  = False      # last step is_final
    error:         str   = ""         # description of an error step, if that is all we got


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_comparisons: str = ""   # which algo compared less
    winner_swaps:       str = ""
    winner_steps:       str = ""   # which run is shorter to watch


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
        stepper : The Stepper driving playback over `steps`.
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Stepper              = Stepper()

        self._algo_info: Optional[AlgoInfo] = None
        self._data:      Any                = None
        self._options:   Dict[str, Any]     = {}

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, data: Any = None, **options: Any) -> None:
        """Pick the algorithm and input for this run."""
        info = get_algorithm(algo_key)
        if info is None:
            raise KeyError(algo_key)

        self._algo_info = info
        self._data      = info.default_input if data is None else data
        self._options   = dict(options)
        self.steps      = []
        self.metrics    = None
        self.stepper.reset()

    def run_to_completion(self) -> RunMetrics:
        """Generate every step, load them into the stepper, compute metrics."""
        if self._algo_info is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.steps = generate_steps(self._algo_info.key, self._data, **self._options)
        wall_ms = (time.monotonic() - started) * 1000

        self.stepper.start(self.steps)
        self.metrics = self._compute_metrics(wall_ms)
        log.info("recorded %s: %d steps in %.1f ms",
                 self._algo_info.key, self.metrics.total_steps, self.metrics.wall_time_ms)
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    @property
    def algo_info(self) -> Optional[AlgoInfo]:
        return self._algo_info

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "input":    self._data,
            "options":  dict(self._options),
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [step_to_dict(s) for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(self.steps)
        for s in self.steps:
            mem += sys.getsizeof(s) + sys.getsizeof(s.array)

        error = ""
        if last is not None and last.additional_info.get("error"):
            error = last.description

        size = len(self._data) if isinstance(self._data, (list, tuple)) else 0

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            input_size=size,
            total_steps=len(self.steps),
            comparisons=last.comparisons if last else 0,
            swaps=last.swaps if last else 0,
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
            completed=bool(last and last.is_final),
            error=error,
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key, lower_is_better=True):
        if l_val == r_val:
            return "tie"
        if lower_is_better:
            return l_key if l_val < r_val else r_key
        return l_key if l_val > r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_comparisons=winner(l.comparisons, r.comparisons, l.algo_label, r.algo_label),
        winner_swaps      =winner(l.swaps, r.swaps, l.algo_label, r.algo_label),
        winner_steps      =winner(l.total_steps, r.total_steps, l.algo_label, r.algo_label),
    )
