"""
engine/
-------
Playback, recording and interactive-session layer.

    from engine import Stepper, Recorder, compare, BfsExplorer
"""

from engine.notice       import Notice, NoticeKind
from engine.stepper      import Stepper, StepperState, SPEED_PRESETS, Playback, advance, retreat, seek
from engine.recorder     import Recorder, RunMetrics, ComparisonResult, compare
from engine.bfs_explorer import BfsExplorer, BfsStats, TraceEntry

__all__ = [
    "Notice",
    "NoticeKind",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Playback",
    "advance",
    "retreat",
    "seek",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "BfsExplorer",
    "BfsStats",
    "TraceEntry",
]
