"""
stepper.py — Step-by-Step Playback Engine
==========================================
Playback is split in two layers:

  Playback + advance / retreat / seek
      A frozen value and three pure transitions.  "What happens on one
      step" lives here and is trivially testable.

  Stepper
      Holds a materialized list of Steps and a Playback, and exposes the
      play/pause/next/prev/speed API.  tick() is the driver: call it from
      a timer or event loop and it advances when enough time has passed.
      "When it happens" is the host's concern.

State machine:
    IDLE  →  start()  →  PAUSED
    PAUSED  →  play()   →  PLAYING
    PLAYING →  pause()  →  PAUSED
    PLAYING →  (last step reached) → FINISHED
    any     →  reset()  →  IDLE

Thread safety:
  This class is NOT thread-safe.  Drive it from a single thread; the
  Flask layer keeps one Stepper per stored run.
"""

import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Iterable, List, Optional

from algorithms.step import Step
from config import Limits


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = dict(Limits.speed_presets)


# ---------------------------------------------------------------------------
# Pure playback transitions
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Playback:
    index:   int  = 0       # step currently displayed
    total:   int  = 0       # number of steps in the run
    playing: bool = False

    @property
    def at_start(self) -> bool:
        return self.index <= 0

    @property
    def at_end(self) -> bool:
        return self.total == 0 or self.index >= self.total - 1


def advance(pb: Playback) -> Playback:
    """One step forward.  Reaching the last step stops playback."""
    if pb.at_end:
        return replace(pb, playing=False)
    nxt = pb.index + 1
    return replace(pb, index=nxt, playing=pb.playing and nxt < pb.total - 1)


def retreat(pb: Playback) -> Playback:
    """One step back, never before step 0."""
    if pb.at_start:
        return pb
    return replace(pb, index=pb.index - 1)


def seek(pb: Playback, index: int) -> Playback:
    """Jump to `index`, clamped into the run."""
    if pb.total == 0:
        return replace(pb, index=0)
    return replace(pb, index=max(0, min(index, pb.total - 1)))


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state    : Current StepperState.
        steps    : Every Step of the run.
        playback : Current Playback value.
        speed    : Seconds between auto-advance ticks.
        on_step  : Optional callback(Step) fired every time the current step changes.
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None):
        self.steps:    List[Step]   = []
        self.playback: Playback     = Playback()
        self.state:    StepperState = StepperState.IDLE
        self.speed:    float        = SPEED_PRESETS["medium"]
        self.on_step:  Optional[Callable[[Step], None]] = on_step

        # for auto-play timing
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, steps: Iterable[Step]) -> None:
        """Load a run (a list or a generator, drained here) and show step 0."""
        self.steps    = list(steps)
        self.playback = Playback(index=0, total=len(self.steps))
        self.state    = StepperState.FINISHED if self.playback.at_end else StepperState.PAUSED
        self._notify()

    def reset(self) -> None:
        """Back to IDLE — caller must call start() again."""
        self.steps    = []
        self.playback = Playback()
        self.state    = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at end."""
        if self.playback.at_end:
            self.state = StepperState.FINISHED
            return False
        self._apply(advance(self.playback))
        if self.playback.at_end:
            self.state = StepperState.FINISHED
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at start."""
        if self.playback.at_start:
            return False
        self._apply(retreat(self.playback))
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to a step index.  Returns False if it is outside the run."""
        if not 0 <= idx < len(self.steps):
            return False
        self._apply(seek(self.playback, idx))
        self.state = StepperState.FINISHED if self.playback.at_end else StepperState.PAUSED
        return True

    def rewind(self) -> None:
        """Jump back to step 0."""
        self.goto_step(0)

    def jump_to_end(self) -> None:
        """Jump to the final step."""
        if self.steps:
            self._apply(seek(self.playback, len(self.steps) - 1))
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self.playback   = replace(self.playback, playing=True)
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED
        self.playback = replace(self.playback, playing=False)

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and enough
        time has elapsed, advances one step.  Returns True if a step
        was taken.  Playback stops itself on the last step.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(0.0, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_idx(self) -> int:
        return self.playback.index if self.steps else -1

    @property
    def current_step(self) -> Optional[Step]:
        if self.steps:
            return self.steps[self.playback.index]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _apply(self, pb: Playback) -> None:
        changed = pb.index != self.playback.index
        self.playback = pb
        if changed:
            self._notify()

    def _notify(self) -> None:
        step = self.current_step
        if self.on_step and step is not None:
            self.on_step(step)
