"""
frame.py — Tree Animation Frames
=================================
Tree operations do not produce array Steps.  They produce a list of
TreeFrames: a serialised snapshot of the whole structure plus which node
ids play which transient role at that instant.

    highlights = {"search": [3], "split": [3, 7]}

Snapshots are built fresh (to_dict) for every frame, so a renderer can
hold any number of frames without them sharing containers.  The last
frame of an operation carries no highlights.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from engine.notice import Notice


@dataclass(frozen=True)
class TreeFrame:
    description: str
    snapshot:    Any
    highlights:  Dict[str, List[Any]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "snapshot":    self.snapshot,
            "highlights":  {role: list(ids) for role, ids in self.highlights.items()},
        }


@dataclass
class OperationResult:
    notice: Notice
    frames: List[TreeFrame] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.notice.ok

    def to_dict(self) -> dict:
        return {
            "notice": self.notice.to_dict(),
            "frames": [f.to_dict() for f in self.frames],
        }
