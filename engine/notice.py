"""
notice.py — User Notifications
===============================
Interactive structures (BFS explorer, B-Tree, heap, trie) never raise for
user mistakes.  Every operation hands back a Notice instead; the UI shows
it as a toast.
"""

from dataclasses import dataclass
from enum import Enum


class NoticeKind(Enum):
    SUCCESS = "success"
    ERROR   = "error"
    INFO    = "info"


@dataclass(frozen=True)
class Notice:
    text: str
    kind: NoticeKind = NoticeKind.INFO

    @property
    def ok(self) -> bool:
        return self.kind != NoticeKind.ERROR

    @classmethod
    def success(cls, text: str) -> "Notice":
        return cls(text, NoticeKind.SUCCESS)

    @classmethod
    def error(cls, text: str) -> "Notice":
        return cls(text, NoticeKind.ERROR)

    @classmethod
    def info(cls, text: str) -> "Notice":
        return cls(text, NoticeKind.INFO)

    def to_dict(self) -> dict:
        return {"text": self.text, "type": self.kind.value}
