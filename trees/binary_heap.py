"""
binary_heap.py — Min / Max Binary Heap
=======================================
Array-backed binary heap.  insert() sifts up, extract_root() sifts down,
and both return the TreeFrames of the walk with index highlights:

    active  : the index being moved
    compare : a child / parent pair being compared
    swap    : a pair about to be swapped (frame shows the values BEFORE
              the swap; the next frame shows them exchanged)

Children of i live at 2i+1 and 2i+2, the parent at (i-1)//2.
"""

import logging
import math
from enum import Enum
from numbers import Real
from typing import List, Optional

from engine.notice import Notice
from trees.frame import OperationResult, TreeFrame

log = logging.getLogger(__name__)


class HeapKind(Enum):
    MIN = "min"
    MAX = "max"


class BinaryHeap:

    def __init__(self, kind: HeapKind = HeapKind.MAX):
        self.kind: HeapKind    = HeapKind(kind)
        self.heap: List[float] = []
        self._frames: List[TreeFrame] = []

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def _root_label(self) -> str:
        return self.kind.value

    def _should_swap(self, child: float, parent: float) -> bool:
        """True when `child` belongs above `parent`."""
        if self.kind == HeapKind.MAX:
            return child > parent
        return child < parent

    def _preferred_child(self, i: int) -> Optional[int]:
        left, right = 2 * i + 1, 2 * i + 2
        if left >= len(self.heap):
            return None
        if right < len(self.heap) and self._should_swap(self.heap[right], self.heap[left]):
            return right
        return left

    def _swap(self, a: int, b: int) -> None:
        self.heap[a], self.heap[b] = self.heap[b], self.heap[a]

    def _frame(self, description: str, **highlights: List[int]) -> None:
        self._frames.append(TreeFrame(description, list(self.heap), dict(highlights)))

    def _take_frames(self) -> List[TreeFrame]:
        frames, self._frames = self._frames, []
        return frames

    # ------------------------------------------------------------------
    # Insert (sift-up)
    # ------------------------------------------------------------------
    def insert(self, value: float) -> OperationResult:
        if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
            log.warning("heap insert rejected: %r", value)
            return OperationResult(Notice.error("Please enter a valid number"))

        verb = "larger" if self.kind == HeapKind.MAX else "smaller"
        op = ">" if self.kind == HeapKind.MAX else "<"

        self.heap.append(value)
        cur = len(self.heap) - 1
        self._frame(f"Adding {value} to end (index {cur}).", active=[cur])

        while cur > 0:
            parent = (cur - 1) // 2
            if not self._should_swap(self.heap[cur], self.heap[parent]):
                self._frame(
                    f"Value {self.heap[cur]} (idx {cur}) is NOT {verb} than parent "
                    f"{self.heap[parent]} (idx {parent}). Heap property maintained.",
                    active=[cur], compare=[cur, parent],
                )
                break
            self._frame(
                f"Comparing child {self.heap[cur]} (idx {cur}) {op} parent "
                f"{self.heap[parent]} (idx {parent}). Child is {verb}.",
                compare=[cur, parent],
            )
            self._frame(f"Swapping child {self.heap[cur]} (idx {cur}) and parent "
                        f"{self.heap[parent]} (idx {parent}).", swap=[cur, parent])
            self._swap(cur, parent)
            self._frame(f"Swap complete. Moving up to index {parent}.", active=[parent])
            cur = parent
        else:
            self._frame(f"Value {self.heap[0]} reached the root. Heap property maintained.", active=[0])

        self._frame(f"Inserted {value}.")
        log.info("heap insert %s (size %d)", value, len(self.heap))
        return OperationResult(Notice.success(f"Inserted {value}"), self._take_frames())

    # ------------------------------------------------------------------
    # Extract root (sift-down)
    # ------------------------------------------------------------------
    def extract_root(self) -> OperationResult:
        label = self._root_label
        if not self.heap:
            return OperationResult(Notice.error(f"Heap is empty. Cannot extract {label}."))

        root = self.heap[0]
        last = len(self.heap) - 1
        if last > 0:
            self._frame(f"Preparing to extract {label} value {root}. "
                        f"Swapping root with last element {self.heap[last]}.", swap=[0, last])
            self._swap(0, last)
        self.heap.pop()

        if self.heap:
            self._sift_down(root)
        self._frame(f"Extracted {label} value {root}." +
                    (" Heap is now empty." if not self.heap else ""))
        log.info("heap extract %s (size %d)", root, len(self.heap))
        return OperationResult(Notice.success(f"Extracted {label} value {root}"), self._take_frames())

    def _sift_down(self, removed: float) -> None:
        child_word = "largest" if self.kind == HeapKind.MAX else "smallest"
        holds = ">=" if self.kind == HeapKind.MAX else "<="
        self._frame(f"Extracted {removed}. Moved {self.heap[0]} to root. Sifting down.", active=[0])

        cur = 0
        while True:
            child = self._preferred_child(cur)
            if child is None:
                self._frame(f"Node {self.heap[cur]} (idx {cur}) has no children. "
                            "Sift-down complete.", active=[cur])
                break
            self._frame(f"Comparing parent {self.heap[cur]} (idx {cur}) with its {child_word} "
                        f"child {self.heap[child]} (idx {child}).", compare=[cur, child])
            if not self._should_swap(self.heap[child], self.heap[cur]):
                self._frame(f"Parent {self.heap[cur]} {holds} {child_word} child "
                            f"{self.heap[child]}. Heap property holds.", active=[cur])
                break
            self._frame(f"Swapping nodes {cur} and {child}.", swap=[cur, child])
            self._swap(cur, child)
            self._frame(f"Swap complete. Moving down to index {child}.", active=[child])
            cur = child

    # ------------------------------------------------------------------
    # Misc
    # ------------------------------------------------------------------
    def peek(self) -> Optional[float]:
        return self.heap[0] if self.heap else None

    def clear(self) -> Notice:
        self.heap = []
        return Notice.info("Heap cleared")

    def is_valid(self) -> bool:
        return all(
            not self._should_swap(self.heap[i], self.heap[(i - 1) // 2])
            for i in range(1, len(self.heap))
        )

    def __len__(self) -> int:
        return len(self.heap)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "heap": list(self.heap)}
