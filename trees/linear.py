"""
linear.py — Stack and Queue
============================
Two bounded linear structures sharing one element model.  Every element
gets a stable id when it enters, so highlights keep pointing at the same
element as the others shift around.

    Stack : push / pop / peek at the top (last element of the snapshot)
    Queue : enqueue at the rear, dequeue / peek at the front (first element)

Frame highlights (element ids): push, pop, peek.  A pop frame shows the
element still in place; the final frame shows the structure after the
operation with no highlights.
"""

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import List, Optional, Tuple

from config import Limits
from engine.notice import Notice
from trees.frame import OperationResult, TreeFrame

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Item:
    id:    int
    value: float

    def to_dict(self) -> dict:
        return {"id": self.id, "value": self.value}


def _valid(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, Real) and math.isfinite(value)


class _Linear:
    """
    Attributes:
        items    : Elements, index 0 at the bottom / front.
        capacity : Maximum number of elements.
        history  : (operation, value, size after) triples, newest last.
    """

    name = "structure"

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("Capacity must be at least 1")
        self.items:    List[Item] = []
        self.capacity: int        = capacity
        self.history:  List[Tuple[str, Optional[float], int]] = []
        self._next_id: int        = 0

    # ------------------------------------------------------------------
    # Shared steps
    # ------------------------------------------------------------------
    def _add(self, value, op: str, verb: str) -> OperationResult:
        if not _valid(value):
            log.warning("%s %s rejected: %r", self.name, op.lower(), value)
            return OperationResult(Notice.error("Please enter a valid number"))
        if len(self.items) >= self.capacity:
            return OperationResult(Notice.error(
                f"{self.name.capitalize()} overflow: capacity is {self.capacity}"))

        item = Item(self._next_id, value)
        self._next_id += 1
        self.items.append(item)
        self.history.append((op, value, len(self.items)))
        text = f"{verb} {value}"
        log.info("%s %s %s (size %d)", self.name, op.lower(), value, len(self.items))
        return OperationResult(Notice.success(text), [
            self._frame(text, push=[item.id]),
            self._frame(text),
        ])

    def _remove(self, index: int, op: str, verb: str, empty: str) -> OperationResult:
        if not self.items:
            return OperationResult(Notice.error(empty))
        item = self.items[index]
        text = f"{verb} {item.value}"
        first = self._frame(text, pop=[item.id])
        del self.items[index]
        self.history.append((op, item.value, len(self.items)))
        log.info("%s %s %s (size %d)", self.name, op.lower(), item.value, len(self.items))
        return OperationResult(Notice.success(text), [first, self._frame(text)])

    def _peek(self, index: int, label: str, empty: str) -> OperationResult:
        if not self.items:
            return OperationResult(Notice.error(empty))
        item = self.items[index]
        self.history.append(("PEEK", item.value, len(self.items)))
        text = f"{label} element is: {item.value}"
        return OperationResult(Notice.info(text), [
            self._frame(text, peek=[item.id]),
            self._frame(text),
        ])

    def clear(self) -> Notice:
        if not self.items:
            return Notice.error(f"{self.name.capitalize()} is already empty")
        count = len(self.items)
        self.items = []
        self.history.append(("CLEAR", None, 0))
        return Notice.success(f"Cleared {count} elements from {self.name}")

    # ------------------------------------------------------------------
    # Queries / serialisation
    # ------------------------------------------------------------------
    def values(self) -> List[float]:
        return [item.value for item in self.items]

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_full(self) -> bool:
        return len(self.items) >= self.capacity

    def _frame(self, description: str, **highlights: List[int]) -> TreeFrame:
        return TreeFrame(description, [item.to_dict() for item in self.items], dict(highlights))

    def to_dict(self) -> dict:
        return {
            "items":    [item.to_dict() for item in self.items],
            "capacity": self.capacity,
            "history":  [{"operation": op, "value": v, "size": n} for op, v, n in self.history],
        }


# ---------------------------------------------------------------------------
# LIFO
# ---------------------------------------------------------------------------
class Stack(_Linear):
    name = "stack"

    def __init__(self, capacity: int = Limits.stack_capacity):
        super().__init__(capacity)

    def push(self, value: float) -> OperationResult:
        return self._add(value, "PUSH", "Pushed")

    def pop(self) -> OperationResult:
        return self._remove(-1, "POP", "Popped", "Cannot pop from empty stack")

    def peek(self) -> OperationResult:
        return self._peek(-1, "Top", "Cannot peek empty stack")


# ---------------------------------------------------------------------------
# FIFO
# ---------------------------------------------------------------------------
class Queue(_Linear):
    name = "queue"

    def __init__(self, capacity: int = Limits.queue_capacity):
        super().__init__(capacity)

    def enqueue(self, value: float) -> OperationResult:
        return self._add(value, "ENQUEUE", "Enqueued")

    def dequeue(self) -> OperationResult:
        return self._remove(0, "DEQUEUE", "Dequeued", "Cannot dequeue from empty queue")

    def peek(self) -> OperationResult:
        return self._peek(0, "Front", "Cannot peek empty queue")
