from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Node Status Enum — maps 1-to-1 with the visual encoding palette
# ---------------------------------------------------------------------------
class NodeStatus(Enum):
    UNVISITED = "unvisited"   # default grey
    QUEUED    = "queued"      # amber — "seen, waiting in the FIFO queue"
    VISITING  = "visiting"    # bright highlight — dequeued, being expanded RIGHT NOW
    VISITED   = "visited"     # green — "fully processed"


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Immutable identity (id), mutable position and traversal state.

    Attributes:
        id       : Small integer id, unique within its graph.
        label    : Human-readable name shown on the canvas.
        x, y     : Canvas coordinates in percent of the canvas (presentation only).
        status   : Current NodeStatus for visual encoding.
        distance : Hop count from the BFS start, None until reached.
        parent   : Predecessor on the BFS tree, None for the start / unreached.
    """

    __slots__ = ("id", "label", "x", "y", "status", "distance", "parent")

    def __init__(
        self,
        node_id: int,
        x: float = 50.0,
        y: float = 50.0,
        label: Optional[str] = None,
    ):
        self.id: int                  = node_id
        self.label: str               = label if label is not None else str(node_id)
        self.x: float                 = x
        self.y: float                 = y
        self.status: NodeStatus       = NodeStatus.UNVISITED
        self.distance: Optional[int]  = None
        self.parent: Optional[int]    = None

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Wipe traversal state back to defaults, keep identity and position."""
        self.status = NodeStatus.UNVISITED
        self.distance = None
        self.parent = None

    def mark_queued(self, distance: int, parent: Optional[int]) -> None:
        self.status = NodeStatus.QUEUED
        self.distance = distance
        self.parent = parent

    def mark_visiting(self) -> None:
        self.status = NodeStatus.VISITING

    def mark_visited(self) -> None:
        self.status = NodeStatus.VISITED

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "label":    self.label,
            "x":        self.x,
            "y":        self.y,
            "status":   self.status.value,
            "distance": self.distance,
            "parent":   self.parent,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        node = cls(node_id=int(data["id"]), x=data.get("x", 50.0), y=data.get("y", 50.0), label=data.get("label"))
        node.status = NodeStatus(data.get("status", NodeStatus.UNVISITED.value))
        node.distance = data.get("distance")
        node.parent = data.get("parent")
        return node

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, status={self.status.value}, distance={self.distance}, pos=({self.x:.1f},{self.y:.1f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
