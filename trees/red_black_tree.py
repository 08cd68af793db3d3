"""
red_black_tree.py — Red-Black Tree with Animated Fix-up
========================================================
Insert walks down like a plain BST, hangs the new key on as a RED leaf,
then repairs the red-black rules bottom-up:

  uncle red    →  recolor parent + uncle BLACK, grandparent RED, move up
  uncle black  →  inner child: rotate at the parent to make it outer,
                  then recolor parent BLACK, grandparent RED and rotate
                  at the grandparent

Frame highlights (node ids):

    search  : node compared on the way down
    insert  : the freshly attached node
    recolor : nodes whose color just changed
    rotate  : the pair a rotation just swung around
    found   : search hit

Like BTree, every insert runs on a deep copy that is committed only on
success, so a rejected value leaves the tree untouched.
"""

import copy
import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import List, Optional

from config import Limits
from engine.notice import Notice
from trees.frame import OperationResult, TreeFrame

log = logging.getLogger(__name__)


class Color(Enum):
    RED   = "red"
    BLACK = "black"


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class RBNode:
    def __init__(self, node_id: int, key: float, color: Color = Color.RED,
                 parent: Optional["RBNode"] = None):
        self.id:     int              = node_id
        self.key:    float            = key
        self.color:  Color            = color
        self.left:   Optional[RBNode] = None
        self.right:  Optional[RBNode] = None
        self.parent: Optional[RBNode] = parent

    @property
    def red(self) -> bool:
        return self.color == Color.RED

    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "value": self.key,
            "color": self.color.value,
            "left":  self.left.to_dict() if self.left else None,
            "right": self.right.to_dict() if self.right else None,
        }


def _is_red(node: Optional[RBNode]) -> bool:
    return node is not None and node.red


@dataclass
class RBTreeStats:
    node_count:   int = 0
    height:       int = 0
    black_height: int = 0      # -1 when paths disagree


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------
class RedBlackTree:
    """
    Attributes:
        root     : Root node, None when the tree is empty.
        last_op  : Description of the last committed operation.
    """

    def __init__(self):
        self.root:    Optional[RBNode] = None
        self.last_op: str              = ""

        self._next_id: int             = 0
        self._frames:  List[TreeFrame] = []

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def insert(self, key: float) -> OperationResult:
        if isinstance(key, bool) or not isinstance(key, Real) or not math.isfinite(key):
            log.warning("rbtree insert rejected: %r", key)
            return OperationResult(Notice.error("Please enter a valid number"))
        if self.contains(key):
            log.warning("rbtree insert rejected: duplicate %s", key)
            return OperationResult(Notice.error(f"Value {key} already exists!"))
        if self.stats().node_count >= Limits.rbtree_max_nodes:
            return OperationResult(Notice.error(f"Tree is full ({Limits.rbtree_max_nodes} nodes)"))

        work = copy.deepcopy(self)
        work._frames = []
        if work.root is None:
            work.root = work._new_node(key, Color.BLACK)
            message = f"Inserted {key} as root"
        else:
            node = work._bst_insert(key)
            work._fix_insert(node)
            message = f"Inserted {key} successfully"
        work.last_op = f"Insert {key}"
        work._frame(message)

        self.root     = work.root
        self._next_id = work._next_id
        self.last_op  = work.last_op
        log.info("rbtree insert %s", key)
        return OperationResult(Notice.success(message), work._frames)

    def insert_random(self, rng: Optional[random.Random] = None,
                      low: int = 1, high: int = 100) -> OperationResult:
        rng = rng or random.Random()
        for _ in range(1000):
            value = rng.randint(low, high)
            if not self.contains(value):
                return self.insert(value)
        return OperationResult(Notice.error("Could not find unique random value"))

    def search(self, key: float) -> OperationResult:
        if self.root is None:
            return OperationResult(Notice.error("Tree is empty"))

        self._frames = []
        node = self.root
        while node is not None:
            if node.key == key:
                self._frame(f"Found {key}", found=[node.id])
                break
            self._frame(f"Comparing {key} with {node.key}", search=[node.id])
            node = node.left if key < node.key else node.right

        frames, self._frames = self._frames, []
        frames.append(TreeFrame("Search finished", self.to_dict()))
        if node is not None:
            return OperationResult(Notice.success(f"Found value {key}!"), frames)
        return OperationResult(Notice.error(f"Value {key} not in tree."), frames)

    def reset(self) -> Notice:
        self.root = None
        self._next_id = 0
        self.last_op = "Reset"
        return Notice.info("Tree reset successfully")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def contains(self, key: float) -> bool:
        node = self.root
        while node is not None:
            if node.key == key:
                return True
            node = node.left if key < node.key else node.right
        return False

    def keys(self) -> List[float]:
        out: List[float] = []
        stack: List[RBNode] = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            out.append(node.key)
            node = node.right
        return out

    def stats(self) -> RBTreeStats:
        if self.root is None:
            return RBTreeStats()
        heights = self._black_heights(self.root)
        return RBTreeStats(
            node_count=len(self.keys()),
            height=self._height(self.root),
            black_height=heights[0] if len(set(heights)) == 1 else -1,
        )

    def violations(self) -> List[str]:
        """Every broken red-black rule, empty when the tree is valid."""
        problems: List[str] = []
        if self.root is None:
            return problems
        if self.root.red:
            problems.append("root is red")
        stack = [self.root]
        while stack:
            node = stack.pop()
            for child in (node.left, node.right):
                if child is None:
                    continue
                if node.red and child.red:
                    problems.append(f"red node {node.key} has red child {child.key}")
                if child.parent is not node:
                    problems.append(f"node {child.key} has a stale parent link")
                stack.append(child)
        if len(set(self._black_heights(self.root))) > 1:
            problems.append("black heights differ between paths")
        ordered = self.keys()
        if any(a >= b for a, b in zip(ordered, ordered[1:])):
            problems.append("in-order keys not strictly increasing")
        return problems

    @classmethod
    def _height(cls, node: Optional[RBNode]) -> int:
        if node is None:
            return 0
        return 1 + max(cls._height(node.left), cls._height(node.right))

    @classmethod
    def _black_heights(cls, node: Optional[RBNode]) -> List[int]:
        """Black-node count on every root → NIL path."""
        if node is None:
            return [0]
        own = 0 if node.red else 1
        return [h + own for h in cls._black_heights(node.left) + cls._black_heights(node.right)]

    # ------------------------------------------------------------------
    # Internal — insert and fix-up
    # ------------------------------------------------------------------
    def _bst_insert(self, key: float) -> RBNode:
        node = self.root
        while True:
            self._frame(f"Comparing {key} with {node.key}", search=[node.id])
            side = "left" if key < node.key else "right"
            child = getattr(node, side)
            if child is None:
                fresh = self._new_node(key, Color.RED, parent=node)
                setattr(node, side, fresh)
                self._frame(f"Attached {key} as the {side} child of {node.key} (red)", insert=[fresh.id])
                return fresh
            node = child

    def _fix_insert(self, node: RBNode) -> None:
        while _is_red(node.parent):
            parent = node.parent
            grand  = parent.parent
            on_left = parent is grand.left
            uncle  = grand.right if on_left else grand.left

            if _is_red(uncle):
                parent.color = Color.BLACK
                uncle.color  = Color.BLACK
                grand.color  = Color.RED
                self._frame(
                    f"Uncle {uncle.key} is red: recolored {parent.key} and {uncle.key} black, "
                    f"{grand.key} red",
                    recolor=[parent.id, uncle.id, grand.id],
                )
                node = grand
                continue

            inner = node is (parent.right if on_left else parent.left)
            if inner:
                if on_left:
                    self._rotate_left(parent)
                else:
                    self._rotate_right(parent)
                self._frame(
                    f"{node.key} is an inner child: rotated {'left' if on_left else 'right'} at {parent.key}",
                    rotate=[node.id, parent.id],
                )
                node, parent = parent, node

            parent.color = Color.BLACK
            grand.color  = Color.RED
            if on_left:
                self._rotate_right(grand)
            else:
                self._rotate_left(grand)
            self._frame(
                f"Recolored {parent.key} black and {grand.key} red, "
                f"rotated {'right' if on_left else 'left'} at {grand.key}",
                rotate=[parent.id, grand.id], recolor=[parent.id, grand.id],
            )

        if self.root.red:
            self.root.color = Color.BLACK
            self._frame(f"Root {self.root.key} recolored black", recolor=[self.root.id])

    def _rotate_left(self, x: RBNode) -> None:
        y = x.right
        x.right = y.left
        if y.left is not None:
            y.left.parent = x
        self._replace(x, y)
        y.left = x
        x.parent = y

    def _rotate_right(self, x: RBNode) -> None:
        y = x.left
        x.left = y.right
        if y.right is not None:
            y.right.parent = x
        self._replace(x, y)
        y.right = x
        x.parent = y

    def _replace(self, old: RBNode, new: RBNode) -> None:
        """Hang `new` where `old` hung from its parent."""
        new.parent = old.parent
        if old.parent is None:
            self.root = new
        elif old is old.parent.left:
            old.parent.left = new
        else:
            old.parent.right = new

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _new_node(self, key: float, color: Color, parent: Optional[RBNode] = None) -> RBNode:
        node = RBNode(self._next_id, key, color, parent)
        self._next_id += 1
        return node

    def _frame(self, description: str, **highlights: List[int]) -> None:
        self._frames.append(TreeFrame(description, self.to_dict(), dict(highlights)))

    def to_dict(self) -> dict:
        s = self.stats()
        return {
            "root":  self.root.to_dict() if self.root else None,
            "stats": {
                "node_count":   s.node_count,
                "height":       s.height,
                "black_height": s.black_height,
                "last_op":      self.last_op,
            },
        }

    def __repr__(self) -> str:
        s = self.stats()
        return f"RedBlackTree(nodes={s.node_count}, height={s.height}, black_height={s.black_height})"
