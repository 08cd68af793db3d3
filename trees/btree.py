"""
btree.py — B-Tree with Animated Mutation
=========================================
A classic B-Tree of minimum degree t (every non-root node holds between
t-1 and 2t-1 keys).  Each operation returns an OperationResult: a Notice
for the toast and the TreeFrames to animate.

Insert  : top-down, split-before-descend.  A full root is split before
          anything else, so the child we descend into is never full.
Delete  : predecessor / successor replacement, borrowing from a sibling
          and merging siblings, so every node we descend into already has
          at least t keys.
Search  : walks root → leaf, highlighting each node it visits.

Every mutating operation runs on a deep copy and is committed only when
it succeeds.  Duplicate inserts and deletes of a missing key are rejected
with an error Notice and leave the tree untouched.

Node identity is a stable integer id so highlights still point at the
right node after the structure has been copied.
"""

import bisect
import copy
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from config import Limits
from engine.notice import Notice
from trees.frame import OperationResult, TreeFrame

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
@dataclass
class BTreeNode:
    id:       int
    keys:     List[int]         = field(default_factory=list)
    children: List["BTreeNode"] = field(default_factory=list)

    @property
    def leaf(self) -> bool:
        return not self.children

    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "keys":     list(self.keys),
            "leaf":     self.leaf,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass
class BTreeStats:
    node_count: int = 0
    key_count:  int = 0
    height:     int = 0


# ---------------------------------------------------------------------------
# B-Tree
# ---------------------------------------------------------------------------
class BTree:
    """
    Attributes:
        t        : Minimum degree (>= 2).
        root     : Root node, None when the tree is empty.
        last_op  : Description of the last committed operation.
    """

    def __init__(self, min_degree: int = Limits.btree_min_degree):
        if min_degree < 2:
            raise ValueError("Minimum degree must be at least 2")
        self.t:       int                 = min_degree
        self.root:    Optional[BTreeNode] = None
        self.last_op: str                 = ""

        self._next_id: int             = 0
        self._frames:  List[TreeFrame] = []

    @property
    def max_keys(self) -> int:
        return 2 * self.t - 1

    # ==================================================================
    # PUBLIC OPERATIONS
    # ==================================================================
    def insert(self, key: int) -> OperationResult:
        if self.contains(key):
            log.warning("btree insert rejected: duplicate key %s", key)
            return OperationResult(Notice.error(f"Key {key} already exists in the tree"))

        work = self._working_copy()
        work._insert(key)
        message = f"Inserted {key} as root" if self.root is None else f"Inserted {key} successfully"
        work._frame(message)
        self._commit(work, f"Insert {key}")
        log.info("btree insert %s", key)
        return OperationResult(Notice.success(message), work._frames)

    def insert_random(self, rng: Optional[random.Random] = None,
                      low: int = 1, high: int = 100) -> OperationResult:
        """Insert a random key not already present, widening the range when crowded."""
        rng = rng or random.Random()
        for attempt in range(1000):
            if attempt > 200:
                hi = high * 100
            elif attempt > 100:
                hi = high * 5
            else:
                hi = high
            value = rng.randint(low, hi)
            if not self.contains(value):
                return self.insert(value)
        log.warning("btree insert_random gave up")
        return OperationResult(Notice.error("Could not find unique random value"))

    def delete(self, key: int) -> OperationResult:
        if self.root is None:
            return OperationResult(Notice.error("Tree is empty"))
        if not self.contains(key):
            log.warning("btree delete rejected: key %s not found", key)
            return OperationResult(Notice.error(f"Key {key} not found"))

        work = self._working_copy()
        work._delete(work.root, key)
        if not work.root.keys:
            work.root = work.root.children[0] if work.root.children else None
        work._frame(f"Deleted {key} successfully")
        self._commit(work, f"Delete {key}")
        log.info("btree delete %s", key)
        return OperationResult(Notice.success(f"Deleted {key} successfully"), work._frames)

    def search(self, key: int) -> OperationResult:
        if self.root is None:
            return OperationResult(Notice.error("Tree is empty"))

        self._frames = []
        node = self.root
        found = False
        while True:
            self._frame(f"Searching node {node.keys}", search=[node.id])
            i = bisect.bisect_left(node.keys, key)
            if i < len(node.keys) and node.keys[i] == key:
                found = True
                break
            if node.leaf:
                break
            node = node.children[i]

        frames, self._frames = self._frames, []
        frames.append(TreeFrame("Search finished", self.to_dict()))
        if found:
            return OperationResult(Notice.success(f"Key {key} found!"), frames)
        return OperationResult(Notice.error(f"Key {key} not found"), frames)

    def reset(self) -> Notice:
        self.root = None
        self._next_id = 0
        self.last_op = "Reset"
        return Notice.info("Tree reset successfully")

    # ==================================================================
    # QUERIES
    # ==================================================================
    def contains(self, key: int) -> bool:
        node = self.root
        while node is not None:
            i = bisect.bisect_left(node.keys, key)
            if i < len(node.keys) and node.keys[i] == key:
                return True
            node = None if node.leaf else node.children[i]
        return False

    def keys(self) -> List[int]:
        """In-order traversal."""
        out: List[int] = []

        def walk(node: BTreeNode) -> None:
            if node.leaf:
                out.extend(node.keys)
                return
            for i, k in enumerate(node.keys):
                walk(node.children[i])
                out.append(k)
            walk(node.children[-1])

        if self.root is not None:
            walk(self.root)
        return out

    def stats(self) -> BTreeStats:
        if self.root is None:
            return BTreeStats()
        nodes = keys = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            nodes += 1
            keys += len(node.keys)
            stack.extend(node.children)
        height = 1
        node = self.root
        while not node.leaf:
            node = node.children[0]
            height += 1
        return BTreeStats(node_count=nodes, key_count=keys, height=height)

    def violations(self) -> List[str]:
        """Every broken B-Tree property, empty when the tree is valid."""
        problems: List[str] = []
        if self.root is None:
            return problems
        leaf_depths = set()

        def walk(node: BTreeNode, depth: int, is_root: bool) -> None:
            n = len(node.keys)
            if not is_root and not self.t - 1 <= n <= self.max_keys:
                problems.append(f"node {node.id} holds {n} keys")
            if is_root and n > self.max_keys:
                problems.append(f"root holds {n} keys")
            if node.keys != sorted(node.keys):
                problems.append(f"node {node.id} keys out of order")
            if node.leaf:
                leaf_depths.add(depth)
                return
            if len(node.children) != n + 1:
                problems.append(f"node {node.id} has {len(node.children)} children for {n} keys")
            for child in node.children:
                walk(child, depth + 1, False)

        walk(self.root, 0, True)
        if len(leaf_depths) > 1:
            problems.append(f"leaves at depths {sorted(leaf_depths)}")
        ordered = self.keys()
        if any(a >= b for a, b in zip(ordered, ordered[1:])):
            problems.append("in-order keys not strictly increasing")
        return problems

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "min_degree": self.t,
            "root":       self.root.to_dict() if self.root else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BTree":
        tree = cls(min_degree=data.get("min_degree", Limits.btree_min_degree))

        def build(nd: dict) -> BTreeNode:
            node = BTreeNode(int(nd["id"]), [int(k) for k in nd.get("keys", [])],
                             [build(c) for c in nd.get("children", [])])
            tree._next_id = max(tree._next_id, node.id + 1)
            return node

        if data.get("root"):
            tree.root = build(data["root"])
        return tree

    # ==================================================================
    # INTERNAL — insert
    # ==================================================================
    def _insert(self, key: int) -> None:
        if self.root is None:
            self.root = self._new_node([key])
            self._frame(f"Tree empty: {key} becomes the root", insert=[self.root.id])
            return

        if len(self.root.keys) == self.max_keys:
            old = self.root
            self.root = self._new_node(children=[old])
            self._frame("Root is full: growing a new root", split=[old.id])
            self._split_child(self.root, 0)
        self._insert_non_full(self.root, key)

    def _insert_non_full(self, node: BTreeNode, key: int) -> None:
        self._frame(f"Visiting node {node.keys}", search=[node.id])
        if node.leaf:
            bisect.insort(node.keys, key)
            self._frame(f"Placed {key} in leaf", insert=[node.id])
            return

        i = bisect.bisect_left(node.keys, key)
        if len(node.children[i].keys) == self.max_keys:
            self._split_child(node, i)
            if key > node.keys[i]:
                i += 1
        self._insert_non_full(node.children[i], key)

    def _split_child(self, parent: BTreeNode, index: int) -> None:
        t = self.t
        y = parent.children[index]
        self._frame(f"Splitting full node {y.keys}", split=[y.id])

        median = y.keys[t - 1]
        z = self._new_node(y.keys[t:], y.children[t:])
        y.keys = y.keys[:t - 1]
        y.children = y.children[:t]

        parent.keys.insert(index, median)
        parent.children.insert(index + 1, z)
        self._frame(f"Promoted median {median}", split=[y.id, z.id], insert=[parent.id])

    # ==================================================================
    # INTERNAL — delete
    # ==================================================================
    def _delete(self, node: BTreeNode, key: int) -> None:
        t = self.t
        self._frame(f"Visiting node {node.keys}", search=[node.id])
        i = bisect.bisect_left(node.keys, key)

        if i < len(node.keys) and node.keys[i] == key:
            if node.leaf:
                node.keys.pop(i)
                self._frame(f"Removed {key} from leaf", delete=[node.id])
                return
            left, right = node.children[i], node.children[i + 1]
            if len(left.keys) >= t:
                pred = self._max_key(left)
                node.keys[i] = pred
                self._frame(f"Replaced {key} with predecessor {pred}", delete=[node.id])
                self._delete(left, pred)
            elif len(right.keys) >= t:
                succ = self._min_key(right)
                node.keys[i] = succ
                self._frame(f"Replaced {key} with successor {succ}", delete=[node.id])
                self._delete(right, succ)
            else:
                self._merge(node, i)
                self._delete(left, key)
            return

        if node.leaf:
            return

        if len(node.children[i].keys) == t - 1:
            if i > 0 and len(node.children[i - 1].keys) >= t:
                self._borrow_from_prev(node, i)
            elif i < len(node.children) - 1 and len(node.children[i + 1].keys) >= t:
                self._borrow_from_next(node, i)
            elif i < len(node.children) - 1:
                self._merge(node, i)
            else:
                self._merge(node, i - 1)
                i -= 1
        self._delete(node.children[i], key)

    def _borrow_from_prev(self, node: BTreeNode, i: int) -> None:
        child, sib = node.children[i], node.children[i - 1]
        child.keys.insert(0, node.keys[i - 1])
        if sib.children:
            child.children.insert(0, sib.children.pop())
        node.keys[i - 1] = sib.keys.pop()
        self._frame("Borrowed a key from the left sibling", delete=[child.id, sib.id])

    def _borrow_from_next(self, node: BTreeNode, i: int) -> None:
        child, sib = node.children[i], node.children[i + 1]
        child.keys.append(node.keys[i])
        if sib.children:
            child.children.append(sib.children.pop(0))
        node.keys[i] = sib.keys.pop(0)
        self._frame("Borrowed a key from the right sibling", delete=[child.id, sib.id])

    def _merge(self, node: BTreeNode, i: int) -> None:
        child, sib = node.children[i], node.children[i + 1]
        child.keys.append(node.keys.pop(i))
        child.keys.extend(sib.keys)
        child.children.extend(sib.children)
        node.children.pop(i + 1)
        self._frame(f"Merged siblings into {child.keys}", delete=[child.id])

    @staticmethod
    def _max_key(node: BTreeNode) -> int:
        while not node.leaf:
            node = node.children[-1]
        return node.keys[-1]

    @staticmethod
    def _min_key(node: BTreeNode) -> int:
        while not node.leaf:
            node = node.children[0]
        return node.keys[0]

    # ==================================================================
    # INTERNAL — bookkeeping
    # ==================================================================
    def _new_node(self, keys: Optional[List[int]] = None,
                  children: Optional[List[BTreeNode]] = None) -> BTreeNode:
        node = BTreeNode(self._next_id, list(keys or []), list(children or []))
        self._next_id += 1
        return node

    def _frame(self, description: str, **highlights: List[int]) -> None:
        self._frames.append(TreeFrame(description, self.to_dict(), dict(highlights)))

    def _working_copy(self) -> "BTree":
        work = copy.deepcopy(self)
        work._frames = []
        return work

    def _commit(self, work: "BTree", op: str) -> None:
        self.root     = work.root
        self._next_id = work._next_id
        self.last_op  = op

    def __repr__(self) -> str:
        s = self.stats()
        return f"BTree(t={self.t}, keys={s.key_count}, height={s.height})"
