"""
bfs_explorer.py — Interactive Breadth-First Search
===================================================
Unlike the registry algorithms, BFS here is NOT pre-generated.  It is a
live, resumable state machine over a graph the user keeps editing.

    explorer = BfsExplorer()            # sample 7-node graph, start at 0
    explorer.step()                     # seeds the queue with the start
    explorer.step()                     # dequeues 0, enqueues 1 and 2
    explorer.undo()                     # back one step
    explorer.run_to_completion()
    explorer.path_to(6)                 # [0, 1, 4, 6]

Every public operation returns a Notice and never raises for user
mistakes.  A rejected operation leaves the explorer untouched.

Node lifecycle:
    UNVISITED → QUEUED → VISITING → VISITED

Editing the graph while a traversal exists wipes the traversal: the
queue and parent map were built from the old adjacency.
"""

import copy
import logging
from collections import deque
from dataclasses import asdict, dataclass
from typing import Deque, Dict, List, Optional

from engine.notice import Notice
from graph import Graph, NodeStatus

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Trace & stats
# ---------------------------------------------------------------------------
@dataclass
class TraceEntry:
    kind: str                        # "start" | "enqueue" | "visit" | "complete"
    node: Optional[int]
    text: str
    source: Optional[int] = None     # for enqueue: the node that discovered `node`


@dataclass
class BfsStats:
    visited_count:    int = 0
    max_queue_length: int = 0
    steps:            int = 0


@dataclass
class _Snapshot:
    graph:    Graph
    queue:    Deque[int]
    parent:   Dict[int, Optional[int]]
    trace:    List[TraceEntry]
    stats:    BfsStats
    running:  bool
    finished: bool


# ---------------------------------------------------------------------------
# Explorer
# ---------------------------------------------------------------------------
class BfsExplorer:
    """
    Attributes:
        graph    : The editable Graph being walked.
        start    : Node the traversal starts from (None if none selected).
        queue    : FIFO of node ids waiting to be expanded.
        parent   : {node_id: predecessor} for every reached node.
        trace    : Narrated history of the traversal.
        stats    : Running BfsStats.
        running  : A traversal has been seeded and is not finished.
        finished : The queue ran dry.
    """

    def __init__(self, graph: Optional[Graph] = None, start: Optional[int] = 0):
        self.graph: Graph = graph if graph is not None else Graph.sample()
        self.start: Optional[int] = start if start in self.graph else None

        self.queue:    Deque[int]               = deque()
        self.parent:   Dict[int, Optional[int]] = {}
        self.trace:    List[TraceEntry]         = []
        self.stats:    BfsStats                 = BfsStats()
        self.running:  bool                     = False
        self.finished: bool                     = False

        self._history: List[_Snapshot] = []

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    @property
    def started(self) -> bool:
        return self.running or self.finished

    def step(self) -> Notice:
        """The single BFS transition.  First call seeds, later calls expand one node."""
        if self.start is None or self.start not in self.graph:
            log.warning("bfs step rejected: no start node")
            return Notice.error("Select a start node first")
        if self.finished:
            return Notice.info("BFS already completed")

        self._history.append(self._snapshot())

        if not self.running:
            return self._seed()
        return self._expand()

    def run_to_completion(self) -> Notice:
        notice = self.step()
        while notice.ok and not self.finished:
            notice = self.step()
        return notice

    def _seed(self) -> Notice:
        self.graph.reset_traversal()
        self.graph.nodes[self.start].mark_queued(0, None)
        self.queue  = deque([self.start])
        self.parent = {self.start: None}
        self.trace  = []
        self.stats  = BfsStats(max_queue_length=1)
        self.running = True
        self._record("start", self.start, f"Started BFS from node {self.start}")
        log.info("bfs started from node %d", self.start)
        return Notice.info(f"Started BFS from node {self.start}")

    def _expand(self) -> Notice:
        nid  = self.queue.popleft()
        node = self.graph.nodes[nid]
        node.mark_visiting()
        # visiting → visited settles immediately; pacing is the renderer's job
        node.mark_visited()
        self.stats.visited_count += 1

        for nbr in self.graph.neighbours(nid):
            other = self.graph.nodes[nbr]
            if other.status != NodeStatus.UNVISITED:
                continue
            other.mark_queued(node.distance + 1, nid)
            self.parent[nbr] = nid
            self.queue.append(nbr)
            self._record("enqueue", nbr, f"Enqueued neighbor {nbr} from {nid}", source=nid)

        self.stats.max_queue_length = max(self.stats.max_queue_length, len(self.queue))
        self._record("visit", nid, f"Visited node {nid} (distance: {node.distance})")

        if not self.queue:
            self.running  = False
            self.finished = True
            self._record("complete", None, "BFS completed")
            log.info("bfs completed: %d nodes visited", self.stats.visited_count)
            return Notice.success("BFS completed!")
        return Notice.info(f"Visited node {nid}")

    def _record(self, kind: str, node: Optional[int], text: str, source: Optional[int] = None) -> None:
        self.trace.append(TraceEntry(kind, node, text, source))
        self.stats.steps += 1

    # ------------------------------------------------------------------
    # Undo / reset
    # ------------------------------------------------------------------
    def undo(self) -> Notice:
        if not self._history:
            return Notice.error("Nothing to undo")
        snap = self._history.pop()
        # keep current node positions
        for nid, node in snap.graph.nodes.items():
            current = self.graph.nodes.get(nid)
            if current is not None:
                node.move_to(current.x, current.y)
        self.graph    = snap.graph
        self.queue    = snap.queue
        self.parent   = snap.parent
        self.trace    = snap.trace
        self.stats    = snap.stats
        self.running  = snap.running
        self.finished = snap.finished
        return Notice.info("Undid last step")

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    def reset(self) -> Notice:
        self._clear_traversal()
        return Notice.info("Graph reset")

    def _clear_traversal(self) -> None:
        self.graph.reset_traversal()
        self.queue    = deque()
        self.parent   = {}
        self.trace    = []
        self.stats    = BfsStats()
        self.running  = False
        self.finished = False
        self._history = []

    def _snapshot(self) -> _Snapshot:
        # deep copies: later steps mutate nodes in place
        return _Snapshot(
            graph=copy.deepcopy(self.graph),
            queue=deque(self.queue),
            parent=dict(self.parent),
            trace=list(self.trace),
            stats=copy.copy(self.stats),
            running=self.running,
            finished=self.finished,
        )

    # ------------------------------------------------------------------
    # Graph editing
    # ------------------------------------------------------------------
    def set_start(self, node_id: int) -> Notice:
        if node_id not in self.graph:
            log.warning("bfs start rejected: node %s does not exist", node_id)
            return Notice.error(f"Node {node_id} does not exist")
        self.start = node_id
        self._clear_traversal()
        return Notice.info(f"Start node set to {node_id}")

    def add_node(self, x: float = 50.0, y: float = 50.0) -> Notice:
        try:
            node = self.graph.add_node(x, y)
        except ValueError as exc:
            log.warning("bfs add_node rejected: %s", exc)
            return Notice.error(str(exc))
        self._after_edit()
        if self.start is None:
            self.start = node.id
        log.info("bfs node %d added", node.id)
        return Notice.success(f"Added node {node.id}")

    def remove_node(self, node_id: int) -> Notice:
        try:
            self.graph.remove_node(node_id)
        except ValueError as exc:
            log.warning("bfs remove_node rejected: %s", exc)
            return Notice.error(str(exc))
        if self.start == node_id:
            self.start = min(self.graph.nodes) if self.graph.nodes else None
        self._after_edit()
        log.info("bfs node %d removed", node_id)
        return Notice.success(f"Removed node {node_id}")

    def toggle_edge(self, a: int, b: int) -> Notice:
        try:
            added = self.graph.toggle_edge(a, b)
        except ValueError as exc:
            log.warning("bfs toggle_edge rejected: %s", exc)
            return Notice.error(str(exc))
        self._after_edit()
        verb = "Added" if added else "Removed"
        return Notice.success(f"{verb} edge {a}-{b}")

    def move_node(self, node_id: int, x: float, y: float) -> Notice:
        """Reposition only.  The traversal is unaffected."""
        try:
            self.graph.move_node(node_id, x, y)
        except ValueError as exc:
            return Notice.error(str(exc))
        return Notice.info(f"Moved node {node_id}")

    def _after_edit(self) -> None:
        if self.started or self._history:
            log.info("graph edited mid-traversal; traversal reset")
        self._clear_traversal()

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    def distance_to(self, node_id: int) -> Optional[int]:
        node = self.graph.get_node(node_id)
        return node.distance if node else None

    def path_to(self, node_id: int) -> List[int]:
        """Start → node along the BFS parent chain, [] if not reached."""
        if node_id not in self.parent:
            return []
        path = []
        cur: Optional[int] = node_id
        while cur is not None:
            path.append(cur)
            cur = self.parent[cur]
        return list(reversed(path))

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "graph":    self.graph.to_dict(),
            "start":    self.start,
            "queue":    list(self.queue),
            "parent":   {str(k): v for k, v in self.parent.items()},
            "trace":    [asdict(t) for t in self.trace],
            "stats":    asdict(self.stats),
            "running":  self.running,
            "finished": self.finished,
            "can_undo": self.can_undo,
        }
