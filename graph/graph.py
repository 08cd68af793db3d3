"""
graph.py — Editable Graph Container
====================================
The undirected, unweighted graph the interactive BFS explorer walks.

Responsibilities:
  1. CRUD on nodes & edges           (add / remove node, toggle edge)
  2. Adjacency queries               (neighbours, has_edge, edges)
  3. The fixed 7-node sample graph   (Graph.sample())
  4. Serialisation round-trip        (to_dict / from_dict)
  5. Reset helper                    (wipe traversal state, keep structure)

Design decisions:
  - Nodes stored in a dict keyed by a small int id; a freed id is reused
    by the next add so ids stay within 0..max_nodes-1.
  - Adjacency is `_adj[node_id] → set(neighbour_ids)`, kept symmetric.
    neighbours() returns them sorted so BFS order is reproducible.
  - Structural mistakes (node cap reached, unknown id, self loop) raise
    ValueError; the explorer turns them into user notices.
"""

from typing import Dict, List, Optional, Set, Tuple

from config import Limits
from graph.node import Node


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        max_nodes  : cap on the number of nodes
        _adj       : {node_id: {neighbour_id, …}}
    """

    def __init__(self, max_nodes: int = Limits.bfs_max_nodes):
        self.nodes:     Dict[int, Node]     = {}
        self.max_nodes: int                 = max_nodes
        self._adj:      Dict[int, Set[int]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def _free_id(self) -> int:
        nid = 0
        while nid in self.nodes:
            nid += 1
        return nid

    def add_node(self, x: float = 50.0, y: float = 50.0, label: Optional[str] = None,
                 node_id: Optional[int] = None) -> Node:
        if len(self.nodes) >= self.max_nodes:
            raise ValueError(f"Maximum of {self.max_nodes} nodes reached")
        if node_id is None:
            node_id = self._free_id()
        elif node_id in self.nodes:
            raise ValueError(f"Node {node_id} already exists")
        node = Node(node_id, x=x, y=y, label=label)
        self.nodes[node_id] = node
        self._adj[node_id] = set()
        return node

    def remove_node(self, node_id: int) -> None:
        self._require(node_id)
        for nbr in self._adj.pop(node_id):
            self._adj[nbr].discard(node_id)
        del self.nodes[node_id]

    def get_node(self, node_id: int) -> Optional[Node]:
        return self.nodes.get(node_id)

    def move_node(self, node_id: int, x: float, y: float) -> None:
        self._require(node_id)
        self.nodes[node_id].move_to(x, y)

    def _require(self, node_id: int) -> None:
        if node_id not in self.nodes:
            raise ValueError(f"Node {node_id} does not exist")

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, a: int, b: int) -> None:
        self._require(a)
        self._require(b)
        if a == b:
            raise ValueError("Self loops are not allowed")
        self._adj[a].add(b)
        self._adj[b].add(a)

    def remove_edge(self, a: int, b: int) -> None:
        self._adj.get(a, set()).discard(b)
        self._adj.get(b, set()).discard(a)

    def toggle_edge(self, a: int, b: int) -> bool:
        """Add the edge if missing, remove it if present.  Returns True if it now exists."""
        if self.has_edge(a, b):
            self.remove_edge(a, b)
            return False
        self.add_edge(a, b)
        return True

    def has_edge(self, a: int, b: int) -> bool:
        return b in self._adj.get(a, ())

    def edges(self) -> List[Tuple[int, int]]:
        """Every edge once, as (smaller id, larger id)."""
        return sorted((a, b) for a, nbrs in self._adj.items() for b in nbrs if a < b)

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: int) -> List[int]:
        return sorted(self._adj.get(node_id, ()))

    def degree(self, node_id: int) -> int:
        return len(self._adj.get(node_id, ()))

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: int) -> bool:
        return node_id in self.nodes

    # ==================================================================
    # RESET (keep structure, wipe traversal state)
    # ==================================================================
    def reset_traversal(self) -> None:
        for node in self.nodes.values():
            node.reset()

    def clear(self) -> None:
        self.nodes.clear()
        self._adj.clear()

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "max_nodes": self.max_nodes,
            "nodes":     [self.nodes[nid].to_dict() for nid in sorted(self.nodes)],
            "edges":     [list(e) for e in self.edges()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(max_nodes=data.get("max_nodes", Limits.bfs_max_nodes))
        for nd in data.get("nodes", []):
            node = Node.from_dict(nd)
            if len(g.nodes) >= g.max_nodes:
                raise ValueError(f"Maximum of {g.max_nodes} nodes reached")
            g.nodes[node.id] = node
            g._adj[node.id] = set()
        for a, b in data.get("edges", []):
            g.add_edge(int(a), int(b))
        return g

    # ==================================================================
    # SAMPLE GRAPH
    # ==================================================================
    @classmethod
    def sample(cls) -> "Graph":
        """
        The default 7-node tree, laid out by level:

                  0
                1   2
              3  4   5
                 6
        """
        positions = {
            0: (50, 10),
            1: (35, 25), 2: (65, 25),
            3: (25, 40), 4: (45, 40), 5: (65, 40),
            6: (45, 55),
        }
        g = cls()
        for nid, (x, y) in positions.items():
            g.add_node(x, y, node_id=nid)
        for a, b in [(0, 1), (0, 2), (1, 3), (1, 4), (2, 5), (4, 6)]:
            g.add_edge(a, b)
        return g

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges())})"
