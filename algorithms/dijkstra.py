"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Array-based Dijkstra over an adjacency matrix: the next node is found by
a linear scan of the unvisited distances, O(V²) overall.

Input is the weight matrix itself or its JSON text.  matrix[u][v] > 0 is
an edge of that weight; 0 means no edge.  A matrix that cannot be used
(bad JSON, ragged or non-square rows, non-numeric or negative weights)
yields no steps at all, so the caller sees an empty run.

array[k].value is the current distance of node k (INFINITY until
reached).  Flags:
  • SORTED    – distance is final (node visited)
  • SELECTED  – the node being visited right now
  • COMPARING – the neighbour whose distance is being improved

Yields a Step at:
  1. Initialise distances
  2. Visit the closest unvisited node
  3. Relaxation that improves a distance  →  compare step, then update step
  4. Finish, with the shortest path to every reachable node

Every edge examined counts as a comparison; every improvement as a swap.
"""

import json
import logging
import sys
from numbers import Real
from typing import Any, Dict, Generator, List, Optional

from algorithms.step import ArrayElement, Step, StepBuilder

log = logging.getLogger(__name__)

INFINITY = sys.maxsize


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def dijkstra(graph, src):",                          # 0
    "    dist = [INF] * len(graph)",                      # 1
    "    visited = [False] * len(graph)",                 # 2
    "    dist[src] = 0",                                  # 3
    "    for _ in range(len(graph)):",                    # 4
    "        u = min_distance(dist, visited)",            # 5
    "        visited[u] = True",                          # 6
    "        for v in range(len(graph)):",                # 7
    "            if not visited[v] and graph[u][v] > 0",  # 8
    "                    and dist[u] + graph[u][v] < dist[v]:",  # 9
    "                dist[v] = dist[u] + graph[u][v]",    # 10
    "                parent[v] = u",                      # 11
    "",                                                   # 12
    "    return dist",                                    # 13
]

DEFAULT_GRAPH: List[List[int]] = [
    [0, 4, 0, 0, 0, 0, 0, 8, 0],
    [4, 0, 8, 0, 0, 0, 0, 11, 0],
    [0, 8, 0, 7, 0, 4, 0, 0, 2],
    [0, 0, 7, 0, 9, 14, 0, 0, 0],
    [0, 0, 0, 9, 0, 10, 0, 0, 0],
    [0, 0, 4, 14, 10, 0, 2, 0, 0],
    [0, 0, 0, 0, 0, 2, 0, 1, 6],
    [8, 11, 0, 0, 0, 0, 1, 0, 7],
    [0, 0, 2, 0, 0, 0, 6, 7, 0],
]


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------
def parse_matrix(raw: Any) -> Optional[List[List[float]]]:
    """Weight matrix from a list of rows or its JSON text, or None if unusable."""
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            return None

    if not isinstance(raw, list) or not raw:
        return None
    n = len(raw)
    matrix: List[List[float]] = []
    for row in raw:
        if not isinstance(row, list) or len(row) != n:
            return None
        for w in row:
            if isinstance(w, bool) or not isinstance(w, Real) or w < 0 or w != w:
                return None
        matrix.append(list(row))
    return matrix


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(graph: Any = None, source: int = 0) -> Generator[Step, None, None]:
    matrix = parse_matrix(DEFAULT_GRAPH if graph is None else graph)
    if matrix is None:
        log.warning("dijkstra: rejected malformed adjacency matrix")
        return
    n = len(matrix)
    if not 0 <= source < n:
        log.warning("dijkstra: source %r outside 0..%d", source, n - 1)
        return

    sb     = StepBuilder()
    dist   = [ArrayElement(value=INFINITY, origin=k) for k in range(n)]
    parent: Dict[int, Optional[int]] = {source: None}
    dist[source] = dist[source].but(value=0, is_selected=True)

    yield sb.build(
        dist, f"Starting Dijkstra's algorithm from node {source}", 0,
        graph=matrix, source=source, parent=parent,
    )

    for _ in range(n):
        # linear scan for the closest unvisited node
        u, best = -1, INFINITY
        for k in range(n):
            if not dist[k].is_sorted and dist[k].value < best:
                u, best = k, dist[k].value
        if u == -1:
            break

        dist = [el.but(is_selected=False) if el.is_selected else el for el in dist]
        dist[u] = dist[u].but(is_sorted=True, is_selected=True)
        yield sb.build(
            dist, f"Visiting node {u} (distance {best})", 6, i=u,
            graph=matrix, source=source, parent=parent,
        )

        for v in range(n):
            w = matrix[u][v]
            if dist[v].is_sorted or w <= 0:
                continue
            sb.compared()
            candidate = dist[u].value + w
            if candidate >= dist[v].value:
                continue

            previous = "∞" if dist[v].value == INFINITY else dist[v].value
            dist[v] = dist[v].but(is_comparing=True)
            yield sb.build(
                dist,
                f"Comparing distance to node {v} through {u}: {dist[u].value} + {w} = {candidate} < {previous}",
                9, i=u, j=v, graph=matrix, source=source, parent=parent,
            )

            sb.swapped()
            dist[v] = dist[v].but(value=candidate)
            parent[v] = u
            yield sb.build(
                dist, f"Updating distance to node {v} to {candidate}", 10, i=u, j=v,
                graph=matrix, source=source, parent=parent,
            )
            dist[v] = dist[v].but(is_comparing=False)

    dist = [el.but(is_selected=False) for el in dist]
    distances = [None if el.value == INFINITY else el.value for el in dist]
    paths = {v: _reconstruct(parent, v) for v in parent}
    log.debug("dijkstra: %d nodes, %d steps", n, sb.step_number + 1)
    yield sb.build(
        dist, "Dijkstra's algorithm finished", 13, is_final=True,
        graph=matrix, source=source, parent=parent, distances=distances, paths=paths,
    )


# ---------------------------------------------------------------------------
def _reconstruct(parent: Dict[int, Optional[int]], target: int) -> List[int]:
    path: List[int] = []
    cur: Optional[int] = target
    while cur is not None:
        path.append(cur)
        cur = parent.get(cur)
    path.reverse()
    return path
