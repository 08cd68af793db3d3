"""
tarjan_scc.py — Tarjan's Strongly Connected Components
=======================================================
A real recursive DFS.  The recursion itself yields the steps, so the
trace is exactly the order the algorithm runs in.

Input: the name of a preset graph ("simple", "complex", "cyclic") or a
dict {"nodes": [...], "edges": [...]} where nodes are labels (or dicts
with a "label") indexed 0..n-1, and edges are [from, to] pairs or
{"from": u, "to": v} dicts.  Edges are directed.

array[k] describes node k:
  • value     – its low-link, -1 while undiscovered
  • COMPARING – the node currently being processed
  • SELECTED  – the node is on the Tarjan stack
  • SORTED    – the node has been assigned to an SCC

additional_info keys: phase, labels, discovery, low_link, stack, sccs,
current_scc, edges (each with its classification), low_link_update.
"""

import logging
from typing import Any, Dict, Generator, List, Optional, Tuple

from algorithms.step import ArrayElement, Step, StepBuilder
from config import Limits

log = logging.getLogger(__name__)


PSEUDOCODE: List[str] = [
    "def tarjan_scc(graph):",                              # 0
    "    index = 0; stack = []; sccs = []",                # 1
    "",                                                    # 2
    "    def dfs(u):",                                     # 3
    "        disc[u] = low[u] = index; index += 1",        # 4
    "        stack.append(u); on_stack[u] = True",         # 5
    "        for v in graph[u]:",                          # 6
    "            if v not in disc:",                       # 7
    "                dfs(v)",                              # 8
    "                low[u] = min(low[u], low[v])",        # 9
    "            elif on_stack[v]:",                       # 10
    "                low[u] = min(low[u], disc[v])",       # 11
    "        if low[u] == disc[u]:",                       # 12
    "            scc = []",                                # 13
    "            while True:",                             # 14
    "                w = stack.pop(); on_stack[w] = False",  # 15
    "                scc.append(w)",                       # 16
    "                if w == u: break",                    # 17
    "            sccs.append(scc)",                        # 18
    "",                                                    # 19
    "    for u in graph:",                                 # 20
    "        if u not in disc: dfs(u)",                    # 21
    "    return sccs",                                     # 22
]


# ---------------------------------------------------------------------------
# Preset graphs
# ---------------------------------------------------------------------------
DEFAULT_GRAPHS: Dict[str, Dict[str, list]] = {
    "simple": {
        "nodes": ["A", "B", "C"],
        "edges": [[0, 1], [1, 2], [2, 0]],
    },
    "complex": {
        "nodes": ["A", "B", "C", "D", "E", "F"],
        "edges": [[0, 1], [1, 2], [2, 1], [1, 3], [3, 0], [3, 4], [4, 5], [5, 3]],
    },
    "cyclic": {
        "nodes": ["A", "B", "C", "D", "E", "F"],
        "edges": [[0, 1], [1, 2], [2, 3], [3, 4], [4, 5], [5, 0], [2, 0], [4, 1]],
    },
}


def load_graph(graph: Any) -> Tuple[List[str], List[Tuple[int, int]]]:
    """Normalise a preset name or a nodes/edges dict.  Raises ValueError."""
    if graph is None:
        graph = "simple"
    if isinstance(graph, str):
        if graph not in DEFAULT_GRAPHS:
            raise ValueError(f"Unknown preset graph '{graph}'. Choose from: {', '.join(DEFAULT_GRAPHS)}")
        graph = DEFAULT_GRAPHS[graph]
    if not isinstance(graph, dict) or "nodes" not in graph:
        raise ValueError("Graph must be a preset name or an object with 'nodes' and 'edges'")

    labels: List[str] = []
    for idx, node in enumerate(graph["nodes"]):
        if isinstance(node, dict):
            labels.append(str(node.get("label", idx)))
        else:
            labels.append(str(node))
    n = len(labels)
    if n > Limits.scc_max_nodes:
        raise ValueError(f"Graph has {n} nodes; at most {Limits.scc_max_nodes} are supported")

    edges: List[Tuple[int, int]] = []
    for edge in graph.get("edges", []):
        if isinstance(edge, dict):
            u, v = edge.get("from"), edge.get("to")
        else:
            u, v = edge
        if not (isinstance(u, int) and isinstance(v, int) and 0 <= u < n and 0 <= v < n):
            raise ValueError(f"Edge {edge!r} refers to a node outside 0..{n - 1}")
        edges.append((u, v))
    return labels, edges


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def tarjan_scc(graph: Any = None) -> Generator[Step, None, None]:
    labels, edge_list = load_graph(graph)
    n = len(labels)

    adjacency: List[List[int]] = [[] for _ in range(n)]
    for u, v in edge_list:
        adjacency[u].append(v)

    edges     = [{"from": u, "to": v, "kind": None} for u, v in edge_list]
    disc:     List[Optional[int]] = [None] * n
    low:      List[Optional[int]] = [None] * n
    on_stack: List[bool] = [False] * n
    scc_of:   List[Optional[int]] = [None] * n
    stack:    List[int] = []
    sccs:     List[List[int]] = []
    counter = 0
    sb = StepBuilder()

    def snapshot(current: int = -1) -> List[ArrayElement]:
        return [
            ArrayElement(
                value=-1 if low[k] is None else low[k],
                is_comparing=k == current,
                is_selected=on_stack[k],
                is_sorted=scc_of[k] is not None,
                origin=k,
            )
            for k in range(n)
        ]

    def emit(description: str, line: int, phase: str, current: int = -1, j: int = -1,
             is_final: bool = False, **extra) -> Step:
        return sb.build(
            snapshot(current), description, line, i=current, j=j, is_final=is_final,
            phase=phase, labels=labels, discovery=disc, low_link=low, stack=stack,
            sccs=sccs, edges=edges, **extra,
        )

    def edge_index(u: int, v: int) -> int:
        for k, e in enumerate(edges):
            if e["from"] == u and e["to"] == v and e["kind"] is None:
                return k
        return -1

    def dfs(u: int) -> Generator[Step, None, None]:
        nonlocal counter
        disc[u] = low[u] = counter
        counter += 1
        stack.append(u)
        on_stack[u] = True
        yield emit(
            f"Visiting node {labels[u]}. Discovery time: {disc[u]}, Low-link: {low[u]}",
            4, "dfs", current=u,
        )

        for v in adjacency[u]:
            k = edge_index(u, v)
            sb.compared()
            if disc[v] is None:
                edges[k]["kind"] = "tree"
                yield emit(f"Exploring unvisited neighbor {labels[v]} from {labels[u]} (tree edge)",
                           8, "dfs", current=u, j=v)
                yield from dfs(v)

                before = low[u]
                low[u] = min(low[u], low[v])
                if low[u] != before:
                    sb.swapped()
                    yield emit(
                        f"Updated low-link of {labels[u]} from {before} to {low[u]} "
                        f"(min with {labels[v]}'s low-link: {low[v]})",
                        9, "dfs", current=u, j=v,
                        low_link_update={"node": u, "old": before, "new": low[u]},
                    )
            elif on_stack[v]:
                edges[k]["kind"] = "back"
                before = low[u]
                low[u] = min(low[u], disc[v])
                if low[u] != before:
                    sb.swapped()
                yield emit(
                    f"Back edge to {labels[v]} (on stack). Low-link of {labels[u]}: {before} → {low[u]}",
                    11, "dfs", current=u, j=v,
                    low_link_update={"node": u, "old": before, "new": low[u]},
                )
            else:
                edges[k]["kind"] = "cross"
                yield emit(
                    f"Edge to {labels[v]} leads into a finished SCC; low-link unchanged",
                    10, "dfs", current=u, j=v,
                )

        if low[u] == disc[u]:
            yield emit(
                f"Node {labels[u]} is root of SCC (low-link = discovery time = {disc[u]}). "
                f"Popping SCC from stack...",
                12, "scc-found", current=u,
            )
            scc: List[int] = []
            while True:
                w = stack.pop()
                on_stack[w] = False
                scc_of[w] = len(sccs)
                scc.append(w)
                yield emit(
                    f"Popped {labels[w]} from stack. "
                    f"{'SCC complete!' if w == u else 'Continuing to pop...'}",
                    15, "scc-found", current=w, current_scc=scc,
                )
                if w == u:
                    break
            sccs.append(scc)
            yield emit(
                f"SCC {len(sccs)} found: [{', '.join(labels[w] for w in scc)}]",
                18, "scc-found", current_scc=scc,
            )

    yield emit(
        "Starting Tarjan's SCC algorithm. We'll use DFS with discovery times and low-link values.",
        0, "initialization",
    )

    for u in range(n):
        if disc[u] is None:
            yield emit(f"Starting DFS from unvisited node {labels[u]}", 21, "dfs", current=u)
            yield from dfs(u)

    log.debug("tarjan_scc: %d nodes, %d sccs", n, len(sccs))
    yield emit(
        f"Tarjan's SCC algorithm complete! Found {len(sccs)} strongly connected component(s).",
        22, "complete", is_final=True,
    )
