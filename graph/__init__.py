"""
graph/
-----
Editable graph for the interactive BFS explorer.  Public API:

    from graph import Graph, Node, NodeStatus
"""

from graph.node  import Node, NodeStatus
from graph.graph import Graph

__all__ = [
    "Node", "NodeStatus",
    "Graph",
]
