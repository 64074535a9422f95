"""
graph/
-----
Core data layer.  Public API:

    from graph import Node, Edge
    from graph import Graph, Neighbor, build_graph, build_adjacency_list
"""

from graph.node    import Node
from graph.edge    import Edge
from graph.builder import (
    Graph,
    Neighbor,
    build_graph,
    build_adjacency_list,
    edge_weight,
    find_inadmissible_edges,
)

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "Neighbor",
    "build_graph",
    "build_adjacency_list",
    "edge_weight",
    "find_inadmissible_edges",
]
