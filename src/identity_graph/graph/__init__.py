# ABOUTME: Graph package for the undirected connection relation.
# ABOUTME: Exports ConnectionGraph.

from identity_graph.graph.service import ConnectionGraph

__all__ = ["ConnectionGraph"]
