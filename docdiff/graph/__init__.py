"""Relationship graph between documentation and source files."""

from .dot import DOTFormatter
from .mermaid import MermaidFormatter
from .model import Edge, Graph, Node, NodeType, build_graph, sanitize_id

__all__ = [
    "DOTFormatter",
    "Edge",
    "Graph",
    "MermaidFormatter",
    "Node",
    "NodeType",
    "build_graph",
    "sanitize_id",
]
