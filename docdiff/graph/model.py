"""Documentation-to-source relationship graph."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Collection, Dict, List, Mapping, Sequence, Tuple

_ID_TRANSLATION = str.maketrans({"/": "_", ".": "_", "-": "_", " ": "_"})


class NodeType(enum.Enum):
    DOC = "doc"
    SOURCE = "source"


@dataclass
class Node:
    id: str
    path: str
    label: str
    type: NodeType
    is_stale: bool = False


@dataclass
class Edge:
    source: str
    target: str
    is_stale: bool = False


@dataclass
class Graph:
    nodes: Dict[str, Node] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)

    def add_doc_node(self, path: str, is_stale: bool = False) -> None:
        node_id = sanitize_id(path)
        self.nodes[node_id] = Node(
            id=node_id, path=path, label=path, type=NodeType.DOC, is_stale=is_stale
        )

    def add_source_node(self, path: str) -> None:
        node_id = sanitize_id(path)
        if node_id in self.nodes:
            return
        self.nodes[node_id] = Node(id=node_id, path=path, label=path, type=NodeType.SOURCE)

    def add_edge(self, doc_path: str, source_path: str, is_stale: bool = False) -> None:
        self.edges.append(
            Edge(source=sanitize_id(doc_path), target=sanitize_id(source_path), is_stale=is_stale)
        )

    def partition_nodes(self) -> Tuple[List[Node], List[Node]]:
        """Return doc nodes and source nodes, each sorted by id."""
        ordered = sorted(self.nodes.values(), key=lambda node: node.id)
        docs = [node for node in ordered if node.type is NodeType.DOC]
        sources = [node for node in ordered if node.type is NodeType.SOURCE]
        return docs, sources


def build_graph(files_by_doc: Mapping[str, Sequence[str]], stale_docs: Collection[str]) -> Graph:
    graph = Graph()
    for doc in sorted(files_by_doc):
        is_stale = doc in stale_docs
        graph.add_doc_node(doc, is_stale)
        for path in sorted(files_by_doc[doc]):
            graph.add_source_node(path)
            graph.add_edge(doc, path, is_stale)
    return graph


def sanitize_id(path: str) -> str:
    return path.translate(_ID_TRANSLATION)
