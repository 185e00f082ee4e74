"""GraphViz DOT output."""

from __future__ import annotations

from typing import List

from .model import Edge, Graph, Node


class DOTFormatter:
    def __init__(self, rankdir: str = "LR") -> None:
        self.rankdir = rankdir

    def format(self, graph: Graph) -> str:
        lines: List[str] = [
            "digraph docdiff {",
            f"    rankdir={self.rankdir};",
            '    node [fontname="Helvetica"];',
            "",
        ]

        doc_nodes, source_nodes = graph.partition_nodes()
        if doc_nodes:
            lines.append("    // Documentation nodes")
            lines.extend(self._doc_node(node) for node in doc_nodes)
            lines.append("")
        if source_nodes:
            lines.append("    // Source file nodes")
            lines.extend(f'    {node.id} [label="{node.label}" shape=box];' for node in source_nodes)
            lines.append("")
        if graph.edges:
            lines.append("    // Relationships")
            lines.extend(self._edge(edge) for edge in graph.edges)

        lines.append("}")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _doc_node(node: Node) -> str:
        if node.is_stale:
            return (
                f'    {node.id} [label="{node.label}" shape=note style=filled '
                f'fillcolor="#ffcccc" color="#cc0000"];'
            )
        return f'    {node.id} [label="{node.label}" shape=note];'

    @staticmethod
    def _edge(edge: Edge) -> str:
        if edge.is_stale:
            return f'    {edge.source} -> {edge.target} [style=dashed color="#cc0000"];'
        return f"    {edge.source} -> {edge.target};"
