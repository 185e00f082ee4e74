"""Mermaid flowchart output."""

from __future__ import annotations

from typing import List

from .model import Graph


class MermaidFormatter:
    def __init__(self, direction: str = "LR") -> None:
        self.direction = direction

    def format(self, graph: Graph) -> str:
        lines: List[str] = [f"graph {self.direction}"]

        doc_nodes, source_nodes = graph.partition_nodes()
        if doc_nodes:
            lines.append("    %% Documentation nodes")
            lines.extend(f'    {node.id}[["{node.label}"]]' for node in doc_nodes)
        if source_nodes:
            lines.append("    %% Source file nodes")
            lines.extend(f'    {node.id}("{node.label}")' for node in source_nodes)
        if graph.edges:
            lines.append("    %% Relationships")
            for edge in graph.edges:
                arrow = "-.->" if edge.is_stale else "-->"
                lines.append(f"    {edge.source} {arrow} {edge.target}")

        stale_ids = [node.id for node in doc_nodes if node.is_stale]
        # linkStyle indexes edges in declaration order.
        stale_edges = [index for index, edge in enumerate(graph.edges) if edge.is_stale]
        if stale_ids or stale_edges:
            lines.append("    %% Stale styling")
            lines.extend(f"    style {node_id} fill:#ffcccc,stroke:#cc0000" for node_id in stale_ids)
            lines.extend(f"    linkStyle {index} stroke:#cc0000" for index in stale_edges)

        return "\n".join(lines) + "\n"
