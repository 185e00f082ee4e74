"""Graph model and output format tests."""

from __future__ import annotations

from docdiff.graph import DOTFormatter, MermaidFormatter, NodeType, build_graph, sanitize_id

FILES_BY_DOC = {
    "docs/db.md": ["src/db/store.py"],
    "docs/api.md": ["src/api/routes.go", "src/shared-utils.go"],
}


def test_sanitize_id() -> None:
    assert sanitize_id("docs/api-v2.md") == "docs_api_v2_md"
    assert sanitize_id("my docs/a.md") == "my_docs_a_md"


def test_build_graph_creates_nodes_and_edges() -> None:
    graph = build_graph(FILES_BY_DOC, {"docs/api.md"})

    docs, sources = graph.partition_nodes()
    assert [node.path for node in docs] == ["docs/api.md", "docs/db.md"]
    assert [node.path for node in sources] == [
        "src/api/routes.go",
        "src/db/store.py",
        "src/shared-utils.go",
    ]
    assert graph.nodes["docs_api_md"].is_stale is True
    assert graph.nodes["docs_db_md"].type is NodeType.DOC
    assert [(edge.source, edge.target, edge.is_stale) for edge in graph.edges] == [
        ("docs_api_md", "src_api_routes_go", True),
        ("docs_api_md", "src_shared_utils_go", True),
        ("docs_db_md", "src_db_store_py", False),
    ]


def test_shared_source_file_is_a_single_node() -> None:
    graph = build_graph({"docs/a.md": ["lib.go"], "docs/b.md": ["lib.go"]}, set())

    _, sources = graph.partition_nodes()
    assert [node.id for node in sources] == ["lib_go"]
    assert len(graph.edges) == 2


def test_dot_output() -> None:
    output = DOTFormatter().format(build_graph(FILES_BY_DOC, {"docs/api.md"}))

    lines = output.splitlines()
    assert lines[0] == "digraph docdiff {"
    assert "    rankdir=LR;" in lines
    assert (
        '    docs_api_md [label="docs/api.md" shape=note style=filled '
        'fillcolor="#ffcccc" color="#cc0000"];'
    ) in lines
    assert '    docs_db_md [label="docs/db.md" shape=note];' in lines
    assert '    src_db_store_py [label="src/db/store.py" shape=box];' in lines
    assert '    docs_api_md -> src_api_routes_go [style=dashed color="#cc0000"];' in lines
    assert "    docs_db_md -> src_db_store_py;" in lines
    assert output.endswith("}\n")


def test_dot_output_for_empty_graph() -> None:
    output = DOTFormatter().format(build_graph({}, set()))
    assert output == 'digraph docdiff {\n    rankdir=LR;\n    node [fontname="Helvetica"];\n\n}\n'


def test_mermaid_output() -> None:
    output = MermaidFormatter().format(build_graph(FILES_BY_DOC, {"docs/api.md"}))

    lines = output.splitlines()
    assert lines[0] == "graph LR"
    assert '    docs_api_md[["docs/api.md"]]' in lines
    assert '    src_db_store_py("src/db/store.py")' in lines
    assert "    docs_api_md -.-> src_api_routes_go" in lines
    assert "    docs_db_md --> src_db_store_py" in lines
    assert "    style docs_api_md fill:#ffcccc,stroke:#cc0000" in lines
    assert lines[-2:] == ["    linkStyle 0 stroke:#cc0000", "    linkStyle 1 stroke:#cc0000"]


def test_mermaid_output_without_stale_docs_has_no_styling() -> None:
    output = MermaidFormatter(direction="TD").format(build_graph(FILES_BY_DOC, set()))

    assert output.startswith("graph TD\n")
    assert "Stale styling" not in output
