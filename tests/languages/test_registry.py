"""Registry lookups and configuration overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from docdiff.config import ConfigError, DocDiffConfig, LanguageConfig
from docdiff.languages import (
    CommentShape,
    LanguageRegistry,
    LanguageStrategy,
    build_registry,
    default_registry,
)


def test_default_registry_holds_every_builtin_language() -> None:
    registry = default_registry()
    assert [strategy.name for strategy in registry.all_strategies()] == [
        "go",
        "java",
        "javascript",
        "php",
        "powershell",
        "python",
        "ruby",
        "shell",
        "vue",
    ]
    assert len(registry) == 9
    assert "python" in registry


def test_lookup_by_extension_and_name() -> None:
    registry = default_registry()
    assert registry.get_by_extension(".tsx").name == "javascript"
    assert registry.get_by_extension(".psm1").name == "powershell"
    assert registry.get_by_extension(".xyz") is None
    assert registry.get_by_name("ruby").extensions == (".rb", ".rake")
    assert registry.get_by_name("cobol") is None


def test_all_extensions_are_sorted() -> None:
    extensions = default_registry().all_extensions()
    assert extensions == sorted(extensions)
    assert ".vue" in extensions and ".pyw" in extensions


def test_later_registration_wins_for_shared_extension() -> None:
    registry = default_registry()
    registry.register(
        LanguageStrategy(
            name="starlark",
            extensions=(".PY",),
            comment_shapes=(CommentShape.line("#"),),
        )
    )
    assert registry.get_by_extension(".py").name == "starlark"
    assert registry.get_by_extension(".pyw").name == "python"
    assert registry.get_by_name("python") is not None


def test_registries_are_independent() -> None:
    first = default_registry()
    second = LanguageRegistry()
    second.register(first.get_by_name("go"))
    assert len(second) == 1
    assert second.get_by_extension(".py") is None
    assert len(first) == 9


def test_build_registry_without_overrides_matches_default(tmp_path: Path) -> None:
    registry = build_registry(DocDiffConfig(root=tmp_path))
    assert registry.all_extensions() == default_registry().all_extensions()


def test_build_registry_disables_language(tmp_path: Path) -> None:
    config = DocDiffConfig(root=tmp_path, languages={"php": LanguageConfig(enabled=False)})
    registry = build_registry(config)
    assert "php" not in registry
    assert registry.get_by_extension(".php") is None


def test_build_registry_adds_extensions_and_patterns(tmp_path: Path) -> None:
    config = DocDiffConfig(
        root=tmp_path,
        languages={
            "python": LanguageConfig(extensions=["pyi", ".PYX"]),
            "go": LanguageConfig(comment_patterns=[r"--[^\n]*"]),
        },
    )
    registry = build_registry(config)
    assert registry.get_by_extension(".pyi").name == "python"
    assert registry.get_by_extension(".pyx").name == "python"

    go = registry.get_by_name("go")
    assert go.extract_annotations("-- @doc docs/sql.md\n// @doc docs/go.md\n", "@doc") == [
        "docs/go.md",
        "docs/sql.md",
    ]


def test_build_registry_rejects_unknown_language(tmp_path: Path) -> None:
    config = DocDiffConfig(root=tmp_path, languages={"cobol": LanguageConfig()})
    with pytest.raises(ConfigError, match="cobol"):
        build_registry(config)


def test_build_registry_rejects_invalid_pattern(tmp_path: Path) -> None:
    config = DocDiffConfig(root=tmp_path, languages={"go": LanguageConfig(comment_patterns=["("])})
    with pytest.raises(ConfigError, match="Invalid comment pattern for go"):
        build_registry(config)
