"""Configuration loading for docdiff (.docdiff.yaml / .docdiff.yml / .docdiff.json)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAMES: Sequence[str] = (".docdiff.yaml", ".docdiff.yml", ".docdiff.json")

DEFAULT_ANNOTATION_TAG = "@doc"
DEFAULT_DOCS_DIRECTORY = "docs"
DEFAULT_METADATA_FILE = "docs/.doc-versions.json"
DEFAULT_EXCLUDES: Sequence[str] = (
    "vendor/**",
    "node_modules/**",
    ".git/**",
    "dist/**",
    "build/**",
    "target/**",
    "__pycache__/**",
    ".venv/**",
    "venv/**",
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LanguageConfig:
    """Per-language overrides applied on top of the built-in strategies."""

    enabled: Optional[bool] = None
    extensions: List[str] = field(default_factory=list)
    comment_patterns: List[str] = field(default_factory=list)

    def is_enabled(self) -> bool:
        return True if self.enabled is None else self.enabled


@dataclass
class CIConfig:
    """Which findings fail the report command in CI mode."""

    fail_on_stale: bool = True
    fail_on_orphaned: bool = False
    fail_on_undocumented_refs: bool = False


@dataclass
class DocDiffConfig:
    """Represents the settings defined in a .docdiff configuration file."""

    root: Path
    annotation_tag: str = DEFAULT_ANNOTATION_TAG
    docs_directory: str = DEFAULT_DOCS_DIRECTORY
    metadata_file: str = DEFAULT_METADATA_FILE
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))
    languages: Dict[str, LanguageConfig] = field(default_factory=dict)
    ci: CIConfig = field(default_factory=CIConfig)
    source: Optional[Path] = None

    def metadata_path(self) -> Path:
        return self.root / self.metadata_file

    def docs_path(self) -> Path:
        return self.root / self.docs_directory


def load_config(path: Path) -> DocDiffConfig:
    """Load configuration for the project rooted at (or containing) ``path``."""
    path = Path(path).expanduser()
    root = (path if path.is_dir() else path.parent).resolve()

    config_file = _find_config_file(root)
    if config_file is None:
        return DocDiffConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    config = DocDiffConfig(root=root, source=config_file)

    if "annotation_tag" in data:
        tag = _as_str(data.get("annotation_tag"))
        if not tag or not tag.strip():
            raise ConfigError("annotation_tag must be a non-empty string")
        config.annotation_tag = tag

    docs_directory = _as_str(data.get("docs_directory"))
    if docs_directory:
        config.docs_directory = docs_directory

    metadata_file = _as_str(data.get("metadata_file"))
    if metadata_file:
        config.metadata_file = metadata_file

    if data.get("include") is not None:
        config.include = _as_str_list(data.get("include"))
    if data.get("exclude") is not None:
        config.exclude = _as_str_list(data.get("exclude"))

    languages_data = data.get("languages")
    if languages_data is not None:
        if not isinstance(languages_data, dict):
            raise ConfigError("languages must be a mapping of language name to settings")
        for name, raw in languages_data.items():
            settings = _as_dict(raw)
            config.languages[str(name).lower()] = LanguageConfig(
                enabled=_as_bool(settings.get("enabled")),
                extensions=_as_str_list(settings.get("extensions")),
                comment_patterns=_as_str_list(settings.get("comment_patterns")),
            )

    ci_data = _as_dict(data.get("ci"))
    if ci_data:
        defaults = CIConfig()
        config.ci = CIConfig(
            fail_on_stale=_bool_or(ci_data.get("fail_on_stale"), defaults.fail_on_stale),
            fail_on_orphaned=_bool_or(ci_data.get("fail_on_orphaned"), defaults.fail_on_orphaned),
            fail_on_undocumented_refs=_bool_or(
                ci_data.get("fail_on_undocumented_refs"), defaults.fail_on_undocumented_refs
            ),
        )

    return config


def _find_config_file(root: Path) -> Optional[Path]:
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}

    if path.suffix == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _bool_or(value: Any, default: bool) -> bool:
    parsed = _as_bool(value)
    return default if parsed is None else parsed


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
