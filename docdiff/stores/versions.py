"""Persistent map of documentation files to the revision they were last verified at."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Mapping


class MetadataError(RuntimeError):
    """Raised when the metadata file is not a JSON object of strings."""


class DocVersionStore:
    """Reads and writes the ``doc path -> revision`` metadata file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> Dict[str, str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise MetadataError(f"Failed to parse {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise MetadataError(f"{self._path} must contain a JSON object")
        versions: Dict[str, str] = {}
        for doc, revision in data.items():
            if not isinstance(revision, str):
                raise MetadataError(f"Revision for {doc!r} in {self._path} must be a string")
            versions[str(doc)] = revision
        return versions

    def save(self, versions: Mapping[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(dict(versions), indent=4, sort_keys=True)
        self._path.write_text(payload + "\n", encoding="utf-8")


def sorted_docs(versions: Mapping[str, str]) -> List[str]:
    return sorted(versions)


__all__ = ["DocVersionStore", "MetadataError", "sorted_docs"]
