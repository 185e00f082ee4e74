"""Project tree scanning: detection, annotation extraction and doc references."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterator, Sequence, Set, Tuple

from .config import DocDiffConfig
from .detector import FileTypeDetector
from .docrefs import DocReferenceParser
from .languages import LanguageRegistry
from .logging import get_logger
from .models import ScanResult

_EXCLUDED_DIRS = {".git", "node_modules", "vendor"}

_DOC_SUFFIXES = {".md", ".markdown"}

logger = get_logger("scanner")


def glob_matches(pattern: str, rel_path: str) -> bool:
    """Match ``rel_path`` against a doublestar-style glob.

    Patterns are matched one path segment at a time, so ``*``, ``?`` and
    ``[...]`` never cross a ``/``. A ``**`` segment matches zero or more whole
    segments: ``dir/**`` matches ``dir`` and everything below it, ``**/name``
    matches ``name`` at any depth and ``a/**/b`` also matches ``a/b``.
    """
    path = rel_path.replace("\\", "/")
    pattern = pattern.replace("\\", "/").lstrip("/")
    if not pattern:
        return False
    return _match_segments(tuple(pattern.split("/")), tuple(path.split("/")))


def _match_segments(pattern: Tuple[str, ...], path: Tuple[str, ...]) -> bool:
    if not pattern:
        return not path
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match_segments(rest, path[index:]) for index in range(len(path) + 1))
    if not path:
        return False
    return fnmatchcase(path[0], head) and _match_segments(rest, path[1:])


def _matches_any(patterns: Sequence[str], rel_path: str) -> bool:
    return any(glob_matches(pattern, rel_path) for pattern in patterns)


def _iter_files(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            yield current_dir / filename


class Scanner:
    """Walks a project tree and records which source files annotate which docs."""

    def __init__(self, config: DocDiffConfig, registry: LanguageRegistry) -> None:
        self.config = config
        self.registry = registry
        self.detector = FileTypeDetector(registry)

    def scan(self, root: str | Path) -> ScanResult:
        """Return the annotations, doc index and classified files under ``root``."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        result = ScanResult()
        tag = self.config.annotation_tag
        for path in _iter_files(root_path):
            rel_path = path.relative_to(root_path).as_posix()
            if _matches_any(self.config.exclude, rel_path):
                continue
            if self.config.include and not _matches_any(self.config.include, rel_path):
                continue

            try:
                content = path.read_bytes()
            except OSError as exc:
                logger.warning("Skipping unreadable file %s: %s", rel_path, exc)
                result.add_error(f"{rel_path}: {exc}")
                continue

            strategy = self.detector.detect(rel_path, content)
            if strategy is None:
                continue

            result.add_file(rel_path)
            docs = strategy.extract_annotations(content, tag)
            if docs:
                result.add_annotation(rel_path, docs, strategy.name)

        logger.debug(
            "Scanned %d source files, %d annotated", len(result.all_files), len(result.annotations)
        )

        try:
            self._scan_docs_for_refs(root_path, result)
        except OSError as exc:
            logger.warning("Failed to scan docs for references: %s", exc)

        return result

    def _scan_docs_for_refs(self, root: Path, result: ScanResult) -> None:
        docs_dir = root / self.config.docs_directory
        if not docs_dir.is_dir():
            return

        parser = DocReferenceParser(result.all_files, self.registry.all_extensions())
        linked: Dict[str, Set[str]] = {
            doc: set(files) for doc, files in result.files_by_doc.items()
        }

        for path in _iter_files(docs_dir):
            if path.suffix.lower() not in _DOC_SUFFIXES:
                continue
            try:
                content = path.read_bytes()
            except OSError as exc:
                logger.debug("Skipping unreadable doc %s: %s", path, exc)
                continue
            rel_doc = path.relative_to(root).as_posix()
            linked_files = linked.get(rel_doc, set())
            for ref in parser.parse(content):
                if ref.path in linked_files:
                    continue
                result.add_undocumented_ref(rel_doc, ref.path, ref.line)


__all__ = ["Scanner", "glob_matches"]
