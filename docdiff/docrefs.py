"""Find mentions of known source files inside Markdown documents."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Pattern, Set

from .models import FileReference

_FENCE = "```"


def _build_pattern(extensions: Iterable[str]) -> Optional[Pattern[str]]:
    escaped = [re.escape(ext.lstrip(".")) for ext in extensions if ext.lstrip(".")]
    if not escaped:
        return None
    ext_group = "|".join(sorted(set(escaped), key=len, reverse=True))
    return re.compile(
        r"(?:^|[^a-zA-Z0-9_./\\-])"
        r"((?:\./|\.\./)?)"
        r"((?:[a-zA-Z0-9_.-]+[/\\])*"
        r"[a-zA-Z0-9_.-]+\."
        r"(?:" + ext_group + r"))"
        r"(?=[^a-zA-Z0-9_./\\-]|$)"
    )


class DocReferenceParser:
    """Extracts references to known files from documentation text.

    Fenced code blocks are skipped, URL paths are ignored and every file is
    reported once, at the first line that mentions it.
    """

    def __init__(self, known_files: Iterable[str], extensions: Iterable[str]) -> None:
        self._known_files: Set[str] = set(known_files)
        self._pattern = _build_pattern(extensions)

    def parse(self, content: bytes | str) -> List[FileReference]:
        if self._pattern is None:
            return []
        text = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else content

        refs: List[FileReference] = []
        seen: Set[str] = set()
        in_code_block = False
        for line_number, line in enumerate(text.splitlines(), start=1):
            if line.strip().startswith(_FENCE):
                in_code_block = not in_code_block
                continue
            if in_code_block:
                continue

            for match in self._pattern.finditer(line):
                full_path = _normalise_path(match.group(1) + match.group(2))
                if _is_url(line, full_path):
                    continue
                if full_path not in self._known_files or full_path in seen:
                    continue
                seen.add(full_path)
                refs.append(FileReference(path=full_path, line=line_number))
        return refs


def _normalise_path(path: str) -> str:
    path = path.replace("\\", "/")
    if path.startswith("./"):
        path = path[2:]
    return path


def _is_url(line: str, path: str) -> bool:
    index = line.find(path)
    if index <= 0:
        return False
    return line[:index].endswith("://")


__all__ = ["DocReferenceParser"]
