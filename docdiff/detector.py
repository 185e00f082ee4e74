"""File-type detection cascading from shebangs to content heuristics."""

from __future__ import annotations

import re
from pathlib import PurePath
from typing import Mapping, Optional, Pattern, Sequence, Tuple

from .languages import Language, LanguageRegistry, LanguageStrategy

_SHEBANG_PATTERN = re.compile(rb"^#!\s*(?:/usr/bin/env\s+)?(?:[^\s]+/)?([^\s/]+)")

_SHEBANG_INTERPRETERS: Mapping[str, Language] = {
    "python": Language.PYTHON,
    "python2": Language.PYTHON,
    "python3": Language.PYTHON,
    "ruby": Language.RUBY,
    "node": Language.JAVASCRIPT,
    "nodejs": Language.JAVASCRIPT,
    "ts-node": Language.JAVASCRIPT,
    "deno": Language.JAVASCRIPT,
    "php": Language.PHP,
}

# Adjacent quantifiers never share characters, so a failed search stays
# linear in the length of the window.
_VIM_MODELINE = re.compile(rb"(?:vim?|ex):\s*(?:set\s+)?(?:\S[^\n]*\s)?(?:ft|filetype)=(\w+)")
_EMACS_MODELINE = re.compile(rb"-\*-\s*(?:mode:\s*)?(\w+)\b[^\n]*-\*-")

_MODELINE_TOKENS: Mapping[str, Language] = {
    "python": Language.PYTHON,
    "ruby": Language.RUBY,
    "javascript": Language.JAVASCRIPT,
    "js": Language.JAVASCRIPT,
    "typescript": Language.JAVASCRIPT,
    "ts": Language.JAVASCRIPT,
    "php": Language.PHP,
    "go": Language.GO,
    "golang": Language.GO,
    "java": Language.JAVA,
}

# Modelines live near the top or the bottom of a file.
_MODELINE_WINDOW = 1000
_CONTENT_WINDOW = 5000

# Order matters: Java's semicolon-terminated package clause must be tried
# before Go's bare one, and the specific JavaScript forms before the generic
# declaration pattern.
_CONTENT_HEURISTICS: Sequence[Tuple[Pattern[bytes], Language]] = (
    (re.compile(rb"<\?php"), Language.PHP),
    (re.compile(rb"^import\s+java\.", re.MULTILINE), Language.JAVA),
    (re.compile(rb"^package\s+[\w.]+;", re.MULTILINE), Language.JAVA),
    (re.compile(rb"^import\s[^\n]*?\sfrom\s+['\"]", re.MULTILINE), Language.JAVASCRIPT),
    (
        re.compile(rb"^export\s+(?:default\s+)?(?:const|let|var|function|class)", re.MULTILINE),
        Language.JAVASCRIPT,
    ),
    (re.compile(rb"(?:const|let|var|function)\s+\w+"), Language.JAVASCRIPT),
    (re.compile(rb"^package\s+\w+", re.MULTILINE), Language.GO),
    (re.compile(rb"^from\s+\w+\s+import", re.MULTILINE), Language.PYTHON),
    (re.compile(rb"^import\s+\w+", re.MULTILINE), Language.PYTHON),
    (re.compile(rb"^def\s+\w[^\n]*:", re.MULTILINE), Language.PYTHON),
    (re.compile(rb"^class\s+\w[^\n]*:", re.MULTILINE), Language.PYTHON),
    (re.compile(rb"^require\s+['\"]", re.MULTILINE), Language.RUBY),
    (re.compile(rb"^module\s+\w+", re.MULTILINE), Language.RUBY),
)


class FileTypeDetector:
    """Chooses the language strategy for a file.

    Signals are tried in a fixed order and the first hit wins: shebang line,
    editor modeline, file extension, then content heuristics. Detection is a
    pure function of the path and the bytes handed in.
    """

    def __init__(self, registry: LanguageRegistry) -> None:
        self._registry = registry

    def detect(self, path: str, content: bytes) -> Optional[LanguageStrategy]:
        """Return the matching strategy, or ``None`` when no signal matches."""
        content = bytes(content)
        return (
            self._detect_shebang(content)
            or self._detect_modeline(content)
            or self._detect_extension(path)
            or self._detect_content(content)
        )

    def _detect_shebang(self, content: bytes) -> Optional[LanguageStrategy]:
        if not content.startswith(b"#!"):
            return None
        first_line = content.split(b"\n", 1)[0]
        match = _SHEBANG_PATTERN.match(first_line)
        if match is None:
            return None
        interpreter = match.group(1).decode("ascii", errors="replace")
        return self._lookup(_SHEBANG_INTERPRETERS.get(interpreter))

    def _detect_modeline(self, content: bytes) -> Optional[LanguageStrategy]:
        search_area = content
        if len(content) > 2 * _MODELINE_WINDOW:
            search_area = content[:_MODELINE_WINDOW] + content[-_MODELINE_WINDOW:]

        for pattern in (_VIM_MODELINE, _EMACS_MODELINE):
            match = pattern.search(search_area)
            if match is None:
                continue
            token = match.group(1).decode("ascii", errors="replace").lower()
            strategy = self._lookup(_MODELINE_TOKENS.get(token))
            if strategy is not None:
                return strategy
        return None

    def _detect_extension(self, path: str) -> Optional[LanguageStrategy]:
        ext = PurePath(path).suffix.lower()
        if not ext:
            return None
        return self._registry.get_by_extension(ext)

    def _detect_content(self, content: bytes) -> Optional[LanguageStrategy]:
        search_area = content[:_CONTENT_WINDOW]
        for pattern, language in _CONTENT_HEURISTICS:
            if pattern.search(search_area):
                strategy = self._lookup(language)
                if strategy is not None:
                    return strategy
        return None

    def _lookup(self, language: Optional[Language]) -> Optional[LanguageStrategy]:
        if language is None:
            return None
        return self._registry.get_by_name(language.value)


__all__ = ["FileTypeDetector"]
