"""Comment-shape strategies and the shared annotation extraction engine.

Every language is described by data only: a name, the file extensions it
claims and an ordered list of comment shapes. A comment shape matches one
kind of comment span over raw bytes: a line comment, a block comment, a
docblock or a triple-quoted string. Every shape carries a regular expression;
delimited shapes are scanned with plain substring search so that an unclosed
opener costs one pass over the content. The same extraction routine runs for
every language:

1. every shape finds its non-overlapping spans in the content;
2. inside each span, ``<tag><whitespace><target>`` occurrences are captured,
   where the target is the following run of non-whitespace bytes;
3. targets are pooled in shape order, then position order, and deduplicated
   keeping the first occurrence.

The matching is purely textual. A comment shape can match text that sits
inside a string literal (for example ``"http://host // @doc x.md"``), and a
tag followed by trailing punctuation captures that punctuation as part of the
target. Both are accepted limitations of the regex approach.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple, Union

Content = Union[bytes, bytearray, memoryview, str]


class ShapeKind(str, enum.Enum):
    """Structural category of a comment span."""

    LINE = "line"
    BLOCK = "block"
    DOCBLOCK = "docblock"
    STRING = "string"
    CUSTOM = "custom"


@dataclass(frozen=True)
class CommentShape:
    """One matcher for comment-shaped spans of a language."""

    kind: ShapeKind
    pattern: Pattern[bytes]
    opener: Optional[bytes] = None
    closer: Optional[bytes] = None

    @classmethod
    def line(cls, marker: str) -> "CommentShape":
        """Marker to end of line, e.g. ``//`` or ``#``."""
        return cls(ShapeKind.LINE, re.compile(re.escape(marker.encode()) + rb"[^\n]*"))

    @classmethod
    def block(cls, opener: str, closer: str, *, kind: ShapeKind = ShapeKind.BLOCK) -> "CommentShape":
        """Non-greedy span between an opening and a closing marker."""
        start, end = opener.encode(), closer.encode()
        pattern = re.escape(start) + rb".*?" + re.escape(end)
        return cls(kind, re.compile(pattern, re.DOTALL), opener=start, closer=end)

    @classmethod
    def docblock(cls) -> "CommentShape":
        return cls.block("/**", "*/", kind=ShapeKind.DOCBLOCK)

    @classmethod
    def string(cls, quote: str) -> "CommentShape":
        """Multi-line string literal treated as a comment (Python docstrings)."""
        return cls.block(quote, quote, kind=ShapeKind.STRING)

    @classmethod
    def custom(cls, expression: str) -> "CommentShape":
        """Compile a user-supplied expression; raises ``re.error`` when invalid."""
        return cls(ShapeKind.CUSTOM, re.compile(expression.encode("utf-8"), re.DOTALL))

    def spans(self, content: bytes) -> Iterable[bytes]:
        if self.opener and self.closer:
            yield from _delimited_spans(content, self.opener, self.closer)
            return
        for match in self.pattern.finditer(content):
            yield match.group(0)


def _delimited_spans(content: bytes, opener: bytes, closer: bytes) -> Iterable[bytes]:
    """Same spans as ``opener.*?closer``, found in one left-to-right pass.

    An opener without a closer ends the scan: no later opener can be closed
    either.
    """
    position = 0
    while True:
        start = content.find(opener, position)
        if start < 0:
            return
        end = content.find(closer, start + len(opener))
        if end < 0:
            return
        position = end + len(closer)
        yield content[start:position]


@dataclass(frozen=True)
class LanguageStrategy:
    """Comment syntax for one supported language."""

    name: str
    extensions: Tuple[str, ...]
    comment_shapes: Tuple[CommentShape, ...]

    def comment_patterns(self) -> List[Pattern[bytes]]:
        return [shape.pattern for shape in self.comment_shapes]

    def extract_annotations(self, content: Content, tag: str) -> List[str]:
        """Return the ordered, deduplicated annotation targets found in ``content``."""
        return extract_annotations(content, tag, self.comment_shapes)

    def with_overrides(
        self,
        *,
        extensions: Sequence[str] = (),
        comment_shapes: Sequence[CommentShape] = (),
    ) -> "LanguageStrategy":
        """Return a copy with extra extensions and shapes appended."""
        merged = list(self.extensions)
        for ext in extensions:
            normalised = normalise_extension(ext)
            if normalised and normalised not in merged:
                merged.append(normalised)
        return LanguageStrategy(
            name=self.name,
            extensions=tuple(merged),
            comment_shapes=self.comment_shapes + tuple(comment_shapes),
        )


def extract_annotations(
    content: Content, tag: str, shapes: Sequence[CommentShape]
) -> List[str]:
    """Pool tagged targets from every comment span matched by ``shapes``."""
    if not tag:
        return []
    data = _as_bytes(content)
    if not data:
        return []

    tag_pattern = _tag_pattern(tag)
    annotations: List[str] = []
    seen: set[str] = set()
    for shape in shapes:
        for span in shape.spans(data):
            for raw_target in tag_pattern.findall(span):
                target = raw_target.decode("utf-8", errors="replace")
                if target in seen:
                    continue
                seen.add(target)
                annotations.append(target)
    return annotations


def normalise_extension(ext: str) -> str:
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = f".{ext}"
    return ext


@lru_cache(maxsize=32)
def _tag_pattern(tag: str) -> Pattern[bytes]:
    # The tag is a literal, never a pattern fragment. Whitespace excludes
    # vertical tab.
    return re.compile(re.escape(tag.encode("utf-8")) + rb"[ \t\n\f\r]+([^ \t\n\f\r]+)")


def _as_bytes(content: Content) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8", errors="surrogateescape")
    return bytes(content)


__all__ = [
    "CommentShape",
    "LanguageStrategy",
    "ShapeKind",
    "extract_annotations",
    "normalise_extension",
]
