"""Built-in language strategies."""

from __future__ import annotations

import enum
from typing import Dict, Tuple

from .base import CommentShape, LanguageStrategy


class Language(str, enum.Enum):
    """Canonical identifiers of the built-in languages."""

    GO = "go"
    JAVA = "java"
    JAVASCRIPT = "javascript"
    PHP = "php"
    PYTHON = "python"
    RUBY = "ruby"
    SHELL = "shell"
    POWERSHELL = "powershell"
    VUE = "vue"


_SLASH_LINE = CommentShape.line("//")
_HASH_LINE = CommentShape.line("#")
_C_BLOCK = CommentShape.block("/*", "*/")
_DOCBLOCK = CommentShape.docblock()
_HTML_COMMENT = CommentShape.block("<!--", "-->")

# Java and PHP list the docblock shape first; extraction merges every shape,
# so the order only groups the conventional doc comment ahead of the rest.
_LANGUAGE_TABLE: Dict[Language, Tuple[Tuple[str, ...], Tuple[CommentShape, ...]]] = {
    Language.GO: ((".go",), (_SLASH_LINE, _C_BLOCK)),
    Language.JAVA: ((".java",), (_DOCBLOCK, _SLASH_LINE, _C_BLOCK)),
    Language.JAVASCRIPT: (
        (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"),
        (_SLASH_LINE, _C_BLOCK),
    ),
    Language.PHP: ((".php",), (_DOCBLOCK, _SLASH_LINE, _HASH_LINE)),
    Language.PYTHON: (
        (".py", ".pyw"),
        (_HASH_LINE, CommentShape.string('"""'), CommentShape.string("'''")),
    ),
    Language.RUBY: ((".rb", ".rake"), (_HASH_LINE, CommentShape.block("=begin", "=end"))),
    Language.SHELL: ((".sh", ".bash"), (_HASH_LINE,)),
    Language.POWERSHELL: ((".ps1", ".psm1"), (_HASH_LINE, CommentShape.block("<#", "#>"))),
    # Single-file components mix template, script and style sections; the
    # shapes are the union of HTML and JS comment forms.
    Language.VUE: ((".vue",), (_HTML_COMMENT, _SLASH_LINE, _C_BLOCK)),
}


def strategy_for(language: Language) -> LanguageStrategy:
    """Return the built-in strategy for ``language``."""
    extensions, shapes = _LANGUAGE_TABLE[language]
    return LanguageStrategy(name=language.value, extensions=extensions, comment_shapes=shapes)


BUILTIN_STRATEGIES: Tuple[LanguageStrategy, ...] = tuple(strategy_for(lang) for lang in Language)


__all__ = ["BUILTIN_STRATEGIES", "Language", "strategy_for"]
