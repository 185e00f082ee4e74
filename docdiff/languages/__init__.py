"""Language strategies, the built-in language table and the registry."""

from .base import CommentShape, LanguageStrategy, ShapeKind, extract_annotations
from .builtin import BUILTIN_STRATEGIES, Language, strategy_for
from .registry import LanguageRegistry, build_registry, default_registry

__all__ = [
    "BUILTIN_STRATEGIES",
    "CommentShape",
    "Language",
    "LanguageRegistry",
    "LanguageStrategy",
    "ShapeKind",
    "build_registry",
    "default_registry",
    "extract_annotations",
    "strategy_for",
]
