"""Lookup tables from language names and file extensions to strategies."""

from __future__ import annotations

import re
import threading
from typing import Dict, List, Optional

from ..config import ConfigError, DocDiffConfig
from .base import CommentShape, LanguageStrategy
from .builtin import BUILTIN_STRATEGIES


class LanguageRegistry:
    """Indexes strategies by name and by extension.

    Registration happens during setup; afterwards the registry is only read.
    Lookups and registration share a lock so an embedding application may
    read from several threads.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._strategies: Dict[str, LanguageStrategy] = {}
        self._by_extension: Dict[str, LanguageStrategy] = {}

    def register(self, strategy: LanguageStrategy) -> None:
        """Add ``strategy``; a later registration wins for a shared name or extension."""
        with self._lock:
            self._strategies[strategy.name] = strategy
            for ext in strategy.extensions:
                self._by_extension[ext.lower()] = strategy

    def get_by_extension(self, ext: str) -> Optional[LanguageStrategy]:
        with self._lock:
            return self._by_extension.get(ext)

    def get_by_name(self, name: str) -> Optional[LanguageStrategy]:
        with self._lock:
            return self._strategies.get(name)

    def all_strategies(self) -> List[LanguageStrategy]:
        with self._lock:
            return sorted(self._strategies.values(), key=lambda strategy: strategy.name)

    def all_extensions(self) -> List[str]:
        with self._lock:
            return sorted(self._by_extension)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._strategies

    def __len__(self) -> int:
        with self._lock:
            return len(self._strategies)


def default_registry() -> LanguageRegistry:
    """Return a new registry holding every built-in strategy."""
    registry = LanguageRegistry()
    for strategy in BUILTIN_STRATEGIES:
        registry.register(strategy)
    return registry


def build_registry(config: DocDiffConfig) -> LanguageRegistry:
    """Return a registry of built-in strategies with the config's language overrides applied."""
    known = {strategy.name for strategy in BUILTIN_STRATEGIES}
    unknown = sorted(set(config.languages) - known)
    if unknown:
        raise ConfigError(f"Unknown languages in configuration: {', '.join(unknown)}")

    registry = LanguageRegistry()
    for strategy in BUILTIN_STRATEGIES:
        overrides = config.languages.get(strategy.name)
        if overrides is None:
            registry.register(strategy)
            continue
        if not overrides.is_enabled():
            continue
        shapes = []
        for expression in overrides.comment_patterns:
            try:
                shapes.append(CommentShape.custom(expression))
            except re.error as exc:
                raise ConfigError(
                    f"Invalid comment pattern for {strategy.name}: {expression!r} ({exc})"
                ) from exc
        registry.register(
            strategy.with_overrides(extensions=overrides.extensions, comment_shapes=shapes)
        )
    return registry


__all__ = ["LanguageRegistry", "build_registry", "default_registry"]
