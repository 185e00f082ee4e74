from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from docdiff.orchestrator import CI_ENV_VARS
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable repo builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _no_ci_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CI detection deterministic when the suite itself runs in CI."""
    for name in CI_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_docdiff_logger() -> Iterator[None]:
    """Drop handlers bound to a previous test's captured streams."""
    yield
    logger = logging.getLogger("docdiff")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
