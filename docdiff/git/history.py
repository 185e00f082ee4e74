"""Version-control history queries."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Sequence


class GitError(RuntimeError):
    """Raised when a git invocation fails."""


@dataclass(frozen=True)
class CommitDetail:
    """Hash, abbreviated hash and subject of one commit."""

    hash: str
    short: str
    subject: str


class GitHistory:
    """Thin wrapper over the git CLI for the queries staleness checks need."""

    def __init__(self, work_dir: str | Path, runner: Callable[..., str] | None = None) -> None:
        self.work_dir = Path(work_dir)
        self._runner = runner or self._default_runner

    def is_repo(self) -> bool:
        try:
            self._run(["rev-parse", "--git-dir"])
        except GitError:
            return False
        return True

    def head_short(self) -> str:
        return self._run(["rev-parse", "--short", "HEAD"])

    def head_full(self) -> str:
        return self._run(["rev-parse", "HEAD"])

    def commit_info(self, rev: str) -> str:
        """Return ``<short hash> (<relative date>)`` for ``rev``."""
        return self._run(["log", "-1", "--format=%h (%ar)", rev])

    def commit_date(self, rev: str) -> str:
        return self._run(["log", "-1", "--format=%cs", rev])

    def commit_subject(self, rev: str) -> str:
        return self._run(["log", "-1", "--format=%s", rev])

    def changed_files_between(
        self, from_rev: str, to_rev: str, files: Sequence[str] = ()
    ) -> List[str]:
        output = self._run(["diff", "--name-only", f"{from_rev}..{to_rev}", *_pathspec(files)])
        return _lines(output)

    def commits_between(
        self, from_rev: str, to_rev: str, files: Sequence[str] = ()
    ) -> List[str]:
        output = self._run(["log", "--oneline", f"{from_rev}..{to_rev}", *_pathspec(files)])
        return _lines(output)

    def commit_details(
        self, from_rev: str, to_rev: str, files: Sequence[str] = ()
    ) -> List[CommitDetail]:
        output = self._run(
            ["log", "--format=%H|%h|%s", f"{from_rev}..{to_rev}", *_pathspec(files)]
        )
        details: List[CommitDetail] = []
        for line in _lines(output):
            parts = line.split("|", 2)
            if len(parts) == 3:
                details.append(CommitDetail(hash=parts[0], short=parts[1], subject=parts[2]))
        return details

    def diff(self, from_rev: str, to_rev: str, files: Sequence[str] = ()) -> str:
        return self._run(["diff", f"{from_rev}..{to_rev}", *_pathspec(files)])

    def show_commit_diff(self, rev: str, files: Sequence[str] = ()) -> str:
        return self._run(["show", "--format=", rev, *_pathspec(files)])

    def files_changed_in_commit(self, rev: str, filter_files: Sequence[str] = ()) -> List[str]:
        output = self._run(["diff-tree", "--no-commit-id", "--name-only", "-r", rev])
        changed = _lines(output)
        if not filter_files:
            return changed
        wanted = set(filter_files)
        return [path for path in changed if path in wanted]

    # ------------------------------------------------------------------
    # Internals

    def _run(self, args: Iterable[str]) -> str:
        command = ["git", *args]
        try:
            output = self._runner(command, cwd=self.work_dir)
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise GitError(f"{' '.join(command)}: exit status {exc.returncode}: {stderr}") from exc
        except OSError as exc:
            raise GitError(f"{' '.join(command)}: {exc}") from exc
        return output.strip()

    @staticmethod
    def _default_runner(args: Sequence[str], *, cwd: Path) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


def _pathspec(files: Sequence[str]) -> List[str]:
    return ["--", *files] if files else []


def _lines(output: str) -> List[str]:
    return [line for line in output.splitlines() if line.strip()]


__all__ = ["CommitDetail", "GitError", "GitHistory"]
