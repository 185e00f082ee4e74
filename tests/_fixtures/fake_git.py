"""In-memory stand-in for GitHistory."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from docdiff.git import CommitDetail, GitError


class FakeGit:
    """Answers history queries from canned data keyed by the starting revision."""

    def __init__(
        self,
        *,
        head: str = "def5678",
        repo: bool = True,
        changed: Optional[Mapping[str, List[str]]] = None,
        commits: Optional[Mapping[str, List[CommitDetail]]] = None,
        commit_files: Optional[Mapping[str, List[str]]] = None,
        diff_text: str = "",
        failing: Sequence[str] = (),
    ) -> None:
        self.head = head
        self.repo = repo
        self.changed: Dict[str, List[str]] = dict(changed or {})
        self.commits: Dict[str, List[CommitDetail]] = dict(commits or {})
        self.commit_files: Dict[str, List[str]] = dict(commit_files or {})
        self.diff_text = diff_text
        self.failing = set(failing)
        self.work_dir: Optional[Path] = None

    def __call__(self, work_dir: Path) -> "FakeGit":
        self.work_dir = Path(work_dir)
        return self

    def _check(self, name: str) -> None:
        if name in self.failing:
            raise GitError(f"{name} failed")

    def is_repo(self) -> bool:
        return self.repo

    def head_short(self) -> str:
        self._check("head_short")
        return self.head

    def commit_info(self, rev: str) -> str:
        self._check("commit_info")
        return f"{rev} (2 days ago)"

    def commit_date(self, rev: str) -> str:
        return "2024-05-01" if rev != self.head else "2024-05-03"

    def changed_files_between(self, from_rev: str, to_rev: str, files: Sequence[str] = ()) -> List[str]:
        self._check("changed_files_between")
        changed = self.changed.get(from_rev, [])
        return [path for path in changed if not files or path in files]

    def commits_between(self, from_rev: str, to_rev: str, files: Sequence[str] = ()) -> List[str]:
        return [f"{detail.short} {detail.subject}" for detail in self.commits.get(from_rev, [])]

    def commit_details(self, from_rev: str, to_rev: str, files: Sequence[str] = ()) -> List[CommitDetail]:
        return list(self.commits.get(from_rev, []))

    def diff(self, from_rev: str, to_rev: str, files: Sequence[str] = ()) -> str:
        return self.diff_text

    def show_commit_diff(self, rev: str, files: Sequence[str] = ()) -> str:
        return f"diff for {rev}\n"

    def files_changed_in_commit(self, rev: str, filter_files: Sequence[str] = ()) -> List[str]:
        changed = self.commit_files.get(rev, [])
        return [path for path in changed if not filter_files or path in filter_files]


__all__ = ["FakeGit"]
