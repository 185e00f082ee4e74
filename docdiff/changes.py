"""Render the code changes behind a tracked document."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .git import GitHistory
from .templating import render

MODES = ("default", "commits", "summary", "ai")


@dataclass(frozen=True)
class CommitChange:
    short: str
    subject: str
    files: List[str]
    diff: str


class ChangesRenderer:
    """Collects history for a doc's annotated files and renders it in one of ``MODES``."""

    def __init__(self, git: GitHistory) -> None:
        self.git = git

    def render(
        self,
        doc: str,
        last_hash: str,
        files: Sequence[str],
        *,
        mode: str = "default",
        doc_content: Optional[str] = None,
    ) -> str:
        if mode not in MODES:
            raise ValueError(f"Unknown changes mode: {mode}")
        files = list(files)

        if mode == "commits":
            return render(
                "changes_commits.txt.j2",
                doc=doc,
                last_hash=last_hash,
                commits=self.git.commits_between(last_hash, "HEAD", files),
            )

        if mode == "default":
            commits = self.git.commits_between(last_hash, "HEAD", files)
            return render(
                "changes_default.txt.j2",
                doc=doc,
                last_commit_info=self.git.commit_info(last_hash),
                head=self.git.head_short(),
                commits=commits,
                changed_files=self.git.changed_files_between(last_hash, "HEAD", files),
                diff=self.git.diff(last_hash, "HEAD", files) if commits else "",
            )

        head = self.git.head_short()
        context = {
            "doc": doc,
            "files": files,
            "last_hash": last_hash,
            "last_date": self.git.commit_date(last_hash),
            "head": head,
            "head_date": self.git.commit_date(head),
            "details": self._commit_changes(last_hash, files),
        }
        if mode == "summary":
            return render(
                "changes_summary.md.j2",
                heading_prefix="",
                blank_after_heading=True,
                **context,
            )
        return render(
            "changes_ai.md.j2",
            heading_prefix="Commit: ",
            blank_after_heading=False,
            doc_content=doc_content.rstrip("\n") if doc_content is not None else None,
            **context,
        )

    def _commit_changes(self, last_hash: str, files: List[str]) -> List[CommitChange]:
        changes: List[CommitChange] = []
        for detail in self.git.commit_details(last_hash, "HEAD", files):
            changes.append(
                CommitChange(
                    short=detail.short,
                    subject=detail.subject,
                    files=self.git.files_changed_in_commit(detail.hash, files),
                    diff=self.git.show_commit_diff(detail.hash, files).strip(),
                )
            )
        return changes


def read_doc(root: Path, doc: str) -> Optional[str]:
    """Return the text of ``doc`` under ``root``, or ``None`` when it cannot be read."""
    try:
        return (root / doc).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


__all__ = ["ChangesRenderer", "CommitChange", "MODES", "read_doc"]
