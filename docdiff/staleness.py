"""Decide which tracked documents are stale."""

from __future__ import annotations

from typing import Dict, Mapping

from .git import GitError, GitHistory
from .logging import get_logger
from .models import ScanResult
from .report.model import StaleDoc

logger = get_logger("staleness")


def find_stale_docs(
    versions: Mapping[str, str],
    scan_result: ScanResult,
    git: GitHistory,
    *,
    head: str = "HEAD",
) -> Dict[str, StaleDoc]:
    """Return docs whose annotating source files changed since their recorded revision."""
    stale: Dict[str, StaleDoc] = {}
    for doc in sorted(versions):
        last_hash = versions[doc]
        files = scan_result.files_by_doc.get(doc, [])
        if not files:
            continue
        try:
            changed = git.changed_files_between(last_hash, head, files)
        except GitError as exc:
            logger.warning("Failed to check changes for %s (%s..%s): %s", doc, last_hash, head, exc)
            continue
        if not changed:
            continue
        try:
            commit_info = git.commit_info(last_hash)
        except GitError:
            commit_info = last_hash
        stale[doc] = StaleDoc(
            path=doc,
            last_hash=last_hash,
            last_commit_info=commit_info,
            files_changed=len(changed),
            changed_files=changed,
        )
    return stale


__all__ = ["find_stale_docs"]
