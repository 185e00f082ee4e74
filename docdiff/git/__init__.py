"""Git integration."""

from .history import CommitDetail, GitError, GitHistory

__all__ = ["CommitDetail", "GitError", "GitHistory"]
