"""Tests for the git history wrapper."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from docdiff.git import CommitDetail, GitError, GitHistory


def _recording_runner(responses: dict[tuple[str, ...], str]):  # type: ignore[no-untyped-def]
    calls: list[tuple[list[str], Path]] = []

    def runner(args, cwd):  # type: ignore[no-untyped-def]
        calls.append((list(args), Path(cwd)))
        for prefix, output in responses.items():
            if tuple(args[: len(prefix)]) == prefix:
                return output
        return ""

    return runner, calls


def test_head_short_strips_output(tmp_path: Path) -> None:
    runner, calls = _recording_runner({("git", "rev-parse", "--short"): "abc1234\n"})
    git = GitHistory(tmp_path, runner=runner)

    assert git.head_short() == "abc1234"
    assert calls == [(["git", "rev-parse", "--short", "HEAD"], tmp_path)]


def test_changed_files_between_limits_to_pathspec(tmp_path: Path) -> None:
    runner, calls = _recording_runner({("git", "diff", "--name-only"): "src/a.go\nsrc/b.go\n\n"})
    git = GitHistory(tmp_path, runner=runner)

    changed = git.changed_files_between("abc1234", "HEAD", ["src/a.go", "src/b.go"])

    assert changed == ["src/a.go", "src/b.go"]
    assert calls[0][0] == [
        "git",
        "diff",
        "--name-only",
        "abc1234..HEAD",
        "--",
        "src/a.go",
        "src/b.go",
    ]


def test_commits_between_without_files_has_no_pathspec(tmp_path: Path) -> None:
    runner, calls = _recording_runner({("git", "log", "--oneline"): "f00 Fix\nba4 Add\n"})
    git = GitHistory(tmp_path, runner=runner)

    assert git.commits_between("abc", "HEAD") == ["f00 Fix", "ba4 Add"]
    assert calls[0][0] == ["git", "log", "--oneline", "abc..HEAD"]


def test_commit_details_keeps_pipes_in_subject(tmp_path: Path) -> None:
    output = "1111111aaaa|1111111|Split parser | lexer\n2222222bbbb|2222222|Add docs\n"
    runner, calls = _recording_runner({("git", "log", "--format=%H|%h|%s"): output})
    git = GitHistory(tmp_path, runner=runner)

    details = git.commit_details("abc", "HEAD", ["src/a.go"])

    assert details == [
        CommitDetail(hash="1111111aaaa", short="1111111", subject="Split parser | lexer"),
        CommitDetail(hash="2222222bbbb", short="2222222", subject="Add docs"),
    ]
    assert calls[0][0][-2:] == ["--", "src/a.go"]


def test_commit_queries_use_expected_formats(tmp_path: Path) -> None:
    runner, calls = _recording_runner({})
    git = GitHistory(tmp_path, runner=runner)

    git.commit_info("abc")
    git.commit_date("abc")
    git.commit_subject("abc")
    git.show_commit_diff("abc", ["a.py"])

    assert [call[0] for call in calls] == [
        ["git", "log", "-1", "--format=%h (%ar)", "abc"],
        ["git", "log", "-1", "--format=%cs", "abc"],
        ["git", "log", "-1", "--format=%s", "abc"],
        ["git", "show", "--format=", "abc", "--", "a.py"],
    ]


def test_files_changed_in_commit_filters(tmp_path: Path) -> None:
    runner, _ = _recording_runner({("git", "diff-tree"): "a.py\nb.py\nc.py\n"})
    git = GitHistory(tmp_path, runner=runner)

    assert git.files_changed_in_commit("abc") == ["a.py", "b.py", "c.py"]
    assert git.files_changed_in_commit("abc", ["c.py", "a.py"]) == ["a.py", "c.py"]


def test_failed_command_raises_git_error(tmp_path: Path) -> None:
    def runner(args, cwd):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(128, args, stderr="fatal: bad revision 'zzz'\n")

    git = GitHistory(tmp_path, runner=runner)

    with pytest.raises(GitError, match="bad revision"):
        git.diff("zzz", "HEAD")
    assert git.is_repo() is False


def test_missing_git_binary_raises_git_error(tmp_path: Path) -> None:
    def runner(args, cwd):  # type: ignore[no-untyped-def]
        raise FileNotFoundError("git")

    with pytest.raises(GitError):
        GitHistory(tmp_path, runner=runner).head_full()


def test_is_repo_true_when_rev_parse_succeeds(tmp_path: Path) -> None:
    runner, calls = _recording_runner({("git", "rev-parse", "--git-dir"): ".git\n"})
    assert GitHistory(tmp_path, runner=runner).is_repo() is True
    assert calls[0][0] == ["git", "rev-parse", "--git-dir"]
