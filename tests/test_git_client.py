"""Unit tests for the git client wrapper.

This test suite covers:
- _run() error translation into CollaboratorError
- remote/local branch listing parsing
- the exact git invocations for push and merge
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, call, patch

import pytest

from git_pr.errors import CollaboratorError
from git_pr.git.client import Git


def _ok(stdout: str = "") -> MagicMock:
    return MagicMock(returncode=0, stdout=stdout, stderr="")


def _fail(returncode: int = 1, stderr: str = "boom") -> MagicMock:
    return MagicMock(returncode=returncode, stdout="", stderr=stderr)


def _args(mock_run: Any) -> list[list[str]]:
    """Return the argv of every subprocess.run call, minus the executable."""
    return [c.args[0][1:] for c in mock_run.call_args_list]


# =============================================================================
# Tests for command execution
# =============================================================================


class TestRun:
    """Tests for subprocess handling."""

    @patch("subprocess.run")
    def test_version(self, mock_run: Any) -> None:
        """version() returns git's stdout stripped."""
        mock_run.return_value = _ok("git version 2.43.0\n")

        assert Git(executable="git").version() == "git version 2.43.0"
        mock_run.assert_called_once_with(
            ["git", "--version"], capture_output=True, text=True, check=False, cwd=None
        )

    @patch("subprocess.run")
    def test_nonzero_exit_raises(self, mock_run: Any) -> None:
        """A failing command raises CollaboratorError with details."""
        mock_run.return_value = _fail(128, "fatal: not a git repository\n")

        with pytest.raises(CollaboratorError) as excinfo:
            Git(executable="git").fetch_prune()

        assert excinfo.value.returncode == 128
        assert excinfo.value.cmd == ["git", "fetch", "--prune", "origin"]
        assert "not a git repository" in str(excinfo.value)

    @patch("subprocess.run")
    def test_missing_binary_raises(self, mock_run: Any) -> None:
        """A missing git binary raises CollaboratorError."""
        mock_run.side_effect = FileNotFoundError("no git")

        with pytest.raises(CollaboratorError) as excinfo:
            Git(executable="/nonexistent/git").version()

        assert excinfo.value.returncode == 127


# =============================================================================
# Tests for queries
# =============================================================================


class TestQueries:
    """Tests for branch listing and config queries."""

    @patch("subprocess.run")
    def test_remote_branches_strip_prefix(self, mock_run: Any) -> None:
        """Remote names lose their refs/remotes/<remote>/ prefix and HEAD is dropped."""
        mock_run.return_value = _ok(
            "refs/remotes/upstream/HEAD\n"
            "refs/remotes/upstream/hotfix/0\n"
            "refs/remotes/upstream/trunk\n"
            "refs/remotes/upstream/use-git-pr-tool/3\n"
        )

        branches = Git(remote="upstream", executable="git").remote_branches()

        assert branches == ["hotfix/0", "trunk", "use-git-pr-tool/3"]
        assert _args(mock_run) == [["for-each-ref", "--format=%(refname)", "refs/remotes/upstream/"]]

    @patch("subprocess.run")
    def test_local_branches(self, mock_run: Any) -> None:
        """Local branch names are returned one per line."""
        mock_run.return_value = _ok("hotfix/0\ntrunk\n")

        assert Git(executable="git").local_branches() == ["hotfix/0", "trunk"]

    @patch("subprocess.run")
    def test_empty_listing(self, mock_run: Any) -> None:
        """No output means no branches."""
        mock_run.return_value = _ok("")

        assert Git(executable="git").remote_branches() == []

    @patch("subprocess.run")
    def test_current_branch(self, mock_run: Any) -> None:
        """The refs/heads/ prefix is removed."""
        mock_run.return_value = _ok("refs/heads/hotfix/0\n")

        assert Git(executable="git").current_branch() == "hotfix/0"

    @patch("subprocess.run")
    def test_current_branch_detached(self, mock_run: Any) -> None:
        """A detached HEAD yields None."""
        mock_run.return_value = _fail(1, "")

        assert Git(executable="git").current_branch() is None

    @patch("subprocess.run")
    def test_config_get_missing(self, mock_run: Any) -> None:
        """An unset key yields None."""
        mock_run.return_value = _fail(1, "")

        assert Git(executable="git").config_get("git-pr.trunk") is None

    @patch("subprocess.run")
    def test_config_get_other_failure(self, mock_run: Any) -> None:
        """Other config failures propagate."""
        mock_run.return_value = _fail(3, "bad config file")

        with pytest.raises(CollaboratorError):
            Git(executable="git").config_get("git-pr.trunk")

    @patch("subprocess.run")
    def test_merged_branches(self, mock_run: Any) -> None:
        """merged_branches() asks git for branches merged into the trunk."""
        mock_run.return_value = _ok("hotfix/0\ntrunk\n")

        assert Git(executable="git").merged_branches("trunk") == ["hotfix/0", "trunk"]
        assert _args(mock_run) == [["branch", "--merged", "trunk", "--format=%(refname:short)"]]


# =============================================================================
# Tests for mutations
# =============================================================================


class TestMutations:
    """Tests for the git invocations that change state."""

    @patch("subprocess.run")
    def test_push_new_branch_requires_absent_ref(self, mock_run: Any) -> None:
        """The push carries an empty lease so an existing remote ref is rejected."""
        mock_run.return_value = _ok()

        Git(executable="git").push_new_branch("hotfix/1")

        assert _args(mock_run) == [
            [
                "push",
                "--set-upstream",
                "--force-with-lease=refs/heads/hotfix/1:",
                "origin",
                "refs/heads/hotfix/1:refs/heads/hotfix/1",
            ]
        ]

    @patch("subprocess.run")
    def test_delete_branch_flags(self, mock_run: Any) -> None:
        """force selects -D over -d."""
        mock_run.return_value = _ok()
        git = Git(executable="git")

        git.delete_branch("a/0")
        git.delete_branch("a/1", force=True)

        assert _args(mock_run) == [["branch", "-d", "a/0"], ["branch", "-D", "a/1"]]

    @patch("subprocess.run")
    def test_merge_and_delete(self, mock_run: Any) -> None:
        """Accepting runs checkout, two fast-forwards, push, and both deletes."""
        mock_run.side_effect = [
            _ok("refs/remotes/origin/hotfix/0\nrefs/remotes/origin/trunk\n"),
            _ok(),
            _ok(),
            _ok(),
            _ok(),
            _ok(),
            _ok("hotfix/0\ntrunk\n"),
            _ok(),
        ]

        Git(executable="git").merge_and_delete("hotfix/0", "trunk")

        assert _args(mock_run) == [
            ["for-each-ref", "--format=%(refname)", "refs/remotes/origin/"],
            ["checkout", "trunk"],
            ["merge", "--ff-only", "origin/trunk"],
            ["merge", "--ff-only", "origin/hotfix/0"],
            ["push", "origin", "trunk"],
            ["push", "origin", "--delete", "hotfix/0"],
            ["for-each-ref", "--format=%(refname:short)", "refs/heads/"],
            ["branch", "-d", "hotfix/0"],
        ]

    @patch("subprocess.run")
    def test_merge_stops_on_conflict(self, mock_run: Any) -> None:
        """A failed fast-forward leaves the branch in place."""
        mock_run.side_effect = [
            _ok("refs/remotes/origin/hotfix/0\n"),
            _ok(),
            _fail(128, "fatal: Not possible to fast-forward, aborting."),
        ]

        with pytest.raises(CollaboratorError):
            Git(executable="git").merge_and_delete("hotfix/0", "trunk")

        assert call(
            ["git", "push", "origin", "--delete", "hotfix/0"],
            capture_output=True,
            text=True,
            check=False,
            cwd=None,
        ) not in mock_run.call_args_list
