"""Thin wrapper around the git command line.

This is the only module that starts subprocesses. It exposes just the
operations the pull request commands need, so that everything else can be
tested by handing the commands a mock ``Git``.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from git_pr.errors import CollaboratorError

# Resolve git executable path, fall back to "git" if not found
GIT_EXECUTABLE = shutil.which("git") or "git"


class Git:
    """Client for the git binary, bound to one remote and working directory."""

    def __init__(self, remote: str = "origin", executable: str = GIT_EXECUTABLE, cwd: Path | None = None) -> None:
        self.remote = remote
        self.executable = executable
        self.cwd = cwd

    def _run(self, args: list[str]) -> str:
        """Run a git command and return its stripped stdout.

        Raises:
            CollaboratorError: If git exits non-zero or cannot be started.
        """
        cmd = [self.executable, *args]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                cwd=self.cwd,
            )
        except FileNotFoundError as exc:
            raise CollaboratorError(cmd, 127, f"Command not found: {self.executable}") from exc
        if result.returncode != 0:
            raise CollaboratorError(cmd, result.returncode, (result.stderr or result.stdout).strip())
        return result.stdout.strip()

    def _lines(self, args: list[str]) -> list[str]:
        return [line.strip() for line in self._run(args).splitlines() if line.strip()]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def version(self) -> str:
        """Report the version string of the underlying git binary."""
        return self._run(["--version"])

    def config_get(self, key: str) -> str | None:
        """Read a git config value, or None when it is not set."""
        try:
            value = self._run(["config", "--get", key])
        except CollaboratorError as exc:
            # git config exits 1 when the key is missing
            if exc.returncode == 1:
                return None
            raise
        return value or None

    def current_branch(self) -> str | None:
        """Get the checked-out branch name. Returns None on a detached HEAD."""
        try:
            ref = self._run(["symbolic-ref", "--quiet", "HEAD"])
        except CollaboratorError as exc:
            if exc.returncode == 1:
                return None
            raise
        if ref.startswith("refs/heads/"):
            return ref[len("refs/heads/") :]
        return ref

    def local_branches(self) -> list[str]:
        """List local branch names."""
        return self._lines(["for-each-ref", "--format=%(refname:short)", "refs/heads/"])

    def remote_branches(self) -> list[str]:
        """List branch names on the remote, without the ``<remote>/`` prefix.

        The remote's symbolic ``HEAD`` is dropped.
        """
        prefix = f"refs/remotes/{self.remote}/"
        branches = []
        for ref in self._lines(["for-each-ref", "--format=%(refname)", prefix]):
            name = ref[len(prefix) :] if ref.startswith(prefix) else ref
            if name != "HEAD":
                branches.append(name)
        return branches

    def merged_branches(self, trunk: str) -> list[str]:
        """List local branches whose tips are reachable from ``trunk``."""
        return self._lines(["branch", "--merged", trunk, "--format=%(refname:short)"])

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def fetch_prune(self) -> None:
        """Refresh remote refs, dropping the ones deleted upstream."""
        self._run(["fetch", "--prune", self.remote])

    def create_branch(self, name: str) -> None:
        """Create a branch at HEAD and check it out."""
        self._run(["checkout", "-b", name])

    def checkout(self, name: str) -> None:
        self._run(["checkout", name])

    def push_new_branch(self, name: str) -> None:
        """Push ``name`` to the remote and set it as upstream.

        The lease with an empty expected value makes the push fail if the
        remote ref already exists.
        """
        self._run(
            [
                "push",
                "--set-upstream",
                f"--force-with-lease=refs/heads/{name}:",
                self.remote,
                f"refs/heads/{name}:refs/heads/{name}",
            ]
        )

    def push_delete(self, name: str) -> None:
        """Delete a branch on the remote."""
        self._run(["push", self.remote, "--delete", name])

    def delete_branch(self, name: str, force: bool = False) -> None:
        """Delete a local branch."""
        self._run(["branch", "-D" if force else "-d", name])

    def merge_and_delete(self, name: str, trunk: str) -> None:
        """Fast-forward ``trunk`` to the pull request and remove the branch.

        Checks out the trunk, brings it up to date with the remote trunk,
        fast-forwards it to ``<remote>/<name>``, pushes the trunk, then
        deletes the branch on the remote and locally.
        """
        remote_branches = self.remote_branches()
        self.checkout(trunk)
        if trunk in remote_branches:
            self._run(["merge", "--ff-only", f"{self.remote}/{trunk}"])
        self._run(["merge", "--ff-only", f"{self.remote}/{name}"])
        self._run(["push", self.remote, trunk])
        self.push_delete(name)
        if name in self.local_branches():
            self.delete_branch(name)
