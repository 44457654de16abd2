"""Settings shared by every git-pr command.

Each field is taken from, in order: the command line option (or its
environment variable, which click resolves for us), the repository's git
config (``git-pr.remote`` / ``git-pr.trunk``), then the built-in default.
"""

from __future__ import annotations

from dataclasses import dataclass

from git_pr.git.client import GIT_EXECUTABLE, Git

DEFAULT_REMOTE = "origin"
DEFAULT_TRUNK = "trunk"

REMOTE_ENVVAR = "GIT_PR_REMOTE"
TRUNK_ENVVAR = "GIT_PR_TRUNK"

REMOTE_CONFIG_KEY = "git-pr.remote"
TRUNK_CONFIG_KEY = "git-pr.trunk"


@dataclass
class Settings:
    """Resolved configuration for one command invocation."""

    remote: str = DEFAULT_REMOTE
    trunk: str = DEFAULT_TRUNK
    git_executable: str = GIT_EXECUTABLE

    def make_git(self) -> Git:
        """Build a git client for the configured remote."""
        return Git(remote=self.remote, executable=self.git_executable)


def load_settings(remote: str | None = None, trunk: str | None = None, git_executable: str | None = None) -> Settings:
    """Resolve settings, filling unset fields from git config and defaults.

    Args:
        remote: Remote name from the command line or environment.
        trunk: Trunk branch name from the command line or environment.
        git_executable: Path to git. Defaults to the one found on PATH.

    Raises:
        CollaboratorError: If git config cannot be read.
    """
    executable = git_executable or GIT_EXECUTABLE
    if remote is None or trunk is None:
        git = Git(executable=executable)
        if remote is None:
            remote = git.config_get(REMOTE_CONFIG_KEY) or DEFAULT_REMOTE
        if trunk is None:
            trunk = git.config_get(TRUNK_CONFIG_KEY) or DEFAULT_TRUNK
    return Settings(remote=remote, trunk=trunk, git_executable=executable)
