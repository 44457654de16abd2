"""Common utilities for the pull request commands.

This module contains shared code used by multiple pr subcommands.
"""

from __future__ import annotations

import sys

from git_pr.config import Settings, load_settings
from git_pr.git.client import Git


def log(message: str) -> None:
    """Print message to stderr."""
    print(message, file=sys.stderr)


def setup(remote: str | None, trunk: str | None, git: Git | None = None) -> tuple[Settings, Git]:
    """Resolve settings and the git client for a command.

    Args:
        remote: Remote name from the command line, or None.
        trunk: Trunk branch name from the command line, or None.
        git: Pre-built client to use instead of one built from settings.

    Returns:
        The resolved settings and a git client bound to the configured remote.

    Raises:
        CollaboratorError: If git config cannot be read.
    """
    settings = load_settings(remote=remote, trunk=trunk)
    return settings, git if git is not None else settings.make_git()
