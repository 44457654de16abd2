"""Report the tool version and the git binary it drives.

Old git releases may not support every flag the commands rely on, so this
is the first thing to check when a command fails unexpectedly.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

import click

from git_pr.errors import GitPrError
from git_pr.git.client import Git
from git_pr.pr.common import log

DISTRIBUTION = "git-pr-tools"


def _tool_version() -> str:
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "unknown"


def run(git: Git | None = None) -> int:
    """Entry point for CLI command.

    Args:
        git: Git client to use instead of the configured one.

    Returns:
        Process exit code.
    """
    try:
        git_version = (git if git is not None else Git()).version()
    except GitPrError as e:
        log(f"Error: {e}")
        return 1
    click.echo(f"{DISTRIBUTION} {_tool_version()}")
    click.echo(git_version)
    return 0
