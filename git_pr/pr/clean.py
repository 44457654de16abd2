"""Remove local pull request branches that have been merged into the trunk."""

from __future__ import annotations

import click

from git_pr.branch.naming import try_parse
from git_pr.errors import CollaboratorError, GitPrError
from git_pr.git.client import Git
from git_pr.pr.common import log, setup


def clean_merged_branches(git: Git, trunk: str) -> tuple[list[str], list[CollaboratorError]]:
    """Delete merged local branches named like pull requests.

    The trunk and the checked-out branch are always kept, as is any branch
    that does not parse as ``<topic>/<index>``. A failed delete does not
    stop the remaining ones.

    Returns:
        A tuple of (deleted, failures).
    """
    keep = {trunk, git.current_branch()}
    deleted = []
    failures = []
    for name in git.merged_branches(trunk):
        if name in keep or try_parse(name) is None:
            continue
        try:
            git.delete_branch(name)
            deleted.append(name)
        except CollaboratorError as exc:
            log(f"Error: {exc}")
            failures.append(exc)
    return deleted, failures


def run(remote: str | None = None, trunk: str | None = None, git: Git | None = None) -> int:
    """Entry point for CLI command.

    Args:
        remote: Remote name override.
        trunk: Trunk branch override.
        git: Git client to use instead of the configured one.

    Returns:
        Process exit code; 1 if any branch could not be deleted.
    """
    try:
        settings, git = setup(remote, trunk, git)
        deleted, failures = clean_merged_branches(git, settings.trunk)
    except GitPrError as e:
        log(f"Error: {e}")
        return 1
    for name in deleted:
        click.echo(f"Deleted {name}")
    return 1 if failures else 0
