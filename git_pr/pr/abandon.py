"""Abandon a pull request locally and on the remote.

Usage:
    git pr-abandon <topic>          # every open branch for the topic
    git pr-abandon <topic>/<index>  # just that branch
"""

from __future__ import annotations

import click

from git_pr.branch.naming import BranchName, matching
from git_pr.errors import CollaboratorError, GitPrError, UnknownPullRequest
from git_pr.git.client import Git
from git_pr.pr.common import log, setup


def _matching_or_empty(argument: str, existing: list[str]) -> list[BranchName]:
    try:
        return matching(argument, existing)
    except UnknownPullRequest:
        return []


def abandon_pull_request(git: Git, argument: str, trunk: str) -> tuple[list[str], list[CollaboratorError]]:
    """Delete every branch matching ``argument``, remote first, then local.

    Individual delete failures do not stop the remaining deletes.

    Returns:
        A tuple of (deleted, failures). ``deleted`` lists what was removed,
        as ``<remote>/<name>`` for remote branches and ``<name>`` for local.

    Raises:
        InvalidTopic: If the argument is neither a topic nor a branch name.
        UnknownPullRequest: If nothing matches locally or remotely.
        CollaboratorError: If listing or switching branches fails.
    """
    git.fetch_prune()
    remote_targets = _matching_or_empty(argument, git.remote_branches())
    local_targets = _matching_or_empty(argument, git.local_branches())
    if not remote_targets and not local_targets:
        raise UnknownPullRequest(argument)

    deleted = []
    failures = []
    for branch in remote_targets:
        try:
            git.push_delete(str(branch))
            deleted.append(f"{git.remote}/{branch}")
        except CollaboratorError as exc:
            log(f"Error: {exc}")
            failures.append(exc)

    local_names = [str(branch) for branch in local_targets]
    if git.current_branch() in local_names:
        git.checkout(trunk)
    for name in local_names:
        try:
            git.delete_branch(name, force=True)
            deleted.append(name)
        except CollaboratorError as exc:
            log(f"Error: {exc}")
            failures.append(exc)
    return deleted, failures


def run(argument: str, remote: str | None = None, trunk: str | None = None, git: Git | None = None) -> int:
    """Entry point for CLI command.

    Args:
        argument: Topic or full branch name of the pull request.
        remote: Remote name override.
        trunk: Trunk branch override.
        git: Git client to use instead of the configured one.

    Returns:
        Process exit code; 1 if anything could not be deleted.
    """
    try:
        settings, git = setup(remote, trunk, git)
        deleted, failures = abandon_pull_request(git, argument, settings.trunk)
    except GitPrError as e:
        log(f"Error: {e}")
        return 1
    for name in deleted:
        click.echo(f"Deleted {name}")
    return 1 if failures else 0
