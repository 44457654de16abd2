"""Create a pull request branch and push it to the shared remote.

Usage:
    git pr-create <topic>
    git-pr create <topic>
"""

from __future__ import annotations

import click

from git_pr.branch.naming import BranchName, allocate, validate_topic
from git_pr.errors import CollaboratorError, GitPrError
from git_pr.git.client import Git
from git_pr.pr.common import log, setup


def _roll_back(git: Git, name: str, previous: str | None) -> None:
    """Return to the previous branch and drop the unpublished one."""
    if previous is None:
        log(f"Warning: HEAD was detached before creating {name}; local branch left in place")
        return
    try:
        git.checkout(previous)
        git.delete_branch(name, force=True)
    except CollaboratorError as exc:
        log(f"Warning: could not remove local branch {name}: {exc}")


def create_pull_request(git: Git, topic: str) -> BranchName:
    """Allocate a branch name for ``topic``, create it, and push it.

    The branch set is a fresh snapshot of local and remote branches. If the
    push is rejected (for example because someone else pushed the same name
    first), the local branch is removed so the next attempt starts clean.

    Args:
        git: Git client bound to the shared remote.
        topic: The pull request topic.

    Returns:
        The allocated branch name.

    Raises:
        InvalidTopic: If the topic is malformed.
        CollaboratorError: If any git step fails.
    """
    validate_topic(topic)
    git.fetch_prune()
    existing = set(git.local_branches()) | set(git.remote_branches())
    branch = allocate(topic, existing)
    name = str(branch)

    previous = git.current_branch()
    git.create_branch(name)
    try:
        git.push_new_branch(name)
    except CollaboratorError:
        log(f"Warning: push of {name} was rejected; re-run to allocate a new name")
        _roll_back(git, name, previous)
        raise
    return branch


def run(topic: str, remote: str | None = None, trunk: str | None = None, git: Git | None = None) -> int:
    """Entry point for CLI command.

    Args:
        topic: The pull request topic.
        remote: Remote name override.
        trunk: Trunk branch override.
        git: Git client to use instead of the configured one.

    Returns:
        Process exit code.
    """
    try:
        _, git = setup(remote, trunk, git)
        branch = create_pull_request(git, topic)
    except GitPrError as e:
        log(f"Error: {e}")
        return 1
    click.echo(str(branch))
    return 0
