"""Accept a pull request: fast-forward the trunk onto it and delete it.

Usage:
    git pr-accept <topic>
    git pr-accept <topic>/<index>
"""

from __future__ import annotations

import click

from git_pr.branch.naming import BranchName, resolve
from git_pr.errors import GitPrError
from git_pr.git.client import Git
from git_pr.pr.common import log, setup


def accept_pull_request(git: Git, argument: str, trunk: str) -> BranchName:
    """Merge the pull request named by ``argument`` into ``trunk``.

    A bare topic is accepted only when exactly one branch is open for it.

    Raises:
        InvalidTopic: If the argument is neither a topic nor a branch name.
        UnknownPullRequest: If no open pull request matches.
        AmbiguousTopic: If a bare topic has several open branches.
        CollaboratorError: If the merge, push or delete fails.
    """
    git.fetch_prune()
    branch = resolve(argument, git.remote_branches())
    git.merge_and_delete(str(branch), trunk)
    return branch


def run(argument: str, remote: str | None = None, trunk: str | None = None, git: Git | None = None) -> int:
    """Entry point for CLI command.

    Args:
        argument: Topic or full branch name of the pull request.
        remote: Remote name override.
        trunk: Trunk branch override.
        git: Git client to use instead of the configured one.

    Returns:
        Process exit code.
    """
    try:
        settings, git = setup(remote, trunk, git)
        branch = accept_pull_request(git, argument, settings.trunk)
    except GitPrError as e:
        log(f"Error: {e}")
        return 1
    click.echo(f"Accepted {branch} into {settings.trunk}")
    return 0
