"""Display the currently open pull requests.

By "open", we mean "present on the remote": accepted and abandoned pull
requests have their branches deleted.
"""

from __future__ import annotations

import json

import click

from git_pr.branch.naming import format_name, group_by_topic
from git_pr.errors import GitPrError
from git_pr.git.client import Git
from git_pr.pr.common import log, setup


def list_pull_requests(git: Git, trunk: str) -> dict[str, list[str]]:
    """Fetch remote refs and group the pull request branches by topic.

    Remote branches that do not parse as ``<topic>/<index>`` are skipped
    with a warning, except the trunk which is skipped silently.

    Returns:
        Mapping of topic to its branch names, both in ascending order.
    """
    git.fetch_prune()
    names = [name for name in git.remote_branches() if name != trunk]
    groups, skipped = group_by_topic(names)
    for name in skipped:
        log(f"Warning: skipping remote branch {name!r}: not a pull request branch")
    return {topic: [format_name(topic, index) for index in indices] for topic, indices in groups.items()}


def format_listing(pull_requests: dict[str, list[str]]) -> str:
    """Render one line per topic: ``topic: topic/0, topic/2``."""
    return "\n".join(f"{topic}: {', '.join(names)}" for topic, names in pull_requests.items())


def run(output_json: bool = False, remote: str | None = None, trunk: str | None = None, git: Git | None = None) -> int:
    """Entry point for CLI command.

    Args:
        output_json: Print a JSON object instead of text lines.
        remote: Remote name override.
        trunk: Trunk branch override.
        git: Git client to use instead of the configured one.

    Returns:
        Process exit code.
    """
    try:
        settings, git = setup(remote, trunk, git)
        pull_requests = list_pull_requests(git, settings.trunk)
    except GitPrError as e:
        log(f"Error: {e}")
        return 1

    if output_json:
        click.echo(json.dumps(pull_requests, indent=2))
    elif pull_requests:
        click.echo(format_listing(pull_requests))
    return 0
