"""Pull request CLI commands.

Each command is usable both as a ``git-pr`` subcommand and as a standalone
``git-pr-<name>`` executable, which git runs for ``git pr-<name>``.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any

import click
from click.core import ParameterSource

from git_pr.config import REMOTE_ENVVAR, TRUNK_ENVVAR


def settings_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --remote and --trunk options to a command or group."""
    func = click.option(
        "--trunk",
        envvar=TRUNK_ENVVAR,
        help="Branch that accepted pull requests are merged into [default: git-pr.trunk or 'trunk']",
    )(func)
    func = click.option(
        "--remote",
        envvar=REMOTE_ENVVAR,
        help="Shared remote holding the pull request branches [default: git-pr.remote or 'origin']",
    )(func)
    return func


def _option(ctx: click.Context, name: str, value: str | None) -> str | None:
    """Pick a setting, letting the subcommand's own flag beat the group's.

    ``ctx.obj`` holds the values given to the ``git-pr`` group; it is None
    when the command runs as a standalone executable.
    """
    if ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE:
        return value
    inherited = (ctx.obj or {}).get(name)
    return inherited if inherited is not None else value


@click.command("create")
@click.argument("topic")
@settings_options
@click.pass_context
def pr_create(ctx: click.Context, topic: str, remote: str | None, trunk: str | None) -> None:
    """Create and push a new pull request branch.

    Picks the lowest free index for TOPIC, creates TOPIC/<index> at HEAD,
    checks it out and pushes it to the shared remote.
    """
    from git_pr.pr.create import run  # noqa: PLC0415

    sys.exit(run(topic, remote=_option(ctx, "remote", remote), trunk=_option(ctx, "trunk", trunk)))


@click.command("list")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@settings_options
@click.pass_context
def pr_list(ctx: click.Context, output_json: bool, remote: str | None, trunk: str | None) -> None:
    """List open pull requests, one topic per line.

    Examples:

        # Text output
        git pr-list

        # JSON output
        git pr-list --json
    """
    from git_pr.pr.listing import run  # noqa: PLC0415

    sys.exit(
        run(output_json=output_json, remote=_option(ctx, "remote", remote), trunk=_option(ctx, "trunk", trunk))
    )


@click.command("accept")
@click.argument("pull_request")
@settings_options
@click.pass_context
def pr_accept(ctx: click.Context, pull_request: str, remote: str | None, trunk: str | None) -> None:
    """Fast-forward the trunk onto a pull request and delete its branch.

    PULL_REQUEST: A topic with exactly one open branch, or a full
    <topic>/<index> branch name
    """
    from git_pr.pr.accept import run  # noqa: PLC0415

    sys.exit(run(pull_request, remote=_option(ctx, "remote", remote), trunk=_option(ctx, "trunk", trunk)))


@click.command("abandon")
@click.argument("pull_request")
@settings_options
@click.pass_context
def pr_abandon(ctx: click.Context, pull_request: str, remote: str | None, trunk: str | None) -> None:
    """Delete a pull request branch locally and on the remote.

    PULL_REQUEST: A topic (abandons every open branch for it), or a full
    <topic>/<index> branch name
    """
    from git_pr.pr.abandon import run  # noqa: PLC0415

    sys.exit(run(pull_request, remote=_option(ctx, "remote", remote), trunk=_option(ctx, "trunk", trunk)))


@click.command("clean")
@settings_options
@click.pass_context
def pr_clean(ctx: click.Context, remote: str | None, trunk: str | None) -> None:
    """Delete local pull request branches already merged into the trunk."""
    from git_pr.pr.clean import run  # noqa: PLC0415

    sys.exit(run(remote=_option(ctx, "remote", remote), trunk=_option(ctx, "trunk", trunk)))


@click.command("version")
def pr_version() -> None:
    """Show the git-pr-tools version and the git it runs."""
    from git_pr.pr.version import run  # noqa: PLC0415

    sys.exit(run())
