"""Main CLI entry point for git-pr-tools."""

import click

from git_pr.pr import commands as pr_commands


@click.group()
@click.version_option(package_name="git-pr-tools")
@pr_commands.settings_options
@click.pass_context
def cli(ctx: click.Context, remote: str | None, trunk: str | None) -> None:
    """Pull requests over plain git branches."""
    ctx.obj = {"remote": remote, "trunk": trunk}


cli.add_command(pr_commands.pr_create, name="create")
cli.add_command(pr_commands.pr_list, name="list")
cli.add_command(pr_commands.pr_accept, name="accept")
cli.add_command(pr_commands.pr_abandon, name="abandon")
cli.add_command(pr_commands.pr_clean, name="clean")
cli.add_command(pr_commands.pr_version, name="version")


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
