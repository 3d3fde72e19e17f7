"""Typer application for bump-please."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from click.core import ParameterSource
from rich.console import Console

from bump_please import __version__
from bump_please.config.models import BumpFlags

app = typer.Typer(
    name="bump-please",
    help="Semantic version bumps, changelogs and release tags from conventional commits.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _given(ctx: typer.Context, name: str, value: bool) -> bool | None:
    """Return the flag value only if it was passed on the command line."""
    if ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE:
        return value
    return None


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"bump-please {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """bump-please: release automation for monorepos."""


@app.command()
def bump(
    ctx: typer.Context,
    path: Annotated[
        str | None,
        typer.Argument(help="Project directory (defaults to the current directory)."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run/--no-dry-run", help="Compute the release without writing."),
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option("--config-file", help="The config file to use."),
    ] = None,
    disable_git_writes: Annotated[
        bool,
        typer.Option(
            "--disable-git-writes/--no-disable-git-writes",
            help="Update manifests but skip commit, tag and push.",
        ),
    ] = False,
    github_token: Annotated[
        str | None,
        typer.Option("--github-token", help="The GitHub token to use.", show_default=False),
    ] = None,
    gh_token: Annotated[
        str | None,
        typer.Option("--gh-token", help="The GitHub token to use.", show_default=False),
    ] = None,
    git_branch: Annotated[
        str | None,
        typer.Option("--git-branch", help="The branch to push to."),
    ] = None,
    git_committer_name: Annotated[
        str | None,
        typer.Option("--git-committer-name", help="The name of the committer."),
    ] = None,
    git_committer_email: Annotated[
        str | None,
        typer.Option("--git-committer-email", help="The email of the committer."),
    ] = None,
    root_package_json: Annotated[
        Path | None,
        typer.Option("--root-package-json", help="Path to the root package.json file."),
    ] = None,
) -> None:
    """Bump the version, render release notes and push a release tag."""
    from bump_please.cli.commands.bump import run_bump

    flags = BumpFlags(
        dry_run=_given(ctx, "dry_run", dry_run),
        config_file=config_file,
        disable_git_writes=_given(ctx, "disable_git_writes", disable_git_writes),
        github_token=github_token,
        gh_token=gh_token,
        git_branch=git_branch,
        git_committer_name=git_committer_name,
        git_committer_email=git_committer_email,
        root_package_json=root_package_json,
    )
    run_bump(path, flags, console, err_console)


if __name__ == "__main__":
    app()
