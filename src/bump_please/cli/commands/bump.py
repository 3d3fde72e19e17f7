"""Implementation of the 'bump' command.

The bump command computes the next version from conventional commits,
updates the package manifests, then commits, tags and pushes the
release.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from bump_please.config import load_options
from bump_please.config.models import DEFAULT_BRANCH
from bump_please.core.changelog import render_changelog
from bump_please.core.commits import classify_commits, decode_commit_log
from bump_please.core.manifest import PackageTarget, plan_manifest_updates
from bump_please.core.version import ResolvedRelease, find_last_tag, resolve_release
from bump_please.exceptions import BumpPleaseError, ManifestError, VersionError
from bump_please.project.package_json import apply_write_instructions, get_manifest_version
from bump_please.vcs import GitRepository, parse_remote_url

if TYPE_CHECKING:
    from rich.console import Console

    from bump_please.config.models import BumpFlags, BumpOptions
    from bump_please.vcs import RemoteInfo


def release_commit_message(version: str) -> str:
    return f"chore(release): {version} [skip ci]"


def run_bump(
    path: str | None,
    flags: BumpFlags,
    console: Console,
    err_console: Console,
) -> ResolvedRelease | None:
    """Run the bump command.

    Args:
        path: Optional path to project directory
        flags: Options given on the command line
        console: Console for standard output
        err_console: Console for error output

    Returns:
        The resolved release, or None if there was nothing to release
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        options = load_options(flags, project_path)
    except BumpPleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    if options.dry_run:
        console.print("[yellow]Dry run[/] - no files or git state will be changed")

    try:
        return _bump(project_path, options, console)
    except BumpPleaseError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e


def _bump(project_path: Path, options: BumpOptions, console: Console) -> ResolvedRelease | None:
    repo = GitRepository(project_path)

    remote = parse_remote_url(repo.get_origin_url())
    branch = options.git_branch or repo.get_current_branch() or DEFAULT_BRANCH
    console.print(f"Repository [cyan]{remote.public_url}[/] on branch [cyan]{branch}[/]")

    # Commits since the last semantic tag
    last_tag = find_last_tag(repo.list_tags())
    since = repo.rev_parse_tag(last_tag) if last_tag else None
    commits = decode_commit_log(repo.get_commit_log(since))
    changes = classify_commits(commits)

    if last_tag:
        console.print(f"Last release tag: [cyan]{last_tag}[/] ({len(commits)} new commits)")
    else:
        console.print(f"No release tag found ({len(commits)} commits)")

    root_manifest = (project_path / options.root_package_json).resolve()
    fallback_version = None
    if last_tag is None and root_manifest.is_file():
        try:
            fallback_version = get_manifest_version(root_manifest)
        except ManifestError:
            # Reported with every other broken target by plan_manifest_updates
            fallback_version = None

    try:
        release = resolve_release(changes, last_tag, fallback_version)
    except VersionError as e:
        raise VersionError(f"{root_manifest}: unusable version for a first release: {e}") from e
    if release is None:
        console.print("[yellow]No semantic changes - no semantic release.[/]")
        return None

    if release.is_first_release:
        console.print(
            f"First release! Using root manifest version [green]{release.next_version}[/]"
        )
    else:
        console.print(
            f"Releasing [green]{release.next_version}[/] ({release.release_type} release)"
        )

    release_notes = render_changelog(release, changes, remote.public_url)

    # Validate every manifest before touching any of them
    packages = [
        PackageTarget(
            directory=(project_path / package.path).resolve(),
            manifest_file_name=package.manifest_file_name,
            version_field_path=package.version_field_path,
        )
        for package in options.packages
    ]
    instructions = plan_manifest_updates(
        PackageTarget.from_manifest_path(root_manifest),
        packages,
        release.next_version,
    )

    if options.dry_run:
        console.print(
            Panel(
                Markdown(release_notes),
                title=f"[yellow]Dry Run Preview: {release.next_tag}[/]",
                border_style="yellow",
            )
        )
        for instruction in instructions:
            console.print(f"  • Would update [cyan]{instruction.path}[/]")
        console.print("[yellow]Dry run - no changes made.[/]")
        return release

    for updated in apply_write_instructions(instructions):
        console.print(f"  [green]✓[/] Updated version in {updated}")

    if options.disable_git_writes:
        console.print("[yellow]Skipping git writes[/]")
        return release

    _publish(repo, remote, branch, release, options, console)

    console.print(
        Panel(
            Markdown(release_notes),
            title=f"[green]Released {release.next_tag}[/]",
            border_style="green",
        )
    )
    return release


def _publish(
    repo: GitRepository,
    remote: RemoteInfo,
    branch: str,
    release: ResolvedRelease,
    options: BumpOptions,
    console: Console,
) -> None:
    """Commit, tag and push the release."""
    console.print("Running git commands...")

    repo.set_user(options.git_committer_name, options.git_committer_email)

    if options.github_token:
        repo.set_remote_url(remote.authenticated_url(options.github_token))
    else:
        console.print("[yellow]No GitHub token found, not setting remote url[/]")

    message = release_commit_message(release.next_version)
    repo.add_all()
    repo.commit(message)
    repo.create_annotated_tag(release.next_tag, message)
    repo.push_with_tags(branch)

    console.print(f"  [green]✓[/] Pushed {release.next_tag} to {branch}")
