"""Changelog rendering.

Renders a markdown release section from the semantic changes of a
release. Links point at the public repository URL derived from the
origin remote.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from bump_please.core.commits import SemanticChange
    from bump_please.core.version import ResolvedRelease


def render_release_header(
    release: ResolvedRelease,
    repo_url: str,
    release_date: date | None = None,
) -> str:
    """Render the ``## [version](link) (date)`` heading.

    The link compares the last tag with the new tag, or lists the commits
    up to the new tag for a first release.
    """
    if release_date is None:
        release_date = datetime.now(UTC).date()

    if release.last_tag:
        link = f"{repo_url}/compare/{release.last_tag}...{release.next_tag}"
    else:
        link = f"{repo_url}/commits/{release.next_tag}"

    return f"## [{release.next_version}]({link}) ({release_date.isoformat()})"


def format_change_line(change: SemanticChange, repo_url: str) -> str:
    """Format one change as a markdown bullet linking to its commit."""
    commit_link = f"{repo_url}/commit/{change.full_hash}"
    return f"* {change.change_text} ([{change.short_hash}]({commit_link}))"


def group_changes(changes: Iterable[SemanticChange]) -> dict[str, list[SemanticChange]]:
    """Group changes by changelog group.

    Groups are ordered by their first appearance in ``changes``, and each
    group keeps the order its changes arrived in.
    """
    grouped: dict[str, list[SemanticChange]] = {}
    for change in changes:
        grouped.setdefault(change.group, []).append(change)
    return grouped


def render_changelog(
    release: ResolvedRelease,
    changes: Iterable[SemanticChange],
    repo_url: str,
    *,
    release_date: date | None = None,
) -> str:
    """Render the release notes for a resolved release.

    Args:
        release: The resolved release
        changes: Semantic changes included in the release
        repo_url: Public repository URL (e.g. ``https://github.com/owner/repo``)
        release_date: Date shown in the heading (defaults to today, UTC)

    Returns:
        Markdown release section ending with a newline
    """
    sections = []
    for group, entries in group_changes(changes).items():
        lines = [format_change_line(change, repo_url) for change in entries]
        sections.append(f"\n### {group}\n" + "\n".join(lines))

    header = render_release_header(release, repo_url, release_date)
    return header + "\n" + "\n".join(sections) + "\n"
