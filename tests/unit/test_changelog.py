"""Unit tests for changelog rendering."""

from __future__ import annotations

from datetime import date

from bump_please.core.changelog import (
    format_change_line,
    group_changes,
    render_changelog,
    render_release_header,
)
from bump_please.core.commits import CommitRecord, SemanticChange, classify_commits
from bump_please.core.version import BumpType, ResolvedRelease

REPO_URL = "https://github.com/acme/widgets"
RELEASE_DATE = date(2024, 3, 9)


def make_change(group: str, text: str, short: str, release_type=BumpType.PATCH) -> SemanticChange:
    return SemanticChange(
        group=group,
        release_type=release_type,
        change_text=text,
        subject=text,
        body="",
        short_hash=short,
        full_hash=f"{short}0000",
    )


class TestRenderReleaseHeader:
    """Tests for render_release_header()."""

    def test_compare_link(self):
        """With a last tag the header links to a compare view."""
        release = ResolvedRelease(BumpType.MINOR, "1.5.0", last_tag="v1.4.7")
        header = render_release_header(release, REPO_URL, RELEASE_DATE)

        assert header == (
            "## [1.5.0](https://github.com/acme/widgets/compare/v1.4.7...v1.5.0) (2024-03-09)"
        )

    def test_first_release_link(self):
        """Without a last tag the header links to the commit list."""
        release = ResolvedRelease(BumpType.MINOR, "0.5.0")
        header = render_release_header(release, REPO_URL, RELEASE_DATE)

        assert header == "## [0.5.0](https://github.com/acme/widgets/commits/v0.5.0) (2024-03-09)"

    def test_defaults_to_today(self):
        """The date defaults to the current UTC date."""
        release = ResolvedRelease(BumpType.PATCH, "1.0.1", last_tag="v1.0.0")
        header = render_release_header(release, REPO_URL)

        assert header.endswith(")")
        assert len(header.rsplit("(", 1)[1]) == len("YYYY-MM-DD)")


class TestFormatChangeLine:
    """Tests for format_change_line()."""

    def test_links_commit(self):
        """Each line links its short hash to the full commit."""
        change = make_change("Features", "feat: add x", "abc123")

        assert format_change_line(change, REPO_URL) == (
            "* feat: add x ([abc123](https://github.com/acme/widgets/commit/abc1230000))"
        )


class TestGroupChanges:
    """Tests for group_changes()."""

    def test_first_appearance_order(self):
        """Groups are ordered by first appearance, not rule order."""
        changes = [
            make_change("Fixes", "fix: a", "a1", BumpType.PATCH),
            make_change("BREAKING CHANGES", "b", "b1", BumpType.MAJOR),
            make_change("Features", "feat: c", "c1", BumpType.MINOR),
            make_change("Fixes", "fix: d", "d1", BumpType.PATCH),
        ]
        grouped = group_changes(changes)

        assert list(grouped) == ["Fixes", "BREAKING CHANGES", "Features"]
        assert [c.short_hash for c in grouped["Fixes"]] == ["a1", "d1"]


class TestRenderChangelog:
    """Tests for render_changelog()."""

    def test_full_output(self):
        """Render a complete release section."""
        release = ResolvedRelease(BumpType.MINOR, "1.5.0", last_tag="v1.4.7")
        changes = [
            make_change("Features", "feat: add x", "abc123", BumpType.MINOR),
            make_change("Fixes & improvements", "fix: y", "def456"),
            make_change("Features", "feat(api): z", "0a1b2c", BumpType.MINOR),
        ]

        result = render_changelog(release, changes, REPO_URL, release_date=RELEASE_DATE)

        assert result == (
            "## [1.5.0](https://github.com/acme/widgets/compare/v1.4.7...v1.5.0) (2024-03-09)\n"
            "\n"
            "### Features\n"
            "* feat: add x ([abc123](https://github.com/acme/widgets/commit/abc1230000))\n"
            "* feat(api): z ([0a1b2c](https://github.com/acme/widgets/commit/0a1b2c0000))\n"
            "\n"
            "### Fixes & improvements\n"
            "* fix: y ([def456](https://github.com/acme/widgets/commit/def4560000))\n"
        )

    def test_sections_follow_change_order(self):
        """Changes arriving as [patch, major, minor] render sections in that order."""
        release = ResolvedRelease(BumpType.MAJOR, "2.0.0", last_tag="v1.0.0")
        commits = [
            CommitRecord("fix: a", "", "a1", "a1full"),
            CommitRecord("chore: b", "BREAKING CHANGE: dropped b", "b1", "b1full"),
            CommitRecord("feat: c", "", "c1", "c1full"),
        ]
        result = render_changelog(
            release, classify_commits(commits), REPO_URL, release_date=RELEASE_DATE
        )

        headings = [line for line in result.splitlines() if line.startswith("### ")]
        assert headings == ["### Fixes & improvements", "### BREAKING CHANGES", "### Features"]
        assert "* dropped b ([b1](https://github.com/acme/widgets/commit/b1full))" in result

    def test_ends_with_newline(self):
        """The rendered section ends with exactly one newline."""
        release = ResolvedRelease(BumpType.PATCH, "1.0.1", last_tag="v1.0.0")
        result = render_changelog(
            release, [make_change("Fixes", "fix: a", "a1")], REPO_URL, release_date=RELEASE_DATE
        )

        assert result.endswith(")\n")
        assert not result.endswith("\n\n")
