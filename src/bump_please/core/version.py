"""Release resolution.

Aggregates semantic changes into a release type and computes the next
version from the last semantic tag. Only plain ``major.minor.patch``
versions are supported; tags with pre-release or build suffixes are
ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from bump_please.exceptions import VersionError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from bump_please.core.commits import SemanticChange

SEMANTIC_TAG_PATTERN = re.compile(r"v?([0-9]+)\.([0-9]+)\.([0-9]+)")
VERSION_PATTERN = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")

DEFAULT_FALLBACK_VERSION = "1.0.0"
TAG_PREFIX = "v"


class BumpType(StrEnum):
    """Release severity, from most to least significant."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"


# Highest severity first
SEVERITY_ORDER: tuple[BumpType, ...] = (BumpType.MAJOR, BumpType.MINOR, BumpType.PATCH)


@dataclass(frozen=True, order=True)
class Version:
    """A semantic version triple."""

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise VersionError(f"Version components must be non-negative: {self}")

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, version: str) -> Version:
        """Parse a ``major.minor.patch`` string (no ``v`` prefix).

        Raises:
            VersionError: If the string is not a plain version triple
        """
        match = VERSION_PATTERN.fullmatch(version.strip())
        if not match:
            raise VersionError(f"Invalid version: {version!r} (expected major.minor.patch)")
        return cls(*(int(part) for part in match.groups()))

    @classmethod
    def from_tag(cls, tag: str) -> Version:
        """Parse a semantic tag such as ``v1.2.3`` or ``1.2.3``.

        Raises:
            VersionError: If the tag does not match the semantic tag pattern
        """
        match = SEMANTIC_TAG_PATTERN.fullmatch(tag)
        if not match:
            raise VersionError(f"Not a semantic version tag: {tag!r}")
        return cls(*(int(part) for part in match.groups()))

    def bump(self, bump_type: BumpType) -> Version:
        """Return the next version for the given bump type.

        Lower components reset to zero.
        """
        if bump_type == BumpType.MAJOR:
            return Version(self.major + 1, 0, 0)
        if bump_type == BumpType.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if bump_type == BumpType.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        raise VersionError(f"Cannot bump version with type {bump_type!r}")


@dataclass(frozen=True)
class ResolvedRelease:
    """Outcome of release resolution for one run."""

    release_type: BumpType
    next_version: str
    last_tag: str | None = None

    @property
    def next_tag(self) -> str:
        return f"{TAG_PREFIX}{self.next_version}"

    @property
    def is_first_release(self) -> bool:
        return self.last_tag is None


def is_semantic_tag(tag: str) -> bool:
    """Check whether a tag matches ``v?major.minor.patch``."""
    return SEMANTIC_TAG_PATTERN.fullmatch(tag) is not None


def find_last_tag(tags: Iterable[str]) -> str | None:
    """Find the highest semantic version tag.

    Tags that do not match the semantic tag pattern are ignored. When two
    tags carry the same version (``v1.0.0`` and ``1.0.0``), the one listed
    first wins.

    Args:
        tags: Tag names, typically as listed by ``git tag --sort=-v:refname``

    Returns:
        The last release tag, or None if no tag matches
    """
    semantic_tags = [tag.strip() for tag in tags if is_semantic_tag(tag.strip())]
    if not semantic_tags:
        return None
    return max(semantic_tags, key=Version.from_tag)


def determine_release_type(
    changes: Iterable[SemanticChange],
    severity_order: Sequence[BumpType] = SEVERITY_ORDER,
) -> BumpType:
    """Pick the highest-severity release type among the changes.

    Returns:
        The release type, or BumpType.NONE if there are no changes
    """
    present = {change.release_type for change in changes}
    for bump_type in severity_order:
        if bump_type in present:
            return bump_type
    return BumpType.NONE


def compute_next_version(
    release_type: BumpType,
    last_tag: str | None,
    fallback_version: str | None = None,
) -> str:
    """Compute the next version string.

    With a last tag, the matching component is incremented. Without one,
    the fallback version (usually the root manifest's current version) is
    adopted as-is, without any bump; ``1.0.0`` is used when it is empty.

    Args:
        release_type: Resolved release type (not NONE)
        last_tag: Last semantic tag, if any
        fallback_version: Version to adopt for a first release

    Returns:
        Next version, without the ``v`` prefix

    Raises:
        VersionError: If the fallback is not a version triple
    """
    if last_tag is None:
        return str(Version.parse(fallback_version or DEFAULT_FALLBACK_VERSION))

    return str(Version.from_tag(last_tag).bump(release_type))


def resolve_release(
    changes: Sequence[SemanticChange],
    last_tag: str | None,
    fallback_version: str | None = None,
    severity_order: Sequence[BumpType] = SEVERITY_ORDER,
) -> ResolvedRelease | None:
    """Resolve the release for a set of semantic changes.

    Returns:
        The resolved release, or None when nothing warrants a release
    """
    release_type = determine_release_type(changes, severity_order)
    if release_type == BumpType.NONE:
        return None

    return ResolvedRelease(
        release_type=release_type,
        next_version=compute_next_version(release_type, last_tag, fallback_version),
        last_tag=last_tag,
    )
