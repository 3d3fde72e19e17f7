"""Core business logic for bump-please.

This module contains the fundamental building blocks:
- Commit log decoding and conventional commit classification
- Release type resolution and version computation
- Changelog rendering
- Manifest update planning
"""

from __future__ import annotations

from bump_please.core.changelog import render_changelog
from bump_please.core.commits import (
    DEFAULT_RULES,
    ClassificationRule,
    CommitRecord,
    SemanticChange,
    classify_commits,
    decode_commit_log,
)
from bump_please.core.manifest import PackageTarget, WriteInstruction, plan_manifest_updates
from bump_please.core.version import (
    BumpType,
    ResolvedRelease,
    Version,
    find_last_tag,
    resolve_release,
)

__all__ = [
    "DEFAULT_RULES",
    # Version
    "BumpType",
    # Commits
    "ClassificationRule",
    "CommitRecord",
    # Manifests
    "PackageTarget",
    "ResolvedRelease",
    "SemanticChange",
    "Version",
    "WriteInstruction",
    "classify_commits",
    "decode_commit_log",
    "find_last_tag",
    "plan_manifest_updates",
    # Changelog
    "render_changelog",
    "resolve_release",
]
