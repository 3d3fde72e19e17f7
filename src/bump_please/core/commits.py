"""Conventional commit decoding and classification.

This module turns the raw text of a ``git log`` export into commit
records, then matches each commit against a table of classification
rules. A commit is checked against every rule, so one commit can land
in several changelog groups (e.g. a ``feat:`` whose body also carries a
``BREAKING CHANGE:`` footer).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bump_please.core.version import BumpType

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

# Separators used by LOG_FORMAT. A subject or body containing either
# sequence shifts the fields of that record; this is a known limitation.
RECORD_SEPARATOR = "+++"
FIELD_SEPARATOR = "__"

# Format string for `git log --format=...` matching decode_commit_log().
LOG_FORMAT = f"{RECORD_SEPARATOR}%s{FIELD_SEPARATOR}%b{FIELD_SEPARATOR}%h{FIELD_SEPARATOR}%H"

# Conventional commit scope: lowercase letters, digits, hyphen, underscore
SCOPE_PATTERN = r"(\([a-z0-9\-_]+\))?"


@dataclass(frozen=True)
class CommitRecord:
    """A single commit decoded from the log export."""

    subject: str
    body: str
    short_hash: str
    full_hash: str


@dataclass(frozen=True)
class ClassificationRule:
    """Maps matching commits to a changelog group and release type.

    A rule matches either on the conventional-commit type at the start
    of the subject (``subject_prefixes``) or on a ``<keyword>: <text>``
    footer in the body (``body_keywords``). Exactly one of the two must
    be given.
    """

    group: str
    release_type: BumpType
    subject_prefixes: frozenset[str] = field(default_factory=frozenset)
    body_keywords: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if bool(self.subject_prefixes) == bool(self.body_keywords):
            raise ValueError(
                f"Rule {self.group!r} must define exactly one of "
                "subject_prefixes or body_keywords"
            )
        if self.release_type == BumpType.NONE:
            raise ValueError(f"Rule {self.group!r} cannot have release type 'none'")

    @property
    def pattern(self) -> re.Pattern[str]:
        """Compiled matcher for this rule."""
        if self.subject_prefixes:
            alternatives = "|".join(re.escape(p) for p in sorted(self.subject_prefixes))
            return re.compile(rf"({alternatives}){SCOPE_PATTERN}:\s.+")
        alternatives = "|".join(re.escape(k) for k in self.body_keywords)
        return re.compile(rf"({alternatives}):\s(.+)")

    def match(self, commit: CommitRecord) -> str | None:
        """Return the change text if the commit satisfies this rule."""
        if self.subject_prefixes:
            subject_match = self.pattern.fullmatch(commit.subject)
            return subject_match.group(0) if subject_match else None

        body_match = self.pattern.search(commit.body)
        return body_match.group(2) if body_match else None


@dataclass(frozen=True)
class SemanticChange:
    """One (commit, matched rule) pairing."""

    group: str
    release_type: BumpType
    change_text: str
    subject: str
    body: str
    short_hash: str
    full_hash: str


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        group="Features",
        release_type=BumpType.MINOR,
        subject_prefixes=frozenset({"feat"}),
    ),
    ClassificationRule(
        group="Fixes & improvements",
        release_type=BumpType.PATCH,
        subject_prefixes=frozenset({"fix", "perf", "refactor", "docs"}),
    ),
    ClassificationRule(
        group="BREAKING CHANGES",
        release_type=BumpType.MAJOR,
        body_keywords=("BREAKING CHANGE", "BREAKING CHANGES"),
    ),
)


def decode_commit_log(raw_log: str) -> list[CommitRecord]:
    """Decode a log exported with LOG_FORMAT into commit records.

    Args:
        raw_log: Output of ``git log --format=+++%s__%b__%h__%H``

    Returns:
        Commit records in the order they appear in the log
    """
    records = []
    for chunk in raw_log.split(RECORD_SEPARATOR):
        if not chunk.strip():
            continue

        fields = [part.strip() for part in chunk.split(FIELD_SEPARATOR)]
        # Pad short records so a truncated entry still decodes
        fields.extend([""] * (4 - len(fields)))
        subject, body, short_hash, full_hash = fields[:4]
        records.append(
            CommitRecord(
                subject=subject,
                body=body,
                short_hash=short_hash,
                full_hash=full_hash,
            )
        )
    return records


def classify_commit(
    commit: CommitRecord,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
) -> list[SemanticChange]:
    """Classify a commit against every rule, in rule-table order."""
    changes = []
    for rule in rules:
        change_text = rule.match(commit)
        if change_text is None:
            continue
        changes.append(
            SemanticChange(
                group=rule.group,
                release_type=rule.release_type,
                change_text=change_text,
                subject=commit.subject,
                body=commit.body,
                short_hash=commit.short_hash,
                full_hash=commit.full_hash,
            )
        )
    return changes


def classify_commits(
    commits: Iterable[CommitRecord],
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
) -> list[SemanticChange]:
    """Classify commits into a flat list of semantic changes.

    Commit order is preserved, and within a commit the rule-table order.

    Args:
        commits: Decoded commit records
        rules: Classification rule table

    Returns:
        All semantic changes found, possibly several per commit
    """
    changes: list[SemanticChange] = []
    for commit in commits:
        changes.extend(classify_commit(commit, rules))
    return changes
