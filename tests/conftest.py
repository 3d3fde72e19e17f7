"""Shared test fixtures."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from bump_please.core.commits import CommitRecord

if TYPE_CHECKING:
    from pathlib import Path

ENV_VARS = [
    "DRY_RUN",
    "CONFIG_FILE",
    "DISABLE_GIT_WRITES",
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "GIT_BRANCH",
    "GIT_COMMITTER_NAME",
    "GIT_COMMITTER_EMAIL",
    "ROOT_PACKAGE_JSON",
]


def encode_log(*commits: tuple[str, str, str, str]) -> str:
    """Build log text the way ``git log --format=+++%s__%b__%h__%H`` prints it."""
    return "".join(
        f"+++{subject}__{body}__{short}__{full}\n" for subject, body, short, full in commits
    )


def write_json(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment out of option resolution."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def feat_commit() -> CommitRecord:
    return CommitRecord(
        subject="feat(auth): add user authentication",
        body="",
        short_hash="feat123",
        full_hash="feat1234567890",
    )


@pytest.fixture
def fix_commit() -> CommitRecord:
    return CommitRecord(
        subject="fix(core): handle empty input",
        body="",
        short_hash="fix4567",
        full_hash="fix45678901234",
    )


@pytest.fixture
def breaking_commit() -> CommitRecord:
    return CommitRecord(
        subject="refactor: drop legacy config loader",
        body="BREAKING CHANGE: the legacy config format is no longer read",
        short_hash="brk8901",
        full_hash="brk89012345678",
    )


@pytest.fixture
def chore_commit() -> CommitRecord:
    return CommitRecord(
        subject="chore: bump dev dependencies",
        body="",
        short_hash="chr2345",
        full_hash="chr23456789012",
    )


@pytest.fixture
def sample_log() -> str:
    return encode_log(
        ("feat: add x", "body text", "abc123", "abcdef0123456789"),
        ("fix(api): handle null response", "", "def456", "def4560123456789"),
        ("docs: update readme", "", "aaa111", "aaa1110123456789"),
        ("chore: cleanup", "", "bbb222", "bbb2220123456789"),
    )


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project with a root package.json at version 1.0.0."""
    write_json(tmp_path / "package.json", {"name": "root", "version": "1.0.0", "private": True})
    return tmp_path


@pytest.fixture
def monorepo_dir(project_dir: Path) -> Path:
    """A project with two packages and a config file listing them."""
    write_json(
        project_dir / "packages" / "core" / "package.json",
        {"name": "@acme/core", "version": "1.0.0"},
    )
    write_json(
        project_dir / "packages" / "cli" / "package.json",
        {"name": "@acme/cli", "version": "1.0.0", "bin": {"acme": "bin/acme.js"}},
    )
    write_json(
        project_dir / "bump-please-config.json",
        {"packages": [{"path": "packages/core"}, {"path": "packages/cli"}]},
    )
    return project_dir
