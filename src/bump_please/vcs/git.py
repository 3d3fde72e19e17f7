"""Git operations via subprocess.

GitRepository wraps the ``git`` executable. Every command runs to
completion before the next one starts, and any failure is raised as a
GitError; nothing is retried.
"""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from bump_please.core.commits import LOG_FORMAT
from bump_please.exceptions import GitError, RemoteUrlError

REMOTE_URL_PATTERN = re.compile(r".+(@|//)([^/]+)/(.+)$")
CREDENTIALS_PATTERN = re.compile(r"//[^@/]+@")


@dataclass(frozen=True)
class RemoteInfo:
    """Host and repository name parsed from the origin URL."""

    host: str
    name: str

    @property
    def public_url(self) -> str:
        return f"https://{self.host}/{self.name}"

    def authenticated_url(self, token: str) -> str:
        """HTTPS remote URL embedding an access token."""
        return f"https://{token}@{self.host}/{self.name}.git"


def parse_remote_url(url: str) -> RemoteInfo:
    """Parse an origin URL into host and repository name.

    Handles both HTTPS (``https://github.com/owner/repo.git``) and
    SCP-style SSH (``git@github.com:owner/repo.git``) remotes.

    Raises:
        RemoteUrlError: If the URL does not look like a git remote
    """
    normalized = url.strip().replace(":", "/", 1).removesuffix(".git")
    match = REMOTE_URL_PATTERN.match(normalized)
    if not match:
        raise RemoteUrlError(f"Unable to parse origin url: {redact_url(url)}")
    return RemoteInfo(host=match.group(2), name=match.group(3))


def redact_url(url: str) -> str:
    """Hide credentials embedded in a URL."""
    return CREDENTIALS_PATTERN.sub("//***@", url)


class GitRepository:
    """A git working tree."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = (path or Path.cwd()).resolve()

    def _run(self, *args: str) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            command = " ".join(redact_url(arg) for arg in args)
            raise GitError(
                f"git {command} failed with exit code {e.returncode}",
                stderr=redact_url(e.stderr) if e.stderr else e.stderr,
            ) from e
        return result.stdout

    # Queries

    def get_origin_url(self) -> str:
        """Get the origin remote URL.

        Raises:
            GitError: If no origin is configured
        """
        try:
            url = self._run("config", "--get", "remote.origin.url").strip()
        except GitError as e:
            raise GitError(
                "No origin url found, are you in a git repository?", stderr=e.stderr
            ) from e
        if not url:
            raise GitError("No origin url found, are you in a git repository?")
        return url

    def get_current_branch(self) -> str | None:
        """Get the checked-out branch, or None when detached or unavailable."""
        try:
            branch = self._run("branch", "--show-current").strip()
        except GitError:
            return None
        return branch or None

    def list_tags(self) -> list[str]:
        """List tags sorted by descending version."""
        output = self._run("tag", "-l", "--sort=-v:refname")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def rev_parse_tag(self, tag: str) -> str:
        """Get the commit hash a tag points to."""
        return self._run("rev-list", "-1", tag).strip()

    def get_commit_log(self, since: str | None = None) -> str:
        """Export the commit log in the LOG_FORMAT encoding.

        Args:
            since: Commit to start after; full history if None

        Returns:
            Raw log text for decode_commit_log()
        """
        commit_range = f"{since}..HEAD" if since else "HEAD"
        try:
            return self._run("log", f"--format={LOG_FORMAT}", commit_range)
        except GitError as e:
            raise GitError(
                "Error getting commits, are you in a working tree?", stderr=e.stderr
            ) from e

    # Mutations

    def set_user(self, name: str | None = None, email: str | None = None) -> None:
        """Set the local committer identity."""
        if name:
            self._run("config", "user.name", name)
        if email:
            self._run("config", "user.email", email)

    def set_remote_url(self, url: str, remote: str = "origin") -> None:
        self._run("remote", "set-url", remote, url)

    def add_all(self) -> None:
        self._run("add", "-A", ".")

    def commit(self, message: str) -> None:
        self._run("commit", "-am", message)

    def create_annotated_tag(self, tag: str, message: str, ref: str = "HEAD") -> None:
        self._run("tag", "-a", tag, ref, "-m", message)

    def push_with_tags(self, branch: str, remote: str = "origin") -> None:
        """Push HEAD to the given branch along with annotated tags."""
        self._run("push", "--follow-tags", remote, f"HEAD:refs/heads/{branch}")
