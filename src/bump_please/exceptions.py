"""Exception hierarchy for bump-please.

All errors raised by bump-please derive from BumpPleaseError so the
CLI can report them uniformly.
"""

from __future__ import annotations


class BumpPleaseError(Exception):
    """Base class for all bump-please errors."""


# Configuration


class ConfigError(BumpPleaseError):
    """Configuration could not be loaded or resolved."""


class ConfigNotFoundError(ConfigError):
    """An explicitly requested configuration file does not exist."""


class ConfigValidationError(ConfigError):
    """Configuration file is malformed or fails schema validation."""


# Git


class GitError(BumpPleaseError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}\n{self.stderr.strip()}"
        return message


class RemoteUrlError(GitError):
    """The origin remote URL could not be parsed into host and name."""


# Versions


class VersionError(BumpPleaseError):
    """A version string is not a valid major.minor.patch triple."""


# Manifests


class ManifestError(BumpPleaseError):
    """A manifest file could not be read or updated."""


class ManifestValidationError(ManifestError):
    """One or more manifest targets failed validation.

    Every failure is collected before this is raised, so the message
    lists all broken targets at once.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        lines = "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(f"{len(self.errors)} package(s) failed validation:\n{lines}")
