"""Configuration models for bump-please.

The config file uses camelCase keys (``dryRun``, ``gitBranch``, ...);
the models expose snake_case attributes and accept either form.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_CONFIG_FILE = "bump-please-config.json"
DEFAULT_ROOT_PACKAGE_JSON = Path("package.json")
DEFAULT_BRANCH = "main"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class PackageConfig(_CamelModel):
    """A dependent package whose manifest version is kept in sync."""

    path: Path = Field(description="Directory containing the package manifest")
    manifest_file_name: str = Field(
        default="package.json",
        min_length=1,
        description="Manifest file name inside the package directory",
    )
    version_field_path: tuple[str, ...] = Field(
        default=("version",),
        description="Key path of the version field inside the manifest",
    )

    @field_validator("version_field_path", mode="before")
    @classmethod
    def _split_dotted_path(cls, value: object) -> object:
        if isinstance(value, str):
            return tuple(value.split("."))
        return value

    @field_validator("version_field_path")
    @classmethod
    def _check_field_path(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value or any(not key for key in value):
            raise ValueError("versionFieldPath must be a non-empty key path")
        return value


class BumpPleaseConfig(_CamelModel):
    """Contents of the bump-please config file.

    Every option is optional; unset options fall through to environment
    variables and then to built-in defaults.
    """

    dry_run: bool | None = None
    disable_git_writes: bool | None = None
    github_token: str | None = None
    gh_token: str | None = None
    git_branch: str | None = None
    git_committer_name: str | None = None
    git_committer_email: str | None = None
    root_package_json: Path | None = None
    packages: list[PackageConfig] = Field(default_factory=list)


class BumpFlags(BaseModel):
    """Options given explicitly on the command line.

    None means "not given".
    """

    model_config = ConfigDict(frozen=True)

    dry_run: bool | None = None
    config_file: Path | None = None
    disable_git_writes: bool | None = None
    github_token: str | None = None
    gh_token: str | None = None
    git_branch: str | None = None
    git_committer_name: str | None = None
    git_committer_email: str | None = None
    root_package_json: Path | None = None


class BumpOptions(BaseModel):
    """Fully resolved options for a bump run."""

    model_config = ConfigDict(frozen=True)

    dry_run: bool = False
    disable_git_writes: bool = False
    github_token: str | None = Field(default=None, repr=False)
    git_branch: str | None = None
    git_committer_name: str | None = None
    git_committer_email: str | None = None
    root_package_json: Path = DEFAULT_ROOT_PACKAGE_JSON
    packages: list[PackageConfig] = Field(default_factory=list)

