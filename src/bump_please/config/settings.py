"""Environment variable settings.

Read with pydantic-settings from unprefixed variables such as
``DRY_RUN`` and ``GITHUB_TOKEN``. Unset variables stay None so they do
not override the config file.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentSettings(BaseSettings):
    """bump-please options taken from the environment."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    dry_run: bool | None = Field(default=None, description="Dry run")
    config_file: Path | None = Field(default=None, description="Path to the config file to use")
    disable_git_writes: bool | None = Field(default=None, description="Disable git writes")
    github_token: str | None = Field(default=None, repr=False, description="GitHub token")
    gh_token: str | None = Field(default=None, repr=False, description="GitHub token")
    git_branch: str | None = Field(default=None, description="The branch to push to")
    git_committer_name: str | None = Field(default=None, description="Committer name")
    git_committer_email: str | None = Field(default=None, description="Committer email")
    root_package_json: Path | None = Field(
        default=None, description="Path to the root package.json file"
    )
