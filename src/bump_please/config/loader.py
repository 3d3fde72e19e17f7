"""Configuration loading.

Options come from four layers, highest precedence first: command line
flags, the JSON config file, environment variables, built-in defaults.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from bump_please.config.models import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_ROOT_PACKAGE_JSON,
    BumpFlags,
    BumpOptions,
    BumpPleaseConfig,
)
from bump_please.config.settings import EnvironmentSettings
from bump_please.exceptions import ConfigNotFoundError, ConfigValidationError


def _first_set(*values: Any) -> Any:
    """Return the first value that is not None."""
    return next((value for value in values if value is not None), None)


def find_config_file(
    flags: BumpFlags,
    env: EnvironmentSettings,
    start_path: Path | None = None,
) -> tuple[Path, bool]:
    """Locate the config file.

    Args:
        flags: Command line flags
        env: Environment settings
        start_path: Directory relative paths are resolved against

    Returns:
        Tuple of (resolved path, whether it was explicitly requested)
    """
    base = start_path or Path.cwd()
    explicit = _first_set(flags.config_file, env.config_file)
    config_file = Path(explicit) if explicit is not None else Path(DEFAULT_CONFIG_FILE)
    return (base / config_file).resolve(), explicit is not None


def load_config_file(path: Path) -> dict[str, Any]:
    """Load the raw JSON config file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not a JSON object
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(f"Config file {path} must contain a JSON object")
    return data


def load_config(path: Path, *, required: bool = True) -> BumpPleaseConfig:
    """Load and validate the config file.

    Args:
        path: Path to the config file
        required: Whether a missing file is an error; if False, a missing
            file yields the default configuration

    Returns:
        Validated configuration

    Raises:
        ConfigNotFoundError: If a required file is missing
        ConfigValidationError: If the config is invalid
    """
    if not required and not path.exists():
        return BumpPleaseConfig()

    data = load_config_file(path)
    try:
        return BumpPleaseConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {path}:\n{e}") from e


def resolve_options(
    flags: BumpFlags,
    config: BumpPleaseConfig,
    env: EnvironmentSettings,
) -> BumpOptions:
    """Merge flags, config file and environment into run options.

    The git branch is left unset when no layer provides one; the caller
    falls back to the checked-out branch.
    """
    github_token = _first_set(
        flags.github_token,
        flags.gh_token,
        config.github_token,
        config.gh_token,
        env.github_token,
        env.gh_token,
    )
    root_package_json = _first_set(
        flags.root_package_json,
        config.root_package_json,
        env.root_package_json,
        DEFAULT_ROOT_PACKAGE_JSON,
    )

    return BumpOptions(
        dry_run=_first_set(flags.dry_run, config.dry_run, env.dry_run, False),
        disable_git_writes=_first_set(
            flags.disable_git_writes, config.disable_git_writes, env.disable_git_writes, False
        ),
        github_token=github_token,
        git_branch=_first_set(flags.git_branch, config.git_branch, env.git_branch),
        git_committer_name=_first_set(
            flags.git_committer_name, config.git_committer_name, env.git_committer_name
        ),
        git_committer_email=_first_set(
            flags.git_committer_email, config.git_committer_email, env.git_committer_email
        ),
        root_package_json=root_package_json,
        packages=config.packages,
    )


def load_options(flags: BumpFlags, start_path: Path | None = None) -> BumpOptions:
    """Load the config file and environment, and resolve run options.

    Raises:
        ConfigNotFoundError: If an explicitly requested config file is missing
        ConfigValidationError: If the config file or environment is invalid
    """
    try:
        env = EnvironmentSettings()
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid environment variables:\n{e}") from e

    config_path, explicit = find_config_file(flags, env, start_path)
    config = load_config(config_path, required=explicit)
    return resolve_options(flags, config, env)
