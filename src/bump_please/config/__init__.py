"""Configuration management for bump-please."""

from __future__ import annotations

from bump_please.config.loader import load_config, load_options, resolve_options
from bump_please.config.models import (
    BumpFlags,
    BumpOptions,
    BumpPleaseConfig,
    PackageConfig,
)
from bump_please.config.settings import EnvironmentSettings

__all__ = [
    "BumpFlags",
    "BumpOptions",
    "BumpPleaseConfig",
    "EnvironmentSettings",
    "PackageConfig",
    "load_config",
    "load_options",
    "resolve_options",
]
