"""Version control integration."""

from __future__ import annotations

from bump_please.vcs.git import GitRepository, RemoteInfo, parse_remote_url

__all__ = ["GitRepository", "RemoteInfo", "parse_remote_url"]
