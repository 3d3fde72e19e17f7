"""bump-please: semantic releases for JSON-manifest monorepos.

Computes the next version from conventional commits, renders a
changelog, updates package manifests and pushes a release tag.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bump-please")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["__version__"]
