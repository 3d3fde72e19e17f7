"""package.json version manipulation.

This module provides functionality for reading and updating the
version field of JSON manifests such as package.json. The version may
live at a nested key path (e.g. ``["tool", "version"]``).

Manifests are rewritten as pretty-printed JSON (2-space indent) with a
trailing newline. Key order is preserved.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from bump_please.exceptions import ManifestError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from bump_please.core.manifest import WriteInstruction

DEFAULT_FIELD_PATH: tuple[str, ...] = ("version",)


def load_manifest(path: Path) -> dict[str, Any]:
    """Load a JSON manifest.

    Args:
        path: Path to the manifest file

    Returns:
        Parsed manifest object

    Raises:
        ManifestError: If the file is missing, unreadable or not a JSON object
    """
    if not path.is_file():
        raise ManifestError(f"Manifest not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Could not read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {path} is not a JSON object")
    return data


def dump_manifest(data: dict[str, Any]) -> str:
    """Serialize a manifest the way npm writes package.json."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def get_field(data: dict[str, Any], field_path: Sequence[str]) -> Any:
    """Get the value at a nested key path, or None if it does not resolve."""
    node: Any = data
    for key in field_path:
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def set_field(data: dict[str, Any], field_path: Sequence[str], value: Any) -> None:
    """Set the value at a nested key path in place.

    Intermediate objects must already exist.

    Raises:
        ManifestError: If an intermediate key is missing or not an object
    """
    if not field_path:
        raise ManifestError("Field path cannot be empty")

    node: Any = data
    for key in field_path[:-1]:
        node = node.get(key) if isinstance(node, dict) else None
        if not isinstance(node, dict):
            raise ManifestError(f"Field path {'.'.join(field_path)} does not resolve")
    node[field_path[-1]] = value


def get_manifest_version(
    path: Path,
    field_path: Sequence[str] = DEFAULT_FIELD_PATH,
) -> str | None:
    """Get the version from a manifest.

    Returns:
        The version string, or None if the field is absent or empty

    Raises:
        ManifestError: If the manifest cannot be loaded
    """
    value = get_field(load_manifest(path), field_path)
    if isinstance(value, str) and value:
        return value
    return None


def write_manifest_field(
    path: Path,
    field_path: Sequence[str],
    new_version: str,
) -> Path:
    """Overwrite the version field of a manifest on disk.

    Args:
        path: Path to the manifest file
        field_path: Key path of the version field
        new_version: New version string to set

    Returns:
        Path to the updated manifest

    Raises:
        ManifestError: If the manifest cannot be read, updated or written
    """
    data = load_manifest(path)
    set_field(data, field_path, new_version)

    try:
        path.write_text(dump_manifest(data), encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Could not write {path}: {e}") from e
    return path


def apply_write_instructions(instructions: Iterable[WriteInstruction]) -> list[Path]:
    """Apply planned manifest updates in order.

    Returns:
        Paths of the updated manifests
    """
    return [
        write_manifest_field(instruction.path, instruction.field_path, instruction.new_version)
        for instruction in instructions
    ]
