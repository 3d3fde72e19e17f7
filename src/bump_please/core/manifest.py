"""Manifest update planning.

Validates every manifest target before anything is written, and only
then produces the ordered list of writes. Validation failures are
collected across all targets and reported together.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from bump_please.exceptions import ManifestError, ManifestValidationError
from bump_please.project.package_json import DEFAULT_FIELD_PATH, get_field, load_manifest

if TYPE_CHECKING:
    from collections.abc import Sequence

DEFAULT_MANIFEST_FILE_NAME = "package.json"


@dataclass(frozen=True)
class PackageTarget:
    """A manifest whose version field is updated on release."""

    directory: Path
    manifest_file_name: str = DEFAULT_MANIFEST_FILE_NAME
    version_field_path: tuple[str, ...] = DEFAULT_FIELD_PATH

    @classmethod
    def from_manifest_path(
        cls,
        manifest_path: Path,
        version_field_path: Sequence[str] = DEFAULT_FIELD_PATH,
    ) -> PackageTarget:
        return cls(
            directory=manifest_path.parent,
            manifest_file_name=manifest_path.name,
            version_field_path=tuple(version_field_path),
        )

    @property
    def manifest_path(self) -> Path:
        return (self.directory / self.manifest_file_name).resolve()

    @property
    def field_path_display(self) -> str:
        return ".".join(self.version_field_path)


@dataclass(frozen=True)
class WriteInstruction:
    """One planned manifest update."""

    path: Path
    field_path: tuple[str, ...]
    new_version: str


def validate_target(target: PackageTarget) -> str | None:
    """Check that a target's manifest exists and holds a version string.

    Custom field paths are held to the same standard as the default
    ``version`` field: the full path must resolve to a non-empty string.

    Returns:
        A description of the failure, or None if the target is valid
    """
    path = target.manifest_path
    if not path.is_file():
        return f"{path}: file not found"

    try:
        data = load_manifest(path)
    except ManifestError as e:
        return f"{path}: {e}"

    value = get_field(data, target.version_field_path)
    if not isinstance(value, str) or not value:
        return f"{path}: missing version field '{target.field_path_display}'"
    return None


def plan_manifest_updates(
    root: PackageTarget,
    packages: Sequence[PackageTarget],
    new_version: str,
) -> list[WriteInstruction]:
    """Validate all targets and plan the version writes.

    Args:
        root: The root manifest target
        packages: Configured package targets, in declaration order
        new_version: Version to write

    Returns:
        Write instructions, root manifest first

    Raises:
        ManifestValidationError: If any target fails validation
    """
    targets = [root, *packages]

    errors = [error for error in map(validate_target, targets) if error is not None]
    if errors:
        raise ManifestValidationError(errors)

    return [
        WriteInstruction(
            path=target.manifest_path,
            field_path=target.version_field_path,
            new_version=new_version,
        )
        for target in targets
    ]
