"""Package and license information Pydantic models."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from license_auditor.constants import UNKNOWN_LICENSE


class PackageRef(BaseModel):
    """Identity of a resolved package.

    Two references are equal when name and version match, regardless of the
    directory they were resolved from.
    """

    model_config = {"extra": "forbid", "frozen": True}

    name: str = Field(description="Package name, including any @scope/ prefix")
    version: str = Field(description="Declared package version")
    directory: Path = Field(description="Absolute path of the package directory")

    @property
    def identity(self) -> str:
        """Return the package identity key used in license information maps."""
        return f"{self.name}@{self.version}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageRef):
            return NotImplemented
        return (self.name, self.version) == (other.name, other.version)

    def __hash__(self) -> int:
        return hash((self.name, self.version))


class PackageMetadata(BaseModel):
    """Fields read from a package's metadata file."""

    model_config = {"extra": "forbid", "frozen": True}

    name: str
    version: str
    license: Any = Field(
        default=None,
        description="Raw declared license value (string, object or list)",
    )
    licenses: Any = Field(
        default=None,
        description="Raw legacy 'licenses' value",
    )
    author: Optional[str] = None
    repository: Optional[str] = None
    readable: bool = Field(
        default=True,
        description="False when the metadata file could not be read or parsed",
    )


class ResolvedPackage(BaseModel):
    """A package reference together with its parsed metadata."""

    model_config = {"extra": "forbid", "frozen": True}

    ref: PackageRef
    metadata: PackageMetadata


class LicenseInfo(BaseModel):
    """License information recorded for a single package."""

    model_config = {"extra": "forbid", "frozen": True}

    license_id: str = Field(
        default=UNKNOWN_LICENSE,
        description="Normalized license identifier or UNKNOWN",
    )
    license_text: Optional[str] = Field(
        default=None, description="Raw license text, if a license file was found"
    )
    author: Optional[str] = Field(default=None, description="Package author")
    repository: Optional[str] = Field(default=None, description="Repository URL")
    source_path: Optional[Path] = Field(
        default=None, description="Package directory used for resolution"
    )

    @property
    def is_unknown(self) -> bool:
        """Check if no license identifier could be determined.

        Returns:
            True if license_id is the UNKNOWN sentinel, False otherwise.
        """
        return self.license_id == UNKNOWN_LICENSE


def split_identity(identity: str) -> tuple[str, str]:
    """Split a ``name@version`` identity into its name and version.

    The leading ``@`` of a scoped package name is not treated as a separator.
    An identity without a version yields an empty version string.
    """
    name, sep, version = identity.rpartition("@")
    if not sep or not name:
        return identity, ""
    return name, version
