"""Configuration Pydantic models for license-auditor."""
from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from license_auditor.constants import DEFAULT_OUTPUT_FILENAME
from license_auditor.models.package import LicenseInfo


class LicenseOverride(BaseModel):
    """Manual license override for a package.

    Used when automatic detection fails or needs correction. The override
    replaces the package's recorded license information wholesale.
    """

    model_config = {"extra": "forbid"}

    license: str = Field(description="SPDX license identifier to use")
    reason: Optional[str] = Field(default=None, description="Reason for the override")
    author: Optional[str] = Field(default=None, description="Package author")
    repository: Optional[str] = Field(default=None, description="Repository URL")
    license_text: Optional[str] = Field(
        default=None, description="License text to publish for the package"
    )

    def to_license_info(self) -> LicenseInfo:
        """Build the replacement license information for this override."""
        return LicenseInfo(
            license_id=self.license,
            license_text=self.license_text,
            author=self.author,
            repository=self.repository,
        )


class AuditorConfig(BaseModel):
    """Configuration for license-auditor.

    Mirrors the options a build host passes programmatically, in a form
    that can be loaded from a YAML file.
    """

    model_config = {"extra": "forbid"}

    allowed_licenses: Optional[List[str]] = Field(
        default=None,
        description="Allowed license identifiers. Entries may be simple "
        "'A OR B' disjunctions. Unset means no violations are reported.",
    )
    ignored_packages: Optional[List[str]] = Field(
        default=None,
        description="Package identity glob patterns (name@version) to skip.",
    )
    overrides: Optional[Dict[str, LicenseOverride]] = Field(
        default=None,
        description="Manual license overrides by package identity (name@version).",
    )
    emit_error: bool = Field(
        default=False,
        description="Report violations as errors instead of warnings.",
    )
    output_filename: str = Field(
        default=DEFAULT_OUTPUT_FILENAME,
        description="Name of the generated report artifact.",
    )
    output_format: Literal["text", "json", "markdown"] = Field(
        default="text",
        description="Built-in report format.",
    )
    template: Optional[str] = Field(
        default=None,
        description="Path to a Jinja2 report template; takes precedence over output_format.",
    )
    dependencies_only: bool = Field(
        default=False,
        description="Only report packages installed under a node_modules directory.",
    )
