"""Plugin options and their construction from configuration files."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field

from license_auditor.analysis.matchers import (
    AcceptAll,
    DependenciesOnly,
    GlobPatterns,
    LicensePolicy,
    LicenseSet,
    PackageFilter,
    PackageMatcher,
)
from license_auditor.constants import DEFAULT_OUTPUT_FILENAME
from license_auditor.models.config import AuditorConfig
from license_auditor.models.package import LicenseInfo
from license_auditor.output import NoticesWriter, get_writer


class PluginOptions(BaseModel):
    """Options for a license check run, immutable for the run."""

    model_config = {"extra": "forbid", "frozen": True, "arbitrary_types_allowed": True}

    filter: PackageFilter = Field(
        default_factory=AcceptAll,
        description="Decides which collected packages are reported",
    )
    allow: Optional[LicensePolicy] = Field(
        default=None,
        description="Acceptable licenses; None means no violations are reported",
    )
    ignore: Optional[PackageMatcher] = Field(
        default=None,
        description="Package identities removed before any other policy step",
    )
    override: Dict[str, LicenseInfo] = Field(
        default_factory=dict,
        description="Replacement license information by package identity",
    )
    emit_error: bool = Field(
        default=False,
        description="Route violations to the host's errors instead of warnings",
    )
    output_filename: str = Field(
        default=DEFAULT_OUTPUT_FILENAME,
        description="Artifact name of the generated report",
    )
    output_writer: Callable[..., Any] = Field(
        default_factory=NoticesWriter,
        description="Serializer called once with the sorted license information",
    )


def options_from_config(
    config: AuditorConfig, base_dir: Optional[Path] = None
) -> PluginOptions:
    """Convert a loaded configuration file into plugin options.

    Each allowed license entry may be a simple ``A OR B`` disjunction;
    ignored packages are glob patterns over ``name@version``.

    Args:
        config: Validated configuration.
        base_dir: Directory a relative template path is resolved against
            (default: the current directory).

    Returns:
        PluginOptions for a run.

    Raises:
        ConfigurationError: If the report template cannot be loaded.
    """
    allow: Optional[LicensePolicy] = None
    if config.allowed_licenses is not None:
        license_ids: set[str] = set()
        for entry in config.allowed_licenses:
            license_ids.update(LicenseSet.from_expression(entry).license_ids)
        allow = LicenseSet(license_ids)

    ignore: Optional[PackageMatcher] = None
    if config.ignored_packages:
        ignore = GlobPatterns(config.ignored_packages)

    override = {
        identity: entry.to_license_info()
        for identity, entry in (config.overrides or {}).items()
    }

    template_path: Optional[Path] = None
    if config.template:
        template_path = Path(config.template)
        if base_dir is not None and not template_path.is_absolute():
            template_path = base_dir / template_path

    return PluginOptions(
        filter=DependenciesOnly() if config.dependencies_only else AcceptAll(),
        allow=allow,
        ignore=ignore,
        override=override,
        emit_error=config.emit_error,
        output_filename=config.output_filename,
        output_writer=get_writer(config.output_format, template_path),
    )
