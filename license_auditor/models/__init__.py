"""Pydantic data models for license-auditor."""

from license_auditor.models.config import AuditorConfig, LicenseOverride
from license_auditor.models.package import (
    LicenseInfo,
    PackageMetadata,
    PackageRef,
    ResolvedPackage,
    split_identity,
)
from license_auditor.models.policy import PolicyViolation

__all__ = [
    "AuditorConfig",
    "LicenseInfo",
    "LicenseOverride",
    "PackageMetadata",
    "PackageRef",
    "PolicyViolation",
    "ResolvedPackage",
    "split_identity",
]
