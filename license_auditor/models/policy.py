"""Policy-related Pydantic models for license-auditor."""

from __future__ import annotations

from pydantic import BaseModel, Field

from license_auditor.exceptions import LicenseViolationError


class PolicyViolation(BaseModel):
    """A license policy violation for a package.

    Represents a package whose final license identifier is not permitted
    by the configured allow-list. Violations are reported to the build
    host as errors or warnings; they never abort the run.
    """

    model_config = {"extra": "forbid", "frozen": True}

    identity: str = Field(description="Package identity (name@version)")
    license_id: str = Field(description="The license identifier that was rejected")
    reason: str = Field(description="Why this is a violation")

    @property
    def message(self) -> str:
        """Human-readable message for the host's diagnostics stream."""
        return f"License violation in {self.identity}: {self.reason}"

    def __str__(self) -> str:
        return self.message

    def as_exception(self) -> LicenseViolationError:
        """Return this violation as an exception carrying the same message."""
        return LicenseViolationError(self)
