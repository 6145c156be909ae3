"""Tests for PolicyViolation Pydantic model."""
import pytest
from pydantic import ValidationError

from license_auditor.exceptions import LicenseAuditorError
from license_auditor.models.policy import PolicyViolation


class TestPolicyViolation:
    """Tests for PolicyViolation model."""

    def test_valid_violation(self) -> None:
        """Test creating a violation with a rejected license."""
        violation = PolicyViolation(
            identity="pkg-b@2.0.0",
            license_id="GPL-3.0",
            reason="License 'GPL-3.0' not in allowed list",
        )

        assert violation.identity == "pkg-b@2.0.0"
        assert violation.license_id == "GPL-3.0"

    def test_message_names_package_and_reason(self) -> None:
        """Test the host-facing message."""
        violation = PolicyViolation(
            identity="pkg-b@2.0.0", license_id="UNKNOWN", reason="Unknown license"
        )

        assert violation.message == "License violation in pkg-b@2.0.0: Unknown license"
        assert str(violation) == violation.message

    def test_requires_license_id(self) -> None:
        """Test that license_id is required."""
        with pytest.raises(ValidationError) as exc_info:
            PolicyViolation(identity="pkg@1.0.0", reason="x")  # type: ignore[call-arg]
        errors = exc_info.value.errors()
        assert any(e["loc"] == ("license_id",) for e in errors)

    def test_extra_fields_forbidden(self) -> None:
        """Test that extra fields are not allowed."""
        with pytest.raises(ValidationError):
            PolicyViolation(
                identity="pkg@1.0.0",
                license_id="MIT",
                reason="x",
                severity="high",  # type: ignore[call-arg]
            )

    def test_equal_violations_compare_equal(self) -> None:
        """Test value equality, used when comparing violation lists."""
        first = PolicyViolation(identity="a@1", license_id="MIT", reason="r")
        second = PolicyViolation(identity="a@1", license_id="MIT", reason="r")
        assert first == second

    def test_as_exception(self) -> None:
        """Test that the exception form carries the message and violation."""
        violation = PolicyViolation(
            identity="pkg-b@2.0.0",
            license_id="GPL-3.0",
            reason="License 'GPL-3.0' not in allowed list",
        )

        error = violation.as_exception()

        assert isinstance(error, LicenseAuditorError)
        assert str(error) == violation.message
        assert error.violation is violation
