"""Custom exceptions for license-auditor."""


class LicenseAuditorError(Exception):
    """Base exception for all license-auditor errors."""

    pass


class ConfigurationError(LicenseAuditorError):
    """Exception raised when configuration is invalid."""

    pass


class LicenseViolationError(LicenseAuditorError):
    """Exception form of a license policy violation.

    Hosts whose error lists expect exception objects can push this instead
    of the PolicyViolation model; the run itself never raises it.
    """

    def __init__(self, violation) -> None:
        super().__init__(violation.message)
        self.violation = violation
