"""License policy checking against the allow-list."""
from __future__ import annotations

from typing import Mapping, Optional

from license_auditor.analysis.matchers import LicensePolicy
from license_auditor.models.package import LicenseInfo
from license_auditor.models.policy import PolicyViolation
from license_auditor.report import get_sorted_license_information


def get_license_violations(
    license_information: Mapping[str, LicenseInfo],
    allow: Optional[LicensePolicy],
) -> list[PolicyViolation]:
    """Check packages against the allowed licenses policy.

    Args:
        license_information: Map of package identity to license information.
        allow: Policy deciding acceptable license identifiers.

    Returns:
        Violations for packages whose license is not permitted, in report
        order. Returns an empty list if no policy is configured.
    """
    if allow is None:
        return []

    violations: list[PolicyViolation] = []
    for identity, info in get_sorted_license_information(license_information):
        if allow.permits(info.license_id):
            continue
        if info.is_unknown:
            reason = "Unknown license"
        else:
            reason = f"License '{info.license_id}' not in allowed list"
        violations.append(
            PolicyViolation(
                identity=identity,
                license_id=info.license_id,
                reason=reason,
            )
        )
    return violations
