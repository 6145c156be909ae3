"""License policy logic for license-auditor."""
from license_auditor.analysis.filtering import ignore_licenses
from license_auditor.analysis.matchers import (
    AcceptAll,
    DependenciesOnly,
    GlobPatterns,
    IdentityPredicate,
    IdentitySet,
    LicensePolicy,
    LicensePredicate,
    LicenseSet,
    PackageFilter,
    PackageMatcher,
    PackagePredicate,
)
from license_auditor.analysis.overrides import override_licenses
from license_auditor.analysis.policy import get_license_violations

__all__ = [
    "AcceptAll",
    "DependenciesOnly",
    "GlobPatterns",
    "IdentityPredicate",
    "IdentitySet",
    "LicensePolicy",
    "LicensePredicate",
    "LicenseSet",
    "PackageFilter",
    "PackageMatcher",
    "PackagePredicate",
    "get_license_violations",
    "ignore_licenses",
    "override_licenses",
]
