"""Package and license resolvers."""

from license_auditor.resolvers.license import (
    LicenseExtractor,
    find_license_file,
    normalize_declared_license,
)
from license_auditor.resolvers.package import PackageResolver, read_package_metadata

__all__ = [
    "LicenseExtractor",
    "PackageResolver",
    "find_license_file",
    "normalize_declared_license",
    "read_package_metadata",
]
