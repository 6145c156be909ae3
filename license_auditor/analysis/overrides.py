"""License override functionality for manual license corrections."""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from license_auditor.models.package import LicenseInfo

logger = logging.getLogger(__name__)


def override_licenses(
    license_information: Mapping[str, LicenseInfo],
    override: Optional[Mapping[str, LicenseInfo]],
) -> dict[str, LicenseInfo]:
    """Replace license information for overridden packages.

    Overrides are applied after ignored packages are removed and before the
    allow-list check, so violations report the overridden license. Identity
    matching is exact and case-sensitive; override entries for packages not
    present in the map are ignored.

    Args:
        license_information: Map of package identity to license information.
        override: Replacement license information by package identity.

    Returns:
        A new map with overridden entries replaced wholesale. The input is
        not modified.
    """
    result = dict(license_information)
    if not override:
        return result

    for identity, replacement in override.items():
        if identity in result:
            logger.debug(
                "Overriding license of %s: %s -> %s",
                identity,
                result[identity].license_id,
                replacement.license_id,
            )
            result[identity] = replacement
    return result
