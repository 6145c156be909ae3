"""Removal of ignored packages from license information."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from license_auditor.analysis.matchers import PackageMatcher
from license_auditor.models.package import LicenseInfo

logger = logging.getLogger(__name__)


def ignore_licenses(
    license_information: Mapping[str, LicenseInfo],
    ignore: Optional[PackageMatcher],
) -> dict[str, LicenseInfo]:
    """Drop every package whose identity is matched by ``ignore``.

    Ignored packages take no further part in the run: they are neither
    overridden, checked against the allow-list, nor reported.

    Args:
        license_information: Map of package identity to license information.
        ignore: Matcher selecting identities to drop, or None to keep all.

    Returns:
        A new map without the ignored packages. The input is not modified.
    """
    if ignore is None:
        return dict(license_information)

    kept: dict[str, LicenseInfo] = {}
    for identity, info in license_information.items():
        if ignore.matches(identity):
            logger.debug("Ignoring package %s", identity)
        else:
            kept[identity] = info
    return kept
