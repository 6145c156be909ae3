"""Deterministic ordering and serialization of license information."""
from __future__ import annotations

import inspect
import logging
import re
from typing import Awaitable, Callable, Mapping, Union

from license_auditor.models.package import LicenseInfo, split_identity

logger = logging.getLogger(__name__)

SortedLicenseInformation = list[tuple[str, LicenseInfo]]

ReportContent = Union[str, bytes]

# A writer formats the sorted information, synchronously or asynchronously
OutputWriter = Callable[
    [SortedLicenseInformation], Union[ReportContent, Awaitable[ReportContent]]
]

_VERSION_PART = re.compile(r"(\d+)")


def _version_key(version: str) -> tuple[tuple[int, int, str], ...]:
    # Digit runs compare numerically so 1.10.0 sorts after 1.9.0
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in _VERSION_PART.split(version)
        if part
    )


def license_sort_key(identity: str) -> tuple:
    """Sort key for a package identity: name, then version, then identity.

    Names compare case-insensitively with a case-sensitive tie-break so the
    order is total and stable across runs.
    """
    name, version = split_identity(identity)
    return (name.lower(), name, _version_key(version), identity)


def get_sorted_license_information(
    license_information: Mapping[str, LicenseInfo],
) -> SortedLicenseInformation:
    """Order license information deterministically.

    Args:
        license_information: Map of package identity to license information.

    Returns:
        List of (identity, LicenseInfo) pairs sorted by package name and
        then version.
    """
    return [
        (identity, license_information[identity])
        for identity in sorted(license_information, key=license_sort_key)
    ]


async def write_license_information(
    writer: OutputWriter, sorted_license_information: SortedLicenseInformation
) -> ReportContent:
    """Serialize sorted license information with the configured writer.

    The writer is called exactly once. An awaitable result is awaited before
    the content is returned. Exceptions raised by the writer propagate
    unchanged.

    Args:
        writer: Callable formatting the sorted information.
        sorted_license_information: Output of get_sorted_license_information.

    Returns:
        The finished report content.
    """
    logger.debug(
        "Writing license report for %d packages", len(sorted_license_information)
    )
    content = writer(sorted_license_information)
    if inspect.isawaitable(content):
        content = await content
    return content
