"""Collection of license information for a build's file dependencies."""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Iterable, Optional, Union

from license_auditor.analysis.matchers import AcceptAll, PackageFilter
from license_auditor.constants import MAX_CONCURRENT_READS, UNKNOWN_LICENSE
from license_auditor.models.package import LicenseInfo, ResolvedPackage
from license_auditor.resolvers.license import LicenseExtractor
from license_auditor.resolvers.package import PackageResolver

logger = logging.getLogger(__name__)

FilePath = Union[str, os.PathLike]


def group_packages(
    paths: Iterable[FilePath], resolver: PackageResolver
) -> dict[str, list[ResolvedPackage]]:
    """Resolve paths and group the resulting packages by identity.

    The same name@version may be installed in several directories; every
    installation is kept as a candidate, ordered by directory so the
    result does not depend on the order of ``paths``.

    Args:
        paths: File paths from the build's dependency set.
        resolver: Resolver used for this run.

    Returns:
        Map of package identity to its installations, sorted by directory.
    """
    by_directory: dict[str, dict[str, ResolvedPackage]] = {}
    unresolved = 0
    for path in paths:
        resolved = resolver.resolve(path)
        if resolved is None:
            unresolved += 1
            continue
        installs = by_directory.setdefault(resolved.ref.identity, {})
        installs.setdefault(str(resolved.ref.directory), resolved)

    if unresolved:
        logger.debug("Skipped %d paths outside any package", unresolved)
    return {
        identity: [installs[directory] for directory in sorted(installs)]
        for identity, installs in by_directory.items()
    }


def information_rank(info: LicenseInfo) -> tuple[bool, bool, bool, bool]:
    """Rank a record by how much license information it carries.

    A recognized license identifier outweighs everything else, then
    license text, author and repository.
    """
    return (
        not info.is_unknown,
        bool(info.license_text),
        bool(info.author),
        bool(info.repository),
    )


async def collect_license_information(
    paths: Iterable[FilePath],
    package_filter: Optional[PackageFilter] = None,
    *,
    resolver: Optional[PackageResolver] = None,
    extractor: Optional[LicenseExtractor] = None,
    max_concurrency: int = MAX_CONCURRENT_READS,
) -> dict[str, LicenseInfo]:
    """Collect license information for every package owning one of ``paths``.

    Each installation of a package is extracted once. Extraction runs
    concurrently, bounded by ``max_concurrency``, and each package's record
    is complete before it is added to the result. When an identity is
    installed more than once, the record with the most license information
    is kept; ties go to the smallest directory.

    Args:
        paths: File paths the build depended on, in any order.
        package_filter: Decides which packages are included (default: all).
        resolver: Package resolver; a fresh one is created if omitted.
        extractor: License extractor; a default one is created if omitted.
        max_concurrency: Maximum number of packages extracted at once.

    Returns:
        Map of package identity (name@version) to license information.
    """
    resolver = resolver or PackageResolver()
    extractor = extractor or LicenseExtractor()
    package_filter = package_filter or AcceptAll()

    packages = group_packages(paths, resolver)
    semaphore = asyncio.Semaphore(max_concurrency)

    async def extract_one(resolved: ResolvedPackage) -> LicenseInfo:
        async with semaphore:
            return await extractor.extract(resolved)

    candidates = [
        resolved for identity in sorted(packages) for resolved in packages[identity]
    ]
    results = await asyncio.gather(
        *(extract_one(resolved) for resolved in candidates),
        return_exceptions=True,
    )

    chosen: dict[str, tuple[ResolvedPackage, LicenseInfo]] = {}
    for resolved, item in zip(candidates, results):
        identity = resolved.ref.identity
        if isinstance(item, LicenseInfo):
            info = item
        elif isinstance(item, OSError):
            # Filesystem error - record the package without license data
            logger.warning("Cannot extract license for %s: %s", identity, item)
            info = LicenseInfo(
                license_id=UNKNOWN_LICENSE, source_path=resolved.ref.directory
            )
        else:
            # Unexpected error - re-raise to surface bugs
            raise item

        # Candidates arrive in directory order, so only a strictly richer
        # record replaces the current one
        current = chosen.get(identity)
        if current is None or information_rank(info) > information_rank(current[1]):
            if current is not None:
                logger.debug(
                    "Using %s for %s over %s",
                    resolved.ref.directory,
                    identity,
                    current[0].ref.directory,
                )
            chosen[identity] = (resolved, info)

    license_information: dict[str, LicenseInfo] = {}
    for identity in sorted(chosen):
        resolved, info = chosen[identity]
        if package_filter.includes(resolved.ref, info):
            license_information[identity] = info
        else:
            logger.debug("Package %s excluded by filter", identity)

    logger.debug("Collected license information for %d packages", len(license_information))
    return license_information
