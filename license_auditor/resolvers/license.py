"""License extraction from package metadata and license files."""
from __future__ import annotations

import asyncio
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from license_expression import Licensing, get_spdx_licensing

from license_auditor.constants import LICENSE_FILE_NAMES, UNKNOWN_LICENSE
from license_auditor.models.package import LicenseInfo, ResolvedPackage

logger = logging.getLogger(__name__)

# Declared values that mean "no license information"
PLACEHOLDER_VALUES = frozenset({"", "UNKNOWN", "NONE"})

# npm convention pointing at a custom license file inside the package
SEE_LICENSE_IN = re.compile(r"^SEE LICEN[CS]E IN\s+(.+)$", re.IGNORECASE)

# Canonical casing for the most common identifiers
LICENSE_ALIASES: dict[str, str] = {
    "mit": "MIT",
    "isc": "ISC",
    "apache-2.0": "Apache-2.0",
    "apache 2.0": "Apache-2.0",
    "apache2": "Apache-2.0",
    "bsd-2-clause": "BSD-2-Clause",
    "bsd-3-clause": "BSD-3-Clause",
    "0bsd": "0BSD",
    "mpl-2.0": "MPL-2.0",
    "cc0-1.0": "CC0-1.0",
    "cc-by-4.0": "CC-BY-4.0",
    "unlicense": "Unlicense",
    "wtfpl": "WTFPL",
    "zlib": "Zlib",
    "python-2.0": "Python-2.0",
    "blueoak-1.0.0": "BlueOak-1.0.0",
    "gpl-2.0": "GPL-2.0",
    "gpl-3.0": "GPL-3.0",
    "lgpl-2.1": "LGPL-2.1",
    "lgpl-3.0": "LGPL-3.0",
    "agpl-3.0": "AGPL-3.0",
}


@lru_cache(maxsize=1)
def _spdx_licensing() -> Licensing:
    """Build the SPDX licensing index on first use."""
    return get_spdx_licensing()


def normalize_license_string(value: str) -> Optional[str]:
    """Normalize a single declared license string.

    Args:
        value: Raw license string, e.g. ``"mit"`` or ``"MIT OR Apache-2.0"``.

    Returns:
        Canonical identifier or SPDX expression, or None if the string is a
        placeholder or cannot be parsed as a license expression.
    """
    cleaned = " ".join(value.split())
    if cleaned.upper() in PLACEHOLDER_VALUES:
        return None

    alias = LICENSE_ALIASES.get(cleaned.lower())
    if alias is not None:
        return alias

    try:
        parsed = _spdx_licensing().parse(cleaned, validate=True)
    except Exception as e:
        # Malformed input such as "()" fails inside boolean.py with a bare
        # IndexError rather than an ExpressionError
        logger.debug("Unrecognized license expression %r: %s", cleaned, e)
        return None
    if parsed is None:
        return None
    return str(parsed)


def normalize_declared_license(value: Any) -> Optional[str]:
    """Normalize a declared license field of any supported shape.

    Strings are normalized directly, ``{type, url}`` objects by their type.
    Lists are normalized entry by entry and joined into an SPDX ``OR``
    expression; unrecognized entries are dropped, and a list with no
    recognized entry is unrecognized as a whole.

    Args:
        value: The raw ``license`` or legacy ``licenses`` value.

    Returns:
        Normalized identifier or expression, or None if absent or unrecognized.
    """
    if isinstance(value, str):
        return normalize_license_string(value)
    if isinstance(value, dict):
        license_type = value.get("type")
        if isinstance(license_type, str):
            return normalize_license_string(license_type)
        return None
    if isinstance(value, list):
        identifiers: list[str] = []
        for entry in value:
            normalized = normalize_declared_license(entry)
            if normalized is not None and normalized not in identifiers:
                identifiers.append(normalized)
        if not identifiers:
            return None
        if len(identifiers) == 1:
            return identifiers[0]
        return " OR ".join(
            f"({identifier})" if " " in identifier else identifier
            for identifier in identifiers
        )
    return None


def find_license_file(directory: Path) -> Optional[Path]:
    """Find a conventionally named license file in a package directory.

    Only the directory itself is searched. Names are compared
    case-insensitively and the first match in LICENSE_FILE_NAMES order wins.

    Args:
        directory: Package directory to search.

    Returns:
        Path to the license file, or None if none was found.
    """
    try:
        entries = {
            entry.name.lower(): entry
            for entry in sorted(directory.iterdir())
            if entry.is_file()
        }
    except OSError as e:
        logger.debug("Cannot list package directory '%s': %s", directory, e)
        return None

    for name in LICENSE_FILE_NAMES:
        match = entries.get(name.lower())
        if match is not None:
            return match
    return None


def read_license_text(path: Path) -> Optional[str]:
    """Read license text, returning None if the file cannot be read."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Cannot read license file '%s': %s", path, e)
        return None


class LicenseExtractor:
    """Build LicenseInfo records for resolved packages.

    The declared license field is used when it is recognized; the license
    text is taken from a conventionally named file in the package directory
    or from the file named by a ``SEE LICENSE IN`` declaration. File I/O
    runs in worker threads so independent packages extract concurrently.
    """

    async def extract(self, resolved: ResolvedPackage) -> LicenseInfo:
        """Extract license information for a package.

        Never raises for missing or unreadable files; such packages are
        recorded with the UNKNOWN license identifier.

        Args:
            resolved: The package and its parsed metadata.

        Returns:
            Fully populated LicenseInfo for the package.
        """
        metadata = resolved.metadata
        directory = resolved.ref.directory

        license_id: Optional[str] = None
        license_file: Optional[Path] = None

        if metadata.readable:
            license_id = normalize_declared_license(metadata.license)
            if license_id is None and metadata.license is None:
                license_id = normalize_declared_license(metadata.licenses)
            if license_id is None and isinstance(metadata.license, str):
                see_license = SEE_LICENSE_IN.match(metadata.license.strip())
                if see_license:
                    candidate = directory / see_license.group(1).strip()
                    # Only files inside the package itself
                    if candidate.resolve().is_relative_to(directory.resolve()):
                        license_file = candidate

        license_text: Optional[str] = None
        if license_file is not None:
            license_text = await asyncio.to_thread(read_license_text, license_file)
            if license_text is None:
                logger.debug(
                    "Declared license file '%s' is unreadable, searching %s",
                    license_file,
                    directory,
                )

        if license_text is None:
            found = await asyncio.to_thread(find_license_file, directory)
            if found is not None and found != license_file:
                license_text = await asyncio.to_thread(read_license_text, found)

        return LicenseInfo(
            license_id=license_id or UNKNOWN_LICENSE,
            license_text=license_text,
            author=metadata.author,
            repository=metadata.repository,
            source_path=directory,
        )
