"""Resolution of file paths to their owning packages."""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

from license_auditor.constants import METADATA_FILE_NAME
from license_auditor.models.package import PackageMetadata, PackageRef, ResolvedPackage

logger = logging.getLogger(__name__)

# Prefixes of module identifiers that do not name a file on disk
VIRTUAL_PATH_PREFIXES = ("webpack/", "data:", "virtual:")

# Version recorded for packages whose metadata file cannot be parsed
FALLBACK_VERSION = "0.0.0"

GITHUB_SHORTHAND = re.compile(r"^(?:github:)?([\w.-]+)/([\w.-]+)$")


class PackageResolver:
    """Map file paths to the nearest enclosing package.

    A resolver caches its lookups by directory, so every path inside the
    same package resolves to the identical ResolvedPackage object. Create
    one resolver per run; nothing is shared between instances.
    """

    def __init__(self) -> None:
        self._by_directory: dict[Path, Optional[ResolvedPackage]] = {}

    def resolve(self, path: str | os.PathLike[str]) -> Optional[ResolvedPackage]:
        """Resolve a file path to the package that owns it.

        Args:
            path: A file path from the build's dependency set.

        Returns:
            The resolved package, or None for virtual paths and paths
            outside any package directory.
        """
        raw = os.fspath(path)
        if not raw or raw.startswith(VIRTUAL_PATH_PREFIXES) or "\0" in raw:
            logger.debug("Skipping virtual path %r", raw)
            return None

        start = Path(raw).absolute()
        # A path that is itself a package directory owns its own metadata
        directory = start if start.is_dir() else start.parent
        return self._resolve_directory(directory)

    def _resolve_directory(self, directory: Path) -> Optional[ResolvedPackage]:
        visited: list[Path] = []
        result: Optional[ResolvedPackage] = None

        current = directory
        while True:
            if current in self._by_directory:
                result = self._by_directory[current]
                break
            visited.append(current)

            metadata_path = current / METADATA_FILE_NAME
            if metadata_path.is_file():
                metadata = read_package_metadata(metadata_path)
                if metadata is not None:
                    ref = PackageRef(
                        name=metadata.name,
                        version=metadata.version,
                        directory=current,
                    )
                    result = ResolvedPackage(ref=ref, metadata=metadata)
                    break

            if current.parent == current:
                break
            current = current.parent

        for seen in visited:
            self._by_directory[seen] = result
        return result


def read_package_metadata(metadata_path: Path) -> Optional[PackageMetadata]:
    """Read and normalize a package metadata file.

    Args:
        metadata_path: Path to a ``package.json`` file.

    Returns:
        Parsed metadata; metadata marked unreadable if the file could not be
        read or parsed; None if the file parses but declares no name (such
        files only mark module settings for a subdirectory).
    """
    try:
        data = json.loads(metadata_path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("Cannot read package metadata '%s': %s", metadata_path, e)
        return PackageMetadata(
            name=package_name_from_directory(metadata_path.parent),
            version=FALLBACK_VERSION,
            readable=False,
        )

    if not isinstance(data, dict):
        logger.warning("Package metadata '%s' is not an object", metadata_path)
        return PackageMetadata(
            name=package_name_from_directory(metadata_path.parent),
            version=FALLBACK_VERSION,
            readable=False,
        )

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        return None

    version = data.get("version")
    return PackageMetadata(
        name=name.strip(),
        version=str(version).strip() if version is not None else FALLBACK_VERSION,
        license=data.get("license"),
        licenses=data.get("licenses"),
        author=normalize_author(data.get("author")),
        repository=normalize_repository(data.get("repository")),
    )


def package_name_from_directory(directory: Path) -> str:
    """Derive a package name from its directory, keeping any @scope."""
    if directory.parent.name.startswith("@"):
        return f"{directory.parent.name}/{directory.name}"
    return directory.name


def normalize_author(value: Any) -> Optional[str]:
    """Normalize a declared author to ``name <email> (url)`` form.

    Args:
        value: A string, or an object with name, email and url keys.

    Returns:
        The author string, or None if nothing usable was declared.
    """
    if isinstance(value, str):
        return value.strip() or None
    if not isinstance(value, dict):
        return None

    parts: list[str] = []
    name = value.get("name")
    email = value.get("email")
    url = value.get("url")
    if isinstance(name, str) and name.strip():
        parts.append(name.strip())
    if isinstance(email, str) and email.strip():
        parts.append(f"<{email.strip()}>")
    if isinstance(url, str) and url.strip():
        parts.append(f"({url.strip()})")
    return " ".join(parts) or None


def normalize_repository(value: Any) -> Optional[str]:
    """Normalize a declared repository to a browsable URL.

    Accepts a string or a ``{type, url}`` object. Strips ``git+`` prefixes
    and ``.git`` suffixes and expands ``github:owner/repo`` and
    ``owner/repo`` shorthands.

    Args:
        value: The raw repository field.

    Returns:
        Normalized URL, or None if nothing usable was declared.
    """
    if isinstance(value, dict):
        value = value.get("url")
    if not isinstance(value, str):
        return None

    url = value.strip()
    if not url:
        return None

    shorthand = GITHUB_SHORTHAND.match(url)
    if shorthand:
        return f"https://github.com/{shorthand.group(1)}/{shorthand.group(2)}"

    if url.startswith("git+"):
        url = url[len("git+"):]
    if url.startswith("git://"):
        url = "https://" + url[len("git://"):]
    url = url.rstrip("/")
    if url.endswith(".git"):
        url = url[:-4]
    return url
