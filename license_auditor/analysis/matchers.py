"""Policy building blocks: package matchers, license policies and filters.

Each concern has a small closed set of variants behind an abstract base
class. Options accept only these types, so a plain list or function is
wrapped explicitly by the caller rather than coerced implicitly.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Callable, Iterable

from license_auditor.constants import DEPENDENCY_DIRECTORY_NAME, UNKNOWN_LICENSE
from license_auditor.models.package import LicenseInfo, PackageRef

OR_OPERATOR = re.compile(r"\s+OR\s+", re.IGNORECASE)


class PackageMatcher(ABC):
    """Decides whether a package identity (name@version) is selected."""

    @abstractmethod
    def matches(self, identity: str) -> bool:
        """Return True if the identity is selected by this matcher."""


class IdentitySet(PackageMatcher):
    """Matches identities by exact membership."""

    def __init__(self, identities: Iterable[str]) -> None:
        self.identities = frozenset(identities)

    def matches(self, identity: str) -> bool:
        return identity in self.identities


class GlobPatterns(PackageMatcher):
    """Matches identities against shell-style patterns.

    Matching is case-sensitive. ``@scope/*`` selects every package of a
    scope, ``name@1.*`` a version range; a pattern without wildcards is an
    exact identity.
    """

    def __init__(self, patterns: Iterable[str]) -> None:
        self.patterns = tuple(patterns)

    def matches(self, identity: str) -> bool:
        return any(fnmatchcase(identity, pattern) for pattern in self.patterns)


class IdentityPredicate(PackageMatcher):
    """Matches identities with a user supplied function."""

    def __init__(self, predicate: Callable[[str], bool]) -> None:
        self.predicate = predicate

    def matches(self, identity: str) -> bool:
        return bool(self.predicate(identity))


class LicensePolicy(ABC):
    """Decides whether a license identifier is acceptable."""

    @abstractmethod
    def permits(self, license_id: str) -> bool:
        """Return True if the license identifier is acceptable."""


class LicenseSet(LicensePolicy):
    """Accepts exactly the listed license identifiers.

    UNKNOWN is accepted only when it is listed.
    """

    def __init__(self, license_ids: Iterable[str]) -> None:
        self.license_ids = frozenset(license_ids)

    @classmethod
    def from_expression(cls, expression: str) -> LicenseSet:
        """Build a set from a simple disjunction such as ``(MIT OR ISC)``.

        Only ``OR`` is understood; this is not an SPDX expression evaluator.
        """
        stripped = expression.strip()
        while stripped.startswith("(") and stripped.endswith(")"):
            stripped = stripped[1:-1].strip()
        return cls(part.strip() for part in OR_OPERATOR.split(stripped) if part.strip())

    def permits(self, license_id: str) -> bool:
        return license_id in self.license_ids


class LicensePredicate(LicensePolicy):
    """Accepts license identifiers with a user supplied function.

    UNKNOWN is rejected without consulting the function unless
    ``allow_unknown`` is set.
    """

    def __init__(
        self, predicate: Callable[[str], bool], allow_unknown: bool = False
    ) -> None:
        self.predicate = predicate
        self.allow_unknown = allow_unknown

    def permits(self, license_id: str) -> bool:
        if license_id == UNKNOWN_LICENSE:
            return self.allow_unknown
        return bool(self.predicate(license_id))


class PackageFilter(ABC):
    """Decides whether a collected package is included in the report."""

    @abstractmethod
    def includes(self, ref: PackageRef, info: LicenseInfo) -> bool:
        """Return True if the package should be included."""


class AcceptAll(PackageFilter):
    """Includes every package."""

    def includes(self, ref: PackageRef, info: LicenseInfo) -> bool:
        return True


class DependenciesOnly(PackageFilter):
    """Includes only packages installed under a node_modules directory.

    Excludes the project's own package and any workspace packages that the
    build resolves to outside the dependency directory.
    """

    def includes(self, ref: PackageRef, info: LicenseInfo) -> bool:
        return DEPENDENCY_DIRECTORY_NAME in Path(ref.directory).parts


class PackagePredicate(PackageFilter):
    """Includes packages with a user supplied function."""

    def __init__(self, predicate: Callable[[PackageRef, LicenseInfo], bool]) -> None:
        self.predicate = predicate

    def includes(self, ref: PackageRef, info: LicenseInfo) -> bool:
        return bool(self.predicate(ref, info))
