"""Build integration: one license check per build run.

A host build tool calls the plugin once per build with the complete set of
files the build depended on. The plugin publishes the license report as a
named artifact and routes policy violations to the host's error or warning
list.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Iterable, Iterator, Optional, Protocol, Union

from license_auditor.analysis.filtering import ignore_licenses
from license_auditor.analysis.overrides import override_licenses
from license_auditor.analysis.policy import get_license_violations
from license_auditor.collector import collect_license_information
from license_auditor.options import PluginOptions
from license_auditor.report import (
    ReportContent,
    get_sorted_license_information,
    write_license_information,
)

logger = logging.getLogger(__name__)


class DependencyAccumulator:
    """File dependencies gathered over one build run.

    Hosts add the file dependencies of every module as it is built, plus
    the build's own tracked files, and hand the accumulator to the plugin
    once the build is complete. Paths are deduplicated and keep their
    insertion order.
    """

    def __init__(self, paths: Optional[Iterable[Union[str, os.PathLike]]] = None) -> None:
        self._paths: dict[str, None] = {}
        if paths is not None:
            self.extend(paths)

    def add(self, path: Union[str, os.PathLike]) -> None:
        """Record a single file dependency."""
        self._paths.setdefault(os.fspath(path), None)

    def extend(self, paths: Iterable[Union[str, os.PathLike]]) -> None:
        """Record several file dependencies, e.g. those of one built module."""
        for path in paths:
            self.add(path)

    @property
    def paths(self) -> list[str]:
        """Recorded paths in insertion order."""
        return list(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._paths))


class CompilationLike(Protocol):
    """What the plugin needs from the host's compilation object."""

    errors: list[Any]
    warnings: list[Any]

    def emit_asset(self, name: str, content: ReportContent) -> None:
        ...


class Compilation:
    """Minimal compilation used by the command line and by tests."""

    def __init__(self) -> None:
        self.errors: list[Any] = []
        self.warnings: list[Any] = []
        self.assets: dict[str, ReportContent] = {}

    def emit_asset(self, name: str, content: ReportContent) -> None:
        self.assets[name] = content


class LicenseCheckerPlugin:
    """Run the license pipeline for a build.

    Stages run strictly in order: collect, ignore, override, check against
    the allow-list, sort, write. Each stage produces a new map, so callers
    holding an intermediate map never see it change.
    """

    def __init__(self, options: Optional[PluginOptions] = None) -> None:
        self.options = options or PluginOptions()

    async def build_asset(
        self,
        compilation: CompilationLike,
        dependencies: Iterable[Union[str, os.PathLike]],
    ) -> tuple[str, ReportContent]:
        """Build the license report for one run.

        Violations are appended to ``compilation.errors`` when ``emit_error``
        is set and to ``compilation.warnings`` otherwise. Exceptions from the
        output writer propagate unchanged.

        Args:
            compilation: The host compilation receiving diagnostics.
            dependencies: Every file the build depended on.

        Returns:
            The artifact name and the serialized report.
        """
        options = self.options

        license_information = await collect_license_information(
            dependencies, options.filter
        )
        license_information = ignore_licenses(license_information, options.ignore)
        license_information = override_licenses(license_information, options.override)

        violations = get_license_violations(license_information, options.allow)
        if violations:
            logger.debug("Found %d license violations", len(violations))
        if options.emit_error:
            compilation.errors.extend(violations)
        else:
            compilation.warnings.extend(violations)

        sorted_license_information = get_sorted_license_information(license_information)
        content = await write_license_information(
            options.output_writer, sorted_license_information
        )
        return options.output_filename, content

    async def run(
        self,
        compilation: CompilationLike,
        accumulator: DependencyAccumulator,
    ) -> None:
        """Build the license report and publish it as a build artifact.

        No artifact is emitted if writing the report fails.

        Args:
            compilation: The host compilation receiving the artifact.
            accumulator: File dependencies collected during the build.
        """
        filename, content = await self.build_asset(compilation, accumulator.paths)
        compilation.emit_asset(filename, content)
