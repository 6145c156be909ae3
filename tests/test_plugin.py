"""Tests for the build plugin."""
from pathlib import Path

import pytest

from license_auditor.analysis.matchers import GlobPatterns, IdentitySet, LicenseSet
from license_auditor.models.package import LicenseInfo
from license_auditor.options import PluginOptions
from license_auditor.output import JsonReportWriter
from license_auditor.plugin import Compilation, DependencyAccumulator, LicenseCheckerPlugin


class TestDependencyAccumulator:
    """Tests for DependencyAccumulator."""

    def test_deduplicates_in_insertion_order(self, tmp_path: Path) -> None:
        """Test that paths are recorded once, in insertion order."""
        accumulator = DependencyAccumulator(["b.js", "a.js"])
        accumulator.add("b.js")
        accumulator.extend([tmp_path / "c.js", "a.js"])

        assert accumulator.paths == ["b.js", "a.js", str(tmp_path / "c.js")]
        assert len(accumulator) == 3
        assert list(accumulator) == accumulator.paths

    def test_empty(self) -> None:
        """Test that a new accumulator is empty."""
        assert DependencyAccumulator().paths == []


class TestLicenseCheckerPlugin:
    """Tests for LicenseCheckerPlugin."""

    @pytest.mark.asyncio
    async def test_disallowed_license_is_reported(self, make_package) -> None:
        """Test that a license outside the allow-list produces a warning."""
        paths = [
            make_package("pkg-a", license="MIT"),
            make_package("pkg-b", "2.0.0", license="GPL-3.0"),
        ]
        plugin = LicenseCheckerPlugin(PluginOptions(allow=LicenseSet(["MIT"])))
        compilation = Compilation()

        name, content = await plugin.build_asset(compilation, paths)

        assert compilation.errors == []
        assert len(compilation.warnings) == 1
        assert compilation.warnings[0].identity == "pkg-b@2.0.0"
        assert "pkg-a 1.0.0" in content
        assert "pkg-b 2.0.0" in content
        assert name == "ThirdPartyNotices.txt"

    @pytest.mark.asyncio
    async def test_emit_error_routes_to_errors(self, make_package) -> None:
        """Test that emit_error sends violations to the error list."""
        paths = [make_package("pkg-b", license="GPL-3.0")]
        plugin = LicenseCheckerPlugin(
            PluginOptions(allow=LicenseSet(["MIT"]), emit_error=True)
        )
        compilation = Compilation()

        await plugin.build_asset(compilation, paths)

        assert len(compilation.errors) == 1
        assert compilation.warnings == []

    @pytest.mark.asyncio
    async def test_ignored_package_is_absent(self, make_package) -> None:
        """Test that ignored packages are neither checked nor reported."""
        paths = [
            make_package("pkg-a", license="MIT"),
            make_package("@internal/tool", license="GPL-3.0"),
        ]
        plugin = LicenseCheckerPlugin(
            PluginOptions(
                allow=LicenseSet(["MIT"]),
                ignore=GlobPatterns(["@internal/*"]),
                emit_error=True,
            )
        )
        compilation = Compilation()

        _, content = await plugin.build_asset(compilation, paths)

        assert compilation.errors == []
        assert "@internal/tool" not in content

    @pytest.mark.asyncio
    async def test_override_fixes_unknown_license(self, make_package) -> None:
        """Test that an override is checked instead of the detected license."""
        paths = [make_package("pkg-c", "3.0.0")]
        plugin = LicenseCheckerPlugin(
            PluginOptions(
                allow=LicenseSet(["MIT"]),
                override={"pkg-c@3.0.0": LicenseInfo(license_id="MIT")},
                emit_error=True,
            )
        )
        compilation = Compilation()

        _, content = await plugin.build_asset(compilation, paths)

        assert compilation.errors == []
        assert "License: MIT" in content

    @pytest.mark.asyncio
    async def test_ignore_wins_over_override(self, make_package) -> None:
        """Test that an ignored package stays out even when overridden."""
        paths = [make_package("pkg-c", "3.0.0")]
        plugin = LicenseCheckerPlugin(
            PluginOptions(
                ignore=IdentitySet(["pkg-c@3.0.0"]),
                override={"pkg-c@3.0.0": LicenseInfo(license_id="MIT")},
                output_writer=JsonReportWriter(),
            )
        )

        _, content = await plugin.build_asset(Compilation(), paths)

        assert "pkg-c" not in content

    @pytest.mark.asyncio
    async def test_no_allow_list_never_reports(self, make_package) -> None:
        """Test that without an allow-list nothing is reported."""
        paths = [make_package("pkg-a"), make_package("pkg-b", license="GPL-3.0")]
        compilation = Compilation()

        await LicenseCheckerPlugin().build_asset(compilation, paths)

        assert compilation.errors == []
        assert compilation.warnings == []

    @pytest.mark.asyncio
    async def test_writer_receives_sorted_information(self, make_package) -> None:
        """Test that the writer is called once with sorted pairs."""
        paths = [
            make_package("zeta", license="MIT"),
            make_package("alpha", license="MIT"),
        ]
        calls = []

        def writer(sorted_information):
            calls.append([identity for identity, _ in sorted_information])
            return "report"

        plugin = LicenseCheckerPlugin(
            PluginOptions(output_writer=writer, output_filename="licenses.txt")
        )

        name, content = await plugin.build_asset(Compilation(), paths)

        assert calls == [["alpha@1.0.0", "zeta@1.0.0"]]
        assert (name, content) == ("licenses.txt", "report")

    @pytest.mark.asyncio
    async def test_run_emits_asset(self, make_package) -> None:
        """Test that run publishes the report as an artifact."""
        accumulator = DependencyAccumulator([make_package("pkg-a", license="MIT")])
        compilation = Compilation()

        await LicenseCheckerPlugin().run(compilation, accumulator)

        assert list(compilation.assets) == ["ThirdPartyNotices.txt"]
        assert "pkg-a 1.0.0" in compilation.assets["ThirdPartyNotices.txt"]

    @pytest.mark.asyncio
    async def test_malformed_license_does_not_abort(self, make_package) -> None:
        """Test that a malformed license field still yields a full report."""
        accumulator = DependencyAccumulator(
            [make_package("bad", license="()"), make_package("good", license="MIT")]
        )
        compilation = Compilation()
        plugin = LicenseCheckerPlugin(PluginOptions(allow=LicenseSet(["MIT"])))

        await plugin.run(compilation, accumulator)

        report = compilation.assets["ThirdPartyNotices.txt"]
        assert "bad 1.0.0" in report
        assert "good 1.0.0" in report
        assert [v.identity for v in compilation.warnings] == ["bad@1.0.0"]
        assert compilation.warnings[0].reason == "Unknown license"

    @pytest.mark.asyncio
    async def test_writer_failure_emits_no_asset(self, make_package) -> None:
        """Test that a failing writer propagates and leaves no artifact."""

        async def writer(sorted_information):
            raise OSError("cannot render")

        accumulator = DependencyAccumulator([make_package("pkg-a", license="MIT")])
        compilation = Compilation()
        plugin = LicenseCheckerPlugin(PluginOptions(output_writer=writer))

        with pytest.raises(OSError, match="cannot render"):
            await plugin.run(compilation, accumulator)

        assert compilation.assets == {}

    @pytest.mark.asyncio
    async def test_output_is_deterministic(self, make_package) -> None:
        """Test that repeated runs give identical reports."""
        paths = [
            make_package("pkg-b", license="ISC", license_file="LICENSE"),
            make_package("pkg-a", license="MIT", license_file="LICENSE"),
        ]
        plugin = LicenseCheckerPlugin()

        _, first = await plugin.build_asset(Compilation(), paths)
        _, second = await plugin.build_asset(Compilation(), list(reversed(paths)))

        assert first == second

    @pytest.mark.asyncio
    async def test_empty_dependencies(self) -> None:
        """Test that an empty build still produces a report."""
        compilation = Compilation()

        name, content = await LicenseCheckerPlugin().build_asset(compilation, [])

        assert "No third-party packages found." in content
        assert compilation.warnings == []
