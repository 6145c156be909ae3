"""Tests for report ordering and writing."""
import pytest

from license_auditor.models.package import LicenseInfo
from license_auditor.report import (
    get_sorted_license_information,
    license_sort_key,
    write_license_information,
)


class TestGetSortedLicenseInformation:
    """Tests for get_sorted_license_information function."""

    def test_sorted_by_name(self) -> None:
        """Test that packages are ordered by name."""
        information = {
            "zeta@1.0.0": LicenseInfo(),
            "alpha@1.0.0": LicenseInfo(),
            "mid@1.0.0": LicenseInfo(),
        }

        result = get_sorted_license_information(information)

        assert [identity for identity, _ in result] == [
            "alpha@1.0.0",
            "mid@1.0.0",
            "zeta@1.0.0",
        ]

    def test_versions_sorted_naturally(self) -> None:
        """Test that numeric version parts compare as numbers."""
        information = {
            "pkg@1.10.0": LicenseInfo(),
            "pkg@1.9.0": LicenseInfo(),
            "pkg@1.2.0": LicenseInfo(),
        }

        result = get_sorted_license_information(information)

        assert [identity for identity, _ in result] == [
            "pkg@1.2.0",
            "pkg@1.9.0",
            "pkg@1.10.0",
        ]

    def test_scoped_names_sort_by_full_name(self) -> None:
        """Test that scoped packages sort by their scoped name."""
        information = {
            "react@18.0.0": LicenseInfo(),
            "@babel/core@7.0.0": LicenseInfo(),
        }

        result = get_sorted_license_information(information)

        assert result[0][0] == "@babel/core@7.0.0"

    def test_case_insensitive_with_stable_tie_break(self) -> None:
        """Test that names compare case-insensitively but deterministically."""
        information = {
            "beta@1.0.0": LicenseInfo(),
            "Alpha@1.0.0": LicenseInfo(),
            "alpha@1.0.0": LicenseInfo(),
        }

        result = get_sorted_license_information(information)

        assert [identity for identity, _ in result] == [
            "Alpha@1.0.0",
            "alpha@1.0.0",
            "beta@1.0.0",
        ]

    def test_independent_of_insertion_order(self) -> None:
        """Test that the result only depends on the map's contents."""
        items = [
            ("pkg-b@1.0.0", LicenseInfo(license_id="MIT")),
            ("pkg-a@2.0.0", LicenseInfo(license_id="ISC")),
            ("pkg-a@1.0.0", LicenseInfo()),
        ]

        forward = get_sorted_license_information(dict(items))
        backward = get_sorted_license_information(dict(reversed(items)))

        assert forward == backward

    def test_pairs_keep_license_info(self) -> None:
        """Test that each identity keeps its own record."""
        info = LicenseInfo(license_id="MIT")

        assert get_sorted_license_information({"pkg@1.0.0": info}) == [("pkg@1.0.0", info)]

    def test_empty(self) -> None:
        """Test that an empty map gives an empty list."""
        assert get_sorted_license_information({}) == []


class TestLicenseSortKey:
    """Tests for license_sort_key function."""

    def test_prerelease_versions_are_comparable(self) -> None:
        """Test that mixed numeric and text versions do not fail to compare."""
        keys = sorted(["pkg@1.0.0-beta.2", "pkg@1.0.0", "pkg@1.0.0-alpha"], key=license_sort_key)

        assert len(keys) == 3
        assert keys[0] == "pkg@1.0.0"


class TestWriteLicenseInformation:
    """Tests for write_license_information function."""

    @pytest.mark.asyncio
    async def test_sync_writer_called_once(self) -> None:
        """Test that a synchronous writer is called exactly once."""
        calls = []
        sorted_information = [("pkg@1.0.0", LicenseInfo(license_id="MIT"))]

        def writer(items):
            calls.append(items)
            return "report"

        result = await write_license_information(writer, sorted_information)

        assert result == "report"
        assert calls == [sorted_information]

    @pytest.mark.asyncio
    async def test_async_writer_is_awaited(self) -> None:
        """Test that an asynchronous writer's result is awaited."""

        async def writer(items):
            return f"{len(items)} packages"

        result = await write_license_information(writer, [])

        assert result == "0 packages"

    @pytest.mark.asyncio
    async def test_bytes_content(self) -> None:
        """Test that byte content is passed through."""
        result = await write_license_information(lambda items: b"\x00binary", [])

        assert result == b"\x00binary"

    @pytest.mark.asyncio
    async def test_writer_errors_propagate(self) -> None:
        """Test that writer exceptions reach the caller unchanged."""

        def writer(items):
            raise RuntimeError("disk full")

        with pytest.raises(RuntimeError, match="disk full"):
            await write_license_information(writer, [])

    @pytest.mark.asyncio
    async def test_async_writer_errors_propagate(self) -> None:
        """Test that exceptions from awaited writers propagate."""

        async def writer(items):
            raise ValueError("bad template")

        with pytest.raises(ValueError, match="bad template"):
            await write_license_information(writer, [])
