"""JSON output writer for license reports."""
import json
from typing import Any

from license_auditor import __version__
from license_auditor.constants import LEGAL_DISCLAIMER
from license_auditor.models.package import split_identity
from license_auditor.report import SortedLicenseInformation


class JsonReportWriter:
    """Format license information as JSON output.

    Provides a structured representation of the report for programmatic
    processing. The output carries no timestamps or local paths, so
    identical input gives byte-identical output.
    """

    def __init__(self, include_license_text: bool = True) -> None:
        self.include_license_text = include_license_text

    def __call__(self, sorted_license_information: SortedLicenseInformation) -> str:
        return self.format_report(sorted_license_information)

    def format_report(self, sorted_license_information: SortedLicenseInformation) -> str:
        """Format sorted license information as a JSON string.

        Args:
            sorted_license_information: (identity, LicenseInfo) pairs in report order.

        Returns:
            JSON document with report metadata, summary and packages.
        """
        output = {
            "report_metadata": self._build_report_metadata(),
            "summary": self._build_summary(sorted_license_information),
            "packages": self._build_packages(sorted_license_information),
        }
        return json.dumps(output, indent=2, ensure_ascii=False) + "\n"

    def _build_report_metadata(self) -> dict[str, Any]:
        return {
            "tool_version": __version__,
            "disclaimer": LEGAL_DISCLAIMER,
        }

    def _build_summary(
        self, sorted_license_information: SortedLicenseInformation
    ) -> dict[str, Any]:
        """Build summary section.

        Returns:
            Dictionary with package totals and a count per license identifier.
        """
        licenses: dict[str, int] = {}
        for _, info in sorted_license_information:
            licenses[info.license_id] = licenses.get(info.license_id, 0) + 1
        unknown = sum(1 for _, info in sorted_license_information if info.is_unknown)

        return {
            "total_packages": len(sorted_license_information),
            "unknown_licenses": unknown,
            "licenses": dict(sorted(licenses.items())),
        }

    def _build_packages(
        self, sorted_license_information: SortedLicenseInformation
    ) -> list[dict[str, Any]]:
        packages: list[dict[str, Any]] = []
        for identity, info in sorted_license_information:
            name, version = split_identity(identity)
            package: dict[str, Any] = {
                "identity": identity,
                "name": name,
                "version": version,
                "license": info.license_id,
                "author": info.author,
                "repository": info.repository,
            }
            if self.include_license_text:
                package["license_text"] = info.license_text
            packages.append(package)
        return packages
