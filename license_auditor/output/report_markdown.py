"""Markdown output writer for license reports."""

from license_auditor.constants import LEGAL_DISCLAIMER
from license_auditor.models.package import split_identity
from license_auditor.report import SortedLicenseInformation


class MarkdownReportWriter:
    """Format license information as Markdown output.

    Provides a Markdown rendition of the report suitable for legal review
    and documentation.
    """

    def __call__(self, sorted_license_information: SortedLicenseInformation) -> str:
        return self.format_report(sorted_license_information)

    def format_report(self, sorted_license_information: SortedLicenseInformation) -> str:
        """Format sorted license information as a Markdown string.

        Args:
            sorted_license_information: (identity, LicenseInfo) pairs in report order.

        Returns:
            Markdown document ending with a newline.
        """
        lines: list[str] = ["# Third-Party Licenses", ""]
        lines.extend(self._format_disclaimer())
        lines.append("")

        if not sorted_license_information:
            lines.append("*No packages found.*")
            return "\n".join(lines) + "\n"

        lines.extend(self._format_summary(sorted_license_information))
        lines.append("")
        lines.extend(self._format_packages(sorted_license_information))
        lines.append("")

        texts = self._format_license_texts(sorted_license_information)
        if texts:
            lines.extend(texts)

        return "\n".join(lines).rstrip("\n") + "\n"

    def _format_disclaimer(self) -> list[str]:
        return [
            "> **NOT LEGAL ADVICE**",
            ">",
            f"> {LEGAL_DISCLAIMER}",
        ]

    def _format_summary(
        self, sorted_license_information: SortedLicenseInformation
    ) -> list[str]:
        """Format summary section.

        Returns:
            List of Markdown lines with the number of packages per license.
        """
        counts: dict[str, int] = {}
        for _, info in sorted_license_information:
            counts[info.license_id] = counts.get(info.license_id, 0) + 1

        lines = [
            "## Summary",
            "",
            "| License | Packages |",
            "|---------|----------|",
        ]
        for license_id in sorted(counts):
            lines.append(f"| {license_id} | {counts[license_id]} |")
        lines.append(f"| **Total** | **{len(sorted_license_information)}** |")
        return lines

    def _format_packages(
        self, sorted_license_information: SortedLicenseInformation
    ) -> list[str]:
        lines = [
            "## Packages",
            "",
            "| Package | Version | License | Repository |",
            "|---------|---------|---------|------------|",
        ]
        for identity, info in sorted_license_information:
            name, version = split_identity(identity)
            license_display = "⚠️ UNKNOWN" if info.is_unknown else info.license_id
            repository = info.repository or ""
            lines.append(f"| {name} | {version} | {license_display} | {repository} |")
        return lines

    def _format_license_texts(
        self, sorted_license_information: SortedLicenseInformation
    ) -> list[str]:
        """Format the full license texts, one subsection per package.

        Returns:
            List of Markdown lines, empty if no package has license text.
        """
        lines: list[str] = []
        for identity, info in sorted_license_information:
            if not info.license_text:
                continue
            lines.extend(
                [
                    f"### {identity}",
                    "",
                    "```text",
                    info.license_text.strip(),
                    "```",
                    "",
                ]
            )
        if lines:
            lines = ["## License Texts", ""] + lines
        return lines
