"""Plain-text third-party notices writer."""

from typing import Optional

from license_auditor.models.package import LicenseInfo, split_identity
from license_auditor.report import SortedLicenseInformation

SEPARATOR = "-" * 80


class NoticesWriter:
    """Format license information as a plain-text notices file.

    This is the default report: one block per package with its license
    identifier, author, repository and the full license text when one was
    found, suitable for shipping next to a bundle.
    """

    def __init__(self, title: str = "THIRD-PARTY SOFTWARE NOTICES AND INFORMATION") -> None:
        self.title = title

    def __call__(self, sorted_license_information: SortedLicenseInformation) -> str:
        return self.format_notices(sorted_license_information)

    def format_notices(self, sorted_license_information: SortedLicenseInformation) -> str:
        """Format sorted license information as notices text.

        Args:
            sorted_license_information: (identity, LicenseInfo) pairs in report order.

        Returns:
            Notices text ending with a newline.
        """
        lines: list[str] = [self.title, ""]

        if not sorted_license_information:
            lines.append("No third-party packages found.")
            return "\n".join(lines) + "\n"

        for identity, info in sorted_license_information:
            lines.append(SEPARATOR)
            lines.extend(self._format_package(identity, info))
        lines.append(SEPARATOR)
        return "\n".join(lines) + "\n"

    def _format_package(self, identity: str, info: LicenseInfo) -> list[str]:
        name, version = split_identity(identity)
        lines = [
            "",
            f"{name} {version}".rstrip(),
            f"License: {info.license_id}",
        ]
        lines.extend(self._optional_line("Author", info.author))
        lines.extend(self._optional_line("Repository", info.repository))
        lines.append("")
        if info.license_text:
            lines.append(info.license_text.strip())
            lines.append("")
        return lines

    @staticmethod
    def _optional_line(label: str, value: Optional[str]) -> list[str]:
        return [f"{label}: {value}"] if value else []
