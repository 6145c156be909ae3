"""Jinja2 template writer for custom license reports."""

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from license_auditor.models.package import split_identity
from license_auditor.report import SortedLicenseInformation


class TemplateReportWriter:
    """Render license information through a user supplied Jinja2 template.

    The template receives ``packages``, a list of dicts with identity, name,
    version, license, license_text, author and repository keys, and
    ``total_packages``. Undefined variables raise an error instead of
    rendering as empty strings.

    Attributes:
        template: The loaded Jinja2 template.
    """

    def __init__(self, template_path: Path) -> None:
        """Load the template.

        Args:
            template_path: Path to the Jinja2 template file.

        Raises:
            jinja2.TemplateNotFound: If the template file does not exist.
        """
        env = Environment(
            loader=FileSystemLoader(str(template_path.parent)),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.template = env.get_template(template_path.name)

    def __call__(self, sorted_license_information: SortedLicenseInformation) -> str:
        return self.render(sorted_license_information)

    def render(self, sorted_license_information: SortedLicenseInformation) -> str:
        """Render sorted license information with the template.

        Args:
            sorted_license_information: (identity, LicenseInfo) pairs in report order.

        Returns:
            Rendered report text.
        """
        packages: list[dict[str, Any]] = []
        for identity, info in sorted_license_information:
            name, version = split_identity(identity)
            packages.append(
                {
                    "identity": identity,
                    "name": name,
                    "version": version,
                    "license": info.license_id,
                    "license_text": info.license_text,
                    "author": info.author,
                    "repository": info.repository,
                }
            )
        return self.template.render(
            packages=packages,
            total_packages=len(packages),
        )
