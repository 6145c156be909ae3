"""Report writers for license-auditor."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import TemplateError

from license_auditor.exceptions import ConfigurationError
from license_auditor.output.notices import NoticesWriter
from license_auditor.output.report_json import JsonReportWriter
from license_auditor.output.report_markdown import MarkdownReportWriter
from license_auditor.output.template import TemplateReportWriter
from license_auditor.report import OutputWriter

WRITERS = {
    "text": NoticesWriter,
    "json": JsonReportWriter,
    "markdown": MarkdownReportWriter,
}


def get_writer(format_name: str = "text", template_path: Optional[Path] = None) -> OutputWriter:
    """Return the report writer for a format name or template.

    Args:
        format_name: One of "text", "json" or "markdown".
        template_path: Jinja2 template file; takes precedence over format_name.

    Returns:
        A writer callable.

    Raises:
        ConfigurationError: If the format is unknown or the template is missing.
    """
    if template_path is not None:
        try:
            return TemplateReportWriter(template_path)
        except TemplateError as e:
            raise ConfigurationError(f"Cannot load report template '{template_path}': {e}") from e

    try:
        return WRITERS[format_name]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown report format '{format_name}', "
            f"expected one of: {', '.join(sorted(WRITERS))}"
        ) from None


__all__ = [
    "JsonReportWriter",
    "MarkdownReportWriter",
    "NoticesWriter",
    "TemplateReportWriter",
    "WRITERS",
    "get_writer",
]
