"""CLI entry point for license-auditor."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from license_auditor import __version__
from license_auditor.config import load_config
from license_auditor.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from license_auditor.exceptions import ConfigurationError, LicenseAuditorError
from license_auditor.models.policy import PolicyViolation
from license_auditor.options import options_from_config
from license_auditor.plugin import Compilation, DependencyAccumulator, LicenseCheckerPlugin
from license_auditor.report import ReportContent

# Module-level console for consistent output
_console = Console()
# Separate console for diagnostics and errors (writes to stderr)
_error_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_error_console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """License Auditor - third-party license reports for build dependencies.

    Resolves the files a build depended on to their owning packages,
    checks each package's license against your policy and writes a
    third-party notices report.

    \b
    Examples:
        license-auditor check node_modules/react/index.js
        license-auditor check --paths-from build-files.txt
        license-auditor check src --format json --output-dir dist
    """
    pass


@main.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option(
    "--paths-from",
    "paths_from",
    type=click.File("r"),
    default=None,
    help="Read file dependencies from a file, one path per line ('-' for stdin).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--output-dir",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False),
    default=".",
    show_default=True,
    help="Directory the report artifact is written to.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "markdown"], case_sensitive=False),
    default=None,
    help="Report format (overrides the configuration file).",
)
@click.option(
    "--emit-error/--no-emit-error",
    "emit_error",
    default=None,
    help="Report violations as errors (non-zero exit) instead of warnings.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show debug logging.",
)
def check(
    paths: tuple[str, ...],
    paths_from: Optional[TextIO],
    config_path: str | None,
    output_dir: str,
    output_format: str | None,
    emit_error: bool | None,
    verbose_flag: bool,
) -> None:
    """Check the licenses of the packages owning the given files.

    Directories are walked recursively; every file found counts as a
    build dependency.

    \b
    Examples:
        license-auditor check node_modules
        license-auditor check --paths-from deps.txt --config .license-auditor.yaml
        license-auditor check src --emit-error
    """
    _configure_logging(verbose_flag)

    try:
        config = load_config(config_path)
        updates: dict[str, object] = {}
        if output_format is not None:
            updates["output_format"] = output_format.lower()
        if emit_error is not None:
            updates["emit_error"] = emit_error
        if updates:
            config = config.model_copy(update=updates)
        options = options_from_config(config)

        accumulator = DependencyAccumulator()
        for path in paths:
            accumulator.extend(_expand_path(Path(path)))
        if paths_from is not None:
            accumulator.extend(
                line.strip() for line in paths_from if line.strip()
            )

        compilation = Compilation()
        plugin = LicenseCheckerPlugin(options)
        asyncio.run(plugin.run(compilation, accumulator))

        for filename, content in compilation.assets.items():
            _write_artifact(Path(output_dir) / filename, content)

        _display_violations(compilation.errors, "error")
        _display_violations(compilation.warnings, "warning")

        if compilation.errors:
            sys.exit(EXIT_ISSUES)
        sys.exit(EXIT_SUCCESS)

    except LicenseAuditorError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


def _expand_path(path: Path) -> list[Path]:
    """Expand a directory into the files below it, in a stable order."""
    if path.is_dir():
        return sorted(p for p in path.rglob("*") if p.is_file())
    return [path]


def _write_artifact(path: Path, content: ReportContent) -> None:
    """Write the report artifact to disk.

    Args:
        path: Destination file.
        content: Report text or bytes.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write to file '{path}': {e}") from e

    _console.print(f"[green]Report written to {path}[/green]")


def _display_violations(violations: list[PolicyViolation], level: str) -> None:
    """Print violations as a table on stderr.

    Args:
        violations: Violations routed to this level.
        level: "error" or "warning", used for the title and color.
    """
    if not violations:
        return

    color = "red" if level == "error" else "yellow"
    table = Table(
        title=f"[{color}]License policy {level}s ({len(violations)})[/{color}]",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Package")
    table.add_column("License")
    table.add_column("Reason")
    for violation in violations:
        table.add_row(violation.identity, violation.license_id, violation.reason)
    _error_console.print(table)


def _display_error(error: LicenseAuditorError) -> None:
    """Display error message to user on stderr."""
    error_type = type(error).__name__
    _error_console.print(f"[red bold]Error: {error_type}: {error}[/red bold]")


if __name__ == "__main__":
    main()
