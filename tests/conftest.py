"""Shared fixtures for license-auditor tests."""

import json
from pathlib import Path
from typing import Any, Callable, Optional

import pytest
from click.testing import CliRunner

MIT_TEXT = (
    "MIT License\n\n"
    "Permission is hereby granted, free of charge, to any person obtaining a copy\n"
)

PackageFactory = Callable[..., Path]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Provide a project directory with its own package.json."""
    project = tmp_path / "project"
    (project / "src").mkdir(parents=True)
    (project / "package.json").write_text(
        json.dumps({"name": "my-app", "version": "0.1.0", "private": True})
    )
    (project / "src" / "index.js").write_text("import 'pkg-a';\n")
    return project


@pytest.fixture
def make_package(project_dir: Path) -> PackageFactory:
    """Create packages under the project's node_modules directory.

    Returns a factory taking the package name, version and optional
    package.json fields; it returns the path of the package's main file.
    """

    def factory(
        name: str,
        version: str = "1.0.0",
        license_file: Optional[str] = None,
        license_text: str = MIT_TEXT,
        parent: Optional[Path] = None,
        **fields: Any,
    ) -> Path:
        base = parent if parent is not None else project_dir
        package_dir = base / "node_modules" / name
        package_dir.mkdir(parents=True, exist_ok=True)
        metadata = {"name": name, "version": version, **fields}
        (package_dir / "package.json").write_text(json.dumps(metadata))
        if license_file is not None:
            (package_dir / license_file).write_text(license_text)
        main_file = package_dir / "index.js"
        main_file.write_text("module.exports = {};\n")
        return main_file

    return factory
