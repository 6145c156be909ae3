"""Configuration file discovery and loading for license-auditor."""
from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from license_auditor.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_auditor.exceptions import ConfigurationError
from license_auditor.models.config import AuditorConfig

logger = logging.getLogger(__name__)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find a configuration file in the specified directory.

    Searches for `.license-auditor.yaml` first, then `.license-auditor.yml`.

    Args:
        start_dir: Directory to search. Defaults to current working directory.

    Returns:
        Path to the configuration file if found, None otherwise.
    """
    search_dir = start_dir or Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        config_path = search_dir / name
        if config_path.is_file():
            return config_path
    return None


def load_config_file(path: Path) -> AuditorConfig:
    """Load and validate configuration from a YAML file.

    A relative ``template`` path is resolved against the directory that
    holds the configuration file.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated AuditorConfig instance.

    Raises:
        ConfigurationError: If the file cannot be read, has invalid YAML,
            or fails Pydantic validation.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{path}': {e}"
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    # Empty file or only comments
    if data is None:
        return get_default_config()

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    try:
        config = AuditorConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {format_validation_errors(e)}"
        ) from e

    logger.debug("Loaded configuration from %s", path)

    if config.template is not None and not Path(config.template).is_absolute():
        template_path = path.parent / config.template
        config = config.model_copy(update={"template": str(template_path)})
    return config


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors into a readable string.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Errors joined as ``loc: msg`` pairs separated by semicolons.
    """
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        messages.append(f"{loc}: {err['msg']}")
    return "; ".join(messages)


def load_config(config_path: str | None = None) -> AuditorConfig:
    """Load configuration from file or use defaults.

    Args:
        config_path: Optional path to a configuration file. When omitted,
            the current directory is searched for a default file name.

    Returns:
        AuditorConfig with loaded or default values.

    Raises:
        ConfigurationError: If the selected configuration file is invalid.
    """
    if config_path is not None:
        return load_config_file(Path(config_path))

    discovered = find_config_file()
    if discovered is not None:
        return load_config_file(discovered)

    return get_default_config()
