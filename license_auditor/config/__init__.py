"""Configuration handling for license-auditor."""
from __future__ import annotations

from license_auditor.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_auditor.config.loader import (
    find_config_file,
    format_validation_errors,
    load_config,
    load_config_file,
)
from license_auditor.models.config import AuditorConfig, LicenseOverride

__all__ = [
    "AuditorConfig",
    "DEFAULT_CONFIG_NAMES",
    "LicenseOverride",
    "find_config_file",
    "format_validation_errors",
    "get_default_config",
    "load_config",
    "load_config_file",
]
