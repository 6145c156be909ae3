"""Default configuration values for license-auditor."""

from __future__ import annotations

from license_auditor.models.config import AuditorConfig

# Default configuration file names to search for
DEFAULT_CONFIG_NAMES = [".license-auditor.yaml", ".license-auditor.yml"]


def get_default_config() -> AuditorConfig:
    """Get the default configuration.

    Returns:
        AuditorConfig with all defaults: no allow-list, nothing ignored,
        no overrides and the plain-text notices report.
    """
    return AuditorConfig()
