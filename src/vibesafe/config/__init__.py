"""Configuration loading, schema, and defaults."""

from vibesafe.config.loader import ConfigError, load_config
from vibesafe.config.schema import Severity, VibeSafeConfig, severity_at_or_above

__all__ = [
    "ConfigError",
    "Severity",
    "VibeSafeConfig",
    "load_config",
    "severity_at_or_above",
]
