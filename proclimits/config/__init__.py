"""Configuration management for proclimits."""

from proclimits.config.loader import load_config
from proclimits.config.models import LoggingConfig, ProcLimitsConfig

__all__ = [
    "load_config",
    "LoggingConfig",
    "ProcLimitsConfig",
]
