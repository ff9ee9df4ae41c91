"""
Configuration management for viewtour.

This module provides dataclass-based configuration models loaded from
YAML or JSON files.
"""

from viewtour.config.settings import (
    ViewtourConfig,
    PlannerConfig,
    OutputConfig,
    LoggingConfig,
    load_config,
)

__all__ = [
    "ViewtourConfig",
    "PlannerConfig",
    "OutputConfig",
    "LoggingConfig",
    "load_config",
]
