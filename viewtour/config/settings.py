"""
Configuration settings for the tour planner.

This module provides typed configuration classes for all viewtour settings,
supporting loading from YAML/JSON files.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, Union
import json
import logging

import yaml

from viewtour.core.errors import ConfigurationError


@dataclass
class PlannerConfig:
    """
    Tour construction settings.

    Attributes:
        time_budget_seconds: Wall-clock budget for construction (None = unlimited)
        required_coverage: Selected covering pairs each sample needs
        strict_time_budget: Fail with TimedOut instead of returning the
            partial tour when the budget expires
    """
    time_budget_seconds: Optional[float] = None
    required_coverage: int = 3
    strict_time_budget: bool = False

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: If a setting has the wrong type or is out of range
        """
        budget = self.time_budget_seconds
        if budget is not None and (isinstance(budget, bool) or not isinstance(budget, (int, float))):
            raise ConfigurationError(f"time_budget_seconds must be a number, got {budget!r}")
        if isinstance(self.required_coverage, bool) or not isinstance(self.required_coverage, int):
            raise ConfigurationError(
                f"required_coverage must be an integer, got {self.required_coverage!r}"
            )

        if budget is not None and budget < 0:
            raise ConfigurationError(
                f"time_budget_seconds must be >= 0, got {self.time_budget_seconds}"
            )
        if self.required_coverage < 1:
            raise ConfigurationError(
                f"required_coverage must be >= 1, got {self.required_coverage}"
            )


@dataclass
class OutputConfig:
    """
    Solution encoding settings.

    Attributes:
        indent: JSON indentation (None for compact output)
        include_validation: Emit the validation block
        decimals: Round distance/precision to this many decimals (None = exact)
    """
    indent: Optional[int] = 2
    include_validation: bool = True
    decimals: Optional[int] = None


@dataclass
class LoggingConfig:
    """Logging level name and optional log file."""
    level: str = "INFO"
    log_file: Optional[str] = None

    def validate(self) -> None:
        if not isinstance(self.level, str) or not isinstance(logging.getLevelName(self.level.upper()), int):
            raise ConfigurationError(f"unknown logging level: {self.level!r}")


@dataclass
class ViewtourConfig:
    """
    Main viewtour configuration.

    Attributes:
        planner: Tour construction settings
        output: Solution encoding settings
        logging: Logging settings
    """
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        def convert(obj):
            if hasattr(obj, '__dataclass_fields__'):
                return {k: convert(v) for k, v in obj.__dict__.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert(v) for v in obj]
            else:
                return obj
        return convert(self)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ViewtourConfig":
        """
        Create from dictionary.

        Raises:
            ConfigurationError: On a non-mapping document, unknown keys or
                out-of-range planner settings
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"expected a mapping, got {type(data).__name__}")

        unknown = sorted(set(data) - {'planner', 'output', 'logging'})
        if unknown:
            raise ConfigurationError(f"unknown configuration sections: {unknown}")

        config = cls(
            planner=_build_section(PlannerConfig, data, 'planner'),
            output=_build_section(OutputConfig, data, 'output'),
            logging=_build_section(LoggingConfig, data, 'logging'),
        )
        config.planner.validate()
        config.logging.validate()
        return config

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ViewtourConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"invalid YAML: {e}", str(path)) from None
        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "ViewtourConfig":
        """Load configuration from JSON file."""
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"invalid JSON: {e}", str(path)) from None
        return cls.from_dict(data)

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_json(self, path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def load_config(path: Optional[Union[str, Path]] = None) -> ViewtourConfig:
    """
    Load configuration from file or return defaults.

    Supports YAML and JSON files based on extension.

    Args:
        path: Path to configuration file (optional)

    Returns:
        ViewtourConfig instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file can't be parsed or holds invalid settings
    """
    if path is None:
        return ViewtourConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in ['.yaml', '.yml']:
        return ViewtourConfig.from_yaml(path)
    elif suffix == '.json':
        return ViewtourConfig.from_json(path)
    else:
        raise ConfigurationError(f"Unsupported configuration format: {suffix}", str(path))


def _build_section(section_cls, data: dict, name: str) -> Any:
    values = data.get(name)
    if values is None:
        return section_cls()
    if not isinstance(values, dict):
        raise ConfigurationError(f"section {name!r} must be a mapping, got {type(values).__name__}")

    unknown = sorted(set(values) - {f.name for f in fields(section_cls)})
    if unknown:
        raise ConfigurationError(f"unknown keys in section {name!r}: {unknown}")
    return section_cls(**values)
