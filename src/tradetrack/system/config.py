"""
System configuration.

One YAML file configures the whole tool. Every key is optional; missing
keys fall back to built-in defaults, and ``${VAR}`` placeholders are
substituted from the environment.

Search order for the config file:
1. Explicit path passed to SystemConfig.load() / get_system_config()
2. $TRADETRACK_CONFIG
3. config/tradetrack.yaml (relative to the working directory)

Example (config/tradetrack.yaml):
    metrics:
      risk_free_rate: 0.045
      consistency_threshold: 30
      pip_values:
        EUR/GBP: 12.7

    logging:
      level: DEBUG
      enable_file: false
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from tradetrack.system.log_system import LoggingConfig as LoggerConfig

DEFAULT_CONFIG_PATH = Path("config/tradetrack.yaml")
CONFIG_ENV_VAR = "TRADETRACK_CONFIG"

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


class MetricsConfig(BaseModel):
    """Default parameters for the calculators.

    Engine functions take these as explicit arguments; this section only
    supplies the defaults used by the CLI and other callers. Values are
    coerced to their field types, so ${VAR} substitutions (always strings)
    arrive as numbers.
    """

    risk_free_rate: float = 0.02
    consistency_threshold: float = 20.0
    default_risk_percent: float = 0.9
    default_rr_ratio: float = 1.0
    breakdown_limit: int = 24
    pip_values: dict[str, float] = Field(default_factory=dict)


class LoggingConfig(BaseModel):
    """Logging section of the system configuration."""

    level: str = "INFO"
    format: str = "console"
    enable_file: bool = False
    file_path: str = "logs/tradetrack.log"
    file_level: str = "WARNING"
    file_rotation: bool = True
    max_file_size_mb: int = 10
    backup_count: int = 3

    def to_logger_config(self) -> LoggerConfig:
        """Convert to the log_system.LoggingConfig used by LoggerFactory."""
        return LoggerConfig(
            level=self.level,  # type: ignore[arg-type]
            format=self.format,  # type: ignore[arg-type]
            enable_file=self.enable_file,
            file_path=Path(self.file_path),
            file_level=self.file_level,  # type: ignore[arg-type]
            file_rotation=self.file_rotation,
            max_file_size_mb=self.max_file_size_mb,
            backup_count=self.backup_count,
        )


@dataclass
class SystemConfig:
    """Complete system configuration."""

    metrics: MetricsConfig = field(default_factory=MetricsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path | str | None = None) -> "SystemConfig":
        """
        Load configuration from YAML, merged over built-in defaults.

        Args:
            path: Config file path. If None, uses $TRADETRACK_CONFIG or
                  config/tradetrack.yaml.

        Returns:
            SystemConfig. All defaults if the file is missing or empty.

        Raises:
            yaml.YAMLError: If the file is not valid YAML
            ValueError: If the top level of the file is not a mapping
        """
        if path is None:
            path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
        config_path = Path(path)

        if not config_path.exists():
            return cls()

        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping, got {type(raw).__name__}")

        return cls._from_dict(_substitute_env_vars(raw))

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "SystemConfig":
        """Build config from a (possibly partial) dictionary. Unknown keys are ignored."""
        defaults = {
            "metrics": MetricsConfig().model_dump(),
            "logging": LoggingConfig().model_dump(),
        }
        merged = _deep_merge(defaults, data)

        return cls(
            metrics=_build(MetricsConfig, merged["metrics"]),
            logging=_build(LoggingConfig, merged["logging"]),
        )


def _build(config_cls: type[BaseModel], values: Any) -> Any:
    if not isinstance(values, dict):
        raise ValueError(f"Section for {config_cls.__name__} must be a mapping, got {type(values).__name__}")
    # Unknown keys are ignored; pydantic.ValidationError is a ValueError
    return config_cls.model_validate(values)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base (override wins). Inputs are not modified."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _substitute_env_vars(value: Any) -> Any:
    """Replace ${VAR} in strings (recursively). Undefined variables are left as-is."""
    if isinstance(value, dict):
        return {key: _substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
    return value


_system_config: SystemConfig | None = None


def get_system_config(path: Path | str | None = None) -> SystemConfig:
    """
    Get the system configuration singleton.

    Args:
        path: Optional explicit config file. When given, the file is loaded
              and replaces the cached instance.
    """
    global _system_config
    if path is not None or _system_config is None:
        _system_config = SystemConfig.load(path)
    return _system_config


def reload_system_config(path: Path | str | None = None) -> SystemConfig:
    """Force a reload of the system configuration singleton."""
    global _system_config
    _system_config = SystemConfig.load(path)
    return _system_config
