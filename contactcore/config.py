"""Configuration management for the contact analysis engine."""

import os
import json
from pathlib import Path
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from .error_handling import ConfigurationError


class DeduplicationConfig(BaseModel):
    """Duplicate detection settings."""

    # The review UI offers 0.5-0.95 in 0.05 steps; any value in (0, 1] is accepted here
    threshold: float = Field(default=0.8, gt=0.0, le=1.0)


class NetworkConfig(BaseModel):
    """Relationship graph settings."""

    min_edge_strength: float = Field(default=1.0, ge=0.0, le=10.0)
    influencer_min_strength: float = Field(default=3.0, ge=0.0, le=10.0)


class LayoutConfig(BaseModel):
    """Force-directed layout canvas settings."""

    width: float = Field(default=800.0, ge=100.0)
    height: float = Field(default=600.0, ge=100.0)
    iterations: int = Field(default=100, ge=0)


class EngineConfig(BaseModel):
    """Main configuration for the contact analysis engine."""

    deduplication: DeduplicationConfig = Field(default_factory=DeduplicationConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    log_level: str = "INFO"
    log_format: str = "text"


class ConfigManager:
    """Manages configuration loading and validation."""

    DEFAULT_CONFIG = {
        "deduplication": {"threshold": 0.8},
        "network": {"min_edge_strength": 1.0, "influencer_min_strength": 3.0},
        "layout": {"width": 800.0, "height": 600.0, "iterations": 100},
        "log_level": "INFO",
        "log_format": "text",
    }

    ENV_OVERRIDES = {
        "CONTACTCORE_DUPLICATE_THRESHOLD": ("deduplication", "threshold", float),
        "CONTACTCORE_MIN_EDGE_STRENGTH": ("network", "min_edge_strength", float),
        "CONTACTCORE_LAYOUT_WIDTH": ("layout", "width", float),
        "CONTACTCORE_LAYOUT_HEIGHT": ("layout", "height", float),
        "CONTACTCORE_LAYOUT_ITERATIONS": ("layout", "iterations", int),
    }

    def __init__(self, config_path: Optional[str] = None):
        """Initialize config manager.

        Args:
            config_path: Path to a JSON config file. If None, uses defaults + env vars
        """
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[EngineConfig] = None

    def load(self) -> EngineConfig:
        """Load configuration from defaults, file and environment."""
        if self._config:
            return self._config

        config_dict = json.loads(json.dumps(self.DEFAULT_CONFIG))

        if self.config_path:
            if not self.config_path.exists():
                raise ConfigurationError(
                    f"Config file not found: {self.config_path}",
                    config_key="config_path",
                )
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"Config file is not valid JSON: {e}", config_key="config_path"
                ) from e
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigurationError(
                    f"Cannot read config file {self.config_path}: {e}", config_key="config_path"
                ) from e
            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    "Config file must hold a JSON object", config_key="config_path"
                )
            config_dict = self._deep_merge(config_dict, file_config)

        config_dict = self._apply_env_overrides(config_dict)

        try:
            self._config = EngineConfig(**config_dict)
        except PydanticValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first["loc"])
            raise ConfigurationError(
                f"Invalid configuration value for {key}: {first['msg']}", config_key=key
            ) from e
        return self._config

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in update.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides."""
        for env_key, (section, key, cast) in self.ENV_OVERRIDES.items():
            raw = os.getenv(env_key)
            if not raw:
                continue
            try:
                value = cast(raw)
            except ValueError as e:
                raise ConfigurationError(
                    f"{env_key} must be a {cast.__name__}, got {raw!r}", config_key=env_key
                ) from e
            config.setdefault(section, {})[key] = value

        log_level = os.getenv("CONTACTCORE_LOG_LEVEL")
        if log_level:
            config["log_level"] = log_level.upper()

        return config

    def save_template(self, path: str) -> None:
        """Save a configuration template file with the default values."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.DEFAULT_CONFIG, f, indent=2)

    @property
    def config(self) -> EngineConfig:
        """Get the loaded configuration."""
        return self.load()
