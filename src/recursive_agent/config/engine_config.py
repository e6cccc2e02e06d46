"""Engine configuration management."""

import os
import logging
from pathlib import Path
from typing import Optional, Dict, Any

import yaml
from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "RECURSIVE_AGENT_"
CONFIG_DIR_NAME = ".recursive-agent"


class EngineConfig(BaseModel):
    """Runtime configuration for the engine, server and CLI."""

    # Recursion
    default_max_depth: int = Field(
        default=3, ge=0, description="Depth ceiling when a request omits one"
    )
    max_depth_limit: int = Field(
        default=5, ge=0, description="Largest depth ceiling a request may ask for"
    )

    # Simulated executor latency (seconds)
    min_latency_seconds: float = Field(default=0.8, ge=0.0)
    max_latency_seconds: float = Field(default=1.5, ge=0.0)

    # Server
    host: str = Field(default="127.0.0.1", description="Bind address for serve")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port for serve")

    log_level: str = Field(default="WARNING", description="Root log level")

    class Config:
        """Pydantic configuration."""

        extra = "allow"  # Allow extra fields from config files

    @model_validator(mode="after")
    def _check_ranges(self) -> "EngineConfig":
        if self.max_latency_seconds < self.min_latency_seconds:
            raise ValueError("max_latency_seconds must be >= min_latency_seconds")
        if self.default_max_depth > self.max_depth_limit:
            raise ValueError("default_max_depth must not exceed max_depth_limit")
        return self


def get_config_paths() -> list[Path]:
    """
    Get configuration file paths in priority order.

    Returns:
        List of paths, highest priority last
    """
    return [
        Path.home() / CONFIG_DIR_NAME / "config.yaml",
        Path.cwd() / CONFIG_DIR_NAME / "config.yaml",
    ]


def load_config(config_path: Optional[str] = None) -> EngineConfig:
    """
    Load engine configuration from files and environment.

    Configuration is merged in this order (later overrides earlier):
    1. Default values
    2. Global config (~/.recursive-agent/config.yaml)
    3. Project config (./.recursive-agent/config.yaml)
    4. Explicit config_path if provided
    5. Environment variables (RECURSIVE_AGENT_*)

    Args:
        config_path: Optional explicit config file path

    Returns:
        Merged EngineConfig instance
    """
    merged_config: Dict[str, Any] = {}

    config_paths = get_config_paths()
    if config_path:
        config_paths.append(Path(config_path))

    for path in config_paths:
        if path.exists():
            try:
                with open(path) as f:
                    file_config = yaml.safe_load(f) or {}
                # Only merge 'engine' section if present, otherwise use whole file
                if "engine" in file_config:
                    merged_config.update(file_config["engine"])
                else:
                    merged_config.update(file_config)
                logger.debug(f"Loaded config from {path}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {path}: {e}")

    merged_config.update(_get_env_overrides())

    return EngineConfig(**merged_config)


def _get_env_overrides() -> Dict[str, Any]:
    """
    Get configuration overrides from environment variables.

    RECURSIVE_AGENT_DEFAULT_MAX_DEPTH=2 -> default_max_depth=2.
    Boolean values: "true", "yes" are True; "false", "no" are False.
    Numeric values are converted automatically.

    Returns:
        Dictionary of overrides
    """
    overrides: Dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        config_key = key[len(ENV_PREFIX) :].lower()
        lowered = value.lower()

        if lowered in ("true", "yes"):
            overrides[config_key] = True
        elif lowered in ("false", "no"):
            overrides[config_key] = False
        else:
            try:
                overrides[config_key] = int(value)
            except ValueError:
                try:
                    overrides[config_key] = float(value)
                except ValueError:
                    overrides[config_key] = value

    return overrides
