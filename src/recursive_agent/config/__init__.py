"""Configuration module."""

from .engine_config import EngineConfig, load_config, get_config_paths

__all__ = [
    "EngineConfig",
    "load_config",
    "get_config_paths",
]
