"""Configuration loading, schema, and defaults."""

from scriptlens.config.loader import ConfigError, load_config
from scriptlens.config.schema import ScriptLensConfig

__all__ = [
    "ConfigError",
    "ScriptLensConfig",
    "load_config",
]
