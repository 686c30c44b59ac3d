"""Load and merge configuration from .scriptlens.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from scriptlens.config.schema import (
    OUTPUT_FORMATS,
    SCHEME_NAMES,
    HighlightConfig,
    OutputConfig,
    RulesConfig,
    ScriptLensConfig,
    ShebangConfig,
)
from scriptlens.errors import ScriptLensError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".scriptlens.toml"


class ConfigError(ScriptLensError):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _check(cfg: ScriptLensConfig) -> None:
    if cfg.highlight.scheme not in SCHEME_NAMES:
        raise ConfigError(f"Unknown highlight scheme: {cfg.highlight.scheme}")
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Unknown output format: {cfg.output.format}")
    if not isinstance(cfg.shebang.max_args, int) or cfg.shebang.max_args < 0:
        raise ConfigError(f"shebang.max_args must be a non-negative integer, got {cfg.shebang.max_args!r}")
    if not isinstance(cfg.rules.disable, list):
        raise ConfigError("rules.disable must be a list of rule ids")


def _merge_env_overrides(cfg: ScriptLensConfig) -> None:
    """Apply SCRIPTLENS_* environment variable overrides."""
    if val := os.environ.get("SCRIPTLENS_SCHEME"):
        if val in SCHEME_NAMES:
            cfg.highlight.scheme = val  # type: ignore[assignment]
    if val := os.environ.get("SCRIPTLENS_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("SCRIPTLENS_DISABLE_RULES"):
        cfg.rules.disable.extend(r.strip() for r in val.split(",") if r.strip())
    if val := os.environ.get("SCRIPTLENS_MAX_ARGS"):
        try:
            max_args = int(val)
        except ValueError:
            logger.debug("Ignoring non-integer SCRIPTLENS_MAX_ARGS=%r", val)
        else:
            if max_args >= 0:
                cfg.shebang.max_args = max_args


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> ScriptLensConfig:
    """Load, validate, and return a ScriptLensConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = ScriptLensConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = ScriptLensConfig(
                version=str(raw.get("version", "1.0")),
                shebang=_build_section(raw, ShebangConfig, "shebang"),
                highlight=_build_section(raw, HighlightConfig, "highlight"),
                output=_build_section(raw, OutputConfig, "output"),
                rules=_build_section(raw, RulesConfig, "rules"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc
        _check(cfg)
        logger.debug("Loaded config from %s", config_path)

    _merge_env_overrides(cfg)
    return cfg
