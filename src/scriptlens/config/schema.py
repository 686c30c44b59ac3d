"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

SchemeName = Literal["nano", "vim", "default"]
OutputFormat = Literal["terminal", "json"]

SCHEME_NAMES = ("nano", "vim", "default")
OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class ShebangConfig:
    max_args: int = 16  # arguments kept after the interpreter


@dataclass
class HighlightConfig:
    scheme: SchemeName = "default"


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class RulesConfig:
    disable: List[str] = field(default_factory=list)  # built-in rule ids
    custom_dir: str = ".scriptlens-rules"


@dataclass
class ScriptLensConfig:
    version: str = "1.0"
    shebang: ShebangConfig = field(default_factory=ShebangConfig)
    highlight: HighlightConfig = field(default_factory=HighlightConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
