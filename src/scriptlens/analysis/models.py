"""Data models produced by the analysis components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class ScriptType(str, Enum):
    SHELL = "shell"
    PYTHON = "python"
    PERL = "perl"
    RUBY = "ruby"
    UNKNOWN = "unknown"

    @property
    def code(self) -> int:
        """Stable integer code used at the boundary (Shell=0 ... Unknown=4)."""
        return _SCRIPT_TYPE_CODES[self]

    @property
    def label(self) -> str:
        return self.value.capitalize()


_SCRIPT_TYPE_CODES = {
    ScriptType.SHELL: 0,
    ScriptType.PYTHON: 1,
    ScriptType.PERL: 2,
    ScriptType.RUBY: 3,
    ScriptType.UNKNOWN: 4,
}


class HighlightScheme(str, Enum):
    NANO = "nano"
    VIM = "vim"
    DEFAULT = "default"


class Category(str, Enum):
    COMMENT = "comment"
    STRING = "string"
    VARIABLE = "variable"
    KEYWORD = "keyword"
    OPERATOR = "operator"
    PLAIN = "plain"


class Failure(str, Enum):
    UNBALANCED_QUOTES = "unbalanced_quotes"
    UNBALANCED_BRACKETS = "unbalanced_brackets"
    MALFORMED_SHEBANG = "malformed_shebang"
    STRUCTURAL_MISMATCH = "structural_mismatch"


@dataclass(frozen=True, slots=True)
class Span:
    """A contiguous slice of one line tagged with a highlight category."""

    text: str
    category: Category
    start: int  # column of the first character within the line


@dataclass(frozen=True)
class Shebang:
    """Parsed ``#!`` line."""

    interpreter: str
    args: Tuple[str, ...] = ()
    raw: str = ""  # everything after the marker, untouched

    @property
    def command_line(self) -> str:
        return " ".join((self.interpreter, *self.args))


@dataclass(frozen=True)
class Classification:
    """Result of type classification and the rule that decided it."""

    script_type: ScriptType
    source: str  # 'shebang' | 'content' | 'custom' | 'fallback' | 'empty'
    rule_id: Optional[str] = None


@dataclass(frozen=True)
class ValidationOutcome:
    """Verdict of the syntax validator.

    ``failure`` names the first sub-check that failed; it is None when
    ``ok`` is True.
    """

    ok: bool
    script_type: ScriptType = ScriptType.UNKNOWN
    failure: Optional[Failure] = None
    detail: str = ""
    line_no: int = 0  # 1-based, 0 when not tied to a line
    block_indents: Tuple[int, ...] = ()

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class MetadataEntry:
    field: str
    value: str
    line_no: int = 0

    def __str__(self) -> str:
        return f"{self.field}: {self.value}"


@dataclass(frozen=True)
class ScriptStats:
    total_lines: int = 0
    code_lines: int = 0
    comment_lines: int = 0
    blank_lines: int = 0
    total_chars: int = 0


@dataclass(frozen=True)
class ExecutionPlan:
    """What a host-side process executor needs to run the script.

    ``stdin`` is the script text to be written to the interpreter's
    standard input.
    """

    argv: Tuple[str, ...]
    stdin: str
    script_type: ScriptType


@dataclass
class AnalysisReport:
    """Complete result of one analysis run."""

    classification: Classification
    validation: ValidationOutcome
    shebang: Optional[Shebang] = None
    metadata: List[MetadataEntry] = field(default_factory=list)
    stats: ScriptStats = field(default_factory=ScriptStats)
    source: str = "<stdin>"
    duration_ms: float = 0.0

    @property
    def script_type(self) -> ScriptType:
        return self.classification.script_type

    @property
    def is_valid(self) -> bool:
        return self.validation.ok
