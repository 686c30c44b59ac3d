"""Exception hierarchy shared by the analysis core and the boundary layer."""

from __future__ import annotations


class ScriptLensError(Exception):
    """Base class for every error raised by scriptlens."""


class InvalidInputError(ScriptLensError):
    """Raised when the script buffer is missing or its length is not positive."""


class InvalidEncodingError(ScriptLensError):
    """Raised when the script bytes are not valid UTF-8."""


class UnsupportedScriptTypeError(ScriptLensError):
    """Raised when an operation needs a known script type but got Unknown."""


class RuleError(ScriptLensError):
    """Raised when a custom classifier rule file is malformed."""
