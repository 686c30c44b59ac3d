"""Shebang parsing.

Shebang lines do not support quoting, so tokens are plain
whitespace-delimited words.
"""

from __future__ import annotations

from typing import List, Optional

from scriptlens.analysis.models import Shebang
from scriptlens.analysis.text import SHEBANG_MARKER, first_line

DEFAULT_MAX_ARGS = 16


def has_shebang(text: str) -> bool:
    return first_line(text).startswith(SHEBANG_MARKER)


def shebang_body(text: str) -> Optional[str]:
    """Return the text after ``#!`` on the first line, or None without a shebang."""
    line = first_line(text)
    if not line.startswith(SHEBANG_MARKER):
        return None
    return line[len(SHEBANG_MARKER):]


def parse_shebang(text: str, max_args: int = DEFAULT_MAX_ARGS) -> Optional[Shebang]:
    """Parse the interpreter and up to *max_args* arguments from the first line.

    Returns None when there is no shebang or the shebang names no interpreter.
    """
    if max_args < 0:
        raise ValueError(f"max_args must not be negative, got {max_args}")
    body = shebang_body(text)
    if body is None:
        return None
    tokens = body.split()
    if not tokens:
        return None
    return Shebang(interpreter=tokens[0], args=tuple(tokens[1:1 + max_args]), raw=body)


def shebang_tokens(text: str, max_tokens: int) -> List[str]:
    """Interpreter followed by its arguments, at most *max_tokens* in total."""
    if max_tokens <= 0:
        return []
    shebang = parse_shebang(text, max_args=max_tokens - 1)
    if shebang is None:
        return []
    return [shebang.interpreter, *shebang.args]
