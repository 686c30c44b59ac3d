"""Sentinel-returning entry points for callers across a foreign-call boundary.

Every function takes the script as a byte buffer plus an explicit length and
never raises for bad input: a missing buffer, a non-positive length, a length
larger than the buffer, or bytes that are not UTF-8 all collapse to the
function's documented sentinel.

Returned strings are ordinary Python objects. :func:`release` exists so hosts
written against the allocate/release contract have a call to make; the
garbage collector does the actual work.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar, Union

from scriptlens.analysis.classifier import detect_script_type as _detect
from scriptlens.analysis.engine import DEFAULT_INTERPRETER
from scriptlens.analysis.metadata import extract_metadata, format_metadata
from scriptlens.analysis.models import HighlightScheme, ScriptType
from scriptlens.analysis.shebang import parse_shebang as _parse_shebang
from scriptlens.analysis.shebang import shebang_tokens
from scriptlens.analysis.stats import collect_stats, format_stats
from scriptlens.analysis.validator import check_execution_ready, validate
from scriptlens.errors import InvalidEncodingError, InvalidInputError, ScriptLensError
from scriptlens.output.ansi import SCHEME_ORDER, render_ansi

logger = logging.getLogger(__name__)

Buffer = Union[bytes, bytearray, memoryview]
T = TypeVar("T")

VALID = 1
INVALID = 0


def decode_script(buf: Optional[Buffer], length: int) -> str:
    """Decode the first *length* bytes of *buf* as UTF-8.

    Raises:
        InvalidInputError: buffer is None, length is not positive or exceeds
            the buffer.
        InvalidEncodingError: the bytes are not valid UTF-8.
    """
    if buf is None:
        raise InvalidInputError("script buffer is null")
    if not isinstance(length, int) or length <= 0:
        raise InvalidInputError(f"script length must be positive, got {length!r}")
    data = bytes(buf)
    if length > len(data):
        raise InvalidInputError(f"script length {length} exceeds buffer size {len(data)}")
    try:
        return data[:length].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncodingError(f"script is not valid UTF-8: {exc.reason}") from exc


def _guarded(buf: Optional[Buffer], length: int, fn: Callable[[str], T], sentinel: T) -> T:
    try:
        text = decode_script(buf, length)
    except ScriptLensError as exc:
        logger.debug("Rejected script input: %s", exc)
        return sentinel
    return fn(text)


# ---- classification / validation ----


def detect_script_type(buf: Optional[Buffer], length: int) -> int:
    """Script type code (Shell=0, Python=1, Perl=2, Ruby=3); 4 (Unknown) on bad input."""
    return _guarded(buf, length, lambda text: _detect(text).code, ScriptType.UNKNOWN.code)


def validate_script_syntax(buf: Optional[Buffer], length: int) -> int:
    """1 when the script looks structurally sound, 0 otherwise or on bad input."""
    return _guarded(buf, length, lambda text: VALID if validate(text) else INVALID, INVALID)


def validate_before_exec(buf: Optional[Buffer], length: int) -> int:
    """1 when the script starts with a usable shebang, 0 otherwise or on bad input."""
    return _guarded(
        buf, length, lambda text: VALID if check_execution_ready(text) else INVALID, INVALID
    )


# ---- shebang ----


def parse_shebang(buf: Optional[Buffer], length: int) -> Optional[str]:
    """Interpreter path, ``/bin/sh`` when there is no shebang, None on bad input."""

    def _interpreter(text: str) -> str:
        shebang = _parse_shebang(text, max_args=0)
        return shebang.interpreter if shebang is not None else DEFAULT_INTERPRETER

    return _guarded(buf, length, _interpreter, None)


def parse_shebang_with_args(buf: Optional[Buffer], length: int, max_args: int) -> Optional[bytes]:
    """Interpreter and arguments as NUL-separated, NUL-terminated UTF-8 bytes.

    *max_args* bounds the total number of tokens. Returns None on bad input,
    a non-positive *max_args*, or when there is no shebang.
    """
    if not isinstance(max_args, int) or max_args <= 0:
        return None

    def _flatten(text: str) -> Optional[bytes]:
        tokens = shebang_tokens(text, max_args)
        if not tokens:
            return None
        return b"".join(token.encode("utf-8") + b"\0" for token in tokens)

    return _guarded(buf, length, _flatten, None)


def split_args(flat: bytes) -> list[str]:
    """Inverse of the flat buffer produced by :func:`parse_shebang_with_args`."""
    return [part.decode("utf-8") for part in flat.split(b"\0")[:-1]]


# ---- metadata / stats / highlighting ----


def extract_script_metadata(buf: Optional[Buffer], length: int) -> Optional[str]:
    """``Field: value`` lines or ``"No metadata found"``; None on bad input."""
    return _guarded(buf, length, lambda text: format_metadata(extract_metadata(text)), None)


def get_script_stats(buf: Optional[Buffer], length: int) -> Optional[str]:
    """Statistics block including the detected type; None on bad input."""
    return _guarded(
        buf, length, lambda text: format_stats(collect_stats(text), _detect(text)), None
    )


def highlight_script(
    buf: Optional[Buffer],
    length: int,
    scheme: Union[HighlightScheme, str, int] = HighlightScheme.DEFAULT,
) -> Optional[str]:
    """ANSI-colored rendering; None on bad input or an unknown scheme."""
    resolved = _resolve_scheme(scheme)
    if resolved is None:
        return None
    return _guarded(buf, length, lambda text: render_ansi(text, resolved), None)


def _resolve_scheme(scheme: Union[HighlightScheme, str, int]) -> Optional[HighlightScheme]:
    if isinstance(scheme, int) and not isinstance(scheme, bool):
        if 0 <= scheme < len(SCHEME_ORDER):
            return SCHEME_ORDER[scheme]
        return None
    try:
        return HighlightScheme(scheme)
    except ValueError:
        return None


# ---- theme discovery ----


def get_theme_count() -> int:
    return len(SCHEME_ORDER)


def get_theme_name(index: int) -> Optional[str]:
    """Scheme name at *index*, or None when out of range."""
    if not isinstance(index, int) or not 0 <= index < len(SCHEME_ORDER):
        return None
    return SCHEME_ORDER[index].value


def release(value: object) -> None:
    """Paired release call for returned strings; nothing to free in Python."""
