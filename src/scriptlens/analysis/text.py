"""Line splitting shared by every analysis component."""

from __future__ import annotations

from typing import List

COMMENT_MARKER = "#"
SHEBANG_MARKER = "#!"


def raw_lines(text: str) -> List[str]:
    """Split on ``\\n`` only, keeping any ``\\r`` inside the line.

    A final newline does not produce a trailing empty line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def script_lines(text: str) -> List[str]:
    """Lines for analysis: like :func:`raw_lines` with CRLF endings normalised."""
    return [line[:-1] if line.endswith("\r") else line for line in raw_lines(text)]


def first_line(text: str) -> str:
    lines = script_lines(text)
    return lines[0] if lines else ""


def is_comment(line: str) -> bool:
    return line.strip().startswith(COMMENT_MARKER)


def is_blank(line: str) -> bool:
    return not line.strip()
