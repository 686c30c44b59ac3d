"""Line and character statistics."""

from __future__ import annotations

from typing import Optional

from scriptlens.analysis.models import ScriptStats, ScriptType
from scriptlens.analysis.text import is_blank, is_comment, script_lines


def collect_stats(text: str) -> ScriptStats:
    """Count blank, comment and code lines; every line lands in exactly one bucket."""
    blank = comment = code = 0
    lines = script_lines(text)
    for line in lines:
        if is_blank(line):
            blank += 1
        elif is_comment(line):
            comment += 1
        else:
            code += 1
    return ScriptStats(
        total_lines=len(lines),
        code_lines=code,
        comment_lines=comment,
        blank_lines=blank,
        total_chars=len(text),
    )


def format_stats(stats: ScriptStats, script_type: Optional[ScriptType] = None) -> str:
    lines = ["Script Statistics:"]
    if script_type is not None:
        lines.append(f"Type: {script_type.label}")
    lines.extend([
        f"Total lines: {stats.total_lines}",
        f"Code lines: {stats.code_lines}",
        f"Comment lines: {stats.comment_lines}",
        f"Blank lines: {stats.blank_lines}",
        f"Total characters: {stats.total_chars}",
    ])
    return "\n".join(lines)
