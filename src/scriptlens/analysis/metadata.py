"""Header metadata extraction from ``# Field: value`` comment lines.

Only the first :data:`METADATA_WINDOW` lines are inspected. Code lines inside
the window do not end the scan, so a header that follows a few statements
(``set -e`` and the like) is still picked up.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from scriptlens.analysis.models import MetadataEntry
from scriptlens.analysis.shebang import shebang_body
from scriptlens.analysis.text import COMMENT_MARKER, script_lines

METADATA_WINDOW = 50
NO_METADATA = "No metadata found"
INTERPRETER_FIELD = "Interpreter"

# (pattern, field name) in match priority order
METADATA_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("author:", "Author"),
    ("version:", "Version"),
    ("description:", "Description"),
    ("date:", "Date"),
    ("license:", "License"),
    ("copyright:", "Copyright"),
    ("filename:", "Filename"),
    ("usage:", "Usage"),
    ("purpose:", "Purpose"),
    ("note:", "Note"),
    ("todo:", "Todo"),
    ("fixme:", "Fixme"),
    ("bug:", "Bug"),
    ("created:", "Created"),
    ("modified:", "Modified"),
    ("updated:", "Updated"),
)

FIELD_NAMES = frozenset(name for _, name in METADATA_FIELDS)

_FIELD_RES = tuple(
    (re.compile(re.escape(pattern), re.IGNORECASE), name)
    for pattern, name in METADATA_FIELDS
)


def match_field(comment: str) -> Optional[Tuple[str, str]]:
    """Return (field, value) for the first vocabulary pattern found in *comment*.

    Empty values do not count as a match.
    """
    for pattern, name in _FIELD_RES:
        m = pattern.search(comment)
        if m is None:
            continue
        value = comment[m.end():].strip()
        if value:
            return name, value
        return None
    return None


def extract_metadata(text: str) -> List[MetadataEntry]:
    """Return metadata entries from the script header, in line order."""
    entries: List[MetadataEntry] = []
    lines = script_lines(text)[:METADATA_WINDOW]

    body = shebang_body(text)
    if body is not None and body.strip():
        entries.append(MetadataEntry(INTERPRETER_FIELD, body.strip(), line_no=1))

    for line_no, line in enumerate(lines, 1):
        if line_no == 1 and body is not None:
            continue
        trimmed = line.strip()
        if not trimmed.startswith(COMMENT_MARKER):
            continue
        hit = match_field(trimmed[len(COMMENT_MARKER):].strip())
        if hit is not None:
            entries.append(MetadataEntry(hit[0], hit[1], line_no=line_no))

    return entries


def format_metadata(entries: List[MetadataEntry]) -> str:
    """Render entries as ``Field: value`` lines, or the no-metadata sentinel."""
    if not entries:
        return NO_METADATA
    return "\n".join(str(e) for e in entries)
