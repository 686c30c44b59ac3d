"""Marker rule data model. Patterns are stored as strings and compiled on first use."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from scriptlens.analysis.models import ScriptType

SHEBANG = "shebang"
CONTENT = "content"


@dataclass
class MarkerRule:
    """One row of the classification table.

    ``patterns`` are literal substrings. A rule matches when any pattern is
    found, or when all of them are found if ``require_all`` is set. Shebang
    rules match the text after ``#!`` case-sensitively; content rules
    match the whole text case-insensitively.
    """

    id: str
    script_type: ScriptType
    patterns: List[str]
    source: str = CONTENT  # shebang | content
    require_all: bool = False
    description: str = ""
    builtin: bool = True
    enabled: bool = True

    _compiled: Optional[List[re.Pattern[str]]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def compiled_patterns(self) -> List[re.Pattern[str]]:
        if self._compiled is None:
            flags = re.IGNORECASE if self.source == CONTENT else 0
            self._compiled = [re.compile(re.escape(p), flags) for p in self.patterns]
        return self._compiled

    @property
    def is_shebang_rule(self) -> bool:
        return self.source == SHEBANG

    def matches(self, text: str) -> bool:
        hits = (p.search(text) is not None for p in self.compiled_patterns)
        return all(hits) if self.require_all else any(hits)
