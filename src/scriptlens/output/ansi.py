"""Highlight schemes: category styles and raw ANSI rendering.

The scheme only changes color intensity: ``nano`` and ``default`` use the
standard palette, ``vim`` the bright one.
"""

from __future__ import annotations

import re
from typing import Dict, List, Union

from rich.color import ColorSystem
from rich.style import Style

from scriptlens.analysis.highlight import highlight
from scriptlens.analysis.models import Category, HighlightScheme, Span

# Index order is the public theme enumeration order.
SCHEME_ORDER = (HighlightScheme.NANO, HighlightScheme.VIM, HighlightScheme.DEFAULT)

_CATEGORY_COLORS: Dict[Category, str] = {
    Category.COMMENT: "green",
    Category.STRING: "yellow",
    Category.KEYWORD: "blue",
    Category.VARIABLE: "cyan",
    Category.OPERATOR: "magenta",
}

_BRIGHT_SCHEMES = frozenset({HighlightScheme.VIM})


def _build_styles(scheme: HighlightScheme) -> Dict[Category, Style]:
    prefix = "bright_" if scheme in _BRIGHT_SCHEMES else ""
    styles = {cat: Style(color=prefix + color) for cat, color in _CATEGORY_COLORS.items()}
    styles[Category.PLAIN] = Style.null()
    return styles


SCHEME_STYLES: Dict[HighlightScheme, Dict[Category, Style]] = {
    scheme: _build_styles(scheme) for scheme in SCHEME_ORDER
}


def _emitted_sequences() -> List[str]:
    seqs = set()
    for styles in SCHEME_STYLES.values():
        for style in styles.values():
            opener, _, closer = style.render("\0", color_system=ColorSystem.STANDARD).partition("\0")
            seqs.update(s for s in (opener, closer) if s)
    return sorted(seqs, key=len, reverse=True)


# Only the sequences the scheme table emits; escapes already in the script survive.
_ANSI_RE = re.compile("|".join(re.escape(s) for s in _emitted_sequences()))


def style_for(category: Category, scheme: Union[HighlightScheme, str]) -> Style:
    return SCHEME_STYLES[HighlightScheme(scheme)][category]


def render_spans(spans: List[Span], scheme: Union[HighlightScheme, str]) -> str:
    """Bracket every styled span with color escapes; plain spans pass through."""
    styles = SCHEME_STYLES[HighlightScheme(scheme)]
    return "".join(
        styles[span.category].render(span.text, color_system=ColorSystem.STANDARD)
        for span in spans
    )


def render_ansi(text: str, scheme: Union[HighlightScheme, str] = HighlightScheme.DEFAULT) -> str:
    """Render *text* with ANSI colors, keeping its line structure."""
    rendered = "\n".join(render_spans(spans, scheme) for spans in highlight(text, scheme))
    if text.endswith("\n"):
        rendered += "\n"
    return rendered


def strip_ansi(rendered: str) -> str:
    return _ANSI_RE.sub("", rendered)
