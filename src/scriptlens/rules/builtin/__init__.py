"""Built-in classification rules, in evaluation order."""

from scriptlens.rules.builtin.content import ALL_CONTENT_RULES
from scriptlens.rules.builtin.shebang import ALL_SHEBANG_RULES
from scriptlens.rules.models import MarkerRule

ALL_BUILTIN_RULES: list[MarkerRule] = [
    *ALL_SHEBANG_RULES,
    *ALL_CONTENT_RULES,
]

__all__ = ["ALL_BUILTIN_RULES"]
