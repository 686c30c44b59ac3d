"""Script type classification.

Rules are evaluated in strict priority order and the first match wins:
shebang rules, then built-in content rules, then custom content rules.
A script that matches nothing falls back to Shell; only a text without any
lines is Unknown.
"""

from __future__ import annotations

import logging
from typing import Optional

from scriptlens.analysis.models import Classification, ScriptType
from scriptlens.analysis.shebang import parse_shebang
from scriptlens.analysis.text import script_lines
from scriptlens.rules.registry import RuleRegistry, build_registry

logger = logging.getLogger(__name__)

FALLBACK_TYPE = ScriptType.SHELL

# Built once at import time and never mutated afterwards.
_DEFAULT_REGISTRY = build_registry()


def default_registry() -> RuleRegistry:
    return _DEFAULT_REGISTRY


def classify(text: str, registry: Optional[RuleRegistry] = None) -> Classification:
    """Classify *text* and report which rule decided the type."""
    if registry is None:
        registry = _DEFAULT_REGISTRY

    if not script_lines(text):
        return Classification(ScriptType.UNKNOWN, source="empty")

    shebang = parse_shebang(text)
    if shebang is not None:
        for rule in registry.shebang_rules():
            if rule.matches(shebang.raw):
                logger.debug("Shebang %r matched %s", shebang.raw, rule.id)
                return Classification(rule.script_type, source="shebang", rule_id=rule.id)

    for rule in registry.content_rules():
        if rule.matches(text):
            logger.debug("Content matched %s -> %s", rule.id, rule.script_type.value)
            source = "content" if rule.builtin else "custom"
            return Classification(rule.script_type, source=source, rule_id=rule.id)

    logger.debug("No rule matched, falling back to %s", FALLBACK_TYPE.value)
    return Classification(FALLBACK_TYPE, source="fallback")


def detect_script_type(text: str, registry: Optional[RuleRegistry] = None) -> ScriptType:
    return classify(text, registry).script_type
