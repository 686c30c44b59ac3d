"""Rule registry: loads built-in and custom marker rules, applies config filters."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from scriptlens.analysis.models import ScriptType
from scriptlens.config.schema import ScriptLensConfig
from scriptlens.errors import RuleError
from scriptlens.rules.models import CONTENT, MarkerRule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Ordered store of classification rules.

    Registration order is evaluation order, so the registry keeps insertion
    order and re-registering an id keeps its original slot.
    """

    def __init__(self) -> None:
        self._rules: Dict[str, MarkerRule] = {}

    # ---- registration ----

    def register(self, rule: MarkerRule) -> None:
        # Copy so that enabling/disabling never touches the module-level tables.
        self._rules[rule.id] = dataclasses.replace(rule)

    def register_many(self, rules: List[MarkerRule]) -> None:
        for r in rules:
            self.register(r)

    # ---- queries ----

    @property
    def all_rules(self) -> List[MarkerRule]:
        return list(self._rules.values())

    def get(self, rule_id: str) -> Optional[MarkerRule]:
        return self._rules.get(rule_id)

    def enabled_rules(self) -> List[MarkerRule]:
        return [r for r in self._rules.values() if r.enabled]

    def shebang_rules(self) -> List[MarkerRule]:
        return [r for r in self.enabled_rules() if r.is_shebang_rule]

    def content_rules(self) -> List[MarkerRule]:
        """Content rules, built-ins first, then custom rules in load order."""
        rules = [r for r in self.enabled_rules() if not r.is_shebang_rule]
        return [r for r in rules if r.builtin] + [r for r in rules if not r.builtin]

    # ---- config filtering ----

    def apply_config(self, config: ScriptLensConfig) -> None:
        """Disable the rules listed in ``config.rules.disable``."""
        disabled = set(config.rules.disable)
        for rule in self._rules.values():
            if rule.id in disabled:
                rule.enabled = False
        unknown = disabled - set(self._rules)
        if unknown:
            logger.debug("Ignoring unknown rule ids in disable list: %s", sorted(unknown))

    # ---- custom rule loading ----

    def load_custom_rules(self, directory: Path) -> int:
        """Load YAML rule files from *directory*. Returns count loaded."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_rules(path)
        logger.debug("Loaded %d custom rule(s) from %s", count, directory)
        return count

    def _load_yaml_rules(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise RuleError(f"Failed to parse {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            self.register(_rule_from_entry(entry, path))
            count += 1
        return count


def _rule_from_entry(entry: object, path: Path) -> MarkerRule:
    if not isinstance(entry, dict) or "id" not in entry:
        raise RuleError(f"{path}: every rule needs an 'id'")
    rule_id = str(entry["id"])
    try:
        script_type = ScriptType(str(entry.get("script_type", "")).lower())
    except ValueError:
        raise RuleError(f"{path}: rule {rule_id} has an invalid script_type") from None
    if script_type is ScriptType.UNKNOWN:
        raise RuleError(f"{path}: rule {rule_id} cannot classify as unknown")
    patterns = entry.get("patterns")
    if isinstance(patterns, str):
        patterns = [patterns]
    if not patterns or not all(isinstance(p, str) and p for p in patterns):
        raise RuleError(f"{path}: rule {rule_id} needs a non-empty list of patterns")
    return MarkerRule(
        id=rule_id,
        script_type=script_type,
        patterns=list(patterns),
        source=CONTENT,
        require_all=bool(entry.get("require_all", False)),
        description=entry.get("description", ""),
        builtin=False,
    )


def build_registry(
    config: Optional[ScriptLensConfig] = None,
    root: Optional[Path] = None,
) -> RuleRegistry:
    """Create a fully populated, config-filtered rule registry."""
    from scriptlens.rules.builtin import ALL_BUILTIN_RULES

    registry = RuleRegistry()
    registry.register_many(ALL_BUILTIN_RULES)

    if config is not None:
        if root is not None and config.rules.custom_dir:
            registry.load_custom_rules(root / config.rules.custom_dir)
        registry.apply_config(config)

    # Force-compile patterns now (not inside the hot loop)
    for rule in registry.enabled_rules():
        _ = rule.compiled_patterns

    return registry
