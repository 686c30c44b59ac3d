"""Tests for the rule registry, built-in tables and custom YAML rules."""

from pathlib import Path

import pytest

from scriptlens.analysis.models import ScriptType
from scriptlens.config.schema import RulesConfig, ScriptLensConfig
from scriptlens.errors import RuleError
from scriptlens.rules.builtin import ALL_BUILTIN_RULES
from scriptlens.rules.builtin.content import PYTHON_IMPORT_DEF, RUBY_MARKERS
from scriptlens.rules.builtin.shebang import SHEBANG_SHELL
from scriptlens.rules.models import MarkerRule
from scriptlens.rules.registry import RuleRegistry, build_registry


class TestMarkerRule:
    def test_any_pattern(self):
        assert RUBY_MARKERS.matches("puts 'x'") is True
        assert RUBY_MARKERS.matches("ls -la") is False

    def test_require_all(self):
        assert PYTHON_IMPORT_DEF.matches("import os\n") is False
        assert PYTHON_IMPORT_DEF.matches("import os\ndef f(): pass\n") is True

    def test_content_rules_ignore_case(self):
        assert RUBY_MARKERS.matches("PUTS 1") is True

    def test_shebang_rules_respect_case(self):
        assert SHEBANG_SHELL.matches("/bin/BASH") is False
        assert SHEBANG_SHELL.matches("/bin/bash") is True

    def test_patterns_are_literal(self):
        rule = MarkerRule(id="DOT", script_type=ScriptType.SHELL, patterns=["a.b"])
        assert rule.matches("a.b") is True
        assert rule.matches("axb") is False


class TestBuiltinTables:
    def test_unique_ids(self):
        ids = [r.id for r in ALL_BUILTIN_RULES]
        assert len(ids) == len(set(ids))

    def test_no_rule_classifies_unknown(self):
        assert all(r.script_type is not ScriptType.UNKNOWN for r in ALL_BUILTIN_RULES)

    def test_shebang_rules_precede_content_rules(self):
        kinds = [r.is_shebang_rule for r in ALL_BUILTIN_RULES]
        assert kinds == sorted(kinds, reverse=True)


class TestRegistry:
    def test_build_default(self):
        registry = build_registry()
        assert len(registry.all_rules) == len(ALL_BUILTIN_RULES)
        assert registry.get("SHEBANG_PYTHON") is not None
        assert registry.get("NOPE") is None

    def test_disable_via_config(self):
        cfg = ScriptLensConfig(rules=RulesConfig(disable=["RUBY_MARKERS", "NOT_A_RULE"]))
        registry = build_registry(cfg)
        assert "RUBY_MARKERS" not in [r.id for r in registry.enabled_rules()]
        assert registry.get("RUBY_MARKERS").enabled is False

    def test_disabling_leaves_builtin_table_alone(self):
        cfg = ScriptLensConfig(rules=RulesConfig(disable=["RUBY_MARKERS"]))
        build_registry(cfg)
        assert RUBY_MARKERS.enabled is True

    def test_reregister_keeps_slot(self):
        registry = RuleRegistry()
        registry.register_many(ALL_BUILTIN_RULES)
        first = [r.id for r in registry.all_rules]
        registry.register(RUBY_MARKERS)
        assert [r.id for r in registry.all_rules] == first

    def test_split_by_source(self):
        registry = build_registry()
        assert all(r.is_shebang_rule for r in registry.shebang_rules())
        assert not any(r.is_shebang_rule for r in registry.content_rules())


class TestCustomRules:
    def _registry(self, tmp_path: Path, body: str, name: str = "extra.yaml") -> RuleRegistry:
        rules_dir = tmp_path / ".scriptlens-rules"
        rules_dir.mkdir(exist_ok=True)
        (rules_dir / name).write_text(body)
        return build_registry(ScriptLensConfig(), tmp_path)

    def test_list_of_rules(self, tmp_path: Path):
        registry = self._registry(
            tmp_path,
            "- id: LUA_REQUIRE\n"
            "  script_type: shell\n"
            "  patterns: ['local function']\n"
            "- id: TCL_PUTS\n"
            "  script_type: ruby\n"
            "  patterns: puts stdout\n",
        )
        custom = [r for r in registry.content_rules() if not r.builtin]
        assert [r.id for r in custom] == ["LUA_REQUIRE", "TCL_PUTS"]
        assert custom[1].patterns == ["puts stdout"]

    def test_custom_rules_after_builtins(self, tmp_path: Path):
        registry = self._registry(
            tmp_path, "id: EARLY\nscript_type: perl\npatterns: ['x']\n", name="a.yml"
        )
        assert registry.content_rules()[-1].id == "EARLY"

    def test_single_mapping(self, tmp_path: Path):
        registry = self._registry(tmp_path, "id: ONE\nscript_type: Perl\npatterns: [x]\n")
        assert registry.get("ONE").script_type is ScriptType.PERL

    def test_empty_file(self, tmp_path: Path):
        registry = self._registry(tmp_path, "")
        assert len(registry.all_rules) == len(ALL_BUILTIN_RULES)

    def test_other_suffix_ignored(self, tmp_path: Path):
        registry = self._registry(tmp_path, "not: [yaml", name="notes.txt")
        assert len(registry.all_rules) == len(ALL_BUILTIN_RULES)

    def test_missing_dir(self, tmp_path: Path):
        assert RuleRegistry().load_custom_rules(tmp_path / "absent") == 0

    @pytest.mark.parametrize(
        "body",
        [
            "not: [valid",
            "- script_type: shell\n  patterns: [x]\n",
            "- id: BAD\n  script_type: cobol\n  patterns: [x]\n",
            "- id: BAD\n  script_type: unknown\n  patterns: [x]\n",
            "- id: BAD\n  script_type: shell\n  patterns: []\n",
            "- id: BAD\n  script_type: shell\n  patterns: [1]\n",
            "- just a string\n",
        ],
    )
    def test_malformed_rules_raise(self, tmp_path: Path, body):
        with pytest.raises(RuleError):
            self._registry(tmp_path, body)
