"""Tests for the analysis pipeline and execution planning."""

import pytest

from scriptlens.analysis.engine import DEFAULT_INTERPRETER, analyze, plan_execution
from scriptlens.analysis.models import Failure, ScriptType
from scriptlens.config.schema import RulesConfig, ScriptLensConfig, ShebangConfig
from scriptlens.errors import UnsupportedScriptTypeError


class TestAnalyze:
    def test_full_report(self, shell_script):
        report = analyze(shell_script, source="install.sh")
        assert report.source == "install.sh"
        assert report.script_type is ScriptType.SHELL
        assert report.is_valid is True
        assert report.shebang.interpreter == "/bin/bash"
        assert report.shebang.args == ("-e",)
        assert [e.field for e in report.metadata][:2] == ["Interpreter", "Author"]
        assert report.stats.total_lines == 12
        assert report.duration_ms >= 0

    def test_validation_uses_detected_type(self):
        report = analyze("#!/usr/bin/ruby\nclass A\n")
        assert report.script_type is ScriptType.RUBY
        assert report.validation.failure is Failure.STRUCTURAL_MISMATCH

    def test_config_limits_shebang_args(self):
        cfg = ScriptLensConfig(shebang=ShebangConfig(max_args=1))
        report = analyze("#!/bin/sh -e -x\n", cfg)
        assert report.shebang.args == ("-e",)

    def test_no_shebang(self):
        report = analyze("echo hi\n")
        assert report.shebang is None

    def test_config_disables_rules(self):
        cfg = ScriptLensConfig(rules=RulesConfig(disable=["RUBY_MARKERS"]))
        report = analyze("def greet\n  puts 'hi'\nend\n", cfg)
        assert report.script_type is ScriptType.SHELL
        assert report.classification.source == "fallback"

    def test_empty_script(self):
        report = analyze("")
        assert report.script_type is ScriptType.UNKNOWN
        assert report.is_valid is True
        assert report.metadata == []


class TestPlanExecution:
    def test_shebang_argv(self):
        plan = plan_execution("#!/usr/bin/env python3 -u\nprint(1)\n")
        assert plan.argv == ("/usr/bin/env", "python3", "-u")
        assert plan.script_type is ScriptType.PYTHON
        assert plan.stdin.startswith("#!")

    def test_max_args(self):
        plan = plan_execution("#!/bin/bash -e -x\n", max_args=1)
        assert plan.argv == ("/bin/bash", "-e")

    def test_default_interpreter(self):
        plan = plan_execution("echo hi\n")
        assert plan.argv == (DEFAULT_INTERPRETER,)
        assert plan.stdin == "echo hi\n"

    def test_unknown_type_rejected_when_required(self):
        with pytest.raises(UnsupportedScriptTypeError):
            plan_execution("", require_known=True)

    def test_unknown_type_allowed_by_default(self):
        assert plan_execution("").script_type is ScriptType.UNKNOWN
