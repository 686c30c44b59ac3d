"""Analysis pipeline. Runs every component once over a script text."""

from __future__ import annotations

import logging
import time
from typing import Optional

from scriptlens.analysis.classifier import classify, detect_script_type
from scriptlens.analysis.metadata import extract_metadata
from scriptlens.analysis.models import AnalysisReport, ExecutionPlan, ScriptType
from scriptlens.analysis.shebang import DEFAULT_MAX_ARGS, parse_shebang
from scriptlens.analysis.stats import collect_stats
from scriptlens.analysis.validator import validate
from scriptlens.config.schema import ScriptLensConfig
from scriptlens.errors import UnsupportedScriptTypeError
from scriptlens.rules.registry import RuleRegistry, build_registry

logger = logging.getLogger(__name__)

DEFAULT_INTERPRETER = "/bin/sh"


def analyze(
    text: str,
    config: Optional[ScriptLensConfig] = None,
    registry: Optional[RuleRegistry] = None,
    *,
    source: str = "<stdin>",
) -> AnalysisReport:
    """Classify, validate, extract metadata and count lines for *text*."""
    cfg = config or ScriptLensConfig()
    if registry is None and config is not None:
        registry = build_registry(cfg)
    start = time.perf_counter()

    classification = classify(text, registry)
    validation = validate(text, classification.script_type)
    report = AnalysisReport(
        classification=classification,
        validation=validation,
        shebang=parse_shebang(text, cfg.shebang.max_args),
        metadata=extract_metadata(text),
        stats=collect_stats(text),
        source=source,
    )

    report.duration_ms = round((time.perf_counter() - start) * 1000, 2)
    logger.debug(
        "Analyzed %s: type=%s valid=%s in %.2fms",
        source, classification.script_type.value, validation.ok, report.duration_ms,
    )
    return report


def plan_execution(
    text: str,
    max_args: int = DEFAULT_MAX_ARGS,
    *,
    require_known: bool = False,
    registry: Optional[RuleRegistry] = None,
) -> ExecutionPlan:
    """Build the argv/stdin pair a host process executor should run.

    Without a shebang the script is handed to ``/bin/sh``.
    """
    script_type = detect_script_type(text, registry)
    if require_known and script_type is ScriptType.UNKNOWN:
        raise UnsupportedScriptTypeError("cannot plan execution for a script of unknown type")

    shebang = parse_shebang(text, max_args)
    if shebang is None:
        argv: tuple[str, ...] = (DEFAULT_INTERPRETER,)
    else:
        argv = (shebang.interpreter, *shebang.args)
    return ExecutionPlan(argv=argv, stdin=text, script_type=script_type)
