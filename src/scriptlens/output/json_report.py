"""JSON reporter for machine consumers."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict

from scriptlens.analysis.models import AnalysisReport


def to_dict(report: AnalysisReport) -> Dict[str, Any]:
    """Convert an AnalysisReport to a JSON-serialisable dict."""
    validation = report.validation
    shebang = report.shebang
    return {
        "version": "1.0",
        "source": report.source,
        "script_type": report.script_type.value,
        "classification": {
            "source": report.classification.source,
            "rule": report.classification.rule_id,
        },
        "shebang": (
            {"interpreter": shebang.interpreter, "args": list(shebang.args)}
            if shebang is not None else None
        ),
        "valid": validation.ok,
        "validation": {
            "failure": validation.failure.value if validation.failure else None,
            "detail": validation.detail,
            "line": validation.line_no,
        },
        "metadata": [
            {"field": e.field, "value": e.value, "line": e.line_no}
            for e in report.metadata
        ],
        "stats": asdict(report.stats),
        "duration_ms": report.duration_ms,
    }


def render(report: AnalysisReport) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report), indent=2)
