"""Shebang parsing, classification, validation, metadata, stats and highlighting.

Only the data models are re-exported here; the rule tables import them, so
the component modules are imported from their own paths.
"""

from scriptlens.analysis.models import (
    AnalysisReport,
    Category,
    Classification,
    ExecutionPlan,
    Failure,
    HighlightScheme,
    MetadataEntry,
    ScriptStats,
    ScriptType,
    Shebang,
    Span,
    ValidationOutcome,
)

__all__ = [
    "AnalysisReport",
    "Category",
    "Classification",
    "ExecutionPlan",
    "Failure",
    "HighlightScheme",
    "MetadataEntry",
    "ScriptStats",
    "ScriptType",
    "Shebang",
    "Span",
    "ValidationOutcome",
]
