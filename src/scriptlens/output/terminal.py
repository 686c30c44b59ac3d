"""Rich terminal reporter — verdict pills, metadata table, highlighted listing."""

from __future__ import annotations

from typing import Optional, Union

from rich.console import Console
from rich.table import Table
from rich.text import Text

from scriptlens.analysis.highlight import highlight
from scriptlens.analysis.models import AnalysisReport, HighlightScheme, ScriptType
from scriptlens.output.ansi import style_for

_TYPE_STYLE = {
    ScriptType.SHELL: "bold black on green",
    ScriptType.PYTHON: "bold white on blue",
    ScriptType.PERL: "bold white on magenta",
    ScriptType.RUBY: "bold white on red",
    ScriptType.UNKNOWN: "bold black on bright_white",
}


def _type_pill(script_type: ScriptType) -> Text:
    return Text(f" {script_type.label.upper()} ", style=_TYPE_STYLE[script_type])


def highlighted_text(text: str, scheme: Union[HighlightScheme, str]) -> Text:
    """Build a Rich Text whose styles follow the highlight categories."""
    out = Text()
    lines = highlight(text, scheme)
    for idx, spans in enumerate(lines):
        for span in spans:
            out.append(span.text, style=style_for(span.category, scheme))
        if idx < len(lines) - 1:
            out.append("\n")
    return out


def render_highlight(
    text: str,
    scheme: Union[HighlightScheme, str],
    console: Optional[Console] = None,
) -> None:
    console = console or Console()
    console.print(highlighted_text(text, scheme), soft_wrap=True, highlight=False)


def render(
    report: AnalysisReport,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print an analysis report to the terminal using Rich."""
    console = console or Console(stderr=True)

    console.print()
    header = Text.assemble(_type_pill(report.script_type), " ", (report.source, "bold"))
    console.print(header)

    if report.shebang is not None:
        console.print(f"[dim]Interpreter:[/dim] {report.shebang.command_line}", highlight=False)

    if report.metadata:
        table = Table(
            title="Metadata",
            show_lines=False,
            title_style="bold",
            border_style="dim",
        )
        table.add_column("Line", justify="right", style="green")
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        for entry in report.metadata:
            table.add_row(str(entry.line_no), entry.field, entry.value)
        console.print(table)
    else:
        console.print("[dim]No metadata found.[/dim]")

    if show_summary:
        _print_summary(console, report)

    console.print()
    if report.is_valid:
        console.print("[bold green]✅ Script looks structurally sound.[/bold green]")
    else:
        where = f" (line {report.validation.line_no})" if report.validation.line_no else ""
        console.print(
            f"[bold red]❌ Validation failed: {report.validation.failure.value}{where}[/bold red]"
        )
        console.print(f"   {report.validation.detail}", highlight=False)


def _print_summary(console: Console, report: AnalysisReport) -> None:
    stats = report.stats
    rule = report.classification.rule_id or report.classification.source
    console.print()
    console.print(f"[dim]Detected by:[/dim]   {rule}")
    console.print(f"[dim]Lines:[/dim]         {stats.total_lines}")
    console.print(f"[dim]Code:[/dim]          {stats.code_lines}")
    console.print(f"[dim]Comments:[/dim]      {stats.comment_lines}")
    console.print(f"[dim]Blank:[/dim]         {stats.blank_lines}")
    console.print(f"[dim]Characters:[/dim]    {stats.total_chars}")
    console.print(f"[dim]Duration:[/dim]      {report.duration_ms:.2f}ms")
