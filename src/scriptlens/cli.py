"""scriptlens CLI — Typer application over the analysis core."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import typer
from rich.console import Console

from scriptlens import __version__

app = typer.Typer(
    name="scriptlens",
    help="Classify, validate, and highlight package install scripts.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)

_SCRIPT_ARG = typer.Argument(..., help="Script file to inspect, or '-' for stdin")
_CONFIG_OPT = typer.Option(None, "--config", "-c", help="Path to .scriptlens.toml")


def _read_script(path: str) -> Tuple[str, str]:
    """Return (text, display name); exit 2 on unreadable or undecodable input."""
    from scriptlens.boundary import decode_script
    from scriptlens.errors import ScriptLensError

    try:
        if path == "-":
            data, name = sys.stdin.buffer.read(), "<stdin>"
        else:
            data, name = Path(path).read_bytes(), path
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] cannot read {path}: {exc.strerror}")
        raise typer.Exit(code=2) from exc

    try:
        return decode_script(data, len(data)), name
    except ScriptLensError as exc:
        console.print(f"[bold red]Invalid script:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _load(config: Optional[str]):
    """Load config and the matching rule registry; exit 2 on failure."""
    from scriptlens.config.loader import ConfigError, load_config
    from scriptlens.errors import RuleError
    from scriptlens.rules.registry import build_registry

    root = Path.cwd()
    try:
        cfg = load_config(root, config)
        registry = build_registry(cfg, root)
    except (ConfigError, RuleError) as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    return cfg, registry


# ── analyze ───────────────────────────────────────────────────────────────────


@app.command()
def analyze(
    script: str = _SCRIPT_ARG,
    config: Optional[str] = _CONFIG_OPT,
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
) -> None:
    """Run every check and print a report. Exits 1 when validation fails."""
    from scriptlens.analysis.engine import analyze as run_analysis
    from scriptlens.output import json_report, terminal

    cfg, registry = _load(config)
    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    text, name = _read_script(script)
    report = run_analysis(text, cfg, registry, source=name)

    if cfg.output.format == "json":
        print(json_report.render(report))
    else:
        terminal.render(report, show_summary=cfg.output.show_summary, console=console)

    if output:
        Path(output).write_text(json_report.render(report), encoding="utf-8")

    raise typer.Exit(code=0 if report.is_valid else 1)


# ── classify ──────────────────────────────────────────────────────────────────


@app.command()
def classify(
    script: str = _SCRIPT_ARG,
    config: Optional[str] = _CONFIG_OPT,
    explain: bool = typer.Option(False, "--explain", "-e", help="Show which rule decided"),
) -> None:
    """Print the detected script type."""
    from scriptlens.analysis.classifier import classify as run_classify

    _, registry = _load(config)
    text, _ = _read_script(script)
    result = run_classify(text, registry)
    print(result.script_type.value)
    if explain:
        console.print(f"[dim]source={result.source} rule={result.rule_id or '-'}[/dim]")


# ── validate ──────────────────────────────────────────────────────────────────


@app.command()
def validate(
    script: str = _SCRIPT_ARG,
    config: Optional[str] = _CONFIG_OPT,
    script_type: Optional[str] = typer.Option(
        None, "--type", "-t", help="Skip detection: shell | python | perl | ruby | unknown",
    ),
    exec_ready: bool = typer.Option(False, "--exec", help="Require a usable shebang for execution"),
) -> None:
    """Check quote/bracket balance and structure. Exits 1 on failure."""
    from scriptlens.analysis.models import ScriptType
    from scriptlens.analysis.validator import check_execution_ready
    from scriptlens.analysis.validator import validate as run_validate

    _, registry = _load(config)
    forced: Optional[ScriptType] = None
    if script_type is not None:
        try:
            forced = ScriptType(script_type.lower())
        except ValueError:
            console.print(f"[bold red]Invalid script type:[/bold red] {script_type}")
            raise typer.Exit(code=2)

    text, name = _read_script(script)
    outcome = run_validate(text, forced, registry)
    if outcome.ok and exec_ready:
        outcome = check_execution_ready(text, registry)

    if outcome.ok:
        console.print(f"[green]✓[/green] {name}: {outcome.script_type.value} script looks sound")
        raise typer.Exit(code=0)
    where = f":{outcome.line_no}" if outcome.line_no else ""
    console.print(
        f"[red]✗[/red] {name}{where}: [bold]{outcome.failure.value}[/bold] {outcome.detail}",
        highlight=False,
    )
    raise typer.Exit(code=1)


# ── metadata / stats / shebang ────────────────────────────────────────────────


@app.command()
def metadata(script: str = _SCRIPT_ARG) -> None:
    """Print header metadata as 'Field: value' lines."""
    from scriptlens.analysis.metadata import extract_metadata, format_metadata

    text, _ = _read_script(script)
    print(format_metadata(extract_metadata(text)))


@app.command()
def stats(script: str = _SCRIPT_ARG, config: Optional[str] = _CONFIG_OPT) -> None:
    """Print line and character statistics."""
    from scriptlens.analysis.classifier import detect_script_type
    from scriptlens.analysis.stats import collect_stats, format_stats

    _, registry = _load(config)
    text, _ = _read_script(script)
    print(format_stats(collect_stats(text), detect_script_type(text, registry)))


@app.command()
def shebang(
    script: str = _SCRIPT_ARG,
    config: Optional[str] = _CONFIG_OPT,
    max_args: Optional[int] = typer.Option(None, "--max-args", min=0, help="Arguments to keep"),
) -> None:
    """Print the interpreter command a host would run. Exits 1 without a shebang."""
    from scriptlens.analysis.engine import plan_execution
    from scriptlens.analysis.shebang import has_shebang

    cfg, registry = _load(config)
    text, name = _read_script(script)
    plan = plan_execution(text, cfg.shebang.max_args if max_args is None else max_args, registry=registry)
    print(" ".join(plan.argv))
    if not has_shebang(text):
        console.print(f"[yellow]⚠[/yellow]  {name} has no shebang; default interpreter shown")
        raise typer.Exit(code=1)


# ── highlight / themes ────────────────────────────────────────────────────────


@app.command()
def highlight(
    script: str = _SCRIPT_ARG,
    config: Optional[str] = _CONFIG_OPT,
    scheme: Optional[str] = typer.Option(None, "--scheme", "-s", help="nano | vim | default"),
    raw: bool = typer.Option(False, "--raw", help="Emit raw ANSI escapes instead of Rich output"),
) -> None:
    """Print the script with syntax colors."""
    from scriptlens.config.schema import SCHEME_NAMES
    from scriptlens.output.ansi import render_ansi
    from scriptlens.output.terminal import render_highlight

    cfg, _ = _load(config)
    chosen = scheme or cfg.highlight.scheme
    if chosen not in SCHEME_NAMES:
        console.print(f"[bold red]Invalid scheme:[/bold red] {chosen}")
        raise typer.Exit(code=2)

    text, _ = _read_script(script)
    if raw:
        sys.stdout.write(render_ansi(text, chosen))
    else:
        render_highlight(text, chosen, Console())


@app.command()
def themes() -> None:
    """List the available highlight schemes."""
    from scriptlens.boundary import get_theme_count, get_theme_name

    for idx in range(get_theme_count()):
        print(f"{idx}\t{get_theme_name(idx)}")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .scriptlens.toml in the current directory."""
    from scriptlens.config.defaults import DEFAULT_TOML
    from scriptlens.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"scriptlens {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
    debug: bool = typer.Option(False, "--debug", help="Debug logging on stderr"),
) -> None:
    """scriptlens — inspect install scripts before running them."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
