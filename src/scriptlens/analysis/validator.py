"""Heuristic syntax validation.

The validator is advisory: it checks quote and bracket balance, shebang
well-formedness and a coarse keyword-count balance for the detected script
type. Passing validation does not mean a script is correct or safe to run.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from scriptlens.analysis.classifier import detect_script_type
from scriptlens.analysis.models import Failure, ScriptType, ValidationOutcome
from scriptlens.analysis.shebang import shebang_body
from scriptlens.analysis.text import is_blank, is_comment, script_lines
from scriptlens.rules.registry import RuleRegistry

logger = logging.getLogger(__name__)

QUOTES = "'\""
BRACKET_PAIRS = {"{": "}", "[": "]", "(": ")"}
_CLOSERS = {close: open_ for open_, close in BRACKET_PAIRS.items()}

SHELL_BLOCKS = (("if ", "fi"), ("for ", "done"))
RUBY_OPENERS = ("def ", "class ", "module ", "if ", "unless ", "while ", "for ", "begin")
RUBY_CLOSER = "end"

# (failure, detail, line_no) for a failed sub-check
_Problem = Tuple[Failure, str, int]


class _QuoteScanner:
    """Single forward pass tracking quoted regions.

    Only one quote kind is open at a time; the other kind is ignored inside
    a region. A backslash escapes the next character unconditionally.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.open_quote: Optional[str] = None
        self.open_line = 0

    def unquoted(self) -> Iterator[Tuple[int, str]]:
        """Yield (line_no, char) for unescaped characters outside quotes."""
        escape = False
        line_no = 1
        for ch in self.text:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif self.open_quote is not None:
                if ch == self.open_quote:
                    self.open_quote = None
            elif ch in QUOTES:
                self.open_quote = ch
                self.open_line = line_no
            else:
                yield line_no, ch
            if ch == "\n":
                line_no += 1


# ---- individual checks ----


def _quote_problem(text: str) -> Optional[_Problem]:
    scanner = _QuoteScanner(text)
    for _ in scanner.unquoted():
        pass
    if scanner.open_quote is None:
        return None
    kind = "single" if scanner.open_quote == "'" else "double"
    return (
        Failure.UNBALANCED_QUOTES,
        f"unterminated {kind}-quoted string opened on line {scanner.open_line}",
        scanner.open_line,
    )


def _bracket_problem(text: str) -> Optional[_Problem]:
    counts: Dict[str, int] = {opener: 0 for opener in BRACKET_PAIRS}
    for line_no, ch in _QuoteScanner(text).unquoted():
        if ch in BRACKET_PAIRS:
            counts[ch] += 1
        elif ch in _CLOSERS:
            opener = _CLOSERS[ch]
            counts[opener] -= 1
            if counts[opener] < 0:
                return (
                    Failure.UNBALANCED_BRACKETS,
                    f"'{ch}' on line {line_no} has no matching '{opener}'",
                    line_no,
                )
    for opener, count in counts.items():
        if count:
            return (
                Failure.UNBALANCED_BRACKETS,
                f"{count} unclosed '{opener}'",
                0,
            )
    return None


def _shebang_problem(text: str) -> Optional[_Problem]:
    body = shebang_body(text)
    if body is None:
        return None
    tokens = body.split()
    if not tokens:
        return Failure.MALFORMED_SHEBANG, "shebang names no interpreter", 1
    if "\0" in tokens[0]:
        return Failure.MALFORMED_SHEBANG, "interpreter path contains a NUL byte", 1
    return None


def check_quotes(text: str) -> bool:
    """True when no single- or double-quoted region is left open."""
    return _quote_problem(text) is None


def check_brackets(text: str) -> bool:
    """True when ``{}``, ``[]`` and ``()`` balance outside quoted regions."""
    return _bracket_problem(text) is None


def check_shebang(text: str) -> bool:
    """True when there is no shebang or it names a usable interpreter."""
    return _shebang_problem(text) is None


# ---- type-specific structural checks ----


def _shell_structure(text: str) -> Tuple[Optional[_Problem], Tuple[int, ...]]:
    lines = [line.strip() for line in script_lines(text)]
    for opener, closer in SHELL_BLOCKS:
        opened = sum(1 for line in lines if line.startswith(opener))
        closed = sum(1 for line in lines if line == closer)
        if opened != closed:
            detail = f"{opened} '{opener.strip()}' opener(s) but {closed} '{closer}'"
            return (Failure.STRUCTURAL_MISMATCH, detail, 0), ()
    return None, ()


def _python_structure(text: str) -> Tuple[Optional[_Problem], Tuple[int, ...]]:
    # Indentation of block headers is recorded but never fails validation.
    indents: List[int] = []
    for line in script_lines(text):
        if is_blank(line) or is_comment(line):
            continue
        if line.strip().endswith(":"):
            indents.append(len(line) - len(line.lstrip(" ")))
    return None, tuple(indents)


def _perl_structure(text: str) -> Tuple[Optional[_Problem], Tuple[int, ...]]:
    balance = text.count("{") - text.count("}")
    if balance:
        return (Failure.STRUCTURAL_MISMATCH, f"brace tally is {balance:+d}", 0), ()
    return None, ()


def _ruby_structure(text: str) -> Tuple[Optional[_Problem], Tuple[int, ...]]:
    lines = [line.strip() for line in script_lines(text)]
    opened = sum(1 for line in lines if line.startswith(RUBY_OPENERS))
    closed = sum(1 for line in lines if line == RUBY_CLOSER)
    if opened != closed:
        detail = f"{opened} block opener(s) but {closed} '{RUBY_CLOSER}'"
        return (Failure.STRUCTURAL_MISMATCH, detail, 0), ()
    return None, ()


def _unknown_structure(text: str) -> Tuple[Optional[_Problem], Tuple[int, ...]]:
    return None, ()


_STRUCTURE_CHECKS: Dict[ScriptType, Callable[[str], Tuple[Optional[_Problem], Tuple[int, ...]]]] = {
    ScriptType.SHELL: _shell_structure,
    ScriptType.PYTHON: _python_structure,
    ScriptType.PERL: _perl_structure,
    ScriptType.RUBY: _ruby_structure,
    ScriptType.UNKNOWN: _unknown_structure,
}


def check_structure(text: str, script_type: ScriptType) -> bool:
    """Run the keyword-count check for *script_type*."""
    problem, _ = _STRUCTURE_CHECKS[script_type](text)
    return problem is None


# ---- entry points ----


def validate(
    text: str,
    script_type: Optional[ScriptType] = None,
    registry: Optional[RuleRegistry] = None,
) -> ValidationOutcome:
    """Run every sub-check and report the first failure.

    When *script_type* is omitted it is detected from *text*.
    """
    if script_type is None:
        script_type = detect_script_type(text, registry)

    for check in (_quote_problem, _bracket_problem, _shebang_problem):
        problem = check(text)
        if problem is not None:
            return _failed(problem, script_type)

    problem, indents = _STRUCTURE_CHECKS[script_type](text)
    if problem is not None:
        return _failed(problem, script_type)
    return ValidationOutcome(ok=True, script_type=script_type, block_indents=indents)


def check_execution_ready(
    text: str,
    registry: Optional[RuleRegistry] = None,
) -> ValidationOutcome:
    """Stricter pre-execution gate: the script must start with a usable shebang."""
    script_type = detect_script_type(text, registry)
    if not text:
        return _failed((Failure.MALFORMED_SHEBANG, "script is empty", 0), script_type)
    if not text.startswith("#!"):
        return _failed(
            (Failure.MALFORMED_SHEBANG, "script does not start with a shebang", 1),
            script_type,
        )
    problem = _shebang_problem(text)
    if problem is not None:
        return _failed(problem, script_type)
    return ValidationOutcome(ok=True, script_type=script_type)


def _failed(problem: _Problem, script_type: ScriptType) -> ValidationOutcome:
    failure, detail, line_no = problem
    logger.debug("Validation failed (%s): %s", failure.value, detail)
    return ValidationOutcome(
        ok=False,
        script_type=script_type,
        failure=failure,
        detail=detail,
        line_no=line_no,
    )
