"""Single-pass, per-line highlighting tokenizer.

The rules are shell-biased and applied to every script type. Spans of a
line always concatenate back to the exact line.
"""

from __future__ import annotations

from typing import List, Union

from scriptlens.analysis.models import Category, HighlightScheme, Span
from scriptlens.analysis.text import raw_lines

SHELL_KEYWORDS = frozenset({
    "if", "then", "else", "elif", "fi",
    "for", "while", "until", "do", "done",
    "case", "esac", "function", "return",
    "local", "export", "declare", "readonly",
    "echo", "printf", "read", "test", "true", "false",
})

OPERATOR_CHARS = frozenset("=<>!&|")
QUOTE_CHARS = frozenset("\"'")


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _is_variable_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_{}"


def _string_end(line: str, start: int) -> int:
    """Index just past the string literal opened at *start*."""
    quote = line[start]
    i = start + 1
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == "\\" and i + 1 < n:
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return n


def tokenize_line(line: str) -> List[Span]:
    """Partition one line into categorized spans."""
    spans: List[Span] = []
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == "#":
            spans.append(Span(line[i:], Category.COMMENT, i))
            break
        if ch in QUOTE_CHARS:
            end = _string_end(line, i)
            spans.append(Span(line[i:end], Category.STRING, i))
            i = end
        elif ch == "$":
            end = i + 1
            while end < n and _is_variable_char(line[end]):
                end += 1
            spans.append(Span(line[i:end], Category.VARIABLE, i))
            i = end
        elif ch.isalpha():
            end = i + 1
            while end < n and _is_word_char(line[end]):
                end += 1
            word = line[i:end]
            category = Category.KEYWORD if word in SHELL_KEYWORDS else Category.PLAIN
            spans.append(Span(word, category, i))
            i = end
        elif ch in OPERATOR_CHARS:
            spans.append(Span(ch, Category.OPERATOR, i))
            i += 1
        else:
            spans.append(Span(ch, Category.PLAIN, i))
            i += 1
    return spans


def highlight(
    text: str,
    scheme: Union[HighlightScheme, str] = HighlightScheme.DEFAULT,
) -> List[List[Span]]:
    """Tokenize every line of *text*.

    The scheme is validated here but only affects rendering; the spans are
    identical for every scheme.
    """
    HighlightScheme(scheme)
    return [tokenize_line(line) for line in raw_lines(text)]


def join_spans(spans: List[Span]) -> str:
    return "".join(span.text for span in spans)
