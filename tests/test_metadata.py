"""Tests for header metadata extraction."""

import pytest

from scriptlens.analysis.metadata import (
    METADATA_WINDOW,
    NO_METADATA,
    extract_metadata,
    format_metadata,
    match_field,
)


def _as_pairs(entries):
    return [(e.field, e.value) for e in entries]


class TestMatchField:
    def test_case_insensitive(self):
        assert match_field("AUTHOR: Someone") == ("Author", "Someone")

    def test_value_trimmed(self):
        assert match_field("Version:    1.0   ") == ("Version", "1.0")

    def test_empty_value_is_no_match(self):
        assert match_field("Author:") is None

    def test_earlier_vocabulary_entry_wins(self):
        # "note:" precedes "updated:" in the vocabulary.
        assert match_field("Note: updated: yesterday") == ("Note", "updated: yesterday")

    def test_pattern_anywhere_in_comment(self):
        assert match_field("see license: MIT") == ("License", "MIT")

    def test_plain_comment(self):
        assert match_field("just a remark") is None

    def test_first_hit_with_empty_value_ends_search(self):
        # "author:" is checked before "updated:" and has no value.
        assert match_field("Updated: 2024 author:") is None


class TestExtractMetadata:
    def test_full_header(self, shell_script):
        entries = extract_metadata(shell_script)
        assert _as_pairs(entries) == [
            ("Interpreter", "/bin/bash -e"),
            ("Author", "Jane Packager"),
            ("Version", "2.1"),
            ("Description", "post-install hook"),
        ]
        assert [e.line_no for e in entries] == [1, 2, 3, 4]

    def test_no_metadata(self):
        assert extract_metadata("echo hi\n") == []
        assert format_metadata([]) == NO_METADATA

    def test_non_comment_lines_ignored(self):
        assert extract_metadata("author: nobody\n") == []

    def test_indented_comment(self):
        entries = extract_metadata("    # Usage: run.sh [args]\n")
        assert _as_pairs(entries) == [("Usage", "run.sh [args]")]

    def test_code_lines_do_not_stop_scan(self):
        entries = extract_metadata("set -e\n# Author: late\n")
        assert _as_pairs(entries) == [("Author", "late")]

    def test_empty_shebang_adds_no_interpreter(self):
        assert _as_pairs(extract_metadata("#!\n# Todo: fix\n")) == [("Todo", "fix")]

    def test_shebang_line_not_parsed_as_field(self):
        entries = extract_metadata("#!/bin/sh # Author: nope\n")
        assert [e.field for e in entries] == ["Interpreter"]

    @pytest.mark.parametrize("line_no, found", [(METADATA_WINDOW, True), (METADATA_WINDOW + 1, False)])
    def test_window(self, line_no, found):
        lines = ["true"] * (line_no - 1) + ["# Date: 2024-01-01"]
        entries = extract_metadata("\n".join(lines) + "\n")
        assert bool(entries) is found

    def test_repeatable(self, shell_script):
        assert extract_metadata(shell_script) == extract_metadata(shell_script)

    def test_repeated_fields_kept_in_line_order(self):
        text = "# Note: first\n# Note: second\n# Author: a\n"
        entries = extract_metadata(text)
        assert _as_pairs(entries) == [("Note", "first"), ("Note", "second"), ("Author", "a")]
        assert extract_metadata(text) == entries

    def test_crlf_line_endings(self):
        entries = extract_metadata("# Author: win\r\n")
        assert _as_pairs(entries) == [("Author", "win")]


class TestFormatMetadata:
    def test_lines_joined(self, shell_script):
        text = format_metadata(extract_metadata(shell_script))
        assert text.splitlines() == [
            "Interpreter: /bin/bash -e",
            "Author: Jane Packager",
            "Version: 2.1",
            "Description: post-install hook",
        ]
