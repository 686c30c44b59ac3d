"""Tests for line and character statistics."""

from scriptlens.analysis.models import ScriptStats, ScriptType
from scriptlens.analysis.stats import collect_stats, format_stats


class TestCollectStats:
    def test_shell_fixture(self, shell_script):
        stats = collect_stats(shell_script)
        assert stats.total_lines == 12
        assert stats.code_lines == 7
        assert stats.comment_lines == 4
        assert stats.blank_lines == 1

    def test_buckets_partition_lines(self, python_script):
        stats = collect_stats(python_script)
        assert stats.code_lines + stats.comment_lines + stats.blank_lines == stats.total_lines

    def test_empty(self):
        assert collect_stats("") == ScriptStats()

    def test_no_trailing_newline(self):
        stats = collect_stats("echo a\necho b")
        assert stats.total_lines == 2
        assert stats.total_chars == 13

    def test_whitespace_only_line_is_blank(self):
        assert collect_stats("   \t\n").blank_lines == 1

    def test_indented_comment(self):
        assert collect_stats("    # note\n").comment_lines == 1

    def test_crlf(self):
        stats = collect_stats("a\r\n\r\n")
        assert stats.total_lines == 2
        assert stats.blank_lines == 1
        assert stats.code_lines == 1

    def test_chars_are_code_points(self):
        assert collect_stats("echo ü\n").total_chars == 7


class TestFormatStats:
    def test_with_type(self):
        text = format_stats(ScriptStats(3, 1, 1, 1, 20), ScriptType.PERL)
        assert text == (
            "Script Statistics:\n"
            "Type: Perl\n"
            "Total lines: 3\n"
            "Code lines: 1\n"
            "Comment lines: 1\n"
            "Blank lines: 1\n"
            "Total characters: 20"
        )

    def test_without_type(self):
        text = format_stats(ScriptStats())
        assert "Type:" not in text
        assert text.startswith("Script Statistics:\nTotal lines: 0")
