"""Shebang rules: substring tests against the whole text after ``#!``."""

from scriptlens.analysis.models import ScriptType
from scriptlens.rules.models import SHEBANG, MarkerRule

SHEBANG_PYTHON = MarkerRule(
    id="SHEBANG_PYTHON",
    script_type=ScriptType.PYTHON,
    source=SHEBANG,
    patterns=["python"],
    description="Interpreter line names a Python interpreter.",
)

SHEBANG_PERL = MarkerRule(
    id="SHEBANG_PERL",
    script_type=ScriptType.PERL,
    source=SHEBANG,
    patterns=["perl"],
    description="Interpreter line names perl.",
)

SHEBANG_RUBY = MarkerRule(
    id="SHEBANG_RUBY",
    script_type=ScriptType.RUBY,
    source=SHEBANG,
    patterns=["ruby"],
    description="Interpreter line names ruby.",
)

# "sh" already covers bash, zsh and /bin/sh; they are listed for readability.
SHEBANG_SHELL = MarkerRule(
    id="SHEBANG_SHELL",
    script_type=ScriptType.SHELL,
    source=SHEBANG,
    patterns=["sh", "bash", "zsh", "/bin/sh"],
    description="Interpreter line names a POSIX-style shell.",
)

ALL_SHEBANG_RULES = [SHEBANG_PYTHON, SHEBANG_PERL, SHEBANG_RUBY, SHEBANG_SHELL]
