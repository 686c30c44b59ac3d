"""Content rules — case-insensitive substring heuristics over the whole text.

Order matters: Python before Perl before Ruby before Shell.
"""

from scriptlens.analysis.models import ScriptType
from scriptlens.rules.models import MarkerRule

PYTHON_IMPORT_DEF = MarkerRule(
    id="PYTHON_IMPORT_DEF",
    script_type=ScriptType.PYTHON,
    patterns=["import ", "def "],
    require_all=True,
    description="Module imports alongside function definitions.",
)

PYTHON_KEYWORDS = MarkerRule(
    id="PYTHON_KEYWORDS",
    script_type=ScriptType.PYTHON,
    patterns=["print(", "from ", "class "],
    description="print() calls, from-imports or class statements.",
)

PERL_MARKERS = MarkerRule(
    id="PERL_MARKERS",
    script_type=ScriptType.PERL,
    patterns=["use strict", "my $", 'print "'],
    description="Perl pragmas, lexical declarations or print with a literal.",
)

RUBY_MARKERS = MarkerRule(
    id="RUBY_MARKERS",
    script_type=ScriptType.RUBY,
    patterns=["def ", "puts ", "require ", "end"],
    description="Ruby method definitions, puts, require or block terminators.",
)

SHELL_MARKERS = MarkerRule(
    id="SHELL_MARKERS",
    script_type=ScriptType.SHELL,
    patterns=["if [", "echo ", "for ", "while ", "function "],
    description="Test brackets, echo, loops or function declarations.",
)

ALL_CONTENT_RULES = [
    PYTHON_IMPORT_DEF,
    PYTHON_KEYWORDS,
    PERL_MARKERS,
    RUBY_MARKERS,
    SHELL_MARKERS,
]
