"""Starter .scriptlens.toml template."""

DEFAULT_TOML = """\
# scriptlens configuration
version = "1.0"

[shebang]
max_args = 16             # arguments kept after the interpreter

[highlight]
scheme = "default"        # nano | vim | default

[output]
format = "terminal"       # terminal | json
show_summary = true

[rules]
# disable = ["RUBY_MARKERS"]        # built-in classifier rules to turn off
# custom_dir = ".scriptlens-rules"  # YAML classifier rules
"""
