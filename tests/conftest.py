"""Shared test fixtures: sample scripts of each kind."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def shell_script() -> str:
    """A shell installer with a metadata header."""
    return textwrap.dedent("""\
        #!/bin/bash -e
        # Author: Jane Packager
        # Version: 2.1
        # Description: post-install hook
        set -u

        if [ -d "$PREFIX/share" ]; then
            echo "installing into ${PREFIX}"
        fi
        for f in *.conf; do
            cp "$f" /etc/app/
        done
    """)


@pytest.fixture
def python_script() -> str:
    return textwrap.dedent("""\
        #!/usr/bin/env python3
        import sys

        def main():
            if len(sys.argv) > 1:
                print(sys.argv[1])

        main()
    """)


@pytest.fixture
def perl_script() -> str:
    return textwrap.dedent("""\
        use strict;
        my $name = "world";
        sub greet { print "hello $name\\n"; }
        greet();
    """)


@pytest.fixture
def ruby_script() -> str:
    return textwrap.dedent("""\
        #!/usr/bin/ruby
        class Greeter
          def hi
            puts 'hello'
          end
        end
    """)


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[..., Path]:
    """Write text (or bytes) to a file under tmp_path and return its path."""

    def _write(content, name: str = "script.sh") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write
