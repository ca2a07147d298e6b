"""
Shared pytest fixtures for the sortimports test suite.

This module provides:
- Scanner helpers that turn a code string into (SourceText, statements)
- Sample ES module and Python sources, sorted and unsorted
- Temporary project directories with files and a pyproject.toml

Fixture Naming Convention:
- tmp_* : Fixtures that create temporary directories/files
- sample_* : Fixtures that provide sample content strings
- scan / collect : Helpers that parse code into statements
"""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from sortimports.core.source import SourceText
from sortimports.imports.statements import ImportStatement
from sortimports.parsers.ecmascript import scan_imports
from sortimports.parsers.python import collect_imports

Parsed = tuple[SourceText, list[ImportStatement]]


# =============================================================================
# Parsing Helpers
# =============================================================================

@pytest.fixture
def scan() -> Callable[[str], Parsed]:
    """Parse ES module code into a SourceText and its import statements."""

    def _scan(code: str) -> Parsed:
        source = SourceText(code)
        return source, scan_imports(source)

    return _scan


@pytest.fixture
def collect() -> Callable[[str], Parsed]:
    """Parse Python code into a SourceText and its import statements."""

    def _collect(code: str) -> Parsed:
        source = SourceText(code)
        return source, collect_imports(source)

    return _collect


# =============================================================================
# Sample Source Fixtures
# =============================================================================

@pytest.fixture
def sample_unsorted_js() -> str:
    """
    ES module with one run out of order.

    Contains:
    - A default import before a named import (syntax order)
    - Two default imports out of alphabetical order
    - Unsorted members inside the named import
    """
    return textwrap.dedent("""\
        import b from 'b.js';
        import a from 'a.js';
        import {d, c} from 'cd.js';

        export const value = a + b + c + d;
    """)


@pytest.fixture
def sample_sorted_js() -> str:
    """The sorted form of ``sample_unsorted_js``."""
    return textwrap.dedent("""\
        import {c, d} from 'cd.js';
        import a from 'a.js';
        import b from 'b.js';

        export const value = a + b + c + d;
    """)


@pytest.fixture
def sample_unsorted_py() -> str:
    """Python module with unsorted module imports and members."""
    return textwrap.dedent("""\
        import sys
        import os
        from collections import defaultdict, OrderedDict


        def main():
            import json
            return json, os, sys, defaultdict, OrderedDict
    """)


@pytest.fixture
def sample_sorted_py() -> str:
    """The sorted form of ``sample_unsorted_py``."""
    return textwrap.dedent("""\
        import os
        import sys
        from collections import OrderedDict, defaultdict


        def main():
            import json
            return json, os, sys, defaultdict, OrderedDict
    """)


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================

@pytest.fixture
def tmp_project(tmp_path: Path, sample_unsorted_js: str, sample_sorted_js: str) -> Path:
    """
    Create a temporary project with a mix of files.

    Structure:
        tmp_path/
        ├── src/
        │   ├── app.js          (unsorted)
        │   ├── clean.ts        (sorted)
        │   └── notes.txt       (not a source file)
        ├── node_modules/
        │   └── dep.js          (skipped)
        └── .cache/
            └── cached.js       (skipped)
    """
    src = tmp_path / "src"
    src.mkdir()
    (src / "app.js").write_text(sample_unsorted_js)
    (src / "clean.ts").write_text(sample_sorted_js)
    (src / "notes.txt").write_text("import b from 'b';\nimport a from 'a';\n")

    deps = tmp_path / "node_modules"
    deps.mkdir()
    (deps / "dep.js").write_text(sample_unsorted_js)

    cache = tmp_path / ".cache"
    cache.mkdir()
    (cache / "cached.js").write_text(sample_unsorted_js)

    return tmp_path


@pytest.fixture
def tmp_pyproject(tmp_path: Path) -> Path:
    """Create a pyproject.toml with a [tool.sortimports] table."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(textwrap.dedent("""\
        [project]
        name = "example"

        [tool.sortimports]
        ignoreCase = true
        type_sort_strategy = "before"
    """))
    return pyproject
