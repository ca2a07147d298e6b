"""
sortimports - Check and fix the order of import statements.

Imports are ordered inside each run of adjacent statements (a blank line or
a comment line starts a new run) by type placement, syntax category and
first local name. Named members inside a statement are sorted too. Fixes
rewrite only the affected run and keep every byte of surrounding text.

Example
-------
>>> from sortimports import check_source, fix_text
>>>
>>> code = "import a from 'foo.js';\\nimport {b, c} from 'bar.js';\\n"
>>> [v.message for v in check_source(code)]
["Expected 'multiple' syntax before 'single' syntax."]
>>> print(fix_text(code), end="")
import {b, c} from 'bar.js';
import a from 'foo.js';
>>>
>>> # Work on files, reading [tool.sortimports] from pyproject.toml
>>> si = SortImports("src/", dry_run=True)
>>> print(si.fix().diff)

Classes
-------
SortImports
    Entry point for checking and fixing files.

SortOrderConfig
    Ordering options for one analysis pass.

ImportStatement, Binding
    Positioned view of one import declaration and its bindings.

Violation, Fix
    A reported ordering problem and its optional text replacement.

Result, ErrorResult, BatchResult
    Outcomes of file operations. File operations never raise exceptions.
"""
from __future__ import annotations

from sortimports.core import (
    BatchResult,
    ConfigError,
    ErrorResult,
    Result,
    SortImports,
    SortOrderConfig,
    SourceText,
    SyntaxCategory,
    TextSpan,
    TypeSortStrategy,
    check_source,
    fix_text,
    load_config,
)
from sortimports.imports import (
    Binding,
    BindingKind,
    Fix,
    ImportStatement,
    Run,
    Violation,
    ViolationKind,
    analyze,
    apply_fixes,
    detect,
    partition_runs,
    sort_run,
)
from sortimports.parsers import ScanError, collect_imports, scan_imports

__all__ = [
    "BatchResult",
    "Binding",
    "BindingKind",
    "ConfigError",
    "ErrorResult",
    "Fix",
    "ImportStatement",
    "Result",
    "Run",
    "ScanError",
    "SortImports",
    "SortOrderConfig",
    "SourceText",
    "SyntaxCategory",
    "TextSpan",
    "TypeSortStrategy",
    "Violation",
    "ViolationKind",
    "analyze",
    "apply_fixes",
    "check_source",
    "collect_imports",
    "detect",
    "fix_text",
    "load_config",
    "partition_runs",
    "scan_imports",
    "sort_run",
]
