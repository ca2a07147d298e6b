"""Import ordering: classification, runs, sorting, detection and fixes.

Nothing in this package reads files or logs. Callers hand in the source
text and its statements and get violations and replacement text back.
"""
from __future__ import annotations

from sortimports.imports.detector import Fix, Violation, ViolationKind, detect
from sortimports.imports.fixes import analyze, apply_fixes, build_fix, fix_source
from sortimports.imports.members import first_unsorted_member, is_member_fixable, sort_members
from sortimports.imports.runs import Run, partition_runs
from sortimports.imports.sorter import compare_statements, member_sorted_key, sort_run, sort_statements
from sortimports.imports.statements import (
    Binding,
    BindingKind,
    ImportStatement,
    SyntaxCategory,
    classify,
    sort_key,
)

__all__ = [
    "Binding",
    "BindingKind",
    "ImportStatement",
    "SyntaxCategory",
    "classify",
    "sort_key",
    "first_unsorted_member",
    "is_member_fixable",
    "sort_members",
    "Run",
    "partition_runs",
    "compare_statements",
    "sort_statements",
    "member_sorted_key",
    "sort_run",
    "Fix",
    "Violation",
    "ViolationKind",
    "detect",
    "analyze",
    "apply_fixes",
    "build_fix",
    "fix_source",
]
