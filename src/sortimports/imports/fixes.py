"""Fixes for ordering violations.

Every fix rewrites the whole run that owns the violation, so all
violations of one run share a single replacement.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from sortimports.core.config import SortOrderConfig
from sortimports.core.source import SourceText
from sortimports.imports.detector import Fix, Violation, ViolationKind, detect
from sortimports.imports.members import is_member_fixable
from sortimports.imports.runs import Run
from sortimports.imports.sorter import sort_run
from sortimports.imports.statements import ImportStatement


def run_fix(source: SourceText, run: Run, config: SortOrderConfig) -> Fix | None:
    """Fix replacing ``run`` with its sorted text, or None if already sorted."""
    text = sort_run(source, run, config)
    if text == source.slice(run.span):
        return None
    return Fix(span=run.span, text=text)


def _withholds_fix(violation: Violation) -> bool:
    return violation.kind is ViolationKind.MEMBER_ORDER and not is_member_fixable(violation.statement)


def build_fix(source: SourceText, violation: Violation, config: SortOrderConfig) -> Fix | None:
    """Fix for a single violation.

    Member violations on a statement whose bindings carry comments get no
    fix. The violation itself is still reported.
    """
    if _withholds_fix(violation):
        return None
    return run_fix(source, violation.run, config)


def analyze(
    source: SourceText,
    statements: Sequence[ImportStatement],
    config: SortOrderConfig | None = None,
) -> list[Violation]:
    """Detect violations and attach a fix to each one that can be fixed.

    Parameters
    ----------
    source : SourceText
        Text the statements were found in.
    statements : Sequence[ImportStatement]
        All import statements of the file, in source order.
    config : SortOrderConfig | None
        Ordering policy. Defaults to ``SortOrderConfig()``.

    Returns
    -------
    list[Violation]
        Violations in source order, with ``fix`` set where available.
    """
    config = config or SortOrderConfig()
    fixes: dict[Run, Fix | None] = {}
    result: list[Violation] = []
    for violation in detect(source, statements, config):
        if _withholds_fix(violation):
            result.append(violation)
            continue
        if violation.run not in fixes:
            fixes[violation.run] = build_fix(source, violation, config)
        result.append(replace(violation, fix=fixes[violation.run]))
    return result


def apply_fixes(source: SourceText | str, violations: Iterable[Violation]) -> str:
    """Apply the fixes of ``violations`` to the source text.

    Identical fixes are applied once. A fix overlapping one that was
    already accepted is skipped.
    """
    text = source.text if isinstance(source, SourceText) else source

    accepted: list[Fix] = []
    for fix in sorted({v.fix for v in violations if v.fix is not None}, key=lambda f: f.span):
        if accepted and accepted[-1].span.overlaps(fix.span):
            continue
        accepted.append(fix)

    for fix in reversed(accepted):
        text = text[:fix.span.start] + fix.text + text[fix.span.end:]
    return text


def fix_source(
    source: SourceText,
    statements: Sequence[ImportStatement],
    config: SortOrderConfig | None = None,
) -> str:
    """Return the source with every fixable violation corrected."""
    return apply_fixes(source, analyze(source, statements, config))
