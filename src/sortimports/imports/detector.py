"""Violation detection over a file's import statements.

Each statement is compared to the one before it in the same run, and its
named bindings are checked on their own. At most one ordering violation is
reported per adjacent pair, at the most significant criterion that is out
of order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from sortimports.core.config import SortOrderConfig
from sortimports.core.source import SourceText, TextSpan
from sortimports.imports.members import first_unsorted_member
from sortimports.imports.runs import Run, partition_runs
from sortimports.imports.sorter import OrderCriterion, decide_order
from sortimports.imports.statements import ImportStatement, classify


class ViolationKind(Enum):
    TYPE_ORDER = "type-order"
    SYNTAX_ORDER = "syntax-order"
    ALPHABETICAL = "alphabetical"
    MEMBER_ORDER = "member-order"


MESSAGES = {
    ViolationKind.TYPE_ORDER: "Expected type imports '{strategy}' all other imports.",
    ViolationKind.SYNTAX_ORDER: "Expected '{current}' syntax before '{previous}' syntax.",
    ViolationKind.ALPHABETICAL: "Imports should be sorted alphabetically.",
    ViolationKind.MEMBER_ORDER: "Member '{name}' of the import declaration should be sorted alphabetically.",
}

CRITERION_KINDS = {
    OrderCriterion.TYPE: ViolationKind.TYPE_ORDER,
    OrderCriterion.SYNTAX: ViolationKind.SYNTAX_ORDER,
    OrderCriterion.NAME: ViolationKind.ALPHABETICAL,
}


@dataclass(frozen=True)
class Fix:
    """Replace ``span`` of the source with ``text``."""

    span: TextSpan
    text: str


@dataclass
class Violation:
    """One reported ordering problem.

    Attributes
    ----------
    kind : ViolationKind
        What is out of order.
    message : str
        Human-readable description.
    span : TextSpan
        Offending statement, or binding for member violations.
    line : int
        1-based line of ``span``.
    statement : ImportStatement
        Statement the violation was reported on.
    run : Run
        Run that owns the statement. Fixes rewrite this whole run.
    fix : Fix | None
        Replacement that resolves the violation, if one is available.
    """

    kind: ViolationKind
    message: str
    span: TextSpan
    line: int
    statement: ImportStatement
    run: Run
    fix: Fix | None = field(default=None, compare=False)

    @property
    def fixable(self) -> bool:
        return self.fix is not None


@dataclass
class _ScanState:
    """Fold state threaded through one run."""

    run: Run
    previous: ImportStatement | None = None
    violations: list[Violation] = field(default_factory=list)


def _check_pair(state: _ScanState, current: ImportStatement, config: SortOrderConfig) -> None:
    previous = state.previous
    if previous is None:
        return
    order, criterion = decide_order(previous, current, config)
    if order <= 0 or criterion is None:
        return

    kind = CRITERION_KINDS[criterion]
    message = MESSAGES[kind].format(
        strategy=config.type_sort_strategy.value,
        current=classify(current).value,
        previous=classify(previous).value,
    )
    state.violations.append(
        Violation(
            kind=kind,
            message=message,
            span=current.span,
            line=current.start_line,
            statement=current,
            run=state.run,
        )
    )


def _check_members(state: _ScanState, source: SourceText, current: ImportStatement, config: SortOrderConfig) -> None:
    if config.ignore_member_sort:
        return
    binding = first_unsorted_member(current, config.ignore_case)
    if binding is None:
        return
    state.violations.append(
        Violation(
            kind=ViolationKind.MEMBER_ORDER,
            message=MESSAGES[ViolationKind.MEMBER_ORDER].format(name=binding.local_name),
            span=binding.span,
            line=source.line_of(binding.span.start),
            statement=current,
            run=state.run,
        )
    )


def scan_run(source: SourceText, run: Run, config: SortOrderConfig) -> list[Violation]:
    """Report the violations of a single run, in source order."""
    state = _ScanState(run=run)
    for statement in run.statements:
        _check_pair(state, statement, config)
        _check_members(state, source, statement, config)
        state.previous = statement
    return state.violations


def detect(
    source: SourceText,
    statements: Sequence[ImportStatement],
    config: SortOrderConfig | None = None,
) -> list[Violation]:
    """Find ordering violations without building fixes.

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
        Violations in the order their statements appear.
    """
    config = config or SortOrderConfig()
    violations: list[Violation] = []
    for run in partition_runs(source, statements, strict=config.strict_runs):
        violations.extend(scan_run(source, run, config))
    return violations
