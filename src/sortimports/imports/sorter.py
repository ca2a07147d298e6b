"""Statement ordering and run reconstruction.

Statements are ordered by, most significant first:

1. type placement (``import type``) unless the strategy is ``mixed``
2. syntax category precedence
3. sort key (first local name, or module path)

The sort is stable, so statements that compare equal keep their order.
"""
from __future__ import annotations

from enum import Enum
from functools import cmp_to_key
from typing import Callable, Optional

from sortimports.core.config import SortOrderConfig, TypeSortStrategy
from sortimports.core.source import SourceText
from sortimports.imports.members import is_member_fixable, named_bindings, sort_members
from sortimports.imports.runs import Run
from sortimports.imports.statements import BindingKind, ImportStatement, classify, fold_name, sort_key

KeyFunc = Callable[[ImportStatement], Optional[str]]


class OrderCriterion(Enum):
    """The comparison level that decided the order of two statements."""

    TYPE = "type"
    SYNTAX = "syntax"
    NAME = "name"


def decide_order(
    a: ImportStatement,
    b: ImportStatement,
    config: SortOrderConfig,
    key: KeyFunc | None = None,
) -> tuple[int, OrderCriterion | None]:
    """Compare two statements.

    ``key`` replaces the name criterion's sort key; by default it is
    ``sort_key`` with the configured case handling.

    Returns
    -------
    tuple[int, OrderCriterion | None]
        A negative number if ``a`` goes first, positive if ``b`` goes
        first, zero if they are equal, together with the criterion that
        decided (None when equal).
    """
    strategy = config.type_sort_strategy
    if strategy is not TypeSortStrategy.MIXED and a.is_type_only != b.is_type_only:
        a_first = a.is_type_only == (strategy is TypeSortStrategy.BEFORE)
        return (-1 if a_first else 1), OrderCriterion.TYPE

    a_rank = config.rank(classify(a))
    b_rank = config.rank(classify(b))
    if a_rank != b_rank:
        return (-1 if a_rank < b_rank else 1), OrderCriterion.SYNTAX

    if key is None:
        a_key = sort_key(a, config.ignore_case)
        b_key = sort_key(b, config.ignore_case)
    else:
        a_key, b_key = key(a), key(b)
    if a_key is not None and b_key is not None and a_key != b_key:
        return (-1 if a_key < b_key else 1), OrderCriterion.NAME

    return 0, None


def compare_statements(
    a: ImportStatement,
    b: ImportStatement,
    config: SortOrderConfig,
    key: KeyFunc | None = None,
) -> int:
    return decide_order(a, b, config, key)[0]


def sort_statements(statements, config: SortOrderConfig, key: KeyFunc | None = None) -> list[ImportStatement]:
    """Stably sort statements into the configured order."""
    return sorted(statements, key=cmp_to_key(lambda a, b: compare_statements(a, b, config, key)))


def member_sorted_key(statement: ImportStatement, config: SortOrderConfig) -> str | None:
    """Sort key of a statement as it reads once its members are sorted.

    Member sorting can change which named binding comes first, and with it
    the name the statement is ordered by.
    """
    if (
        config.ignore_member_sort
        or not statement.bindings
        or statement.bindings[0].kind is not BindingKind.NAMED
        or not is_member_fixable(statement)
    ):
        return sort_key(statement, config.ignore_case)
    return min(fold_name(b.local_name, config.ignore_case) for b in named_bindings(statement)) or None


def statement_text(source: SourceText, statement: ImportStatement, config: SortOrderConfig) -> str:
    """Text of a statement, with its members sorted unless disabled."""
    if config.ignore_member_sort:
        return source.slice(statement.span)
    return sort_members(source, statement, config.ignore_case)


def sort_run(source: SourceText, run: Run, config: SortOrderConfig) -> str:
    """Rebuild the text of a run in sorted order.

    Each statement's text is member-sorted first, then the statements are
    reordered by the keys of that text and joined with the run's original
    gaps. Gap ``i`` always
    goes between positions ``i`` and ``i + 1``, whichever statements end
    up there.

    Parameters
    ----------
    source : SourceText
        The file the run was taken from.
    run : Run
        Run to rebuild.
    config : SortOrderConfig
        Ordering policy.

    Returns
    -------
    str
        Replacement text for ``run.span``.
    """
    texts = {id(s): statement_text(source, s, config) for s in run.statements}
    ordered = sort_statements(run.statements, config, key=lambda s: member_sorted_key(s, config))

    parts: list[str] = []
    for index, statement in enumerate(ordered):
        if index:
            parts.append(run.gaps[index - 1])
        parts.append(texts[id(statement)])
    return "".join(parts)
