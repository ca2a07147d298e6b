"""Partitioning of import statements into contiguous runs.

Statements belong to the same run when nothing but a line break separates
them. A blank line, a comment line or a line of other code starts a new
run. In strict mode any non-whitespace text between two statements (for
example a trailing comment) also starts a new run.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from sortimports.core.source import SourceText, TextSpan
from sortimports.imports.statements import ImportStatement

COMMENT_PATTERN = re.compile(r"//|/\*|#")


@dataclass(frozen=True)
class Run:
    """A maximal group of adjacent import statements.

    Attributes
    ----------
    statements : tuple[ImportStatement, ...]
        Statements in original order.
    gaps : tuple[str, ...]
        Verbatim text between statement ``i`` and ``i + 1``.
    """

    statements: tuple[ImportStatement, ...]
    gaps: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.statements)

    @property
    def span(self) -> TextSpan:
        return TextSpan(self.statements[0].span.start, self.statements[-1].span.end)

    @property
    def has_comment_gaps(self) -> bool:
        """True if a comment sits between two statements of this run.

        Sorting the run reuses gaps by position, so such a comment may end
        up next to a different statement.
        """
        return any(COMMENT_PATTERN.search(gap) for gap in self.gaps)


def is_line_between(previous: ImportStatement, current: ImportStatement) -> bool:
    """Check if at least one full line separates two statements."""
    return previous.end_line < current.start_line - 1


def starts_new_run(
    source: SourceText,
    previous: ImportStatement,
    current: ImportStatement,
    strict: bool = False,
) -> bool:
    if is_line_between(previous, current):
        return True
    if strict:
        return bool(source.between(previous.span, current.span).strip())
    return False


def partition_runs(
    source: SourceText,
    statements: Sequence[ImportStatement],
    strict: bool = False,
) -> list[Run]:
    """Split statements into runs.

    Parameters
    ----------
    source : SourceText
        Text the statements were found in.
    statements : Sequence[ImportStatement]
        All import statements of the file, in source order.
    strict : bool
        Also split on comments or code between statements.

    Returns
    -------
    list[Run]
        Runs in source order. Empty input gives an empty list.
    """
    groups: list[list[ImportStatement]] = []
    for statement in statements:
        if groups and not starts_new_run(source, groups[-1][-1], statement, strict):
            groups[-1].append(statement)
        else:
            groups.append([statement])

    return [
        Run(
            statements=tuple(group),
            gaps=tuple(source.between(a.span, b.span) for a, b in zip(group, group[1:])),
        )
        for group in groups
    ]
