"""Sorting of named bindings inside a single import statement.

Only named bindings (``{a, b as c}``) are sorted. Default and namespace
bindings keep their place in front of the braces.
"""
from __future__ import annotations

from sortimports.core.source import SourceText
from sortimports.imports.statements import Binding, BindingKind, ImportStatement, fold_name


def named_bindings(statement: ImportStatement) -> list[Binding]:
    """Get the bindings that take part in member sorting."""
    return [b for b in statement.bindings if b.kind is BindingKind.NAMED]


def first_unsorted_member(statement: ImportStatement, ignore_case: bool = False) -> Binding | None:
    """Find the first named binding that sorts before its predecessor.

    Returns None when the named bindings are already in order.
    """
    members = named_bindings(statement)
    for previous, current in zip(members, members[1:]):
        if fold_name(current.local_name, ignore_case) < fold_name(previous.local_name, ignore_case):
            return current
    return None


def is_member_fixable(statement: ImportStatement) -> bool:
    """Check if the named bindings can be reordered without moving comments."""
    return not any(b.has_comment for b in named_bindings(statement))


def sort_members(source: SourceText, statement: ImportStatement, ignore_case: bool = False) -> str:
    """Rebuild a statement's text with its named bindings in order.

    Separators are reused by position: the text that sat between original
    bindings ``i`` and ``i + 1`` goes between sorted bindings ``i`` and
    ``i + 1``.

    Parameters
    ----------
    source : SourceText
        The file the statement was taken from.
    statement : ImportStatement
        Statement to rebuild.
    ignore_case : bool
        Compare names case-insensitively.

    Returns
    -------
    str
        The new statement text, or the original text when the bindings are
        already sorted or carry comments.
    """
    original = source.slice(statement.span)
    members = named_bindings(statement)
    if len(members) < 2 or not is_member_fixable(statement):
        return original
    if first_unsorted_member(statement, ignore_case) is None:
        return original

    ordered = sorted(members, key=lambda b: fold_name(b.local_name, ignore_case))
    separators = [source.between(a.span, b.span) for a, b in zip(members, members[1:])]

    parts = [source.text[statement.span.start:members[0].span.start]]
    for index, binding in enumerate(ordered):
        parts.append(source.slice(binding.span))
        if index < len(separators):
            parts.append(separators[index])
    parts.append(source.text[members[-1].span.end:statement.span.end])
    return "".join(parts)
