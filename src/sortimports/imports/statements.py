"""Import statement model, syntax classification and sort keys.

An ``ImportStatement`` is a positioned, read-only view of one import
declaration. Parsers in ``sortimports.parsers`` build them; everything in
``sortimports.imports`` only reads them.

Syntax categories::

    import "my-module.js"                   --> none
    import * as myModule from "my-module.js" --> all
    import {myMember} from "my-module.js"    --> multiple
    import {foo, bar} from "my-module.js"    --> multiple
    import myDefault from "my-module.js"     --> single
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sortimports.core.config import SyntaxCategory
from sortimports.core.source import TextSpan

__all__ = [
    "Binding",
    "BindingKind",
    "ImportStatement",
    "SyntaxCategory",
    "classify",
    "fold_name",
    "sort_key",
]


class BindingKind(Enum):
    DEFAULT = "default"
    NAMESPACE = "namespace"
    NAMED = "named"


@dataclass(frozen=True)
class Binding:
    """One local name introduced by an import statement.

    Attributes
    ----------
    local_name : str
        The name bound in the importing module (the alias if one is given).
    span : TextSpan
        Range of the whole binding, e.g. ``b as c`` or ``* as ns``.
    kind : BindingKind
        Default, namespace or named binding.
    has_comment : bool
        True if a comment is attached directly before or after the binding.
    """

    local_name: str
    span: TextSpan
    kind: BindingKind = BindingKind.NAMED
    has_comment: bool = False


@dataclass(frozen=True)
class ImportStatement:
    """A single import declaration.

    Attributes
    ----------
    span : TextSpan
        Range of the declaration in the source, terminator included.
    bindings : tuple[Binding, ...]
        Bindings in source order, possibly empty.
    module_path : str
        Value of the module specifier.
    is_type_only : bool
        True for ``import type`` / ``import typeof`` declarations.
    raw_text : str
        Verbatim source slice covered by ``span``.
    start_line : int
        1-based line of the first character.
    end_line : int
        1-based line of the last character.
    """

    span: TextSpan
    bindings: tuple[Binding, ...]
    module_path: str
    is_type_only: bool = False
    raw_text: str = ""
    start_line: int = 1
    end_line: int = 1

    @property
    def category(self) -> SyntaxCategory:
        return classify(self)


def classify(statement: ImportStatement) -> SyntaxCategory:
    """Get the syntax category of a statement from its first binding."""
    if not statement.bindings:
        return SyntaxCategory.NONE
    first = statement.bindings[0].kind
    if first is BindingKind.NAMESPACE:
        return SyntaxCategory.ALL
    if first is BindingKind.DEFAULT:
        return SyntaxCategory.SINGLE
    return SyntaxCategory.MULTIPLE


def fold_name(name: str, ignore_case: bool) -> str:
    return name.lower() if ignore_case else name


def sort_key(statement: ImportStatement, ignore_case: bool = False) -> str | None:
    """Get the name a statement is sorted by.

    This is the local name of the first binding, or the module path for
    side-effect imports. Returns None if there is nothing to compare.
    """
    if statement.bindings:
        name = statement.bindings[0].local_name
    else:
        name = statement.module_path
    if not name:
        return None
    return fold_name(name, ignore_case)
