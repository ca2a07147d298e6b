"""Python import discovery using LibCST.

Module-level ``import`` and ``from ... import`` statements are mapped onto
the same statement model as ES module imports:

- ``import a.b`` / ``import a as b`` bind a module namespace  --> all
- ``from m import a, b as c`` bind named members              --> multiple
- ``from m import *`` binds no explicit name                   --> none

Imports nested in functions, classes or ``if`` blocks are left alone, and so
are ``__future__`` imports.
"""
from __future__ import annotations

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider

from sortimports.core.source import SourceText, TextSpan
from sortimports.imports.statements import Binding, BindingKind, ImportStatement

_EMPTY_MODULE = cst.Module(body=[])


def _code(node: cst.CSTNode) -> str:
    return _EMPTY_MODULE.code_for_node(node)


def _whitespace_has_comment(whitespace: cst.BaseParenthesizableWhitespace | None) -> bool:
    if isinstance(whitespace, cst.ParenthesizedWhitespace):
        if whitespace.first_line.comment is not None:
            return True
        return any(line.comment is not None for line in whitespace.empty_lines)
    return False


class ImportCollector(cst.CSTVisitor):
    """Collect module-level import statements with exact spans."""

    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(self, source: SourceText) -> None:
        self.source = source
        self.statements: list[ImportStatement] = []

    def _span(self, first: cst.CSTNode, last: cst.CSTNode | None = None) -> TextSpan:
        start = self.get_metadata(PositionProvider, first).start
        end = self.get_metadata(PositionProvider, last or first).end
        return TextSpan(
            self.source.offset_of(start.line, start.column),
            self.source.offset_of(end.line, end.column),
        )

    def _alias_span(self, alias: cst.ImportAlias) -> TextSpan:
        # The alias node owns its trailing comma, which must stay in place
        last = alias.asname.name if alias.asname else alias.name
        return self._span(alias.name, last)

    def _local_name(self, alias: cst.ImportAlias) -> str:
        if alias.asname and isinstance(alias.asname.name, cst.Name):
            return alias.asname.name.value
        return _code(alias.name)

    def _add(self, node: cst.CSTNode, bindings: list[Binding], module_path: str) -> None:
        span = self._span(node)
        self.statements.append(
            ImportStatement(
                span=span,
                bindings=tuple(bindings),
                module_path=module_path,
                raw_text=self.source.slice(span),
                start_line=self.source.start_line(span),
                end_line=self.source.end_line(span),
            )
        )

    def visit_IndentedBlock(self, node: cst.IndentedBlock) -> bool:
        return False

    def visit_SimpleStatementSuite(self, node: cst.SimpleStatementSuite) -> bool:
        return False

    def visit_Import(self, node: cst.Import) -> bool:
        bindings = [
            Binding(self._local_name(alias), self._alias_span(alias), BindingKind.NAMESPACE)
            for alias in node.names
        ]
        self._add(node, bindings, _code(node.names[0].name))
        return False

    def visit_ImportFrom(self, node: cst.ImportFrom) -> bool:
        module_path = "." * len(node.relative)
        if node.module is not None:
            module_path += _code(node.module)
        # __future__ imports must stay at the top of the module
        if module_path == "__future__":
            return False

        bindings: list[Binding] = []
        if not isinstance(node.names, cst.ImportStar):
            aliases = list(node.names)
            for index, alias in enumerate(aliases):
                bindings.append(
                    Binding(
                        self._local_name(alias),
                        self._alias_span(alias),
                        BindingKind.NAMED,
                        self._alias_has_comment(node, aliases, index),
                    )
                )
        self._add(node, bindings, module_path)
        return False

    def _alias_has_comment(self, node: cst.ImportFrom, aliases: list[cst.ImportAlias], index: int) -> bool:
        alias = aliases[index]
        if isinstance(alias.comma, cst.Comma):
            if _whitespace_has_comment(alias.comma.whitespace_before):
                return True
            if _whitespace_has_comment(alias.comma.whitespace_after):
                return True
        if index == 0 and node.lpar is not None:
            if _whitespace_has_comment(node.lpar.whitespace_after):
                return True
        if index > 0:
            previous = aliases[index - 1].comma
            if isinstance(previous, cst.Comma) and _whitespace_has_comment(previous.whitespace_after):
                return True
        if index == len(aliases) - 1 and node.rpar is not None:
            if _whitespace_has_comment(node.rpar.whitespace_before):
                return True
        return False


def collect_imports(text: str | SourceText) -> list[ImportStatement]:
    """Collect the module-level imports of a Python source.

    Parameters
    ----------
    text : str | SourceText
        Python source code.

    Returns
    -------
    list[ImportStatement]
        Statements in source order.

    Raises
    ------
    libcst.ParserSyntaxError
        If the source is not valid Python.
    """
    source = text if isinstance(text, SourceText) else SourceText(text)
    wrapper = MetadataWrapper(cst.parse_module(source.text))
    collector = ImportCollector(source)
    wrapper.visit(collector)
    return collector.statements
