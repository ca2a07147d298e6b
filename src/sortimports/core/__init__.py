"""
Core module.

Example
-------
>>> from sortimports.core import SortImports, SortOrderConfig
>>>
>>> config = SortOrderConfig.from_options({"ignoreCase": True, "typeSortStrategy": "before"})
>>> result = SortImports("src/app.ts", config=config).check()
>>> for violation in result.violations:
...     print(violation.line, violation.message)
"""
from __future__ import annotations

from .config import ConfigError, SortOrderConfig, SyntaxCategory, TypeSortStrategy, load_config
from .diff import combine_diffs, generate_diff
from .results import BatchResult, ErrorResult, Result
from .source import SourceText, TextSpan
from .sortimports import SortImports, check_source, fix_text, parse_statements

__all__ = [
    "SortImports",
    "SortOrderConfig",
    "ConfigError",
    "SyntaxCategory",
    "TypeSortStrategy",
    "load_config",
    "Result",
    "ErrorResult",
    "BatchResult",
    "SourceText",
    "TextSpan",
    "generate_diff",
    "combine_diffs",
    "check_source",
    "fix_text",
    "parse_statements",
]
