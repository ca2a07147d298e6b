"""Sort order configuration.

Options can be given as a mapping (camelCase or snake_case keys) or read
from the ``[tool.sortimports]`` table of a ``pyproject.toml``::

    [tool.sortimports]
    ignore_case = true
    member_syntax_sort_order = ["none", "all", "multiple", "single"]
    type_sort_strategy = "before"
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

# Python 3.11+ has tomllib built-in
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


class ConfigError(ValueError):
    """Raised when sort options are malformed."""


class SyntaxCategory(str, Enum):
    """Binding shape of an import statement."""

    NONE = "none"
    ALL = "all"
    MULTIPLE = "multiple"
    SINGLE = "single"


class TypeSortStrategy(str, Enum):
    """Where type-only imports go relative to value imports."""

    MIXED = "mixed"
    BEFORE = "before"
    AFTER = "after"


DEFAULT_SYNTAX_ORDER = (
    SyntaxCategory.NONE,
    SyntaxCategory.ALL,
    SyntaxCategory.MULTIPLE,
    SyntaxCategory.SINGLE,
)

# Accepted option spellings mapped to SortOrderConfig field names
OPTION_NAMES = {
    "ignoreCase": "ignore_case",
    "ignore_case": "ignore_case",
    "ignoreMemberSort": "ignore_member_sort",
    "ignore_member_sort": "ignore_member_sort",
    "memberSyntaxSortOrder": "member_syntax_sort_order",
    "member_syntax_sort_order": "member_syntax_sort_order",
    "typeSortStrategy": "type_sort_strategy",
    "type_sort_strategy": "type_sort_strategy",
    "strictRuns": "strict_runs",
    "strict_runs": "strict_runs",
}

BOOLEAN_OPTIONS = ("ignore_case", "ignore_member_sort", "strict_runs")

PYPROJECT_TABLE = "sortimports"


@dataclass(frozen=True)
class SortOrderConfig:
    """Immutable policy for one analysis pass.

    Attributes
    ----------
    ignore_case : bool
        Case-fold every name comparison. Emitted text keeps its casing.
    ignore_member_sort : bool
        Skip checking and sorting bindings inside a statement.
    member_syntax_sort_order : tuple[SyntaxCategory, ...]
        Precedence of the four syntax categories, first sorts first.
    type_sort_strategy : TypeSortStrategy
        Placement of type-only imports.
    strict_runs : bool
        Also break runs at comments or code between statements.
    """

    ignore_case: bool = False
    ignore_member_sort: bool = False
    member_syntax_sort_order: tuple[SyntaxCategory, ...] = DEFAULT_SYNTAX_ORDER
    type_sort_strategy: TypeSortStrategy = TypeSortStrategy.AFTER
    strict_runs: bool = False

    def __post_init__(self) -> None:
        order = self.member_syntax_sort_order
        if len(order) != len(SyntaxCategory) or set(order) != set(SyntaxCategory):
            raise ConfigError(
                "memberSyntaxSortOrder must list each of "
                f"{[c.value for c in SyntaxCategory]} exactly once, got "
                f"{[getattr(c, 'value', c) for c in order]}"
            )

    def rank(self, category: SyntaxCategory) -> int:
        """Position of ``category`` in the configured precedence."""
        return self.member_syntax_sort_order.index(category)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> SortOrderConfig:
        """Build a config from caller-supplied options.

        Parameters
        ----------
        options : Mapping[str, Any] | None
            Option values keyed by their camelCase or snake_case name.

        Returns
        -------
        SortOrderConfig
            The validated configuration.

        Raises
        ------
        ConfigError
            If an option is unknown or has an invalid value.
        """
        values: dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = OPTION_NAMES.get(key)
            if name is None:
                raise ConfigError(f"Unknown option: {key!r}")
            values[name] = value

        for name in BOOLEAN_OPTIONS:
            if name in values and not isinstance(values[name], bool):
                raise ConfigError(f"Option {name!r} must be a boolean, got {values[name]!r}")

        if "member_syntax_sort_order" in values:
            values["member_syntax_sort_order"] = _parse_syntax_order(values["member_syntax_sort_order"])

        if "type_sort_strategy" in values:
            raw = values["type_sort_strategy"]
            try:
                values["type_sort_strategy"] = TypeSortStrategy(raw)
            except ValueError:
                raise ConfigError(
                    f"typeSortStrategy must be one of "
                    f"{[s.value for s in TypeSortStrategy]}, got {raw!r}"
                ) from None

        return cls(**values)

    def merged(self, options: Mapping[str, Any]) -> SortOrderConfig:
        """Return a copy with ``options`` applied on top of this config."""
        current = {
            "ignore_case": self.ignore_case,
            "ignore_member_sort": self.ignore_member_sort,
            "member_syntax_sort_order": [c.value for c in self.member_syntax_sort_order],
            "type_sort_strategy": self.type_sort_strategy.value,
            "strict_runs": self.strict_runs,
        }
        for key, value in options.items():
            name = OPTION_NAMES.get(key)
            if name is None:
                raise ConfigError(f"Unknown option: {key!r}")
            current[name] = value
        return SortOrderConfig.from_options(current)


def _parse_syntax_order(raw: Any) -> tuple[SyntaxCategory, ...]:
    if isinstance(raw, str) or not isinstance(raw, (list, tuple)):
        raise ConfigError(f"memberSyntaxSortOrder must be a list, got {raw!r}")
    order: list[SyntaxCategory] = []
    for item in raw:
        try:
            order.append(SyntaxCategory(item))
        except ValueError:
            raise ConfigError(
                f"Unknown syntax category {item!r} in memberSyntaxSortOrder"
            ) from None
    if len(order) != len(set(order)):
        raise ConfigError(f"memberSyntaxSortOrder has duplicate entries: {list(raw)!r}")
    return tuple(order)


def find_pyproject(start: Path) -> Path | None:
    """Find the nearest ``pyproject.toml`` at or above ``start``."""
    start = start.resolve()
    directory = start if start.is_dir() else start.parent
    for candidate in (directory, *directory.parents):
        pyproject = candidate / "pyproject.toml"
        if pyproject.is_file():
            return pyproject
    return None


def load_config(path: Path | None = None) -> SortOrderConfig:
    """Load options from the ``[tool.sortimports]`` table of a pyproject.toml.

    Parameters
    ----------
    path : Path | None
        Either a TOML file to read or a file/directory to search upward
        from for a ``pyproject.toml``. Defaults to the current directory.

    Returns
    -------
    SortOrderConfig
        Configured options, or defaults when no table is found.

    Raises
    ------
    ConfigError
        If the file is not valid TOML or the table holds invalid options.
    """
    path = Path.cwd() if path is None else Path(path)
    pyproject = path if path.suffix == ".toml" and path.is_file() else find_pyproject(path)
    if pyproject is None:
        return SortOrderConfig()

    try:
        with open(pyproject, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {pyproject}: {e}") from e

    table = data.get("tool", {}).get(PYPROJECT_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigError(f"[tool.{PYPROJECT_TABLE}] in {pyproject} must be a table")
    return SortOrderConfig.from_options(table)
