"""Main SortImports class - entry point for checking and fixing files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import libcst as cst

from sortimports.core.config import ConfigError, SortOrderConfig, load_config
from sortimports.core.diff import generate_diff
from sortimports.core.results import BatchResult, ErrorResult, Result
from sortimports.core.source import SourceText
from sortimports.imports.detector import Violation
from sortimports.imports.fixes import analyze, apply_fixes
from sortimports.imports.statements import ImportStatement
from sortimports.parsers.ecmascript import ScanError, scan_imports
from sortimports.parsers.python import collect_imports

LOG = logging.getLogger(__name__)

ECMASCRIPT_SUFFIXES = {".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts"}
PYTHON_SUFFIXES = {".py", ".pyi"}
SUPPORTED_SUFFIXES = ECMASCRIPT_SUFFIXES | PYTHON_SUFFIXES

# Directories never searched when a directory is given
SKIPPED_DIRECTORIES = {"node_modules", "__pycache__", "dist", "build"}


def parse_statements(text: str, path: Path | None = None) -> tuple[SourceText, list[ImportStatement]]:
    """Find the import statements of a file.

    Python files (``.py``, ``.pyi``) are read with LibCST, everything else
    with the ES module scanner.

    Raises
    ------
    ScanError
        If an ES import declaration is malformed.
    libcst.ParserSyntaxError
        If a Python file cannot be parsed.
    """
    source = SourceText(text)
    if path is not None and path.suffix in PYTHON_SUFFIXES:
        return source, collect_imports(source)
    return source, scan_imports(source)


def check_source(
    text: str,
    options: Mapping[str, Any] | SortOrderConfig | None = None,
    path: Path | None = None,
) -> list[Violation]:
    """Report the import ordering violations of a source string.

    Examples
    --------
    >>> [v.message for v in check_source("import b from 'b';\\nimport a from 'a';\\n")]
    ['Imports should be sorted alphabetically.']
    """
    config = options if isinstance(options, SortOrderConfig) else SortOrderConfig.from_options(options)
    source, statements = parse_statements(text, path)
    return analyze(source, statements, config)


def fix_text(
    text: str,
    options: Mapping[str, Any] | SortOrderConfig | None = None,
    path: Path | None = None,
) -> str:
    """Return ``text`` with every fixable import ordering violation corrected."""
    config = options if isinstance(options, SortOrderConfig) else SortOrderConfig.from_options(options)
    source, statements = parse_statements(text, path)
    return apply_fixes(source, analyze(source, statements, config))


class SortImports:
    """
    Check and fix import order in a set of files.

    Parameters
    ----------
    path : str | Path
        A directory, a single file or a glob pattern.
        - Directory: every supported file below it (recursive)
        - File: just this file
        - Glob pattern: all matching files (e.g. "src/**/*.ts")
    dry_run : bool, optional
        If True, fixes are computed and reported as diffs but never
        written. Defaults to False.
    config : SortOrderConfig | Mapping[str, Any] | None, optional
        Ordering options. When omitted, ``[tool.sortimports]`` of the
        nearest pyproject.toml is used.

    Raises
    ------
    ConfigError
        If the options are invalid.

    Examples
    --------
    >>> si = SortImports("src/", dry_run=True)
    >>> result = si.fix()
    >>> print(result.diff)
    """

    def __init__(
        self,
        path: str | Path,
        dry_run: bool = False,
        config: SortOrderConfig | Mapping[str, Any] | None = None,
    ) -> None:
        self.path = Path(path) if isinstance(path, str) else path
        self.dry_run = dry_run
        if isinstance(config, SortOrderConfig):
            self.config = config
        elif config is not None:
            self.config = SortOrderConfig.from_options(config)
        else:
            self.config = load_config(self.root)
        self._files: list[Path] | None = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    @property
    def root(self) -> Path:
        """Directory the working set is resolved against."""
        if self.path.is_file():
            return self.path.parent.resolve()
        if self.path.is_dir():
            return self.path.resolve()
        base = str(self.path).split("*")[0].rsplit("/", 1)[0] or "."
        return Path(base).resolve()

    @property
    def files(self) -> list[Path]:
        """
        Supported files in the working set.

        Lazily computed on first access.
        """
        if self._files is None:
            self._files = self._discover_files()
        return self._files

    def _discover_files(self) -> list[Path]:
        if self.path.is_file():
            return [self.path.resolve()]
        if self.path.is_dir():
            root = self.path.resolve()
            return sorted(
                p
                for p in root.rglob("*")
                if p.is_file()
                and p.suffix in SUPPORTED_SUFFIXES
                and not any(
                    part in SKIPPED_DIRECTORIES or part.startswith(".")
                    for part in p.relative_to(root).parts[:-1]
                )
            )
        path_str = str(self.path)
        if "*" in path_str or "?" in path_str or "[" in path_str:
            base_path = Path(path_str.split("*")[0].rsplit("/", 1)[0] or ".")
            pattern = path_str[len(str(base_path)):].lstrip("/")
            return sorted(p for p in base_path.resolve().glob(pattern) if p.suffix in SUPPORTED_SUFFIXES)
        return []

    def _read(self, path: Path, operation: str) -> tuple[str, SourceText, list[ImportStatement]] | ErrorResult:
        if not path.exists():
            return ErrorResult(message=f"File not found: {path}", operation=operation, path=path)
        try:
            content = path.read_text()
            source, statements = parse_statements(content, path)
        except (OSError, UnicodeDecodeError) as e:
            return ErrorResult(message=f"Error reading {path}: {e}", exception=e, operation=operation, path=path)
        except (ScanError, cst.ParserSyntaxError) as e:
            return ErrorResult(message=f"Failed to parse {path}: {e}", exception=e, operation=operation, path=path)
        LOG.debug("Found %d import statement(s) in %s", len(statements), path)
        return content, source, statements

    def check_file(self, path: str | Path) -> Result:
        """Report import ordering violations in one file.

        Returns
        -------
        Result
            ``data`` holds the list of violations.
        """
        path = Path(path)
        read = self._read(path, "check")
        if isinstance(read, ErrorResult):
            return read
        _, source, statements = read

        violations = analyze(source, statements, self.config)
        if not violations:
            return Result(success=True, message=f"Imports sorted in {path}", data=[], path=path)
        return Result(
            success=True,
            message=f"{len(violations)} import order violation(s) in {path}",
            data=violations,
            path=path,
        )

    def fix_file(self, path: str | Path) -> Result:
        """Sort the imports of one file.

        Returns
        -------
        Result
            ``data`` holds the violations still present after fixing
            (those without an available fix).
        """
        path = Path(path)
        read = self._read(path, "fix")
        if isinstance(read, ErrorResult):
            return read
        content, source, statements = read

        violations = analyze(source, statements, self.config)
        new_content = apply_fixes(source, violations)
        if new_content == content:
            return Result(
                success=True,
                message=f"Imports already sorted in {path}" if not violations else f"No fix available in {path}",
                data=violations,
                path=path,
            )

        new_source, new_statements = parse_statements(new_content, path)
        remaining = analyze(new_source, new_statements, self.config)
        diff = generate_diff(content, new_content, path)

        if self.dry_run:
            return Result(
                success=True,
                message=f"[DRY RUN] Would sort imports in {path}",
                files_changed=[path],
                data=remaining,
                diff=diff,
                diffs={path: diff},
                path=path,
            )

        path.write_text(new_content)
        LOG.debug("Sorted imports in %s (%d violation(s) left)", path, len(remaining))
        return Result(
            success=True,
            message=f"Sorted imports in {path}",
            files_changed=[path],
            data=remaining,
            diff=diff,
            diffs={path: diff},
            path=path,
        )

    def check(self) -> BatchResult:
        """Check every file in the working set."""
        return BatchResult([self.check_file(p) for p in self.files])

    def fix(self) -> BatchResult:
        """Fix every file in the working set."""
        return BatchResult([self.fix_file(p) for p in self.files])


__all__ = [
    "ConfigError",
    "SortImports",
    "check_source",
    "fix_text",
    "parse_statements",
]
