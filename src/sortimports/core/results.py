"""Result types for file-level operations.

This module defines the core result classes:
- Result - Outcome of checking or fixing one file
- ErrorResult - Result for a file that could not be processed
- BatchResult - Aggregate result across many files
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from sortimports.imports.detector import Violation


@dataclass
class Result:
    """Outcome of an operation on one file.

    File operations never raise exceptions. Instead, they return Result
    objects that indicate success or failure.

    Attributes:
        success: Whether the file could be processed
        message: Human-readable description of what happened
        files_changed: Files that were (or in dry-run mode would be) rewritten
        data: Payload, the list of violations for check and fix operations
        diff: Combined unified diff of all changes (if any)
        diffs: Per-file diffs mapping path to diff string
        path: File the operation was applied to
    """

    success: bool
    message: str
    files_changed: list[Path] = field(default_factory=list)
    data: Any = None
    diff: str | None = None
    diffs: dict[Path, str] = field(default_factory=dict)
    path: Path | None = None

    def __bool__(self) -> bool:
        return self.success

    def is_error(self) -> bool:
        """Check if this result represents an error."""
        return not self.success

    @property
    def violations(self) -> list[Violation]:
        """Violations carried in ``data``, or an empty list."""
        return list(self.data) if isinstance(self.data, list) else []

    def get_diff(self, path: Path | None = None) -> str | None:
        """Get diff for a specific file or combined diff.

        Parameters
        ----------
        path : Path | None
            If provided, returns diff for that specific file.
            If None, returns the combined diff.

        Returns
        -------
        str | None
            The diff string, or None if no diff available.
        """
        if path is not None:
            return self.diffs.get(path)
        return self.diff


@dataclass
class ErrorResult(Result):
    """Result for failed operations - never raises automatically.

    Attributes:
        exception: The original exception, if any
        operation: Name of the attempted operation
    """

    success: bool = field(default=False, init=False)
    exception: Exception | None = None
    operation: str = ""

    def raise_if_error(self) -> None:
        """Explicitly re-raise the exception if the programmer wants to."""
        if self.exception:
            raise self.exception
        raise RuntimeError(self.message)


@dataclass
class BatchResult:
    """Aggregate result for an operation applied to many files."""

    results: list[Result] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if every file was processed."""
        return all(r.success for r in self.results)

    @property
    def partial_success(self) -> bool:
        """True if at least one file was processed."""
        return any(r.success for r in self.results)

    @property
    def succeeded(self) -> list[Result]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> list[Result]:
        return [r for r in self.results if not r.success]

    @property
    def violations(self) -> list[Violation]:
        """All violations across all files, in file order."""
        found: list[Violation] = []
        for r in self.results:
            found.extend(r.violations)
        return found

    @property
    def files_changed(self) -> list[Path]:
        """All files changed across all operations."""
        files: list[Path] = []
        for r in self.results:
            files.extend(r.files_changed)
        return sorted(set(files))

    @property
    def diff(self) -> str | None:
        """Combined diff from all results."""
        from sortimports.core.diff import combine_diffs

        all_diffs = self.diffs
        if not all_diffs:
            return None
        return combine_diffs(all_diffs)

    @property
    def diffs(self) -> dict[Path, str]:
        """Merged diffs from all results."""
        merged: dict[Path, str] = {}
        for r in self.results:
            merged.update(r.diffs)
        return merged

    def __bool__(self) -> bool:
        return self.success

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)
