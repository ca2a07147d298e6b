"""
Tests for sortimports.core.results module.

File operations never raise. They return Result objects, and operations over
many files return a BatchResult.

Coverage targets:
- Result: success/failure, violations payload, diff access, path
- ErrorResult: always unsuccessful, raise_if_error behavior
- BatchResult: aggregation of violations, changed files and diffs
"""
from __future__ import annotations

from pathlib import Path

import pytest

from sortimports.core.results import BatchResult, ErrorResult, Result
from sortimports.core.sortimports import check_source


@pytest.fixture
def violations():
    """Two violations from a small unsorted snippet."""
    return check_source("import b from 'b';\nimport a from 'a';\nimport {d, c} from 'x';\n")


# =============================================================================
# Result Tests
# =============================================================================

class TestResult:
    """Tests for the per-file Result class."""

    def test_success_is_truthy(self):
        result = Result(success=True, message="Imports sorted in app.js")

        assert bool(result) is True
        assert result.is_error() is False
        assert result.message == "Imports sorted in app.js"

    def test_failure_is_falsy(self):
        result = Result(success=False, message="Failed")
        assert bool(result) is False
        assert result.is_error() is True

    def test_defaults(self):
        """
        Optional fields default to empty values.
        """
        result = Result(success=True, message="Test")

        assert result.files_changed == []
        assert result.data is None
        assert result.diff is None
        assert result.diffs == {}
        assert result.path is None
        assert result.violations == []

    def test_violations_from_data(self, violations):
        """
        Check and fix operations put the list of violations in ``data``.
        """
        result = Result(success=True, message="2 violations", data=violations, path=Path("app.js"))

        assert result.violations == violations
        # A copy is handed out
        result.violations.clear()
        assert len(result.violations) == len(violations)

    def test_non_list_data_has_no_violations(self):
        result = Result(success=True, message="Data", data={"key": "value"})
        assert result.violations == []

    def test_diff_access(self):
        """
        get_diff() returns the per-file diff, or the combined one without
        an argument.
        """
        path = Path("/tmp/app.js")
        diff = "--- a/app.js\n+++ b/app.js\n@@ -1,2 +1,2 @@\n-import b from 'b';\n+import a from 'a';\n"
        result = Result(success=True, message="Sorted", files_changed=[path], diff=diff, diffs={path: diff})

        assert result.get_diff(path) == diff
        assert result.get_diff() == diff
        assert result.get_diff(Path("/tmp/other.js")) is None


# =============================================================================
# ErrorResult Tests
# =============================================================================

class TestErrorResult:
    """Tests for results of files that could not be processed."""

    def test_always_unsuccessful(self):
        """
        ``success`` is not an init parameter and is always False.
        """
        error = ErrorResult(message="File not found: missing.js", operation="check")

        assert error.success is False
        assert bool(error) is False
        assert error.is_error() is True
        assert error.operation == "check"
        assert error.violations == []

    def test_success_cannot_be_passed(self):
        with pytest.raises(TypeError):
            ErrorResult(success=True, message="nope")

    def test_raise_if_error_reraises_exception(self):
        original = ValueError("bad import")
        error = ErrorResult(message="Failed to parse app.js", exception=original)

        with pytest.raises(ValueError) as exc_info:
            error.raise_if_error()
        assert exc_info.value is original

    def test_raise_if_error_without_exception(self):
        error = ErrorResult(message="File not found: app.js")

        with pytest.raises(RuntimeError, match="File not found: app.js"):
            error.raise_if_error()

    def test_is_a_result(self):
        error = ErrorResult(message="Error", path=Path("app.js"))
        assert isinstance(error, Result)
        assert error.path == Path("app.js")


# =============================================================================
# BatchResult Tests
# =============================================================================

class TestBatchResult:
    """Tests for results aggregated over many files."""

    def test_empty(self):
        """
        all() of nothing is True, any() of nothing is False.
        """
        batch = BatchResult()

        assert batch.success is True
        assert batch.partial_success is False
        assert len(batch) == 0
        assert batch.violations == []
        assert batch.diff is None

    def test_mixed(self):
        batch = BatchResult([
            Result(success=True, message="ok"),
            ErrorResult(message="failed"),
        ])

        assert batch.success is False
        assert bool(batch) is False
        assert batch.partial_success is True
        assert [r.message for r in batch.succeeded] == ["ok"]
        assert [r.message for r in batch.failed] == ["failed"]

    def test_violations_across_files(self, violations):
        batch = BatchResult([
            Result(success=True, message="a", data=violations[:1]),
            Result(success=True, message="b", data=[]),
            Result(success=True, message="c", data=violations[1:]),
        ])
        assert batch.violations == violations

    def test_files_changed_unique_and_sorted(self):
        first, second = Path("/tmp/b.js"), Path("/tmp/a.js")
        batch = BatchResult([
            Result(success=True, message="1", files_changed=[first]),
            Result(success=True, message="2", files_changed=[second, first]),
        ])
        assert batch.files_changed == [second, first]

    def test_diffs_merge_and_combine(self):
        a, b = Path("a.js"), Path("b.js")
        batch = BatchResult([
            Result(success=True, message="b", diffs={b: "diff b\n"}),
            Result(success=True, message="a", diffs={a: "diff a\n"}),
        ])

        assert batch.diffs == {a: "diff a\n", b: "diff b\n"}
        # Combined diff is ordered by path
        assert batch.diff == "diff a\n\ndiff b\n"

    def test_iteration(self):
        results = [Result(success=True, message="1"), Result(success=True, message="2")]
        batch = BatchResult(results)
        assert list(batch) == results
