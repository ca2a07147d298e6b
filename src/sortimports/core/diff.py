"""Diff generation for rewritten files."""
from __future__ import annotations

import difflib
from pathlib import Path


def generate_diff(
    original: str,
    modified: str,
    path: Path,
    context_lines: int = 3,
) -> str:
    """Generate unified diff between original and modified content.

    Parameters
    ----------
    original : str
        Original file content.
    modified : str
        Content with imports sorted.
    path : Path
        Path to the file (used in diff header).
    context_lines : int
        Number of context lines to include around changes.

    Returns
    -------
    str
        Unified diff string, or empty string if no changes.

    Examples
    --------
    >>> diff = generate_diff("import b from 'b';\\nimport a from 'a';\\n",
    ...                      "import a from 'a';\\nimport b from 'b';\\n", Path("app.js"))
    >>> print(diff)
    --- a/app.js
    +++ b/app.js
    @@ -1,2 +1,2 @@
    +import a from 'a';
     import b from 'b';
    -import a from 'a';
    """
    if original == modified:
        return ""

    original_lines = original.splitlines(keepends=True)
    modified_lines = modified.splitlines(keepends=True)

    # Ensure files end with newlines for proper diff formatting
    if original_lines and not original_lines[-1].endswith("\n"):
        original_lines[-1] += "\n"
    if modified_lines and not modified_lines[-1].endswith("\n"):
        modified_lines[-1] += "\n"

    diff = difflib.unified_diff(
        original_lines,
        modified_lines,
        fromfile=f"a/{path}",
        tofile=f"b/{path}",
        n=context_lines,
    )
    return "".join(diff)


def combine_diffs(diffs: dict[Path, str]) -> str:
    """Combine per-file diffs into one string, ordered by path."""
    non_empty = {p: d for p, d in diffs.items() if d}
    if not non_empty:
        return ""
    sorted_diffs = sorted(non_empty.items(), key=lambda x: str(x[0]))
    return "\n".join(d for _, d in sorted_diffs)
