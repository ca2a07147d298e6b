"""Immutable source text with offset and line lookups.

All text handed out by the import sorter is sliced from a ``SourceText``
by ``TextSpan``. Nothing is ever re-serialized from parsed structure.
"""
from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class TextSpan:
    """Half-open ``[start, end)`` range of character offsets."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def overlaps(self, other: TextSpan) -> bool:
        """Check if the two spans share at least one character."""
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class SourceText:
    """A file's text plus a line index.

    Attributes
    ----------
    text : str
        The full, unmodified source.

    Examples
    --------
    >>> src = SourceText("import a from 'a';\\nimport b from 'b';\\n")
    >>> src.line_of(20)
    2
    >>> src.slice(TextSpan(0, 8))
    'import a'
    """

    text: str
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        for index, char in enumerate(self.text):
            if char == "\n":
                starts.append(index + 1)
        object.__setattr__(self, "_line_starts", tuple(starts))

    def __len__(self) -> int:
        return len(self.text)

    def slice(self, span: TextSpan) -> str:
        return self.text[span.start:span.end]

    def between(self, left: TextSpan, right: TextSpan) -> str:
        """Text strictly between the end of ``left`` and the start of ``right``."""
        return self.text[left.end:right.start]

    def line_of(self, offset: int) -> int:
        """1-based line number holding ``offset``."""
        return bisect_right(self._line_starts, offset)

    def offset_of(self, line: int, column: int) -> int:
        """Character offset of a 1-based ``line`` and 0-based ``column``."""
        return self._line_starts[line - 1] + column

    def start_line(self, span: TextSpan) -> int:
        return self.line_of(span.start)

    def end_line(self, span: TextSpan) -> int:
        # The end offset is exclusive, so look at the last character.
        return self.line_of(max(span.start, span.end - 1))
