"""In-memory text buffer: an ordered list of lines and the edits on them.

Lines are plain ``str`` values without terminators, so every column index is
a Unicode code point index. The buffer knows nothing about the screen.

Out-of-range rows and columns never raise. Reads return empty values and
edits are no-ops, so a stale index coming from the viewport cannot crash
the editor.
"""

from typing import Iterable, Optional


class TextBuffer:
    _lines: list[str]

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines = list(lines) if lines is not None else []

    def open(self, lines: Iterable[str]) -> None:
        """Replace the whole content with ``lines``."""
        self._lines = list(lines)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def _valid_row(self, row: int) -> bool:
        return 0 <= row < len(self._lines)

    def line(self, row: int) -> str:
        """Return line ``row``, or an empty string when out of range."""
        if not self._valid_row(row):
            return ""
        return self._lines[row]

    def line_length(self, row: int) -> int:
        if not self._valid_row(row):
            return 0
        return len(self._lines[row])

    def ensure_line(self) -> None:
        """Give an empty buffer one empty line to type into."""
        if not self._lines:
            self._lines.append("")

    def insert_char(self, row: int, col: int, ch: str) -> None:
        if not self._valid_row(row):
            return
        line = self._lines[row]
        col = max(0, min(col, len(line)))
        self._lines[row] = line[:col] + ch + line[col:]

    def delete_char(self, row: int, col: int) -> bool:
        """Remove the character at ``col`` in line ``row``.

        A line left empty by the deletion is dropped, unless it is the only
        line of the buffer.

        Returns:
            True if the line itself was removed.
        """
        if not self._valid_row(row):
            return False
        line = self._lines[row]
        if not 0 <= col < len(line):
            return False
        self._lines[row] = line[:col] + line[col + 1:]
        return self.collapse_empty_line(row)

    def collapse_empty_line(self, row: int) -> bool:
        """Remove line ``row`` if it is empty and not the sole line."""
        if not self._valid_row(row) or len(self._lines) < 2:
            return False
        if self._lines[row]:
            return False
        del self._lines[row]
        return True

    def split_line(self, row: int, col: int) -> None:
        """Break line ``row`` at ``col``; the tail becomes the next line."""
        if not self._valid_row(row):
            return
        line = self._lines[row]
        col = max(0, min(col, len(line)))
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])

    def merge_lines(self, row: int) -> int:
        """Append line ``row + 1`` to line ``row``.

        Returns:
            The column where the two lines were joined, or -1 if there is
            no following line.
        """
        if not self._valid_row(row) or not self._valid_row(row + 1):
            return -1
        join_col = len(self._lines[row])
        self._lines[row] += self._lines.pop(row + 1)
        return join_col
