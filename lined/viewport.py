"""Viewport: the window of the buffer that is on screen, and the cursor in it.

The cursor column and row are screen coordinates. The buffer position they
address is ``(column + horizontal_offset, active_line_index)``. All
conversions go through ``screen_to_buffer`` and ``buffer_to_screen``.

Scrolling is reactive: offsets only move by the minimum needed to keep the
cursor visible, and the vertical offset never scrolls past the end of the
buffer. Out-of-range requests are clamped, never raised.
"""

from .buffer import TextBuffer
from .constants import EditorConstants
from .errors import BoundsViolation


class Viewport:
    buffer: TextBuffer
    columns: int
    rows: int
    active_line_index: int = 0
    horizontal_offset: int = 0
    vertical_offset: int = 0
    column: int = 0  # Cursor column on screen

    def __init__(self, buffer: TextBuffer,
                 columns: int = EditorConstants.DEFAULT_COLUMNS,
                 rows: int = EditorConstants.DEFAULT_ROWS):
        self.buffer = buffer
        self.columns = max(EditorConstants.MIN_COLUMNS, columns)
        self.rows = max(EditorConstants.MIN_ROWS, rows)
        self.reset()

    @property
    def row(self) -> int:
        """Cursor row on screen."""
        return self.active_line_index - self.vertical_offset

    @property
    def cursor(self) -> tuple[int, int]:
        return (self.column, self.row)

    @property
    def scroll_offset(self) -> tuple[int, int]:
        return (self.horizontal_offset, self.vertical_offset)

    @property
    def buffer_column(self) -> int:
        return self.screen_to_buffer(self.column, self.row)[0]

    def screen_to_buffer(self, column: int, row: int) -> tuple[int, int]:
        """Map a screen cell to a (column, line index) buffer position."""
        return (column + self.horizontal_offset, row + self.vertical_offset)

    def buffer_to_screen(self, buffer_col: int, buffer_row: int) -> tuple[int, int]:
        """Map a buffer position to a screen cell (may be off-screen)."""
        return (buffer_col - self.horizontal_offset, buffer_row - self.vertical_offset)

    def visible_range(self) -> range:
        """Line indices currently on screen."""
        end = min(self.vertical_offset + self.rows, self.buffer.line_count)
        return range(self.vertical_offset, end)

    def reset(self) -> None:
        self.active_line_index = 0
        self.horizontal_offset = 0
        self.vertical_offset = 0
        self.column = 0

    def resize(self, columns: int, rows: int) -> None:
        self.columns = max(EditorConstants.MIN_COLUMNS, columns)
        self.rows = max(EditorConstants.MIN_ROWS, rows)
        self.reconcile_after_edit()

    def _last_line(self) -> int:
        return max(0, self.buffer.line_count - 1)

    def _max_vertical_offset(self) -> int:
        return max(0, self.buffer.line_count - self.rows)

    def _scroll_to_active(self) -> None:
        """Shift the vertical offset just enough to show the active line."""
        if self.active_line_index < self.vertical_offset:
            self.vertical_offset = self.active_line_index
        elif self.active_line_index >= self.vertical_offset + self.rows:
            self.vertical_offset = self.active_line_index - self.rows + 1
        self.vertical_offset = max(0, min(self.vertical_offset, self._max_vertical_offset()))

    def _place_column(self, buffer_col: int) -> None:
        """Put the cursor on ``buffer_col`` of the active line.

        The column is clamped to the append position, and the horizontal
        offset shifts only when the column would leave the screen.
        """
        line_length = self.buffer.line_length(self.active_line_index)
        buffer_col = max(0, min(buffer_col, line_length))
        if buffer_col < self.horizontal_offset:
            self.horizontal_offset = buffer_col
        elif buffer_col >= self.horizontal_offset + self.columns:
            self.horizontal_offset = buffer_col - self.columns + 1
        self.column = self.buffer_to_screen(buffer_col, self.active_line_index)[0]

    def move_vertical(self, delta: int) -> None:
        if self.buffer.is_empty:
            self.reset()
            return
        buffer_col = self.buffer_column
        self.active_line_index = max(0, min(self.active_line_index + delta, self._last_line()))
        self._scroll_to_active()
        self._place_column(buffer_col)
        if __debug__:
            self.check_invariants()

    def move_half_page(self, direction: int) -> None:
        """Scroll a screenful up (direction < 0) or down (direction > 0).

        The cursor keeps its row on screen; the active line follows it.
        """
        if self.buffer.is_empty:
            self.reset()
            return
        step = (direction > 0) - (direction < 0)
        row = self.row
        buffer_col = self.buffer_column
        offset = self.vertical_offset + step * self.rows
        self.vertical_offset = max(0, min(offset, self._max_vertical_offset()))
        self.active_line_index = min(self.vertical_offset + row, self._last_line())
        self._place_column(buffer_col)
        if __debug__:
            self.check_invariants()

    def move_horizontal(self, delta: int) -> None:
        """Move the cursor ``delta`` characters, wrapping across lines."""
        if self.buffer.is_empty:
            self.reset()
            return
        for _ in range(abs(delta)):
            if delta > 0:
                self._step_right()
            else:
                self._step_left()
        if __debug__:
            self.check_invariants()

    def _step_right(self) -> None:
        buffer_col = self.buffer_column
        if buffer_col < self.buffer.line_length(self.active_line_index):
            self._place_column(buffer_col + 1)
        elif self.active_line_index < self._last_line():
            self.move_vertical(1)
            self._place_column(0)

    def _step_left(self) -> None:
        buffer_col = self.buffer_column
        if buffer_col > 0:
            self._place_column(buffer_col - 1)
        elif self.active_line_index > 0:
            self.move_vertical(-1)
            self._place_column(self.buffer.line_length(self.active_line_index))

    def place_cursor(self, buffer_col: int) -> None:
        """Move the cursor to ``buffer_col`` on the active line."""
        if self.buffer.is_empty:
            self.reset()
            return
        self.active_line_index = max(0, min(self.active_line_index, self._last_line()))
        self._scroll_to_active()
        self._place_column(buffer_col)
        if __debug__:
            self.check_invariants()

    def reconcile_after_edit(self) -> None:
        """Pull the cursor and offsets back inside the (edited) buffer."""
        if self.buffer.is_empty:
            self.reset()
            return
        buffer_col = self.buffer_column
        self.active_line_index = max(0, min(self.active_line_index, self._last_line()))
        self._scroll_to_active()
        self._place_column(buffer_col)
        if __debug__:
            self.check_invariants()

    def check_invariants(self) -> None:
        """Raise BoundsViolation if the cursor or offsets are out of bounds."""
        state = (f"active={self.active_line_index} offset={self.scroll_offset} "
                 f"column={self.column} size=({self.columns},{self.rows}) "
                 f"lines={self.buffer.line_count}")
        if min(self.horizontal_offset, self.vertical_offset, self.column) < 0:
            raise BoundsViolation(f"negative coordinate: {state}")
        if self.buffer.is_empty:
            if self.active_line_index or self.horizontal_offset or self.vertical_offset or self.column:
                raise BoundsViolation(f"cursor away from origin in empty buffer: {state}")
            return
        if not 0 <= self.active_line_index < self.buffer.line_count:
            raise BoundsViolation(f"active line outside buffer: {state}")
        if not self.vertical_offset <= self.active_line_index < self.vertical_offset + self.rows:
            raise BoundsViolation(f"active line off screen: {state}")
        if self.vertical_offset > self._max_vertical_offset():
            raise BoundsViolation(f"scrolled past end of buffer: {state}")
        if self.column >= self.columns:
            raise BoundsViolation(f"cursor column off screen: {state}")
        if self.buffer_column > self.buffer.line_length(self.active_line_index):
            raise BoundsViolation(f"cursor past end of line: {state}")
