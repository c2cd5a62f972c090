"""Controller binding the text buffer to the viewport.

Every command runs in the same order: mutate the buffer, reconcile the
viewport, describe the frame for the renderer.
"""

import logging
from typing import Iterable, Optional

from .buffer import TextBuffer
from .commands import EditorCommand
from .constants import EditorConstants
from .errors import NoFilenameError
from .persistence import open_lines, save_lines
from .view import RenderDescriptor
from .viewport import Viewport

logger = logging.getLogger(__name__)


class Controller:
    """Owns one buffer and its viewport for the length of a session."""

    def __init__(self, buffer: Optional[TextBuffer] = None,
                 columns: int = EditorConstants.DEFAULT_COLUMNS,
                 rows: int = EditorConstants.DEFAULT_ROWS,
                 filename: Optional[str] = None):
        self.buffer = buffer if buffer is not None else TextBuffer()
        self.viewport = Viewport(self.buffer, columns, rows)
        self.filename = filename
        self.modified = False
        self.running = True
        self.status_message: Optional[str] = None

    def open(self, lines: Iterable[str]) -> None:
        """Replace the buffer content and put the cursor at the origin."""
        self.buffer.open(lines)
        self.viewport.reset()
        self.modified = False

    def load(self, path: str) -> None:
        """Open ``path``; EditorIOError propagates to the caller."""
        self.open(open_lines(path))
        self.filename = path

    def save(self, path: Optional[str] = None) -> None:
        """Write the buffer to ``path`` (default: the session file).

        Raises:
            NoFilenameError: No path given and the session has no file name.
            EditorIOError: The file could not be written.
        """
        path = path or self.filename
        if not path:
            raise NoFilenameError("no file name")
        save_lines(path, self.buffer.lines)
        self.filename = path
        self.modified = False
        self.status_message = f"Saved to {path}"

    def resize(self, columns: int, rows: int) -> None:
        self.viewport.resize(columns, rows)

    def dispatch(self, command: Optional[EditorCommand]) -> RenderDescriptor:
        """Run one command and return the frame to draw.

        ``None`` (an unbound key) leaves the state untouched.
        """
        if command is not None:
            logger.debug("Dispatching %r", command)
            if command.execute(self):
                self.modified = True
        self.viewport.reconcile_after_edit()
        return self.render_descriptor()

    def insert_char(self, ch: str) -> bool:
        """Insert a printable character at the cursor."""
        if len(ch) != 1 or not ch.isprintable():
            return False
        self.buffer.ensure_line()
        col = self.viewport.buffer_column
        self.buffer.insert_char(self.viewport.active_line_index, col, ch)
        self.viewport.place_cursor(col + 1)
        return True

    def delete_backward(self) -> bool:
        """Delete the character left of the cursor.

        At column 0 nothing is merged; an empty line (other than the last
        remaining one) is dropped instead.
        """
        if self.buffer.is_empty:
            return False
        row = self.viewport.active_line_index
        col = self.viewport.buffer_column
        if col == 0:
            return self.buffer.collapse_empty_line(row)
        self.buffer.delete_char(row, col - 1)
        self.viewport.place_cursor(col - 1)
        return True

    def split_line(self) -> bool:
        """Break the active line at the cursor and move to the new line."""
        self.buffer.ensure_line()
        self.buffer.split_line(self.viewport.active_line_index, self.viewport.buffer_column)
        self.viewport.move_vertical(1)
        self.viewport.place_cursor(0)
        return True

    def render_descriptor(self) -> RenderDescriptor:
        viewport = self.viewport
        return RenderDescriptor(
            visible_lines=[self.buffer.line(i) for i in viewport.visible_range()],
            cursor_screen_pos=viewport.cursor,
            scroll_offsets=viewport.scroll_offset,
            active_line_index=viewport.active_line_index,
            line_count=self.buffer.line_count,
            viewport_size=(viewport.columns, viewport.rows),
            filename=self.filename,
            modified=self.modified,
            status_message=self.status_message,
        )
