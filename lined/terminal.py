"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
from typing import Optional

import blessed

from .constants import EditorConstants
from .view import RenderDescriptor, banner_rows, format_status_line

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        # Virtual screen state for minimal updates
        self._last_rows: list[str] | None = None
        self._last_status: str | None = None
        self._last_size: tuple[int, int] | None = None

    def setup(self):
        """Enter fullscreen mode and raw keyboard input."""
        from curtsies import Input  # type: ignore

        print(self.term.enter_fullscreen + self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        # Input switches the tty to raw mode until __exit__
        self._curtsies_input = Input(keynames='curtsies')  # type: ignore
        self._curtsies_input.__enter__()
        self.invalidate_frame()

    def cleanup(self):
        """Leave raw mode and fullscreen; safe to call more than once."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Teardown must reach the fullscreen restore below
                logger.exception("Could not restore keyboard mode")
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen + self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def invalidate_frame(self) -> None:
        """Forget the cached frame so the next draw repaints everything."""
        self._last_rows = None
        self._last_status = None
        self._last_size = None

    def draw_frame(self, descriptor: RenderDescriptor, prompt: Optional[str] = None) -> None:
        """Draw the text rows, the status bar and the cursor.

        Rows that did not change since the previous frame are not rewritten.

        Args:
            descriptor: Frame produced by the controller
            prompt: Text input shown in the status bar; the cursor is
                placed after it instead of in the text
        """
        columns, rows = descriptor.viewport_size
        if descriptor.line_count == 0:
            text_rows = banner_rows(rows, columns)
        else:
            text_rows = descriptor.screen_rows()
            text_rows += [EditorConstants.EMPTY_LINE_MARKER] * (rows - len(text_rows))

        out = []
        if self._last_rows is None or self._last_size != (columns, rows):
            out.append(self.term.home + self.term.clear)
            self._last_rows = [None] * rows
            self._last_status = None
            self._last_size = (columns, rows)

        for y, text in enumerate(text_rows):
            if self._last_rows[y] != text:
                out.append(self.term.move(y, 0) + text + self.term.clear_eol)
                self._last_rows[y] = text

        width = self.term.width
        if prompt is not None:
            status = (" " + prompt)[:width].ljust(width)
        else:
            status = format_status_line(descriptor, width)
        if status != self._last_status:
            out.append(self.term.move(rows, 0) + self.term.reverse + status + self.term.normal)
            self._last_status = status

        if prompt is not None:
            out.append(self.term.move(rows, min(len(prompt) + 1, width - 1)))
        else:
            column, row = descriptor.cursor_screen_pos
            out.append(self.term.move(row, column))
        out.append(self.term.normal_cursor)
        print(''.join(out), end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        curtsies keeps bytes it has read but not yet decoded, so a paste
        can leave keys buffered with nothing left on stdin. ``send`` looks
        at that buffer before it waits on the file descriptor.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None if nothing arrived in time.
        """
        if self._curtsies_input is None:
            return None
        key = self._curtsies_input.send(timeout)  # type: ignore
        if key is None:
            return None
        return str(key)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Rows available for text (excluding the status line)."""
        return self.term.height - EditorConstants.STATUS_ROWS
