"""Render descriptors and the text that the terminal draws from them."""

from dataclasses import dataclass
from typing import Optional

from .constants import EditorConstants


@dataclass(frozen=True)
class RenderDescriptor:
    """Everything needed to draw one frame.

    ``visible_lines`` holds the buffer lines of the vertical window, not yet
    cut to the horizontal window; ``screen_rows()`` does that.
    """
    visible_lines: list[str]
    cursor_screen_pos: tuple[int, int]  # (column, row)
    scroll_offsets: tuple[int, int]  # (horizontal, vertical)
    active_line_index: int
    line_count: int
    viewport_size: tuple[int, int]  # (columns, rows)
    filename: Optional[str] = None
    modified: bool = False
    status_message: Optional[str] = None

    @property
    def absolute_cursor(self) -> tuple[int, int]:
        """Cursor position in the buffer as (column, line index)."""
        return (self.cursor_screen_pos[0] + self.scroll_offsets[0], self.active_line_index)

    def screen_rows(self) -> list[str]:
        """Visible lines cut to the horizontal window.

        Every scalar occupies one cell: tabs show as a space and other
        control characters as ``?``.
        """
        start = self.scroll_offsets[0]
        end = start + self.viewport_size[0]
        return [_one_cell(line[start:end]) for line in self.visible_lines]


def _one_cell(text: str) -> str:
    if text.isprintable():
        return text
    return ''.join(
        c if c.isprintable() else EditorConstants.TAB_PLACEHOLDER if c == '\t'
        else EditorConstants.CONTROL_PLACEHOLDER
        for c in text
    )


def format_status_line(descriptor: RenderDescriptor, width: int) -> str:
    """Build the status bar text, padded or cut to ``width``.

    The file name sits on the left and the position report on the right.
    A status message, when present, follows the file name.
    """
    columns, rows = descriptor.viewport_size
    h, v = descriptor.scroll_offsets
    column, line = descriptor.absolute_cursor
    position = EditorConstants.STATUS_FORMAT.format(
        cols=columns, rows=rows, h=h, v=v,
        count=descriptor.line_count,
        line=line + 1, column=column + 1,
    )
    left = " " + (descriptor.filename or EditorConstants.NO_NAME)
    if descriptor.modified:
        left += EditorConstants.MODIFIED_MARKER
    if descriptor.status_message:
        left += "  " + descriptor.status_message

    gap = width - len(left) - len(position) - 1
    if gap < 1:
        return (left + "  " + position)[:width].ljust(width)
    return left + " " * gap + position + " "


def banner_rows(rows: int, columns: int) -> list[str]:
    """Rows for an empty buffer: the welcome banner centred on screen."""
    banner = EditorConstants.BANNER_LINES
    out = [EditorConstants.EMPTY_LINE_MARKER] * rows
    top = max(0, (rows - len(banner)) // 3)
    for i, text in enumerate(banner):
        y = top + i
        if y >= rows:
            break
        padding = max(0, (columns - len(text)) // 2)
        line = EditorConstants.EMPTY_LINE_MARKER + " " * max(0, padding - 1) + text
        out[y] = line[:columns]
    return out
