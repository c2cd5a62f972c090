"""Constants and configuration for the lined editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Screen layout
    STATUS_ROWS = 1  # Rows reserved at the bottom for the status bar
    DEFAULT_COLUMNS = 80  # Viewport size used before the terminal is queried
    DEFAULT_ROWS = 24
    MIN_COLUMNS = 1  # Smallest usable viewport
    MIN_ROWS = 1
    EMPTY_LINE_MARKER = "~"  # Drawn on rows past the end of the buffer
    TAB_PLACEHOLDER = " "  # Tabs and control characters are drawn one cell wide
    CONTROL_PLACEHOLDER = "?"

    # Welcome banner shown while the buffer has no lines
    BANNER_LINES = (
        "lined",
        "",
        "type to start a new line",
        "Ctrl-S save and quit    Ctrl-Q quit",
    )

    # File operations
    ENCODING = "utf-8"
    LINE_TERMINATOR = "\n"
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status bar
    NO_NAME = "[No Name]"
    MODIFIED_MARKER = " +"
    STATUS_FORMAT = (
        "size({cols},{rows}) | scroll_offset({h},{v}) | {count} lines | "
        "Cursor: {line}:{column}"
    )
    SAVE_PROMPT = "File to save in: "
