"""Exception types raised by the lined editor."""

from typing import Optional


class EditorError(Exception):
    """Base class for editor errors."""


class EditorIOError(EditorError):
    """A file could not be opened, created or written.

    The originating ``OSError`` (or ``UnicodeDecodeError``) is chained as
    ``__cause__``.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class NoFilenameError(EditorError):
    """Save was requested but the session has no file name yet."""


class BoundsViolation(EditorError, AssertionError):
    """A buffer/viewport invariant was broken.

    Buffer and viewport operations clamp instead of raising, so this only
    surfaces from ``Viewport.check_invariants()`` when there is a logic error.
    """
