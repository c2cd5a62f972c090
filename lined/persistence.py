"""Reading and writing newline-terminated line files."""

import logging
import os
import stat
import tempfile
from typing import Iterable

from .constants import EditorConstants
from .errors import EditorIOError

logger = logging.getLogger(__name__)


def open_lines(path: str) -> list[str]:
    """Read ``path`` into a list of lines with their terminators stripped.

    A trailing record without a newline is kept as a line. ``\\r\\n``
    endings are stripped as well.

    Raises:
        EditorIOError: The file cannot be read or is not valid UTF-8.
    """
    try:
        with open(path, 'r', encoding=EditorConstants.ENCODING, newline='') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not open %s: %s", path, e)
        raise EditorIOError(f"cannot open {path}: {e}", path=path) from e

    lines = content.split(EditorConstants.LINE_TERMINATOR)
    if lines[-1] == '':
        # Terminator of the last line, or an empty file
        lines.pop()
    lines = [line[:-1] if line.endswith('\r') else line for line in lines]
    logger.debug("Opened %s (%d lines)", path, len(lines))
    return lines


def save_lines(path: str, lines: Iterable[str]) -> None:
    """Write each line followed by a single newline, atomically.

    The content goes to a temporary file in the target directory which is
    then renamed over ``path``, so a failed save leaves the old file intact.

    Raises:
        EditorIOError: The file cannot be created or written.
    """
    content = ''.join(line + EditorConstants.LINE_TERMINATOR for line in lines)
    # Write through symlinks instead of replacing them
    target = os.path.realpath(path)
    dir_name = os.path.dirname(target) or '.'
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='w', encoding=EditorConstants.ENCODING,
                                         dir=dir_name, newline='',
                                         suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                         delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        if os.path.exists(target):
            os.chmod(temp_filename, stat.S_IMODE(os.stat(target).st_mode))
        os.replace(temp_filename, target)
    except OSError as e:
        logger.warning("Could not save %s: %s", path, e)
        if temp_filename is not None and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError:
                logger.debug("Could not remove temporary file %s", temp_filename)
        raise EditorIOError(f"cannot save {path}: {e}", path=path) from e

    logger.debug("Saved %s", path)
