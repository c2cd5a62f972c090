"""lined CLI entry point.

Allows running via `python -m lined` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys

from .errors import EditorIOError


def main() -> None:
    """Open the optional file named on the command line and edit it."""
    args = sys.argv[1:]
    if len(args) > 1:
        print("usage: lined [FILE]", file=sys.stderr)
        sys.exit(2)

    # Lazy import keeps the usage error free of terminal setup
    from .editor import Editor
    editor = Editor()
    try:
        if args:
            editor.load_file(args[0])
        editor.run()
    except EditorIOError as e:
        print(f"lined: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
