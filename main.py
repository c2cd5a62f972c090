#!/usr/bin/env python3
"""lined - a small terminal line editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Ctrl-P/N/B/F: Move the cursor
    PageUp/PageDown, Ctrl-U/D: Scroll a screenful
    Enter: Split the line at the cursor
    Backspace: Delete the character before the cursor
    Ctrl-S: Save and quit
    Ctrl-Q: Quit without saving
"""

from lined.__main__ import main


if __name__ == "__main__":
    main()
