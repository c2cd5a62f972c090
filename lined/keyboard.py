"""Keyboard input handling using curtsies-style key names."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    ALT = "alt"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The key string as delivered by the terminal


# curtsies names for keys that map to a SPECIAL event
_SPECIAL_NAMES = {
    'left': 'left',
    'right': 'right',
    'up': 'up',
    'down': 'down',
    'enter': 'enter',
    'return': 'enter',
    'backspace': 'backspace',
    'delete': 'delete',
    'home': 'home',
    'end': 'end',
    'pageup': 'page_up',
    'page_up': 'page_up',
    'pagedown': 'page_down',
    'page_down': 'page_down',
    'esc': 'escape',
    'escape': 'escape',
}


class KeyboardHandler:
    """Turns terminal key strings into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None if no key arrived."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key name (or a raw character) into a KeyEvent."""
        key_str = str(key)

        # curtsies-style names like '<LEFT>', '<Ctrl-x>', '<Esc+u>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            name = key_str[1:-1].lower().replace('+', '-')
            parts = name.split('-')
            base = parts[-1]
            mods = set(parts[:-1])

            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(KeyType.REGULAR, ' ', ' ')
            if base == 'tab' and not mods:
                return KeyEvent(KeyType.REGULAR, '\t', '\t')
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are what terminals send for Enter
                if base in ('j', 'm'):
                    return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
                return KeyEvent(KeyType.CTRL, base, key_str)
            if mods & {'alt', 'meta', 'esc'}:
                return KeyEvent(KeyType.ALT, _SPECIAL_NAMES.get(base, base), key_str)
            return KeyEvent(KeyType.SPECIAL, _SPECIAL_NAMES.get(base, base), key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if o in (8, 127):
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            if o in (10, 13):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return KeyEvent(KeyType.CTRL, chr(ord('a') + o - 1), key_str)
            if o == 27:
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)
