"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key string from curtsies
    is_alt: bool = False
    is_ctrl: bool = False


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter',
    'backspace', 'delete', 'page_up', 'page_down', 'insert',
}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None when nothing arrived in time."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key name ('<LEFT>', '<Ctrl-q>') or a character."""
        key_str = str(key)

        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1].lower().replace('+', '-')
            parts = name.split('-')
            base = parts[-1]
            mods = set(parts[:-1])
            if 'meta' in mods or 'esc' in mods:
                mods.add('alt')
            if base in ('pageup', 'page_up'):
                base = 'page_up'
            elif base in ('pagedown', 'page_down'):
                base = 'page_down'

            # Named whitespace tokens are regular characters
            if base in ('space', 'spacebar', 'spc') and not mods:
                return KeyEvent(KeyType.REGULAR, ' ', ' ')
            if base == 'tab' and not mods:
                return KeyEvent(KeyType.REGULAR, '\t', '\t')
            if 'ctrl' in mods and len(base) == 1:
                # Ctrl-J / Ctrl-M are what terminals send for Enter
                if base in ('j', 'm'):
                    return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
                return KeyEvent(KeyType.CTRL, base, key_str, is_ctrl=True)
            if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
                return KeyEvent(KeyType.ALT, base, key_str, is_alt=True)
            if base in ('esc', 'escape'):
                return KeyEvent(KeyType.SPECIAL, 'escape', '\x1b')
            return KeyEvent(KeyType.SPECIAL, base, key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                if ch in ('j', 'm'):
                    return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
                if ch == 'i':
                    return KeyEvent(KeyType.REGULAR, '\t', key_str)
                if ch == 'h':
                    return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
                return KeyEvent(KeyType.CTRL, ch, key_str, is_ctrl=True)
            if key_str == '\x1b':
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
            if key_str == '\x7f':
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)
