"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    ALT = "alt"
    SPECIAL = "special"


class KeyKind(Enum):
    """Phase of a key event. Only presses are acted on."""
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The token as reported by the input source
    kind: KeyKind = KeyKind.PRESS

    @property
    def is_press(self) -> bool:
        return self.kind == KeyKind.PRESS


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert',
}


class KeyboardHandler:
    """Turns tokens from the terminal into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Block for the next key and parse it. Returns None on timeout."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token (e.g. ``'<UP>'``, ``'<Ctrl-s>'``, ``'x'``) into a KeyEvent."""
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_named(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str == '\x1b':
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
            if key_str in ('\r', '\n'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            if key_str == '\t':
                return KeyEvent(KeyType.REGULAR, '\t', key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                return KeyEvent(KeyType.CTRL, chr(ord('a') + o - 1), key_str)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)

    def _parse_named(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1].lower().replace('+', '-')
        parts = name.split('-')
        base = parts[-1]
        mods = set(parts[:-1])

        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'

        if not mods:
            if base in ('space', 'spacebar', 'spc'):
                return KeyEvent(KeyType.REGULAR, ' ', ' ')
            if base == 'tab':
                return KeyEvent(KeyType.REGULAR, '\t', '\t')
            if base in ('esc', 'escape'):
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
            if base in SPECIAL_KEYS:
                return KeyEvent(KeyType.SPECIAL, base, key_str)
        if 'ctrl' in mods and len(base) == 1:
            # Ctrl-J / Ctrl-M are what terminals send for Enter
            if base in ('j', 'm'):
                return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
            if base == 'h':
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            return KeyEvent(KeyType.CTRL, base, key_str)
        if mods & {'alt', 'meta', 'esc'}:
            return KeyEvent(KeyType.ALT, base, key_str)
        # Unknown tokens fall through as specials nobody is bound to
        return KeyEvent(KeyType.SPECIAL, base, key_str)
