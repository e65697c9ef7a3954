"""Test keyboard input handling."""

import pytest
from modaled.keyboard import SPECIAL_KEYS, KeyboardHandler, KeyEvent, KeyType, KeyKind


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []
        self.timeouts = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        self.timeouts.append(timeout)
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


@pytest.mark.parametrize("token,value", [
    ('<UP>', 'up'),
    ('<DOWN>', 'down'),
    ('<LEFT>', 'left'),
    ('<RIGHT>', 'right'),
    ('<BACKSPACE>', 'backspace'),
    ('<DELETE>', 'delete'),
    ('<PAGEUP>', 'page_up'),
    ('<PAGEDOWN>', 'page_down'),
])
def test_named_specials(handler, token, value):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value
    assert event.raw == token
    assert event.is_press


@pytest.mark.parametrize("token", ['<ESC>', '\x1b'])
def test_escape(handler, token):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'escape'


@pytest.mark.parametrize("token", ['<Ctrl-j>', '<Ctrl-m>', '\r', '\n'])
def test_enter_variants(handler, token):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'enter'


@pytest.mark.parametrize("token", ['\x7f', '\x08', '<Ctrl-h>'])
def test_backspace_variants(handler, token):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'backspace'


def test_space_and_tab_are_regular(handler):
    assert handler.parse_key('<SPACE>') == KeyEvent(KeyType.REGULAR, ' ', ' ')
    assert handler.parse_key('<TAB>') == KeyEvent(KeyType.REGULAR, '\t', '\t')
    assert handler.parse_key('\t').key_type == KeyType.REGULAR


def test_ctrl_letters(handler):
    event = handler.parse_key('<Ctrl-s>')
    assert event.key_type == KeyType.CTRL
    assert event.value == 's'
    event = handler.parse_key('\x11')  # Ctrl-Q
    assert event.key_type == KeyType.CTRL
    assert event.value == 'q'


def test_alt_keys(handler):
    for token in ('<Esc+x>', '<Meta-x>', '<Alt-x>'):
        event = handler.parse_key(token)
        assert event.key_type == KeyType.ALT
        assert event.value == 'x'


def test_regular_characters(handler):
    for ch in ('a', 'Q', '<', '>', 'é', '世'):
        event = handler.parse_key(ch)
        assert event.key_type == KeyType.REGULAR
        assert event.value == ch


@pytest.mark.parametrize("name", sorted(SPECIAL_KEYS))
def test_every_known_special_keeps_its_name(handler, name):
    event = handler.parse_key(f"<{name.upper()}>")
    assert event.key_type == KeyType.SPECIAL
    assert event.value == name


def test_unknown_token_becomes_unbound_special(handler):
    event = handler.parse_key('<F12>')
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'f12'


def test_get_key_event_blocks_and_parses():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    terminal.add_key('<UP>')
    event = handler.get_key_event()
    assert event.value == 'up'
    assert terminal.timeouts == [None]


def test_get_key_event_returns_none_without_input():
    handler = KeyboardHandler(MockTerminal())
    assert handler.get_key_event(timeout=0) is None


def test_event_kind_defaults_to_press():
    event = KeyEvent(KeyType.REGULAR, 'a', 'a')
    assert event.kind == KeyKind.PRESS
    assert event.is_press
    assert not KeyEvent(KeyType.REGULAR, 'a', 'a', kind=KeyKind.RELEASE).is_press
