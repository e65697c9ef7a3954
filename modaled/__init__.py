"""modaled - A small modal terminal text editor."""

import logging

from .buffer import LineBuffer, SaveError
from .model import TextModel, CursorPosition, Viewport
from .commands import Mode

# Nothing is logged unless the application configures a handler
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'LineBuffer',
    'SaveError',
    'TextModel',
    'CursorPosition',
    'Viewport',
    'Mode',
]
