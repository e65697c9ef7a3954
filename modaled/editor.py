"""Main editor controller."""

import errno
import logging
import os
from typing import Optional

from .buffer import LineBuffer, SaveError
from .commands import CommandRegistry, Mode
from .config import EditorConfig
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent
from .model import TextModel
from .terminal import TerminalInterface
from .view import TerminalTextView

logger = logging.getLogger(__name__)


class Editor:
    """Modal editor application controller."""

    def __init__(self, config: Optional[EditorConfig] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Initialize the editor components."""
        self.config = config or EditorConfig()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.view = TerminalTextView(filler_marker=self.config.filler_marker)
        self.model = TextModel()
        self.command_registry = CommandRegistry()
        self.mode = Mode.NORMAL
        self.running = False
        # File handling
        self.filename: Optional[str] = None
        self.modified = False
        self.status_message: Optional[str] = None

    def run(self):
        """Run the main editor loop until the quit command.

        The terminal is restored however the loop ends.
        """
        with self.terminal:
            self.running = True
            while self.running:
                self._draw()
                # Blocking read; the only place the loop waits
                key_event = self.keyboard.get_key_event(timeout=None)
                if key_event:
                    self._handle_key_event(key_event)

    def _draw(self):
        """Draw the current editor state to the terminal."""
        frame = self.view.render(self.model, self.mode,
                                 self.terminal.height, self.terminal.width)
        segments = self.view.status_segments(frame.mode, self.filename, self.modified,
                                             self.model, self.terminal.width,
                                             message=self.status_message)
        status = self.view.status_bar(self.terminal, segments, frame.mode)
        self.terminal.update_frame(frame.lines, status, frame.cursor_y, frame.cursor_x)

    def set_mode(self, mode: Mode):
        if mode != self.mode:
            logger.debug(f"Mode {self.mode.name} -> {mode.name}")
        self.mode = mode

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        if not key_event.is_press:
            return

        # A status message lasts until the next keypress
        self.status_message = None

        if self.command_registry.execute(self, key_event):
            self.modified = True

    def load_file(self, filename: str):
        """Load a file into the editor.

        A file that does not exist yet stays bound so it can be created
        by saving. A file that exists but cannot be read is not bound.

        Args:
            filename: Path to file to load
        """
        buffer = LineBuffer()
        loaded = buffer.load(filename)
        self.model.replace_buffer(buffer)
        self.modified = False
        if loaded or not os.path.lexists(filename):
            self.filename = filename
        else:
            self.filename = None
            self.status_message = f"Error: Cannot read {filename}"

    def save_file(self, filename: Optional[str]) -> bool:
        """Save the current document.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise. On failure the reason
            is left in ``status_message``.
        """
        try:
            self.model.buffer.save(filename)
        except SaveError as e:
            logger.warning(f"Save failed: {e}")
            self.status_message = self._save_error_message(e)
            return False
        self.filename = filename
        self.modified = False
        return True

    @staticmethod
    def _save_error_message(error: SaveError) -> str:
        cause = error.__cause__
        if not error.path:
            return EditorConstants.NO_FILENAME_MESSAGE
        if isinstance(cause, PermissionError):
            return EditorConstants.PERMISSION_DENIED_MESSAGE.format(error.path)
        if isinstance(cause, OSError) and cause.errno == errno.ENOSPC:
            return EditorConstants.NO_SPACE_MESSAGE
        return EditorConstants.CANNOT_SAVE_MESSAGE.format(error.path)

    def _handle_save(self):
        """Handle the save command for the bound file."""
        if self.save_file(self.filename):
            self.status_message = EditorConstants.SAVED_MESSAGE.format(self.filename)
