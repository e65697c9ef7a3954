"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
from typing import Optional

import blessed

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class TerminalError(RuntimeError):
    """The terminal could not be put into (or taken out of) editing mode."""


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    Use as a context manager so the terminal is restored on every exit
    path::

        with TerminalInterface() as terminal:
            ...
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._input: Optional[object] = None
        # Virtual screen state for minimal updates
        self._last_lines: list[str] | None = None
        self._last_status: str | None = None

    def __enter__(self) -> "TerminalInterface":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def setup(self):
        """Claim raw keyboard input and switch to the alternate screen.

        Raises:
            TerminalError: if raw input cannot be acquired. Nothing is
            left changed in that case.
        """
        try:
            from curtsies import Input  # type: ignore
            # Ctrl-C arrives as an event instead of KeyboardInterrupt
            raw_input = Input(keynames='curtsies', sigint_event=True)
            raw_input.__enter__()
        except Exception as e:
            # curtsies raises plain termios/OS errors when stdin is not a tty
            raise TerminalError(f"Cannot enter raw mode: {e}") from e
        self._input = raw_input

        # From here on cleanup() owns the raw input, so release it on failure
        self.is_fullscreen = True
        try:
            print(self.term.enter_fullscreen, end='')
            print(self.term.clear, end='', flush=True)
        except Exception:
            self.cleanup()
            raise
        self.invalidate_frame()
        logger.debug("Terminal claimed")

    def cleanup(self):
        """Leave the alternate screen and restore cooked input.

        Every restoration step is attempted; the first failure is raised
        afterwards.
        """
        failure: Optional[BaseException] = None
        if self.is_fullscreen:
            try:
                print(self.term.normal + self.term.exit_fullscreen + self.term.normal_cursor,
                      end='', flush=True)
            except OSError as e:
                logger.error(f"Could not leave fullscreen: {e}")
                failure = e
            finally:
                self.is_fullscreen = False
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                logger.error(f"Could not restore terminal input mode: {e}")
                failure = failure or e
            finally:
                self._input = None
        logger.debug("Terminal released")
        if failure is not None:
            raise TerminalError(f"Terminal cleanup failed: {failure}") from failure

    def invalidate_frame(self) -> None:
        """Forget the cached frame so the next update repaints everything."""
        self._last_lines = None
        self._last_status = None

    def update_frame(self, lines: list[str], status: str, cursor_y: int, cursor_x: int) -> None:
        """Diff against the last frame and write only changed rows.

        Args:
            lines: Text rows, already clipped to the view width
            status: Fully styled status bar string
            cursor_y: Cursor row on screen (0-based)
            cursor_x: Cursor column on screen (0-based)
        """
        width = self.term.width
        need_full_clear = self._last_lines is None or len(self._last_lines) != len(lines)
        if need_full_clear:
            print(self.term.home + self.term.clear, end='')
            self._last_lines = ["" for _ in range(len(lines))]
            self._last_status = None

        for y, line in enumerate(lines):
            display_line = line[:width].ljust(width)
            if display_line != self._last_lines[y]:
                print(self.term.move(y, 0) + display_line, end='')
                self._last_lines[y] = display_line

        if status != self._last_status:
            print(self.term.move(len(lines), 0) + status + self.term.normal, end='')
            self._last_status = status

        print(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor, end='', flush=True)

    def styled(self, text: str, fg: tuple[int, int, int], bg: tuple[int, int, int],
               bold: bool = False) -> str:
        """Return ``text`` wrapped in 24-bit colour (downgraded by blessed if needed)."""
        prefix = self.term.color_rgb(*fg) + self.term.on_color_rgb(*bg)
        if bold:
            prefix += self.term.bold
        return prefix + text + self.term.normal

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: None to block, otherwise seconds to wait

        Returns:
            The curtsies token as a string, or None if nothing arrived.
        """
        if self._input is None:
            return None
        evt = self._input.send(timeout)  # type: ignore
        if evt is None:
            return None
        return str(evt)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Text rows available (excluding the status line)."""
        return self.term.height - EditorConstants.STATUS_BAR_ROWS
