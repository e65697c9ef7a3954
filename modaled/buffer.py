"""Line buffer holding the document being edited.

The document is a list of lines, each line a list of single code point
cells. There is always at least one line; an empty document is one empty
line.
"""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Iterable, Optional

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class SaveError(OSError):
    """Raised when the buffer cannot be written to disk.

    ``path`` is the target path (``None`` when no file is bound) and
    ``__cause__`` carries the underlying OS error, if any.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class LineBuffer:
    """Ordered sequence of mutable lines."""

    def __init__(self):
        self._lines: list[list[str]] = [[]]
        self.newline = EditorConstants.DEFAULT_NEWLINE

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "LineBuffer":
        buf = cls()
        rows = [list(line) for line in lines]
        buf._lines = rows or [[]]
        return buf

    @property
    def lines(self) -> tuple[str, ...]:
        """Current contents as a tuple of strings."""
        return tuple(''.join(line) for line in self._lines)

    def height(self) -> int:
        return len(self._lines)

    def width(self, row: int) -> int:
        if 0 <= row < len(self._lines):
            return len(self._lines[row])
        return 0

    def get(self, row: int, col: int) -> str:
        """Return the cell at (row, col), or a blank for positions past the text."""
        if 0 <= row < len(self._lines):
            line = self._lines[row]
            if 0 <= col < len(line):
                return line[col]
        return EditorConstants.BLANK_CELL

    def line_text(self, row: int, start: int = 0, end: Optional[int] = None) -> str:
        """Return cells [start, end) of a line as a string; empty when out of range."""
        if 0 <= row < len(self._lines):
            return ''.join(self._lines[row][start:end])
        return ""

    def insert_char(self, c: str, row: int, col: int) -> None:
        assert len(c) == 1, f"expected a single cell, got {c!r}"
        assert 0 <= row < len(self._lines), f"row {row} out of range"
        assert 0 <= col <= len(self._lines[row]), f"col {col} out of range"
        self._lines[row].insert(col, c)

    def split_line(self, row: int, col: int) -> None:
        """Split line ``row`` at ``col``; the suffix becomes line ``row + 1``."""
        assert 0 <= row < len(self._lines), f"row {row} out of range"
        assert 0 <= col <= len(self._lines[row]), f"col {col} out of range"
        line = self._lines[row]
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])

    def delete_backward(self, row: int, col: int) -> None:
        """Backspace at (row, col).

        Removes the cell before ``col``, or at column 0 joins line ``row``
        onto the end of the previous line. At (0, 0) nothing happens.
        """
        assert 0 <= row < len(self._lines), f"row {row} out of range"
        if col > 0:
            assert col <= len(self._lines[row]), f"col {col} out of range"
            del self._lines[row][col - 1]
        elif row > 0:
            self._lines[row - 1].extend(self._lines.pop(row))

    def load(self, path: str) -> bool:
        """Replace the contents with the file at ``path``.

        A file that cannot be read leaves a single empty line. Returns
        True if the file was read.
        """
        self._lines = [[]]
        self.newline = EditorConstants.DEFAULT_NEWLINE
        try:
            with open(path, 'r', encoding=EditorConstants.FILE_ENCODING, newline='') as f:
                content = f.read()
        except FileNotFoundError:
            logger.info(f"{path} does not exist, starting with an empty document")
            return False
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not load {path}: {e}")
            return False

        pieces = content.split(EditorConstants.DEFAULT_NEWLINE)
        # CRLF only when every terminator is one; otherwise stray \r are cells
        if len(pieces) > 1 and all(piece.endswith('\r') for piece in pieces[:-1]):
            self.newline = EditorConstants.WINDOWS_NEWLINE
            pieces = [piece[:-1] for piece in pieces[:-1]] + [pieces[-1]]
        if content:
            self._lines = [list(line) for line in pieces]
        return True

    def save(self, path: Optional[str]) -> None:
        """Write the contents to ``path`` atomically.

        Raises:
            SaveError: if ``path`` is unset or the write fails.
        """
        if not path:
            raise SaveError("No file name", path)

        content = self.newline.join(self.lines)
        # Temp file in the same directory so the rename stays on one filesystem
        dir_name = os.path.dirname(path) or '.'
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='w', encoding=EditorConstants.FILE_ENCODING,
                                             dir=dir_name,
                                             prefix=EditorConstants.ATOMIC_SAVE_PREFIX,
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             newline='', delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, path)
        except OSError as e:
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.warning(f"Could not remove temporary file {temp_filename}")
            raise SaveError(f"Cannot save to {path}: {e}", path) from e
        logger.debug(f"Wrote {self.height()} lines to {path}")
