from dataclasses import dataclass
from typing import Optional

from .buffer import LineBuffer


@dataclass
class CursorPosition:
    row: int = 0
    col: int = 0


@dataclass
class Viewport:
    """The rectangle of the document currently on screen."""
    row_offset: int = 0
    col_offset: int = 0
    visible_rows: int = 1
    visible_cols: int = 1


class TextModel:
    """Cursor and viewport state over a line buffer.

    Movement and editing keep ``cursor.row < buffer.height()`` and
    ``cursor.col <= buffer.width(cursor.row)`` at all times.
    """

    buffer: LineBuffer
    cursor: CursorPosition
    viewport: Viewport

    def __init__(self, buffer: Optional[LineBuffer] = None, lines: Optional[list[str]] = None):
        if buffer is None:
            buffer = LineBuffer.from_lines(lines if lines is not None else [""])
        self.buffer = buffer
        self.cursor = CursorPosition()
        self.viewport = Viewport()

    @property
    def lines(self) -> tuple[str, ...]:
        return self.buffer.lines

    # --- Movement ---

    def move_up(self):
        if self.cursor.row > 0:
            self.cursor.row -= 1
            self._clamp_col()

    def move_down(self):
        if self.cursor.row < self.buffer.height() - 1:
            self.cursor.row += 1
            self._clamp_col()

    def move_left(self):
        if self.cursor.col > 0:
            self.cursor.col -= 1
        elif self.cursor.row > 0:
            self.cursor.row -= 1
            self.cursor.col = self.buffer.width(self.cursor.row)

    def move_right(self):
        if self.cursor.col < self.buffer.width(self.cursor.row):
            self.cursor.col += 1
        elif self.cursor.row < self.buffer.height() - 1:
            self.cursor.row += 1
            self.cursor.col = 0

    def _clamp_col(self):
        # No desired column is remembered; the clamped column sticks.
        width = self.buffer.width(self.cursor.row)
        if self.cursor.col > width:
            self.cursor.col = width

    # --- Editing at the cursor ---

    def insert_char(self, c: str):
        self.buffer.insert_char(c, self.cursor.row, self.cursor.col)
        self.cursor.col += 1

    def insert_newline(self):
        self.buffer.split_line(self.cursor.row, self.cursor.col)
        self.cursor.row += 1
        self.cursor.col = 0

    def backspace(self) -> bool:
        """Delete backward from the cursor.

        Returns True if the document changed.
        """
        row, col = self.cursor.row, self.cursor.col
        if row == 0 and col == 0:
            return False
        # Width of the previous line is the join point if lines merge
        prev_width = self.buffer.width(row - 1)
        self.buffer.delete_backward(row, col)
        if col > 0:
            self.cursor.col -= 1
        else:
            self.cursor.row -= 1
            self.cursor.col = prev_width
        return True

    def replace_buffer(self, buffer: LineBuffer):
        """Swap in a new buffer and reset cursor and scroll state."""
        self.buffer = buffer
        self.cursor = CursorPosition()
        self.viewport = Viewport(visible_rows=self.viewport.visible_rows,
                                 visible_cols=self.viewport.visible_cols)

    # --- Viewport ---

    def recompute_offsets(self, visible_rows: int, visible_cols: int) -> Viewport:
        """Scroll just far enough that the cursor is inside the viewport.

        A cursor above or left of the window becomes the first visible
        row/column; one below or right of it becomes the last.
        """
        vp = self.viewport
        vp.visible_rows = max(1, visible_rows)
        vp.visible_cols = max(1, visible_cols)

        if self.cursor.row < vp.row_offset:
            vp.row_offset = self.cursor.row
        elif self.cursor.row >= vp.row_offset + vp.visible_rows:
            vp.row_offset = self.cursor.row - vp.visible_rows + 1

        if self.cursor.col < vp.col_offset:
            vp.col_offset = self.cursor.col
        elif self.cursor.col >= vp.col_offset + vp.visible_cols:
            vp.col_offset = self.cursor.col - vp.visible_cols + 1
        return vp

    def screen_position(self) -> tuple[int, int]:
        """Cursor position relative to the viewport as (screen_row, screen_col)."""
        return (self.cursor.row - self.viewport.row_offset,
                self.cursor.col - self.viewport.col_offset)

    def visible_lines(self) -> list[Optional[str]]:
        """Slices of the lines inside the viewport.

        Rows past the end of the document are ``None``.
        """
        vp = self.viewport
        rows: list[Optional[str]] = []
        for row in range(vp.row_offset, vp.row_offset + vp.visible_rows):
            if row < self.buffer.height():
                rows.append(self.buffer.line_text(row, vp.col_offset, vp.col_offset + vp.visible_cols))
            else:
                rows.append(None)
        return rows
