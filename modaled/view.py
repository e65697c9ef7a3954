"""Render pass: turns editor state into screen rows and a status bar.

Nothing here mutates the model.
"""

from dataclasses import dataclass
from typing import Optional

from .commands import Mode
from .constants import EditorConstants
from .model import TextModel


def display_text(text: str) -> str:
    """Map each cell to one printable column.

    Tabs show as a space and other control characters as a placeholder,
    so screen columns stay aligned with buffer columns.
    """
    out = []
    for ch in text:
        if ch == '\t':
            out.append(' ')
        elif ord(ch) < 32 or ord(ch) == 127:
            out.append(EditorConstants.CONTROL_PLACEHOLDER)
        else:
            out.append(ch)
    return ''.join(out)


@dataclass
class Frame:
    """One painted screen's worth of state."""
    lines: list[str]
    cursor_y: int
    cursor_x: int
    mode: Mode


@dataclass
class StatusSegments:
    mode: str
    middle: str
    position: str


class TerminalTextView:
    """Reads a TextModel and produces what the terminal should show."""

    def __init__(self, filler_marker: str = EditorConstants.FILLER_MARKER):
        self.filler_marker = filler_marker

    def render(self, model: TextModel, mode: Mode, num_rows: int, num_columns: int) -> Frame:
        """Scroll the model's viewport to the cursor and build the frame."""
        model.recompute_offsets(num_rows, num_columns)
        lines = []
        for text in model.visible_lines():
            if text is None:
                lines.append(self.filler_marker)
            else:
                lines.append(display_text(text))
        screen_row, screen_col = model.screen_position()
        return Frame(lines=lines, cursor_y=screen_row, cursor_x=screen_col, mode=mode)

    def status_segments(self, mode: Mode, filename: Optional[str], modified: bool,
                        model: TextModel, width: int,
                        message: Optional[str] = None) -> StatusSegments:
        """Lay out the status bar as three plain-text segments filling ``width``.

        The middle shows ``message`` when set, otherwise the file name
        (with a modified marker).
        """
        mode_text = f" {mode.name} "
        position = f" {model.cursor.col}:{model.cursor.row} "
        if message:
            middle = message
        else:
            middle = filename or EditorConstants.NO_FILE_PLACEHOLDER
            if modified:
                middle += f" {EditorConstants.MODIFIED_MARKER}"
        middle_width = max(0, width - len(mode_text) - len(position))
        middle = f" {middle}"[:middle_width].ljust(middle_width)
        return StatusSegments(mode=mode_text, middle=middle, position=position)

    def status_bar(self, terminal, segments: StatusSegments, mode: Mode) -> str:
        """Style the status segments with the mode colours."""
        mode_rgb = (EditorConstants.INSERT_MODE_RGB if mode == Mode.INSERT
                    else EditorConstants.NORMAL_MODE_RGB)
        return (
            terminal.styled(segments.mode, EditorConstants.STATUS_TEXT_RGB, mode_rgb, bold=True)
            + terminal.styled(segments.middle, EditorConstants.STATUS_FILE_TEXT_RGB,
                              EditorConstants.STATUS_FILE_BG_RGB, bold=True)
            + terminal.styled(segments.position, EditorConstants.STATUS_TEXT_RGB, mode_rgb, bold=True)
        )
