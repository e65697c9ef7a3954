"""Modal command dispatch: each mode owns its own key table."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class Mode(Enum):
    """Active input-interpretation state."""
    NORMAL = "normal"
    INSERT = "insert"


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._move(editor, key_event)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor', key_event: 'KeyEvent'):
        pass


class LeftCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_left()


class RightCharCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_right()


class UpLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_up()


class DownLineCommand(MovementCommand):
    def _move(self, editor, key_event):
        editor.model.move_down()


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        return self._edit(editor, key_event)

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Perform the edit and return True if the document changed."""
        pass


class InsertTextCommand(EditCommand):
    def _edit(self, editor, key_event):
        char = key_event.value
        # Only single printable cells; tab is kept as a cell
        if len(char) != 1 or (ord(char) < 32 and char != '\t') or char == '\x7f':
            return False
        editor.model.insert_char(char)
        return True


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.model.insert_newline()
        return True


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        return editor.model.backspace()


class SystemCommand(EditorCommand):
    """Base class for commands that act on the editor rather than the text."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._execute_system(editor, key_event)
        return False

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        pass


class EnterInsertModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.set_mode(Mode.INSERT)


class EnterNormalModeCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.set_mode(Mode.NORMAL)


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor._handle_save()


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        # Unsaved changes are dropped without asking
        editor.running = False


class CommandRegistry:
    """Registry mapping (mode, key) to commands."""

    def __init__(self):
        self._commands: Dict[Mode, Dict[Tuple[KeyType, str], EditorCommand]] = {
            mode: {} for mode in Mode
        }
        self._fallbacks: Dict[Mode, Optional[EditorCommand]] = {mode: None for mode in Mode}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Normal mode: navigation and file commands
        self.register(Mode.NORMAL, (KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register(Mode.NORMAL, (KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register(Mode.NORMAL, (KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register(Mode.NORMAL, (KeyType.SPECIAL, 'down'), DownLineCommand())
        self.register(Mode.NORMAL, (KeyType.REGULAR, 'i'), EnterInsertModeCommand())
        self.register(Mode.NORMAL, (KeyType.REGULAR, 's'), SaveCommand())
        self.register(Mode.NORMAL, (KeyType.REGULAR, 'q'), QuitCommand())

        # Insert mode: all mutation happens here
        self.register(Mode.INSERT, (KeyType.SPECIAL, 'escape'), EnterNormalModeCommand())
        self.register(Mode.INSERT, (KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register(Mode.INSERT, (KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        # Any other regular key in Insert mode is typed into the buffer
        self.set_fallback(Mode.INSERT, InsertTextCommand())

    def register(self, mode: Mode, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination in one mode."""
        self._commands[mode][key] = command

    def set_fallback(self, mode: Mode, command: Optional[EditorCommand]):
        """Command run for unbound regular keys in ``mode``."""
        self._fallbacks[mode] = command

    def get_command(self, mode: Mode, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands[mode].get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command bound to the key in the editor's current mode.

        Release and repeat events are ignored.

        Returns:
            True if the document was modified
        """
        if not key_event.is_press:
            return False

        mode = editor.mode
        command = self.get_command(mode, key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        fallback = self._fallbacks[mode]
        if fallback is not None and key_event.key_type == KeyType.REGULAR:
            return fallback.execute(editor, key_event)

        return False
