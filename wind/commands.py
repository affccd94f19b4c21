"""Command pattern implementation for editor actions."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .modes import Mode, TRANSITIONS

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent

logger = logging.getLogger(__name__)


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the key was consumed
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._move(editor)
        return True

    @abstractmethod
    def _move(self, editor: 'Editor'):
        """Perform the movement."""


class LeftCharCommand(MovementCommand):
    def _move(self, editor):
        editor.move_left(editor.boundaries, 1)


class RightCharCommand(MovementCommand):
    def _move(self, editor):
        editor.move_right(editor.boundaries, 1)


class UpLineCommand(MovementCommand):
    def _move(self, editor):
        editor.move_up(editor.boundaries, 1)


class DownLineCommand(MovementCommand):
    def _move(self, editor):
        editor.move_down(editor.boundaries, 1)


class BeginningOfLineCommand(MovementCommand):
    def _move(self, editor):
        editor.move_home(editor.boundaries)


class EndOfLineCommand(MovementCommand):
    def _move(self, editor):
        editor.move_end(editor.boundaries)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._edit(editor, key_event)
        return True

    @abstractmethod
    def _edit(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the edit."""


class InsertTextCommand(EditCommand):
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        char = key_event.value
        # Filter out control characters
        if not char or (ord(char[0]) < 32 and char != '\t'):
            return False
        return super().execute(editor, key_event)

    def _edit(self, editor, key_event):
        editor.insert(key_event.value)


class InsertNewlineCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.insert('\n')


class DeleteCharCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.delete()


class BackspaceCommand(EditCommand):
    def _edit(self, editor, key_event):
        editor.backspace()


class ModeCommand(EditorCommand):
    """Fires the mode transition bound to ``trigger``."""

    def __init__(self, trigger: str):
        self.trigger = trigger

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        return editor.apply_mode_key(self.trigger)


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._execute_system(editor, key_event)
        return True

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.save()


CommandKey = Tuple[Optional[Mode], KeyType, str]


class CommandRegistry:
    """Registry mapping (mode, key) combinations to commands.

    A mode of None binds the key in every mode.
    """

    def __init__(self):
        self._commands: Dict[CommandKey, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands, available in every mode
        self.register(None, (KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register(None, (KeyType.SPECIAL, 'right'), RightCharCommand())
        self.register(None, (KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register(None, (KeyType.SPECIAL, 'down'), DownLineCommand())
        self.register(None, (KeyType.SPECIAL, 'home'), BeginningOfLineCommand())
        self.register(None, (KeyType.SPECIAL, 'end'), EndOfLineCommand())

        # Normal-mode motion letters
        self.register(Mode.NORMAL, (KeyType.REGULAR, 'h'), LeftCharCommand())
        self.register(Mode.NORMAL, (KeyType.REGULAR, 'j'), DownLineCommand())
        self.register(Mode.NORMAL, (KeyType.REGULAR, 'k'), UpLineCommand())
        self.register(Mode.NORMAL, (KeyType.REGULAR, 'l'), RightCharCommand())

        # Mode transitions
        for transition in TRANSITIONS:
            key_type = KeyType.SPECIAL if transition.trigger == 'escape' else KeyType.REGULAR
            self.register(transition.source, (key_type, transition.trigger),
                          ModeCommand(transition.trigger))

        # Editing commands
        self.register(Mode.INSERT, (KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register(Mode.INSERT, (KeyType.SPECIAL, 'delete'), DeleteCharCommand())
        self.register(Mode.INSERT, (KeyType.SPECIAL, 'backspace'), BackspaceCommand())

        # System commands
        self.register(None, (KeyType.CTRL, 'q'), QuitCommand())
        self.register(None, (KeyType.CTRL, 's'), SaveCommand())

    def register(self, mode: Optional[Mode], key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination in ``mode``."""
        self._commands[(mode, key[0], key[1])] = command

    def get_command(self, mode: Mode, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key, preferring a mode-specific binding."""
        command = self._commands.get((mode, key_type, value))
        if command is None:
            command = self._commands.get((None, key_type, value))
        return command

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command for the given key event.

        Returns:
            True if the key was consumed
        """
        command = self.get_command(editor.mode, key_event.key_type, key_event.value)
        if command:
            return command.execute(editor, key_event)

        # Handle regular text input
        if editor.mode == Mode.INSERT and key_event.key_type == KeyType.REGULAR:
            return InsertTextCommand().execute(editor, key_event)

        logger.debug("Unbound key %r in %s mode", key_event.raw, editor.mode.value)
        return False
