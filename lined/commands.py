"""Command pattern implementation for editor actions.

Key events are decoded into command objects by ``CommandRegistry``; the
``Controller`` executes one command at a time.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .controller import Controller
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, controller: 'Controller') -> bool:
        """Execute the command.

        Args:
            controller: Controller owning the buffer and viewport

        Returns:
            True if the command modified the buffer
        """
        pass


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, controller: 'Controller') -> bool:
        """Movement commands don't modify the buffer."""
        self._move(controller)
        return False

    @abstractmethod
    def _move(self, controller: 'Controller'):
        """Perform the movement."""
        pass


@dataclass(frozen=True)
class MoveUp(MovementCommand):
    def _move(self, controller):
        controller.viewport.move_vertical(-1)


@dataclass(frozen=True)
class MoveDown(MovementCommand):
    def _move(self, controller):
        controller.viewport.move_vertical(1)


@dataclass(frozen=True)
class MoveLeft(MovementCommand):
    def _move(self, controller):
        controller.viewport.move_horizontal(-1)


@dataclass(frozen=True)
class MoveRight(MovementCommand):
    def _move(self, controller):
        controller.viewport.move_horizontal(1)


@dataclass(frozen=True)
class HalfPageUp(MovementCommand):
    def _move(self, controller):
        controller.viewport.move_half_page(-1)


@dataclass(frozen=True)
class HalfPageDown(MovementCommand):
    def _move(self, controller):
        controller.viewport.move_half_page(1)


class EditCommand(EditorCommand):
    """Base class for editing commands."""

    def execute(self, controller: 'Controller') -> bool:
        return self._edit(controller)

    @abstractmethod
    def _edit(self, controller: 'Controller') -> bool:
        """Perform the edit; return True if the buffer changed."""
        pass


@dataclass(frozen=True)
class InsertChar(EditCommand):
    ch: str

    def _edit(self, controller):
        return controller.insert_char(self.ch)


@dataclass(frozen=True)
class DeleteBackward(EditCommand):
    def _edit(self, controller):
        return controller.delete_backward()


@dataclass(frozen=True)
class SplitLine(EditCommand):
    def _edit(self, controller):
        return controller.split_line()


class SystemCommand(EditorCommand):
    """Base class for session commands like save and quit."""

    def execute(self, controller: 'Controller') -> bool:
        """System commands don't modify buffer content directly."""
        self._execute_system(controller)
        return False

    @abstractmethod
    def _execute_system(self, controller: 'Controller'):
        """Perform the system action."""
        pass


@dataclass(frozen=True)
class Save(SystemCommand):
    def _execute_system(self, controller):
        controller.save()
        controller.running = False


@dataclass(frozen=True)
class Quit(SystemCommand):
    def _execute_system(self, controller):
        controller.running = False


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'up'), MoveUp())
        self.register((KeyType.SPECIAL, 'down'), MoveDown())
        self.register((KeyType.SPECIAL, 'left'), MoveLeft())
        self.register((KeyType.SPECIAL, 'right'), MoveRight())
        self.register((KeyType.CTRL, 'p'), MoveUp())
        self.register((KeyType.CTRL, 'n'), MoveDown())
        self.register((KeyType.CTRL, 'b'), MoveLeft())
        self.register((KeyType.CTRL, 'f'), MoveRight())

        # Paging
        self.register((KeyType.CTRL, 'u'), HalfPageUp())
        self.register((KeyType.CTRL, 'd'), HalfPageDown())
        self.register((KeyType.SPECIAL, 'page_up'), HalfPageUp())
        self.register((KeyType.SPECIAL, 'page_down'), HalfPageDown())

        # Editing commands
        self.register((KeyType.SPECIAL, 'backspace'), DeleteBackward())
        self.register((KeyType.SPECIAL, 'enter'), SplitLine())

        # System commands
        self.register((KeyType.CTRL, 's'), Save())
        self.register((KeyType.CTRL, 'q'), Quit())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        """Get the command for a key combination."""
        return self._commands.get((key_type, value))

    def decode(self, key_event: Optional['KeyEvent']) -> Optional[EditorCommand]:
        """Translate a key event into a command.

        Returns:
            The command, or None for keys without a binding
        """
        if key_event is None:
            return None
        command = self.get_command(key_event.key_type, key_event.value)
        if command:
            return command

        # Regular text input
        if key_event.key_type == KeyType.REGULAR and len(key_event.value) == 1:
            return InsertChar(key_event.value)

        return None
