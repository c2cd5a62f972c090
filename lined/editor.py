"""Editor session: terminal, keyboard and controller wired into one loop."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .controller import Controller
from .errors import NoFilenameError
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class Editor:
    """Main line editor application."""

    def __init__(self):
        """Initialize the editor components."""
        self.terminal = TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.command_registry = CommandRegistry()
        self.controller = Controller()
        self.prompt_input: Optional[str] = None  # Set while asking for a file name
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    @property
    def running(self) -> bool:
        return self.controller.running

    def load_file(self, filename: str):
        """Load a file into the editor.

        Raises:
            EditorIOError: The file cannot be read.
        """
        self.controller.load(filename)

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _sync_size(self):
        """Fit the viewport to the current terminal size."""
        columns, rows = self.terminal.width, self.terminal.height
        logger.debug("Viewport size %dx%d", columns, rows)
        self.controller.resize(columns, rows)

    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q reach the editor instead of the tty.

        Returns:
            The previous termios settings, or None if they could not be read.
        """
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, AttributeError, OSError, ValueError):
            logger.debug("stdin is not a tty; flow control left alone")
            return None

    def run(self):
        """Run the main editor loop.

        The terminal is restored on every way out, including when saving
        fails; the error then propagates to the caller.
        """
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        old_settings = None
        logger.debug("Session started for %s", self.controller.filename)
        try:
            self.terminal.setup()
            old_settings = self._disable_flow_control()
            self._sync_size()
            self._draw()

            while self.running:
                # Wait for input on stdin or resize pipe
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    self.terminal.invalidate_frame()
                    self._sync_size()
                if 0 in ready:
                    # Handle every key already read, then draw once
                    while self.running:
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event is None:
                            break
                        self._handle_key_event(key_event)

                if self.running:
                    self._draw()

        except KeyboardInterrupt:
            logger.debug("Interrupted")
        finally:
            if old_settings is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                except (termios.error, OSError):
                    logger.debug("Could not restore terminal settings")
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
            logger.debug("Session ended")

    def _draw(self):
        """Draw the current editor state to terminal."""
        prompt = None
        if self.prompt_input is not None:
            prompt = EditorConstants.SAVE_PROMPT + self.prompt_input
        self.terminal.draw_frame(self.controller.render_descriptor(), prompt=prompt)

    def _handle_key_event(self, key_event: KeyEvent):
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        if self.prompt_input is not None:
            self._handle_filename_prompt(key_event)
            return

        # Status messages last until the next key
        self.controller.status_message = None
        command = self.command_registry.decode(key_event)
        try:
            self.controller.dispatch(command)
        except NoFilenameError:
            self.prompt_input = ""

    def _handle_filename_prompt(self, key_event: KeyEvent):
        """Handle keypress while asking where to save."""
        if (key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape') or \
           (key_event.key_type == KeyType.CTRL and key_event.value == 'g'):  # ESC or Ctrl-G
            self.prompt_input = None
            self.controller.status_message = "Save cancelled"
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if self.prompt_input:
                filename = self.prompt_input
                self.prompt_input = None
                self.controller.save(filename)
                self.controller.running = False
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'backspace':
            self.prompt_input = self.prompt_input[:-1]
        elif key_event.key_type == KeyType.REGULAR and key_event.value.isprintable():
            self.prompt_input += key_event.value
