"""Main application loop for the editor."""

import logging
import os
import select
import signal
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import load_config
from .constants import EditorConstants
from .editor import Editor
from .keyboard import KeyboardHandler
from .logging_config import KEY_LOGGER
from .painter import Painter
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class App:
    """Wires the terminal, the keyboard and the painter to an Editor.

    Processing is strictly one event at a time: draw, wait for a key or a
    resize, apply it, draw again.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None,
                 config: Optional[Dict[str, Any]] = None,
                 terminal: Optional[TerminalInterface] = None):
        """Open ``path`` and prepare the terminal collaborators.

        Raises OSError or UnicodeDecodeError when the file cannot be loaded.
        """
        self.config = config if config is not None else load_config()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.painter = Painter()
        self.editor = Editor.open(
            path,
            boundaries=self.terminal.boundaries(),
            placeholder_path=self.config.get("placeholder_path", EditorConstants.PLACEHOLDER_PATH),
        )
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the main editor loop until the user quits."""
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        try:
            with self.terminal:
                self._event_loop()
        except KeyboardInterrupt:
            logger.info("Interrupted, leaving the editor")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)

    def _event_loop(self):
        need_draw = True
        while not self.editor.exit_requested:
            if need_draw:
                self._draw()
                need_draw = False

            # Wait for input on stdin or resize pipe
            ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

            if self._resize_pipe_r in ready:
                os.read(self._resize_pipe_r, 1024)
                self._apply_resize()
                need_draw = True
            elif 0 in ready:
                key_event = self.keyboard.get_key_event(timeout=0)
                if key_event:
                    KEY_LOGGER.debug("%s %r in %s mode", key_event.key_type.value,
                                     key_event.value, self.editor.mode.value)
                    self.editor.handle_key(key_event)
                    need_draw = True

    def _apply_resize(self):
        boundaries = self.terminal.boundaries()
        self.editor.resize(boundaries)
        self.terminal.invalidate_frame()

    def _draw(self):
        self.painter.paint(self.terminal, self.editor.snapshot(), self.editor.boundaries.height)
