"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
import termios
from typing import Optional

import blessed

from .constants import EditorConstants
from .position import Boundaries

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    Use it as a context manager around the main loop: entering switches to
    the alternate screen and raw input, leaving always restores both.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._saved_tty: Optional[list] = None
        # Virtual screen state for minimal updates
        self._last_lines: Optional[list[str]] = None
        self._last_status: Optional[str] = None

    def __enter__(self) -> "TerminalInterface":
        try:
            self.setup()
        except BaseException:
            self.cleanup()
            raise
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()
        return False

    def setup(self):
        """Enter fullscreen mode and raw input."""
        from curtsies import Input  # type: ignore

        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        self._curtsies_input = Input(keynames='curtsies')
        self._curtsies_input.__enter__()
        self._disable_flow_control()
        logger.debug("Terminal set up (%dx%d)", self.term.width, self.term.height)

    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q reach the editor instead of the tty."""
        try:
            self._saved_tty = termios.tcgetattr(sys.stdin)
            new_settings = list(self._saved_tty)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
        except (termios.error, AttributeError, OSError) as e:
            # stdin is not a tty (pipes, test runners); nothing to adjust
            logger.debug("Could not disable flow control: %s", e)
            self._saved_tty = None

    def cleanup(self):
        """Restore tty settings and leave fullscreen mode."""
        try:
            if self._saved_tty is not None:
                try:
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, self._saved_tty)
                except (termios.error, OSError) as e:
                    logger.warning("Could not restore tty settings: %s", e)
                self._saved_tty = None
            if self._curtsies_input is not None:
                input_, self._curtsies_input = self._curtsies_input, None
                input_.__exit__(None, None, None)
        finally:
            if self.is_fullscreen:
                print(self.term.exit_fullscreen, end='')
                print(self.term.normal_cursor, end='', flush=True)
                self.is_fullscreen = False
                logger.debug("Terminal restored")

    def invalidate_frame(self) -> None:
        """Invalidate cached frame so next update does a full clear."""
        self._last_lines = None
        self._last_status = None

    def display_width(self, text: str) -> int:
        """Number of terminal cells ``text`` occupies."""
        return self.term.length(text)

    def truncate(self, text: str, width: int) -> str:
        """Cut ``text`` to at most ``width`` terminal cells."""
        return self.term.truncate(text, width)

    def update_frame(self, lines: list[str], status: str,
                     cursor_y: int, cursor_x: int) -> None:
        """Diff against last frame and write only changed lines.

        Falls back to a full clear on first paint or when the number of
        lines changes.
        """
        if self._last_lines is None or len(self._last_lines) != len(lines):
            print(self.term.home + self.term.clear, end='')
            self._last_lines = [None] * len(lines)
            self._last_status = None

        for y, line in enumerate(lines):
            if line != self._last_lines[y]:
                print(self.term.move(y, 0) + line + self.term.clear_eol, end='')
                self._last_lines[y] = line

        if status != self._last_status:
            print(self.term.move(self.term.height - 1, 0)
                  + self.term.reverse + status + self.term.normal, end='')
            self._last_status = status

        print(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key token as a string, or None on timeout.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return str(next(self._curtsies_input))

    def boundaries(self) -> Boundaries:
        """Current size of the text area."""
        return Boundaries(max(1, self.width), max(1, self.height))

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - EditorConstants.STATUS_BAR_HEIGHT
