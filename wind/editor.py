"""Editing core: cursor movement, scrolling, edits and mode switching."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .commands import CommandRegistry
from .constants import EditorConstants
from .document import Document
from .keyboard import KeyEvent
from .modes import Mode, find_transition
from .position import Boundaries, CursorPosition, ScrollOffset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the editor state handed to the painter.

    ``rows`` are the visible rows after both scroll offsets are applied;
    ``cursor_x``/``cursor_y`` are screen coordinates inside the text area.
    """
    rows: tuple[str, ...]
    cursor_x: int
    cursor_y: int
    mode: Mode
    display_name: str
    modified: bool
    status_message: Optional[str]
    row: int
    column: int


class Editor:
    """Owns the document, the cursor, the scroll offset and the mode.

    Movement operations take the current ``Boundaries`` and a non-negative
    ``offset``. They clamp instead of raising, and on return the cursor is
    inside ``[scroll_offset, scroll_offset + boundaries)`` on both axes.
    """

    def __init__(self, document: Optional[Document] = None,
                 boundaries: Optional[Boundaries] = None,
                 placeholder_path: str = EditorConstants.PLACEHOLDER_PATH):
        self.document = document or Document()
        self.position = CursorPosition()
        self.scroll_offset = ScrollOffset()
        self.boundaries = boundaries or Boundaries(80, 24)
        self.mode = Mode.NORMAL
        self.status_message: Optional[str] = None
        self.exit_requested = False
        self.placeholder_path = placeholder_path
        self.commands = CommandRegistry()

    @classmethod
    def open(cls, path: Optional[Union[str, Path]] = None, **kwargs) -> "Editor":
        """Create an editor on the file at ``path``.

        Raises OSError or UnicodeDecodeError if the file cannot be loaded.
        """
        return cls(Document.open(path), **kwargs)

    # --- Scrolling helpers ---

    def _follow_row(self, boundaries: Boundaries):
        if self.position.row < self.scroll_offset.row:
            self.scroll_offset.row = self.position.row
        elif self.position.row >= self.scroll_offset.row + boundaries.height:
            self.scroll_offset.row = self.position.row - boundaries.height + 1

    def _follow_column(self, boundaries: Boundaries):
        """Bring the column back into view after the cursor changed rows."""
        if self.position.column < self.scroll_offset.column:
            self.scroll_offset.column = 0
        if self.position.column >= self.scroll_offset.column + boundaries.width:
            self.scroll_offset.column = self.position.column - boundaries.width + 1

    def _clamp_to_sticky_column(self):
        self.position.column = min(
            self.position.sticky_column,
            self.document.row_length(self.position.row),
        )

    def scroll_into_view(self, boundaries: Boundaries):
        """Shift the scroll offset the minimum needed to show the cursor."""
        self._follow_row(boundaries)
        if self.position.column < self.scroll_offset.column:
            self.scroll_offset.column = self.position.column
        elif self.position.column >= self.scroll_offset.column + boundaries.width:
            self.scroll_offset.column = self.position.column - boundaries.width + 1

    def resize(self, boundaries: Boundaries):
        self.boundaries = boundaries
        self.scroll_into_view(boundaries)
        logger.debug("Viewport resized to %dx%d", boundaries.width, boundaries.height)

    # --- Movement ---

    def move_up(self, boundaries: Boundaries, offset: int = 1):
        if self.position.row > 0:
            self.position.row = max(0, self.position.row - offset)
            self._follow_row(boundaries)
            self._clamp_to_sticky_column()
            self._follow_column(boundaries)

    def move_down(self, boundaries: Boundaries, offset: int = 1):
        if self.position.row + offset < len(self.document.rows):
            self.position.row += offset
            self._follow_row(boundaries)
            self._clamp_to_sticky_column()
            self._follow_column(boundaries)

    def move_left(self, boundaries: Boundaries, offset: int = 1):
        if self.position.column > 0:
            self.position.column = max(0, self.position.column - offset)
            self.position.sticky_column = self.position.column
            if self.position.column < self.scroll_offset.column:
                self.scroll_offset.column = self.position.column
        elif offset and self.position.row > 0:
            # Wrap to the end of the previous row
            self.position.row -= 1
            self.position.column = self.document.row_length(self.position.row)
            self.position.sticky_column = self.position.column
            self._follow_row(boundaries)
            self._follow_column(boundaries)

    def move_right(self, boundaries: Boundaries, offset: int = 1):
        row_length = self.document.row_length(self.position.row)
        if self.position.column < row_length:
            self.position.column = min(self.position.column + offset, row_length)
            self.position.sticky_column = self.position.column
            if self.position.column >= self.scroll_offset.column + boundaries.width:
                self.scroll_offset.column = self.position.column - boundaries.width + 1
        elif offset and self.position.row < len(self.document.rows) - 1:
            # Wrap to the start of the next row
            self.position.row += 1
            self.position.column = 0
            self.position.sticky_column = 0
            self.scroll_offset.column = 0
            self._follow_row(boundaries)

    def move_home(self, boundaries: Boundaries):
        self.move_left(boundaries, self.position.column)

    def move_end(self, boundaries: Boundaries):
        row_length = self.document.row_length(self.position.row)
        self.move_right(boundaries, max(0, row_length - self.position.column))

    # --- Editing ---

    def insert(self, text: str):
        """Insert at the cursor and advance past what was inserted."""
        before = self.document.row_length(self.position.row)
        self.document.insert(self.position, text)
        if text == "\n":
            self.move_right(self.boundaries, 1)
        else:
            # Combining marks join the previous cluster and add nothing
            added = self.document.row_length(self.position.row) - before
            self.move_right(self.boundaries, added)

    def delete(self):
        self.document.delete(self.position)

    def backspace(self):
        if self.position.row == 0 and self.position.column == 0:
            return
        self.move_left(self.boundaries, 1)
        self.delete()

    def open_row_below(self):
        self.document.insert_row(self.position.row + 1)
        self.position.sticky_column = 0
        self.move_down(self.boundaries, 1)

    def open_row_above(self):
        self.document.insert_row(self.position.row)
        self.position.column = 0
        self.position.sticky_column = 0
        self._follow_column(self.boundaries)

    # --- Modes and session ---

    def apply_mode_key(self, trigger: str) -> bool:
        """Fire the transition for ``trigger`` in the current mode.

        Returns False when the current mode has no such transition.
        """
        transition = find_transition(self.mode, trigger)
        if transition is None:
            return False
        if transition.action is not None:
            getattr(self, transition.action)()
        logger.debug("Mode %s -> %s on %r", self.mode.value, transition.target.value, trigger)
        self.mode = transition.target
        return True

    def save(self) -> bool:
        """Save the document, reporting the outcome in the status message."""
        try:
            written = self.document.save(self.placeholder_path)
        except OSError as e:
            logger.error("Could not save %s: %s", self.document.path, e)
            self.status_message = EditorConstants.SAVE_FAILED_MESSAGE.format(e)
            return False
        self.status_message = EditorConstants.SAVED_MESSAGE.format(
            self.document.path, len(self.document.rows), written
        )
        return True

    def quit(self):
        self.exit_requested = True

    def handle_key(self, key_event: KeyEvent) -> bool:
        """Process one key event; returns True if it was bound to anything."""
        # A status message lasts until the next key press
        self.status_message = None
        return self.commands.execute(self, key_event)

    def snapshot(self) -> Snapshot:
        width = self.boundaries.width
        height = self.boundaries.height
        start = self.scroll_offset.column
        visible = self.document.rows[self.scroll_offset.row:self.scroll_offset.row + height]
        return Snapshot(
            rows=tuple(row.render(start, start + width) for row in visible),
            cursor_x=self.position.column - self.scroll_offset.column,
            cursor_y=self.position.row - self.scroll_offset.row,
            mode=self.mode,
            display_name=self.document.display_name,
            modified=self.document.modified,
            status_message=self.status_message,
            row=self.position.row,
            column=self.position.column,
        )
