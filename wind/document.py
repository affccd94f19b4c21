"""Text buffer: rows of grapheme clusters plus their backing file."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import grapheme

from .constants import EditorConstants
from .position import CursorPosition

logger = logging.getLogger(__name__)


class Row:
    """One line of text.

    All indices are grapheme-cluster indices. ``length`` is recomputed
    whenever ``content`` is assigned, so it never goes stale.
    """

    def __init__(self, content: str = ""):
        self.content = content

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, value: str):
        self._content = value
        self.length = grapheme.length(value)

    def __repr__(self):
        return f"Row({self._content!r})"

    def _clamp(self, index: int) -> int:
        return max(0, min(index, self.length))

    def render(self, start: int, end: int) -> str:
        """Return the clusters in ``[start, end)``, clamped to the row."""
        end = self._clamp(end)
        start = max(0, min(start, end))
        return grapheme.slice(self._content, start, end)

    def split(self, at: int) -> "Row":
        """Cut the row at ``at``; keep the head and return the tail."""
        at = self._clamp(at)
        tail = grapheme.slice(self._content, at)
        self.content = grapheme.slice(self._content, 0, at)
        return Row(tail)

    def insert(self, at: int, text: str):
        at = self._clamp(at)
        self.content = (
            grapheme.slice(self._content, 0, at)
            + text
            + grapheme.slice(self._content, at)
        )

    def delete(self, at: int):
        """Remove the cluster at ``at``; out-of-range indices are ignored."""
        if 0 <= at < self.length:
            self.content = (
                grapheme.slice(self._content, 0, at)
                + grapheme.slice(self._content, at + 1)
            )

    def append(self, text: str):
        self.content = self._content + text


class Document:
    """Ordered rows plus an optional file path and a modified flag.

    ``rows`` is never empty: an empty document holds a single empty row so
    the cursor always has somewhere to be.
    """

    def __init__(self, rows: Optional[list[Row]] = None,
                 path: Optional[Union[str, Path]] = None):
        self.path: Optional[Path] = Path(path) if path is not None else None
        self.rows: list[Row] = rows or [Row()]
        self.modified = False

    @classmethod
    def open(cls, path: Optional[Union[str, Path]] = None) -> "Document":
        """Load ``path`` one row per line.

        A missing or nonexistent path gives an empty document. Raises
        OSError when the file cannot be read and UnicodeDecodeError when
        it is not valid UTF-8.
        """
        if path is None:
            return cls()
        path = Path(path)
        if not path.exists():
            logger.info("%s does not exist, starting a new document", path)
            return cls(path=path)

        rows = []
        with open(path, 'rb') as f:
            for raw in f:
                line = raw.decode('utf-8')
                if line.endswith('\n'):
                    line = line[:-1]
                    if line.endswith('\r'):
                        line = line[:-1]
                rows.append(Row(line))
        logger.info("Loaded %s (%d lines)", path, len(rows))
        return cls(rows, path=path)

    @property
    def display_name(self) -> str:
        if self.path is None:
            return EditorConstants.NO_NAME
        return self.path.name or str(self.path)

    def _row(self, index: int) -> Row:
        if not 0 <= index < len(self.rows):
            raise IndexError(f"row {index} out of range (0..{len(self.rows) - 1})")
        return self.rows[index]

    def row_length(self, index: int) -> int:
        """Cluster count of row ``index``, or 0 when out of bounds."""
        if 0 <= index < len(self.rows):
            return self.rows[index].length
        return 0

    def insert(self, position: CursorPosition, char: str):
        """Insert ``char`` at ``position``; a newline splits the row."""
        row = self._row(position.row)
        if char == "\n":
            self.rows.insert(position.row + 1, row.split(position.column))
        else:
            row.insert(position.column, char)
        self.modified = True

    def insert_row(self, index: int, row: Optional[Row] = None):
        index = max(0, min(index, len(self.rows)))
        self.rows.insert(index, row if row is not None else Row())
        self.modified = True

    def delete(self, position: CursorPosition):
        """Delete the cluster at ``position``.

        At the end of a row that is not the last one, the line break is
        deleted instead: the next row is merged onto this one.
        """
        row = self._row(position.row)
        if position.column >= row.length:
            if position.row < len(self.rows) - 1:
                row.append(self.rows.pop(position.row + 1).content)
        else:
            row.delete(position.column)
        self.modified = True

    def save(self, placeholder: str = EditorConstants.PLACEHOLDER_PATH) -> int:
        """Write every row followed by the platform line terminator.

        The write goes to a temporary file in the target directory which
        then replaces the target. Returns the number of bytes written;
        raises OSError on failure.
        """
        if self.path is None:
            self.path = Path(placeholder)

        data = "".join(row.content + os.linesep for row in self.rows).encode('utf-8')
        dir_name = str(self.path.parent)
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name,
                                             prefix=f".{self.path.name}.",
                                             suffix=EditorConstants.ATOMIC_SAVE_SUFFIX,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(data)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_filename, self.path)
        except OSError:
            if temp_filename is not None and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_filename)
            raise

        self.modified = False
        logger.info("Saved %s (%d bytes)", self.path, len(data))
        return len(data)
