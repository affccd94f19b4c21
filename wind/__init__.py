"""wind - a small modal text editor for the terminal."""

from .document import Document, Row
from .editor import Editor, Snapshot
from .modes import Mode
from .position import Boundaries, CursorPosition, ScrollOffset

__all__ = [
    'Boundaries',
    'CursorPosition',
    'Document',
    'Editor',
    'Mode',
    'Row',
    'ScrollOffset',
    'Snapshot',
]
