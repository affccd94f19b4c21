"""Cursor, scroll offset and viewport geometry."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Boundaries:
    """Width and height of the visible text area."""
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Boundaries must be positive, got {self.width}x{self.height}"
            )


@dataclass
class CursorPosition:
    row: int = 0
    column: int = 0
    # Column the user last chose horizontally; vertical moves aim for it
    sticky_column: int = 0

    def __lt__(self, other):
        if self.row != other.row:
            return self.row < other.row
        return self.column < other.column

    def __ge__(self, other):
        return not self < other


@dataclass
class ScrollOffset:
    """Document cell shown at the top-left corner of the viewport."""
    row: int = 0
    column: int = 0
