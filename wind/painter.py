"""Paints editor snapshots onto the terminal."""

from typing import Callable

import grapheme

from .editor import Snapshot


def _clip(text: str, width: int, display_width: Callable[[str], int]) -> str:
    """Longest run of whole clusters from ``text`` at most ``width`` cells wide."""
    clipped = ""
    for cluster in grapheme.graphemes(text):
        if display_width(clipped + cluster) > width:
            break
        clipped += cluster
    return clipped


def compose_status(snapshot: Snapshot, width: int,
                   display_width: Callable[[str], int] = len) -> str:
    """Build the status bar: mode, file name (or message), position.

    The result is exactly ``width`` cells wide as measured by
    ``display_width``.
    """
    left = f" {snapshot.mode.value.upper()} "
    right = f" {snapshot.row + 1}:{snapshot.column + 1} "
    if snapshot.status_message:
        center = snapshot.status_message
    else:
        center = snapshot.display_name + (" [+]" if snapshot.modified else "")
    middle_width = max(0, width - display_width(left) - display_width(right))
    center = _clip(center, middle_width, display_width)
    padding = middle_width - display_width(center)
    status = left + " " * (padding // 2) + center + " " * (padding - padding // 2) + right
    status = _clip(status, width, display_width)
    return status + " " * (width - display_width(status))


class Painter:
    """Draws the visible rows, the status bar and the cursor."""

    def paint(self, terminal, snapshot: Snapshot, height: int):
        width = terminal.width
        # Wide clusters take two cells, so clip each row by cells
        lines = [terminal.truncate(row, width) for row in snapshot.rows]
        lines.extend([""] * (height - len(lines)))

        # Screen column of the cursor in cells, which differs from the
        # cluster column when the row holds wide characters
        cursor_x = 0
        if snapshot.cursor_y < len(snapshot.rows):
            prefix = grapheme.slice(snapshot.rows[snapshot.cursor_y], 0, snapshot.cursor_x)
            cursor_x = min(terminal.display_width(prefix), max(0, width - 1))

        terminal.update_frame(
            lines,
            compose_status(snapshot, width, terminal.display_width),
            snapshot.cursor_y,
            cursor_x,
        )
