"""Edit modes and the transitions between them."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Mode(Enum):
    NORMAL = "normal"
    INSERT = "insert"


@dataclass(frozen=True)
class Transition:
    """A mode change fired by a key in a given mode.

    ``action`` names an Editor method run before the mode changes, or is
    None when the transition leaves the document alone.
    """
    source: Mode
    trigger: str
    target: Mode
    action: Optional[str] = None


TRANSITIONS = (
    Transition(Mode.NORMAL, 'i', Mode.INSERT),
    Transition(Mode.NORMAL, 'o', Mode.INSERT, 'open_row_below'),
    Transition(Mode.NORMAL, 'O', Mode.INSERT, 'open_row_above'),
    Transition(Mode.INSERT, 'escape', Mode.NORMAL),
)

_TABLE = {(t.source, t.trigger): t for t in TRANSITIONS}


def find_transition(mode: Mode, trigger: str) -> Optional[Transition]:
    return _TABLE.get((mode, trigger))
