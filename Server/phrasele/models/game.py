"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Verdict(Enum):
    """Per-position evaluation of a submitted row."""
    SPACE = "space"
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"

    @property
    def rank(self) -> int:
        """Keyboard colour priority: correct > present > absent > unset."""
        return _VERDICT_RANKS[self]


_VERDICT_RANKS = {
    Verdict.SPACE: 0,
    Verdict.ABSENT: 1,
    Verdict.PRESENT: 2,
    Verdict.CORRECT: 3,
}


@dataclass(frozen=True)
class Phrase:
    """A puzzle phrase in canonical uppercase form."""
    text: str
    hint: str = ""


@dataclass
class CellUpdate:
    """One tile whose content or colour changed."""
    row: int
    col: int
    letter: str
    verdict: Optional[str] = None
    locked: bool = False


@dataclass
class SessionUpdate:
    """Description of what a single session operation changed."""
    accepted: bool
    message: str
    cells: List[CellUpdate] = field(default_factory=list)
    keys: Dict[str, str] = field(default_factory=dict)  # letter -> verdict value
    reload_board: bool = False  # phrase changed, re-render everything


@dataclass
class TileView:
    """Render description of a single board tile."""
    letter: str
    verdict: Optional[str]
    is_space: bool
    locked: bool


@dataclass
class BoardView:
    """Full render description of a session."""
    phrase_index: int
    phrase_count: int
    subtitle: str
    cols: int
    max_guesses: int
    rows: List[List[TileView]]
    keys: Dict[str, str]
    message: str
    hint_info: str
    hints_remaining: int
    hint_available: bool
    current_row: int
    cursor_col: int
    game_over: bool
    won: bool
    status: str  # "loading", "playing", "won" or "lost"
    answer: Optional[str] = None  # Only included when game is over
