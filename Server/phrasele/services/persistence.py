"""
Persistence Codec

Turns a live ``GameSession`` into a JSON-friendly snapshot and back. Loading
never trusts the snapshot blindly: every field is checked on its own and
falls back to a fresh value when absent or the wrong shape, because the
phrase list may have changed since the game was saved. Row verdicts and
keyboard colours are always recomputed from the submitted rows.
"""

import json
import random
from string import ascii_uppercase
from typing import Any, Dict, List, Optional

from ..config.game_settings import MAX_GUESSES, MAX_HINTS
from .phrase_bag import PhraseBag
from .phrase_source import PhraseSource
from .session import GameSession

SNAPSHOT_VERSION = 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class SessionCodec:
    """Serializes sessions for a given phrase source and rule set."""

    def __init__(self,
                 phrases: PhraseSource,
                 max_guesses: int = MAX_GUESSES,
                 max_hints: int = MAX_HINTS,
                 rng: Optional[random.Random] = None):
        self.phrases = phrases
        self.max_guesses = max_guesses
        self.max_hints = max_hints
        self._rng = rng

    def save(self, session: GameSession) -> Dict[str, Any]:
        """Capture every session field plus the bag and keyboard colours."""
        return {
            "version": SNAPSHOT_VERSION,
            "phrase_index": session.phrase_index,
            "solution": session.solution,
            "hint": session.hint_text,
            "cols": session.cols,
            "current_row": session.current_row,
            "cursor_col": session.cursor_col,
            "row_input": list(session.row_input),
            "game_over": session.game_over,
            "hints_used": session.hints_used,
            "phrase_bag": list(session.bag.order),
            "bag_pos": session.bag.position,
            "history": list(session.history),
            "key_state": {letter: verdict.value for letter, verdict in session.key_state.items()},
        }

    def dumps(self, session: GameSession) -> str:
        return json.dumps(self.save(session))

    def loads(self, blob: Optional[str]) -> Optional[GameSession]:
        """Decode a stored blob; anything unreadable means "no saved game"."""
        if not blob:
            return None
        try:
            data = json.loads(blob)
        except (TypeError, ValueError):
            return None
        return self.load(data)

    def load(self, data: Any) -> Optional[GameSession]:
        """
        Rebuild a live session from a snapshot.

        Returns:
            GameSession, or None if the snapshot is unusable or its phrase
            can no longer be loaded
        """
        if not isinstance(data, dict):
            return None

        session = GameSession(self.phrases, self.max_guesses, self.max_hints, rng=self._rng)

        phrase_index = data.get("phrase_index")
        if not _is_int(phrase_index):
            phrase_index = session.phrase_index

        # Reload the phrase so cols and spaces come from the current list
        if not session.load_phrase(phrase_index).accepted:
            return None

        cursor_col = data.get("cursor_col")
        if _is_int(cursor_col):
            session.cursor_col = _clamp(cursor_col, 0, session.cols)

        row_input = self._coerce_row_input(data.get("row_input"), session)
        if row_input is not None:
            session.row_input = row_input

        hints_used = data.get("hints_used")
        session.hints_used = _clamp(hints_used, 0, self.max_hints) if _is_int(hints_used) else 0

        session.cursor_col = session.move_cursor_forward_from(session.cursor_col)

        bag = self._coerce_bag(data.get("phrase_bag"), data.get("bag_pos"))
        if bag is not None:
            session.bag = bag

        raw_history = data.get("history")
        session.history = self._coerce_history(raw_history, session)
        session.rebuild_from_history()
        dropped = isinstance(raw_history, list) and len(raw_history) != len(session.history)
        self._reconcile_with_history(session, dropped)

        session.message = "Loaded: game finished." if session.game_over else "Loaded saved game. Carry on."
        return session

    def _reconcile_with_history(self, session: GameSession, dropped: bool) -> None:
        """
        Make the row counter and game-over flag agree with the surviving rows.

        Submitted rows are the primary record, so the stored ``current_row``
        and ``game_over`` are not read. Rows dropped on load (e.g. because the
        phrase changed) also invalidate the row being typed.
        """
        history = session.history
        if history and history[-1] == session.solution:
            session.game_over = True
            session.current_row = len(history) - 1
        else:
            session.current_row = len(history)
            session.game_over = session.current_row >= self.max_guesses

        if dropped:
            session.reset_row()

    def _coerce_row_input(self, value: Any, session: GameSession) -> Optional[List[str]]:
        if not isinstance(value, list) or len(value) != session.cols:
            return None

        row = []
        for col, slot in enumerate(value):
            if not isinstance(slot, str):
                return None
            slot = slot.upper()
            if session.is_space(col) or slot not in ascii_uppercase or len(slot) > 1:
                slot = ""
            row.append(slot)
        return row

    def _coerce_bag(self, order: Any, position: Any) -> Optional[PhraseBag]:
        if not isinstance(order, list) or not all(_is_int(i) for i in order):
            return None
        if sorted(order) != list(range(len(order))):
            return None
        position = position if _is_int(position) and position >= 0 else len(order)
        return PhraseBag(order, position, rng=self._rng)

    def _coerce_history(self, value: Any, session: GameSession) -> List[str]:
        if not isinstance(value, list):
            return []
        history = []
        for guess in value:
            if not isinstance(guess, str) or len(guess) != session.cols:
                continue
            history.append(guess)
            # Nothing can follow the winning row
            if guess == session.solution or len(history) == self.max_guesses:
                break
        return history
