"""
Game Session

State machine for one player's game against one phrase: cursor movement,
the in-progress row, submitted rows, hints and the keyboard colours.
Nothing here renders anything; every operation returns a ``SessionUpdate``
describing what changed.
"""

import random
from string import ascii_uppercase
from typing import Dict, List, Optional

from ..config.game_settings import MAX_GUESSES, MAX_HINTS
from ..models.game import BoardView, CellUpdate, SessionUpdate, TileView, Verdict
from .phrase_bag import PhraseBag
from .phrase_source import EmptyPhraseSourceError, MalformedPhraseError, PhraseSource
from .scoring import SPACE, apply_guess, score_guess


class GameSession:
    """
    One player's game.

    The session is in the ``loading`` state until a phrase loads
    successfully, then ``playing`` until a row matches the solution
    (``won``) or the last row is used up (``lost``). Changing or restarting
    the phrase returns it to ``playing``.
    """

    def __init__(self,
                 phrases: PhraseSource,
                 max_guesses: int = MAX_GUESSES,
                 max_hints: int = MAX_HINTS,
                 bag: Optional[PhraseBag] = None,
                 rng: Optional[random.Random] = None):
        self.phrases = phrases
        self.max_guesses = max_guesses
        self.max_hints = max_hints
        self._rng = rng or random.Random()
        self.bag = bag or PhraseBag(rng=self._rng)

        self.loaded = False
        self.phrase_index = 0
        self.solution = ""
        self.hint_text = ""
        self.cols = 0

        self.current_row = 0
        self.cursor_col = 0  # position in the phrase, spaces included
        self.row_input: List[str] = []
        self.history: List[str] = []
        self.verdicts: List[List[Verdict]] = []  # derived from history
        self.key_state: Dict[str, Verdict] = {}  # derived from history
        self.hints_used = 0
        self.game_over = False
        self.message = ""

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def won(self) -> bool:
        return self.game_over and bool(self.history) and self.history[-1] == self.solution

    @property
    def status(self) -> str:
        if not self.loaded:
            return "loading"
        if self.won:
            return "won"
        if self.game_over:
            return "lost"
        return "playing"

    @property
    def hints_remaining(self) -> int:
        return max(0, self.max_hints - self.hints_used)

    @property
    def hint_info(self) -> str:
        return f"Hints: {self.hints_remaining}/{self.max_hints}"

    @property
    def subtitle(self) -> str:
        return f"Phrase {self.phrase_index + 1} of {len(self.phrases)}"

    def is_space(self, col: int) -> bool:
        return self.solution[col] == SPACE

    def move_cursor_forward_from(self, col: int) -> int:
        while col < self.cols and self.is_space(col):
            col += 1
        return col

    def move_cursor_backward_from(self, col: int) -> int:
        while col >= 0 and self.is_space(col):
            col -= 1
        return col

    def is_row_complete(self) -> bool:
        return all(
            len(self.row_input[col]) == 1
            for col in range(self.cols)
            if not self.is_space(col)
        )

    def row_string(self) -> str:
        return "".join(
            SPACE if self.is_space(col) else self.row_input[col]
            for col in range(self.cols)
        )

    # ------------------------------------------------------------------
    # Phrase loading
    # ------------------------------------------------------------------

    def load_phrase(self, index: int, message: str = "") -> SessionUpdate:
        """
        Load the phrase at ``index`` (clamped) and reset every per-phrase field.

        An empty or malformed phrase source is reported through the message;
        the session keeps whatever it had before.
        """
        try:
            index = self.phrases.clamp(index)
            phrase = self.phrases.get(index)
        except EmptyPhraseSourceError:
            return self._reject("No phrases found. Check the phrase list.")
        except MalformedPhraseError:
            return self._reject("Invalid phrase format.")

        self.loaded = True
        self.phrase_index = index
        self.solution = phrase.text
        self.hint_text = phrase.hint
        self.cols = len(self.solution)

        self.current_row = 0
        self.history = []
        self.verdicts = []
        self.key_state = {}
        self.hints_used = 0
        self.game_over = False
        self.reset_row()

        self.message = message
        return SessionUpdate(accepted=True, message=message, reload_board=True)

    def random_phrase(self) -> SessionUpdate:
        index = self.bag.draw(len(self.phrases))
        return self.load_phrase(index, "Random phrase. Start typing.")

    def next_phrase(self) -> SessionUpdate:
        if not len(self.phrases):
            return self._reject("No phrases found. Check the phrase list.")
        index = (self.phrase_index + 1) % len(self.phrases)
        return self.load_phrase(index, "New phrase. Start typing.")

    def restart_phrase(self) -> SessionUpdate:
        return self.load_phrase(self.phrase_index, "Restarted. Go again.")

    # ------------------------------------------------------------------
    # Row editing
    # ------------------------------------------------------------------

    def put_letter(self, letter: str) -> SessionUpdate:
        """Write a letter at the cursor and advance past any spaces."""
        if not self._accepting_input():
            return self._ignored()

        letter = str(letter).upper()
        if len(letter) != 1 or letter not in ascii_uppercase:
            return self._ignored()

        self.cursor_col = self.move_cursor_forward_from(self.cursor_col)
        if self.cursor_col >= self.cols:
            return self._ignored()

        col = self.cursor_col
        self.row_input[col] = letter
        self.cursor_col = self.move_cursor_forward_from(col + 1)

        return SessionUpdate(
            accepted=True,
            message=self.message,
            cells=[CellUpdate(row=self.current_row, col=col, letter=letter)]
        )

    def backspace(self) -> SessionUpdate:
        """
        Clear the last entered letter.

        The cursor normally rests one past the last letter, on an empty slot.
        When the slot it lands on is empty, one more step back is taken so the
        letter before it is the one cleared.
        """
        if not self._accepting_input():
            return self._ignored()

        col = min(self.cursor_col, self.cols - 1)
        col = self.move_cursor_backward_from(col)

        if col >= 0 and self.row_input[col] == "":
            col = self.move_cursor_backward_from(col - 1)

        if col < 0:
            return self._ignored()

        self.row_input[col] = ""
        self.cursor_col = col

        return SessionUpdate(
            accepted=True,
            message=self.message,
            cells=[CellUpdate(row=self.current_row, col=col, letter="")]
        )

    def submit_row(self) -> SessionUpdate:
        """Score the current row, colour the keyboard and advance or end the game."""
        if not self._accepting_input():
            return self._ignored()

        if not self.is_row_complete():
            return self._reject("Fill all letters before pressing Enter.")

        row = self.current_row
        guess = self.row_string()
        verdicts = score_guess(guess, self.solution)
        changed = apply_guess(self.key_state, guess, verdicts)

        self.history.append(guess)
        self.verdicts.append(verdicts)

        cells = [
            CellUpdate(row=row, col=col, letter=guess[col].strip(),
                       verdict=verdicts[col].value, locked=True)
            for col in range(self.cols)
        ]

        if guess == self.solution:
            self.game_over = True
            self.message = "Correct! You solved it."
        else:
            self.current_row += 1
            if self.current_row >= self.max_guesses:
                self.game_over = True
                self.message = f'Out of guesses. Answer: "{self.solution}"'
            else:
                self.message = f"Try again ({self.max_guesses - self.current_row} guesses left)"
                self.reset_row()

        return SessionUpdate(
            accepted=True,
            message=self.message,
            cells=cells,
            keys={letter: verdict.value for letter, verdict in changed.items()}
        )

    # ------------------------------------------------------------------
    # Hints
    # ------------------------------------------------------------------

    def give_hint(self) -> SessionUpdate:
        """Reveal one random unfilled letter of the current row."""
        if not self._accepting_input():
            return self._ignored()

        if self.hints_used >= self.max_hints:
            return self._reject("No hints left.")

        candidates = [
            col for col in range(self.cols)
            if not self.is_space(col) and self.row_input[col] == ""
        ]
        if not candidates:
            return self._reject("Nothing left to hint on this row!")

        col = self._rng.choice(candidates)
        letter = self.solution[col]
        self.row_input[col] = letter
        self.hints_used += 1

        self.message = "Hint used: revealed a letter."
        return SessionUpdate(
            accepted=True,
            message=self.message,
            cells=[CellUpdate(row=self.current_row, col=col, letter=letter)]
        )

    def show_clue(self) -> SessionUpdate:
        """Report the phrase's textual hint, if it has one."""
        if not self.loaded:
            return self._ignored()
        if not self.hint_text:
            return self._reject("No hint available for this phrase.")
        self.message = f"Hint: {self.hint_text}"
        return SessionUpdate(accepted=True, message=self.message)

    # ------------------------------------------------------------------
    # Replay and rendering
    # ------------------------------------------------------------------

    def rebuild_from_history(self) -> None:
        """Recompute row verdicts and keyboard colours from the submitted rows."""
        self.verdicts = []
        self.key_state = {}
        for guess in self.history:
            verdicts = score_guess(guess, self.solution)
            apply_guess(self.key_state, guess, verdicts)
            self.verdicts.append(verdicts)

    def render(self) -> BoardView:
        rows = []
        for row in range(self.max_guesses):
            tiles = []
            for col in range(self.cols):
                is_space = self.is_space(col)
                letter, verdict, locked = "", None, False
                if row < len(self.history):
                    verdict = self.verdicts[row][col].value
                    letter = "" if is_space else self.history[row][col]
                    locked = True
                elif row == self.current_row and not self.game_over:
                    letter = self.row_input[col]
                tiles.append(TileView(letter=letter, verdict=verdict,
                                      is_space=is_space, locked=locked))
            rows.append(tiles)

        return BoardView(
            phrase_index=self.phrase_index,
            phrase_count=len(self.phrases),
            subtitle=self.subtitle,
            cols=self.cols,
            max_guesses=self.max_guesses,
            rows=rows,
            keys={letter: verdict.value for letter, verdict in self.key_state.items()},
            message=self.message,
            hint_info=self.hint_info,
            hints_remaining=self.hints_remaining,
            hint_available=self._accepting_input() and self.hints_used < self.max_hints,
            current_row=self.current_row,
            cursor_col=self.cursor_col,
            game_over=self.game_over,
            won=self.won,
            status=self.status,
            answer=self.solution if self.game_over else None
        )

    def reset_row(self) -> None:
        """Empty the in-progress row and put the cursor on its first letter slot."""
        self.row_input = [""] * self.cols
        self.cursor_col = self.move_cursor_forward_from(0)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _accepting_input(self) -> bool:
        return self.loaded and not self.game_over and self.current_row < self.max_guesses

    def _ignored(self) -> SessionUpdate:
        return SessionUpdate(accepted=False, message=self.message)

    def _reject(self, message: str) -> SessionUpdate:
        self.message = message
        return SessionUpdate(accepted=False, message=message)
