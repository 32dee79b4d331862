"""
Scoring Service

Wordle-style evaluation of a guessed row against the solution phrase, and the
keyboard colour aggregation built on top of it.
"""

from string import ascii_uppercase
from typing import Dict, List, Sequence

from ..models.game import Verdict

SPACE = " "


def score_guess(guess: str, solution: str) -> List[Verdict]:
    """
    Implements the Wordle letter evaluation algorithm with space placeholders.

    Space positions in the solution always evaluate to ``Verdict.SPACE``
    whatever the guess holds there; every other position is scored against a
    letter count of the solution so a duplicated guess letter is only
    credited as often as it occurs.

    Args:
        guess: Guessed row, position-aligned with the solution
        solution: Active phrase in uppercase

    Returns:
        List[Verdict]: exactly one verdict per solution position

    Raises:
        ValueError: If guess and solution differ in length
    """
    if len(guess) != len(solution):
        raise ValueError(
            f"Guess length {len(guess)} does not match phrase length {len(solution)}"
        )

    result = [Verdict.ABSENT] * len(solution)
    remaining: Dict[str, int] = {}

    for i, letter in enumerate(solution):
        if letter == SPACE:
            result[i] = Verdict.SPACE
            continue
        remaining[letter] = remaining.get(letter, 0) + 1

    # First pass: exact position matches
    for i, letter in enumerate(solution):
        if letter != SPACE and guess[i] == letter:
            result[i] = Verdict.CORRECT
            remaining[letter] -= 1

    # Second pass: letters present elsewhere, limited by what is left
    for i, letter in enumerate(solution):
        if letter == SPACE or result[i] is Verdict.CORRECT:
            continue
        guessed = guess[i]
        if remaining.get(guessed, 0) > 0:
            result[i] = Verdict.PRESENT
            remaining[guessed] -= 1

    return result


def apply_guess(key_state: Dict[str, Verdict],
                guess: str,
                verdicts: Sequence[Verdict]) -> Dict[str, Verdict]:
    """
    Folds one scored row into the keyboard colour map.

    A letter's colour only ever moves up the priority order, so replaying the
    same row twice leaves the map unchanged.

    Returns:
        Dict[str, Verdict]: the letters whose colour changed
    """
    changed: Dict[str, Verdict] = {}
    for letter, verdict in zip(guess, verdicts):
        if verdict is Verdict.SPACE or letter not in ascii_uppercase:
            continue
        current = key_state.get(letter)
        current_rank = current.rank if current is not None else 0
        if verdict.rank > current_rank:
            key_state[letter] = verdict
            changed[letter] = verdict
    return changed
