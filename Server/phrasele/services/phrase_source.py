"""
Phrase Source

Read-only, ordered access to the puzzle phrases.
"""

from typing import Iterable, List, Optional

from ..models.game import Phrase


class PhraseError(Exception):
    """Base class for phrase source problems."""


class EmptyPhraseSourceError(PhraseError):
    """The phrase list holds no entries."""


class MalformedPhraseError(PhraseError):
    """An entry is neither a string nor an object with a string ``text``."""


class PhraseSource:
    """
    Ordered collection of raw phrase entries.

    Entries are either plain strings or ``{"text": ..., "hint": ...}``
    objects. They are normalised lazily so that one malformed entry only
    breaks the game that tries to load it.
    """

    def __init__(self, entries: Optional[Iterable] = None):
        self._entries: List = list(entries or [])

    def __len__(self) -> int:
        return len(self._entries)

    def clamp(self, index: int) -> int:
        """Clamp an index into the valid range of the list."""
        if not self._entries:
            raise EmptyPhraseSourceError("No phrases found")
        return max(0, min(index, len(self._entries) - 1))

    def get(self, index: int) -> Phrase:
        """
        Resolve the phrase at a clamped index.

        Raises:
            EmptyPhraseSourceError: If the list is empty
            MalformedPhraseError: If the entry has an unusable shape
        """
        entry = self._entries[self.clamp(index)]

        if isinstance(entry, str):
            return Phrase(text=entry.upper())

        if isinstance(entry, dict) and isinstance(entry.get('text'), str):
            hint = entry.get('hint') or ""
            return Phrase(text=entry['text'].upper(), hint=str(hint).strip())

        raise MalformedPhraseError(f"Invalid phrase format at index {index}")
