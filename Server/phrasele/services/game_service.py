"""
Game Service

Owns one game session per player, restores saved games from the store and
saves them back after every change.
"""

import random
from collections import OrderedDict
from typing import Optional, Tuple

from ..config.game_settings import MAX_GUESSES, MAX_HINTS, PHRASES, STORAGE_KEY
from ..models.game import SessionUpdate
from ..utils.game_logger import game_logger
from .persistence import SessionCodec
from .phrase_source import PhraseSource
from .session import GameSession
from .store import KeyValueStore, MemoryKeyValueStore

# Event name -> GameSession method
ACTIONS = {
    "put_letter": "put_letter",
    "backspace": "backspace",
    "submit_row": "submit_row",
    "give_hint": "give_hint",
    "show_clue": "show_clue",
    "random_phrase": "random_phrase",
    "next_phrase": "next_phrase",
    "restart_phrase": "restart_phrase",
}


class GameService:
    """
    Core game service managing one session per player.

    This class handles:
    - Restoring a player's saved game once, on first access
    - Cold-starting a random phrase when there is nothing to restore
    - Dispatching input events to the player's session
    - Best-effort saving after each accepted change

    At most ``max_cached_sessions`` sessions stay in memory; the least
    recently used one is dropped first and restored from its save when the
    player comes back.
    """

    def __init__(self,
                 phrases: Optional[PhraseSource] = None,
                 store: Optional[KeyValueStore] = None,
                 max_guesses: int = MAX_GUESSES,
                 max_hints: int = MAX_HINTS,
                 storage_key: str = STORAGE_KEY,
                 max_cached_sessions: int = 1000,
                 rng: Optional[random.Random] = None):
        self.phrases = phrases if phrases is not None else PhraseSource(PHRASES)
        self.store = store if store is not None else MemoryKeyValueStore()
        self.max_guesses = max_guesses
        self.max_hints = max_hints
        self.storage_key = storage_key
        self.max_cached_sessions = max(1, max_cached_sessions)
        self._rng = rng
        self.codec = SessionCodec(self.phrases, max_guesses, max_hints, rng=rng)
        self.sessions: "OrderedDict[str, GameSession]" = OrderedDict()  # Active sessions by player_id, oldest first

    def _save_key(self, player_id: str) -> str:
        return f"{self.storage_key}:{player_id}"

    def get_session(self, player_id: str) -> GameSession:
        """
        Returns the player's session, restoring or starting one if needed.

        Args:
            player_id: Player identifier from the player token

        Returns:
            GameSession for the player
        """
        session = self.sessions.get(player_id)
        if session is not None:
            self.sessions.move_to_end(player_id)
            return session

        session = self._restore(player_id)
        if session is None:
            session = GameSession(self.phrases, self.max_guesses, self.max_hints, rng=self._rng)
            if session.random_phrase().accepted:
                self._persist(player_id, session)
            else:
                game_logger.logger.warning(f"Could not start a game for {player_id}: {session.message}")

        self.sessions[player_id] = session
        self._evict_idle_sessions()
        return session

    def perform(self, player_id: str, action: str, **payload) -> Tuple[GameSession, SessionUpdate]:
        """
        Applies one input event to the player's session.

        Args:
            player_id: Player identifier
            action: One of ``ACTIONS``
            **payload: Event arguments (``letter`` for ``put_letter``)

        Returns:
            Tuple of (session, update)

        Raises:
            ValueError: If the action is unknown
        """
        if action not in ACTIONS:
            raise ValueError(f"Unknown action: {action}")

        session = self.get_session(player_id)
        update = getattr(session, ACTIONS[action])(**payload)

        if action == "restart_phrase" and update.accepted:
            self._clear_save(player_id)
        elif update.accepted:
            self._persist(player_id, session)

        return session, update

    def discard_session(self, player_id: str) -> bool:
        """
        Forgets a player's session and saved game.

        Returns:
            bool: True if an active session was dropped
        """
        existed = self.sessions.pop(player_id, None) is not None
        self._clear_save(player_id)
        return existed

    def _evict_idle_sessions(self) -> None:
        while len(self.sessions) > self.max_cached_sessions:
            player_id, _ = self.sessions.popitem(last=False)
            game_logger.logger.info(f"Evicted idle session for {player_id}")

    def _restore(self, player_id: str) -> Optional[GameSession]:
        try:
            blob = self.store.get(self._save_key(player_id))
        except Exception as e:
            game_logger.logger.warning(f"Save store read failed for {player_id}: {e}")
            return None

        session = self.codec.loads(blob)
        if blob and session is None:
            game_logger.logger.warning(f"Discarded unreadable saved game for {player_id}")
        return session

    def _persist(self, player_id: str, session: GameSession) -> None:
        # Losing a save must never block play
        try:
            self.store.set(self._save_key(player_id), self.codec.dumps(session))
        except Exception as e:
            game_logger.logger.warning(f"Save store write failed for {player_id}: {e}")

    def _clear_save(self, player_id: str) -> None:
        try:
            self.store.delete(self._save_key(player_id))
        except Exception as e:
            game_logger.logger.warning(f"Save store delete failed for {player_id}: {e}")


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(phrases: Optional[PhraseSource] = None,
                            store: Optional[KeyValueStore] = None,
                            **kwargs) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(phrases, store, **kwargs)
    return _game_service
