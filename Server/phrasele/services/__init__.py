"""
Services Package

Contains all business logic and service classes.
"""

from .auth_service import AuthService, get_auth_service
from .game_service import GameService, get_game_service
from .persistence import SessionCodec
from .phrase_bag import PhraseBag
from .phrase_source import EmptyPhraseSourceError, MalformedPhraseError, PhraseError, PhraseSource
from .scoring import apply_guess, score_guess
from .session import GameSession
from .store import KeyValueStore, MemoryKeyValueStore, MongoKeyValueStore

__all__ = [
    'AuthService', 'get_auth_service',
    'GameService', 'get_game_service',
    'GameSession', 'SessionCodec', 'PhraseBag',
    'PhraseSource', 'PhraseError', 'EmptyPhraseSourceError', 'MalformedPhraseError',
    'score_guess', 'apply_guess',
    'KeyValueStore', 'MemoryKeyValueStore', 'MongoKeyValueStore'
]
