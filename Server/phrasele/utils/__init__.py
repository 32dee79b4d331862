"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_player, websocket_player_required
from .helpers import get_user_identity, bearer_token
from .game_logger import game_logger

__all__ = ['require_player', 'websocket_player_required', 'get_user_identity', 'bearer_token', 'game_logger']
