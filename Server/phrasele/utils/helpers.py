"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional


def get_user_identity(request_obj, player_id: Optional[str] = None) -> Dict[str, Optional[str]]:
    """Extract player identity information from a request."""
    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'
    
    if player_id is None:
        player = getattr(request_obj, 'player', None)
        if isinstance(player, dict):
            player_id = player.get('id')
    
    return {
        'user_ip': user_ip,
        'player_id': player_id
    }


def bearer_token(auth_header: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer`` header, if any."""
    if not auth_header or not auth_header.startswith('Bearer '):
        return None
    return auth_header.split(' ', 1)[1].strip() or None
