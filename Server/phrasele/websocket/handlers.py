"""
WebSocket Event Handlers

Lets a client drive its game over a socket, one input event per message.
"""

from dataclasses import asdict
from flask import request
from flask_socketio import emit
from ..services.game_service import ACTIONS, get_game_service
from ..utils.decorators import websocket_player_required
from ..utils.game_logger import game_logger


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""
    
    @socketio.on('get_state')
    @websocket_player_required
    def handle_get_state(data, player=None):
        """Send the player's current board."""
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return
        
        try:
            session = game_service.get_session(player['id'])
            emit('session_update', {
                'success': True,
                'state': asdict(session.render())
            })
        except Exception as e:
            game_logger.logger.error(f"WebSocket get_state failed for {player['id']}: {e}")
            emit('error', {'error': str(e)})

    @socketio.on('game_action')
    @websocket_player_required
    def handle_game_action(data, player=None):
        """Apply one input event and send back what changed."""
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return
        
        action = data.get('action')
        if action not in ACTIONS:
            emit('error', {'error': f'Unknown action: {action}'})
            return
        
        payload = {}
        if action == 'put_letter':
            letter = data.get('letter')
            if not isinstance(letter, str) or not letter:
                emit('error', {'error': 'Letter is required'})
                return
            payload['letter'] = letter
        
        try:
            session, update = game_service.perform(player['id'], action, **payload)
            game_logger.logger.info(
                f"WebSocket: {player['id']} {action} accepted={update.accepted} sid={request.sid}"
            )
            emit('session_update', {
                'success': True,
                'update': asdict(update),
                'state': asdict(session.render())
            })
        except Exception as e:
            game_logger.logger.error(f"WebSocket {action} failed for {player['id']}: {e}")
            emit('error', {'error': str(e)})
