"""
Authentication Controller

Handles player token endpoints.
"""

from flask import Blueprint, request, jsonify
from ..services.auth_service import get_auth_service
from ..utils.decorators import require_player
from ..utils.game_logger import game_logger

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/player', methods=['POST'])
def new_player():
    """Issue a token for a new anonymous player."""
    try:
        auth_service = get_auth_service()
        if not auth_service:
            return jsonify({
                'success': False,
                'error': 'Authentication service unavailable'
            }), 500
        
        game_logger.log_user_action(request, 'new_player')
        
        result = auth_service.issue_player_token()
        
        game_logger.log_server_response(request, 'new_player', True, result, result['player']['id'])
        return jsonify(result), 201
        
    except Exception as e:
        game_logger.log_error(request, e, 'new_player')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_player', False, error_response)
        return jsonify(error_response), 500


@auth_bp.route('/verify', methods=['GET'])
@require_player
def verify():
    """Confirm a player token is still valid."""
    return jsonify({
        'success': True,
        'player': request.player
    })
