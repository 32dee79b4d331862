"""
Game Controller

Handles all game-related HTTP endpoints. Every input event maps to one
POST route and answers with what changed plus the full board.
"""

from dataclasses import asdict
from flask import Blueprint, request, jsonify
from ..services.game_service import get_game_service
from ..services.auth_service import get_auth_service
from ..utils.decorators import require_player
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _log_game_end(session, player_id, guess):
    """Log win/loss events once a submitted row ends the game."""
    if not session.game_over:
        return
    event = 'game_won' if session.won else 'game_lost'
    game_logger.log_game_event(
        player_id, event, request.remote_addr,
        phrase_index=session.phrase_index, rows_used=len(session.history),
        hints_used=session.hints_used, final_guess=guess, answer=session.solution
    )


def _perform(action, **payload):
    """Run one input event for the requesting player."""
    player_id = request.player['id']
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()
        
        game_logger.log_user_action(request, action, player_id, **payload)
        
        session, update = game_service.perform(player_id, action, **payload)
        
        response_data = {
            'success': True,
            'update': asdict(update),
            'state': asdict(session.render())
        }
        
        game_logger.log_server_response(
            request, action, True, response_data, player_id,
            accepted=update.accepted, message=update.message
        )
        
        if action == 'submit_row' and update.accepted:
            _log_game_end(session, player_id, session.history[-1])
        
        return jsonify(response_data)
        
    except Exception as e:
        game_logger.log_error(request, e, action, player_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, action, False, error_response, player_id)
        return jsonify(error_response), 500


@game_bp.route('/game/state', methods=['GET'])
@require_player
def get_state():
    """Get the player's current board, restoring or starting a game."""
    player_id = request.player['id']
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()
        
        game_logger.log_user_action(request, 'get_state', player_id)
        
        session = game_service.get_session(player_id)
        response_data = {
            'success': True,
            'state': asdict(session.render())
        }
        
        game_logger.log_server_response(
            request, 'get_state', True, response_data, player_id,
            status=session.status
        )
        
        return jsonify(response_data)
        
    except Exception as e:
        game_logger.log_error(request, e, 'get_state', player_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, player_id)
        return jsonify(error_response), 500


@game_bp.route('/game/letter', methods=['POST'])
@require_player
def put_letter():
    """Type one letter into the current row."""
    data = request.get_json(silent=True) or {}
    letter = data.get('letter')
    if not isinstance(letter, str) or not letter:
        error_response = {
            'success': False,
            'error': 'Letter is required'
        }
        game_logger.log_server_response(request, 'put_letter', False, error_response)
        return jsonify(error_response), 400
    
    return _perform('put_letter', letter=letter)


@game_bp.route('/game/backspace', methods=['POST'])
@require_player
def backspace():
    """Delete the last entered letter."""
    return _perform('backspace')


@game_bp.route('/game/submit', methods=['POST'])
@require_player
def submit_row():
    """Submit the current row for scoring."""
    return _perform('submit_row')


@game_bp.route('/game/hint', methods=['POST'])
@require_player
def give_hint():
    """Reveal one letter of the current row."""
    return _perform('give_hint')


@game_bp.route('/game/clue', methods=['POST'])
@require_player
def show_clue():
    """Show the phrase's textual hint."""
    return _perform('show_clue')


@game_bp.route('/game/random', methods=['POST'])
@require_player
def random_phrase():
    """Start a random phrase drawn from the player's bag."""
    return _perform('random_phrase')


@game_bp.route('/game/next', methods=['POST'])
@require_player
def next_phrase():
    """Move on to the next phrase in the list."""
    return _perform('next_phrase')


@game_bp.route('/game/restart', methods=['POST'])
@require_player
def restart_phrase():
    """Restart the current phrase from an empty board."""
    return _perform('restart_phrase')


@game_bp.route('/game', methods=['DELETE'])
@require_player
def discard_game():
    """Forget the player's session and saved game."""
    player_id = request.player['id']
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()
        
        game_logger.log_user_action(request, 'discard_game', player_id)
        
        discarded = game_service.discard_session(player_id)
        response_data = {
            'success': True,
            'discarded': discarded
        }
        
        game_logger.log_server_response(request, 'discard_game', True, response_data, player_id)
        return jsonify(response_data)
        
    except Exception as e:
        game_logger.log_error(request, e, 'discard_game', player_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'discard_game', False, error_response, player_id)
        return jsonify(error_response), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()
        auth_service = get_auth_service()
        
        game_logger.log_user_action(request, 'health_check')
        
        response_data = {
            'status': 'healthy',
            'active_sessions': len(game_service.sessions) if game_service else 0,
            'phrase_count': len(game_service.phrases) if game_service else 0,
            'store': type(game_service.store).__name__ if game_service else None,
            'auth_available': auth_service is not None,
            'log_stats': game_logger.get_log_stats()
        }
        
        game_logger.log_server_response(request, 'health_check', True, response_data)
        
        return jsonify(response_data)
        
    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
