"""
Authentication Decorators

Contains decorators for HTTP and WebSocket player authentication.
"""

from functools import wraps
from flask import request, jsonify
from flask_socketio import emit

from .helpers import bearer_token


def require_player(f):
    """
    Decorator to require a player token for game endpoints.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.auth_service import get_auth_service
        
        auth_service = get_auth_service()
        if not auth_service:
            return jsonify({
                'success': False,
                'error': 'Authentication service unavailable'
            }), 500
        
        token = bearer_token(request.headers.get('Authorization'))
        if not token:
            return jsonify({
                'success': False,
                'error': 'Authorization token required'
            }), 401
        
        result = auth_service.verify_token(token)
        if not result['success']:
            return jsonify({
                'success': False,
                'error': result['error']
            }), 401
        
        # Add player data to request context
        request.player = result['player']
        return f(*args, **kwargs)
    
    return decorated_function


def websocket_player_required(f):
    """Decorator for WebSocket player authentication."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.auth_service import get_auth_service
        
        auth_service = get_auth_service()
        if not auth_service or not args or not isinstance(args[0], dict) or 'token' not in args[0]:
            emit('error', {'error': 'Authentication required'})
            return
        
        result = auth_service.verify_token(args[0]['token'])
        if not result['success']:
            emit('error', {'error': result['error']})
            return
        
        kwargs['player'] = result['player']
        return f(*args, **kwargs)
    
    return decorated_function
