"""
WebSocket Package

Contains the Socket.IO event handlers.
"""

from .handlers import register_websocket_handlers

__all__ = ['register_websocket_handlers']
