"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import BoardView, CellUpdate, Phrase, SessionUpdate, TileView, Verdict

__all__ = ['BoardView', 'CellUpdate', 'Phrase', 'SessionUpdate', 'TileView', 'Verdict']
