"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and the phrase list
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    PHRASES, MAX_GUESSES, MAX_HINTS, STORAGE_KEY,
    validate_phrase_list_integrity, get_phrase_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'PHRASES', 'MAX_GUESSES', 'MAX_HINTS', 'STORAGE_KEY',
    'validate_phrase_list_integrity', 'get_phrase_statistics'
]
