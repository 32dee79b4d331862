"""
Phrasele Game Server - Main Entry Point

This is the main entry point for the phrase puzzle server.
It initializes all services and starts the Flask-SocketIO application.
"""

from phrasele import create_app
from phrasele.config import Config, PHRASES, validate_phrase_list_integrity, get_phrase_statistics
from phrasele.services.auth_service import initialize_auth_service
from phrasele.services.game_service import initialize_game_service
from phrasele.services.phrase_source import PhraseSource
from phrasele.services.store import MemoryKeyValueStore, MongoKeyValueStore
from phrasele.utils.game_logger import game_logger


def build_store():
    """Pick the save store: MongoDB when configured, otherwise in-memory."""
    if Config.MONGO_URI:
        try:
            store = MongoKeyValueStore(Config.MONGO_URI, Config.MONGO_DATABASE)
            store.ping()
            print("✓ Connected to MongoDB save store")
            return store
        except Exception as e:
            print(f"✗ MongoDB connection error: {e}")
            game_logger.logger.warning(f"MongoDB unavailable, saves kept in memory: {e}")
    else:
        print("✗ MongoDB URI not configured, saves kept in memory")
    return MemoryKeyValueStore()


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        auth_service = initialize_auth_service(Config.JWT_SECRET, Config.JWT_EXPIRATION_DAYS)
        print("✓ Authentication service initialized successfully")

        game_service = initialize_game_service(
            PhraseSource(PHRASES),
            build_store(),
            max_guesses=Config.MAX_GUESSES,
            max_hints=Config.MAX_HINTS,
            max_cached_sessions=Config.MAX_CACHED_SESSIONS
        )
        try:
            validate_phrase_list_integrity()
            print(f"✓ Phrase list valid: {get_phrase_statistics()['total_phrases']} phrases")
        except ValueError as config_error:
            print(f"✗ Phrase list problem: {config_error}")
            game_logger.logger.warning(f"Phrase list validation failed: {config_error}")

        if len(game_service.phrases):
            print(f"✓ Game service initialized with {len(game_service.phrases)} phrases")
        else:
            print("✗ Phrase list is empty, games will not start")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Phrasele Server Starting")

        print(f"\nStarting Phrasele Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Auth available: {auth_service is not None}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG,
                     allow_unsafe_werkzeug=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Phrasele Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
