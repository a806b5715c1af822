# main.py
import logging

import config
from logging_setup import configure_logging

logger = logging.getLogger(__name__)


# This middleware specifically catches the BrokenPipeError and handles it gracefully.
class BrokenPipeErrorHandler:
    def __init__(self, application):
        self.application = application

    def __call__(self, environ, start_response):
        try:
            return self.application(environ, start_response)
        except BrokenPipeError:
            logger.info("Client disconnected (BrokenPipeError). Request ignored.")
            return []


def build_app():
    """Verifies the schema and builds the wrapped Flask application."""
    from database.setup import create_tables
    from app import create_app

    logger.info("Initializing and verifying database schema...")
    create_tables()
    logger.info("Database setup complete.")

    app = create_app()
    app.wsgi_app = BrokenPipeErrorHandler(app.wsgi_app)
    return app


# === Entry point ===
if __name__ == "__main__":
    configure_logging(config.LOG_LEVEL, json_format=config.JSON_LOGS)
    from extensions import socketio

    application = build_app()
    logger.info("Starting HMPI dashboard on %s:%s", config.HOST, config.PORT)
    socketio.run(application, host=config.HOST, port=config.PORT, allow_unsafe_werkzeug=True)
