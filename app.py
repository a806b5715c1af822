# app.py

import logging
import sqlite3
from datetime import timedelta

from flask import Flask, session, request, jsonify
from flask_socketio import join_room
from werkzeug.exceptions import HTTPException

import config
from extensions import socketio
from database import get_setting, is_user_active

# --- Import Blueprints from the 'routes' package ---
# These blueprints contain the organized routes for different
# parts of the application.
from routes.view_routes import view_bp
from routes.project_routes import project_bp
from routes.sample_routes import sample_bp
from routes.calculation_routes import calculation_bp
from routes.alerts_routes import alerts_bp
from routes.analytics_routes import analytics_bp
from routes.report_routes import report_bp
from routes.user_routes import user_bp

logger = logging.getLogger(__name__)

# Paths that stay reachable while a stale session is being cleared.
SESSION_EXEMPT_ENDPOINTS = ('view_bp.login', 'view_bp.logout', 'static')

def session_timeout_minutes():
    """Reads the session timeout from the settings table, falling back to the default."""
    try:
        return int(get_setting('session_timeout', config.DEFAULT_SESSION_TIMEOUT))
    except (sqlite3.Error, ValueError) as e:
        logger.warning("Could not read session_timeout setting (%s); using %s minutes.",
                       e, config.DEFAULT_SESSION_TIMEOUT)
        return config.DEFAULT_SESSION_TIMEOUT

def create_app(overrides=None):
    """
    Creates and configures the Flask application.
    This factory pattern is useful for testing and scalability.

    Args:
        overrides (dict, optional): Flask config values applied last.
    """
    app = Flask(__name__)

    # Add a secret key required for sessions
    app.config['SECRET_KEY'] = config.SECRET_KEY

    # Configure session lifetime
    app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(minutes=session_timeout_minutes())

    if overrides:
        app.config.update(overrides)

    # THIS FUNCTION HANDLES ALL PRE-REQUEST TASKS
    @app.before_request
    def before_request_tasks():
        session.permanent = True
        if 'user_id' in session:
            if request.endpoint in SESSION_EXEMPT_ENDPOINTS:
                return None
            if not is_user_active(session['user_id']):
                logger.info("Clearing session of inactive user %s.", session['user_id'])
                session.clear()
                return jsonify({
                    "status": "error",
                    "message": "Your session has expired or your account has been deactivated. Please log in again."
                }), 401
        return None

    # --- Error Handlers ---
    # Every error leaves the API as JSON in the same shape the routes use.

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({"status": "error", "message": e.description}), e.code

    @app.errorhandler(sqlite3.Error)
    def handle_database_error(e):
        logger.exception("Database error while handling %s %s", request.method, request.path)
        return jsonify({"status": "error", "message": "A database error occurred."}), 500

    # --- Register Blueprints ---
    # Pages and session handling live at the root; data endpoints under /api.
    app.register_blueprint(view_bp, url_prefix='/')
    app.register_blueprint(project_bp, url_prefix='/api')
    app.register_blueprint(sample_bp, url_prefix='/api')
    app.register_blueprint(calculation_bp, url_prefix='/api')
    app.register_blueprint(alerts_bp, url_prefix='/api')
    app.register_blueprint(analytics_bp, url_prefix='/api')
    app.register_blueprint(report_bp, url_prefix='/api')
    app.register_blueprint(user_bp, url_prefix='/api')

    # Initialize SocketIO with the app
    socketio.init_app(app)

    return app


@socketio.on('join_room')
def handle_join_room_event(data):
    """Adds the client to a room for broadcasting."""
    logger.info("CLIENT-JOIN: A client (%s) joined the room '%s'", request.sid, data['room'])
    join_room(data['room'])
