# extensions.py
"""Shared Flask extension instances, initialised in app.create_app()."""
from flask_socketio import SocketIO

socketio = SocketIO()

# Every dashboard client joins this room to receive live alert events.
BROADCAST_ROOM = 'broadcast_room'
