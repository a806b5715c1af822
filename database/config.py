# database/config.py
"""
Centralized configuration for the database.
"""
import os
import sqlite3
import threading

# --- Centralized Configuration ---

# The file path for the SQLite database.
DB_PATH = os.getenv('HMPI_DB_PATH', 'hmpi_dashboard.db')

# A thread lock to prevent race conditions during concurrent database writes.
DB_LOCK = threading.Lock()


def get_connection():
    """
    Opens a connection to the current DB_PATH with name-based row access
    and foreign key enforcement (needed for cascading deletes).
    """
    conn = sqlite3.connect(DB_PATH, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn
