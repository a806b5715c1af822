# database/settings_manager.py
from .config import DB_LOCK, get_connection

def get_setting(key, default=None):
    """Fetches a single setting's value from the settings table."""
    with DB_LOCK:
        conn = get_connection()
        row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        conn.close()
    return row[0] if row else default

def update_setting(key, value):
    """Inserts or updates a setting in the settings table."""
    with DB_LOCK:
        conn = get_connection()
        conn.execute("INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)", (key, str(value)))
        conn.commit()
        conn.close()

def get_all_settings():
    """Returns every setting as a plain dictionary."""
    with DB_LOCK:
        conn = get_connection()
        rows = conn.execute("SELECT key, value FROM settings ORDER BY key").fetchall()
        conn.close()
    return {row['key']: row['value'] for row in rows}
