# config.py
"""
Application configuration. Every value can be overridden with an
HMPI_* environment variable.
"""
import os

SECRET_KEY = os.getenv('HMPI_SECRET_KEY', 'change-this-secret-key-in-production')

HOST = os.getenv('HMPI_HOST', '0.0.0.0')
PORT = int(os.getenv('HMPI_PORT', '5000'))

LOG_LEVEL = os.getenv('HMPI_LOG_LEVEL', 'INFO')
JSON_LOGS = os.getenv('HMPI_JSON_LOGS', 'false').lower() == 'true'

# --- Map Defaults ---
# Used when no sample has coordinates (Mumbai).
DEFAULT_MAP_CENTER = (
    float(os.getenv('HMPI_MAP_LAT', '19.076')),
    float(os.getenv('HMPI_MAP_LON', '72.8777')),
)
DEFAULT_MAP_ZOOM = int(os.getenv('HMPI_MAP_ZOOM', '10'))

# --- Reporting ---
DEFAULT_TIMEFRAME_DAYS = int(os.getenv('HMPI_TIMEFRAME_DAYS', '30'))

# Session lifetime fallback in minutes, used until the settings table has a value.
DEFAULT_SESSION_TIMEOUT = 60
