# database/audit_logger.py
"""
Handles all database operations for the system audit log.
"""
import json
import logging
from datetime import datetime
from .config import DB_LOCK, get_connection

logger = logging.getLogger(__name__)

def add_audit_log(user_id, component, action, target, status, ip_address, details=None):
    """
    Adds a new entry to the audit log.

    Args:
        user_id (int or None): The ID of the user performing the action (None for system actions).
        component (str): The part of the system being affected (e.g., 'Projects').
        action (str): A description of the action (e.g., 'Project Created').
        target (str): The object the action was performed on (e.g., a project name).
        status (str): The outcome of the action ('Success' or 'Failure').
        ip_address (str): The originating IP address.
        details (dict, optional): A dictionary of extra details to be stored as JSON.
    """
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    details_json = json.dumps(details) if details else None

    with DB_LOCK:
        conn = get_connection()
        conn.execute(
            """INSERT INTO audit_log (timestamp, user_id, component, action, target, status, ip_address, details)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (timestamp, user_id, component, action, target, status, ip_address, details_json)
        )
        conn.commit()
        conn.close()
    logger.debug("Audit: %s / %s on %s -> %s", component, action, target, status)

def get_audit_logs(user_filter=None, action_filter=None, date_range=None):
    """
    Retrieves audit logs with optional filters for date, user, and action.
    Joins with the users table to include the user's full name.
    """
    query = """
        SELECT a.timestamp, a.action, a.target, a.status, a.ip_address, a.details,
               a.component, COALESCE(u.full_name, 'System') as user_name
        FROM audit_log a
        LEFT JOIN users u ON a.user_id = u.id
        WHERE 1=1
    """
    params = []

    if user_filter:
        query += " AND (u.email LIKE ? OR u.full_name LIKE ?)"
        params.extend([f"%{user_filter}%", f"%{user_filter}%"])
    if action_filter:
        query += " AND a.action LIKE ?"
        params.append(f"%{action_filter}%")

    if date_range:
        if ' to ' in date_range:
            start, end = date_range.split(' to ', 1)
        else:
            start = end = date_range
        query += " AND a.timestamp BETWEEN ? AND ?"
        params.extend([f"{start.strip()} 00:00:00", f"{end.strip()} 23:59:59"])

    query += " ORDER BY a.timestamp DESC, a.id DESC"

    with DB_LOCK:
        conn = get_connection()
        rows = conn.execute(query, params).fetchall()
        conn.close()

    logs = []
    for row in rows:
        entry = dict(row)
        entry['details'] = json.loads(entry['details']) if entry['details'] else None
        logs.append(entry)
    return logs
