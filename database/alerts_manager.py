# database/alerts_manager.py
"""
Manages all database operations for contamination alerts.
"""
import datetime
from .config import DB_LOCK, get_connection

_ALERT_SELECT = '''
    SELECT a.id, a.project_id, a.sample_id, a.alert_type, a.severity, a.message,
           a.created_at, a.resolved, a.resolved_at,
           COALESCE(p.name, 'Unknown Project') as project_name,
           COALESCE(p.location, 'Unknown Location') as location,
           s.sample_name,
           (SELECT c.hmpi_value FROM hmpi_calculations c
            WHERE c.sample_id = a.sample_id
            ORDER BY c.calculated_at DESC, c.id DESC LIMIT 1) as hmpi_value
    FROM alerts a
    LEFT JOIN projects p ON a.project_id = p.id
    LEFT JOIN water_samples s ON a.sample_id = s.id
'''

def _to_alert(row):
    alert = dict(row)
    alert['resolved'] = bool(alert['resolved'])
    return alert

def add_alert(project_id, sample_id, alert_type, severity, message):
    """Adds a new, unresolved alert and returns its ID."""
    created_at = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    with DB_LOCK:
        conn = get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            INSERT INTO alerts (project_id, sample_id, alert_type, severity, message, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
        ''', (project_id, sample_id, alert_type, severity, message, created_at))
        conn.commit()
        new_id = cursor.lastrowid
        conn.close()
    return new_id

def get_alerts(include_resolved=True, severity=None):
    """
    Fetches alerts, newest first, with the project name/location and the
    latest HMPI value of the sample that triggered them.
    """
    query = _ALERT_SELECT + " WHERE 1=1"
    params = []
    if not include_resolved:
        query += " AND a.resolved = 0"
    if severity:
        query += " AND a.severity = ?"
        params.append(severity)
    query += " ORDER BY a.created_at DESC, a.id DESC"

    with DB_LOCK:
        conn = get_connection()
        rows = conn.execute(query, params).fetchall()
        conn.close()
    return [_to_alert(row) for row in rows]

def get_unresolved_alerts():
    """Shortcut for the open alerts shown on dashboards."""
    return get_alerts(include_resolved=False)

def get_alert_by_id(alert_id):
    """Fetches a single alert by its ID."""
    with DB_LOCK:
        conn = get_connection()
        row = conn.execute(_ALERT_SELECT + " WHERE a.id = ?", (alert_id,)).fetchone()
        conn.close()
    return _to_alert(row) if row else None

def resolve_alert(alert_id):
    """
    Marks an alert as resolved. Returns False if the alert does not exist
    or was already resolved.
    """
    resolved_at = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    with DB_LOCK:
        conn = get_connection()
        cursor = conn.cursor()
        cursor.execute(
            "UPDATE alerts SET resolved = 1, resolved_at = ? WHERE id = ? AND resolved = 0",
            (resolved_at, alert_id)
        )
        conn.commit()
        updated = cursor.rowcount > 0
        conn.close()
    return updated

def get_alert_counts():
    """Counts open alerts in total and per severity."""
    with DB_LOCK:
        conn = get_connection()
        rows = conn.execute(
            "SELECT severity, COUNT(*) as total FROM alerts WHERE resolved = 0 GROUP BY severity"
        ).fetchall()
        conn.close()
    by_severity = {row['severity']: row['total'] for row in rows}
    return {
        'total_open': sum(by_severity.values()),
        'critical': by_severity.get('critical', 0),
        'high': by_severity.get('high', 0),
        'by_severity': by_severity,
    }
