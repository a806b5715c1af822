# database/project_manager.py
"""
Manages all database operations for monitoring projects.
"""
import datetime
import logging
from .config import DB_LOCK, get_connection
from .validation import parse_optional_float, require_fields

logger = logging.getLogger(__name__)

PROJECT_STATUSES = ('active', 'completed', 'on_hold')

def create_project(data, created_by=None):
    """
    Creates a new project from submitted form data and returns its ID.
    'name' and 'location' are required; coordinates are optional.
    """
    require_fields(data, 'name', 'location')
    status = data.get('status') or 'active'
    if status not in PROJECT_STATUSES:
        raise ValueError(f"Invalid project status '{status}'.")

    latitude = parse_optional_float(data.get('latitude'), 'latitude')
    longitude = parse_optional_float(data.get('longitude'), 'longitude')
    created_at = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    with DB_LOCK:
        conn = get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            INSERT INTO projects (name, description, location, latitude, longitude, status, created_by, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        ''', (
            str(data['name']).strip(),
            data.get('description') or '',
            str(data['location']).strip(),
            latitude,
            longitude,
            status,
            created_by,
            created_at
        ))
        conn.commit()
        new_id = cursor.lastrowid
        conn.close()
    logger.info("Project %s created: %s", new_id, data['name'])
    return new_id

def get_all_projects():
    """Fetches all projects, newest first, with their sample counts."""
    with DB_LOCK:
        conn = get_connection()
        rows = conn.execute('''
            SELECT p.*, COUNT(s.id) as sample_count
            FROM projects p
            LEFT JOIN water_samples s ON s.project_id = p.id
            GROUP BY p.id
            ORDER BY p.created_at DESC, p.id DESC
        ''').fetchall()
        conn.close()
    return [dict(row) for row in rows]

def get_project_by_id(project_id):
    """Fetches a single project by its ID."""
    with DB_LOCK:
        conn = get_connection()
        row = conn.execute('''
            SELECT p.*, (SELECT COUNT(*) FROM water_samples s WHERE s.project_id = p.id) as sample_count
            FROM projects p WHERE p.id = ?
        ''', (project_id,)).fetchone()
        conn.close()
    return dict(row) if row else None

def update_project(project_id, data):
    """
    Updates an existing project's details.
    Returns False when the project does not exist.
    """
    require_fields(data, 'name', 'location')
    latitude = parse_optional_float(data.get('latitude'), 'latitude')
    longitude = parse_optional_float(data.get('longitude'), 'longitude')

    with DB_LOCK:
        conn = get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            UPDATE projects
            SET name = ?, description = ?, location = ?, latitude = ?, longitude = ?
            WHERE id = ?
        ''', (
            str(data['name']).strip(),
            data.get('description') or '',
            str(data['location']).strip(),
            latitude,
            longitude,
            project_id
        ))
        conn.commit()
        updated = cursor.rowcount > 0
        conn.close()
    return updated

def set_project_status(project_id, status):
    """Changes a project's status. Returns False when the project does not exist."""
    if status not in PROJECT_STATUSES:
        raise ValueError(f"Invalid project status '{status}'.")
    with DB_LOCK:
        conn = get_connection()
        cursor = conn.cursor()
        cursor.execute("UPDATE projects SET status = ? WHERE id = ?", (status, project_id))
        conn.commit()
        updated = cursor.rowcount > 0
        conn.close()
    return updated

def delete_project(project_id):
    """
    Deletes a project. Its samples, metal readings, calculations and alerts
    are removed through ON DELETE CASCADE.
    """
    with DB_LOCK:
        conn = get_connection()
        cursor = conn.cursor()
        cursor.execute("DELETE FROM projects WHERE id = ?", (project_id,))
        conn.commit()
        deleted = cursor.rowcount > 0
        conn.close()
    if deleted:
        logger.info("Project %s deleted.", project_id)
    return deleted
