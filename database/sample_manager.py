# database/sample_manager.py
"""
Manages all database operations for water samples and their heavy metal readings.
"""
import datetime
import logging
import sqlite3
from standards_config import DEFAULT_ANALYSIS_METHOD
from .config import DB_LOCK, get_connection
from .validation import parse_concentration, parse_iso_date, parse_optional_float, require_fields

logger = logging.getLogger(__name__)

# Physical parameters recorded with every sample.
NUMERIC_SAMPLE_FIELDS = (
    'latitude', 'longitude', 'depth_meters', 'temperature_celsius',
    'ph_level', 'dissolved_oxygen', 'turbidity', 'conductivity',
)

def _prepare_metal_rows(heavy_metals, default_date):
    """
    Validates submitted metal rows and keeps only those with a positive
    concentration. Returns a list of tuples ready for INSERT (without sample_id).
    """
    rows = []
    for metal in heavy_metals or []:
        metal_type = str(metal.get('metal_type') or '').strip()
        if not metal_type:
            raise ValueError("Every heavy metal entry needs a 'metal_type'.")
        concentration = parse_concentration(metal.get('concentration_mg_l'), f"{metal_type} concentration")
        if concentration is None:
            continue
        analysis_date = metal.get('analysis_date')
        rows.append((
            metal_type,
            concentration,
            parse_optional_float(metal.get('detection_limit'), f"{metal_type} detection limit"),
            metal.get('analysis_method') or DEFAULT_ANALYSIS_METHOD,
            parse_iso_date(analysis_date, f"{metal_type} analysis date") if analysis_date else default_date,
        ))
    return rows

def add_water_sample(project_id, sample_data, heavy_metals, created_by=None):
    """
    Saves a water sample and its heavy metal readings in one transaction.

    Args:
        project_id (int): The project the sample belongs to.
        sample_data (dict): Form fields; 'sample_name' and 'collection_date' are required.
        heavy_metals (list): Dicts with metal_type, concentration_mg_l, detection_limit,
            analysis_method. Entries with a zero or empty concentration are skipped.
        created_by (int, optional): The user entering the data.

    Returns:
        tuple: (sample_id, number of metal readings stored)
    """
    require_fields(sample_data, 'sample_name', 'collection_date')
    values = {field: parse_optional_float(sample_data.get(field), field) for field in NUMERIC_SAMPLE_FIELDS}
    sample_name = str(sample_data['sample_name']).strip()
    collection_date = parse_iso_date(sample_data['collection_date'], 'collection_date')
    metal_rows = _prepare_metal_rows(heavy_metals, collection_date)
    created_at = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    with DB_LOCK:
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if not cursor.execute("SELECT 1 FROM projects WHERE id = ?", (project_id,)).fetchone():
                raise ValueError(f"Project {project_id} does not exist.")

            cursor.execute('''
                INSERT INTO water_samples (
                    project_id, sample_name, collection_date, collection_time,
                    latitude, longitude, depth_meters, temperature_celsius,
                    ph_level, dissolved_oxygen, turbidity, conductivity,
                    created_by, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ''', (
                project_id,
                sample_name,
                collection_date,
                sample_data.get('collection_time') or None,
                values['latitude'],
                values['longitude'],
                values['depth_meters'],
                values['temperature_celsius'],
                values['ph_level'],
                values['dissolved_oxygen'],
                values['turbidity'],
                values['conductivity'],
                created_by,
                created_at
            ))
            sample_id = cursor.lastrowid

            if metal_rows:
                try:
                    cursor.executemany('''
                        INSERT INTO heavy_metals (
                            sample_id, metal_type, concentration_mg_l, detection_limit, analysis_method, analysis_date
                        ) VALUES (?, ?, ?, ?, ?, ?)
                    ''', [(sample_id,) + row for row in metal_rows])
                except sqlite3.IntegrityError:
                    raise ValueError("Each metal can only be entered once per sample.")
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    logger.info("Sample %s (%s) saved with %d metal reading(s).",
                sample_id, sample_name, len(metal_rows))
    return sample_id, len(metal_rows)

def get_samples(project_id=None):
    """Fetches samples with their project name and location, newest first."""
    query = '''
        SELECT s.*, p.name as project_name, p.location as project_location
        FROM water_samples s
        JOIN projects p ON s.project_id = p.id
    '''
    params = []
    if project_id is not None:
        query += " WHERE s.project_id = ?"
        params.append(project_id)
    query += " ORDER BY s.created_at DESC, s.id DESC"

    with DB_LOCK:
        conn = get_connection()
        rows = conn.execute(query, params).fetchall()
        conn.close()
    return [dict(row) for row in rows]

def get_sample_by_id(sample_id):
    """Fetches a single sample with its project name and location."""
    with DB_LOCK:
        conn = get_connection()
        row = conn.execute('''
            SELECT s.*, p.name as project_name, p.location as project_location
            FROM water_samples s
            JOIN projects p ON s.project_id = p.id
            WHERE s.id = ?
        ''', (sample_id,)).fetchone()
        conn.close()
    return dict(row) if row else None

def get_heavy_metals_for_sample(sample_id):
    """Fetches every heavy metal reading recorded for a sample."""
    with DB_LOCK:
        conn = get_connection()
        rows = conn.execute(
            "SELECT * FROM heavy_metals WHERE sample_id = ? ORDER BY id", (sample_id,)
        ).fetchall()
        conn.close()
    return [dict(row) for row in rows]

def delete_sample(sample_id):
    """Deletes a sample together with its readings, calculations and alerts."""
    with DB_LOCK:
        conn = get_connection()
        cursor = conn.cursor()
        cursor.execute("DELETE FROM water_samples WHERE id = ?", (sample_id,))
        conn.commit()
        deleted = cursor.rowcount > 0
        conn.close()
    return deleted
