# database/data_manager.py
"""
Read-only queries that feed the analytics, report and map views.
Results are returned as pandas DataFrames for aggregation.
"""
import logging
import pandas as pd
from .config import DB_LOCK, get_connection

logger = logging.getLogger(__name__)

SAMPLE_OVERVIEW_QUERY = '''
    SELECT s.id as sample_id, s.sample_name, s.project_id,
           p.name as project_name, p.location, p.status as project_status,
           s.collection_date, s.latitude, s.longitude,
           s.ph_level, s.turbidity, s.dissolved_oxygen, s.temperature_celsius, s.conductivity,
           c.hmpi_value, c.contamination_level, c.calculated_at
    FROM water_samples s
    JOIN projects p ON s.project_id = p.id
    LEFT JOIN hmpi_calculations c ON c.id = (
        SELECT c2.id FROM hmpi_calculations c2
        WHERE c2.sample_id = s.id
        ORDER BY c2.calculated_at DESC, c2.id DESC
        LIMIT 1
    )
    WHERE 1=1
'''

def get_sample_overview(project_id=None, start_date=None, end_date=None):
    """
    One row per sample with its project details and its latest HMPI
    calculation (NaN when the sample has not been calculated yet).

    Args:
        project_id (int, optional): Restrict to a single project.
        start_date (str, optional): 'YYYY-MM-DD', inclusive, on collection_date.
        end_date (str, optional): 'YYYY-MM-DD', inclusive, on collection_date.
    """
    query = SAMPLE_OVERVIEW_QUERY
    params = []
    if project_id is not None:
        query += " AND s.project_id = ?"
        params.append(project_id)
    if start_date:
        query += " AND s.collection_date >= ?"
        params.append(str(start_date))
    if end_date:
        query += " AND s.collection_date <= ?"
        params.append(str(end_date))
    query += " ORDER BY s.collection_date ASC, s.id ASC"

    with DB_LOCK:
        conn = get_connection()
        try:
            df = pd.read_sql_query(query, conn, params=params)
        finally:
            conn.close()

    if df.empty:
        logger.debug("No samples found for project=%s between %s and %s.", project_id, start_date, end_date)
        return df

    df['collection_date'] = pd.to_datetime(df['collection_date'], errors='coerce')
    df['calculated_at'] = pd.to_datetime(df['calculated_at'], errors='coerce')
    return df

DATE_FORMATS = {
    'collection_date': '%Y-%m-%d',
    'calculated_at': '%Y-%m-%d %H:%M:%S',
}

def frame_to_records(df):
    """
    Converts a DataFrame to JSON-ready dicts: date columns become strings
    and NaN/NaT become None.
    """
    if df.empty:
        return []
    out = df.copy()
    for column, fmt in DATE_FORMATS.items():
        if column in out.columns and pd.api.types.is_datetime64_any_dtype(out[column]):
            out[column] = out[column].dt.strftime(fmt)
    out = out.astype(object)
    return out.where(pd.notna(out), None).to_dict('records')
