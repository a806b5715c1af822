# database/calculation_manager.py
"""
Manages the HMPI calculation history. Calculations are never updated:
each run appends a new row for the sample.
"""
import datetime
import json
from .config import DB_LOCK, get_connection

def _decode(row):
    calculation = dict(row)
    calculation['metal_contributions'] = json.loads(calculation['metal_contributions'] or '{}')
    calculation['recommendations'] = json.loads(calculation['recommendations'] or '[]')
    return calculation

def save_calculation(sample_id, result, calculated_by=None):
    """
    Stores a calculator result for a sample and returns the new row ID.
    'result' is the dictionary returned by hmpi_calculator.calculate_hmpi.
    """
    calculated_at = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    with DB_LOCK:
        conn = get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            INSERT INTO hmpi_calculations (
                sample_id, hmpi_value, contamination_level, metal_contributions,
                recommendations, calculated_by, calculated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
        ''', (
            sample_id,
            result['hmpi_value'],
            result['contamination_level'],
            json.dumps(result['metal_contributions']),
            json.dumps(result['recommendations']),
            calculated_by,
            calculated_at
        ))
        conn.commit()
        new_id = cursor.lastrowid
        conn.close()
    return new_id

def get_calculation_history(sample_id):
    """All calculations for a sample, newest first."""
    with DB_LOCK:
        conn = get_connection()
        rows = conn.execute('''
            SELECT * FROM hmpi_calculations
            WHERE sample_id = ?
            ORDER BY calculated_at DESC, id DESC
        ''', (sample_id,)).fetchall()
        conn.close()
    return [_decode(row) for row in rows]

def get_latest_calculation(sample_id):
    """The most recent calculation for a sample, or None."""
    history = get_calculation_history(sample_id)
    return history[0] if history else None

def get_all_calculations():
    """Every calculation in the system, newest first."""
    with DB_LOCK:
        conn = get_connection()
        rows = conn.execute(
            "SELECT * FROM hmpi_calculations ORDER BY calculated_at DESC, id DESC"
        ).fetchall()
        conn.close()
    return [_decode(row) for row in rows]
