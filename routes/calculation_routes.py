# routes/calculation_routes.py
"""
Handles all API endpoints for HMPI calculations.
"""
import logging
from flask import Blueprint, jsonify, request, abort, session
from database import (
    ALL_ROLES, SCIENTIST,
    add_audit_log, get_calculation_history, get_sample_by_id,
)
from database.validation import parse_concentration
from auth.decorators import role_required
from hmpi_calculator import calculate_hmpi, risk_label
from sample_assessment import assess_sample
from standards_config import (
    ALERT_THRESHOLD, CONTAMINATION_LEVELS, HMPI_HIGH_MIN, HMPI_MODERATE_MIN, HMPI_VERY_HIGH_MIN, METAL_STANDARDS,
)

logger = logging.getLogger(__name__)

calculation_bp = Blueprint('calculation_bp', __name__)

@calculation_bp.route('/calculations/standards', methods=['GET'])
@role_required(*ALL_ROLES)
def api_get_standards():
    """The permissible limits and level bands used by the calculator."""
    return jsonify({
        "metal_standards": METAL_STANDARDS,
        "contamination_levels": CONTAMINATION_LEVELS,
        "level_thresholds": {
            "moderate": HMPI_MODERATE_MIN,
            "high": HMPI_HIGH_MIN,
            "very_high": HMPI_VERY_HIGH_MIN,
        },
        "alert_threshold": ALERT_THRESHOLD,
    })

@calculation_bp.route('/calculations/preview', methods=['POST'])
@role_required(SCIENTIST)
def api_preview_calculation():
    """
    Calculates the HMPI of posted readings without saving anything.
    Body: {"readings": {"Lead": 0.02, "Mercury": 0.0005}}
    """
    submitted = (request.get_json(silent=True) or {}).get('readings') or {}
    if not isinstance(submitted, dict):
        return jsonify({"status": "error", "message": "'readings' must map metal names to concentrations."}), 400
    try:
        readings = {}
        for metal, value in submitted.items():
            concentration = parse_concentration(value, f"{metal} concentration")
            if concentration is not None:
                readings[metal] = concentration
    except ValueError as e:
        return jsonify({"status": "error", "message": str(e)}), 400

    result = calculate_hmpi(readings)
    result['risk_label'] = risk_label(result['hmpi_value'])
    return jsonify(result)

@calculation_bp.route('/calculations/<int:sample_id>', methods=['POST'])
@role_required(SCIENTIST)
def api_calculate_sample(sample_id):
    """Runs and records the HMPI calculation for a stored sample."""
    user_id = session.get('user_id')
    try:
        result = assess_sample(sample_id, user_id=user_id)
    except LookupError:
        abort(404, "Sample not found.")
    except ValueError as e:
        logger.warning("Calculation rejected for sample %s: %s", sample_id, e)
        add_audit_log(
            user_id=user_id, component='Calculations', action='HMPI Calculated',
            target=f"Sample ID: {sample_id}", status='Failure', ip_address=request.remote_addr,
            details={'error': str(e)}
        )
        return jsonify({"status": "error", "message": str(e)}), 400

    add_audit_log(
        user_id=user_id, component='Calculations', action='HMPI Calculated',
        target=f"Sample ID: {sample_id}", status='Success', ip_address=request.remote_addr,
        details={'hmpi_value': round(result['hmpi_value'], 3), 'alert_id': result['alert_id']}
    )
    result['risk_label'] = risk_label(result['hmpi_value'])
    return jsonify(result), 201

@calculation_bp.route('/calculations/<int:sample_id>/history', methods=['GET'])
@role_required(*ALL_ROLES)
def api_get_calculation_history(sample_id):
    """Every calculation recorded for a sample, newest first."""
    if not get_sample_by_id(sample_id):
        abort(404, "Sample not found.")
    return jsonify(get_calculation_history(sample_id))
