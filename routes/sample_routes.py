# routes/sample_routes.py
"""
Handles all API endpoints for water samples and their heavy metal readings.
"""
from flask import Blueprint, jsonify, request, abort, session
from database import (
    ALL_ROLES, SCIENTIST,
    add_audit_log, add_water_sample, delete_sample, get_heavy_metals_for_sample,
    get_latest_calculation, get_sample_by_id, get_samples,
)
from auth.decorators import role_required
from standards_config import DEFAULT_ANALYSIS_METHOD, DEFAULT_METAL_PANEL, METAL_STANDARDS

sample_bp = Blueprint('sample_bp', __name__)

@sample_bp.route('/samples/metal-panel', methods=['GET'])
@role_required(SCIENTIST)
def api_get_metal_panel():
    """The blank heavy metal rows offered on the data entry form."""
    panel = [
        {
            'metal_type': entry['metal_type'],
            'concentration_mg_l': '',
            'detection_limit': entry['detection_limit'],
            'analysis_method': DEFAULT_ANALYSIS_METHOD,
            'standard_mg_l': METAL_STANDARDS.get(entry['metal_type']),
        }
        for entry in DEFAULT_METAL_PANEL
    ]
    return jsonify(panel)

@sample_bp.route('/samples', methods=['GET'])
@role_required(*ALL_ROLES)
def api_get_samples():
    """Fetches samples, optionally for one project (?project=<id>)."""
    project_id = request.args.get('project', type=int)
    return jsonify(get_samples(project_id))

@sample_bp.route('/samples/<int:sample_id>', methods=['GET'])
@role_required(*ALL_ROLES)
def api_get_sample(sample_id):
    """A sample with its heavy metal readings and latest calculation."""
    sample = get_sample_by_id(sample_id)
    if not sample:
        abort(404, "Sample not found.")
    sample['heavy_metals'] = get_heavy_metals_for_sample(sample_id)
    sample['latest_calculation'] = get_latest_calculation(sample_id)
    return jsonify(sample)

@sample_bp.route('/samples/<int:sample_id>/metals', methods=['GET'])
@role_required(*ALL_ROLES)
def api_get_sample_metals(sample_id):
    if not get_sample_by_id(sample_id):
        abort(404, "Sample not found.")
    return jsonify(get_heavy_metals_for_sample(sample_id))

@sample_bp.route('/samples', methods=['POST'])
@role_required(SCIENTIST)
def api_add_sample():
    """
    Saves a sample and its heavy metal readings.
    Body: {"project_id": 1, "sample": {...}, "heavy_metals": [{...}, ...]}
    """
    data = request.get_json(silent=True) or {}
    sample_data = data.get('sample') or {}
    project_id = data.get('project_id')
    target = f"Sample: {sample_data.get('sample_name')} (Project ID: {project_id})"

    try:
        if project_id is None:
            raise ValueError("A project must be selected.")
        sample_id, metal_count = add_water_sample(
            project_id, sample_data, data.get('heavy_metals'), created_by=session.get('user_id')
        )
    except ValueError as e:
        add_audit_log(
            user_id=session.get('user_id'), component='Data Entry', action='Sample Added',
            target=target, status='Failure', ip_address=request.remote_addr,
            details={'error': str(e)}
        )
        return jsonify({"status": "error", "message": str(e)}), 400

    add_audit_log(
        user_id=session.get('user_id'), component='Data Entry', action='Sample Added',
        target=target, status='Success', ip_address=request.remote_addr,
        details={'sample_id': sample_id, 'metals': metal_count}
    )
    return jsonify({
        "status": "success",
        "message": "Sample saved successfully.",
        "id": sample_id,
        "metal_count": metal_count,
    }), 201

@sample_bp.route('/samples/<int:sample_id>', methods=['DELETE'])
@role_required(SCIENTIST)
def api_delete_sample(sample_id):
    if not delete_sample(sample_id):
        abort(404, "Sample not found.")
    add_audit_log(
        user_id=session.get('user_id'), component='Data Entry', action='Sample Deleted',
        target=f"Sample ID: {sample_id}", status='Success', ip_address=request.remote_addr
    )
    return jsonify({"status": "success", "message": "Sample deleted successfully."})
