# routes/user_routes.py
"""
Handles API endpoints for the current user's account, system settings and the audit log.
"""
from flask import Blueprint, jsonify, request, abort, session
from database import (
    ALL_ROLES, POLICY_MAKER,
    add_audit_log, change_user_password, get_all_settings, get_audit_logs, get_user_by_id,
    set_user_status, update_setting,
)
from database.setup import DEFAULT_SETTINGS
from auth.decorators import role_required

user_bp = Blueprint('user_bp', __name__)

EDITABLE_SETTINGS = {key for key, _ in DEFAULT_SETTINGS}

@user_bp.route('/users/me', methods=['GET'])
@role_required(*ALL_ROLES)
def api_get_current_user():
    """Details of the logged-in user."""
    user = get_user_by_id(session['user_id'])
    if user:
        return jsonify(user)
    abort(404, "User not found")

@user_bp.route('/users/change_password', methods=['POST'])
@role_required(*ALL_ROLES)
def api_change_password():
    """Changes the password for the currently logged-in user."""
    user_id = session.get('user_id')
    data = request.get_json(silent=True) or {}
    current_password = data.get('current_password')
    new_password = data.get('new_password')

    if not all([current_password, new_password]):
        return jsonify({"status": "error", "message": "Missing required fields."}), 400

    success, message = change_user_password(user_id, current_password, new_password)

    # Define the target for the audit log
    log_target = f"User ID: {user_id}"

    if success:
        add_audit_log(user_id=user_id, component='Security', action='Password Changed', target=log_target, status='Success', ip_address=request.remote_addr)
        return jsonify({"status": "success", "message": message})
    else:
        add_audit_log(user_id=user_id, component='Security', action='Password Changed', target=log_target, status='Failure', ip_address=request.remote_addr, details={'reason': message})
        return jsonify({"status": "error", "message": message}), 400

@user_bp.route('/users/<int:user_id>/status', methods=['POST'])
@role_required(POLICY_MAKER)
def api_set_user_status(user_id):
    """Changes a user's status between 'Active' and 'Inactive'."""
    new_status = (request.get_json(silent=True) or {}).get('status')
    if user_id == session.get('user_id'):
        return jsonify({"status": "error", "message": "You cannot change your own status."}), 400
    if not get_user_by_id(user_id):
        abort(404, "User not found")
    try:
        set_user_status(user_id, new_status)
    except ValueError as e:
        return jsonify({"status": "error", "message": str(e)}), 400

    add_audit_log(user_id=session.get('user_id'), component='User Management', action='User Status Changed', target=f"User ID: {user_id}", status='Success', ip_address=request.remote_addr, details={'new_status': new_status})
    return jsonify({"status": "success", "message": "User status updated."})

# --- System Settings ---

@user_bp.route('/settings', methods=['GET'])
@role_required(POLICY_MAKER)
def api_get_settings():
    return jsonify(get_all_settings())

@user_bp.route('/settings', methods=['POST'])
@role_required(POLICY_MAKER)
def api_update_settings():
    """Updates one or more settings. Values must be positive whole numbers."""
    data = request.get_json(silent=True) or {}
    unknown = [key for key in data if key not in EDITABLE_SETTINGS]
    if not data or unknown:
        return jsonify({"status": "error", "message": f"Unknown or missing settings: {unknown}"}), 400
    for key, value in data.items():
        if not str(value).isdigit() or int(value) <= 0:
            return jsonify({"status": "error", "message": f"'{key}' must be a positive whole number."}), 400

    for key, value in data.items():
        update_setting(key, int(value))
    add_audit_log(
        user_id=session.get('user_id'), component='System Settings', action='Settings Updated',
        target=", ".join(sorted(data)), status='Success', ip_address=request.remote_addr,
        details={key: str(value) for key, value in data.items()}
    )
    return jsonify({"status": "success", "message": "Settings updated. Session timeout changes apply after restart."})

# --- Audit Log ---

@user_bp.route('/audit', methods=['GET'])
@role_required(POLICY_MAKER)
def api_get_audit_logs():
    """Audit trail, filtered by ?user=, ?action= and ?date_range=YYYY-MM-DD[ to YYYY-MM-DD]."""
    logs = get_audit_logs(
        user_filter=request.args.get('user'),
        action_filter=request.args.get('action'),
        date_range=request.args.get('date_range'),
    )
    return jsonify(logs)
