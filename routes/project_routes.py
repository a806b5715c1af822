# routes/project_routes.py
"""
Handles all API endpoints for monitoring projects.
"""
from flask import Blueprint, jsonify, request, abort, session
from database import (
    ALL_ROLES, SCIENTIST,
    add_audit_log, create_project, delete_project, get_all_projects, get_project_by_id,
    set_project_status, update_project,
)
from auth.decorators import role_required

project_bp = Blueprint('project_bp', __name__)

@project_bp.route('/projects', methods=['GET'])
@role_required(*ALL_ROLES)
def api_get_projects():
    """Fetches every project, newest first, with its sample count."""
    return jsonify(get_all_projects())

@project_bp.route('/projects/<int:project_id>', methods=['GET'])
@role_required(*ALL_ROLES)
def api_get_project(project_id):
    project = get_project_by_id(project_id)
    if project:
        return jsonify(project)
    abort(404, "Project not found.")

@project_bp.route('/projects', methods=['POST'])
@role_required(SCIENTIST)
def api_create_project():
    """Creates a new project."""
    data = request.get_json(silent=True) or {}
    try:
        new_id = create_project(data, created_by=session.get('user_id'))
    except ValueError as e:
        add_audit_log(
            user_id=session.get('user_id'), component='Projects', action='Project Created',
            target=f"Name: {data.get('name')}", status='Failure', ip_address=request.remote_addr,
            details={'error': str(e)}
        )
        return jsonify({"status": "error", "message": str(e)}), 400

    add_audit_log(
        user_id=session.get('user_id'), component='Projects', action='Project Created',
        target=f"Name: {data.get('name')}", status='Success', ip_address=request.remote_addr
    )
    return jsonify({"status": "success", "message": "Project created successfully.", "id": new_id}), 201

@project_bp.route('/projects/<int:project_id>', methods=['PUT'])
@role_required(SCIENTIST)
def api_update_project(project_id):
    """Updates a project's name, description, location and coordinates."""
    data = request.get_json(silent=True) or {}
    try:
        updated = update_project(project_id, data)
    except ValueError as e:
        add_audit_log(
            user_id=session.get('user_id'), component='Projects', action='Project Updated',
            target=f"Project ID: {project_id}", status='Failure', ip_address=request.remote_addr,
            details={'error': str(e)}
        )
        return jsonify({"status": "error", "message": str(e)}), 400
    if not updated:
        abort(404, "Project not found.")

    add_audit_log(
        user_id=session.get('user_id'), component='Projects', action='Project Updated',
        target=f"Project ID: {project_id}", status='Success', ip_address=request.remote_addr
    )
    return jsonify({"status": "success", "message": "Project updated successfully."})

@project_bp.route('/projects/<int:project_id>/status', methods=['POST'])
@role_required(SCIENTIST)
def api_set_project_status(project_id):
    """Changes a project's status (active, completed, on_hold)."""
    new_status = (request.get_json(silent=True) or {}).get('status')
    try:
        updated = set_project_status(project_id, new_status)
    except ValueError as e:
        return jsonify({"status": "error", "message": str(e)}), 400
    if not updated:
        abort(404, "Project not found.")

    add_audit_log(
        user_id=session.get('user_id'), component='Projects', action='Project Status Changed',
        target=f"Project ID: {project_id}", status='Success', ip_address=request.remote_addr,
        details={'new_status': new_status}
    )
    return jsonify({"status": "success", "message": "Project status updated."})

@project_bp.route('/projects/<int:project_id>', methods=['DELETE'])
@role_required(SCIENTIST)
def api_delete_project(project_id):
    """Deletes a project together with its samples, calculations and alerts."""
    if not delete_project(project_id):
        abort(404, "Project not found.")
    add_audit_log(
        user_id=session.get('user_id'), component='Projects', action='Project Deleted',
        target=f"Project ID: {project_id}", status='Success', ip_address=request.remote_addr
    )
    return jsonify({"status": "success", "message": "Project deleted successfully."})
