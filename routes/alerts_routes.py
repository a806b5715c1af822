# routes/alerts_routes.py
"""
Handles all API endpoints for contamination alerts.
"""
from flask import Blueprint, jsonify, request, abort, session
from database import (
    ALL_ROLES, POLICY_MAKER, SCIENTIST,
    add_audit_log, get_alert_by_id, get_alert_counts, get_alerts, resolve_alert,
)
from auth.decorators import role_required
from alerter import announce_alert_resolved

# A Blueprint is created to organize all alert-related routes.
alerts_bp = Blueprint('alerts_bp', __name__)

@alerts_bp.route('/alerts', methods=['GET'])
@role_required(*ALL_ROLES)
def api_get_alerts():
    """
    Lists alerts, newest first, with open counts per severity.
    ?status=open hides resolved alerts; ?severity=critical|high filters by severity.
    """
    include_resolved = request.args.get('status', 'all') != 'open'
    alerts = get_alerts(include_resolved=include_resolved, severity=request.args.get('severity') or None)
    return jsonify({"alerts": alerts, "counts": get_alert_counts()})

@alerts_bp.route('/alerts/<int:alert_id>', methods=['GET'])
@role_required(*ALL_ROLES)
def api_get_alert(alert_id):
    alert = get_alert_by_id(alert_id)
    if alert:
        return jsonify(alert)
    abort(404, "Alert not found.")

@alerts_bp.route('/alerts/<int:alert_id>/resolve', methods=['POST'])
@role_required(SCIENTIST, POLICY_MAKER)
def api_resolve_alert(alert_id):
    """Marks an alert as resolved and tells connected dashboards."""
    alert = get_alert_by_id(alert_id)
    if not alert:
        abort(404, "Alert not found.")
    if not resolve_alert(alert_id):
        add_audit_log(
            user_id=session.get('user_id'), component='Alerts', action='Alert Resolved',
            target=f"Alert ID: {alert_id}", status='Failure', ip_address=request.remote_addr,
            details={'reason': 'Already resolved'}
        )
        return jsonify({"status": "error", "message": "Alert is already resolved."}), 409

    add_audit_log(
        user_id=session.get('user_id'), component='Alerts', action='Alert Resolved',
        target=f"Alert ID: {alert_id}", status='Success', ip_address=request.remote_addr
    )
    announce_alert_resolved(alert_id)
    return jsonify({"status": "success", "message": "Alert resolved."})
