# alerter.py
"""
Raises contamination alerts for high HMPI results and pushes them to
connected dashboards over Socket.IO.
"""
import logging

from database import add_alert
from extensions import BROADCAST_ROOM, socketio
from hmpi_calculator import alert_severity_for

logger = logging.getLogger(__name__)

ALERT_TYPE_CONTAMINATION = 'contamination'


def build_alert_message(hmpi_value, sample_name):
    """The text stored with a contamination alert."""
    return f"High HMPI value detected: {hmpi_value:.2f} in sample {sample_name}"


def _broadcast(event, payload):
    """Emits a Socket.IO event. A failed emit is logged, never raised."""
    try:
        socketio.emit(event, payload, to=BROADCAST_ROOM)
        logger.debug("Emitted '%s' event.", event)
    except Exception:
        logger.exception("Could not emit '%s' event.", event)


def raise_contamination_alert(sample, hmpi_value):
    """
    Stores an alert for a sample when its HMPI is above the alert threshold
    and notifies connected clients.

    Args:
        sample (dict): The sample row (needs 'id', 'project_id', 'sample_name').
        hmpi_value (float): The freshly calculated index.

    Returns:
        int or None: The new alert ID, or None when no alert was needed.
    """
    severity = alert_severity_for(hmpi_value)
    if severity is None:
        return None

    message = build_alert_message(hmpi_value, sample.get('sample_name'))
    alert_id = add_alert(
        project_id=sample.get('project_id'),
        sample_id=sample.get('id'),
        alert_type=ALERT_TYPE_CONTAMINATION,
        severity=severity,
        message=message,
    )
    logger.warning("ALERT %s (%s): %s", alert_id, severity, message)

    _broadcast('new_alert', {
        'id': alert_id,
        'project_id': sample.get('project_id'),
        'sample_id': sample.get('id'),
        'severity': severity,
        'alert_type': ALERT_TYPE_CONTAMINATION,
        'message': message,
    })
    return alert_id


def announce_alert_resolved(alert_id):
    """Tells connected clients that an alert was resolved."""
    _broadcast('alert_resolved', {'id': alert_id})
