# routes/report_routes.py
"""
Project reports for scientists and compliance reports for policy makers,
both viewable as JSON and downloadable as a JSON attachment.
"""
import datetime
import json
import logging
from flask import Blueprint, Response, jsonify, request, session
from database import (
    POLICY_MAKER, SCIENTIST,
    add_audit_log, get_all_projects, get_sample_overview,
)
from auth.decorators import role_required
from analytics import build_trend_series, parse_project_filter, parse_timeframe, timeframe_start
from report_builder import (
    build_compliance_report,
    build_detailed_report,
    build_project_reports,
    filter_by_region,
    overall_compliance,
    report_filename,
    summarize_compliance,
)

logger = logging.getLogger(__name__)

report_bp = Blueprint('report_bp', __name__)

def _json_attachment(document, filename):
    """Wraps a report document as a downloadable JSON file."""
    return Response(
        json.dumps(document, indent=2, default=str),
        mimetype='application/json',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'}
    )

def _project_report_inputs():
    """Reads ?project= and ?days= and loads the matching samples."""
    project_id = parse_project_filter(request.args.get('project'))
    days = parse_timeframe(request.args.get('days'))
    df = get_sample_overview(project_id=project_id, start_date=timeframe_start(days))
    return project_id, days, df

def _compliance_rows(region):
    rows = summarize_compliance(get_sample_overview(), projects=get_all_projects())
    return filter_by_region(rows, region)

# --- Scientist Reports ---

@report_bp.route('/reports/summary', methods=['GET'])
@role_required(SCIENTIST)
def api_report_summary():
    """Per-project report figures for the selected project and timeframe."""
    try:
        project_id, days, df = _project_report_inputs()
    except ValueError as e:
        return jsonify({"status": "error", "message": str(e)}), 400
    return jsonify({
        "timeframe_days": days,
        "project_filter": project_id if project_id is not None else 'all',
        "reports": build_project_reports(df),
    })

@report_bp.route('/reports/download', methods=['GET'])
@role_required(SCIENTIST)
def api_report_download():
    """The detailed water quality report as a JSON attachment."""
    try:
        project_id, days, df = _project_report_inputs()
    except ValueError as e:
        return jsonify({"status": "error", "message": str(e)}), 400

    generated_at = datetime.datetime.now()
    project_filter = project_id if project_id is not None else 'all'
    document = build_detailed_report(
        build_project_reports(df), build_trend_series(df), days, project_filter, generated_at
    )
    filename = report_filename('water-quality', generated_at)
    add_audit_log(
        user_id=session.get('user_id'), component='Reports', action='Report Downloaded',
        target=filename, status='Success', ip_address=request.remote_addr,
        details={'project': project_filter, 'days': days}
    )
    logger.info("Water quality report generated: %s", filename)
    return _json_attachment(document, filename)

# --- Policy Maker Compliance ---

@report_bp.route('/compliance', methods=['GET'])
@role_required(POLICY_MAKER)
def api_compliance():
    """Compliance per project, filtered by ?region= (default all)."""
    region = request.args.get('region', 'all')
    rows = _compliance_rows(region)
    return jsonify({
        "region": region,
        "overview": overall_compliance(rows),
        "projects": rows,
    })

@report_bp.route('/compliance/download', methods=['GET'])
@role_required(POLICY_MAKER)
def api_compliance_download():
    """The compliance report for ?region= as a JSON attachment."""
    region = request.args.get('region', 'all')
    generated_at = datetime.datetime.now()
    document = build_compliance_report(_compliance_rows(region), region, generated_at)
    filename = report_filename('compliance', generated_at, region=region)
    add_audit_log(
        user_id=session.get('user_id'), component='Compliance', action='Report Downloaded',
        target=filename, status='Success', ip_address=request.remote_addr,
        details={'region': region}
    )
    logger.info("Compliance report generated: %s", filename)
    return _json_attachment(document, filename)
