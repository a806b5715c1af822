# routes/analytics_routes.py
"""
API endpoints behind the trend, regional and visualization pages.
"""
from flask import Blueprint, jsonify, request
from database import ALL_ROLES, POLICY_MAKER, frame_to_records, get_sample_overview
from auth.decorators import role_required
from analytics import (
    PARAMETER_COLUMNS,
    build_trend_series,
    daily_trend_points,
    hmpi_distribution,
    parameter_correlations,
    parameter_label,
    parameter_statistics,
    parse_project_filter,
    parse_timeframe,
    regional_analytics,
    seasonal_averages,
    timeframe_start,
)
from map_markers import build_markers, map_view

analytics_bp = Blueprint('analytics_bp', __name__)

@analytics_bp.route('/analytics/trends', methods=['GET'])
@role_required(*ALL_ROLES)
def get_trends():
    """
    Trend data for one parameter over a timeframe.
    Query: ?project=<id|all>&days=<n>&parameter=<hmpi|ph|turbidity|...>
    """
    parameter = request.args.get('parameter', 'hmpi')
    if parameter not in PARAMETER_COLUMNS:
        return jsonify({"status": "error", "message": f"Unknown parameter '{parameter}'."}), 400
    try:
        project_id = parse_project_filter(request.args.get('project'))
        days = parse_timeframe(request.args.get('days'))
    except ValueError as e:
        return jsonify({"status": "error", "message": str(e)}), 400

    df = get_sample_overview(project_id=project_id, start_date=timeframe_start(days))
    series = build_trend_series(df)
    return jsonify({
        "parameter": parameter,
        "label": parameter_label(parameter),
        "timeframe_days": days,
        "series": series,
        "statistics": parameter_statistics(series, parameter),
        "daily": daily_trend_points(df, days),
        "seasonal": seasonal_averages(df),
        "distribution": hmpi_distribution(df['hmpi_value'].tolist() if not df.empty else []),
        "correlations": parameter_correlations(df),
    })

@analytics_bp.route('/analytics/regional', methods=['GET'])
@role_required(POLICY_MAKER)
def get_regional():
    """Compliance and risk per region over a timeframe (?days=<n>)."""
    try:
        days = parse_timeframe(request.args.get('days'))
    except ValueError as e:
        return jsonify({"status": "error", "message": str(e)}), 400

    df = get_sample_overview(start_date=timeframe_start(days))
    return jsonify({
        "timeframe_days": days,
        "regions": regional_analytics(df),
        "daily": daily_trend_points(df, days),
    })

@analytics_bp.route('/analytics/visualization', methods=['GET'])
@role_required(*ALL_ROLES)
def get_visualization():
    """Map markers, the initial map view and the HMPI distribution (?project=<id|all>)."""
    try:
        project_id = parse_project_filter(request.args.get('project'))
    except ValueError as e:
        return jsonify({"status": "error", "message": str(e)}), 400

    df = get_sample_overview(project_id=project_id)
    markers = build_markers(frame_to_records(df), project_id=project_id)
    return jsonify({
        "markers": markers,
        "view": map_view(markers),
        "distribution": hmpi_distribution(df['hmpi_value'].tolist() if not df.empty else []),
        "total_samples": int(len(df)),
    })
