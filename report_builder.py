# report_builder.py
"""
Builds the project reports (scientist) and compliance reports (policy maker),
including the JSON documents offered for download.
"""
import pandas as pd

from analytics import calculated_samples
from standards_config import (
    COMPLIANCE_LIMIT,
    COMPLIANT_RATE_MIN,
    CRITICAL_VIOLATION_MIN,
    HMPI_HIGH_MIN,
    WARNING_RATE_MIN,
)

# Parameter label -> sample column, in report order.
REPORTED_PARAMETERS = [
    ('pH', 'ph_level'),
    ('Turbidity', 'turbidity'),
    ('Dissolved Oxygen', 'dissolved_oxygen'),
    ('Temperature', 'temperature_celsius'),
    ('Conductivity', 'conductivity'),
]

TREND_WINDOW = 5


def _timestamp_or_none(value):
    if value is None or pd.isna(value):
        return None
    return pd.Timestamp(value).strftime('%Y-%m-%d %H:%M:%S')


def contamination_trend(hmpi_values):
    """
    Compares the mean of the last five values with the mean of the first five:
    more than 10% higher is 'increasing', more than 10% lower is 'decreasing'.
    """
    recent = hmpi_values[-TREND_WINDOW:]
    older = hmpi_values[:TREND_WINDOW]
    recent_avg = sum(recent) / len(recent) if recent else 0
    older_avg = sum(older) / len(older) if older else 0
    if recent_avg > older_avg * 1.1:
        return 'increasing'
    if recent_avg < older_avg * 0.9:
        return 'decreasing'
    return 'stable'


def summarize_project(project_name, location, samples):
    """Report figures for one project, from that project's rows of the sample overview."""
    calc = calculated_samples(samples)
    if not calc.empty:
        calc = calc.sort_values(['collection_date', 'sample_id'], kind='stable')
    hmpi_values = [float(v) for v in calc['hmpi_value']] if not calc.empty else []

    parameters = [
        label for label, column in REPORTED_PARAMETERS
        if column in samples.columns and samples[column].notna().any()
    ]

    return {
        'project_name': project_name,
        'location': location,
        'sample_count': len(hmpi_values),
        'avg_hmpi': sum(hmpi_values) / len(hmpi_values) if hmpi_values else 0.0,
        'max_hmpi': max(hmpi_values) if hmpi_values else 0.0,
        'min_hmpi': min(hmpi_values) if hmpi_values else 0.0,
        'contamination_trend': contamination_trend(hmpi_values),
        'last_updated': _timestamp_or_none(calc['calculated_at'].max()) if not calc.empty else None,
        'parameters_analyzed': parameters,
    }


def build_project_reports(df):
    """One report summary per project present in the sample overview."""
    if df.empty:
        return []
    reports = []
    for _, group in df.groupby('project_id', sort=True):
        first = group.iloc[0]
        report = summarize_project(first['project_name'], first['location'], group)
        report['project_id'] = int(first['project_id'])
        reports.append(report)
    return reports


def build_detailed_report(reports, trend_data, timeframe_days, project_filter, generated_at):
    """The downloadable water quality report."""
    return {
        'generated_at': generated_at.isoformat(),
        'timeframe': f"{timeframe_days} days",
        'project_filter': project_filter,
        'summary': {
            'total_projects': len(reports),
            'total_samples': sum(r['sample_count'] for r in reports),
            'average_hmpi': sum(r['avg_hmpi'] for r in reports) / len(reports) if reports else 0.0,
            'high_risk_projects': len([r for r in reports if r['avg_hmpi'] > HMPI_HIGH_MIN]),
        },
        'detailed_analysis': reports,
        'trend_data': trend_data,
    }


def compliance_status(compliance_rate):
    """Label shown next to a project's compliance rate."""
    if compliance_rate >= COMPLIANT_RATE_MIN:
        return 'Compliant'
    if compliance_rate >= WARNING_RATE_MIN:
        return 'Warning'
    return 'Non-Compliant'


def _compliance_row(project_id, project_name, location, samples):
    calc = calculated_samples(samples)
    values = calc['hmpi_value'] if not calc.empty else pd.Series(dtype=float)
    total = int(len(values))
    compliant = int((values <= COMPLIANCE_LIMIT).sum())
    rate = (compliant / total) * 100 if total else 0.0
    return {
        'project_id': project_id,
        'project_name': project_name,
        'location': location,
        'total_samples': total,
        'compliant_samples': compliant,
        'non_compliant_samples': int((values > COMPLIANCE_LIMIT).sum()),
        'compliance_rate': rate,
        'critical_violations': int((values > CRITICAL_VIOLATION_MIN).sum()),
        'last_assessment': _timestamp_or_none(calc['calculated_at'].max()) if not calc.empty else None,
        'status': compliance_status(rate),
    }


def summarize_compliance(df, projects=None):
    """
    Compliance figures per project. When the full project list is given,
    projects without samples are included with zero counts.
    """
    rows = []
    seen = set()
    if not df.empty:
        for project_id, group in df.groupby('project_id', sort=False):
            first = group.iloc[0]
            rows.append(_compliance_row(int(project_id), first['project_name'], first['location'], group))
            seen.add(int(project_id))
    for project in projects or []:
        if project['id'] not in seen:
            rows.append(_compliance_row(project['id'], project['name'], project['location'], pd.DataFrame()))

    if projects:
        order = {project['id']: index for index, project in enumerate(projects)}
        rows.sort(key=lambda row: order.get(row['project_id'], len(order)))
    return rows


def filter_by_region(rows, region):
    """Keeps rows whose location contains the region (case-insensitive). 'all' keeps everything."""
    if not region or region == 'all':
        return list(rows)
    needle = region.lower()
    return [row for row in rows if needle in (row.get('location') or '').lower()]


def overall_compliance(rows):
    """Totals across the given compliance rows."""
    total_samples = sum(r['total_samples'] for r in rows)
    compliant = sum(r['compliant_samples'] for r in rows)
    return {
        'total_projects': len(rows),
        'total_samples': total_samples,
        'compliant_samples': compliant,
        'non_compliant_samples': sum(r['non_compliant_samples'] for r in rows),
        'critical_violations': sum(r['critical_violations'] for r in rows),
        'overall_compliance_rate': (compliant / total_samples) * 100 if total_samples else 0.0,
    }


def build_compliance_report(rows, region, generated_at):
    """The downloadable compliance report."""
    totals = overall_compliance(rows)
    return {
        'generated_at': generated_at.isoformat(),
        'region': region,
        'overall_compliance_rate': totals['overall_compliance_rate'],
        'total_projects': totals['total_projects'],
        'total_samples': totals['total_samples'],
        'critical_violations': totals['critical_violations'],
        'projects': rows,
    }


def report_filename(kind, generated_at, region=None):
    """Download file name, e.g. 'water-quality-report-2024-05-01.json'."""
    day = generated_at.strftime('%Y-%m-%d')
    if kind == 'compliance':
        return f"compliance-report-{region or 'all'}-{day}.json"
    return f"water-quality-report-{day}.json"
