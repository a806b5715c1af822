# analytics.py
"""
Aggregations behind the trend, seasonal, distribution and regional views.

Every function takes the per-sample DataFrame produced by
database.get_sample_overview (or anything with the same columns) and
returns plain, JSON-ready Python structures.
"""
import datetime
import math

import pandas as pd

import config
from standards_config import COMPLIANCE_LIMIT, HMPI_DISTRIBUTION_BANDS, REGIONAL_HIGH_RISK_MIN

# Chart parameter key -> sample column.
PARAMETER_COLUMNS = {
    'hmpi': 'hmpi_value',
    'ph': 'ph_level',
    'turbidity': 'turbidity',
    'dissolved_oxygen': 'dissolved_oxygen',
    'temperature': 'temperature_celsius',
    'conductivity': 'conductivity',
}

PARAMETER_LABELS = {
    'hmpi': "HMPI Value",
    'ph': "pH Level",
    'turbidity': "Turbidity (NTU)",
    'dissolved_oxygen': "Dissolved Oxygen (mg/L)",
    'temperature': "Temperature (°C)",
    'conductivity': "Conductivity (μS/cm)",
}

SEASON_ORDER = ['Winter', 'Spring', 'Summer', 'Autumn']

# Rough planning estimates used on the policy analytics page.
POPULATION_PER_PROJECT = 50000
ECONOMIC_IMPACT_PER_HIGH_RISK_SITE = 100000


def _prepared(df):
    """Copy of the frame with a parsed collection_date column."""
    out = df.copy()
    if 'collection_date' in out.columns and not pd.api.types.is_datetime64_any_dtype(out['collection_date']):
        out['collection_date'] = pd.to_datetime(out['collection_date'], errors='coerce')
    return out


def parse_timeframe(value):
    """
    Validates a ?days= query value. Blank means the configured default;
    anything else must be a positive whole number of days.
    """
    if value is None or str(value).strip() == '':
        return config.DEFAULT_TIMEFRAME_DAYS
    try:
        days = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid timeframe '{value}'; expected a number of days.")
    if days <= 0:
        raise ValueError("The timeframe must be at least one day.")
    return days


def parse_project_filter(value):
    """A ?project= query value: blank or 'all' means every project."""
    if value is None or str(value).strip() in ('', 'all'):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid project '{value}'.")


def timeframe_start(timeframe_days, today=None):
    """First collection date (ISO string) inside a timeframe ending today."""
    if today is None:
        today = datetime.date.today()
    return (today - datetime.timedelta(days=timeframe_days)).isoformat()


def calculated_samples(df):
    """Only the samples that have an HMPI calculation."""
    if df.empty or 'hmpi_value' not in df.columns:
        return df.iloc[0:0]
    return _prepared(df)[df['hmpi_value'].notna()]


def parameter_label(parameter):
    return PARAMETER_LABELS.get(parameter, parameter)


def season_for_month(month):
    """Season of a calendar month (1-12). December through March count as winter."""
    if month <= 3 or month == 12:
        return 'Winter'
    if month <= 6:
        return 'Spring'
    if month <= 9:
        return 'Summer'
    return 'Autumn'


def region_of(location):
    """The region is the first comma-separated part of a project location."""
    region = (location or '').split(',')[0].strip()
    return region or 'Unknown'


def build_trend_series(df):
    """
    Time-ordered points for the trend chart, one per calculated sample.
    Missing physical parameters are reported as 0.
    """
    calc = calculated_samples(df)
    if calc.empty:
        return []
    calc = calc.sort_values(['collection_date', 'sample_id'], kind='stable')

    series = pd.DataFrame({
        'date': calc['collection_date'].dt.strftime('%Y-%m-%d'),
        'hmpi': calc['hmpi_value'].astype(float),
    })
    for key, column in PARAMETER_COLUMNS.items():
        if key == 'hmpi':
            continue
        series[key] = calc[column].astype(float).fillna(0.0)
    series['project'] = calc['project_name']
    series['location'] = calc['location']
    return series.to_dict('records')


def seasonal_averages(df):
    """Average HMPI and sample count per season, in calendar order."""
    calc = calculated_samples(df)
    calc = calc[calc['collection_date'].notna()] if not calc.empty else calc
    if calc.empty:
        return []

    seasons = calc['collection_date'].dt.month.map(season_for_month)
    grouped = calc.groupby(seasons)['hmpi_value'].agg(['mean', 'count'])

    result = []
    for season in SEASON_ORDER:
        if season in grouped.index:
            result.append({
                'season': season,
                'avg_hmpi': float(grouped.loc[season, 'mean']),
                'samples': int(grouped.loc[season, 'count']),
            })
    return result


def hmpi_distribution(values):
    """Counts HMPI values per distribution band (upper bounds inclusive)."""
    counts = [0] * len(HMPI_DISTRIBUTION_BANDS)
    for value in values:
        if value is None or pd.isna(value):
            continue
        for index, (_, upper) in enumerate(HMPI_DISTRIBUTION_BANDS):
            if upper is None or value <= upper:
                counts[index] += 1
                break
    return [
        {'name': name, 'value': count}
        for (name, _), count in zip(HMPI_DISTRIBUTION_BANDS, counts)
    ]


def parameter_correlations(df):
    """
    Pearson correlation between HMPI and each physical parameter.
    None when there is not enough data to compute one.
    """
    calc = calculated_samples(df)
    correlations = {}
    for key, column in PARAMETER_COLUMNS.items():
        if key == 'hmpi':
            continue
        if calc.empty:
            correlations[key] = None
            continue
        value = calc['hmpi_value'].astype(float).corr(calc[column].astype(float))
        correlations[key] = None if pd.isna(value) else float(value)
    return correlations


def _regional_risk(compliance_rate):
    if compliance_rate >= 80:
        return 'Low'
    if compliance_rate >= 60:
        return 'Medium'
    return 'High'


def _regional_trend(compliance_rate):
    if compliance_rate >= 75:
        return 'improving'
    if compliance_rate >= 50:
        return 'stable'
    return 'declining'


def regional_analytics(df):
    """
    Compliance and risk figures per region, for the policy analytics page.
    Only projects that have samples in the frame are counted.
    """
    if df.empty:
        return []

    frame = _prepared(df)
    frame['region'] = frame['location'].map(region_of)

    result = []
    for region, group in frame.groupby('region', sort=True):
        analyzed = group[group['hmpi_value'].notna()]
        total_samples = len(analyzed)
        compliant = int((analyzed['hmpi_value'] <= COMPLIANCE_LIMIT).sum())
        high_risk = int((analyzed['hmpi_value'] > REGIONAL_HIGH_RISK_MIN).sum())
        total_projects = int(group['project_id'].nunique())
        compliance_rate = (compliant / total_samples) * 100 if total_samples else 0.0

        result.append({
            'region': region,
            'total_projects': total_projects,
            'total_samples': total_samples,
            'compliant_samples': compliant,
            'high_risk_samples': high_risk,
            'compliance_rate': compliance_rate,
            'risk_level': _regional_risk(compliance_rate),
            'population_affected': total_projects * POPULATION_PER_PROJECT,
            'economic_impact': high_risk * ECONOMIC_IMPACT_PER_HIGH_RISK_SITE,
            'trend': _regional_trend(compliance_rate),
        })
    return result


def daily_trend_points(df, timeframe_days, today=None, steps=10):
    """
    Average HMPI on evenly spaced days across the timeframe, oldest first.
    Days without a calculated sample are left out.
    """
    if today is None:
        today = datetime.date.today()
    calc = calculated_samples(df)
    if calc.empty:
        return []

    sample_days = calc['collection_date'].dt.date
    step = max(1, math.ceil(timeframe_days / steps))

    points = []
    offset = timeframe_days
    while offset >= 0:
        day = today - datetime.timedelta(days=offset)
        values = calc.loc[sample_days == day, 'hmpi_value']
        if not values.empty:
            points.append({
                'date': day.isoformat(),
                'avg_hmpi': float(values.mean()),
                'samples': int(len(values)),
            })
        offset -= step
    return points


def parameter_statistics(series, parameter):
    """Average, minimum, maximum and latest value of one parameter over a trend series."""
    values = [point[parameter] for point in series]
    if not values:
        return {'average': None, 'minimum': None, 'maximum': None, 'latest': None, 'count': 0}
    return {
        'average': sum(values) / len(values),
        'minimum': min(values),
        'maximum': max(values),
        'latest': values[-1],
        'count': len(values),
    }
