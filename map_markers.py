# map_markers.py
"""
Builds the marker data for the sample map. Rendering is left to the client;
this module decides which samples get a marker, its colour and its popup text.
"""
import config
from standards_config import HMPI_HIGH_MIN, HMPI_MODERATE_MIN, HMPI_VERY_HIGH_MIN

NO_DATA_COLOR = '#6b7280'

LEVEL_BADGE_COLORS = {
    'low': ('#dcfce7', '#166534'),
    'moderate': ('#fef3c7', '#92400e'),
    'high': ('#fed7aa', '#c2410c'),
    'very_high': ('#fecaca', '#dc2626'),
    'unknown': ('#f3f4f6', '#6b7280'),
}


def marker_color(hmpi_value):
    """Marker colour for a sample's latest HMPI (grey when not calculated)."""
    if hmpi_value is None:
        return NO_DATA_COLOR
    if hmpi_value > HMPI_VERY_HIGH_MIN:
        return '#dc2626'
    if hmpi_value > HMPI_HIGH_MIN:
        return '#ea580c'
    if hmpi_value > HMPI_MODERATE_MIN:
        return '#ca8a04'
    return '#16a34a'


def build_markers(samples, project_id=None):
    """
    One marker per sample that has both coordinates.

    Args:
        samples (list): Sample records with latitude, longitude, hmpi_value and
            contamination_level (see database.frame_to_records).
        project_id (int, optional): Only keep samples from this project.
    """
    markers = []
    for sample in samples:
        if project_id is not None and sample.get('project_id') != project_id:
            continue
        latitude = sample.get('latitude')
        longitude = sample.get('longitude')
        if latitude is None or longitude is None:
            continue

        hmpi_value = sample.get('hmpi_value')
        level = sample.get('contamination_level') or 'unknown'
        background, text = LEVEL_BADGE_COLORS.get(level, LEVEL_BADGE_COLORS['unknown'])
        markers.append({
            'sample_id': sample.get('sample_id'),
            'project_id': sample.get('project_id'),
            'latitude': float(latitude),
            'longitude': float(longitude),
            'color': marker_color(hmpi_value),
            'popup': {
                'sample_name': sample.get('sample_name'),
                'project_name': sample.get('project_name'),
                'collection_date': sample.get('collection_date'),
                'hmpi_value': round(hmpi_value, 2) if hmpi_value is not None else 'N/A',
                'contamination_level': level,
                'level_label': level.replace('_', ' ').upper(),
                'badge_background': background,
                'badge_text': text,
            },
        })
    return markers


def map_view(markers):
    """
    The initial map view: the bounding box of all markers, or the default
    centre and zoom when there is nothing to show.
    """
    if not markers:
        return {
            'center': list(config.DEFAULT_MAP_CENTER),
            'zoom': config.DEFAULT_MAP_ZOOM,
            'bounds': None,
        }
    latitudes = [m['latitude'] for m in markers]
    longitudes = [m['longitude'] for m in markers]
    return {
        'center': [sum(latitudes) / len(latitudes), sum(longitudes) / len(longitudes)],
        'zoom': None,
        'bounds': [[min(latitudes), min(longitudes)], [max(latitudes), max(longitudes)]],
    }
