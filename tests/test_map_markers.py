import config
from map_markers import NO_DATA_COLOR, build_markers, map_view, marker_color


def _sample(**overrides):
    sample = {
        "sample_id": 1, "project_id": 1, "sample_name": "Well A", "project_name": "Pune Wells",
        "collection_date": "2024-05-01", "latitude": 18.5, "longitude": 73.8,
        "hmpi_value": 120.456, "contamination_level": "moderate",
    }
    sample.update(overrides)
    return sample


def test_marker_colors():
    assert marker_color(None) == NO_DATA_COLOR
    assert marker_color(50) == "#16a34a"
    assert marker_color(100) == "#16a34a"
    assert marker_color(120) == "#ca8a04"
    assert marker_color(200) == "#ea580c"
    assert marker_color(301) == "#dc2626"


def test_markers_skip_missing_coordinates_but_keep_zero():
    samples = [
        _sample(sample_id=1),
        _sample(sample_id=2, latitude=None),
        _sample(sample_id=3, longitude=None),
        _sample(sample_id=4, latitude=0.0, longitude=0.0),
    ]

    markers = build_markers(samples)

    assert [m["sample_id"] for m in markers] == [1, 4]
    assert markers[1]["latitude"] == 0.0


def test_marker_popup():
    marker = build_markers([_sample()])[0]
    assert marker["color"] == "#ca8a04"
    assert marker["popup"]["hmpi_value"] == 120.46
    assert marker["popup"]["level_label"] == "MODERATE"


def test_uncalculated_sample_marker():
    marker = build_markers([_sample(hmpi_value=None, contamination_level=None)])[0]
    assert marker["color"] == NO_DATA_COLOR
    assert marker["popup"]["hmpi_value"] == "N/A"
    assert marker["popup"]["contamination_level"] == "unknown"


def test_project_filter():
    samples = [_sample(sample_id=1, project_id=1), _sample(sample_id=2, project_id=2)]
    assert [m["sample_id"] for m in build_markers(samples, project_id=2)] == [2]


def test_map_view_defaults_without_markers():
    view = map_view([])
    assert view["center"] == list(config.DEFAULT_MAP_CENTER)
    assert view["zoom"] == config.DEFAULT_MAP_ZOOM
    assert view["bounds"] is None


def test_map_view_bounds():
    markers = build_markers([
        _sample(sample_id=1, latitude=18.0, longitude=73.0),
        _sample(sample_id=2, latitude=20.0, longitude=75.0),
    ])
    view = map_view(markers)
    assert view["bounds"] == [[18.0, 73.0], [20.0, 75.0]]
    assert view["center"] == [19.0, 74.0]
