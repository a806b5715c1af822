import logging

import pytest

import alerter
from database import get_alerts, get_calculation_history
from extensions import BROADCAST_ROOM
from hmpi_calculator import LEAD_DETECTED
from sample_assessment import assess_sample, readings_from_rows


def test_readings_from_rows():
    rows = [
        {"metal_type": "Lead", "concentration_mg_l": 0.02},
        {"metal_type": "Zinc", "concentration_mg_l": 1.5},
    ]
    assert readings_from_rows(rows) == {"Lead": 0.02, "Zinc": 1.5}


def test_low_result_is_saved_without_alert(make_sample, emitted):
    sample_id = make_sample(readings={"Lead": 0.02, "Mercury": 0.0005})

    result = assess_sample(sample_id)

    assert result["hmpi_value"] == pytest.approx(700 / 1100)
    assert result["sample_id"] == sample_id
    assert result["alert_id"] is None
    assert LEAD_DETECTED in result["recommendations"]
    assert [c["id"] for c in get_calculation_history(sample_id)] == [result["calculation_id"]]
    assert get_alerts() == []
    emitted.emit.assert_not_called()


def test_high_result_raises_and_broadcasts_alert(make_sample, emitted):
    sample_id = make_sample(readings={"Lead": 2.0}, sample_name="Well 7")

    result = assess_sample(sample_id)

    alerts = get_alerts()
    assert len(alerts) == 1
    alert = alerts[0]
    assert alert["id"] == result["alert_id"]
    assert alert["severity"] == "high"
    assert alert["message"] == "High HMPI value detected: 200.00 in sample Well 7"
    assert alert["sample_name"] == "Well 7"

    emitted.emit.assert_called_once()
    event, payload = emitted.emit.call_args.args
    assert event == "new_alert"
    assert payload["severity"] == "high"
    assert emitted.emit.call_args.kwargs == {"to": BROADCAST_ROOM}


def test_critical_severity(make_sample):
    sample_id = make_sample(readings={"Lead": 3.5})
    result = assess_sample(sample_id)
    assert result["contamination_level"] == "very_high"
    assert get_alerts()[0]["severity"] == "critical"


def test_each_run_adds_history(make_sample):
    sample_id = make_sample(readings={"Lead": 0.02})
    assess_sample(sample_id)
    assess_sample(sample_id)
    assert len(get_calculation_history(sample_id)) == 2


def test_missing_sample(db_path):
    with pytest.raises(LookupError):
        assess_sample(12345)


def test_sample_without_metals(make_sample):
    sample_id = make_sample(readings={})
    with pytest.raises(ValueError, match="no heavy metal readings"):
        assess_sample(sample_id)
    assert get_calculation_history(sample_id) == []


def test_broadcast_failure_does_not_fail_calculation(make_sample, emitted, caplog):
    emitted.emit.side_effect = RuntimeError("socket down")
    sample_id = make_sample(readings={"Lead": 2.0})

    with caplog.at_level(logging.ERROR, logger=alerter.__name__):
        result = assess_sample(sample_id)

    assert result["alert_id"] is not None
    assert "Could not emit 'new_alert' event." in caplog.text


def test_announce_alert_resolved(emitted):
    alerter.announce_alert_resolved(5)
    emitted.emit.assert_called_once_with("alert_resolved", {"id": 5}, to=BROADCAST_ROOM)
