import pytest

from hmpi_calculator import (
    CONTINUE_MONITORING,
    LEAD_DETECTED,
    MERCURY_DETECTED,
    MONITORING_RECOMMENDED,
    TREATMENT_REQUIRED,
    WITHIN_LIMITS,
    alert_severity_for,
    calculate_hmpi,
    classify_hmpi,
    risk_label,
)


def test_lead_and_mercury_example():
    result = calculate_hmpi({"Lead": 0.02, "Mercury": 0.0005})

    # (200 + 500) / (100 + 1000)
    assert result["hmpi_value"] == pytest.approx(700 / 1100)
    assert result["contamination_level"] == "low"
    assert result["metal_contributions"]["Lead"] == pytest.approx(200)
    assert result["metal_contributions"]["Mercury"] == pytest.approx(50)
    assert result["recommendations"] == [LEAD_DETECTED, WITHIN_LIMITS, CONTINUE_MONITORING]


def test_single_metal_index_is_ratio_to_standard():
    result = calculate_hmpi({"Lead": 2.5})
    assert result["hmpi_value"] == pytest.approx(250)
    assert result["contamination_level"] == "high"


def test_empty_readings_give_zero():
    result = calculate_hmpi({})
    assert result["hmpi_value"] == 0
    assert result["contamination_level"] == "low"
    assert result["metal_contributions"] == {}
    assert result["recommendations"] == [WITHIN_LIMITS, CONTINUE_MONITORING]


def test_metals_without_standard_are_ignored():
    result = calculate_hmpi({"Unobtainium": 5.0})
    assert result["hmpi_value"] == 0
    assert result["metal_contributions"] == {}

    mixed = calculate_hmpi({"Unobtainium": 5.0, "Lead": 0.02})
    assert mixed["hmpi_value"] == pytest.approx(2.0)
    assert list(mixed["metal_contributions"]) == ["Lead"]


def test_custom_standards():
    result = calculate_hmpi({"Lead": 0.5}, standards={"Lead": 0.5})
    assert result["hmpi_value"] == pytest.approx(1.0)


def test_index_grows_with_concentration():
    values = [calculate_hmpi({"Lead": c, "Zinc": 1.0})["hmpi_value"] for c in (0.01, 0.1, 1.0, 10.0)]
    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_index_scales_with_all_concentrations():
    base = calculate_hmpi({"Lead": 0.03, "Cadmium": 0.002, "Copper": 1.2})["hmpi_value"]
    doubled = calculate_hmpi({"Lead": 0.06, "Cadmium": 0.004, "Copper": 2.4})["hmpi_value"]
    assert doubled == pytest.approx(2 * base)


@pytest.mark.parametrize(
    "value, level",
    [
        (0, "low"),
        (100, "low"),
        (100.01, "moderate"),
        (150, "moderate"),
        (150.01, "high"),
        (300, "high"),
        (300.01, "very_high"),
    ],
)
def test_classify_boundaries(value, level):
    assert classify_hmpi(value) == level


def test_high_index_recommendations():
    result = calculate_hmpi({"Lead": 2.0, "Mercury": 0.5})
    assert result["contamination_level"] == "very_high"
    assert result["recommendations"] == [
        TREATMENT_REQUIRED,
        MONITORING_RECOMMENDED,
        LEAD_DETECTED,
        MERCURY_DETECTED,
    ]


def test_mercury_warning_needs_more_than_its_standard():
    at_standard = calculate_hmpi({"Mercury": 0.001})
    assert MERCURY_DETECTED not in at_standard["recommendations"]

    above = calculate_hmpi({"Mercury": 0.0011})
    assert MERCURY_DETECTED in above["recommendations"]


@pytest.mark.parametrize(
    "value, severity",
    [(100, None), (150, None), (150.01, "high"), (300, "high"), (300.01, "critical")],
)
def test_alert_severity(value, severity):
    assert alert_severity_for(value) == severity


def test_risk_label():
    assert risk_label(80) == "Acceptable"
    assert risk_label(120) == "Moderate Risk"
    assert risk_label(200) == "High Risk"
    assert risk_label(301) == "Critical Risk"


def test_doubling_one_metal_doubles_its_weighted_term():
    # Lead's weighted term is h(lead=c) - h(lead=0) while the other metals are held fixed.
    others = {"Cadmium": 0.002, "Copper": 1.2}
    without = calculate_hmpi(dict(others, Lead=0.0))["hmpi_value"]
    single = calculate_hmpi(dict(others, Lead=0.03))["hmpi_value"]
    double = calculate_hmpi(dict(others, Lead=0.06))["hmpi_value"]
    assert double - without == pytest.approx(2 * (single - without))

    alone = calculate_hmpi({"Lead": 0.03, "Zinc": 0.0})["hmpi_value"]
    assert calculate_hmpi({"Lead": 0.06, "Zinc": 0.0})["hmpi_value"] == pytest.approx(2 * alone)


def test_repeated_calculation_gives_same_recommendations():
    readings = {"Lead": 2.0, "Mercury": 0.5, "Zinc": 1.0}
    first = calculate_hmpi(readings)
    for _ in range(3):
        again = calculate_hmpi(readings)
        assert again["recommendations"] == first["recommendations"]
        assert again["hmpi_value"] == first["hmpi_value"]
