import datetime

import pandas as pd
import pytest

import config
from analytics import (
    build_trend_series,
    daily_trend_points,
    hmpi_distribution,
    parameter_correlations,
    parameter_statistics,
    parse_project_filter,
    parse_timeframe,
    region_of,
    regional_analytics,
    season_for_month,
    seasonal_averages,
    timeframe_start,
)


def _frame(rows):
    defaults = {
        "sample_id": None, "sample_name": "S", "project_id": 1, "project_name": "P1",
        "location": "Pune, Maharashtra", "project_status": "active",
        "collection_date": "2024-05-01", "latitude": None, "longitude": None,
        "ph_level": None, "turbidity": None, "dissolved_oxygen": None,
        "temperature_celsius": None, "conductivity": None,
        "hmpi_value": None, "contamination_level": None, "calculated_at": None,
    }
    records = []
    for index, row in enumerate(rows, start=1):
        record = dict(defaults, sample_id=index)
        record.update(row)
        records.append(record)
    df = pd.DataFrame(records)
    df["collection_date"] = pd.to_datetime(df["collection_date"])
    df["hmpi_value"] = df["hmpi_value"].astype(float)
    return df


@pytest.mark.parametrize(
    "month, season",
    [(1, "Winter"), (3, "Winter"), (4, "Spring"), (6, "Spring"), (7, "Summer"),
     (9, "Summer"), (10, "Autumn"), (11, "Autumn"), (12, "Winter")],
)
def test_season_for_month(month, season):
    assert season_for_month(month) == season


def test_region_of():
    assert region_of("Pune, Maharashtra") == "Pune"
    assert region_of("Delhi") == "Delhi"
    assert region_of("") == "Unknown"
    assert region_of(None) == "Unknown"


def test_trend_series_is_sorted_and_skips_uncalculated():
    df = _frame([
        {"collection_date": "2024-05-03", "hmpi_value": 120.0, "ph_level": 7.1},
        {"collection_date": "2024-05-01", "hmpi_value": 80.0},
        {"collection_date": "2024-05-02", "hmpi_value": None},
    ])

    series = build_trend_series(df)

    assert [point["date"] for point in series] == ["2024-05-01", "2024-05-03"]
    assert series[0]["hmpi"] == 80.0
    assert series[0]["ph"] == 0.0
    assert series[1]["ph"] == pytest.approx(7.1)
    assert series[1]["project"] == "P1"
    assert series[1]["location"] == "Pune, Maharashtra"


def test_trend_series_empty():
    assert build_trend_series(pd.DataFrame()) == []
    assert build_trend_series(_frame([{"hmpi_value": None}])) == []


def test_seasonal_averages_in_calendar_order():
    df = _frame([
        {"collection_date": "2024-08-01", "hmpi_value": 30.0},
        {"collection_date": "2024-01-10", "hmpi_value": 10.0},
        {"collection_date": "2024-12-24", "hmpi_value": 20.0},
        {"collection_date": "2024-10-05", "hmpi_value": None},
    ])

    result = seasonal_averages(df)

    assert [row["season"] for row in result] == ["Winter", "Summer"]
    assert result[0]["avg_hmpi"] == pytest.approx(15.0)
    assert result[0]["samples"] == 2
    assert result[1]["samples"] == 1


def test_hmpi_distribution_bands():
    values = [0, 50, 50.5, 100, 150, 200, 250, 300, 301, None, float("nan")]

    result = hmpi_distribution(values)

    assert [band["value"] for band in result] == [2, 2, 2, 2, 1]
    assert result[0]["name"] == "Excellent (0-50)"
    assert result[-1]["name"] == "Very Poor (>300)"


def test_parameter_correlations():
    df = _frame([
        {"hmpi_value": 10.0, "turbidity": 1.0, "ph_level": 7.0},
        {"hmpi_value": 20.0, "turbidity": 2.0, "ph_level": 7.0},
        {"hmpi_value": 30.0, "turbidity": 3.0, "ph_level": 7.0},
    ])

    result = parameter_correlations(df)

    assert result["turbidity"] == pytest.approx(1.0)
    # Constant pH has no defined correlation.
    assert result["ph"] is None
    assert result["conductivity"] is None


def test_regional_analytics():
    df = _frame([
        {"project_id": 1, "location": "Pune, Maharashtra", "hmpi_value": 50.0},
        {"project_id": 1, "location": "Pune, Maharashtra", "hmpi_value": 250.0},
        {"project_id": 2, "location": "Pune, West", "hmpi_value": 90.0},
        {"project_id": 3, "location": "Nagpur", "hmpi_value": None},
    ])

    regions = {row["region"]: row for row in regional_analytics(df)}

    pune = regions["Pune"]
    assert pune["total_projects"] == 2
    assert pune["total_samples"] == 3
    assert pune["compliant_samples"] == 2
    assert pune["high_risk_samples"] == 1
    assert pune["compliance_rate"] == pytest.approx(200 / 3)
    assert pune["risk_level"] == "Medium"
    assert pune["trend"] == "stable"
    assert pune["population_affected"] == 100000
    assert pune["economic_impact"] == 100000

    nagpur = regions["Nagpur"]
    assert nagpur["total_samples"] == 0
    assert nagpur["compliance_rate"] == 0.0
    assert nagpur["risk_level"] == "High"
    assert nagpur["trend"] == "declining"


def test_daily_trend_points():
    today = datetime.date(2024, 5, 31)
    df = _frame([
        {"collection_date": "2024-05-01", "hmpi_value": 100.0},
        {"collection_date": "2024-05-01", "hmpi_value": 200.0},
        {"collection_date": "2024-05-04", "hmpi_value": 50.0},
        {"collection_date": "2024-05-31", "hmpi_value": 10.0},
    ])

    points = daily_trend_points(df, 30, today=today)

    # Every third day from May 1st; May 4th has data, May 2nd does not exist in the steps.
    assert points == [
        {"date": "2024-05-01", "avg_hmpi": 150.0, "samples": 2},
        {"date": "2024-05-04", "avg_hmpi": 50.0, "samples": 1},
        {"date": "2024-05-31", "avg_hmpi": 10.0, "samples": 1},
    ]


def test_parameter_statistics():
    series = [{"hmpi": 10.0}, {"hmpi": 30.0}, {"hmpi": 20.0}]
    stats = parameter_statistics(series, "hmpi")
    assert stats == {"average": 20.0, "minimum": 10.0, "maximum": 30.0, "latest": 20.0, "count": 3}
    assert parameter_statistics([], "hmpi")["average"] is None


def test_parse_timeframe():
    assert parse_timeframe(None) == config.DEFAULT_TIMEFRAME_DAYS
    assert parse_timeframe("") == config.DEFAULT_TIMEFRAME_DAYS
    assert parse_timeframe("90") == 90
    with pytest.raises(ValueError):
        parse_timeframe("abc")
    with pytest.raises(ValueError):
        parse_timeframe("0")


def test_parse_project_filter():
    assert parse_project_filter(None) is None
    assert parse_project_filter("all") is None
    assert parse_project_filter("7") == 7
    with pytest.raises(ValueError):
        parse_project_filter("seven")


def test_timeframe_start():
    assert timeframe_start(30, today=datetime.date(2024, 5, 31)) == "2024-05-01"
