import copy
import json

import pytest

from skitrip.config import AnalysisConfig
from skitrip.trip import analyze_trip_data, empty_trip_data, parse_trip_data, summarize_raw_log

EMPTY_METRICS = {
    "totalDistance": 0,
    "maxSpeed": 0,
    "verticalDrop": 0,
    "duration": 0,
    "maxAltitude": 0,
    "minAltitude": 0,
}


@pytest.mark.parametrize("raw", [
    {},
    None,
    "trip",
    [1, 2, 3],
    {"1000": {"battery": 0.9}, "2000": {"battery": 0.8}},
    {"1000": {"gps": {"latitude": 47.0, "longitude": 11.0, "altitude": 2000,
                      "speed": 5, "horizontalAccuracy": 999}}},
])
def test_no_valid_points_gives_empty_result(raw):
    result = parse_trip_data(raw)
    assert result == {
        "gpsPoints": [],
        "polyline": [],
        "metrics": EMPTY_METRICS,
        "maxSpeedPoint": None,
        "startPoint": None,
        "endPoint": None,
    }
    assert result == empty_trip_data()


def test_scenario(scenario_log):
    result = parse_trip_data(scenario_log)
    assert [p["timestamp"] for p in result["gpsPoints"]] == [1000, 2000]
    assert result["metrics"]["duration"] == 1
    assert result["metrics"]["verticalDrop"] == 10
    assert result["metrics"]["maxSpeed"] == 6
    assert result["metrics"]["totalDistance"] == pytest.approx(111, rel=0.01)
    assert result["polyline"] == [[47.0, 11.0], [47.001, 11.0]]
    assert result["startPoint"]["timestamp"] == 1000
    assert result["endPoint"]["timestamp"] == 2000
    assert result["maxSpeedPoint"]["speed"] == 6


def test_parse_is_idempotent(descent_log):
    assert parse_trip_data(descent_log) == parse_trip_data(descent_log)
    assert analyze_trip_data(descent_log) == analyze_trip_data(descent_log)


def test_points_strictly_ordered(descent_log):
    timestamps = [p["timestamp"] for p in parse_trip_data(descent_log)["gpsPoints"]]
    assert all(a < b for a, b in zip(timestamps, timestamps[1:]))


def test_input_not_mutated(descent_log):
    snapshot = copy.deepcopy(descent_log)
    analyze_trip_data(descent_log)
    assert descent_log == snapshot


def test_returned_points_are_independent(scenario_log):
    result = parse_trip_data(scenario_log)
    result["startPoint"]["lat"] = 0
    assert result["gpsPoints"][0]["lat"] == 47.0


def test_config_threshold_applies(descent_log):
    strict = AnalysisConfig(gps_accuracy_threshold=1)
    assert parse_trip_data(descent_log, strict) == empty_trip_data()


def test_analyze_trip(descent_log):
    result = analyze_trip_data(descent_log)
    duration = result["metrics"]["duration"]
    assert duration == 120
    assert result["metrics"]["verticalDrop"] == 120

    performance = result["performanceMetrics"]
    assert sum(performance["speedZones"].values()) == pytest.approx(duration)
    assert performance["liftTime"] == pytest.approx(60)
    assert performance["stoppedTime"] == pytest.approx(0)
    assert performance["skiingTime"] == pytest.approx(60)

    slopes = result["slopeAnalysis"]
    assert slopes["totalRuns"] == 1
    assert slopes["runs"][0]["startIndex"] == 3
    assert slopes["runs"][0]["altitudeDrop"] == pytest.approx(100)

    altitude = result["altitudeAnalysis"]
    assert altitude["ascentTime"] == pytest.approx(60)
    assert altitude["descentTime"] == pytest.approx(30)


def test_analyze_empty_log_is_zeroed():
    result = analyze_trip_data({})
    assert result["gpsPoints"] == []
    assert result["performanceMetrics"]["accelerationZones"] == []
    assert result["slopeAnalysis"]["totalRuns"] == 0
    assert result["altitudeAnalysis"]["altitudeRange"] == 0


def test_summarize_raw_log(descent_log):
    assert summarize_raw_log(descent_log) == {"totalEntries": 7, "hasGPS": True}
    assert summarize_raw_log({"1": {"battery": 1}}) == {"totalEntries": 1, "hasGPS": False}
    assert summarize_raw_log([]) == {"totalEntries": 0, "hasGPS": False}


@pytest.mark.parametrize("bad_value", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_values_from_json_are_dropped(bad_value):
    raw = json.loads(
        '{"1000": {"gps": {"latitude": 47.0, "longitude": 11.0, "altitude": 2000, "speed": 5}},'
        ' "2000": {"gps": {"latitude": 47.001, "longitude": 11.0, "altitude": %s, "speed": 6}},'
        ' "3000": {"gps": {"latitude": 47.002, "longitude": 11.0, "altitude": 1980, "speed": %s}}}'
        % (bad_value, bad_value)
    )
    result = analyze_trip_data(raw)
    assert [p["timestamp"] for p in result["gpsPoints"]] == [1000]
    assert result["altitudeAnalysis"]["altitudeRange"] == 0
