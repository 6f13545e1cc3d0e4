import json

import pytest


@pytest.fixture
def scenario_log():
    """Two valid points 0.001 degrees of latitude apart, one second apart."""
    return {
        "2000": {"gps": {"latitude": 47.001, "longitude": 11.0, "altitude": 1990, "speed": 6}},
        "1000": {"gps": {"latitude": 47.0, "longitude": 11.0, "altitude": 2000, "speed": 5}},
    }


@pytest.fixture
def descent_log():
    """Lift ride up, a stop, then a straight descent."""
    rows = [
        (0, 47.000, 11.000, 1500, 1.5),
        (30000, 47.001, 11.000, 1560, 1.5),
        (60000, 47.002, 11.000, 1620, 1.5),
        (90000, 47.002, 11.000, 1620, 0.0),
        (100000, 47.003, 11.000, 1590, 8.0),
        (110000, 47.004, 11.000, 1555, 11.0),
        (120000, 47.005, 11.000, 1520, 9.0),
    ]
    return {
        str(ts): {
            "gps": {
                "latitude": lat,
                "longitude": lng,
                "altitude": alt,
                "speed": speed,
                "horizontalAccuracy": 5,
                "course": 0,
            },
            "battery": 0.8,
        }
        for ts, lat, lng, alt, speed in rows
    }


@pytest.fixture
def trip_dir(tmp_path, scenario_log, descent_log):
    data_dir = tmp_path / "JSON"
    data_dir.mkdir()
    (data_dir / "trip_20240105_093000.json").write_text(json.dumps(scenario_log), encoding="utf-8")
    (data_dir / "trip_20240212_141500.json").write_text(json.dumps(descent_log), encoding="utf-8")
    (data_dir / "notes.json").write_text(json.dumps({"1000": {"battery": 1}}), encoding="utf-8")
    (data_dir / "empty.json").write_text("  \n", encoding="utf-8")
    (data_dir / "broken.json").write_text("{not json", encoding="utf-8")
    return data_dir
