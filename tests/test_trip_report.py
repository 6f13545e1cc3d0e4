import json
import sys

import pytest

import trip_report


def test_report_prints_summary(tmp_path, descent_log, monkeypatch, capsys):
    trip_file = tmp_path / "trip_20240212_141500.json"
    trip_file.write_text(json.dumps(descent_log), encoding="utf-8")
    csv_file = tmp_path / "points.csv"
    monkeypatch.setattr(sys, "argv", [
        "trip_report.py", "--trip-file", str(trip_file), "--export-csv", str(csv_file),
    ])

    trip_report.main()

    output = capsys.readouterr().out
    assert "Trip: trip_20240212_141500" in output
    assert "Runs:             1" in output
    assert "Duration:         2m 0s" in output
    assert csv_file.read_text(encoding="utf-8").startswith("timestamp,lat,lng")


def test_report_without_gps_exits(tmp_path, monkeypatch):
    trip_file = tmp_path / "trip.json"
    trip_file.write_text(json.dumps({"1000": {"battery": 1}}), encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["trip_report.py", "--trip-file", str(trip_file)])

    with pytest.raises(SystemExit):
        trip_report.main()


def test_report_missing_file_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["trip_report.py", "--trip-file", str(tmp_path / "nope.json")])

    with pytest.raises(SystemExit):
        trip_report.main()
