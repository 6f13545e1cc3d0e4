import pytest

from skitrip.formatting import (
    format_altitude,
    format_date,
    format_distance,
    format_duration,
    format_speed,
)


@pytest.mark.parametrize("meters, expected", [
    (0, "0 m"),
    (850.4, "850 m"),
    (850.5, "851 m"),
    (1000, "1.00 km"),
    (12346, "12.35 km"),
])
def test_format_distance(meters, expected):
    assert format_distance(meters) == expected


def test_format_speed():
    assert format_speed(10) == "36.0 km/h"
    assert format_speed(0) == "0.0 km/h"


@pytest.mark.parametrize("seconds, expected", [
    (45, "45s"),
    (45.9, "45s"),
    (123, "2m 3s"),
    (3600, "1h 0m"),
    (3900, "1h 5m"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_format_altitude():
    assert format_altitude(1234.4) == "1234 m"


def test_format_date():
    assert format_date(1704447000000) == "Jan 5, 2024, 09:30 AM"
    assert format_date(1705923000000) == "Jan 22, 2024, 11:30 AM"
