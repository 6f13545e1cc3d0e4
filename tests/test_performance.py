import numpy as np
import pytest

from skitrip.performance import (
    centered_accelerations,
    classify_activity_time,
    compute_performance_metrics,
    detect_acceleration_zones,
    speed_zone_durations,
)


def _points(speeds, times_s=None, altitudes=None):
    times_s = times_s if times_s is not None else list(range(len(speeds)))
    altitudes = altitudes if altitudes is not None else [2000] * len(speeds)
    return [
        {"timestamp": int(t * 1000), "lat": 47.0 + i * 0.0001, "lng": 11.0,
         "altitude": alt, "speed": speed, "accuracy": 0, "course": 0}
        for i, (t, alt, speed) in enumerate(zip(times_s, altitudes, speeds))
    ]


def _zones(points):
    return detect_acceleration_zones(points, centered_accelerations(points))


def test_fewer_than_two_points_is_zeroed():
    result = compute_performance_metrics(_points([3.0]))
    assert result["speedConsistency"] == 0
    assert result["accelerationZones"] == []
    assert result["decelerationZones"] == []
    assert result["skiingTime"] == 0
    assert result["liftTime"] == 0
    assert result["speedZones"] == {
        "stationary": 0, "slow": 0, "moderate": 0, "fast": 0, "veryFast": 0,
    }


def test_speed_consistency_is_population_std():
    result = compute_performance_metrics(_points([2, 4, 4, 4, 5, 5, 7, 9]))
    assert result["speedConsistency"] == pytest.approx(2.0)


def test_acceleration_zone():
    points = _points([0, 2, 4, 6, 8, 8, 8, 8])
    zones = _zones(points)
    assert zones["deceleration"] == []
    assert zones["acceleration"] == [{
        "startIndex": 1,
        "endIndex": 3,
        "peakAcceleration": pytest.approx(2.0),
        "startSpeed": 2,
        "endSpeed": 6,
    }]


def test_deceleration_zone():
    points = _points([8, 8, 8, 8, 6, 4, 2, 0])
    zones = _zones(points)
    assert zones["acceleration"] == []
    assert len(zones["deceleration"]) == 1
    zone = zones["deceleration"][0]
    assert (zone["startIndex"], zone["endIndex"]) == (4, 6)
    assert zone["peakAcceleration"] == pytest.approx(-2.0)
    assert zone["startSpeed"] == 6
    assert zone["endSpeed"] == 2


def test_zone_keeps_most_extreme_value():
    zones = _zones(_points([0, 1, 3, 6, 8, 9, 9]))
    assert len(zones["acceleration"]) == 1
    zone = zones["acceleration"][0]
    assert (zone["startIndex"], zone["endIndex"]) == (1, 4)
    assert zone["peakAcceleration"] == pytest.approx(2.5)


def test_short_zones_are_dropped():
    assert _zones(_points([0, 2, 4, 4, 4])) == {"acceleration": [], "deceleration": []}


def test_acceleration_uses_time_deltas():
    # Same speed change spread over two seconds per step halves the acceleration
    points = _points([0, 2, 4, 6, 8, 8], times_s=[0, 2, 4, 6, 8, 10])
    accelerations = centered_accelerations(points)
    assert accelerations[2] == pytest.approx(1.0)
    assert _zones(points)["acceleration"] == []


def test_zero_time_delta_does_not_divide_by_zero():
    points = _points([0, 5, 9, 12], times_s=[0, 1, 1, 2])
    accelerations = centered_accelerations(points)
    assert np.all(np.isfinite(accelerations))
    assert accelerations[1] == 0
    assert accelerations[2] == 0


def test_endpoints_have_no_acceleration():
    accelerations = centered_accelerations(_points([0, 10, 20]))
    assert accelerations[0] == 0
    assert accelerations[-1] == 0
    assert accelerations[1] == pytest.approx(10.0)


def test_activity_time_classification():
    points = _points(
        speeds=[0.2, 0.2, 1.8, 0.2, 5.8],
        times_s=[0, 10, 30, 35, 40],
        altitudes=[1000, 1000, 1100, 1050, 1000],
    )
    assert classify_activity_time(points) == {
        "stoppedTime": pytest.approx(10.0),
        "liftTime": pytest.approx(20.0),
        "skiingTime": pytest.approx(10.0),
    }


def test_speed_zone_durations():
    points = _points(speeds=[0, 1, 3, 7, 12, 4], times_s=[0, 2, 5, 6, 10, 13])
    zones = speed_zone_durations(points)
    assert zones == {
        "stationary": pytest.approx(0.0),
        "slow": pytest.approx(2.0),
        "moderate": pytest.approx(3.0),
        "fast": pytest.approx(8.0),
        "veryFast": pytest.approx(0.0),
    }


def test_time_buckets_sum_to_duration():
    speeds = [0.0, 0.3, 1.2, 2.5, 6.0, 11.0, 14.0, 9.0, 1.0, 0.1]
    times = [0, 4, 9, 11, 12, 14, 15, 17, 25, 40]
    altitudes = [1500, 1500, 1520, 1510, 1490, 1450, 1400, 1380, 1385, 1385]
    result = compute_performance_metrics(_points(speeds, times, altitudes))
    duration = times[-1] - times[0]
    assert sum(result["speedZones"].values()) == pytest.approx(duration)
    assert result["skiingTime"] + result["liftTime"] + result["stoppedTime"] == pytest.approx(duration)
    assert result["speedZones"]["veryFast"] > 0
