"""
Performance Metrics for Ski Trip Analysis

This module derives motion metrics from ordered GPS points: speed
consistency, acceleration/deceleration zones, the split of time between
skiing, lift rides and stops, and time spent in each speed zone.
"""

import numpy as np
from typing import Dict, List
from . import constants
from . import utils


def empty_performance_metrics() -> Dict:
    return {
        "speedConsistency": 0,
        "accelerationZones": [],
        "decelerationZones": [],
        "skiingTime": 0,
        "liftTime": 0,
        "stoppedTime": 0,
        "speedZones": {name: 0 for name in constants.SPEED_ZONE_NAMES},
    }


def centered_accelerations(points: List[Dict]) -> np.ndarray:
    """
    Estimate the acceleration at every point from its two neighbours.

    For an interior point i the backward ((v[i] - v[i-1]) / dt1) and forward
    ((v[i+1] - v[i]) / dt2) accelerations are averaged. The first and last
    points, and points with a non-positive time delta on either side, get 0.

    Args:
        points: Ordered GPS point records.

    Returns:
        Array of accelerations in m/s², one per point.
    """
    n = len(points)
    accelerations = np.zeros(n)
    if n < 3:
        return accelerations

    speeds = utils.column(points, "speed")
    dt = utils.time_deltas_s(points)
    one_sided = np.zeros(n - 1)
    np.divide(np.diff(speeds), dt, out=one_sided, where=dt > 0)

    valid = (dt[:-1] > 0) & (dt[1:] > 0)
    accelerations[1:-1] = np.where(valid, (one_sided[:-1] + one_sided[1:]) / 2, 0.0)
    return accelerations


def detect_acceleration_zones(points: List[Dict], accelerations: np.ndarray,
                              threshold: float = constants.ACCELERATION_THRESHOLD_MPS2,
                              min_points: int = constants.MIN_ZONE_POINTS) -> Dict[str, List[Dict]]:
    """
    Group consecutive points of strong acceleration or deceleration into zones.

    A point belongs to an acceleration zone when its centered acceleration is
    above +threshold and to a deceleration zone when below -threshold.
    Adjacent qualifying points of the same kind share one zone, which keeps
    the most extreme value seen. Zones spanning fewer than min_points points
    are discarded.

    Args:
        points: Ordered GPS point records.
        accelerations: Output of centered_accelerations().
        threshold: Acceleration magnitude in m/s². Default 1.0.
        min_points: Minimum zone length in points. Default 3.

    Returns:
        Dictionary with "acceleration" and "deceleration" lists of zones,
        each zone holding startIndex, endIndex, peakAcceleration, startSpeed
        and endSpeed.
    """
    zones = {"acceleration": [], "deceleration": []}
    current = None

    def close(zone):
        if zone and zone["endIndex"] - zone["startIndex"] + 1 >= min_points:
            zones[zone.pop("kind")].append(zone)

    for idx in range(1, len(points) - 1):
        accel = float(accelerations[idx])
        if accel > threshold:
            kind = "acceleration"
        elif accel < -threshold:
            kind = "deceleration"
        else:
            kind = None

        if current and current["kind"] == kind:
            current["endIndex"] = idx
            if kind == "acceleration":
                current["peakAcceleration"] = max(current["peakAcceleration"], accel)
            else:
                current["peakAcceleration"] = min(current["peakAcceleration"], accel)
            continue

        close(current)
        current = None
        if kind:
            current = {"kind": kind, "startIndex": idx, "endIndex": idx, "peakAcceleration": accel}

    close(current)

    for zone in zones["acceleration"] + zones["deceleration"]:
        zone["startSpeed"] = points[zone["startIndex"]]["speed"]
        zone["endSpeed"] = points[zone["endIndex"]]["speed"]

    return zones


def classify_activity_time(points: List[Dict]) -> Dict[str, float]:
    """
    Split the trip duration into skiing, lift and stopped time.

    Each consecutive pair is classified by its average speed: below 0.5 m/s
    it counts as stopped, from 2.0 m/s up as skiing. In between, a rising
    altitude marks a lift ride and anything else slow skiing. The pair's
    time delta is added to the chosen bucket, so the three sum to the
    duration.

    Args:
        points: Ordered GPS point records (at least two).

    Returns:
        Dictionary with skiingTime, liftTime and stoppedTime in seconds.
    """
    speeds = utils.column(points, "speed")
    altitudes = utils.column(points, "altitude")
    dt = utils.time_deltas_s(points)

    avg_speed = (speeds[:-1] + speeds[1:]) / 2
    rising = altitudes[1:] > altitudes[:-1]

    stopped = avg_speed < constants.STOPPED_SPEED_MPS
    ambiguous = ~stopped & (avg_speed < constants.SKIING_SPEED_MPS)
    lift = ambiguous & rising
    skiing = ~stopped & ~lift

    return {
        "skiingTime": float(dt[skiing].sum()),
        "liftTime": float(dt[lift].sum()),
        "stoppedTime": float(dt[stopped].sum()),
    }


def speed_zone_durations(points: List[Dict]) -> Dict[str, float]:
    """
    Time spent in each speed zone, using the average speed of each pair.

    Zones are [0, 0.5) stationary, [0.5, 2) slow, [2, 5) moderate,
    [5, 10) fast and [10, inf) veryFast, in m/s. Negative speeds fall into
    stationary.

    Args:
        points: Ordered GPS point records (at least two).

    Returns:
        Dictionary of zone name -> seconds.
    """
    speeds = utils.column(points, "speed")
    dt = utils.time_deltas_s(points)
    avg_speed = (speeds[:-1] + speeds[1:]) / 2

    bins = np.digitize(avg_speed, constants.SPEED_ZONE_EDGES_MPS)
    totals = np.bincount(bins, weights=dt, minlength=len(constants.SPEED_ZONE_NAMES))

    return {name: float(total) for name, total in zip(constants.SPEED_ZONE_NAMES, totals)}


def compute_performance_metrics(points: List[Dict]) -> Dict:
    """
    Compute all performance metrics of a trip.

    Args:
        points: Ordered GPS point records.

    Returns:
        Dictionary with speedConsistency (population standard deviation of
        speed, m/s), accelerationZones, decelerationZones, skiingTime,
        liftTime, stoppedTime and speedZones. Zeroed with fewer than two
        points.
    """
    if len(points) < 2:
        return empty_performance_metrics()

    speeds = utils.column(points, "speed")
    zones = detect_acceleration_zones(points, centered_accelerations(points))

    result = {
        "speedConsistency": float(np.std(speeds)),
        "accelerationZones": zones["acceleration"],
        "decelerationZones": zones["deceleration"],
    }
    result.update(classify_activity_time(points))
    result["speedZones"] = speed_zone_durations(points)
    return result
