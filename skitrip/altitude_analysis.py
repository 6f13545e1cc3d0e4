"""
Altitude Analysis for Ski Trip Analysis

This module measures time spent ascending and descending, peak vertical
rates, and dwell time per elevation quartile of the trip's altitude range.
"""

import numpy as np
from typing import Dict, List
from . import constants
from . import utils


def empty_altitude_analysis() -> Dict:
    return {
        "minAltitude": 0,
        "maxAltitude": 0,
        "altitudeRange": 0,
        "ascentTime": 0,
        "descentTime": 0,
        "maxAscentRate": 0,
        "maxDescentRate": 0,
        "elevationZones": {name: 0 for name in constants.ELEVATION_ZONE_NAMES},
    }


def elevation_zone_index(altitude: float, min_altitude: float, altitude_range: float) -> int:
    """
    Quartile of the trip's altitude range that an altitude falls into.

    Args:
        altitude: Altitude in meters.
        min_altitude: Lowest altitude of the trip.
        altitude_range: Highest minus lowest altitude.

    Returns:
        0 (bottom) to 3 (top). A flat trip (zero range) or a non-finite
        altitude is bottom.
    """
    if altitude_range <= 0:
        return 0
    relative = (altitude - min_altitude) / altitude_range
    if not np.isfinite(relative):
        return 0
    return int(np.clip(np.floor(relative * 4), 0, 3))


def compute_altitude_analysis(points: List[Dict]) -> Dict:
    """
    Compute altitude metrics for a trip.

    For each consecutive pair the time delta is credited to ascentTime or
    descentTime by the sign of the altitude change, and to the elevation
    zone of the later point. Vertical rates are only measured over pairs
    with a positive time delta.

    Args:
        points: Ordered GPS point records.

    Returns:
        Dictionary with minAltitude, maxAltitude, altitudeRange (m),
        ascentTime, descentTime (s), maxAscentRate, maxDescentRate (m/s,
        both positive) and elevationZones (s per quartile). Zeroed with
        fewer than two points.
    """
    if len(points) < 2:
        return empty_altitude_analysis()

    altitudes = utils.column(points, "altitude")
    dt = utils.time_deltas_s(points)
    min_altitude = float(altitudes.min())
    max_altitude = float(altitudes.max())
    altitude_range = max_altitude - min_altitude

    ascent_time = 0.0
    descent_time = 0.0
    max_ascent_rate = 0.0
    max_descent_rate = 0.0
    zones = [0.0] * len(constants.ELEVATION_ZONE_NAMES)

    for idx in range(1, len(points)):
        delta_t = float(dt[idx - 1])
        change = float(altitudes[idx] - altitudes[idx - 1])

        if change > 0:
            ascent_time += delta_t
            if delta_t > 0:
                max_ascent_rate = max(max_ascent_rate, change / delta_t)
        elif change < 0:
            descent_time += delta_t
            if delta_t > 0:
                max_descent_rate = max(max_descent_rate, -change / delta_t)

        zones[elevation_zone_index(altitudes[idx], min_altitude, altitude_range)] += delta_t

    return {
        "minAltitude": min_altitude,
        "maxAltitude": max_altitude,
        "altitudeRange": altitude_range,
        "ascentTime": ascent_time,
        "descentTime": descent_time,
        "maxAscentRate": max_ascent_rate,
        "maxDescentRate": max_descent_rate,
        "elevationZones": dict(zip(constants.ELEVATION_ZONE_NAMES, zones)),
    }
