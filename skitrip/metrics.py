"""
Base Metrics Computation for Ski Trip Analysis

This module computes the summary metrics of a trip from its ordered GPS
points: great-circle distance, extrema, vertical drop, duration, the
maximum-speed point and the polyline used for map rendering.
"""

import numpy as np
from typing import Dict, List, Optional
from . import constants
from . import utils


def haversine_m(lat1, lon1, lat2, lon2):
    """
    Calculate the great-circle distance between two points on Earth.

    Uses the Haversine formula to compute distance along the surface of a
    sphere of radius 6371 km. Accepts scalars or numpy arrays.

    Args:
        lat1, lon1: Latitude and longitude of first point in degrees.
        lat2, lon2: Latitude and longitude of second point in degrees.

    Returns:
        Distance in meters between the two points.
    """
    R = constants.EARTH_RADIUS_KM * 1000.0
    lat1_rad, lon1_rad = np.deg2rad(lat1), np.deg2rad(lon1)
    lat2_rad, lon2_rad = np.deg2rad(lat2), np.deg2rad(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    return R * c


def segment_distances(points: List[Dict]) -> np.ndarray:
    """
    Great-circle distance between each consecutive pair of points.

    Args:
        points: Ordered GPS point records.

    Returns:
        Array of length len(points) - 1, in meters (empty for < 2 points).
    """
    if len(points) < 2:
        return np.zeros(0)
    lats = utils.column(points, "lat")
    lngs = utils.column(points, "lng")
    return haversine_m(lats[:-1], lngs[:-1], lats[1:], lngs[1:])


def empty_metrics() -> Dict:
    return {
        "totalDistance": 0,
        "maxSpeed": 0,
        "verticalDrop": 0,
        "duration": 0,
        "maxAltitude": 0,
        "minAltitude": 0,
    }


def compute_base_metrics(points: List[Dict]) -> Dict:
    """
    Compute the aggregate metrics of a trip.

    Args:
        points: Ordered GPS point records.

    Returns:
        Dictionary with totalDistance (m), maxSpeed (m/s), verticalDrop (m),
        duration (s), maxAltitude and minAltitude (m). All zero when there
        are no points.
    """
    if not points:
        return empty_metrics()

    speeds = utils.column(points, "speed")
    altitudes = utils.column(points, "altitude")
    max_altitude = float(altitudes.max())
    min_altitude = float(altitudes.min())

    return {
        "totalDistance": float(segment_distances(points).sum()),
        "maxSpeed": float(speeds.max()),
        "verticalDrop": max_altitude - min_altitude,
        "duration": (points[-1]["timestamp"] - points[0]["timestamp"]) / 1000,
        "maxAltitude": max_altitude,
        "minAltitude": min_altitude,
    }


def find_max_speed_point(points: List[Dict]) -> Optional[Dict]:
    """
    Find the point with the highest speed.

    Args:
        points: Ordered GPS point records.

    Returns:
        The first point reaching the maximum speed, or None without points.
    """
    if not points:
        return None
    # argmax returns the first occurrence on ties
    return points[int(np.argmax(utils.column(points, "speed")))]


def build_polyline(points: List[Dict]) -> List[List[float]]:
    """Project points to [lat, lng] pairs for path rendering."""
    return [[point["lat"], point["lng"]] for point in points]
