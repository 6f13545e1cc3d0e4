"""
Utility Functions for Ski Trip Analysis

This module provides helper functions for value checks and for turning GPS
point records into numpy arrays used throughout the analysis pipeline.
"""

import math
import numbers

import numpy as np
from typing import Dict, List


def is_number(value) -> bool:
    """
    Check whether a value is a real number.

    Booleans are rejected even though Python treats them as integers, since
    a JSON ``true`` is never a valid coordinate. NaN and infinities (which
    json.loads accepts) are rejected too.

    Args:
        value: Any decoded JSON value.

    Returns:
        True for finite int/float values, False otherwise.
    """
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        return False
    return math.isfinite(value)


def column(points: List[Dict], key: str) -> np.ndarray:
    """
    Collect one field of every GPS point into a float array.

    Args:
        points: Ordered GPS point records.
        key: Field name (e.g. "speed", "altitude").

    Returns:
        1-D float64 array with one value per point.
    """
    return np.array([point[key] for point in points], dtype=float)


def time_deltas_s(points: List[Dict]) -> np.ndarray:
    """
    Seconds elapsed between each consecutive pair of points.

    Args:
        points: Ordered GPS point records with millisecond timestamps.

    Returns:
        Array of length len(points) - 1.
    """
    timestamps = np.array([point["timestamp"] for point in points], dtype=np.int64)
    return np.diff(timestamps) / 1000.0
