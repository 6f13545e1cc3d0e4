"""
Slope Analysis for Ski Trip Analysis

This module splits a trip into segments between consecutive GPS points and
derives slope metrics from them: average gradient, the steepest descents,
distance skied per difficulty colour, and the segmentation into runs.
"""

import numpy as np
import structlog
from typing import Dict, List
from . import constants
from . import metrics
from . import utils

logger = structlog.get_logger(__name__)


def empty_slope_analysis() -> Dict:
    return {
        "averageGradient": 0,
        "steepestSections": [],
        "slopeDifficulty": {name: 0 for name in constants.DIFFICULTY_NAMES},
        "runs": [],
        "totalRuns": 0,
        "longestRun": 0,
    }


def build_segments(points: List[Dict]) -> List[Dict]:
    """
    Build one segment per consecutive pair of points.

    Pairs with zero horizontal distance are skipped since their gradient is
    undefined.

    Args:
        points: Ordered GPS point records.

    Returns:
        List of segment dictionaries with startIndex, endIndex, distance (m),
        altitudeChange (previous minus current altitude, positive when
        descending), gradient (%) and isDescent.
    """
    distances = metrics.segment_distances(points)
    if distances.size == 0:
        return []
    altitudes = utils.column(points, "altitude")
    altitude_changes = altitudes[:-1] - altitudes[1:]

    segments = []
    for idx, (distance, altitude_change) in enumerate(zip(distances, altitude_changes)):
        if distance <= 0:
            continue
        segments.append({
            "startIndex": idx,
            "endIndex": idx + 1,
            "distance": float(distance),
            "altitudeChange": float(altitude_change),
            "gradient": float(abs(altitude_change) / distance * 100),
            "isDescent": bool(altitude_change > 0),
        })

    return segments


def difficulty_distances(segments: List[Dict]) -> Dict[str, float]:
    """
    Distance skied in each difficulty class, over descent segments only.

    Gradients below 15% are green, 15-25% blue, 25-40% red and 40% or more
    black.

    Args:
        segments: Output of build_segments().

    Returns:
        Dictionary of colour -> meters.
    """
    totals = {name: 0.0 for name in constants.DIFFICULTY_NAMES}
    for segment in segments:
        if not segment["isDescent"]:
            continue
        bin_idx = int(np.digitize(segment["gradient"], constants.DIFFICULTY_EDGES_PCT))
        totals[constants.DIFFICULTY_NAMES[bin_idx]] += segment["distance"]
    return totals


def segment_runs(segments: List[Dict]) -> List[Dict]:
    """
    Group consecutive descent segments into runs.

    A run grows while segments descend; the first non-descending segment (or
    the end of the data) closes it.

    Args:
        segments: Output of build_segments().

    Returns:
        List of run dictionaries with startIndex and endIndex (point
        indices, inclusive), distance (m) and altitudeDrop (m).
    """
    runs = []
    current = None

    for segment in segments:
        if not segment["isDescent"]:
            if current:
                runs.append(current)
                current = None
            continue

        if current is None:
            current = {
                "startIndex": segment["startIndex"],
                "endIndex": segment["endIndex"],
                "distance": 0.0,
                "altitudeDrop": 0.0,
            }
        current["endIndex"] = segment["endIndex"]
        current["distance"] += segment["distance"]
        current["altitudeDrop"] += abs(segment["altitudeChange"])

    if current:
        runs.append(current)

    return runs


def compute_slope_analysis(points: List[Dict]) -> Dict:
    """
    Compute slope metrics for a trip.

    Args:
        points: Ordered GPS point records.

    Returns:
        Dictionary with averageGradient (distance-weighted, %),
        steepestSections (top 5 descents by gradient, original order on
        ties), slopeDifficulty, runs, totalRuns and longestRun (m). Zeroed
        with fewer than two points.
    """
    if len(points) < 2:
        return empty_slope_analysis()

    segments = build_segments(points)
    total_distance = sum(segment["distance"] for segment in segments)
    weighted_gradient = sum(segment["gradient"] * segment["distance"] for segment in segments)
    average_gradient = weighted_gradient / total_distance if total_distance > 0 else 0

    descents = [segment for segment in segments if segment["isDescent"]]
    steepest = sorted(descents, key=lambda segment: segment["gradient"], reverse=True)

    runs = segment_runs(segments)
    logger.debug("slope_segments_built", segments=len(segments), runs=len(runs))

    return {
        "averageGradient": average_gradient,
        "steepestSections": steepest[:constants.STEEPEST_SECTION_COUNT],
        "slopeDifficulty": difficulty_distances(segments),
        "runs": runs,
        "totalRuns": len(runs),
        "longestRun": max((run["distance"] for run in runs), default=0),
    }
