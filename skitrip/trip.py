"""
Trip Parsing Pipeline for Ski Trip Analysis

This module orchestrates the analysis pipeline, combining GPS extraction,
base metrics and the extended analyses into the parsed trip payload served
to the frontend.
"""

from typing import Dict, Mapping, Optional
from . import altitude_analysis
from . import gps_extraction
from . import metrics
from . import performance
from . import slope_analysis
from .config import AnalysisConfig


def empty_trip_data() -> Dict:
    """
    Canonical result for a log without any valid GPS point.

    Returns:
        Dictionary with empty gpsPoints/polyline, zeroed metrics and None
        for maxSpeedPoint, startPoint and endPoint.
    """
    return {
        "gpsPoints": [],
        "polyline": [],
        "metrics": metrics.empty_metrics(),
        "maxSpeedPoint": None,
        "startPoint": None,
        "endPoint": None,
    }


def parse_trip_data(raw_log, config: Optional[AnalysisConfig] = None) -> Dict:
    """
    Parse a raw trip log into points, polyline and summary metrics.

    Main entry point of the engine:
    1. Extracts and filters GPS points, ordered by timestamp
    2. Computes base metrics
    3. Locates the maximum-speed, start and end points
    4. Builds the polyline

    Never raises for malformed logs: anything that is not a mapping, or
    yields no valid point, produces empty_trip_data().

    Args:
        raw_log: Mapping of timestamp key (ms since epoch) -> log record.
        config: Analysis parameters. Defaults to AnalysisConfig().

    Returns:
        Dictionary containing gpsPoints, polyline, metrics, maxSpeedPoint,
        startPoint and endPoint.
    """
    if not isinstance(raw_log, Mapping):
        return empty_trip_data()

    points = gps_extraction.extract_gps_points(raw_log, config)
    if not points:
        return empty_trip_data()

    return {
        "gpsPoints": points,
        "polyline": metrics.build_polyline(points),
        "metrics": metrics.compute_base_metrics(points),
        "maxSpeedPoint": dict(metrics.find_max_speed_point(points)),
        "startPoint": dict(points[0]),
        "endPoint": dict(points[-1]),
    }


def analyze_trip_data(raw_log, config: Optional[AnalysisConfig] = None) -> Dict:
    """
    Parse a raw trip log and add the performance, slope and altitude analyses.

    Args:
        raw_log: Mapping of timestamp key (ms since epoch) -> log record.
        config: Analysis parameters. Defaults to AnalysisConfig().

    Returns:
        The parse_trip_data() payload extended with performanceMetrics,
        slopeAnalysis and altitudeAnalysis.
    """
    parsed = parse_trip_data(raw_log, config)
    points = parsed["gpsPoints"]

    parsed["performanceMetrics"] = performance.compute_performance_metrics(points)
    parsed["slopeAnalysis"] = slope_analysis.compute_slope_analysis(points)
    parsed["altitudeAnalysis"] = altitude_analysis.compute_altitude_analysis(points)
    return parsed


def summarize_raw_log(raw_log) -> Dict:
    """
    Describe a raw trip log without parsing it.

    Args:
        raw_log: Decoded trip JSON.

    Returns:
        Dictionary with totalEntries and hasGPS (any entry carrying a gps
        value).
    """
    if not isinstance(raw_log, Mapping):
        return {"totalEntries": 0, "hasGPS": False}
    return {
        "totalEntries": len(raw_log),
        "hasGPS": any(
            isinstance(entry, Mapping) and bool(entry.get("gps"))
            for entry in raw_log.values()
        ),
    }
