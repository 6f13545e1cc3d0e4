"""
Ski Trip Analysis Module

This module turns raw ski-trip GPS logs into the parsed trip payload:
validated GPS points, summary metrics, and performance, slope and altitude
analyses.

It serves as the single import point for the app and the report script,
re-exporting functions from the modular structure.
"""

# Import constants
from .constants import DEFAULT_GPS_ACCURACY_THRESHOLD_M

# Import configuration
from .config import (
    AnalysisConfig,
    AppSettings,
    get_settings,
)

# Import GPS extraction functions
from .gps_extraction import (
    GpsReading,
    parse_timestamp_key,
    extract_gps_points,
)

# Import metrics functions
from .metrics import (
    haversine_m,
    segment_distances,
    compute_base_metrics,
    find_max_speed_point,
    build_polyline,
)

# Import analysis functions
from .performance import compute_performance_metrics
from .slope_analysis import (
    build_segments,
    compute_slope_analysis,
)
from .altitude_analysis import compute_altitude_analysis

# Import pipeline functions
from .trip import (
    empty_trip_data,
    parse_trip_data,
    analyze_trip_data,
    summarize_raw_log,
)

# Import formatting and export functions
from .formatting import (
    format_distance,
    format_speed,
    format_duration,
    format_altitude,
    format_date,
)
from .export import export_points_csv

__all__ = [
    # Constants
    "DEFAULT_GPS_ACCURACY_THRESHOLD_M",
    # Configuration
    "AnalysisConfig",
    "AppSettings",
    "get_settings",
    # GPS extraction
    "GpsReading",
    "parse_timestamp_key",
    "extract_gps_points",
    # Metrics
    "haversine_m",
    "segment_distances",
    "compute_base_metrics",
    "find_max_speed_point",
    "build_polyline",
    # Analyses
    "compute_performance_metrics",
    "build_segments",
    "compute_slope_analysis",
    "compute_altitude_analysis",
    # Pipeline
    "empty_trip_data",
    "parse_trip_data",
    "analyze_trip_data",
    "summarize_raw_log",
    # Formatting / export
    "format_distance",
    "format_speed",
    "format_duration",
    "format_altitude",
    "format_date",
    "export_points_csv",
]
