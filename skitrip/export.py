"""
Export Functions for Ski Trip Analysis

This module exports parsed trip points to CSV for external analysis or
backup.
"""

import csv
import io
from typing import Dict

from .gps_extraction import POINT_COLUMNS


def export_points_csv(parsed: Dict) -> str:
    """
    Export the GPS points of a parsed trip to CSV format.

    Args:
        parsed: Payload from parse_trip_data() or analyze_trip_data().

    Returns:
        CSV string with a header row and one row per GPS point.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer)

    writer.writerow(POINT_COLUMNS)
    for point in parsed.get("gpsPoints", []):
        writer.writerow([point.get(column) for column in POINT_COLUMNS])

    return buffer.getvalue()
