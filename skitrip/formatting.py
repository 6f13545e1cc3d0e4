"""
Display Formatting for Ski Trip Analysis

Human-readable renderings of distances, speeds, durations, altitudes and
timestamps, shared by the report script and the UI payloads.
"""

import math
from datetime import datetime, timezone


def format_distance(meters: float) -> str:
    """Meters below 1 km ("850 m"), kilometers with two decimals above."""
    if meters < 1000:
        return f"{math.floor(meters + 0.5)} m"
    return f"{meters / 1000:.2f} km"


def format_speed(mps: float) -> str:
    """Convert m/s to a km/h string with one decimal."""
    return f"{mps * 3.6:.1f} km/h"


def format_duration(seconds: float) -> str:
    """
    Format a duration in seconds.

    Args:
        seconds: Duration in seconds.

    Returns:
        "1h 5m" when at least an hour, "2m 3s" when at least a minute,
        otherwise "45s".
    """
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)
    secs = math.floor(seconds % 60)

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_altitude(meters: float) -> str:
    return f"{math.floor(meters + 0.5)} m"


def format_date(timestamp_ms: int) -> str:
    """
    Format a millisecond epoch timestamp as e.g. "Jan 5, 2024, 09:30 AM" (UTC).
    """
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return f"{moment:%b} {moment.day}, {moment:%Y, %I:%M %p}"
