"""
GPS Point Extraction for Ski Trip Analysis

This module turns a raw timestamp-keyed trip log into an ordered list of
validated GPS points, dropping entries without usable coordinates and
entries whose horizontal accuracy is worse than the configured threshold.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

import pandas as pd
import structlog

from . import utils
from .config import AnalysisConfig

logger = structlog.get_logger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

POINT_COLUMNS = ["timestamp", "lat", "lng", "altitude", "speed", "accuracy", "course"]


@dataclass(frozen=True)
class GpsReading:
    """The ``gps`` object of one raw log entry; non-numeric fields become None."""

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    altitude: Optional[float] = None
    speed: Optional[float] = None
    horizontal_accuracy: Optional[float] = None
    course: Optional[float] = None

    @classmethod
    def from_entry(cls, entry) -> Optional["GpsReading"]:
        """
        Build a reading from a raw log value.

        Args:
            entry: Value stored under one timestamp key.

        Returns:
            GpsReading, or None when the entry carries no ``gps`` mapping.
        """
        if not isinstance(entry, Mapping):
            return None
        gps = entry.get("gps")
        if not isinstance(gps, Mapping):
            return None

        def number(name):
            value = gps.get(name)
            return value if utils.is_number(value) else None

        return cls(
            latitude=number("latitude"),
            longitude=number("longitude"),
            altitude=number("altitude"),
            speed=number("speed"),
            horizontal_accuracy=number("horizontalAccuracy"),
            course=number("course"),
        )

    @property
    def has_position(self) -> bool:
        return None not in (self.latitude, self.longitude, self.altitude, self.speed)

    def within_accuracy(self, threshold: float) -> bool:
        # An unknown accuracy is accepted
        if self.horizontal_accuracy is None:
            return True
        return not self.horizontal_accuracy > threshold


def parse_timestamp_key(key) -> Optional[int]:
    """
    Parse a log key (milliseconds since epoch as text) into an integer.

    Only the leading integer part is used, so "1700000000000.5" parses to
    1700000000000. Keys without a leading integer are rejected.

    Args:
        key: Timestamp key from the raw log.

    Returns:
        Integer timestamp in milliseconds, or None if the key is unusable.
    """
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    match = _LEADING_INT.match(str(key))
    if not match:
        return None
    return int(match.group(1))


def extract_gps_points(raw_log: Mapping, config: Optional[AnalysisConfig] = None) -> List[Dict]:
    """
    Extract valid GPS points from a raw trip log.

    An entry becomes a point when it has a ``gps`` object whose latitude,
    longitude, altitude and speed are all numbers, and whose
    horizontalAccuracy is either missing/non-numeric or within the
    threshold. Accuracy and course default to 0.

    Args:
        raw_log: Mapping of timestamp key -> log record.
        config: Analysis parameters. Defaults to AnalysisConfig().

    Returns:
        List of point dictionaries (timestamp, lat, lng, altitude, speed,
        accuracy, course) sorted ascending by timestamp. Ties keep the
        order of the raw log.
    """
    config = config or AnalysisConfig()
    if not isinstance(raw_log, Mapping):
        return []

    rows = []
    dropped_accuracy = 0

    for key, entry in raw_log.items():
        reading = GpsReading.from_entry(entry)
        if reading is None or not reading.has_position:
            continue
        if not reading.within_accuracy(config.gps_accuracy_threshold):
            dropped_accuracy += 1
            continue
        timestamp = parse_timestamp_key(key)
        if timestamp is None:
            continue

        rows.append({
            "timestamp": timestamp,
            "lat": reading.latitude,
            "lng": reading.longitude,
            "altitude": reading.altitude,
            "speed": reading.speed,
            "accuracy": reading.horizontal_accuracy if reading.horizontal_accuracy is not None else 0,
            "course": reading.course if reading.course is not None else 0,
        })

    logger.debug(
        "gps_points_extracted",
        entries=len(raw_log),
        kept=len(rows),
        dropped_accuracy=dropped_accuracy,
    )

    if not rows:
        return []

    df = pd.DataFrame(rows, columns=POINT_COLUMNS)
    df = df.sort_values("timestamp", kind="stable").reset_index(drop=True)

    return df.to_dict("records")
