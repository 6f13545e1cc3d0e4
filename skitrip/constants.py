"""
Constants for Ski Trip Analysis

This module defines path constants and analysis thresholds used throughout
the trip analytics pipeline.
"""

from pathlib import Path

# Relative data paths (e.g. ./JSON) resolve against the project root
PROJECT_ROOT = Path(__file__).parent.parent
SLOPES_FILE_NAME = "slopes.json"

# GPS filtering
DEFAULT_GPS_ACCURACY_THRESHOLD_M = 50.0

EARTH_RADIUS_KM = 6371.0

# Acceleration zones
ACCELERATION_THRESHOLD_MPS2 = 1.0
MIN_ZONE_POINTS = 3

# Activity classification (m/s)
STOPPED_SPEED_MPS = 0.5
SKIING_SPEED_MPS = 2.0

# Speed zones: [0, 0.5) [0.5, 2) [2, 5) [5, 10) [10, inf)
SPEED_ZONE_EDGES_MPS = [0.5, 2.0, 5.0, 10.0]
SPEED_ZONE_NAMES = ["stationary", "slow", "moderate", "fast", "veryFast"]

# Slope difficulty by gradient (%): <15 green, 15-25 blue, 25-40 red, >=40 black
DIFFICULTY_EDGES_PCT = [15.0, 25.0, 40.0]
DIFFICULTY_NAMES = ["green", "blue", "red", "black"]

STEEPEST_SECTION_COUNT = 5

# Elevation quartiles
ELEVATION_ZONE_NAMES = ["bottom", "lower", "upper", "top"]
