"""
Trip File Storage for the Ski Trip Companion

This module lists, loads and deletes trip logs stored as one JSON file per
trip in the data directory.
"""

import json
import re
from pathlib import Path
from typing import Dict, List

import structlog

from . import constants
from .errors import (
    EmptyTripFileError,
    InvalidIdentifierError,
    InvalidTripFileError,
    TripNotFoundError,
)

logger = structlog.get_logger(__name__)

_VALID_ID = re.compile(r"^[A-Za-z0-9_-]+$")
_TRIP_DATE = re.compile(r"trip_(\d{8})_(\d{6})")


def validate_identifier(identifier: str) -> str:
    """
    Reject ids that are not plain file stems.

    Raises:
        InvalidIdentifierError: If the id contains anything but letters,
        digits, '_' or '-'.
    """
    if not _VALID_ID.match(identifier or ""):
        raise InvalidIdentifierError(f"Invalid identifier: {identifier!r}")
    return identifier


def trip_date_label(trip_id: str) -> str:
    """
    Derive a display date from a trip id.

    Args:
        trip_id: File stem such as "trip_20240105_093012".

    Returns:
        "2024-01-05 09:30", or "Unknown" if the id carries no date.
    """
    match = _TRIP_DATE.search(trip_id)
    if not match:
        return "Unknown"
    day, time = match.groups()
    return f"{day[0:4]}-{day[4:6]}-{day[6:8]} {time[0:2]}:{time[2:4]}"


def trip_path(data_dir: Path, trip_id: str) -> Path:
    return Path(data_dir) / f"{validate_identifier(trip_id)}.json"


def list_trips(data_dir: Path) -> List[Dict]:
    """
    Discover available trip files in the data directory.

    Args:
        data_dir: Directory holding trip JSON files.

    Returns:
        List of dictionaries with 'id', 'filename' and 'date' keys, newest
        (highest id) first.

    Raises:
        TripNotFoundError: If the directory does not exist.
    """
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise TripNotFoundError(f"Trip directory not found: {data_dir}")

    trips = []
    for file_path in data_dir.glob("*.json"):
        if file_path.name == constants.SLOPES_FILE_NAME:
            continue
        trips.append({
            "id": file_path.stem,
            "filename": file_path.name,
            "date": trip_date_label(file_path.stem),
        })

    trips.sort(key=lambda x: x["id"], reverse=True)
    return trips


def load_trip(data_dir: Path, trip_id: str):
    """
    Load the raw log of a single trip.

    Args:
        data_dir: Directory holding trip JSON files.
        trip_id: Trip file stem.

    Returns:
        Decoded JSON content of the trip file.

    Raises:
        TripNotFoundError: If no such trip exists.
        EmptyTripFileError: If the file is blank.
        InvalidTripFileError: If the file is not valid JSON.
    """
    file_path = trip_path(data_dir, trip_id)
    if not file_path.is_file():
        raise TripNotFoundError(f"Trip not found: {trip_id}")

    with file_path.open("r", encoding="utf-8") as file:
        content = file.read()

    if not content.strip():
        logger.warning("trip_file_empty", trip_id=trip_id)
        raise EmptyTripFileError(f"Trip data file is empty: {trip_id}")

    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        logger.warning("trip_file_invalid_json", trip_id=trip_id, error=str(exc))
        raise InvalidTripFileError(f"Invalid JSON format in trip data file: {trip_id}") from exc


def delete_trip(data_dir: Path, trip_id: str) -> None:
    """
    Delete a trip file.

    Raises:
        TripNotFoundError: If no such trip exists.
    """
    file_path = trip_path(data_dir, trip_id)
    if not file_path.is_file():
        raise TripNotFoundError(f"Trip not found: {trip_id}")
    file_path.unlink()
    logger.info("trip_deleted", trip_id=trip_id)
