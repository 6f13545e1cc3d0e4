"""
Slope Occupancy Storage for the Ski Trip Companion

Slopes are kept as a JSON list in ``slopes.json`` inside the data directory.
Each slope records its difficulty colour and current occupancy, which the
UI edits through the slope endpoints.
"""

import json
import uuid
from pathlib import Path
from typing import Dict, List, Literal, Optional

import structlog
from pydantic import BaseModel, Field

from . import constants
from .errors import InvalidTripFileError, SlopeNotFoundError
from .trip_store import validate_identifier

logger = structlog.get_logger(__name__)

Difficulty = Literal["green", "blue", "red", "black"]


class SlopeCreate(BaseModel):
    """Request body for a new slope."""

    name: str = Field(min_length=1, description="Slope name")
    difficulty: Difficulty = Field(description="Difficulty colour")
    occupancy: int = Field(default=0, ge=0, le=100, description="Occupancy in percent")
    status: str = Field(default="open", description="open or closed")


class SlopeUpdate(BaseModel):
    """Partial update of a slope; omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, min_length=1)
    difficulty: Optional[Difficulty] = None
    occupancy: Optional[int] = Field(default=None, ge=0, le=100)
    status: Optional[str] = None


def slopes_path(data_dir: Path) -> Path:
    return Path(data_dir) / constants.SLOPES_FILE_NAME


def _read(data_dir: Path) -> List[Dict]:
    path = slopes_path(data_dir)
    if not path.is_file():
        return []
    with path.open("r", encoding="utf-8") as file:
        content = file.read()
    if not content.strip():
        return []
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise InvalidTripFileError(f"Invalid JSON format in {path.name}") from exc


def _write(data_dir: Path, slopes: List[Dict]) -> None:
    path = slopes_path(data_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as file:
        json.dump(slopes, file, indent=2)


def list_slopes(data_dir: Path) -> List[Dict]:
    return _read(data_dir)


def get_slope(data_dir: Path, slope_id: str) -> Dict:
    """
    Find a slope by id.

    Raises:
        SlopeNotFoundError: If the id is unknown.
    """
    validate_identifier(slope_id)
    for slope in _read(data_dir):
        if slope.get("id") == slope_id:
            return slope
    raise SlopeNotFoundError(slope_id)


def create_slope(data_dir: Path, slope: SlopeCreate) -> Dict:
    slopes = _read(data_dir)
    record = {"id": uuid.uuid4().hex[:12], **slope.model_dump()}
    slopes.append(record)
    _write(data_dir, slopes)
    logger.info("slope_created", slope_id=record["id"], name=record["name"])
    return record


def update_slope(data_dir: Path, slope_id: str, changes: SlopeUpdate) -> Dict:
    """
    Apply a partial update to a slope.

    Args:
        data_dir: Directory holding slopes.json.
        slope_id: Id of the slope to change.
        changes: Fields to overwrite.

    Returns:
        The updated slope record.

    Raises:
        SlopeNotFoundError: If the id is unknown.
    """
    validate_identifier(slope_id)
    slopes = _read(data_dir)
    for slope in slopes:
        if slope.get("id") == slope_id:
            slope.update(changes.model_dump(exclude_none=True))
            _write(data_dir, slopes)
            logger.info("slope_updated", slope_id=slope_id, occupancy=slope.get("occupancy"))
            return slope
    raise SlopeNotFoundError(slope_id)


def delete_slope(data_dir: Path, slope_id: str) -> None:
    validate_identifier(slope_id)
    slopes = _read(data_dir)
    remaining = [slope for slope in slopes if slope.get("id") != slope_id]
    if len(remaining) == len(slopes):
        raise SlopeNotFoundError(slope_id)
    _write(data_dir, remaining)
    logger.info("slope_deleted", slope_id=slope_id)
