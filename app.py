"""
FastAPI Web Application for the Ski Trip Companion

This module provides the REST API consumed by the browser UI: listing,
fetching, analysing, exporting and deleting trip logs, editing slope
occupancy, and a health check.
"""

from datetime import datetime, timezone
from typing import Dict, List

import structlog
import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from skitrip import analyze_trip
from skitrip import slope_store
from skitrip import trip_store
from skitrip.config import AppSettings, get_settings
from skitrip.errors import (
    EmptyTripFileError,
    InvalidIdentifierError,
    InvalidTripFileError,
    SlopeNotFoundError,
    TripNotFoundError,
)
from skitrip.logging_config import configure_logging


# ============================================================================
# APPLICATION SETUP
# ============================================================================

settings = get_settings()
configure_logging(settings.log_level, settings.log_format)
logger = structlog.get_logger(__name__)

app = FastAPI(title="Ski Trip Companion API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix=settings.api_prefix)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("unhandled_error", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ============================================================================
# TRIP LOADING
# ============================================================================

def load_raw_trip(settings: AppSettings, trip_id: str):
    """
    Load a trip log and translate storage errors into HTTP errors.

    Args:
        settings: Application settings (provides the data directory).
        trip_id: Trip file stem.

    Returns:
        Decoded trip JSON.

    Raises:
        HTTPException: 404 if the trip does not exist, 400 if the id is
        invalid or the file is empty or not valid JSON.
    """
    try:
        return trip_store.load_trip(settings.data_dir, trip_id)
    except TripNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Trip not found") from exc
    except EmptyTripFileError as exc:
        raise HTTPException(status_code=400, detail="Trip data file is empty") from exc
    except (InvalidTripFileError, InvalidIdentifierError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# ============================================================================
# API ROUTES - TRIPS
# ============================================================================

@router.get("/trips")
def get_trips(settings: AppSettings = Depends(get_settings)) -> List[Dict]:
    """
    Get list of available trips, newest first.

    Returns:
        List of dictionaries with 'id', 'filename' and 'date' keys.
    """
    try:
        trips = trip_store.list_trips(settings.data_dir)
    except TripNotFoundError as exc:
        raise HTTPException(status_code=404, detail="JSON directory not found") from exc
    logger.info("trips_listed", count=len(trips))
    return trips


@router.get("/trips/{trip_id}")
def get_trip(trip_id: str, settings: AppSettings = Depends(get_settings)) -> Dict:
    """
    Get the raw log of a trip along with basic metadata.

    Returns:
        Dictionary with id, data (the raw log) and metadata (totalEntries,
        hasGPS).
    """
    data = load_raw_trip(settings, trip_id)
    return {
        "id": trip_id,
        "data": data,
        "metadata": analyze_trip.summarize_raw_log(data),
    }


@router.get("/trips/{trip_id}/analysis")
def get_trip_analysis(trip_id: str, settings: AppSettings = Depends(get_settings)) -> Dict:
    """
    Get the parsed trip with performance, slope and altitude analyses.

    Uses the configured GPS accuracy threshold.
    """
    data = load_raw_trip(settings, trip_id)
    return analyze_trip.analyze_trip_data(data, settings.analysis_config())


@router.delete("/trips/{trip_id}")
def remove_trip(trip_id: str, settings: AppSettings = Depends(get_settings)) -> Dict:
    try:
        trip_store.delete_trip(settings.data_dir, trip_id)
    except TripNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Trip not found") from exc
    except InvalidIdentifierError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"deleted": trip_id}


# ============================================================================
# API ROUTES - EXPORT
# ============================================================================

@router.get("/trips/{trip_id}/export")
def export_trip(trip_id: str, settings: AppSettings = Depends(get_settings)):
    """
    Export the filtered GPS points of a trip as CSV.

    Returns:
        PlainTextResponse: CSV file with Content-Disposition header
        for download. Filename: {trip_id}.csv
    """
    data = load_raw_trip(settings, trip_id)
    parsed = analyze_trip.parse_trip_data(data, settings.analysis_config())
    headers = {"Content-Disposition": f"attachment; filename={trip_id}.csv"}
    return PlainTextResponse(
        analyze_trip.export_points_csv(parsed),
        media_type="text/csv",
        headers=headers,
    )


# ============================================================================
# API ROUTES - SLOPES
# ============================================================================

@router.get("/slopes")
def get_slopes(settings: AppSettings = Depends(get_settings)) -> List[Dict]:
    try:
        return slope_store.list_slopes(settings.data_dir)
    except InvalidTripFileError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("/slopes", status_code=201)
def add_slope(slope: slope_store.SlopeCreate, settings: AppSettings = Depends(get_settings)) -> Dict:
    return slope_store.create_slope(settings.data_dir, slope)


@router.get("/slopes/{slope_id}")
def get_slope(slope_id: str, settings: AppSettings = Depends(get_settings)) -> Dict:
    try:
        return slope_store.get_slope(settings.data_dir, slope_id)
    except SlopeNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Slope not found") from exc
    except InvalidIdentifierError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/slopes/{slope_id}")
def edit_slope(slope_id: str, changes: slope_store.SlopeUpdate,
               settings: AppSettings = Depends(get_settings)) -> Dict:
    """
    Update a slope, typically its occupancy.

    Raises:
        HTTPException: If slope_id is not found (status 404).
    """
    try:
        return slope_store.update_slope(settings.data_dir, slope_id, changes)
    except SlopeNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Slope not found") from exc
    except InvalidIdentifierError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/slopes/{slope_id}")
def remove_slope(slope_id: str, settings: AppSettings = Depends(get_settings)) -> Dict:
    try:
        slope_store.delete_slope(settings.data_dir, slope_id)
    except SlopeNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Slope not found") from exc
    except InvalidIdentifierError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"deleted": slope_id}


# ============================================================================
# API ROUTES - HEALTH
# ============================================================================

@router.get("/health")
def health(settings: AppSettings = Depends(get_settings)) -> Dict:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


app.include_router(router)


# ============================================================================
# RUN INSTRUCTIONS
# ============================================================================
# Run with: uvicorn app:app --reload (or python app.py)

if __name__ == "__main__":
    logger.info(
        "server_starting",
        port=settings.port,
        environment=settings.environment,
        data_dir=str(settings.data_dir),
        cors_origin=settings.cors_origin,
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
