"""
API Routes - Owner Occupancy Forecast
READ-ONLY endpoints. All operations are GET-only.
"""
from fastapi import APIRouter, HTTPException, Query
from typing import List, Optional
from datetime import date, datetime

from occupancy_forecast.config import get_settings
from occupancy_forecast.db.repository import PropertyReader, BookingReader
from occupancy_forecast.services.forecast_panel_service import build_occupancy_forecast
from occupancy_forecast.models import Property, OccupancyForecastResponse

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.get("/owners/{owner_id}/properties", response_model=List[Property])
async def get_owner_properties(owner_id: str):
    """
    GET: List the owner's properties.
    Used for the property selector dropdown.
    """
    try:
        return PropertyReader(get_settings().database_path).list_by_owner(owner_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/owners/{owner_id}/occupancy-forecast", response_model=OccupancyForecastResponse)
async def get_occupancy_forecast(
    owner_id: str,
    property_id: Optional[str] = Query(None, description="Single property filter (omit for all)"),
    months_back: Optional[int] = Query(None, ge=1, le=60, description="Trailing months of actuals"),
    horizon: Optional[int] = Query(None, ge=0, le=24, description="Months to forecast"),
    as_of: Optional[date] = Query(None, description="Anchor date (defaults to today)"),
):
    """
    GET: Occupancy & revenue forecast panel for an owner.

    Returns monthly actuals, the weighted-trend forecast blended with the
    same-month seasonal sample, the seasonal profile with peak/low season,
    the per-property ranking and KPI summary.
    """
    settings = get_settings()
    property_reader = PropertyReader(settings.database_path)
    booking_reader = BookingReader(settings.database_path)

    try:
        properties = property_reader.list_by_owner(owner_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not properties:
        raise HTTPException(status_code=404, detail=f"No properties found for owner {owner_id}")
    if property_id is not None and all(p.id != property_id for p in properties):
        raise HTTPException(status_code=404, detail=f"Property {property_id} not found for owner {owner_id}")

    try:
        bookings = booking_reader.list_by_properties(
            [p.id for p in properties], limit=settings.booking_fetch_limit
        )
        return build_occupancy_forecast(
            properties,
            bookings,
            as_of=as_of or date.today(),
            property_id=property_id,
            months_back=months_back or settings.default_months_back,
            horizon_months=settings.default_horizon_months if horizon is None else horizon,
            owner_id=owner_id,
            upstream_skipped_bookings=booking_reader.skipped_rows,
            upstream_skipped_properties=property_reader.skipped_rows,
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
