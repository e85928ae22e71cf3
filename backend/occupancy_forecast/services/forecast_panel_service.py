"""
Forecast Panel Service - assembles the Occupancy & Revenue Forecast panel.

Runs the monthly aggregation, forecast, seasonal profile and property
ranking over one property/booking snapshot and adds the KPI summary.
"""
import logging
from typing import Iterable, Optional
from datetime import date

from occupancy_forecast.models import ForecastSummary, OccupancyForecastResponse
from occupancy_forecast.services.occupancy_service import (
    BookingLike, PropertyLike, compute_monthly_series,
    screen_bookings, screen_properties, build_data_quality,
)
from occupancy_forecast.services.forecast_service import (
    compute_forecast, weighted_trend, occupancy_health,
)
from occupancy_forecast.services.seasonal_service import (
    compute_seasonal_profile, seasonal_extremes,
)
from occupancy_forecast.services.ranking_service import rank_properties
from occupancy_forecast.services.dates import round_half_up

logger = logging.getLogger(__name__)

# Actual months shown ahead of the forecast in the combined chart
COMBINED_CHART_MONTHS = 6


def build_occupancy_forecast(
    properties: Iterable[PropertyLike],
    bookings: Iterable[BookingLike],
    as_of: date,
    property_id: Optional[str] = None,
    months_back: int = 12,
    horizon_months: int = 3,
    owner_id: Optional[str] = None,
    upstream_skipped_bookings: int = 0,
    upstream_skipped_properties: int = 0,
) -> OccupancyForecastResponse:
    """
    Compute the full panel payload.

    Args:
        properties: All properties of the owner
        bookings: Bookings for those properties
        as_of: Anchor date for the trailing window
        property_id: Restrict the monthly series/forecast to one property (None = all)
        months_back: Trailing window length
        horizon_months: Forecast horizon
        owner_id: Echoed back in the response
        upstream_skipped_bookings: Rows already rejected by the repository
        upstream_skipped_properties: Rows already rejected by the repository

    The property ranking always covers every property of the owner.
    """
    props, skipped_properties = screen_properties(properties)
    active, skipped_bookings = screen_bookings(bookings)
    skipped_properties += upstream_skipped_properties
    skipped_bookings += upstream_skipped_bookings

    if property_id is None:
        scoped_props, scoped_bookings = props, active
    else:
        scoped_props = [p for p in props if p.id == property_id]
        scoped_bookings = [b for b in active if b.property_id == property_id]

    monthly = compute_monthly_series(scoped_props, scoped_bookings, as_of, months_back)
    forecast = compute_forecast(monthly, horizon_months)
    seasonal = compute_seasonal_profile(monthly)
    peak, low = seasonal_extremes(seasonal)
    ranking = rank_properties(props, active)

    trend_occupancy, _ = weighted_trend(monthly)
    current = monthly[-1] if monthly else None
    previous = monthly[-2] if len(monthly) > 1 else None

    occupancy_change = current.occupancy_rate - previous.occupancy_rate if previous else 0
    if previous and previous.revenue > 0:
        revenue_change = round_half_up((current.revenue - previous.revenue) / previous.revenue * 100)
    else:
        revenue_change = 0

    summary = ForecastSummary(
        current_occupancy=current.occupancy_rate if current else 0,
        current_revenue=current.revenue if current else 0,
        occupancy_change=occupancy_change,
        revenue_change=revenue_change,
        trend_occupancy=trend_occupancy,
        forecast_revenue=sum(p.revenue for p in forecast),
        total_properties=len(scoped_props),
        health=occupancy_health(trend_occupancy),
    )

    data_quality = build_data_quality(skipped_bookings, skipped_properties)
    if data_quality.has_issues:
        logger.warning(f"[FORECAST-PANEL] owner={owner_id}: {data_quality.message}")

    logger.info(
        f"[FORECAST-PANEL] owner={owner_id} property={property_id or 'all'}: "
        f"{len(monthly)} months, {len(forecast)} forecast points, trend={trend_occupancy}%"
    )

    return OccupancyForecastResponse(
        owner_id=owner_id,
        property_id=property_id,
        as_of=as_of,
        summary=summary,
        monthly=monthly,
        forecast=forecast,
        combined_chart=[*monthly[-COMBINED_CHART_MONTHS:], *forecast],
        seasonal=seasonal,
        peak_season=peak,
        low_season=low,
        property_ranking=ranking,
        data_quality=data_quality,
    )
