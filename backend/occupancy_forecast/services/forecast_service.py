"""
Forecast Service - short-horizon occupancy & revenue forecast.

Trend: weighted moving average of the last 3 monthly buckets, most recent
month weighted highest. Each future month is blended 60/40 with the bucket
for the same calendar month when that sample is non-zero.
"""
import logging
from typing import List, Sequence, Tuple

from occupancy_forecast.models import MonthlyBucket, ForecastPoint, OccupancyHealth
from occupancy_forecast.services.dates import (
    add_months, month_index, month_label, round_half_up, first_match,
)

logger = logging.getLogger(__name__)

# Oldest to newest
TREND_WEIGHTS = (0.2, 0.3, 0.5)

TREND_SHARE = 0.6
SEASONAL_SHARE = 0.4

# (minimum occupancy, health), highest threshold first
HEALTH_TIERS = (
    (70, OccupancyHealth.EXCELLENT),
    (40, OccupancyHealth.FAIR),
    (0, OccupancyHealth.NEEDS_IMPROVEMENT),
)


def weighted_trend(series: Sequence[MonthlyBucket]) -> Tuple[int, int]:
    """
    Weighted moving average of the trailing buckets.

    Returns:
        Tuple of (avg_occupancy, avg_revenue), both rounded.

    With fewer than 3 buckets the trailing weights are renormalised,
    e.g. two buckets use 0.3/0.8 and 0.5/0.8.
    """
    recent = list(series[-len(TREND_WEIGHTS):])
    if not recent:
        return 0, 0
    weights = TREND_WEIGHTS[-len(recent):]
    total_weight = sum(weights)
    occupancy = sum(w * b.occupancy_rate for w, b in zip(weights, recent)) / total_weight
    revenue = sum(w * b.revenue for w, b in zip(weights, recent)) / total_weight
    return round_half_up(occupancy), round_half_up(revenue)


def compute_forecast(series: Sequence[MonthlyBucket], horizon_months: int = 3) -> List[ForecastPoint]:
    """
    Forecast the months following the last bucket of the series.

    Args:
        series: Monthly buckets, oldest to newest
        horizon_months: Number of future months (default 3)

    Returns:
        One ForecastPoint per future month; empty when the series is empty.
    """
    if horizon_months < 0:
        raise ValueError(f"horizon_months must be >= 0, got {horizon_months}")
    if not series:
        return []

    avg_occupancy, avg_revenue = weighted_trend(series)
    last_month = series[-1].month_start

    points = []
    for i in range(1, horizon_months + 1):
        target = add_months(last_month, i)
        seasonal = first_match(
            series, lambda b: month_index(b.month_start) == month_index(target)
        )

        if seasonal is not None and seasonal.occupancy_rate > 0:
            occupancy = min(100, round_half_up(
                avg_occupancy * TREND_SHARE + seasonal.occupancy_rate * SEASONAL_SHARE
            ))
            revenue = round_half_up(avg_revenue * TREND_SHARE + seasonal.revenue * SEASONAL_SHARE)
        else:
            occupancy = min(100, avg_occupancy)
            revenue = avg_revenue

        points.append(ForecastPoint(
            month_start=target,
            month_label=month_label(target),
            occupancy_rate=occupancy,
            revenue=revenue,
        ))

    logger.debug(f"[FORECAST] trend={avg_occupancy}% revenue={avg_revenue} horizon={horizon_months}")
    return points


def occupancy_health(rate: int) -> OccupancyHealth:
    """Badge tier for an occupancy percentage."""
    tier = first_match(HEALTH_TIERS, lambda t: rate >= t[0])
    return tier[1] if tier else OccupancyHealth.NEEDS_IMPROVEMENT
