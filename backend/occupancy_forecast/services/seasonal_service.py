"""
Seasonal profile: average occupancy/revenue per calendar month across the window.
"""
import calendar
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from occupancy_forecast.models import MonthlyBucket, SeasonalEntry
from occupancy_forecast.services.dates import month_index, round_half_up


def compute_seasonal_profile(series: Sequence[MonthlyBucket]) -> List[SeasonalEntry]:
    """
    Group buckets by calendar month (Jan..Dec) and average each group.

    Only months present in the series appear, ordered by month index.
    """
    groups: Dict[int, List[MonthlyBucket]] = defaultdict(list)
    for bucket in series:
        groups[month_index(bucket.month_start)].append(bucket)

    profile = []
    for index in sorted(groups):
        buckets = groups[index]
        profile.append(SeasonalEntry(
            month_index=index,
            month_name=calendar.month_abbr[index + 1],
            avg_occupancy=round_half_up(sum(b.occupancy_rate for b in buckets) / len(buckets)),
            avg_revenue=round_half_up(sum(b.revenue for b in buckets) / len(buckets)),
        ))
    return profile


def seasonal_extremes(
    profile: Sequence[SeasonalEntry],
) -> Tuple[Optional[SeasonalEntry], Optional[SeasonalEntry]]:
    """Peak and low season by avg occupancy; ties go to the earlier month."""
    if not profile:
        return None, None
    peak = max(profile, key=lambda e: e.avg_occupancy)
    low = min(profile, key=lambda e: e.avg_occupancy)
    return peak, low
