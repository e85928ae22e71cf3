"""
Occupancy & Revenue Aggregation - monthly series for the forecast panel.

Occupancy is bucketed by stay date (interval overlap with each calendar month).
Revenue is bucketed by booking creation month, not stay month.
Pure functions: no I/O, no clock reads, nothing cached between calls.
"""
import logging
from typing import Iterable, List, Mapping, Tuple, Union
from datetime import date

from pydantic import ValidationError

from occupancy_forecast.models import (
    Booking, Property, MonthlyBucket, DataQualityWarning, InputError,
)
from occupancy_forecast.services.dates import (
    trailing_months, month_end, days_in_month, month_label,
    overlap_days, same_month, round_half_up,
)

logger = logging.getLogger(__name__)

BookingLike = Union[Booking, Mapping]
PropertyLike = Union[Property, Mapping]


def screen_bookings(bookings: Iterable[BookingLike]) -> Tuple[List[Booking], int]:
    """
    Keep the bookings that take part in occupancy and revenue.

    Raw mappings are validated into Booking records. Records with missing
    fields, unparseable dates or check-out before check-in are skipped and
    counted. Cancelled bookings are dropped without being counted.

    Returns:
        Tuple of (active bookings, skipped count)
    """
    active = []
    skipped = 0
    for raw in bookings:
        try:
            booking = raw if isinstance(raw, Booking) else Booking.model_validate(raw)
        except (ValidationError, InputError, TypeError) as e:
            skipped += 1
            logger.debug(f"[OCCUPANCY] Skipping booking {_record_id(raw)}: {e}")
            continue
        if booking.is_cancelled:
            continue
        active.append(booking)
    if skipped:
        logger.warning(f"[OCCUPANCY] Skipped {skipped} malformed booking(s)")
    return active, skipped


def screen_properties(properties: Iterable[PropertyLike]) -> Tuple[List[Property], int]:
    """Validate properties; returns (valid properties, skipped count)."""
    valid = []
    skipped = 0
    for raw in properties:
        try:
            valid.append(raw if isinstance(raw, Property) else Property.model_validate(raw))
        except (ValidationError, InputError, TypeError) as e:
            skipped += 1
            logger.debug(f"[OCCUPANCY] Skipping property {_record_id(raw)}: {e}")
    if skipped:
        logger.warning(f"[OCCUPANCY] Skipped {skipped} malformed property record(s)")
    return valid, skipped


def _record_id(raw) -> str:
    if isinstance(raw, Mapping):
        return str(raw.get("id", "?"))
    return str(getattr(raw, "id", "?"))


def build_data_quality(skipped_bookings: int, skipped_properties: int) -> DataQualityWarning:
    """Soft notice for callers; message is None when nothing was skipped."""
    message = None
    if skipped_bookings or skipped_properties:
        message = (
            f"{skipped_bookings} booking(s) and {skipped_properties} property record(s) "
            f"were excluded because of invalid data"
        )
    return DataQualityWarning(
        skipped_bookings=skipped_bookings,
        skipped_properties=skipped_properties,
        message=message,
    )


def compute_monthly_series(
    properties: Iterable[PropertyLike],
    bookings: Iterable[BookingLike],
    as_of: date,
    months_back: int = 12,
) -> List[MonthlyBucket]:
    """Monthly buckets only; see compute_monthly_series_with_quality."""
    series, _ = compute_monthly_series_with_quality(properties, bookings, as_of, months_back)
    return series


def compute_monthly_series_with_quality(
    properties: Iterable[PropertyLike],
    bookings: Iterable[BookingLike],
    as_of: date,
    months_back: int = 12,
) -> Tuple[List[MonthlyBucket], DataQualityWarning]:
    """
    Build one bucket per trailing calendar month, oldest to newest.

    Args:
        properties: Properties in scope (capacity = days in month x property count)
        bookings: Bookings for those properties; cancelled/malformed ones are ignored
        as_of: Anchor date; the last bucket is the month containing it
        months_back: Number of trailing months (default 12)

    Returns:
        Tuple of (MonthlyBucket list, DataQualityWarning). The list is empty
        when no properties are in scope.

    Overlapping bookings on the same property are summed, not deduplicated;
    the final percentage is clamped to 100.
    """
    if months_back < 1:
        raise ValueError(f"months_back must be >= 1, got {months_back}")

    props, skipped_properties = screen_properties(properties)
    active, skipped_bookings = screen_bookings(bookings)
    quality = build_data_quality(skipped_bookings, skipped_properties)
    if not props:
        return [], quality
    property_count = len(props)

    series = []
    for start in trailing_months(as_of, months_back):
        end = month_end(start)

        month_bookings = [
            b for b in active
            if b.check_in_date <= end and b.check_out_date >= start
        ]
        booked_days = sum(
            overlap_days(b.check_in_date, b.check_out_date, start, end)
            for b in month_bookings
        )

        capacity_days = days_in_month(start) * property_count
        if capacity_days > 0:
            occupancy_rate = min(100, round_half_up(booked_days / capacity_days * 100))
        else:
            occupancy_rate = 0

        revenue = sum(
            b.total_amount for b in active
            if same_month(b.created_at, start)
        )

        series.append(MonthlyBucket(
            month_start=start,
            month_label=month_label(start),
            occupancy_rate=occupancy_rate,
            revenue=revenue,
            booking_count=len(month_bookings),
        ))

    logger.debug(
        f"[OCCUPANCY] {len(series)} months for {property_count} properties, "
        f"{len(active)} active bookings"
    )
    return series, quality
