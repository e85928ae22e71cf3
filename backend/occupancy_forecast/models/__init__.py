# Models package - re-export forecast models

from .forecast import (
    InputError,
    BookingStatus,
    OccupancyHealth,
    Property,
    Booking,
    MonthlyBucket,
    ForecastPoint,
    SeasonalEntry,
    PropertyOccupancy,
    DataQualityWarning,
    ForecastSummary,
    OccupancyForecastResponse,
)
