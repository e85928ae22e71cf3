"""
Pydantic models for the occupancy & revenue forecast.

Input records (Property, Booking) are validated at the repository boundary;
everything else is derived per request and never persisted.
"""
from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator
from typing import List, Literal, Optional, Union
from datetime import date, datetime
from enum import Enum

from occupancy_forecast.services.dates import parse_date, parse_datetime


class InputError(ValueError):
    """A property or booking record that cannot take part in the computation."""


class BookingStatus(str, Enum):
    """Booking lifecycle states as stored by the booking service."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OccupancyHealth(str, Enum):
    """Badge shown next to the trend occupancy."""
    EXCELLENT = "excellent"
    FAIR = "fair"
    NEEDS_IMPROVEMENT = "needs_improvement"


class Property(BaseModel):
    """Owner property (read-only input)."""
    id: str
    title: str = ""
    city: str = ""
    status: Optional[str] = None
    listing_type: Optional[str] = None

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise InputError("property id is required")
        return v


class Booking(BaseModel):
    """Rental booking (read-only input)."""
    id: str
    property_id: str
    check_in_date: date
    check_out_date: date
    total_amount: float = 0
    # Stored as `booking_status` in the rental_bookings table
    status: Optional[str] = Field(None, validation_alias=AliasChoices("status", "booking_status"))
    created_at: datetime

    @field_validator("check_in_date", "check_out_date", mode="before")
    @classmethod
    def parse_stay_date(cls, v):
        if isinstance(v, (str, datetime)):
            return parse_date(v) or v
        return v

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v):
        if isinstance(v, (str, date)):
            return parse_datetime(v) or v
        return v

    @field_validator("total_amount", mode="before")
    @classmethod
    def amount_default(cls, v):
        # NULL amounts are stored for bookings awaiting payment
        return 0 if v is None else v

    @field_validator("total_amount")
    @classmethod
    def amount_not_negative(cls, v: float) -> float:
        if v < 0:
            raise InputError(f"total_amount must not be negative, got {v}")
        return v

    @model_validator(mode="after")
    def stay_is_ordered(self):
        if self.check_out_date < self.check_in_date:
            raise InputError(
                f"check_out_date {self.check_out_date} is before check_in_date {self.check_in_date}"
            )
        return self

    @property
    def is_cancelled(self) -> bool:
        return (self.status or "").lower() == BookingStatus.CANCELLED.value


class MonthlyBucket(BaseModel):
    """Actual occupancy and revenue for one calendar month."""
    month_start: date
    month_label: str
    occupancy_rate: int       # Percentage 0-100, by stay date
    revenue: float            # Sum of total_amount, by booking creation month
    booking_count: int
    is_forecast: Literal[False] = False


class ForecastPoint(BaseModel):
    """Predicted occupancy and revenue for one future month."""
    month_start: date
    month_label: str
    occupancy_rate: int       # Percentage 0-100
    revenue: float
    is_forecast: Literal[True] = True


class SeasonalEntry(BaseModel):
    """Average occupancy/revenue for one calendar month across the window."""
    month_index: int          # 0 = January ... 11 = December
    month_name: str
    avg_occupancy: int
    avg_revenue: int


class PropertyOccupancy(BaseModel):
    """Per-property occupancy ranking row."""
    property_id: str
    title: str = ""
    city: str = ""
    occupancy: int            # Percentage of a 365-day year, 0-100
    total_days: int
    revenue: float
    booking_count: int


class DataQualityWarning(BaseModel):
    """Soft notice about records skipped during the computation."""
    skipped_bookings: int = 0
    skipped_properties: int = 0
    message: Optional[str] = None

    @property
    def has_issues(self) -> bool:
        return self.skipped_bookings > 0 or self.skipped_properties > 0


class ForecastSummary(BaseModel):
    """KPI cards at the top of the forecast panel."""
    current_occupancy: int
    current_revenue: float
    occupancy_change: int     # Percentage points vs previous month
    revenue_change: int       # Percent vs previous month
    trend_occupancy: int      # Weighted moving average of the last 3 months
    forecast_revenue: float   # Sum over the forecast horizon
    total_properties: int
    health: OccupancyHealth


class OccupancyForecastResponse(BaseModel):
    """Full payload of the Occupancy & Revenue Forecast panel."""
    owner_id: Optional[str] = None
    property_id: Optional[str] = None
    as_of: date
    summary: ForecastSummary
    monthly: List[MonthlyBucket]
    forecast: List[ForecastPoint]
    combined_chart: List[Union[MonthlyBucket, ForecastPoint]]
    seasonal: List[SeasonalEntry]
    peak_season: Optional[SeasonalEntry] = None
    low_season: Optional[SeasonalEntry] = None
    property_ranking: List[PropertyOccupancy]
    data_quality: DataQualityWarning
