"""Scheduling domain schemas - record snapshots and API request/response models"""

import datetime
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...config import MAX_WEEKS_TO_GENERATE
from ...shared.validators import validate_id_list, validate_iso_date
from .constants import MODE_SYNC, SCOPE_SINGLE, TERMINAL_STATUSES
from .errors import InvalidFormat
from .time_calculator import normalize_weekday, parse_clock_time

# ============================================================================
# RECORD SNAPSHOTS (read once per operation, never mutated)
# ============================================================================


class ClientSnapshot(BaseModel):
    """Recurrence and pricing configuration of a client"""

    id: int
    name: Optional[str] = None
    address: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    is_recurring: bool = False
    recurring_days: Optional[str] = None  # "Tuesday, Friday"
    recurrence_frequency: Optional[str] = None
    recurring_start_time: Optional[str] = None
    recurring_end_time: Optional[str] = None
    first_cleaning_date: Optional[date] = None
    preferred_cleaner_ids: list[int] = []
    pricing_type: Optional[str] = None
    charge_per_cleaning: Optional[float] = None
    hourly_rate: Optional[float] = None

    class Config:
        from_attributes = True
        frozen = True

    @field_validator("preferred_cleaner_ids", mode="before")
    @classmethod
    def default_cleaners(cls, v):
        return v or []


class CleanerSnapshot(BaseModel):
    id: int
    name: Optional[str] = None
    hourly_rate: Optional[float] = None

    class Config:
        from_attributes = True
        frozen = True


class JobSnapshot(BaseModel):
    id: int
    client_id: int
    cleaner_ids: list[int] = []
    date: Optional[datetime.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration_hours: Optional[float] = None
    status: str
    amount_charged: Optional[float] = None
    client_hourly_rate: Optional[float] = None
    profit: Optional[float] = None
    is_recurring: bool = False
    recurrence_frequency: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True

    @field_validator("cleaner_ids", mode="before")
    @classmethod
    def default_cleaners(cls, v):
        return v or []

    @property
    def is_terminal(self) -> bool:
        """Completed and cancelled jobs are never rescheduled"""
        return self.status in TERMINAL_STATUSES

    def is_future(self, today: datetime.date) -> bool:
        """Same-day jobs count as future"""
        return self.date is not None and self.date >= today


# ============================================================================
# REQUESTS
# ============================================================================


def _validate_days(v):
    if v is None:
        return v
    if isinstance(v, str):
        v = [part for part in v.split(",") if part.strip()]
    try:
        return [normalize_weekday(day) for day in v]
    except InvalidFormat as e:
        raise ValueError(str(e)) from None


def _validate_time(v):
    if v is None or v == "":
        return None
    try:
        parse_clock_time(v)
    except InvalidFormat as e:
        raise ValueError(str(e)) from None
    return v.strip()


class SyncJobsRequest(BaseModel):
    """Body of POST /clients/{client_id}/sync-jobs (sync or generate mode)"""

    mode: str = MODE_SYNC  # "sync" | "generate"
    recurringDays: Optional[list[str]] = None
    recurringStartTime: Optional[str] = None
    recurringEndTime: Optional[str] = None
    preferredCleaner: Optional[list[int]] = None
    frequency: Optional[str] = None
    weeksToGenerate: Optional[int] = Field(default=None, ge=1, le=MAX_WEEKS_TO_GENERATE)

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode(cls, v):
        return (v or MODE_SYNC).strip().lower()

    @field_validator("recurringDays", mode="before")
    @classmethod
    def validate_days(cls, v):
        return _validate_days(v)

    @field_validator("recurringStartTime", "recurringEndTime", mode="before")
    @classmethod
    def validate_times(cls, v):
        return _validate_time(v)

    @field_validator("preferredCleaner", mode="before")
    @classmethod
    def validate_cleaners(cls, v):
        return validate_id_list(v)


class RescheduleRequest(BaseModel):
    """Body of POST /jobs/reschedule"""

    jobId: int
    clientId: Optional[int] = None
    currentDate: Optional[date] = None
    newDate: date
    scope: str = SCOPE_SINGLE  # "single" | "all_future"

    @field_validator("currentDate", "newDate", mode="before")
    @classmethod
    def validate_dates(cls, v):
        return validate_iso_date(v)


# ============================================================================
# RESPONSES
# ============================================================================


class GenerateJobsResponse(BaseModel):
    success: bool
    createdCount: int
    skippedCount: int
    failedCount: int = 0
    message: str


class SyncJobsResponse(BaseModel):
    success: bool
    updatedCount: int
    failedCount: int = 0
    message: str


class RescheduleResponse(BaseModel):
    success: bool
    message: str
    updatedCount: int
    dayDiff: Optional[int] = None
    failedCount: int = 0


class JobResponse(BaseModel):
    id: int
    clientId: int
    cleanerIds: list[int]
    date: Optional[datetime.date]
    startTime: Optional[str]
    endTime: Optional[str]
    durationHours: Optional[float]
    status: str
    amountCharged: Optional[float]
    clientHourlyRate: Optional[float]
    profit: Optional[float]
    isRecurring: bool
    recurrenceFrequency: Optional[str]


class FutureJobsResponse(BaseModel):
    count: int
    jobs: list[JobResponse]
