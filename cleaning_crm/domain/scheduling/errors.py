"""Scheduling engine errors

Each error carries the HTTP status the router should answer with.
Only configuration-level problems stop an operation; individual write
failures are collected as PartialWriteFailure and reported in the result.
"""

from datetime import date
from typing import Optional


class SchedulingError(Exception):
    """Base class for scheduling engine errors"""

    status_code = 400


class MissingConfiguration(SchedulingError):
    """Required recurrence input is absent (e.g. no recurring days)"""

    status_code = 400


class NotFound(SchedulingError):
    """Referenced client, cleaner or job does not exist"""

    status_code = 404


class InvalidFormat(SchedulingError):
    """A time, date, weekday or scope value could not be parsed"""

    status_code = 400


class JobLocked(SchedulingError):
    """The job is completed or cancelled and can no longer be moved"""

    status_code = 409


class PartialWriteFailure(SchedulingError):
    """A single job create/update failed in the middle of a batch

    Collected on the apply result and reported as a failed count; never raised.
    """

    def __init__(
        self,
        message: str,
        job_id: Optional[int] = None,
        job_date: Optional[date] = None,
    ):
        super().__init__(message)
        self.job_id = job_id
        self.job_date = job_date
