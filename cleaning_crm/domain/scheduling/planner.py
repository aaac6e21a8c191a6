"""
Recurring-job planner

Pure functions that turn one consistent snapshot of a client's records plus a
request into a Plan: the exact job creates and updates to perform. Nothing in
this module talks to the record store; the executor applies plans.

Three planners:
- plan_generate: expand a recurring schedule into new job instances
- plan_sync: move/retime existing future jobs onto an updated schedule
- plan_reschedule: shift one job, or every future job, by a day delta
"""

import datetime
import logging
from datetime import date, timedelta
from typing import Any, NamedTuple, Optional

from pydantic import BaseModel

from ...config import (
    DEFAULT_DURATION_HOURS,
    DEFAULT_END_TIME,
    DEFAULT_SERVICE_TYPE,
    DEFAULT_START_TIME,
    DEFAULT_WEEKS_TO_GENERATE,
)
from .constants import (
    MODE_GENERATE,
    MODE_SYNC,
    RESCHEDULE_SCOPES,
    SCOPE_SINGLE,
    STATUS_SCHEDULED,
)
from .errors import InvalidFormat, MissingConfiguration
from .pricing import compute_charge_and_rate, compute_payout_and_profit, round_half_up
from .schemas import (
    CleanerSnapshot,
    ClientSnapshot,
    JobSnapshot,
    RescheduleRequest,
    SyncJobsRequest,
)
from .time_calculator import (
    advance_by_frequency,
    advance_sync_cursor,
    days_between,
    duration_hours,
    next_occurrence_of_weekday,
    normalize_frequency,
    normalize_weekday,
)

logger = logging.getLogger(__name__)


class ScheduleSnapshot(BaseModel):
    """Everything a planner may read, captured once before any write"""

    today: date
    client: Optional[ClientSnapshot] = None
    jobs: list[JobSnapshot] = []
    cleaners: dict[int, CleanerSnapshot] = {}

    def client_jobs(self, client_id: int) -> list[JobSnapshot]:
        return [job for job in self.jobs if job.client_id == client_id]


class PlannedCreate(BaseModel):
    date: datetime.date
    fields: dict[str, Any]


class PlannedUpdate(BaseModel):
    job_id: int
    fields: dict[str, Any]


class Plan(BaseModel):
    mode: str
    creates: list[PlannedCreate] = []
    updates: list[PlannedUpdate] = []
    skipped_dates: list[date] = []
    day_diff: Optional[int] = None


class TimeWindow(NamedTuple):
    start_time: str
    end_time: str
    duration_hours: float


# ============================================================================
# INPUT RESOLUTION
# ============================================================================


def parse_recurring_days(value) -> list[str]:
    """
    Canonical weekday names from a list or a comma-separated string.

    Configuration order is kept and unknown names are dropped with a warning,
    so one bad entry in a stored client record does not block the rest.
    """
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")

    days = []
    for raw in value:
        if not raw or not str(raw).strip():
            continue
        try:
            days.append(normalize_weekday(raw))
        except InvalidFormat:
            logger.warning(f"⚠️ Ignoring unknown recurring day: {raw!r}")
    return days


def resolve_time_window(start_time: Optional[str], end_time: Optional[str]) -> TimeWindow:
    """
    Apply the time fallback policy.

    Unparsable times fall back to the default window and duration; a window
    that does not end after it starts keeps its times but uses the default
    duration.
    """
    start_time = start_time or DEFAULT_START_TIME
    end_time = end_time or DEFAULT_END_TIME
    try:
        hours = duration_hours(start_time, end_time)
    except InvalidFormat as e:
        logger.warning(f"⚠️ {e} - using {DEFAULT_START_TIME} to {DEFAULT_END_TIME}")
        return TimeWindow(DEFAULT_START_TIME, DEFAULT_END_TIME, DEFAULT_DURATION_HOURS)

    if hours <= 0:
        logger.warning(
            f"⚠️ End time {end_time} is not after start time {start_time} - "
            f"using {DEFAULT_DURATION_HOURS}h duration"
        )
        hours = DEFAULT_DURATION_HOURS
    return TimeWindow(start_time, end_time, hours)


def resolve_cleaner_ids(client: ClientSnapshot, request: SyncJobsRequest) -> list[int]:
    """Cleaners for generated jobs; the first one is paid for the job"""
    return list(request.preferredCleaner or client.preferred_cleaner_ids or [])


# ============================================================================
# GENERATE
# ============================================================================


def _price_job(client: ClientSnapshot, hours: float) -> tuple[Optional[float], Optional[float]]:
    try:
        charge = compute_charge_and_rate(
            client.pricing_type,
            hours,
            charge_per_cleaning=client.charge_per_cleaning,
            hourly_rate=client.hourly_rate,
        )
    except MissingConfiguration as e:
        logger.warning(f"⚠️ Client {client.id}: {e} - creating jobs without pricing")
        return None, None
    return charge.amount_charged, charge.client_hourly_rate


def plan_generate(snapshot: ScheduleSnapshot, request: SyncJobsRequest) -> Plan:
    """
    Expand the client's recurring schedule into new jobs up to the horizon.

    For every cursor position each configured weekday is tried in
    configuration order; the cursor then advances by one frequency period.
    Dates already holding a job for this client are skipped, so running the
    same generation twice creates nothing the second time.

    Raises:
        MissingConfiguration: if no recurring days are configured
    """
    client = snapshot.client
    today = snapshot.today

    days = parse_recurring_days(request.recurringDays or client.recurring_days)
    if not days:
        raise MissingConfiguration("No recurring days configured for this client")

    frequency = normalize_frequency(request.frequency or client.recurrence_frequency)
    window = resolve_time_window(
        request.recurringStartTime or client.recurring_start_time,
        request.recurringEndTime or client.recurring_end_time,
    )
    cleaner_ids = resolve_cleaner_ids(client, request)
    weeks = request.weeksToGenerate or DEFAULT_WEEKS_TO_GENERATE

    # Jobs are stored in whole hours
    hours = round_half_up(window.duration_hours, 0)
    if hours <= 0:
        hours = round_half_up(DEFAULT_DURATION_HOURS, 0)

    amount_charged, client_hourly_rate = _price_job(client, hours)

    profit = None
    if amount_charged is not None:
        cleaner_rate = 0.0
        if cleaner_ids and cleaner_ids[0] in snapshot.cleaners:
            cleaner_rate = snapshot.cleaners[cleaner_ids[0]].hourly_rate or 0.0
        profit = compute_payout_and_profit(amount_charged, cleaner_rate, hours).profit

    base_fields = {
        "client_id": client.id,
        "start_time": window.start_time,
        "end_time": window.end_time,
        "status": STATUS_SCHEDULED,
        "service_type": DEFAULT_SERVICE_TYPE,
        "is_recurring": True,
        "recurrence_frequency": frequency,
        "notes": f"Auto-created. Schedule: {frequency} on {', '.join(days)}",
    }
    # Only defined, non-zero optional values are written
    optional_fields = {
        "address": client.address,
        "cleaner_ids": cleaner_ids,
        "duration_hours": hours,
        "actual_hours": hours,
        "client_hourly_rate": client_hourly_rate,
        "amount_charged": amount_charged,
        "profit": profit,
        "bedrooms": client.bedrooms,
        "bathrooms": client.bathrooms,
    }
    base_fields.update({key: value for key, value in optional_fields.items() if value})

    horizon_end = today + timedelta(weeks=weeks)
    cursor = today
    if client.first_cleaning_date and client.first_cleaning_date > today:
        cursor = client.first_cleaning_date

    taken = {job.date for job in snapshot.client_jobs(client.id) if job.date}
    plan = Plan(mode=MODE_GENERATE)

    while cursor < horizon_end:
        for day in days:
            job_date = next_occurrence_of_weekday(day, cursor)
            if job_date >= horizon_end or job_date < today:
                continue
            if job_date in taken:
                logger.debug(f"Skipping {job_date.isoformat()} - job already exists")
                plan.skipped_dates.append(job_date)
                continue

            taken.add(job_date)
            plan.creates.append(
                PlannedCreate(date=job_date, fields={**base_fields, "date": job_date})
            )
        cursor = advance_by_frequency(cursor, frequency)

    logger.info(
        f"📅 Generate plan for client {client.id}: {len(plan.creates)} to create, "
        f"{len(plan.skipped_dates)} already exist ({frequency}, {weeks} weeks)"
    )
    return plan


# ============================================================================
# SYNC
# ============================================================================


def plan_sync(snapshot: ScheduleSnapshot, request: SyncJobsRequest) -> Plan:
    """
    Re-fit the client's future, non-terminal jobs onto an updated schedule.

    Jobs keep their identity and are visited in date order. With new days,
    the i-th job moves to the next occurrence of days[i % len(days)] on or
    after the cursor; the cursor jumps past the assigned date each time a
    full weekday cycle has been used. Omitted request fields are left alone
    and only values that actually change are written.
    """
    client = snapshot.client
    today = snapshot.today

    jobs = sorted(
        (
            job
            for job in snapshot.client_jobs(client.id)
            if job.is_future(today) and not job.is_terminal
        ),
        key=lambda job: (job.date, job.id),
    )
    days = parse_recurring_days(request.recurringDays)
    frequency = normalize_frequency(request.frequency or client.recurrence_frequency)

    plan = Plan(mode=MODE_SYNC)
    cursor = today

    for index, job in enumerate(jobs):
        changes = {}

        if request.recurringStartTime and request.recurringStartTime != job.start_time:
            changes["start_time"] = request.recurringStartTime
        if request.recurringEndTime and request.recurringEndTime != job.end_time:
            changes["end_time"] = request.recurringEndTime
        if request.preferredCleaner and list(request.preferredCleaner) != job.cleaner_ids:
            changes["cleaner_ids"] = list(request.preferredCleaner)

        if days:
            day_index = index % len(days)
            new_date = next_occurrence_of_weekday(days[day_index], cursor)
            if new_date != job.date:
                changes["date"] = new_date
            if day_index == len(days) - 1:
                cursor = advance_sync_cursor(new_date, frequency)

        if changes:
            plan.updates.append(PlannedUpdate(job_id=job.id, fields=changes))

    logger.info(
        f"🔄 Sync plan for client {client.id}: {len(plan.updates)} of {len(jobs)} future jobs change"
    )
    return plan


# ============================================================================
# RESCHEDULE
# ============================================================================


def plan_reschedule(
    snapshot: ScheduleSnapshot,
    request: RescheduleRequest,
    client_id: int,
    current_date: date,
) -> Plan:
    """
    Move one job to a new date, or shift all future jobs by the same delta.

    For all_future every job of the client dated on or after current_date
    that is not completed or cancelled moves by exactly new - current days,
    the triggering job included.

    Raises:
        InvalidFormat: if the scope is not "single" or "all_future"
    """
    if request.scope not in RESCHEDULE_SCOPES:
        raise InvalidFormat('Invalid scope. Must be "single" or "all_future"')

    day_diff = days_between(current_date, request.newDate)
    plan = Plan(mode=request.scope, day_diff=day_diff)

    if request.scope == SCOPE_SINGLE:
        if any(job.id == request.jobId and job.is_terminal for job in snapshot.jobs):
            logger.warning(f"⚠️ Job {request.jobId} is closed - not rescheduling")
            return plan
        plan.updates.append(PlannedUpdate(job_id=request.jobId, fields={"date": request.newDate}))
        return plan

    # The triggering job moves even if current_date is later than its stored date
    affected = sorted(
        (
            job
            for job in snapshot.client_jobs(client_id)
            if job.date
            and not job.is_terminal
            and (job.date >= current_date or job.id == request.jobId)
        ),
        key=lambda job: (job.date, job.id),
    )
    for job in affected:
        plan.updates.append(
            PlannedUpdate(job_id=job.id, fields={"date": job.date + timedelta(days=day_diff)})
        )

    logger.info(
        f"📆 Reschedule plan for client {client_id}: {len(plan.updates)} jobs by {day_diff:+d} days"
    )
    return plan
