"""Scheduling service - read a snapshot, plan, apply, report"""

import logging
from datetime import date
from typing import Optional

from .constants import MODE_GENERATE, MODE_SYNC, SCOPE_SINGLE
from .errors import InvalidFormat, JobLocked, NotFound
from .executor import apply_plan
from .planner import (
    ScheduleSnapshot,
    plan_generate,
    plan_reschedule,
    plan_sync,
    resolve_cleaner_ids,
)
from .schemas import (
    FutureJobsResponse,
    GenerateJobsResponse,
    JobResponse,
    RescheduleRequest,
    RescheduleResponse,
    SyncJobsRequest,
    SyncJobsResponse,
)

logger = logging.getLogger(__name__)


def _plural(count: int, word: str = "job") -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


class SchedulingService:
    """Service layer for recurring job generation, sync and rescheduling"""

    def __init__(self, store, today: Optional[date] = None):
        self.store = store
        self._today = today

    @property
    def today(self) -> date:
        return self._today or date.today()

    def _snapshot_for_client(
        self, client_id: int, request: Optional[SyncJobsRequest] = None
    ) -> ScheduleSnapshot:
        """Read the client, its jobs and (for generation) its primary cleaner in one go"""
        client = self.store.get_client(client_id)
        if not client:
            raise NotFound("Client not found")

        cleaners = {}
        cleaner_ids = resolve_cleaner_ids(client, request) if request is not None else []
        if cleaner_ids:
            cleaner = self.store.get_cleaner(cleaner_ids[0])
            if cleaner:
                cleaners[cleaner.id] = cleaner
            else:
                logger.warning(
                    f"⚠️ Primary cleaner {cleaner_ids[0]} not found for client {client_id} - "
                    f"profit computed without cleaner pay"
                )

        return ScheduleSnapshot(
            today=self.today,
            client=client,
            jobs=self.store.list_jobs(client_id),
            cleaners=cleaners,
        )

    def get_future_jobs(self, client_id: int) -> FutureJobsResponse:
        """Jobs for this client dated today or later, whatever their status"""
        today = self.today
        jobs = [job for job in self.store.list_jobs(client_id) if job.is_future(today)]
        return FutureJobsResponse(
            count=len(jobs),
            jobs=[
                JobResponse(
                    id=job.id,
                    clientId=job.client_id,
                    cleanerIds=job.cleaner_ids,
                    date=job.date,
                    startTime=job.start_time,
                    endTime=job.end_time,
                    durationHours=job.duration_hours,
                    status=job.status,
                    amountCharged=job.amount_charged,
                    clientHourlyRate=job.client_hourly_rate,
                    profit=job.profit,
                    isRecurring=job.is_recurring,
                    recurrenceFrequency=job.recurrence_frequency,
                )
                for job in jobs
            ],
        )

    def sync_or_generate(self, client_id: int, request: SyncJobsRequest):
        if request.mode == MODE_GENERATE:
            return self.generate_jobs(client_id, request)
        if request.mode == MODE_SYNC:
            return self.sync_jobs(client_id, request)
        raise InvalidFormat('Invalid mode. Must be "sync" or "generate"')

    def generate_jobs(self, client_id: int, request: SyncJobsRequest) -> GenerateJobsResponse:
        """Create the client's recurring jobs up to the requested horizon"""
        snapshot = self._snapshot_for_client(client_id, request)
        plan = plan_generate(snapshot, request)
        result = apply_plan(plan, self.store)

        skipped = len(plan.skipped_dates)
        message = f"Created {_plural(result.created_count)}"
        if skipped > 0:
            message += f" ({skipped} already existed)"
        if result.failed_count:
            message += f", {result.failed_count} failed"

        logger.info(
            f"✅ GENERATE complete for client {client_id}: created {result.created_count}, "
            f"skipped {skipped}, failed {result.failed_count}"
        )
        return GenerateJobsResponse(
            success=True,
            createdCount=result.created_count,
            skippedCount=skipped,
            failedCount=result.failed_count,
            message=message,
        )

    def sync_jobs(self, client_id: int, request: SyncJobsRequest) -> SyncJobsResponse:
        """Move existing future jobs onto the client's updated schedule"""
        snapshot = self._snapshot_for_client(client_id)
        if not any(job.is_future(snapshot.today) and not job.is_terminal for job in snapshot.jobs):
            return SyncJobsResponse(success=True, updatedCount=0, message="No future jobs to update")

        plan = plan_sync(snapshot, request)
        result = apply_plan(plan, self.store)

        message = f"Updated {_plural(result.updated_count)}"
        if result.failed_count:
            message += f", {result.failed_count} failed"

        logger.info(
            f"✅ SYNC complete for client {client_id}: updated {result.updated_count}, "
            f"failed {result.failed_count}"
        )
        return SyncJobsResponse(
            success=True,
            updatedCount=result.updated_count,
            failedCount=result.failed_count,
            message=message,
        )

    def reschedule(self, request: RescheduleRequest) -> RescheduleResponse:
        """Reschedule one job, or shift every future job of its client"""
        job = self.store.get_job(request.jobId)
        if not job:
            raise NotFound("Job not found")

        if job.is_terminal:
            raise JobLocked(f"Job {job.id} is {job.status} and cannot be rescheduled")
        if request.clientId is not None and request.clientId != job.client_id:
            raise InvalidFormat(f"Job {job.id} does not belong to client {request.clientId}")

        client_id = job.client_id
        current_date = request.currentDate or job.date
        if current_date is None:
            raise InvalidFormat("currentDate is required when the job has no date")

        snapshot = ScheduleSnapshot(
            today=self.today,
            jobs=self.store.list_jobs(client_id) if request.scope != SCOPE_SINGLE else [job],
        )
        plan = plan_reschedule(snapshot, request, client_id, current_date)
        result = apply_plan(plan, self.store)

        if request.scope == SCOPE_SINGLE:
            message = "Job rescheduled successfully" if result.updated_count else "Failed to reschedule job"
            return RescheduleResponse(
                success=result.updated_count == 1,
                message=message,
                updatedCount=result.updated_count,
                failedCount=result.failed_count,
            )

        sign = "+" if plan.day_diff > 0 else ""
        message = f"Rescheduled {_plural(result.updated_count)} by {sign}{plan.day_diff} days"
        if result.failed_count:
            message += f" ({result.failed_count} failed)"

        logger.info(f"✅ RESCHEDULE complete for client {client_id}: {message}")
        return RescheduleResponse(
            success=True,
            message=message,
            updatedCount=result.updated_count,
            dayDiff=plan.day_diff,
            failedCount=result.failed_count,
        )
