"""Scheduling service tests against an in-memory SQLite record store"""

from datetime import date

import pytest

from cleaning_crm.domain.scheduling.errors import InvalidFormat, JobLocked, MissingConfiguration, NotFound
from cleaning_crm.domain.scheduling.repository import SchedulingRepository
from cleaning_crm.domain.scheduling.schemas import RescheduleRequest, SyncJobsRequest
from cleaning_crm.domain.scheduling.service import SchedulingService
from cleaning_crm.models import Client

TODAY = date(2025, 3, 10)


class FailingRepository(SchedulingRepository):
    """Repository whose writes fail for one date"""

    def __init__(self, db, failing_date):
        super().__init__(db)
        self.failing_date = failing_date

    def create_job(self, fields):
        if fields["date"] == self.failing_date:
            raise RuntimeError("write timeout")
        return super().create_job(fields)

    def update_job(self, job_id, fields):
        if fields.get("date") == self.failing_date:
            raise RuntimeError("write timeout")
        return super().update_job(job_id, fields)


def job_dates(repo, client_id):
    return [job.date for job in repo.list_jobs(client_id)]


class TestGenerateJobs:
    def test_creates_jobs_with_pricing(self, service, repo, client, cleaner):
        response = service.generate_jobs(client.id, SyncJobsRequest(mode="generate", weeksToGenerate=2))

        assert response.success is True
        assert response.createdCount == 4
        assert response.skippedCount == 0
        assert response.message == "Created 4 jobs"

        jobs = repo.list_jobs(client.id)
        assert [job.date for job in jobs] == [date(2025, 3, 11), date(2025, 3, 14), date(2025, 3, 18), date(2025, 3, 21)]
        for job in jobs:
            assert job.status == "Scheduled"
            assert job.cleaner_ids == [cleaner.id]
            assert job.amount_charged == 150.0
            assert job.client_hourly_rate == 50.0
            assert job.profit == 90.0
            assert job.is_recurring is True

    def test_generation_is_idempotent(self, service, repo, client):
        request = SyncJobsRequest(mode="generate", weeksToGenerate=3)
        first = service.generate_jobs(client.id, request)
        second = service.generate_jobs(client.id, request)

        assert first.createdCount == 6
        assert second.createdCount == 0
        assert second.skippedCount == 6
        assert second.message == "Created 0 jobs (6 already existed)"
        assert len(repo.list_jobs(client.id)) == 6

    def test_existing_job_is_skipped(self, service, client, make_job):
        make_job(client.id, date(2025, 3, 14))
        response = service.generate_jobs(client.id, SyncJobsRequest(mode="generate", weeksToGenerate=1))

        assert response.createdCount == 1
        assert response.skippedCount == 1
        assert response.message == "Created 1 job (1 already existed)"

    def test_partial_failure_is_reported(self, db_session, client):
        repo = FailingRepository(db_session, failing_date=date(2025, 3, 14))
        service = SchedulingService(repo, today=TODAY)

        response = service.generate_jobs(client.id, SyncJobsRequest(mode="generate", weeksToGenerate=2))

        assert response.success is True
        assert response.createdCount == 3
        assert response.failedCount == 1
        assert response.message == "Created 3 jobs, 1 failed"
        assert date(2025, 3, 14) not in job_dates(repo, client.id)

    def test_unknown_client(self, service):
        with pytest.raises(NotFound):
            service.generate_jobs(999, SyncJobsRequest(mode="generate"))

    def test_unknown_preferred_cleaner_still_generates(self, service, repo, client):
        response = service.generate_jobs(client.id, SyncJobsRequest(mode="generate", preferredCleaner=[999], weeksToGenerate=1))

        assert response.createdCount == 2
        jobs = repo.list_jobs(client.id)
        assert [job.cleaner_ids for job in jobs] == [[999], [999]]
        assert [job.profit for job in jobs] == [150.0, 150.0]

    def test_client_without_days(self, service, db_session, client):
        client.recurring_days = None
        db_session.commit()

        with pytest.raises(MissingConfiguration):
            service.generate_jobs(client.id, SyncJobsRequest(mode="generate"))


class TestSyncJobs:
    def test_moves_open_future_jobs_only(self, service, repo, client, make_job):
        completed = make_job(client.id, date(2025, 3, 12), status="Completed")
        past = make_job(client.id, date(2025, 3, 4))
        open_jobs = [make_job(client.id, d) for d in (date(2025, 3, 11), date(2025, 3, 14), date(2025, 3, 18))]

        response = service.sync_jobs(client.id, SyncJobsRequest(recurringDays=["Monday", "Thursday"]))

        assert response.updatedCount == 3
        assert response.message == "Updated 3 jobs"
        moved = {job.id: job.date for job in repo.list_jobs(client.id)}
        assert moved[open_jobs[0].id] == date(2025, 3, 10)
        assert moved[open_jobs[1].id] == date(2025, 3, 13)
        assert moved[open_jobs[2].id] == date(2025, 3, 17)
        assert moved[completed.id] == date(2025, 3, 12)
        assert moved[past.id] == date(2025, 3, 4)

    def test_time_change_leaves_dates_alone(self, service, repo, client, make_job):
        job = make_job(client.id, date(2025, 3, 11), start_time="9:00 AM", end_time="12:00 PM")

        service.sync_jobs(client.id, SyncJobsRequest(recurringStartTime="10:00 AM", recurringEndTime="1:00 PM"))

        updated = repo.get_job(job.id)
        assert updated.date == date(2025, 3, 11)
        assert updated.start_time == "10:00 AM"
        assert updated.end_time == "1:00 PM"

    def test_no_future_jobs(self, service, client, make_job):
        make_job(client.id, date(2025, 3, 1))
        response = service.sync_jobs(client.id, SyncJobsRequest(recurringDays=["Monday"]))

        assert response.success is True
        assert response.updatedCount == 0
        assert response.message == "No future jobs to update"

    def test_dispatch_on_mode(self, service, client):
        response = service.sync_or_generate(client.id, SyncJobsRequest(mode="Generate", weeksToGenerate=1))
        assert response.createdCount == 2

        with pytest.raises(InvalidFormat):
            service.sync_or_generate(client.id, SyncJobsRequest(mode="merge"))


class TestReschedule:
    def test_all_future_shift(self, service, repo, client, make_job):
        jobs = [make_job(client.id, d) for d in (date(2025, 3, 10), date(2025, 3, 12), date(2025, 3, 19))]
        done = make_job(client.id, date(2025, 3, 21), status="Completed")

        response = service.reschedule(
            RescheduleRequest(jobId=jobs[0].id, clientId=client.id, currentDate="2025-03-10", newDate="2025-03-17", scope="all_future")
        )

        assert response.success is True
        assert response.updatedCount == 3
        assert response.dayDiff == 7
        assert response.message == "Rescheduled 3 jobs by +7 days"
        dates = {job.id: job.date for job in repo.list_jobs(client.id)}
        assert [dates[job.id] for job in jobs] == [date(2025, 3, 17), date(2025, 3, 19), date(2025, 3, 26)]
        assert dates[done.id] == date(2025, 3, 21)

    def test_client_and_current_date_default_to_the_job(self, service, repo, client, make_job):
        first = make_job(client.id, date(2025, 3, 12))
        second = make_job(client.id, date(2025, 3, 19))

        response = service.reschedule(RescheduleRequest(jobId=first.id, newDate="2025-03-10", scope="all_future"))

        assert response.dayDiff == -2
        assert response.message == "Rescheduled 2 jobs by -2 days"
        assert repo.get_job(second.id).date == date(2025, 3, 17)

    def test_single(self, service, repo, client, make_job):
        job = make_job(client.id, date(2025, 3, 12))
        other = make_job(client.id, date(2025, 3, 19))

        response = service.reschedule(RescheduleRequest(jobId=job.id, newDate="2025-03-13"))

        assert response.success is True
        assert response.message == "Job rescheduled successfully"
        assert repo.get_job(job.id).date == date(2025, 3, 13)
        assert repo.get_job(other.id).date == date(2025, 3, 19)

    def test_single_write_failure(self, db_session, client, make_job):
        job = make_job(client.id, date(2025, 3, 12))
        service = SchedulingService(FailingRepository(db_session, failing_date=date(2025, 3, 13)), today=TODAY)

        response = service.reschedule(RescheduleRequest(jobId=job.id, newDate="2025-03-13"))

        assert response.success is False
        assert response.failedCount == 1

    def test_unknown_job(self, service):
        with pytest.raises(NotFound):
            service.reschedule(RescheduleRequest(jobId=999, newDate="2025-03-13"))

    @pytest.mark.parametrize("status", ["Completed", "Cancelled"])
    def test_closed_job_is_never_moved(self, service, repo, client, make_job, status):
        job = make_job(client.id, date(2025, 3, 12), status=status)

        with pytest.raises(JobLocked):
            service.reschedule(RescheduleRequest(jobId=job.id, newDate="2025-03-20"))
        with pytest.raises(JobLocked):
            service.reschedule(RescheduleRequest(jobId=job.id, newDate="2025-03-20", scope="all_future"))

        assert repo.get_job(job.id).date == date(2025, 3, 12)

    def test_client_mismatch_is_rejected(self, service, repo, db_session, client, make_job):
        other_client = Client(name="John Roe", recurring_days="Friday")
        db_session.add(other_client)
        db_session.commit()
        mine = make_job(client.id, date(2025, 3, 12))
        theirs = make_job(other_client.id, date(2025, 3, 14))

        with pytest.raises(InvalidFormat):
            service.reschedule(
                RescheduleRequest(jobId=mine.id, clientId=other_client.id, newDate="2025-03-19", scope="all_future")
            )

        assert repo.get_job(mine.id).date == date(2025, 3, 12)
        assert repo.get_job(theirs.id).date == date(2025, 3, 14)

    def test_stale_current_date_still_moves_the_triggering_job(self, service, repo, client, make_job):
        job = make_job(client.id, date(2025, 3, 12))
        later = make_job(client.id, date(2025, 3, 19))

        response = service.reschedule(
            RescheduleRequest(jobId=job.id, currentDate="2025-03-14", newDate="2025-03-21", scope="all_future")
        )

        assert response.updatedCount == 2
        assert response.dayDiff == 7
        assert repo.get_job(job.id).date == date(2025, 3, 19)
        assert repo.get_job(later.id).date == date(2025, 3, 26)


class TestFutureJobs:
    def test_counts_today_and_later_in_any_status(self, service, client, make_job):
        make_job(client.id, date(2025, 3, 9))
        make_job(client.id, TODAY)
        make_job(client.id, date(2025, 3, 20), status="Cancelled")

        response = service.get_future_jobs(client.id)

        assert response.count == 2
        assert [job.date for job in response.jobs] == [TODAY, date(2025, 3, 20)]
        assert response.jobs[0].clientId == client.id
