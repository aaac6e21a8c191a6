"""HTTP tests for the scheduling endpoints"""

from datetime import date


class TestSyncJobsEndpoint:
    def test_generate(self, api_client, client):
        response = api_client.post(
            f"/clients/{client.id}/sync-jobs",
            json={"mode": "generate", "weeksToGenerate": 2},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["createdCount"] == 4
        assert body["skippedCount"] == 0
        assert body["failedCount"] == 0

    def test_sync_is_the_default_mode(self, api_client, client, make_job):
        make_job(client.id, date(2025, 3, 11))

        response = api_client.post(f"/clients/{client.id}/sync-jobs", json={"recurringDays": "Wednesday"})

        assert response.status_code == 200
        assert response.json()["updatedCount"] == 1

    def test_missing_recurring_days(self, api_client, db_session, client):
        client.recurring_days = ""
        db_session.commit()

        response = api_client.post(f"/clients/{client.id}/sync-jobs", json={"mode": "generate"})

        assert response.status_code == 400
        assert "recurring days" in response.json()["detail"]

    def test_unknown_client(self, api_client):
        response = api_client.post("/clients/999/sync-jobs", json={"mode": "generate"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Client not found"

    def test_invalid_mode(self, api_client, client):
        response = api_client.post(f"/clients/{client.id}/sync-jobs", json={"mode": "merge"})

        assert response.status_code == 400

    def test_invalid_weekday_is_rejected(self, api_client, client):
        response = api_client.post(
            f"/clients/{client.id}/sync-jobs",
            json={"mode": "generate", "recurringDays": ["Tuesday", "Funday"]},
        )

        assert response.status_code == 422

    def test_invalid_time_is_rejected(self, api_client, client):
        response = api_client.post(
            f"/clients/{client.id}/sync-jobs",
            json={"recurringStartTime": "25:00"},
        )

        assert response.status_code == 422

    def test_horizon_is_bounded(self, api_client, client):
        response = api_client.post(
            f"/clients/{client.id}/sync-jobs",
            json={"mode": "generate", "weeksToGenerate": 0},
        )

        assert response.status_code == 422


class TestRescheduleEndpoint:
    def test_all_future(self, api_client, client, make_job):
        first = make_job(client.id, date(2025, 3, 10))
        make_job(client.id, date(2025, 3, 12))

        response = api_client.post(
            "/jobs/reschedule",
            json={
                "jobId": first.id,
                "clientId": client.id,
                "currentDate": "2025-03-10",
                "newDate": "2025-03-17",
                "scope": "all_future",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["updatedCount"] == 2
        assert body["dayDiff"] == 7
        assert body["message"] == "Rescheduled 2 jobs by +7 days"

    def test_single(self, api_client, client, make_job):
        job = make_job(client.id, date(2025, 3, 12))

        response = api_client.post("/jobs/reschedule", json={"jobId": job.id, "newDate": "2025-03-14"})

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_invalid_scope(self, api_client, client, make_job):
        job = make_job(client.id, date(2025, 3, 12))

        response = api_client.post(
            "/jobs/reschedule",
            json={"jobId": job.id, "newDate": "2025-03-14", "scope": "everything"},
        )

        assert response.status_code == 400

    def test_malformed_date(self, api_client, client, make_job):
        job = make_job(client.id, date(2025, 3, 12))

        response = api_client.post("/jobs/reschedule", json={"jobId": job.id, "newDate": "03/14/2025"})

        assert response.status_code == 422

    def test_completed_job_is_locked(self, api_client, repo, client, make_job):
        job = make_job(client.id, date(2025, 3, 12), status="Completed")

        response = api_client.post("/jobs/reschedule", json={"jobId": job.id, "newDate": "2025-03-20"})

        assert response.status_code == 409
        assert repo.get_job(job.id).date == date(2025, 3, 12)

    def test_job_of_another_client(self, api_client, client, make_job):
        job = make_job(client.id, date(2025, 3, 12))

        response = api_client.post(
            "/jobs/reschedule",
            json={"jobId": job.id, "clientId": client.id + 1, "newDate": "2025-03-19", "scope": "all_future"},
        )

        assert response.status_code == 400

    def test_unknown_job(self, api_client):
        response = api_client.post("/jobs/reschedule", json={"jobId": 999, "newDate": "2025-03-14"})

        assert response.status_code == 404


class TestFutureJobsEndpoint:
    def test_lists_future_jobs(self, api_client, client, make_job):
        make_job(client.id, date(2025, 3, 1))
        make_job(client.id, date(2025, 3, 11))

        response = api_client.get(f"/clients/{client.id}/future-jobs")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["jobs"][0]["date"] == "2025-03-11"


def test_health(api_client):
    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
