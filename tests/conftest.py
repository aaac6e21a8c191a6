"""Shared fixtures: in-memory SQLite record store, a fixed Monday and an API client"""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cleaning_crm.database import Base
from cleaning_crm.domain.scheduling.repository import SchedulingRepository
from cleaning_crm.domain.scheduling.router import get_scheduling_service
from cleaning_crm.domain.scheduling.service import SchedulingService
from cleaning_crm.main import app
from cleaning_crm.models import Cleaner, Client, Job

# 2025-03-10 is a Monday
TODAY = date(2025, 3, 10)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def repo(db_session):
    return SchedulingRepository(db_session)


@pytest.fixture
def service(repo):
    return SchedulingService(repo, today=TODAY)


@pytest.fixture
def cleaner(db_session):
    cleaner = Cleaner(name="Maria Lopez", hourly_rate=20.0)
    db_session.add(cleaner)
    db_session.commit()
    return cleaner


@pytest.fixture
def client(db_session, cleaner):
    client = Client(
        name="Jane Doe",
        address="12 Elm St",
        bedrooms=3,
        bathrooms=2,
        is_recurring=True,
        recurring_days="Tuesday, Friday",
        recurrence_frequency="Weekly",
        recurring_start_time="9:00 AM",
        recurring_end_time="12:00 PM",
        first_cleaning_date=TODAY,
        preferred_cleaner_ids=[cleaner.id],
        pricing_type="Per Cleaning",
        charge_per_cleaning=150.0,
    )
    db_session.add(client)
    db_session.commit()
    return client


@pytest.fixture
def make_job(db_session):
    """Insert a job row and return it"""

    def _make_job(client_id, job_date, status="Scheduled", **fields):
        job = Job(client_id=client_id, date=job_date, status=status, **fields)
        db_session.add(job)
        db_session.commit()
        return job

    return _make_job


@pytest.fixture
def api_client(service):
    app.dependency_overrides[get_scheduling_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
