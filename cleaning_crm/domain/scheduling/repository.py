"""Scheduling repository - record store for clients, cleaners and jobs"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Cleaner, Client, Job
from .errors import NotFound
from .schemas import CleanerSnapshot, ClientSnapshot, JobSnapshot

logger = logging.getLogger(__name__)


class SchedulingRepository:
    """
    Database operations used by the scheduling engine.

    Reads return immutable snapshots rather than ORM rows. Every write is
    committed on its own so one failed job never takes the others with it.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_jobs(self, client_id: Optional[int] = None) -> list[JobSnapshot]:
        """Get all jobs, optionally only those of one client, ordered by date"""
        query = self.db.query(Job)
        if client_id is not None:
            query = query.filter(Job.client_id == client_id)
        return [JobSnapshot.model_validate(job) for job in query.order_by(Job.date, Job.id).all()]

    def get_job(self, job_id: int) -> Optional[JobSnapshot]:
        job = self.db.query(Job).filter(Job.id == job_id).first()
        return JobSnapshot.model_validate(job) if job else None

    def get_client(self, client_id: int) -> Optional[ClientSnapshot]:
        client = self.db.query(Client).filter(Client.id == client_id).first()
        return ClientSnapshot.model_validate(client) if client else None

    def get_cleaner(self, cleaner_id: int) -> Optional[CleanerSnapshot]:
        cleaner = self.db.query(Cleaner).filter(Cleaner.id == cleaner_id).first()
        return CleanerSnapshot.model_validate(cleaner) if cleaner else None

    def create_job(self, fields: dict) -> JobSnapshot:
        """Create a job from column values"""
        job = Job(**fields)
        self.db.add(job)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(job)
        return JobSnapshot.model_validate(job)

    def update_job(self, job_id: int, fields: dict) -> JobSnapshot:
        """Update the given columns of a job"""
        job = self.db.query(Job).filter(Job.id == job_id).first()
        if not job:
            raise NotFound(f"Job {job_id} not found")

        for key, value in fields.items():
            if hasattr(job, key):
                setattr(job, key, value)
            else:
                logger.warning(f"⚠️ Ignoring unknown job field: {key}")
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(job)
        return JobSnapshot.model_validate(job)
