"""Scheduling router - FastAPI endpoints for recurring job generation, sync and reschedule"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...database import get_db
from .errors import SchedulingError
from .repository import SchedulingRepository
from .schemas import (
    FutureJobsResponse,
    RescheduleRequest,
    RescheduleResponse,
    SyncJobsRequest,
)
from .service import SchedulingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Scheduling"])


def get_scheduling_service(db: Session = Depends(get_db)) -> SchedulingService:
    """Dependency injection for SchedulingService"""
    return SchedulingService(SchedulingRepository(db))


@router.get("/clients/{client_id}/future-jobs", response_model=FutureJobsResponse)
async def get_future_jobs(
    client_id: int,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Count the client's jobs dated today or later"""
    try:
        return service.get_future_jobs(client_id)
    except Exception as e:
        logger.error(f"❌ Error counting future jobs for client {client_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to count future jobs")


@router.post("/clients/{client_id}/sync-jobs")
async def sync_jobs(
    client_id: int,
    data: SyncJobsRequest,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """
    Sync future jobs with a new schedule (mode=sync, default)
    or generate new jobs from the recurring schedule (mode=generate)
    """
    try:
        return service.sync_or_generate(client_id, data)
    except SchedulingError as e:
        logger.warning(f"⚠️ Sync jobs rejected for client {client_id}: {e}")
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        logger.error(f"❌ Error syncing jobs for client {client_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to sync jobs")


@router.post("/jobs/reschedule", response_model=RescheduleResponse)
async def reschedule_job(
    data: RescheduleRequest,
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Reschedule a single job or shift all of the client's future jobs"""
    try:
        return service.reschedule(data)
    except SchedulingError as e:
        logger.warning(f"⚠️ Reschedule rejected for job {data.jobId}: {e}")
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        logger.error(f"❌ Error rescheduling job {data.jobId}: {e}")
        raise HTTPException(status_code=500, detail="Failed to reschedule job")
