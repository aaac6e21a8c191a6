"""
Plan executor

Applies a Plan against the record store. Writes are independent of each
other: a failed create/update is recorded as a PartialWriteFailure and the
remaining writes still run. Nothing is rolled back, so the result always
reports what was actually written.
"""

import logging
from typing import Callable, Optional

from .errors import PartialWriteFailure
from .planner import Plan
from .schemas import JobSnapshot

logger = logging.getLogger(__name__)


class ApplyResult:
    """Outcome of applying one plan"""

    def __init__(self):
        self.created: list[JobSnapshot] = []
        self.updated: list[JobSnapshot] = []
        self.failures: list[PartialWriteFailure] = []
        self.cancelled = False

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def updated_count(self) -> int:
        return len(self.updated)

    @property
    def failed_count(self) -> int:
        return len(self.failures)


def apply_plan(
    plan: Plan,
    store,
    should_continue: Optional[Callable[[], bool]] = None,
) -> ApplyResult:
    """
    Run every create and update of the plan against the store.

    Args:
        plan: output of one of the planners
        store: record store exposing create_job(fields) and update_job(id, fields)
        should_continue: polled before each write; returning False abandons
            the rest of the plan (writes already made are kept)
    """
    result = ApplyResult()

    for planned in plan.creates:
        if should_continue is not None and not should_continue():
            result.cancelled = True
            break
        try:
            result.created.append(store.create_job(planned.fields))
        except Exception as e:
            logger.error(f"❌ Error creating job for {planned.date.isoformat()}: {e}")
            result.failures.append(
                PartialWriteFailure(f"Failed to create job: {e}", job_date=planned.date)
            )

    for planned in plan.updates:
        if result.cancelled or (should_continue is not None and not should_continue()):
            result.cancelled = True
            break
        try:
            result.updated.append(store.update_job(planned.job_id, planned.fields))
        except Exception as e:
            logger.error(f"❌ Error updating job {planned.job_id}: {e}")
            result.failures.append(
                PartialWriteFailure(f"Failed to update job: {e}", job_id=planned.job_id)
            )

    if result.cancelled:
        logger.warning(f"⚠️ {plan.mode} plan abandoned after {result.created_count + result.updated_count} writes")
    if result.failures:
        logger.warning(
            f"⚠️ {plan.mode} plan finished with {result.failed_count} failed writes"
        )
    return result
