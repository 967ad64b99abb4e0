"""
Leave Workflow Service

Creation and single-step approval/rejection of leave requests.

Approval re-checks the overlap rule and writes the new status in one
transaction, serialized per personnel: an in-process lock keyed by
personnel ID, plus row locks (SELECT ... FOR UPDATE) on databases that
support them. Two approvals for the same person therefore cannot both
pass the overlap check.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import LeaveConflictError, LeaveStateError
from app.models.leave_request import LeaveRequest, LeaveStatus
from app.models.personnel import Personnel
from app.schemas.leave import LeaveRequestCreate
from app.services import lookups
from app.services.leave_calculations import count_leave_days
from app.services.notification import NotificationService

logger = logging.getLogger(__name__)

_registry_lock = threading.Lock()
_personnel_locks: Dict[int, threading.Lock] = {}


@contextmanager
def personnel_lock(personnel_id: int):
    """Serialize leave decisions for one personnel record within this process."""
    with _registry_lock:
        lock = _personnel_locks.setdefault(personnel_id, threading.Lock())
    with lock:
        yield


def create_leave_request(db: Session, data: LeaveRequestCreate) -> LeaveRequest:
    lookups.get_personnel_or_404(db, data.personnel_id)
    lookups.get_leave_type_or_404(db, data.leave_type_id)

    leave = LeaveRequest(
        personnel_id=data.personnel_id,
        leave_type_id=data.leave_type_id,
        start_date=data.start_date,
        end_date=data.end_date,
        days=count_leave_days(data.start_date, data.end_date),
        reason=data.reason,
        status=LeaveStatus.PENDING.value,
    )
    db.add(leave)
    try:
        db.commit()
        db.refresh(leave)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Leave request {leave.id} created for personnel {leave.personnel_id} ({leave.days:g} days)")
    return leave


def list_leave_requests(
    db: Session,
    personnel_id: Optional[int] = None,
    status: Optional[LeaveStatus] = None,
) -> List[LeaveRequest]:
    query = db.query(LeaveRequest)
    if personnel_id is not None:
        query = query.filter(LeaveRequest.personnel_id == personnel_id)
    if status is not None:
        query = query.filter(LeaveRequest.status == status.value)
    return query.order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()).all()


def _lock_pending(db: Session, leave_request_id: int) -> LeaveRequest:
    leave = db.query(LeaveRequest).filter(
        LeaveRequest.id == leave_request_id
    ).with_for_update().execution_options(populate_existing=True).one()
    # Row lock on the owner so concurrent approvals for the same person queue up
    db.query(Personnel).filter(Personnel.id == leave.personnel_id).with_for_update().one()
    if leave.status != LeaveStatus.PENDING.value:
        raise LeaveStateError()
    return leave


def _notify(db: Session, leave: LeaveRequest) -> None:
    try:
        NotificationService.notify_leave_decision(db, leave)
    except Exception as e:
        # Don't fail the request if notification fails
        logger.warning(f"Notification failed: {e}", exc_info=True)


def approve_leave_request(db: Session, leave_request_id: int) -> LeaveRequest:
    """
    Approve a pending request unless it overlaps another approved leave of
    the same person.

    Raises:
        NotFoundError: unknown request
        LeaveStateError: request is not pending
        LeaveConflictError: an overlapping approved leave exists
    """
    leave = lookups.get_leave_request_or_404(db, leave_request_id)

    with personnel_lock(leave.personnel_id):
        leave = _lock_pending(db, leave_request_id)
        conflicts = lookups.approved_leaves(
            db,
            personnel_id=leave.personnel_id,
            start=leave.start_date,
            end=leave.end_date,
            exclude_id=leave.id,
        )
        if conflicts:
            logger.warning(
                f"Approval of leave request {leave.id} refused: overlaps {[c.id for c in conflicts]}"
            )
            raise LeaveConflictError(leave.id, [c.id for c in conflicts])

        leave.status = LeaveStatus.APPROVED.value
        leave.decided_at = datetime.now(timezone.utc)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(leave)

    logger.info(f"Leave request {leave.id} approved")
    _notify(db, leave)
    return leave


def reject_leave_request(db: Session, leave_request_id: int, reason: Optional[str] = None) -> LeaveRequest:
    leave = lookups.get_leave_request_or_404(db, leave_request_id)

    with personnel_lock(leave.personnel_id):
        leave = _lock_pending(db, leave_request_id)
        leave.status = LeaveStatus.REJECTED.value
        leave.rejection_reason = reason
        leave.decided_at = datetime.now(timezone.utc)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(leave)

    logger.info(f"Leave request {leave.id} rejected")
    _notify(db, leave)
    return leave
