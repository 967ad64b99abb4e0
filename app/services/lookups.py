"""
Read-only query helpers over personnel, leave types and leave requests.

The computation services never mutate these records; the workflow service
is the only writer of leave request state.
"""
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import NotFoundError
from app.models.department import Department
from app.models.leave_request import LeaveRequest, LeaveStatus
from app.models.leave_type import LeaveType
from app.models.personnel import Personnel, PersonnelStatus


def get_department_or_404(db: Session, department_id: int) -> Department:
    department = db.get(Department, department_id)
    if department is None:
        raise NotFoundError("Department", department_id)
    return department


def get_personnel_or_404(db: Session, personnel_id: int) -> Personnel:
    personnel = db.get(Personnel, personnel_id)
    if personnel is None:
        raise NotFoundError("Personnel", personnel_id)
    return personnel


def get_leave_type_or_404(db: Session, leave_type_id: int) -> LeaveType:
    leave_type = db.get(LeaveType, leave_type_id)
    if leave_type is None:
        raise NotFoundError("Leave type", leave_type_id)
    return leave_type


def get_leave_request_or_404(db: Session, leave_request_id: int) -> LeaveRequest:
    leave = db.get(LeaveRequest, leave_request_id)
    if leave is None:
        raise NotFoundError("Leave request", leave_request_id)
    return leave


def list_personnel(
    db: Session,
    department_id: Optional[int] = None,
    active_only: bool = False,
) -> List[Personnel]:
    query = db.query(Personnel)
    if active_only:
        query = query.filter(Personnel.status == PersonnelStatus.ACTIVE.value)
    if department_id is not None:
        query = query.filter(Personnel.department_id == department_id)
    return query.order_by(Personnel.id).all()


def list_leave_types(db: Session) -> List[LeaveType]:
    return db.query(LeaveType).order_by(LeaveType.id).all()


def approved_leaves(
    db: Session,
    personnel_id: Optional[int] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    exclude_id: Optional[int] = None,
) -> List[LeaveRequest]:
    """
    Approved leave requests, optionally narrowed to one person and/or to
    those whose inclusive range intersects [start, end].
    """
    query = db.query(LeaveRequest).options(
        joinedload(LeaveRequest.leave_type),
        joinedload(LeaveRequest.personnel),
    ).filter(LeaveRequest.status == LeaveStatus.APPROVED.value)
    if personnel_id is not None:
        query = query.filter(LeaveRequest.personnel_id == personnel_id)
    if end is not None:
        query = query.filter(LeaveRequest.start_date <= end)
    if start is not None:
        query = query.filter(LeaveRequest.end_date >= start)
    if exclude_id is not None:
        query = query.filter(LeaveRequest.id != exclude_id)
    return query.order_by(LeaveRequest.start_date, LeaveRequest.id).all()
