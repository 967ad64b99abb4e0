from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.leave_request import LeaveStatus
from app.models.leave_type import LeaveType
from app.schemas.leave import (
    LeaveRejectRequest,
    LeaveRequestCreate,
    LeaveRequestResponse,
    LeaveTypeCreate,
    LeaveTypeResponse,
)
from app.services import leave_workflow, lookups

router = APIRouter(tags=["Leave"])

# --- Leave types ---

@router.get("/leave-types", response_model=List[LeaveTypeResponse])
def list_leave_types(db: Session = Depends(get_db)):
    return lookups.list_leave_types(db)

@router.post("/leave-types", response_model=LeaveTypeResponse, status_code=status.HTTP_201_CREATED)
def create_leave_type(payload: LeaveTypeCreate, db: Session = Depends(get_db)):
    leave_type = LeaveType(**payload.model_dump())
    db.add(leave_type)
    db.commit()
    db.refresh(leave_type)
    return leave_type

# --- Leave requests ---

@router.get("/leave-requests", response_model=List[LeaveRequestResponse])
def list_leave_requests(
    personnel_id: Optional[int] = None,
    status: Optional[LeaveStatus] = None,
    db: Session = Depends(get_db)
):
    return leave_workflow.list_leave_requests(db, personnel_id=personnel_id, status=status)

@router.post("/leave-requests", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
def submit_leave_request(payload: LeaveRequestCreate, db: Session = Depends(get_db)):
    return leave_workflow.create_leave_request(db, payload)

@router.put("/leave-requests/{leave_request_id}/approve", response_model=LeaveRequestResponse)
def approve_request(leave_request_id: int, db: Session = Depends(get_db)):
    return leave_workflow.approve_leave_request(db, leave_request_id)

@router.put("/leave-requests/{leave_request_id}/reject", response_model=LeaveRequestResponse)
def reject_request(
    leave_request_id: int,
    payload: Optional[LeaveRejectRequest] = None,
    db: Session = Depends(get_db)
):
    reason = payload.reason if payload else None
    return leave_workflow.reject_leave_request(db, leave_request_id, reason=reason)
