"""
Leave Analytics Router

Read-only computations over leave data: balances, department coverage,
candidate validation, pre-approval conflict checks and statistics.
All logic lives in app.services.leave_analytics.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.core.limiter import COMPUTE_RATE_LIMIT, limiter
from app.database import get_db
from app.schemas.leave import (
    ConflictCheckResponse,
    CoverageResponse,
    DashboardStatsResponse,
    LeaveBalanceResponse,
    LeaveStatisticsResponse,
    LeaveValidationRequest,
    LeaveValidationResponse,
)
from app.services import leave_analytics

router = APIRouter(tags=["Leave Analytics"])


@router.get("/leave-balance/{personnel_id}", response_model=LeaveBalanceResponse)
def get_leave_balance(
    personnel_id: int,
    year: Optional[int] = Query(default=None, ge=1900, le=9999),
    db: Session = Depends(get_db)
):
    """Per-leave-type usage and remaining days for a year (defaults to the current year)."""
    return leave_analytics.compute_balance(db, personnel_id, year or date.today().year)


@router.get("/leave-coverage/{department_id}", response_model=CoverageResponse)
@limiter.limit(COMPUTE_RATE_LIMIT)
def get_leave_coverage(
    request: Request,
    department_id: int,
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db)
):
    return leave_analytics.compute_coverage(db, department_id, start_date, end_date)


@router.post("/leave-requests/validate", response_model=LeaveValidationResponse)
@limiter.limit(COMPUTE_RATE_LIMIT)
def validate_leave_request(
    request: Request,
    payload: LeaveValidationRequest,
    db: Session = Depends(get_db)
):
    """
    Validate a candidate leave request.

    Returns errors, warnings and info lines without creating anything.
    """
    return leave_analytics.validate_leave_request(
        db,
        personnel_id=payload.personnel_id,
        leave_type_id=payload.leave_type_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )


@router.get("/leave-requests/{leave_request_id}/check-conflicts", response_model=ConflictCheckResponse)
@limiter.limit(COMPUTE_RATE_LIMIT)
def check_leave_conflicts(request: Request, leave_request_id: int, db: Session = Depends(get_db)):
    return leave_analytics.check_conflicts(db, leave_request_id)


@router.get("/leave-statistics", response_model=LeaveStatisticsResponse)
def get_leave_statistics(
    year: Optional[int] = Query(default=None, ge=1900, le=9999),
    db: Session = Depends(get_db)
):
    return leave_analytics.leave_statistics(db, year or date.today().year)


@router.get("/dashboard/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(db: Session = Depends(get_db)):
    return leave_analytics.dashboard_stats(db)
