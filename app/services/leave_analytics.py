"""
Leave Analytics Service Layer

Balance, coverage and validation computations for leave requests.

Every call recomputes its result from the stored records; nothing derived
here is persisted. Domain findings (insufficient balance, overlapping
leave, staffing shortfall) are returned as data. Only missing entities and
impossible inputs raise.

Architecture:
- Router -> Service (this module) -> lookups -> Models
- leave_calculations holds the pure date arithmetic
"""

import logging
import math
from datetime import date
from fractions import Fraction
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.exceptions import DateRangeTooLongError, InvalidDateRangeError, StoredLeaveDataError
from app.models.leave_request import LeaveRequest, LeaveStatus
from app.models.leave_type import LeaveType
from app.models.personnel import Personnel, PersonnelStatus
from app.services import lookups
from app.services.leave_calculations import (
    count_leave_days,
    covers_day,
    iter_days,
    ranges_overlap,
    round_half_up,
)

logger = logging.getLogger(__name__)

# Business rules
CARRY_OVER_CAP_DAYS = 5
COVERAGE_THRESHOLD = 70
LONG_LEAVE_DAYS = 30
BALANCE_WARNING_RATIO = Fraction(4, 5)
MIN_STAFFING_RATIO = Fraction(3, 10)
MAX_COVERAGE_DAYS = 366


def _year_bounds(year: int):
    return date(year, 1, 1), date(year, 12, 31)


def _stored_days(leave: LeaveRequest) -> int:
    """Day count of a persisted request; a reversed range is a data error, not user input."""
    if leave.end_date < leave.start_date:
        logger.error(
            f"Leave request {leave.id} has end date {leave.end_date} before start date {leave.start_date}"
        )
        raise StoredLeaveDataError(leave.id)
    return count_leave_days(leave.start_date, leave.end_date)


def _approved_in_year(db: Session, personnel_id: int, year: int) -> List[LeaveRequest]:
    """Approved requests of one person whose start date falls in the given year."""
    first_day, last_day = _year_bounds(year)
    return db.query(LeaveRequest).filter(
        LeaveRequest.personnel_id == personnel_id,
        LeaveRequest.status == LeaveStatus.APPROVED.value,
        LeaveRequest.start_date >= first_day,
        LeaveRequest.start_date <= last_day,
    ).all()


# ============================================================================
# BALANCE
# ============================================================================

def compute_balance(db: Session, personnel_id: int, year: int) -> Dict[str, Any]:
    """
    Compute per-leave-type usage and remaining entitlement for one year.

    Args:
        db: Database session
        personnel_id: ID of the personnel record
        year: Calendar year; requests are attributed by their start date

    Returns:
        Dict with {personnel_id, year, balances: [...], total_used_days}
    """
    lookups.get_personnel_or_404(db, personnel_id)
    leave_types = lookups.list_leave_types(db)
    approved = _approved_in_year(db, personnel_id, year)

    day_counts = {leave.id: _stored_days(leave) for leave in approved}

    balances = []
    for leave_type in leave_types:
        used_days = sum(day_counts[leave.id] for leave in approved if leave.leave_type_id == leave_type.id)
        entitled_days = leave_type.max_days_per_year or 0
        remaining_days = max(0, entitled_days - used_days)
        carry_over_days = min(CARRY_OVER_CAP_DAYS, remaining_days) if leave_type.carry_over_eligible else 0

        balances.append({
            "leave_type": {
                "id": leave_type.id,
                "name": leave_type.name,
                "max_days_per_year": leave_type.max_days_per_year,
            },
            "used_days": used_days,
            "entitled_days": entitled_days,
            "remaining_days": remaining_days,
            "carry_over_days": carry_over_days,
            "total_available": remaining_days + carry_over_days,
        })

    return {
        "personnel_id": personnel_id,
        "year": year,
        "balances": balances,
        "total_used_days": sum(day_counts.values()),
    }


# ============================================================================
# COVERAGE
# ============================================================================

def compute_scope_coverage(
    personnel: List[Personnel],
    leaves: Iterable[LeaveRequest],
    start_date: date,
    end_date: date,
    threshold: int = COVERAGE_THRESHOLD,
) -> List[Dict[str, Any]]:
    """
    Per-day staffing for an arbitrary personnel scope (a department, the
    whole organization).

    Leaves belonging to people outside the scope are ignored. A person with
    several approved leaves on the same day is counted once. Returns an
    empty list when the scope has no personnel.
    """
    total = len(personnel)
    if total == 0:
        return []

    names = {p.id: p.full_name for p in personnel}
    scoped = [leave for leave in leaves if leave.personnel_id in names]
    for leave in scoped:
        _stored_days(leave)
    in_scope = [
        leave for leave in scoped
        if ranges_overlap(leave.start_date, leave.end_date, start_date, end_date)
    ]

    days = []
    for day in iter_days(start_date, end_date):
        details = {}
        for leave in in_scope:
            if covers_day(leave.start_date, leave.end_date, day) and leave.personnel_id not in details:
                details[leave.personnel_id] = {
                    "personnel_id": leave.personnel_id,
                    "personnel_name": names[leave.personnel_id],
                    "leave_type": leave.leave_type.name if leave.leave_type else "Unknown",
                }

        available = total - len(details)
        percentage = round_half_up(available * 100 / total)
        days.append({
            "date": day,
            "total_staff": total,
            "on_leave": len(details),
            "available": available,
            "coverage_percentage": percentage,
            "is_adequate": percentage >= threshold,
            "on_leave_details": list(details.values()),
        })
    return days


def summarize_coverage(days: List[Dict[str, Any]], threshold: int = COVERAGE_THRESHOLD) -> Dict[str, Any]:
    if not days:
        return {"total_days": 0, "average_coverage": None, "critical_days": 0, "adequate_days": 0}
    percentages = [d["coverage_percentage"] for d in days]
    return {
        "total_days": len(days),
        "average_coverage": round(sum(percentages) / len(percentages), 1),
        "critical_days": sum(1 for p in percentages if p < threshold),
        "adequate_days": sum(1 for p in percentages if p >= threshold),
    }


def compute_coverage(db: Session, department_id: int, start_date: date, end_date: date) -> Dict[str, Any]:
    """
    Daily staffing coverage of one department over an inclusive date range.

    Only active personnel count as staff. A department without active
    personnel yields has_data=False and no daily rows.

    Raises:
        NotFoundError: unknown department
        InvalidDateRangeError: end_date before start_date
        DateRangeTooLongError: range longer than MAX_COVERAGE_DAYS
    """
    if end_date < start_date:
        raise InvalidDateRangeError(start_date, end_date)
    if count_leave_days(start_date, end_date) > MAX_COVERAGE_DAYS:
        raise DateRangeTooLongError(MAX_COVERAGE_DAYS)
    lookups.get_department_or_404(db, department_id)

    personnel = lookups.list_personnel(db, department_id=department_id, active_only=True)
    if not personnel:
        logger.info(f"Coverage requested for department {department_id} with no active personnel")
        return {
            "department_id": department_id,
            "start_date": start_date,
            "end_date": end_date,
            "has_data": False,
            "message": "Department has no active personnel; coverage cannot be computed.",
            "coverage": [],
            "summary": summarize_coverage([]),
        }

    leaves = lookups.approved_leaves(db, start=start_date, end=end_date)
    days = compute_scope_coverage(personnel, leaves, start_date, end_date)
    return {
        "department_id": department_id,
        "start_date": start_date,
        "end_date": end_date,
        "has_data": True,
        "message": None,
        "coverage": days,
        "summary": summarize_coverage(days),
    }


# ============================================================================
# VALIDATION
# ============================================================================

def validate_leave_request(
    db: Session,
    personnel_id: int,
    leave_type_id: int,
    start_date: date,
    end_date: date,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Evaluate a candidate leave request without persisting anything.

    Checks, in order:
    - Start date after end date (error)
    - Start date in the past (warning)
    - Longer than 30 days (warning)
    - Remaining entitlement for the leave type (error / warning, plus an info line)
    - Overlap with the person's own approved leave (error)

    Checks that need a valid range are skipped when the range is reversed.

    Returns:
        Dict with {is_valid, errors, warnings, info, requested_days}
    """
    lookups.get_personnel_or_404(db, personnel_id)
    today = today or date.today()

    errors: List[str] = []
    warnings: List[str] = []
    info: List[str] = []

    range_valid = start_date <= end_date
    requested_days = count_leave_days(start_date, end_date) if range_valid else None

    if not range_valid:
        errors.append(
            f"Start date {start_date.isoformat()} is after end date {end_date.isoformat()}"
        )

    if start_date < today:
        warnings.append("Start date is in the past")

    if requested_days is not None and requested_days > LONG_LEAVE_DAYS:
        warnings.append(
            f"Leave of {requested_days} days exceeds {LONG_LEAVE_DAYS} days and may need special approval"
        )

    leave_type = db.get(LeaveType, leave_type_id)
    if leave_type is None:
        errors.append(f"Leave type {leave_type_id} not found")
    else:
        year = start_date.year
        used_days = sum(
            _stored_days(leave)
            for leave in _approved_in_year(db, personnel_id, year)
            if leave.leave_type_id == leave_type.id
        )
        max_days = leave_type.max_days_per_year
        if max_days is None:
            info.append(f"{leave_type.name}: {used_days:g} days used in {year} (no annual limit)")
        else:
            remaining_days = max(0, max_days - used_days)
            if requested_days is not None:
                if requested_days > remaining_days:
                    errors.append(
                        f"Insufficient {leave_type.name} balance: requested {requested_days} days, "
                        f"remaining {remaining_days:g} days"
                    )
                elif requested_days > BALANCE_WARNING_RATIO * Fraction(remaining_days):
                    warnings.append(
                        f"Request uses most of the remaining {leave_type.name} balance "
                        f"({requested_days} of {remaining_days:g} days)"
                    )
            info.append(f"{leave_type.name}: {used_days:g}/{max_days:g} days used in {year}")

    if range_valid:
        conflicts = lookups.approved_leaves(db, personnel_id=personnel_id, start=start_date, end=end_date)
        if conflicts:
            spans = ", ".join(
                f"{leave.start_date.isoformat()} - {leave.end_date.isoformat()}" for leave in conflicts
            )
            errors.append(f"Dates conflict with existing approved leave ({spans})")

    return {
        "is_valid": not errors,
        "errors": errors,
        "warnings": warnings,
        "info": info,
        "requested_days": requested_days,
    }


# ============================================================================
# CONFLICT CHECK
# ============================================================================

def minimum_staff_required(total_personnel: int) -> int:
    return math.ceil(total_personnel * MIN_STAFFING_RATIO)


def check_conflicts(db: Session, leave_request_id: int) -> Dict[str, Any]:
    """
    Pre-approval check for a stored leave request.

    Looks for other approved leaves of the same person that overlap, and
    for days in the request's range where organization-wide availability
    (ignoring this request) is already below the minimum staffing level.
    """
    leave = lookups.get_leave_request_or_404(db, leave_request_id)
    _stored_days(leave)

    conflicts = lookups.approved_leaves(
        db,
        personnel_id=leave.personnel_id,
        start=leave.start_date,
        end=leave.end_date,
        exclude_id=leave.id,
    )

    personnel = lookups.list_personnel(db, active_only=True)
    org_leaves = lookups.approved_leaves(db, start=leave.start_date, end=leave.end_date, exclude_id=leave.id)
    days = compute_scope_coverage(personnel, org_leaves, leave.start_date, leave.end_date)

    minimum_required = minimum_staff_required(len(personnel))
    critical_dates = [d["date"] for d in days if d["available"] < minimum_required]
    has_conflicts = bool(conflicts)
    has_staffing_issues = bool(critical_dates)

    if has_conflicts or has_staffing_issues:
        logger.info(
            f"Leave request {leave.id} flagged",
            extra={"conflicts": len(conflicts), "critical_dates": len(critical_dates)},
        )

    return {
        "leave_request_id": leave.id,
        "has_conflicts": has_conflicts,
        "conflicts": [
            {
                "leave_request_id": other.id,
                "leave_type": other.leave_type.name if other.leave_type else "Unknown",
                "start_date": other.start_date,
                "end_date": other.end_date,
            }
            for other in conflicts
        ],
        "has_staffing_issues": has_staffing_issues,
        "staffing_info": {
            "total_personnel": len(personnel),
            "minimum_required": minimum_required,
            "min_available_staff": min((d["available"] for d in days), default=None),
            "critical_dates": critical_dates,
        },
        "can_approve": (
            leave.status == LeaveStatus.PENDING.value
            and not has_conflicts
            and not has_staffing_issues
        ),
    }


# ============================================================================
# STATISTICS
# ============================================================================

def leave_statistics(db: Session, year: int) -> Dict[str, Any]:
    """Request counts by status and approved day totals for requests starting in the year."""
    first_day, last_day = _year_bounds(year)
    requests = db.query(LeaveRequest).filter(
        LeaveRequest.start_date >= first_day,
        LeaveRequest.start_date <= last_day,
    ).all()

    approved = [r for r in requests if r.status == LeaveStatus.APPROVED.value]
    total_days_used = sum(_stored_days(r) for r in approved)

    return {
        "year": year,
        "total_requests": len(requests),
        "approved_requests": len(approved),
        "pending_requests": sum(1 for r in requests if r.status == LeaveStatus.PENDING.value),
        "rejected_requests": sum(1 for r in requests if r.status == LeaveStatus.REJECTED.value),
        "total_days_used": total_days_used,
        "average_leave_days": round_half_up(total_days_used / len(approved)) if approved else 0,
    }


def dashboard_stats(db: Session, today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    total_personnel = db.query(func.count(Personnel.id)).filter(
        Personnel.status == PersonnelStatus.ACTIVE.value
    ).scalar()
    on_leave_today = db.query(func.count(func.distinct(LeaveRequest.personnel_id))).filter(
        LeaveRequest.status == LeaveStatus.APPROVED.value,
        LeaveRequest.start_date <= today,
        LeaveRequest.end_date >= today,
    ).scalar()
    pending_leaves = db.query(func.count(LeaveRequest.id)).filter(
        LeaveRequest.status == LeaveStatus.PENDING.value
    ).scalar()
    return {
        "total_personnel": total_personnel or 0,
        "on_leave_today": on_leave_today or 0,
        "pending_leaves": pending_leaves or 0,
    }
