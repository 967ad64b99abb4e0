from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date, datetime
from typing import List, Optional

# --- Reference data ---

class LeaveTypeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    max_days_per_year: Optional[float] = Field(default=None, ge=0)
    carry_over_eligible: bool = False
    is_active: bool = True

class LeaveTypeResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    max_days_per_year: Optional[float] = None
    carry_over_eligible: bool
    is_active: bool

    model_config = ConfigDict(from_attributes=True)

# --- Leave requests ---

class LeaveRequestCreate(BaseModel):
    personnel_id: int
    leave_type_id: int
    start_date: date
    end_date: date
    reason: Optional[str] = None

    @model_validator(mode="after")
    def check_date_order(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self

class LeaveRequestResponse(BaseModel):
    id: int
    personnel_id: int
    leave_type_id: int
    start_date: date
    end_date: date
    days: float
    reason: Optional[str] = None
    status: str
    decided_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class LeaveRejectRequest(BaseModel):
    reason: Optional[str] = None

# --- Validation ---

class LeaveValidationRequest(BaseModel):
    # Date order is reported as a validation finding, not rejected here
    personnel_id: int
    leave_type_id: int
    start_date: date
    end_date: date

class LeaveValidationResponse(BaseModel):
    is_valid: bool
    errors: List[str]
    warnings: List[str]
    info: List[str]
    requested_days: Optional[int] = None

# --- Balance ---

class LeaveTypeBrief(BaseModel):
    id: int
    name: str
    max_days_per_year: Optional[float] = None

class LeaveBalanceEntry(BaseModel):
    leave_type: LeaveTypeBrief
    used_days: float
    entitled_days: float
    remaining_days: float
    carry_over_days: float
    total_available: float

class LeaveBalanceResponse(BaseModel):
    personnel_id: int
    year: int
    balances: List[LeaveBalanceEntry]
    total_used_days: float

# --- Coverage ---

class OnLeaveDetail(BaseModel):
    personnel_id: int
    personnel_name: str
    leave_type: str

class CoverageDay(BaseModel):
    date: date
    total_staff: int
    on_leave: int
    available: int
    coverage_percentage: int
    is_adequate: bool
    on_leave_details: List[OnLeaveDetail] = []

class CoverageSummary(BaseModel):
    total_days: int
    average_coverage: Optional[float] = None
    critical_days: int
    adequate_days: int

class CoverageResponse(BaseModel):
    department_id: int
    start_date: date
    end_date: date
    has_data: bool
    message: Optional[str] = None
    coverage: List[CoverageDay]
    summary: CoverageSummary

# --- Conflict check ---

class ConflictEntry(BaseModel):
    leave_request_id: int
    leave_type: str
    start_date: date
    end_date: date

class StaffingInfo(BaseModel):
    total_personnel: int
    minimum_required: int
    min_available_staff: Optional[int] = None
    critical_dates: List[date] = []

class ConflictCheckResponse(BaseModel):
    leave_request_id: int
    has_conflicts: bool
    conflicts: List[ConflictEntry]
    has_staffing_issues: bool
    staffing_info: StaffingInfo
    can_approve: bool

# --- Statistics ---

class LeaveStatisticsResponse(BaseModel):
    year: int
    total_requests: int
    approved_requests: int
    pending_requests: int
    rejected_requests: int
    total_days_used: int
    average_leave_days: int

class DashboardStatsResponse(BaseModel):
    total_personnel: int
    on_leave_today: int
    pending_leaves: int
