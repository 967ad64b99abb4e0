from datetime import date
from typing import Any, Dict, Optional

class AppException(Exception):
    def __init__(
        self,
        message: str,
        status_code: int = 400,
        error_code: str = "BUSINESS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            message=f"{entity} not found",
            status_code=404,
            error_code="NOT_FOUND",
            details={"entity": entity, "id": entity_id}
        )

class InvalidDateRangeError(AppException):
    """Raised when an end date precedes its start date."""
    def __init__(self, start: date, end: date):
        super().__init__(
            message=f"Start date {start.isoformat()} is after end date {end.isoformat()}",
            status_code=400,
            error_code="INVALID_DATE_RANGE",
            details={"start_date": start.isoformat(), "end_date": end.isoformat()}
        )

class LeaveStateError(AppException):
    def __init__(self, message: str = "Leave request already processed"):
        super().__init__(
            message=message,
            status_code=400,
            error_code="INVALID_LEAVE_STATE"
        )

class LeaveConflictError(AppException):
    """Approval refused because another approved leave of the same person overlaps."""
    def __init__(self, leave_request_id: int, conflicting_ids: list):
        super().__init__(
            message="Dates conflict with an existing approved leave",
            status_code=409,
            error_code="LEAVE_CONFLICT",
            details={"leave_request_id": leave_request_id, "conflicting_ids": conflicting_ids}
        )

class DateRangeTooLongError(AppException):
    def __init__(self, max_days: int):
        super().__init__(
            message=f"Date range may span at most {max_days} days",
            status_code=400,
            error_code="DATE_RANGE_TOO_LONG",
            details={"max_days": max_days}
        )

class StoredLeaveDataError(AppException):
    """A persisted leave request has an end date before its start date."""
    def __init__(self, leave_request_id: int):
        super().__init__(
            message="Stored leave data is inconsistent",
            status_code=500,
            error_code="INVALID_STORED_DATA",
            details={"leave_request_id": leave_request_id}
        )
