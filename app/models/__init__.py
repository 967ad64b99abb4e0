# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import department, personnel, leave_type, leave_request, notification

# Explicit class exports for cleaner imports
from .department import Department
from .personnel import Personnel, PersonnelStatus
from .leave_type import LeaveType
from .leave_request import LeaveRequest, LeaveStatus
from .notification import Notification

__all__ = [
    "Department",
    "Personnel",
    "PersonnelStatus",
    "LeaveType",
    "LeaveRequest",
    "LeaveStatus",
    "Notification",
]
