"""
Personnel Model.
Employee records owned by the personnel CRUD layer; leave computations only read them.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from app.database import Base


class PersonnelStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"


class Personnel(Base):
    __tablename__ = "personnel"

    id = Column(Integer, primary_key=True, index=True)
    employee_code = Column(String, unique=True, index=True, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True, index=True)
    position = Column(String, nullable=True)
    hire_date = Column(Date, nullable=True)
    status = Column(String, default=PersonnelStatus.ACTIVE.value, nullable=False)  # String for SQLite simplicity

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    department = relationship("Department", back_populates="personnel")
    leave_requests = relationship("LeaveRequest", back_populates="personnel", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="personnel", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Personnel {self.employee_code}: {self.full_name}>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
