from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import Optional

from app.models.personnel import PersonnelStatus

class PersonnelCreate(BaseModel):
    employee_code: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: Optional[str] = None
    department_id: Optional[int] = None
    position: Optional[str] = None
    hire_date: Optional[date] = None
    status: PersonnelStatus = PersonnelStatus.ACTIVE

class PersonnelResponse(BaseModel):
    id: int
    employee_code: str
    first_name: str
    last_name: str
    full_name: str
    email: Optional[str] = None
    department_id: Optional[int] = None
    position: Optional[str] = None
    hire_date: Optional[date] = None
    status: str

    model_config = ConfigDict(from_attributes=True)
