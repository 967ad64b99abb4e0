from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class DepartmentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

class DepartmentResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    personnel_count: int = 0

    model_config = ConfigDict(from_attributes=True)
