from fastapi import APIRouter, Depends, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.models.department import Department
from app.models.personnel import Personnel
from app.schemas.department import DepartmentCreate, DepartmentResponse

router = APIRouter(prefix="/departments", tags=["Departments"])


@router.get("", response_model=List[DepartmentResponse])
def list_departments(db: Session = Depends(get_db)):
    counts = dict(
        db.query(Personnel.department_id, func.count(Personnel.id))
        .group_by(Personnel.department_id)
        .all()
    )
    departments = db.query(Department).order_by(Department.name).all()
    return [
        DepartmentResponse(
            id=d.id,
            name=d.name,
            description=d.description,
            personnel_count=counts.get(d.id, 0),
        )
        for d in departments
    ]


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
def create_department(payload: DepartmentCreate, db: Session = Depends(get_db)):
    department = Department(name=payload.name, description=payload.description)
    db.add(department)
    db.commit()
    db.refresh(department)
    return department
