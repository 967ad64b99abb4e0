from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.personnel import Personnel
from app.schemas.personnel import PersonnelCreate, PersonnelResponse
from app.services import lookups

router = APIRouter(prefix="/personnel", tags=["Personnel"])


@router.get("", response_model=List[PersonnelResponse])
def list_personnel(department_id: Optional[int] = None, db: Session = Depends(get_db)):
    return lookups.list_personnel(db, department_id=department_id)


@router.get("/{personnel_id}", response_model=PersonnelResponse)
def get_personnel(personnel_id: int, db: Session = Depends(get_db)):
    return lookups.get_personnel_or_404(db, personnel_id)


@router.post("", response_model=PersonnelResponse, status_code=status.HTTP_201_CREATED)
def create_personnel(payload: PersonnelCreate, db: Session = Depends(get_db)):
    if payload.department_id is not None:
        lookups.get_department_or_404(db, payload.department_id)

    existing = db.query(Personnel).filter(Personnel.employee_code == payload.employee_code).first()
    if existing:
        raise HTTPException(status_code=400, detail="Employee code already exists")

    data = payload.model_dump()
    data["status"] = payload.status.value
    personnel = Personnel(**data)
    db.add(personnel)
    db.commit()
    db.refresh(personnel)
    return personnel
