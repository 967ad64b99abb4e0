from datetime import date, timedelta

from app.database import SessionLocal, init_db
from app.models.department import Department
from app.models.leave_request import LeaveRequest, LeaveStatus
from app.models.leave_type import LeaveType
from app.models.personnel import Personnel

init_db()
db = SessionLocal()

def get_or_create_department(name):
    department = db.query(Department).filter(Department.name == name).first()
    if department:
        print(f"Department {name} already exists. Skipping.")
        return department
    department = Department(name=name)
    db.add(department)
    db.commit()
    db.refresh(department)
    print(f"Created department -> {name}")
    return department

def get_or_create_leave_type(name, max_days, carry_over=False):
    leave_type = db.query(LeaveType).filter(LeaveType.name == name).first()
    if leave_type:
        print(f"Leave type {name} already exists. Skipping.")
        return leave_type
    leave_type = LeaveType(name=name, max_days_per_year=max_days, carry_over_eligible=carry_over)
    db.add(leave_type)
    db.commit()
    db.refresh(leave_type)
    print(f"Created leave type -> {name}")
    return leave_type

def create_personnel(code, first_name, last_name, department):
    existing = db.query(Personnel).filter(Personnel.employee_code == code).first()
    if existing:
        print(f"Personnel {code} already exists. Skipping.")
        return existing
    person = Personnel(
        employee_code=code,
        first_name=first_name,
        last_name=last_name,
        department_id=department.id,
    )
    db.add(person)
    db.commit()
    db.refresh(person)
    print(f"Created personnel {code} -> {person.full_name}")
    return person

operations = get_or_create_department("Operations")
finance = get_or_create_department("Finance")

annual = get_or_create_leave_type("Annual Leave", 14, carry_over=True)
sick = get_or_create_leave_type("Sick Leave", 10)
get_or_create_leave_type("Unpaid Leave", None)

staff = [
    create_personnel("OPS-001", "Ayse", "Yilmaz", operations),
    create_personnel("OPS-002", "Mehmet", "Kaya", operations),
    create_personnel("OPS-003", "Zeynep", "Demir", operations),
    create_personnel("FIN-001", "Can", "Aydin", finance),
]

if db.query(LeaveRequest).count() == 0:
    start = date.today() + timedelta(days=7)
    samples = [
        (staff[0], annual, start, start + timedelta(days=4), LeaveStatus.APPROVED),
        (staff[1], annual, start + timedelta(days=2), start + timedelta(days=3), LeaveStatus.PENDING),
        (staff[3], sick, start, start, LeaveStatus.APPROVED),
    ]
    for person, leave_type, first, last, status in samples:
        db.add(LeaveRequest(
            personnel_id=person.id,
            leave_type_id=leave_type.id,
            start_date=first,
            end_date=last,
            days=(last - first).days + 1,
            status=status.value,
        ))
    db.commit()
    print(f"Created {len(samples)} sample leave requests")

db.close()
