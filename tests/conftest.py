import pytest
import os
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from app.database import Base, get_db
from app.main import app
from app.models.department import Department
from app.models.leave_request import LeaveRequest, LeaveStatus
from app.models.leave_type import LeaveType
from app.models.personnel import Personnel
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    # Use sessionmaker with the active connection
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

# --- Domain fixtures ---

@pytest.fixture(scope="function")
def department(db_session):
    dept = Department(name="Operations")
    db_session.add(dept)
    db_session.commit()
    return dept

@pytest.fixture(scope="function")
def make_personnel(db_session):
    """Factory creating personnel records; returns the list created."""
    counter = {"n": 0}

    def _make(count=1, department=None, status="active"):
        created = []
        for _ in range(count):
            counter["n"] += 1
            n = counter["n"]
            person = Personnel(
                employee_code=f"EMP-{n:04d}",
                first_name=f"Ayse{n}",
                last_name="Yilmaz",
                email=f"employee{n}@example.com",
                department_id=department.id if department else None,
                status=status,
            )
            db_session.add(person)
            created.append(person)
        db_session.commit()
        return created
    return _make

@pytest.fixture(scope="function")
def employee(make_personnel, department):
    return make_personnel(1, department=department)[0]

@pytest.fixture(scope="function")
def annual_leave(db_session):
    leave_type = LeaveType(name="Yıllık İzin", max_days_per_year=20, carry_over_eligible=True)
    db_session.add(leave_type)
    db_session.commit()
    return leave_type

@pytest.fixture(scope="function")
def sick_leave(db_session):
    leave_type = LeaveType(name="Sick Leave", max_days_per_year=10, carry_over_eligible=False)
    db_session.add(leave_type)
    db_session.commit()
    return leave_type

@pytest.fixture(scope="function")
def unpaid_leave(db_session):
    leave_type = LeaveType(name="Unpaid Leave", max_days_per_year=None)
    db_session.add(leave_type)
    db_session.commit()
    return leave_type

@pytest.fixture(scope="function")
def make_leave(db_session):
    """Factory storing a leave request directly, bypassing the workflow."""
    def _make(person, leave_type, start: date, end: date, status=LeaveStatus.APPROVED):
        leave = LeaveRequest(
            personnel_id=person.id,
            leave_type_id=leave_type.id,
            start_date=start,
            end_date=end,
            days=(end - start).days + 1,
            status=status.value,
        )
        db_session.add(leave)
        db_session.commit()
        return leave
    return _make
