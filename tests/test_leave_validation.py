import pytest
from datetime import date
from app.core.exceptions import NotFoundError
from app.models.leave_request import LeaveStatus
from app.services import leave_analytics

TODAY = date(2025, 1, 15)

def _validate(db, person, leave_type, start, end, today=TODAY):
    return leave_analytics.validate_leave_request(db, person.id, leave_type.id, start, end, today=today)

def test_insufficient_balance(db_session, employee, annual_leave, make_leave):
    """18 of 20 days used; asking for 3 more is refused with both numbers in the message."""
    make_leave(employee, annual_leave, date(2025, 2, 3), date(2025, 2, 20))

    result = _validate(db_session, employee, annual_leave, date(2025, 5, 5), date(2025, 5, 7))
    assert result["is_valid"] is False
    assert result["requested_days"] == 3
    assert any("requested 3 days" in e and "remaining 2 days" in e for e in result["errors"])
    assert "Yıllık İzin: 18/20 days used in 2025" in result["info"]

def test_near_limit_warns(db_session, employee, sick_leave, make_leave):
    make_leave(employee, sick_leave, date(2025, 2, 3), date(2025, 2, 4))

    # remaining 8, requesting 7 > 0.8 * 8
    result = _validate(db_session, employee, sick_leave, date(2025, 3, 3), date(2025, 3, 9))
    assert result["is_valid"] is True
    assert len(result["warnings"]) == 1
    assert "remaining" in result["warnings"][0]

def test_clean_request(db_session, employee, annual_leave):
    result = _validate(db_session, employee, annual_leave, date(2025, 3, 3), date(2025, 3, 7))
    assert result == {
        "is_valid": True,
        "errors": [],
        "warnings": [],
        "info": ["Yıllık İzin: 0/20 days used in 2025"],
        "requested_days": 5,
    }

def test_reversed_dates_are_an_explicit_error(db_session, employee, annual_leave):
    result = _validate(db_session, employee, annual_leave, date(2025, 5, 10), date(2025, 5, 5))
    assert result["is_valid"] is False
    assert result["requested_days"] is None
    assert "after end date" in result["errors"][0]
    # Balance limit not evaluated against a nonsensical day count
    assert len(result["errors"]) == 1

def test_past_start_is_only_a_warning(db_session, employee, annual_leave):
    result = _validate(db_session, employee, annual_leave, date(2025, 1, 10), date(2025, 1, 10))
    assert result["is_valid"] is True
    assert "Start date is in the past" in result["warnings"]

def test_long_leave_warns(db_session, employee, unpaid_leave):
    result = _validate(db_session, employee, unpaid_leave, date(2025, 3, 1), date(2025, 4, 10))
    assert result["is_valid"] is True
    assert result["requested_days"] == 41
    assert any("special approval" in w for w in result["warnings"])
    assert "no annual limit" in result["info"][0]

def test_conflict_with_approved_leave(db_session, employee, annual_leave, make_leave):
    make_leave(employee, annual_leave, date(2025, 3, 1), date(2025, 3, 5))

    overlapping = _validate(db_session, employee, annual_leave, date(2025, 3, 4), date(2025, 3, 8))
    adjacent = _validate(db_session, employee, annual_leave, date(2025, 3, 6), date(2025, 3, 10))

    assert overlapping["is_valid"] is False
    assert any("conflict" in e for e in overlapping["errors"])
    assert adjacent["is_valid"] is True

def test_pending_leave_is_not_a_conflict(db_session, employee, annual_leave, make_leave):
    make_leave(employee, annual_leave, date(2025, 3, 1), date(2025, 3, 5), status=LeaveStatus.PENDING)

    result = _validate(db_session, employee, annual_leave, date(2025, 3, 4), date(2025, 3, 8))
    assert result["is_valid"] is True

def test_unknown_leave_type_is_a_finding(db_session, employee):
    result = leave_analytics.validate_leave_request(
        db_session, employee.id, 9999, date(2025, 3, 4), date(2025, 3, 8), today=TODAY
    )
    assert result["is_valid"] is False
    assert "not found" in result["errors"][0]

def test_unknown_personnel(db_session, annual_leave):
    with pytest.raises(NotFoundError):
        leave_analytics.validate_leave_request(
            db_session, 9999, annual_leave.id, date(2025, 3, 4), date(2025, 3, 8), today=TODAY
        )

def test_validation_is_deterministic(db_session, employee, annual_leave, make_leave):
    make_leave(employee, annual_leave, date(2025, 2, 3), date(2025, 2, 20))
    args = (db_session, employee, annual_leave, date(2025, 5, 5), date(2025, 5, 7))
    assert _validate(*args) == _validate(*args)

def test_validate_endpoint(client, employee, annual_leave, make_leave):
    make_leave(employee, annual_leave, date(2099, 2, 2), date(2099, 2, 19))

    response = client.post("/api/leave-requests/validate", json={
        "personnel_id": employee.id,
        "leave_type_id": annual_leave.id,
        "start_date": "2099-05-04",
        "end_date": "2099-05-06",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["is_valid"] is False
    assert data["warnings"] == []
    assert "remaining 2 days" in data["errors"][0]

def test_validate_endpoint_missing_field(client, employee):
    response = client.post("/api/leave-requests/validate", json={"personnel_id": employee.id})
    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert {"leave_type_id", "start_date", "end_date"} <= fields
