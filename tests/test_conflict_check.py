import pytest
from datetime import date
from app.core.exceptions import StoredLeaveDataError
from app.models.leave_request import LeaveStatus
from app.services import leave_analytics

START = date(2025, 7, 7)
END = date(2025, 7, 11)

def test_org_wide_staffing_shortfall(db_session, make_personnel, department, annual_leave, make_leave):
    """20 staff, 15 already away: 5 available is below the minimum of 6."""
    staff = make_personnel(20, department=department)
    for person in staff[:15]:
        make_leave(person, annual_leave, START, END)
    candidate = make_leave(staff[15], annual_leave, START, END, status=LeaveStatus.PENDING)

    result = leave_analytics.check_conflicts(db_session, candidate.id)
    info = result["staffing_info"]
    assert info["total_personnel"] == 20
    assert info["minimum_required"] == 6
    assert info["min_available_staff"] == 5
    assert len(info["critical_dates"]) == 5
    assert result["has_staffing_issues"] is True
    assert result["has_conflicts"] is False
    assert result["can_approve"] is False

def test_staffing_spans_departments(db_session, make_personnel, department, annual_leave, make_leave):
    from app.models.department import Department
    other = Department(name="Finance")
    db_session.add(other)
    db_session.commit()
    ops = make_personnel(5, department=department)
    finance = make_personnel(5, department=other)
    for person in finance[:4]:
        make_leave(person, annual_leave, START, START)
    candidate = make_leave(ops[0], annual_leave, START, END, status=LeaveStatus.PENDING)

    result = leave_analytics.check_conflicts(db_session, candidate.id)
    # minimum ceil(10 * 0.3) = 3; 6 available on START
    assert result["staffing_info"]["min_available_staff"] == 6
    assert result["has_staffing_issues"] is False
    assert result["can_approve"] is True

def test_own_overlapping_leave_is_a_conflict(db_session, employee, annual_leave, sick_leave, make_leave):
    existing = make_leave(employee, annual_leave, date(2025, 7, 1), date(2025, 7, 8))
    candidate = make_leave(employee, sick_leave, START, END, status=LeaveStatus.PENDING)

    result = leave_analytics.check_conflicts(db_session, candidate.id)
    assert result["has_conflicts"] is True
    assert result["conflicts"][0]["leave_request_id"] == existing.id
    assert result["conflicts"][0]["leave_type"] == "Yıllık İzin"
    assert result["can_approve"] is False

def test_request_does_not_conflict_with_itself(db_session, make_personnel, department, annual_leave, make_leave):
    staff = make_personnel(3, department=department)
    approved = make_leave(staff[0], annual_leave, START, END)

    result = leave_analytics.check_conflicts(db_session, approved.id)
    assert result["has_conflicts"] is False
    # Already approved, so nothing left to approve
    assert result["can_approve"] is False

def test_check_conflicts_endpoint(client, make_personnel, department, annual_leave, make_leave):
    staff = make_personnel(4, department=department)
    candidate = make_leave(staff[0], annual_leave, START, END, status=LeaveStatus.PENDING)

    response = client.get(f"/api/leave-requests/{candidate.id}/check-conflicts")
    assert response.status_code == 200
    data = response.json()
    assert data["leave_request_id"] == candidate.id
    assert data["staffing_info"]["minimum_required"] == 2
    assert data["can_approve"] is True

def test_check_conflicts_unknown_request(client):
    assert client.get("/api/leave-requests/9999/check-conflicts").status_code == 404

def test_staffing_base_counts_active_personnel_only(db_session, make_personnel, department, annual_leave, make_leave):
    """4 active of 14 rows: minimum is ceil(4 * 0.3) = 2, not ceil(14 * 0.3) = 5."""
    active = make_personnel(4, department=department)
    make_personnel(10, department=department, status="terminated")
    make_leave(active[0], annual_leave, START, END)
    make_leave(active[1], annual_leave, START, END)
    candidate = make_leave(active[2], annual_leave, START, END, status=LeaveStatus.PENDING)

    info = leave_analytics.check_conflicts(db_session, candidate.id)["staffing_info"]
    assert info["total_personnel"] == 4
    assert info["minimum_required"] == 2
    assert info["min_available_staff"] == 2

def test_reversed_stored_candidate_is_a_data_error(db_session, employee, annual_leave, make_leave):
    candidate = make_leave(employee, annual_leave, END, START, status=LeaveStatus.PENDING)

    with pytest.raises(StoredLeaveDataError):
        leave_analytics.check_conflicts(db_session, candidate.id)
