from app.models.notification import Notification

def test_department_and_personnel_crud(client):
    dept = client.post("/api/departments", json={"name": "Engineering"})
    assert dept.status_code == 201
    dept_id = dept.json()["id"]

    person = client.post("/api/personnel", json={
        "employee_code": "ENG-001",
        "first_name": "Mehmet",
        "last_name": "Kaya",
        "department_id": dept_id,
    })
    assert person.status_code == 201
    assert person.json()["full_name"] == "Mehmet Kaya"
    assert person.json()["status"] == "active"

    duplicate = client.post("/api/personnel", json={
        "employee_code": "ENG-001", "first_name": "X", "last_name": "Y",
    })
    assert duplicate.status_code == 400

    listing = client.get("/api/departments").json()
    assert listing[0]["personnel_count"] == 1
    assert len(client.get("/api/personnel", params={"department_id": dept_id}).json()) == 1

def test_personnel_unknown_department(client):
    response = client.post("/api/personnel", json={
        "employee_code": "X-1", "first_name": "A", "last_name": "B", "department_id": 9999,
    })
    assert response.status_code == 404

def test_leave_type_crud(client):
    response = client.post("/api/leave-types", json={
        "name": "Annual Leave", "max_days_per_year": 14, "carry_over_eligible": True,
    })
    assert response.status_code == 201
    assert response.json()["carry_over_eligible"] is True
    assert client.get("/api/leave-types").json()[0]["name"] == "Annual Leave"

def test_leave_type_negative_entitlement_rejected(client):
    response = client.post("/api/leave-types", json={"name": "Bad", "max_days_per_year": -1})
    assert response.status_code == 400

def test_notifications_read_flow(client, db_session, employee):
    for title in ("One", "Two"):
        db_session.add(Notification(personnel_id=employee.id, title=title, message="m"))
    db_session.commit()

    listing = client.get("/api/notifications", params={"personnel_id": employee.id})
    assert len(listing.json()) == 2

    first_id = listing.json()[0]["id"]
    assert client.patch(f"/api/notifications/{first_id}/read").json()["is_read"] is True
    unread = client.get("/api/notifications", params={"personnel_id": employee.id, "unread_only": True})
    assert len(unread.json()) == 1

    result = client.post("/api/notifications/mark-all-read", params={"personnel_id": employee.id})
    assert result.json()["updated"] == 1

def test_get_personnel(client, employee):
    response = client.get(f"/api/personnel/{employee.id}")
    assert response.status_code == 200
    assert response.json()["employee_code"] == employee.employee_code
    assert client.get("/api/personnel/9999").status_code == 404
