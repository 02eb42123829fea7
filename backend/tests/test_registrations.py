import uuid

from registrar.core.security import create_access_token
from registrar.crud import class_crud
from registrar.models import AdminRole, Parent, Student

from conftest import registration_payload


def test_create_registration(client, db_session, school_class):
    response = client.post("/api/registrations", json=registration_payload(school_class.id))
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Registration created successfully"

    student = db_session.get(Student, uuid.UUID(body["data"]["student_id"]))
    assert student.registration_status == "pending"
    assert student.age == 8
    assert student.class_id == school_class.id
    assert str(student.parent_id) == body["data"]["parent_id"]
    assert student.parent.mother_phone is None

    # Pending registrations do not take a place
    db_session.refresh(school_class)
    assert school_class.current_students == 0


def test_registration_reuses_parent_by_father_email(client, db_session, school_class):
    first = client.post("/api/registrations", json=registration_payload(school_class.id))
    payload = registration_payload(
        school_class.id,
        father_email="Youssef@Example.com",
        first_name="Lina",
    )
    payload["parent"]["father_phone"] = "+1555000111"
    second = client.post("/api/registrations", json=payload)

    assert second.status_code == 201
    assert first.json()["data"]["parent_id"] == second.json()["data"]["parent_id"]
    assert db_session.query(Parent).count() == 1
    parent = db_session.query(Parent).one()
    assert parent.father_phone == "+1555000111"
    assert parent.mother_first_name == "Mariam"
    assert len(parent.students) == 2


def test_registration_validation_errors(client, school_class):
    payload = registration_payload(school_class.id)
    payload["parent"]["father_first_name"] = "A"
    payload["parent"]["father_phone"] = "0123"
    payload["parent"]["father_email"] = "not-an-email"

    response = client.post("/api/registrations", json=payload)
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert set(body["errors"]) >= {
        "parent.father_first_name",
        "parent.father_phone",
        "parent.father_email",
    }
    assert body["errors"]["parent.father_phone"] == "Please enter a valid phone number"


def test_registration_outside_program_ages(client, school_class):
    response = client.post("/api/registrations", json=registration_payload(school_class.id, age=4))
    assert response.status_code == 400
    assert response.json()["errors"]["student.date_of_birth"] == "Student must be between 5 and 14 years old"

    response = client.post("/api/registrations", json=registration_payload(school_class.id, age=15))
    assert response.status_code == 400


def test_registration_age_outside_class_range(client, school_class):
    response = client.post("/api/registrations", json=registration_payload(school_class.id, age=5))
    assert response.status_code == 400
    assert response.json()["error"] == "Student age (5) is not appropriate for the class"


def test_registration_unknown_class(client):
    response = client.post("/api/registrations", json=registration_payload(uuid.uuid4()))
    assert response.status_code == 404
    assert response.json()["error"] == "Selected class is not found"


def test_registration_full_class(client, db_session, make_class):
    full_class = make_class(max_students=1, current_students=1)
    response = client.post("/api/registrations", json=registration_payload(full_class.id))
    assert response.status_code == 400
    assert response.json()["error"] == "Selected class is full"
    assert db_session.query(Student).count() == 0


def test_list_requires_admin(client, make_admin):
    assert client.get("/api/registrations").status_code == 401

    viewer = make_admin(email="viewer@example.com", username="viewer", role="viewer")
    token = create_access_token(subject=str(viewer.id))
    response = client.get("/api/registrations", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
    assert response.json()["error"] == "Access denied, insufficient permissions"


def test_list_accepts_plain_admin_role(client, make_admin):
    staff = make_admin(email="staff@example.com", username="staff", role=AdminRole.ADMIN.value)
    token = create_access_token(subject=str(staff.id))
    response = client.get("/api/registrations", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_list_pagination(client, auth_headers, school_class, register):
    for i, name in enumerate(["Adam", "Bilal", "Celia"]):
        register(school_class.id, father_email=f"father{i}@example.com", first_name=name)

    response = client.get("/api/registrations?page=1&limit=2", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert len(body["data"]) == 2
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}

    response = client.get("/api/registrations?page=2&limit=2", headers=auth_headers)
    assert len(response.json()["data"]) == 1

    response = client.get("/api/registrations?page=5&limit=2", headers=auth_headers)
    assert response.json()["data"] == []
    assert response.json()["pagination"]["total"] == 3


def test_list_rejects_bad_paging(client, auth_headers):
    assert client.get("/api/registrations?page=0", headers=auth_headers).status_code == 400
    assert client.get("/api/registrations?limit=1000", headers=auth_headers).status_code == 400


def test_list_includes_parent_class_and_teacher(client, auth_headers, school_class, teacher, register):
    register(school_class.id)

    row = client.get("/api/registrations", headers=auth_headers).json()["data"][0]
    assert row["parent"]["father_email"] == "youssef@example.com"
    assert row["class"]["name"] == "Elementary Morning"
    assert row["class"]["start_time"] == "09:00"
    assert row["teacher"]["id"] == str(teacher.id)


def test_list_search(client, auth_headers, school_class, register):
    register(school_class.id, father_email="karim@example.com", first_name="Zaid")
    register(school_class.id, father_email="omar@example.com", first_name="Nour")

    response = client.get("/api/registrations?search=zai", headers=auth_headers)
    names = [r["first_name"] for r in response.json()["data"]]
    assert names == ["Zaid"]

    response = client.get("/api/registrations?search=omar@", headers=auth_headers)
    names = [r["first_name"] for r in response.json()["data"]]
    assert names == ["Nour"]


def test_list_filters(client, auth_headers, school_class, make_class, register):
    other_class = make_class(name="Elementary Afternoon")
    first = register(school_class.id, father_email="a@example.com", first_name="Adam")
    register(other_class.id, father_email="b@example.com", first_name="Bilal")
    client.patch(f"/api/registrations/{first}/status", json={"status": "approved"}, headers=auth_headers)

    response = client.get("/api/registrations?status=approved", headers=auth_headers)
    assert [r["first_name"] for r in response.json()["data"]] == ["Adam"]

    response = client.get(f"/api/registrations?class_id={other_class.id}", headers=auth_headers)
    assert [r["first_name"] for r in response.json()["data"]] == ["Bilal"]

    response = client.get("/api/registrations?status=all&class_id=all", headers=auth_headers)
    assert response.json()["pagination"]["total"] == 2

    response = client.get("/api/registrations?class_id=nope", headers=auth_headers)
    assert response.status_code == 400


def test_list_sorting(client, auth_headers, school_class, register):
    for i, name in enumerate(["Bilal", "Adam", "Celia"]):
        register(school_class.id, father_email=f"father{i}@example.com", first_name=name)

    response = client.get("/api/registrations?sort=first_name", headers=auth_headers)
    assert [r["first_name"] for r in response.json()["data"]] == ["Adam", "Bilal", "Celia"]

    response = client.get("/api/registrations?sort=-firstName", headers=auth_headers)
    assert [r["first_name"] for r in response.json()["data"]] == ["Celia", "Bilal", "Adam"]


def test_get_registration(client, auth_headers, school_class, register):
    student_id = register(school_class.id)

    response = client.get(f"/api/registrations/{student_id}", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == student_id
    assert data["class"]["id"] == str(school_class.id)

    response = client.get(f"/api/registrations/{uuid.uuid4()}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Registration not found"


def test_status_changes_move_class_counter(client, db_session, auth_headers, school_class, register):
    student_id = register(school_class.id)
    url = f"/api/registrations/{student_id}/status"

    response = client.patch(url, json={"status": "approved"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Registration approved successfully"
    db_session.refresh(school_class)
    assert school_class.current_students == 1

    # Approving twice does not count the student twice
    client.patch(url, json={"status": "approved"}, headers=auth_headers)
    db_session.refresh(school_class)
    assert school_class.current_students == 1

    response = client.patch(url, json={"status": "rejected"}, headers=auth_headers)
    assert response.json()["message"] == "Registration rejected successfully"
    db_session.refresh(school_class)
    assert school_class.current_students == 0

    client.patch(url, json={"status": "pending"}, headers=auth_headers)
    db_session.refresh(school_class)
    assert school_class.current_students == 0


def test_status_invalid(client, auth_headers, school_class, register):
    student_id = register(school_class.id)
    response = client.patch(
        f"/api/registrations/{student_id}/status",
        json={"status": "waitlisted"},
        headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid status, must be pending, approved, or rejected"


def test_status_unknown_student(client, auth_headers):
    response = client.patch(
        f"/api/registrations/{uuid.uuid4()}/status",
        json={"status": "approved"},
        headers=auth_headers
    )
    assert response.status_code == 404


def test_approve_into_full_class(client, db_session, auth_headers, make_class, register):
    small_class = make_class(max_students=1)
    first = register(small_class.id, father_email="a@example.com")
    second = register(small_class.id, father_email="b@example.com")

    client.patch(f"/api/registrations/{first}/status", json={"status": "approved"}, headers=auth_headers)
    response = client.patch(
        f"/api/registrations/{second}/status",
        json={"status": "approved"},
        headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Class is full"

    student = db_session.get(Student, uuid.UUID(second))
    db_session.refresh(student)
    assert student.registration_status == "pending"
    db_session.refresh(small_class)
    assert small_class.current_students == 1


def test_reassign_approved_student(client, db_session, auth_headers, school_class, make_class, register):
    target = make_class(name="Elementary Afternoon")
    student_id = register(school_class.id)
    client.patch(f"/api/registrations/{student_id}/status", json={"status": "approved"}, headers=auth_headers)

    response = client.patch(
        f"/api/registrations/{student_id}/class",
        json={"class_id": str(target.id)},
        headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Class assignment updated successfully"

    db_session.refresh(school_class)
    db_session.refresh(target)
    assert school_class.current_students == 0
    assert target.current_students == 1
    assert db_session.get(Student, uuid.UUID(student_id)).class_id == target.id


def test_reassign_pending_student_keeps_counters(client, db_session, auth_headers, school_class, make_class, register):
    target = make_class(name="Elementary Afternoon")
    student_id = register(school_class.id)

    response = client.patch(
        f"/api/registrations/{student_id}/class",
        json={"class_id": str(target.id)},
        headers=auth_headers
    )
    assert response.status_code == 200
    db_session.refresh(target)
    assert target.current_students == 0


def test_reassign_to_same_class(client, db_session, auth_headers, school_class, register):
    student_id = register(school_class.id)
    client.patch(f"/api/registrations/{student_id}/status", json={"status": "approved"}, headers=auth_headers)

    response = client.patch(
        f"/api/registrations/{student_id}/class",
        json={"class_id": str(school_class.id)},
        headers=auth_headers
    )
    assert response.status_code == 200
    db_session.refresh(school_class)
    assert school_class.current_students == 1


def test_unassign_class(client, db_session, auth_headers, school_class, register):
    student_id = register(school_class.id)
    client.patch(f"/api/registrations/{student_id}/status", json={"status": "approved"}, headers=auth_headers)

    response = client.patch(
        f"/api/registrations/{student_id}/class",
        json={"class_id": None},
        headers=auth_headers
    )
    assert response.status_code == 200
    db_session.refresh(school_class)
    assert school_class.current_students == 0
    assert db_session.get(Student, uuid.UUID(student_id)).class_id is None


def test_reassign_rejections(client, db_session, auth_headers, school_class, make_class, register):
    student_id = register(school_class.id)
    url = f"/api/registrations/{student_id}/class"

    response = client.patch(url, json={"class_id": str(uuid.uuid4())}, headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "Class not found"

    older = make_class(name="Advanced Morning", age_min=12, age_max=14)
    response = client.patch(url, json={"class_id": str(older.id)}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Student age (8) is not appropriate for the class"

    full = make_class(name="Elementary Midday", max_students=1, current_students=1)
    response = client.patch(url, json={"class_id": str(full.id)}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Selected class is full"

    assert db_session.get(Student, uuid.UUID(student_id)).class_id == school_class.id


def test_failed_reassignment_rolls_back(client, db_session, auth_headers, school_class, make_class, register, monkeypatch):
    target = make_class(name="Elementary Afternoon")
    student_id = register(school_class.id)
    client.patch(f"/api/registrations/{student_id}/status", json={"status": "approved"}, headers=auth_headers)

    # The old place is released before the new one is taken
    monkeypatch.setattr(class_crud, "increment_current_students", lambda db, class_id: False)

    response = client.patch(
        f"/api/registrations/{student_id}/class",
        json={"class_id": str(target.id)},
        headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Class is full"

    db_session.refresh(school_class)
    db_session.refresh(target)
    assert school_class.current_students == 1
    assert target.current_students == 0
    student = db_session.get(Student, uuid.UUID(student_id))
    db_session.refresh(student)
    assert student.class_id == school_class.id


def test_search_wildcards_match_literally(client, auth_headers, school_class, register):
    register(school_class.id, father_email="a_b@example.com", first_name="Adam")
    register(school_class.id, father_email="axb@example.com", first_name="Bilal")

    response = client.get("/api/registrations?search=a_b", headers=auth_headers)
    assert [r["first_name"] for r in response.json()["data"]] == ["Adam"]

    response = client.get("/api/registrations?search=%25", headers=auth_headers)
    assert response.json()["data"] == []


def test_list_filters_by_camel_case_class_id(client, auth_headers, school_class, make_class, register):
    other_class = make_class(name="Elementary Afternoon")
    register(school_class.id, father_email="a@example.com", first_name="Adam")
    register(other_class.id, father_email="b@example.com", first_name="Bilal")

    response = client.get(f"/api/registrations?classId={other_class.id}", headers=auth_headers)
    assert [r["first_name"] for r in response.json()["data"]] == ["Bilal"]
