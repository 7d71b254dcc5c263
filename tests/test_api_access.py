# /tests/test_api_access.py

"""
End-to-end checks of the access-control pipeline through the HTTP surface:
identity, role gate, scope resolution, error mapping and audit capture.
"""

from fastapi.testclient import TestClient

from app.db.models.audit_models import AuditLog
from app.db.models.record_models import Grade
from app.main import app
from app.services.database_service import get_db_service


# --- Identity ---

def test_missing_credential_is_401_with_bearer_challenge(client, school):
    response = client.get("/api/students")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_unauthenticated_requests_issue_no_queries(client, mocker):
    db = mocker.MagicMock()
    app.dependency_overrides[get_db_service] = lambda: db

    assert client.get("/api/grades/student/1").status_code == 401
    payload = {"studentId": 1, "subjectId": 1, "score": 50, "term": "1", "academicYear": "2024"}
    assert client.post("/api/grades", json=payload, headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401
    assert client.delete("/api/payments/1", headers={"Authorization": "Basic abc"}).status_code == 401
    assert db.mock_calls == []


def test_token_for_deleted_user_is_401(client, school, auth_header):
    response = client.get("/api/students", headers=auth_header(9999, "ADMIN"))
    assert response.status_code == 401


def test_role_is_read_from_the_database(client, school, auth_header):
    # A token claiming ADMIN for a student account gets student rights only.
    response = client.get("/api/users", headers=auth_header(school.student_one_user, "ADMIN"))
    assert response.status_code == 403


# --- Role gate ---

def test_student_cannot_list_all_grades(client, school, auth_header):
    response = client.get("/api/grades", headers=auth_header(school.student_one_user, "STUDENT"))
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}


def test_teacher_cannot_delete_payments(client, school, auth_header):
    response = client.delete("/api/payments/1", headers=auth_header(school.teacher_one_user, "TEACHER"))
    assert response.status_code == 403


# --- Scope ---

def _grade_payload(school, **overrides):
    payload = {
        "studentId": school.student_one, "subjectId": school.subject,
        "score": 88, "term": "1", "academicYear": "2024/2025",
    }
    payload.update(overrides)
    return payload


def test_teacher_records_grade_for_student_in_taught_class(client, school, auth_header):
    response = client.post("/api/grades", json=_grade_payload(school), headers=auth_header(school.teacher_one_user, "TEACHER"))
    assert response.status_code == 201
    body = response.json()
    assert body["teacherId"] == school.teacher_one
    assert body["score"] == 88


def test_teacher_cannot_record_grade_outside_taught_class(client, school, auth_header):
    payload = _grade_payload(school, studentId=school.student_two)
    response = client.post("/api/grades", json=payload, headers=auth_header(school.teacher_one_user, "TEACHER"))
    assert response.status_code == 403


def test_teacher_cannot_record_grade_as_someone_else(client, school, auth_header):
    payload = _grade_payload(school, teacherId=school.teacher_two)
    response = client.post("/api/grades", json=payload, headers=auth_header(school.teacher_one_user, "TEACHER"))
    assert response.status_code == 403


def test_missing_student_is_404_before_scope(client, school, auth_header):
    payload = _grade_payload(school, studentId=424242)
    response = client.post("/api/grades", json=payload, headers=auth_header(school.teacher_one_user, "TEACHER"))
    assert response.status_code == 404
    assert response.json() == {"error": "Student not found"}


def test_teacher_cannot_modify_colleagues_grade(client, school, auth_header, session_factory):
    with session_factory() as db:
        grade = Grade(student_id=school.student_one, subject_id=school.subject, teacher_id=school.teacher_two,
                      score=60, term="1", academic_year="2024/2025")
        db.add(grade)
        db.commit()
        grade_id = grade.id

    teacher_one = auth_header(school.teacher_one_user, "TEACHER")
    assert client.put(f"/api/grades/{grade_id}", json={"score": 95}, headers=teacher_one).status_code == 403
    assert client.delete(f"/api/grades/{grade_id}", headers=teacher_one).status_code == 403

    teacher_two = auth_header(school.teacher_two_user, "TEACHER")
    response = client.put(f"/api/grades/{grade_id}", json={"score": 95}, headers=teacher_two)
    assert response.status_code == 200
    assert response.json()["score"] == 95


def test_admin_must_name_the_grading_teacher(client, school, auth_header):
    admin = auth_header(school.admin_user)
    assert client.post("/api/grades", json=_grade_payload(school), headers=admin).status_code == 400
    response = client.post("/api/grades", json=_grade_payload(school, teacherId=school.teacher_two), headers=admin)
    assert response.status_code == 201


def test_duplicate_grade_is_409(client, school, auth_header):
    teacher = auth_header(school.teacher_one_user, "TEACHER")
    assert client.post("/api/grades", json=_grade_payload(school), headers=teacher).status_code == 201
    response = client.post("/api/grades", json=_grade_payload(school, score=50), headers=teacher)
    assert response.status_code == 409


def test_parent_reads_only_linked_child(client, school, auth_header):
    parent = auth_header(school.parent_user, "PARENT")
    assert client.get(f"/api/grades/student/{school.student_one}", headers=parent).status_code == 200
    assert client.get(f"/api/grades/student/{school.student_two}", headers=parent).status_code == 403

    listed = client.get("/api/students", headers=parent).json()
    assert [student["id"] for student in listed] == [school.student_one]


def test_teacher_grade_list_is_filtered_to_taught_classes(client, school, auth_header, session_factory):
    with session_factory() as db:
        for student_id, teacher_id in ((school.student_one, school.teacher_one), (school.student_two, school.teacher_two)):
            db.add(Grade(student_id=student_id, subject_id=school.subject, teacher_id=teacher_id,
                         score=75, term="1", academic_year="2024/2025"))
        db.commit()

    response = client.get("/api/grades", headers=auth_header(school.teacher_one_user, "TEACHER"))
    assert response.status_code == 200
    assert {grade["studentId"] for grade in response.json()} == {school.student_one}


def test_teacher_attendance_changes_follow_class(client, school, auth_header):
    teacher = auth_header(school.teacher_one_user, "TEACHER")
    payload = {"studentId": school.student_one, "date": "2024-05-14T08:00:00", "status": "ABSENT"}
    created = client.post("/api/attendance", json=payload, headers=teacher)
    assert created.status_code == 201

    update = client.put(f"/api/attendance/{created.json()['id']}", json={}, headers=teacher)
    assert update.status_code == 400

    other_teacher = auth_header(school.teacher_two_user, "TEACHER")
    response = client.put(f"/api/attendance/{created.json()['id']}", json={"status": "PRESENT"}, headers=other_teacher)
    assert response.status_code == 403


def test_new_payment_starts_pending(client, school, auth_header):
    payload = {"studentId": school.student_one, "amount": 150000, "description": "May tuition", "dueDate": "2024-05-31T00:00:00"}
    response = client.post("/api/payments", json=payload, headers=auth_header(school.teacher_one_user, "TEACHER"))
    assert response.status_code == 201
    assert response.json()["status"] == "PENDING"


# --- Accounts ---

def test_register_login_and_duplicate(client, school):
    payload = {"username": "fajar", "email": "fajar@school.test", "password": "pw-123"}
    assert client.post("/api/auth/register", json=payload).status_code == 201

    duplicate = client.post("/api/auth/register", json={**payload, "email": "other@school.test"})
    assert duplicate.status_code == 409
    assert duplicate.json()["field"] == "username"

    login = client.post("/api/auth/login", json={"username": "fajar", "password": "pw-123"})
    assert login.status_code == 200
    assert login.json()["user"]["role"] == "STUDENT"

    assert client.post("/api/auth/login", json={"username": "fajar", "password": "wrong"}).status_code == 401


def test_self_registration_cannot_grant_admin(client, school):
    payload = {"username": "mallory", "email": "m@school.test", "password": "x", "role": "ADMIN"}
    assert client.post("/api/auth/register", json=payload).status_code == 403


def test_unique_violation_reports_field(client, school, auth_header):
    payload = {"name": "Harapan Bangsa"}
    response = client.post("/api/schools", json=payload, headers=auth_header(school.admin_user))
    assert response.status_code == 409
    assert response.json() == {"error": "Data already exists", "field": "name"}


def test_non_unique_integrity_error_is_a_server_error(client, school, auth_header):
    # The class still has students, so the delete violates NOT NULL on students.class_id.
    failing_client = TestClient(app, raise_server_exceptions=False)
    response = failing_client.delete(f"/api/classes/{school.class_a}", headers=auth_header(school.admin_user))
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}

    assert client.get(f"/api/classes/{school.class_a}", headers=auth_header(school.admin_user)).status_code == 200


def test_invalid_role_filter_is_400(client, school, auth_header):
    response = client.get("/api/users?role=janitor", headers=auth_header(school.admin_user))
    assert response.status_code == 400


# --- Audit capture ---

def test_successful_mutation_is_observed_with_principal_and_body(client, school, auth_header, audit_recorder):
    client.post("/api/grades", json=_grade_payload(school), headers=auth_header(school.teacher_one_user, "TEACHER"))

    assert len(audit_recorder.calls) == 1
    call = audit_recorder.calls[0]
    assert call.principal.id == school.teacher_one_user
    assert (call.method, call.path, call.status_code) == ("POST", "/api/grades", 201)
    assert call.request_body["studentId"] == school.student_one


def test_forbidden_mutation_is_observed(client, school, auth_header, audit_recorder):
    client.delete("/api/payments/1", headers=auth_header(school.teacher_one_user, "TEACHER"))
    assert [call.status_code for call in audit_recorder.calls] == [403]


def test_reads_and_unauthenticated_requests_are_not_observed(client, school, auth_header, audit_recorder):
    client.get("/api/grades", headers=auth_header(school.admin_user))
    client.post("/api/grades", json=_grade_payload(school))
    client.post("/api/auth/login", json={"username": "admin", "password": "secret-pass"})
    assert audit_recorder.calls == []


def test_failed_mutation_is_not_observed(client, school, auth_header, audit_recorder, mocker):
    mocker.patch("app.services.record_service.create_grade", side_effect=RuntimeError("disk full"))
    failing_client = TestClient(app, raise_server_exceptions=False)

    response = failing_client.post(
        "/api/grades", json=_grade_payload(school), headers=auth_header(school.teacher_one_user, "TEACHER")
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert audit_recorder.calls == []


def test_audit_log_query_pages_newest_first(client, school, auth_header, session_factory):
    with session_factory() as db:
        for index in range(3):
            db.add(AuditLog(user_id=school.admin_user, method="POST", path=f"/api/grades/{index}", status_code=201))
        db.add(AuditLog(user_id=school.teacher_one_user, method="DELETE", path="/api/payments/1", status_code=403))
        db.commit()

    admin = auth_header(school.admin_user)
    response = client.get("/api/audit-logs?method=post&pageSize=2", headers=admin)
    assert response.status_code == 200
    body = response.json()
    assert body["pagination"] == {"page": 1, "pageSize": 2, "total": 3, "totalPages": 2}
    assert [item["path"] for item in body["data"]] == ["/api/grades/2", "/api/grades/1"]
    assert body["data"][0]["user"]["username"] == "admin"

    filtered = client.get(f"/api/audit-logs?userId={school.teacher_one_user}&path=PAYMENTS", headers=admin).json()
    assert filtered["pagination"]["total"] == 1

    teacher = auth_header(school.teacher_one_user, "TEACHER")
    assert client.get("/api/audit-logs", headers=teacher).status_code == 403


# --- Dashboard ---

def test_admin_kpis(client, school, auth_header):
    response = client.get("/api/dashboard/kpis", headers=auth_header(school.admin_user))
    assert response.status_code == 200
    body = response.json()
    assert (body["totalStudents"], body["totalTeachers"], body["totalClasses"]) == (2, 2, 2)
    assert body["attendanceRateToday"] == 0


def test_parent_kpis_count_linked_children(client, school, auth_header):
    body = client.get("/api/dashboard/kpis", headers=auth_header(school.parent_user, "PARENT")).json()
    assert body["totalStudents"] == 1
    assert body["totalTeachers"] == 0


def test_notifications_report_overdue_payments(client, school, auth_header):
    admin = auth_header(school.admin_user)
    payload = {"studentId": school.student_two, "amount": 100, "description": "Books", "dueDate": "2020-01-01T00:00:00"}
    assert client.post("/api/payments", json=payload, headers=admin).status_code == 201

    body = client.get("/api/notifications", headers=admin).json()
    assert body["total"] == 1
    assert body["items"][0]["type"] == "PAYMENT_OVERDUE"
    assert body["items"][0]["severity"] == "high"

    # The parent's child has no overdue payment.
    parent_body = client.get("/api/notifications", headers=auth_header(school.parent_user, "PARENT")).json()
    assert parent_body == {"total": 0, "items": []}


# --- Health ---

def test_health_endpoints(client):
    assert client.get("/api/health").json() == {"status": "ok"}
    assert client.get("/api/health/ready").json() == {"status": "ready", "db": "up"}
