from schoolhub.schemas.enums import UserRole
from tests.helpers import bearer, school_payload

EXAM = {
    "title": "Mid Term",
    "subject": "Mathematics",
    "grade_level": "G1",
    "exam_date": "2025-03-14",
    "start_time": "09:00",
    "duration": 90,
    "total_marks": 100,
    "passing_marks": 50,
    "venue": "Main Hall",
    "examiner_id": "t1",
}


def test_requests_carry_a_request_id(client):
    response = client.get("/api/v1/auth/me", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"
    assert client.get("/api/v1/auth/me").headers["X-Request-ID"]


def test_missing_session_is_unauthenticated(client):
    response = client.get("/api/v1/examinations", params={"school_id": "abc123"})
    assert response.status_code == 401
    assert response.json()["error"] == "UNAUTHENTICATED"


def test_garbage_token_is_unauthenticated(client):
    response = client.get("/api/v1/examinations", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_create_and_list_schools(client, create_school, super_admin_headers):
    school_id = create_school()

    response = client.get("/api/v1/schools", headers=super_admin_headers)
    assert response.status_code == 200
    schools = response.json()["schools"]
    assert [s["id"] for s in schools] == [school_id]
    assert schools[0]["status"] == "active"


def test_only_super_admin_creates_schools(client, create_school):
    school_id = create_school()
    headers = bearer(UserRole.SCHOOL_ADMIN, school_id=school_id)

    response = client.post("/api/v1/schools", json=school_payload(email="x@other.ac.ke"), headers=headers)
    assert response.status_code == 403


def test_duplicate_school_email(client, create_school, super_admin_headers):
    create_school()
    response = client.post("/api/v1/schools", json=school_payload(), headers=super_admin_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "DUPLICATE_RESOURCE"


def test_invalid_school_payload_reports_fields(client, super_admin_headers):
    response = client.post(
        "/api/v1/schools",
        json={**school_payload(), "email": "not-an-email", "phone": "123"},
        headers=super_admin_headers
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert {d["path"] for d in body["details"]} == {"email", "phone"}


def test_cross_tenant_access_is_forbidden(client, create_school):
    abc = create_school()
    xyz = create_school(email="info@riverside.ac.ke", name="Riverside School")
    headers = bearer(UserRole.SCHOOL_ADMIN, school_id=abc)

    assert client.get(f"/api/v1/schools/{abc}/classes", headers=headers).status_code == 200

    response = client.get(f"/api/v1/schools/{xyz}/classes", headers=headers)
    assert response.status_code == 403
    assert response.json()["error"] == "FORBIDDEN"

    response = client.get("/api/v1/examinations", params={"school_id": xyz}, headers=headers)
    assert response.status_code == 403


def test_super_admin_reaches_any_school(client, create_school, super_admin_headers):
    school_id = create_school()

    response = client.get(f"/api/v1/schools/{school_id}", headers=super_admin_headers)
    assert response.status_code == 200
    assert response.json()["stats"] == {"users": 0, "classes": 0, "subjects": 0}

    response = client.get(f"/api/v1/schools/{school_id}/subjects", headers=super_admin_headers)
    assert response.status_code == 200


def test_super_admin_must_name_a_school(client, super_admin_headers):
    response = client.get("/api/v1/examinations", headers=super_admin_headers)
    assert response.status_code == 400


def test_unknown_school_is_not_found(client, super_admin_headers):
    response = client.get("/api/v1/schools/nosuchschool/classes", headers=super_admin_headers)
    assert response.status_code == 404


def test_malformed_school_id_is_rejected(client, super_admin_headers):
    response = client.get("/api/v1/examinations", params={"school_id": "a.b"}, headers=super_admin_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_SCHOOL_ID"


def test_classes_and_subjects(client, create_school):
    school_id = create_school()
    admin = bearer(UserRole.SCHOOL_ADMIN, school_id=school_id, user_id="admin-1")

    response = client.post(
        f"/api/v1/schools/{school_id}/classes",
        json={"name": "Grade 1 East", "grade": "1", "academic_year": "2025"},
        headers=admin
    )
    assert response.status_code == 201
    assert response.json()["school_id"] == school_id
    assert response.json()["created_by"] == "admin-1"

    response = client.post(
        f"/api/v1/schools/{school_id}/subjects",
        json={"name": "Mathematics", "code": "MATH101", "grade_level": "G1"},
        headers=admin
    )
    assert response.status_code == 201

    teacher = bearer(UserRole.TEACHER, school_id=school_id)
    response = client.post(
        f"/api/v1/schools/{school_id}/subjects",
        json={"name": "English", "code": "ENG101", "grade_level": "G1"},
        headers=teacher
    )
    assert response.status_code == 403

    assert [c["name"] for c in client.get(f"/api/v1/schools/{school_id}/classes", headers=teacher).json()] == ["Grade 1 East"]

    detail = client.get(f"/api/v1/schools/{school_id}", headers=admin).json()
    assert detail["stats"] == {"users": 0, "classes": 1, "subjects": 1}


def test_examination_soft_delete(client, create_school):
    school_id = create_school()
    teacher = bearer(UserRole.TEACHER, school_id=school_id, user_id="t1")

    response = client.post("/api/v1/examinations", json=EXAM, headers=teacher)
    assert response.status_code == 201
    exam = response.json()
    assert exam["status"] == "upcoming"
    assert exam["code"].startswith("MT-MAT-G1-")

    response = client.patch(f"/api/v1/examinations/{exam['id']}", json={"status": "ongoing"}, headers=teacher)
    assert response.status_code == 200
    assert response.json()["status"] == "ongoing"

    assert client.delete(f"/api/v1/examinations/{exam['id']}", headers=teacher).status_code == 200
    assert client.get("/api/v1/examinations", headers=teacher).json() == []

    response = client.get(f"/api/v1/examinations/{exam['id']}", headers=teacher)
    assert response.status_code == 200
    assert response.json()["status"] == "deleted"


def test_examinations_are_isolated_between_schools(client, create_school, super_admin_headers):
    abc = create_school()
    xyz = create_school(email="info@riverside.ac.ke", name="Riverside School")

    client.post("/api/v1/examinations", json=EXAM, params={"school_id": abc}, headers=super_admin_headers)

    assert len(client.get("/api/v1/examinations", params={"school_id": abc}, headers=super_admin_headers).json()) == 1
    assert client.get("/api/v1/examinations", params={"school_id": xyz}, headers=super_admin_headers).json() == []


def test_results_compute_grade(client, create_school):
    school_id = create_school()
    teacher = bearer(UserRole.TEACHER, school_id=school_id, user_id="t1", name="Tom Otieno")

    response = client.post("/api/v1/results", json={
        "student_name": "Amina Hassan",
        "subject": "Mathematics",
        "exam_type": "Final",
        "score": 47,
        "total_marks": 50,
        "term": "Second",
        "academic_year": "2025",
    }, headers=teacher)
    assert response.status_code == 201
    result = response.json()
    assert result["percentage"] == 94.0
    assert result["grade"] == "A"
    assert result["teacher_name"] == "Tom Otieno"

    response = client.post("/api/v1/results", json={**result, "score": 60}, headers=teacher)
    assert response.status_code == 400


def test_super_admin_signup_and_signin(client):
    payload = {"name": "Root Admin", "email": "root@schoolhub.io", "password": "s3cret-pass"}
    assert client.post("/api/v1/auth/super-admin/signup", json=payload).status_code == 201

    response = client.post("/api/v1/auth/super-admin/signup", json={**payload, "email": "two@schoolhub.io"})
    assert response.status_code == 400

    response = client.post(
        "/api/v1/auth/super-admin/signin",
        json={"email": "root@schoolhub.io", "password": "s3cret-pass"}
    )
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}).json()
    assert me["user"]["role"] == "super_admin"
    assert me["user"]["school_id"] is None

    response = client.post(
        "/api/v1/auth/super-admin/signin",
        json={"email": "root@schoolhub.io", "password": "wrong"}
    )
    assert response.status_code == 401


def test_school_signup_and_signin(client, create_school):
    school_id = create_school()
    payload = {
        "name": "Jane Wanjiru",
        "email": "jane@greenfield.ac.ke",
        "password": "s3cret-pass",
        "school_id": school_id,
        "user_type": "principal",
    }
    assert client.post("/api/v1/auth/school/signup", json=payload).status_code == 201
    assert client.post("/api/v1/auth/school/signup", json=payload).status_code == 400

    response = client.post("/api/v1/auth/school/signin", json={
        "email": "jane@greenfield.ac.ke",
        "password": "s3cret-pass",
        "school_id": school_id,
    })
    assert response.status_code == 200
    body = response.json()
    assert body["user"]["role"] == "school_admin"
    assert body["user"]["school_id"] == school_id

    headers = {"Authorization": f"Bearer {body['access_token']}"}
    detail = client.get(f"/api/v1/schools/{school_id}", headers=headers).json()
    assert detail["stats"]["users"] == 1


def test_school_signup_for_unknown_school(client):
    response = client.post("/api/v1/auth/school/signup", json={
        "name": "Jane Wanjiru",
        "email": "jane@greenfield.ac.ke",
        "password": "s3cret-pass",
        "school_id": "nosuchschool",
        "user_type": "teacher",
    })
    assert response.status_code == 404


def test_token_accepted_from_cookie(client, create_school):
    school_id = create_school()
    token = bearer(UserRole.TEACHER, school_id=school_id)["Authorization"].split(" ", 1)[1]
    client.cookies.set("access_token", token)
    assert client.get("/api/v1/examinations").status_code == 200
