from datetime import time

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from registrar.common.deps import CurrentUser, get_current_user
from registrar.features.semester_registration.models import SemesterRegistrationStatus
from registrar.main import app


client = TestClient(app)


@pytest.fixture
def as_user():
    def _impersonate(user_id: str, role: str):
        async def override_get_current_user():
            return CurrentUser(id=user_id, role=role)

        app.dependency_overrides[get_current_user] = override_get_current_user

    yield _impersonate
    app.dependency_overrides.clear()


def _token(sub: str, role: str, secret: str = "test-secret") -> str:
    return jwt.encode({"sub": sub, "role": role}, secret, algorithm="HS256")


def test_root_and_healthz():
    assert client.get("/").json()["status"] == "ok"
    body = client.get("/healthz").json()
    assert body["status"] == "ok"
    assert body["components"]["database"]["status"] == "ok"
    assert body["counts"]["models"] > 0


def test_request_id_is_echoed():
    response = client.get("/", headers={"X-Request-Id": "abc-123"})
    assert response.headers["X-Request-Id"] == "abc-123"


def test_missing_token_is_rejected():
    response = client.get("/semester-registrations/")
    assert response.status_code in (401, 403)


def test_bad_token_is_401():
    response = client.get(
        "/semester-registrations/", headers={"Authorization": f"Bearer {_token('A-1', 'admin', secret='wrong')}"}
    )
    assert response.status_code == 401


def test_real_token_reaches_the_service(factory):
    student = factory.student()
    response = client.get(
        "/semester-registrations/get-my-registration",
        headers={"Authorization": f"Bearer {_token(student.student_id, 'student')}"},
    )
    assert response.status_code == 404
    body = response.json()
    assert body["error_code"] == "not_found"
    assert body["message"] == "No semester registration is open"
    assert "timestamp" in body


def test_student_cannot_create_registration(factory, as_user):
    as_user("S-1", "student")
    response = client.post(
        "/semester-registrations/",
        json={
            "start_date": "2026-04-01",
            "end_date": "2026-04-30",
            "academic_semester_id": str(factory.next_semester.id),
            "min_credit": 3,
            "max_credit": 12,
        },
    )
    assert response.status_code == 403


def test_admin_creates_registration_once(factory, as_user):
    as_user("A-1", "admin")
    payload = {
        "start_date": "2026-04-01",
        "end_date": "2026-04-30",
        "academic_semester_id": str(factory.next_semester.id),
        "min_credit": 3,
        "max_credit": 12,
    }
    first = client.post("/semester-registrations/", json=payload)
    assert first.status_code == 201
    assert first.json()["status"] == "UPCOMING"

    second = client.post("/semester-registrations/", json=payload)
    assert second.status_code == 409
    assert second.json()["error_code"] == "conflict"


def test_invalid_credit_window_is_422(factory, as_user):
    as_user("A-1", "admin")
    response = client.post(
        "/semester-registrations/",
        json={
            "start_date": "2026-04-01",
            "end_date": "2026-04-30",
            "academic_semester_id": str(factory.next_semester.id),
            "min_credit": 12,
            "max_credit": 3,
        },
    )
    assert response.status_code == 422


def test_invalid_transition_is_409(factory, as_user):
    registration = factory.registration(status=SemesterRegistrationStatus.UPCOMING)
    as_user("A-1", "super_admin")
    response = client.patch(f"/semester-registrations/{registration.id}", json={"status": "ENDED"})
    assert response.status_code == 409
    assert response.json()["details"] == {"from": "UPCOMING", "to": "ENDED"}


def test_student_enrollment_flow(factory, as_user):
    registration = factory.registration()
    student = factory.student()
    offered = factory.offered(factory.course(credits=3), registration)
    section = factory.section(offered, max_capacity=1)
    as_user(student.student_id, "student")

    assert client.post("/semester-registrations/start-registration").status_code == 200
    enroll = client.post(
        "/semester-registrations/enroll-into-course",
        json={"offered_course_id": str(offered.id), "offered_course_section_id": str(section.id)},
    )
    assert enroll.status_code == 200
    assert enroll.json() == {"message": "Successfully enrolled into course"}

    mine = client.get("/semester-registrations/get-my-registration").json()
    assert mine["student_semester_registration"]["total_credits_taken"] == 3
    assert mine["courses"][0]["section_title"] == section.title

    courses = client.get("/semester-registrations/get-my-semester-courses").json()
    assert courses[0]["is_taken"] is True

    other = factory.student()
    as_user(other.student_id, "student")
    full = client.post(
        "/semester-registrations/enroll-into-course",
        json={"offered_course_id": str(offered.id), "offered_course_section_id": str(section.id)},
    )
    assert full.status_code == 400
    assert full.json()["error_code"] == "business_rule_violation"


def test_admin_creates_section_with_conflicting_schedule(factory, as_user):
    registration = factory.registration()
    offered = factory.offered(factory.course(), registration)
    room, faculty = factory.room(), factory.faculty()
    booked = factory.section(factory.offered(factory.course(), registration))
    factory.schedule(booked, room, faculty, start=time(9, 0), end=time(10, 0))
    as_user("A-1", "admin")

    response = client.post(
        "/offered-course-sections/",
        json={
            "title": "A",
            "max_capacity": 30,
            "offered_course_id": str(offered.id),
            "class_schedules": [
                {
                    "day_of_week": "MONDAY",
                    "start_time": "09:30:00",
                    "end_time": "10:30:00",
                    "room_id": str(room.id),
                    "faculty_id": str(factory.faculty().id),
                }
            ],
        },
    )
    assert response.status_code == 409
    assert response.json()["details"]["room_id"] == str(room.id)


def test_faculty_can_read_marks_but_student_cannot(as_user):
    as_user("F-1", "faculty")
    assert client.get("/student-enrolled-course-marks/").status_code == 200
    as_user("S-1", "student")
    assert client.get("/student-enrolled-course-marks/").status_code == 403


def test_course_crud_over_http(as_user):
    as_user("A-1", "admin")
    created = client.post("/courses/", json={"title": "Algorithms", "code": "CSE-301", "credits": 3})
    assert created.status_code == 201
    course_id = created.json()["id"]

    patched = client.patch(f"/courses/{course_id}", json={"credits": 4})
    assert patched.json()["credits"] == 4

    assert client.delete(f"/courses/{course_id}").status_code == 200
    missing = client.get(f"/courses/{course_id}")
    assert missing.status_code == 404


def test_payments_listing_requires_admin(as_user):
    as_user("S-1", "student")
    assert client.get("/student-semester-payments/").status_code == 403
    as_user("A-1", "admin")
    assert client.get("/student-semester-payments/").json() == []
