"""
HTTP tests for the student and tutor syllabus confirmation and progress endpoints.
"""

from models import db
from models.enrollments import Enrollment
from models.item_progress import ItemProgress


def student_confirm_url(seed, target):
    return f"/api/student/courses/{seed.course}/syllabus/{target}/confirm"


def tutor_confirm_url(seed, target, student=None):
    student = student or seed.student
    return f"/api/tutor/courses/{seed.course}/students/{student}/syllabus/{target}/confirm"


class TestStudentConfirmation:

    def test_confirm_item(self, student_client, seed):
        response = student_client.post(student_confirm_url(seed, seed.item_a), json={})

        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        assert body["data"]["item"]["completed_by_student"] is True
        assert body["data"]["item"]["completed_by_tutor"] is False
        assert body["data"]["phase"]["phase_id"] == seed.basics

    def test_confirm_accepts_client_timestamp(self, student_client, seed):
        response = student_client.post(
            student_confirm_url(seed, seed.item_a),
            json={"completedAt": "2026-04-01T10:00:00+00:00"}
        )

        assert response.status_code == 200
        assert response.get_json()["data"]["item"]["completed_at"] == "2026-04-01T10:00:00Z"

    def test_confirm_without_body(self, student_client, seed):
        response = student_client.post(student_confirm_url(seed, seed.item_b))
        assert response.status_code == 200

    def test_malformed_timestamp_is_rejected(self, student_client, seed):
        response = student_client.post(
            student_confirm_url(seed, seed.item_a), json={"completed_at": "yesterday-ish"}
        )

        assert response.status_code == 400
        body = response.get_json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert ItemProgress.query.count() == 0

    def test_unauthenticated_request(self, app, seed):
        response = app.test_client().post(student_confirm_url(seed, seed.item_a), json={})
        assert response.status_code == 401
        assert response.get_json()["success"] is False

    def test_not_enrolled_student_is_forbidden(self, login, seed):
        client = login("outsider@example.com")
        response = client.post(student_confirm_url(seed, seed.item_a), json={})

        assert response.status_code == 403
        assert response.get_json()["error"] == "Not enrolled in course"
        assert ItemProgress.query.filter_by(student_id=seed.outsider).count() == 0

    def test_cancelled_enrollment_is_forbidden(self, student_client, seed):
        enrollment = Enrollment.query.filter_by(student_id=seed.student, course_id=seed.course).one()
        enrollment.status = "CANCELLED"
        db.session.commit()

        response = student_client.post(student_confirm_url(seed, seed.item_a), json={})
        assert response.status_code == 403

    def test_tutor_cannot_use_student_endpoint(self, tutor_client, seed):
        response = tutor_client.post(student_confirm_url(seed, seed.item_a), json={})
        assert response.status_code == 403

    def test_unknown_target(self, student_client, seed):
        response = student_client.post(student_confirm_url(seed, "missing"), json={})
        assert response.status_code == 404
        assert response.get_json()["error"] == "Phase not found"

    def test_legacy_phase_confirmation(self, student_client, seed):
        response = student_client.post(student_confirm_url(seed, seed.project), json={})

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["item"] is None
        assert data["phase"]["completed_by_student"] is True
        assert data["phase"]["completed_by_tutor"] is False

    def test_phase_with_items_is_rejected(self, student_client, seed):
        response = student_client.post(student_confirm_url(seed, seed.basics), json={})
        assert response.status_code == 400


class TestTutorConfirmation:

    def test_confirm_item_for_student(self, tutor_client, seed):
        response = tutor_client.post(tutor_confirm_url(seed, seed.item_a), json={})

        assert response.status_code == 200
        item = response.get_json()["data"]["item"]
        assert item["completed_by_tutor"] is True
        assert item["completed_by_student"] is False
        assert item["student_id"] == seed.student

    def test_unassigned_tutor_is_forbidden(self, login, seed):
        client = login("other.tutor@example.com")
        response = client.post(tutor_confirm_url(seed, seed.item_a), json={})

        assert response.status_code == 403
        assert response.get_json()["error"] == "Course not assigned to you"
        assert ItemProgress.query.count() == 0

    def test_student_not_enrolled(self, tutor_client, seed):
        response = tutor_client.post(tutor_confirm_url(seed, seed.item_a, seed.outsider), json={})

        assert response.status_code == 403
        assert response.get_json()["error"] == "Student not enrolled"
        assert ItemProgress.query.count() == 0

    def test_unknown_target(self, tutor_client, seed):
        response = tutor_client.post(tutor_confirm_url(seed, seed.foreign_item), json={})
        assert response.status_code == 404

    def test_unknown_target_is_checked_before_student_enrollment(self, tutor_client, seed):
        response = tutor_client.post(tutor_confirm_url(seed, "missing", seed.outsider), json={})
        assert response.status_code == 404
        assert response.get_json()["error"] == "Phase not found"

    def test_student_cannot_use_tutor_endpoint(self, student_client, seed):
        response = student_client.post(tutor_confirm_url(seed, seed.item_a), json={})
        assert response.status_code == 403


class TestDualConfirmationFlow:

    def test_phase_completes_after_both_parties_confirm_every_item(self, student_client, tutor_client, seed):
        for item in (seed.item_a, seed.item_b):
            assert tutor_client.post(tutor_confirm_url(seed, item), json={}).status_code == 200
        student_client.post(student_confirm_url(seed, seed.item_a), json={})

        phase = student_client.post(student_confirm_url(seed, seed.item_a), json={}).get_json()["data"]["phase"]
        assert phase["completed_by_tutor"] is True
        assert phase["completed_by_student"] is False
        assert phase["completed_at"] is None

        phase = student_client.post(student_confirm_url(seed, seed.item_b), json={}).get_json()["data"]["phase"]
        assert phase["completed_by_tutor"] is True
        assert phase["completed_by_student"] is True
        assert phase["completed_at"] is not None


class TestProgressEndpoints:

    def test_student_progress_lists_phases_in_order(self, student_client, seed):
        student_client.post(student_confirm_url(seed, seed.item_a), json={})

        response = student_client.get(f"/api/student/courses/{seed.course}/syllabus/progress")
        assert response.status_code == 200
        data = response.get_json()["data"]

        assert [p["phase_name"] for p in data["phases"]] == ["Basics", "Capstone"]
        basics = data["phases"][0]
        assert [i["title"] for i in basics["items"]] == ["Variables", "Functions"]
        assert basics["items"][0]["completed_by_student"] is True
        assert basics["items"][1]["completed_at"] is None
        assert basics["completed_by_student"] is False
        assert data["phases"][1]["items"] == []

        assert data["summary"]["total_items"] == 2
        assert data["summary"]["items_confirmed_by_student"] == 1
        assert data["summary"]["phases_completed"] == 0

    def test_student_progress_requires_enrollment(self, login, seed):
        client = login("outsider@example.com")
        response = client.get(f"/api/student/courses/{seed.course}/syllabus/progress")
        assert response.status_code == 403

    def test_tutor_sees_student_progress(self, tutor_client, student_client, seed):
        student_client.post(student_confirm_url(seed, seed.project), json={})
        tutor_client.post(tutor_confirm_url(seed, seed.project), json={})

        response = tutor_client.get(f"/api/tutor/courses/{seed.course}/students/{seed.student}/progress")
        assert response.status_code == 200
        capstone = response.get_json()["data"]["phases"][1]
        assert capstone["completed_by_student"] is True
        assert capstone["completed_by_tutor"] is True
        assert capstone["is_complete"] is True
        assert response.get_json()["data"]["summary"]["phases_completed"] == 1

    def test_tutor_courses_and_students(self, tutor_client, seed):
        courses = tutor_client.get("/api/tutor/courses").get_json()["data"]
        assert [c["id"] for c in courses] == [seed.course]
        assert courses[0]["is_primary"] is True

        students = tutor_client.get(f"/api/tutor/courses/{seed.course}/students").get_json()["data"]
        assert [s["id"] for s in students] == [seed.student]
        assert students[0]["date_created"].endswith("Z")

    def test_student_courses(self, student_client, seed):
        courses = student_client.get("/api/student/courses").get_json()["data"]
        assert [c["title"] for c in courses] == ["Python Foundations"]
        assert "T" in courses[0]["created_at"] and courses[0]["created_at"].endswith("Z")
