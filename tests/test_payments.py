"""
Enrollments, payment records and payment status aggregation.
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from classes.enrollment_manager import EnrollmentFilter, EnrollmentManager
from classes.payment_manager import aggregate_payment_status
from classes.validators import EnrollmentCreate
from models import db
from models.enrollments import Enrollment
from utils.errors import Conflict, ValidationError


def payment(amount, status):
    return SimpleNamespace(amount=Decimal(str(amount)), status=status)


class TestAggregatePaymentStatus:

    def test_nothing_paid_is_pending(self):
        assert aggregate_payment_status([], 300) == "PENDING"
        assert aggregate_payment_status([payment(300, "PENDING"), payment(50, "FAILED")], 300) == "PENDING"

    def test_some_paid_is_partial(self):
        assert aggregate_payment_status([payment(100, "PAID"), payment(200, "PENDING")], 300) == "PARTIAL"

    def test_fully_paid(self):
        assert aggregate_payment_status([payment(100, "PAID"), payment(200, "PAID")], Decimal("300.00")) == "PAID"

    def test_refunds_do_not_count(self):
        assert aggregate_payment_status([payment(300, "REFUNDED")], 300) == "PENDING"

    def test_zero_price_is_paid(self):
        assert aggregate_payment_status([], Decimal("0")) == "PAID"
        assert aggregate_payment_status([payment(20, "PENDING")], 0) == "PAID"


def enrollment_id(seed):
    return Enrollment.query.filter_by(student_id=seed.student, course_id=seed.course).one().id


def test_add_payments_updates_status(admin_client, seed):
    url = f"/api/enrollments/{enrollment_id(seed)}/payments"

    first = admin_client.post(url, json={"amount": 100, "method": "CARD", "status": "PAID"})
    assert first.status_code == 201
    assert first.get_json()["payment_status"] == "PARTIAL"
    paid_at = first.get_json()["data"]["paid_at"]
    assert "T" in paid_at and paid_at.endswith("Z")

    second = admin_client.post(url, json={"amount": 200, "method": "CASH", "status": "PAID"})
    assert second.get_json()["payment_status"] == "PAID"

    listed = admin_client.get(url).get_json()["data"]
    assert [p["amount"] for p in listed] == [100.0, 200.0]


def test_marking_payment_paid(admin_client, seed):
    url = f"/api/enrollments/{enrollment_id(seed)}/payments"
    created = admin_client.post(url, json={"amount": 300, "method": "BANK_TRANSFER"}).get_json()
    assert created["payment_status"] == "PENDING"

    response = admin_client.put(f"/api/payments/{created['data']['id']}", json={"status": "PAID"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["payment_status"] == "PAID"
    assert body["data"]["paid_at"] is not None


def test_invalid_payment_method(admin_client, seed):
    response = admin_client.post(
        f"/api/enrollments/{enrollment_id(seed)}/payments", json={"amount": 10, "method": "BARTER"}
    )
    assert response.status_code == 400


def test_unknown_enrollment_and_payment(admin_client, seed):
    assert admin_client.get("/api/enrollments/999/payments").status_code == 404
    assert admin_client.put("/api/payments/999", json={"status": "PAID"}).status_code == 404


def test_payments_are_admin_only(student_client, seed):
    response = student_client.get(f"/api/enrollments/{enrollment_id(seed)}/payments")
    assert response.status_code == 403


def test_create_and_filter_enrollments(admin_client, seed):
    response = admin_client.post("/api/enrollments", json={
        "student_id": seed.outsider, "course_id": seed.other_course, "final_price": 120, "status": "PENDING",
    })
    assert response.status_code == 201

    duplicate = admin_client.post("/api/enrollments", json={"student_id": seed.outsider, "course_id": seed.other_course})
    assert duplicate.status_code == 409
    assert duplicate.get_json()["error"] == "Student is already enrolled in this course"

    pending = admin_client.get("/api/enrollments?status=PENDING").get_json()["data"]
    assert [e["student_id"] for e in pending] == [seed.outsider]

    searched = admin_client.get("/api/enrollments?search=ada").get_json()["data"]
    assert [e["student_id"] for e in searched] == [seed.student]

    by_student = admin_client.get(f"/api/enrollments?student_id={seed.student}").get_json()["data"]
    assert [e["course_id"] for e in by_student] == [seed.course]


def test_enrollment_filter_rejects_bad_student_id():
    with pytest.raises(ValidationError):
        EnrollmentFilter.from_args({"student_id": "abc"})
    assert EnrollmentFilter.from_args({"search": "  "}) == EnrollmentFilter()


def test_free_enrollment_reads_paid(admin_client, seed):
    created = admin_client.post("/api/enrollments", json={
        "student_id": seed.outsider, "course_id": seed.other_course, "final_price": 0,
    }).get_json()["data"]

    response = admin_client.post(
        f"/api/enrollments/{created['id']}/payments", json={"amount": 15, "method": "CASH"}
    )

    assert response.status_code == 201
    assert response.get_json()["payment_status"] == "PAID"


def test_duplicate_enrollment_is_a_conflict(seed):
    manager = EnrollmentManager(db.session)
    with pytest.raises(Conflict) as excinfo:
        manager.enroll_student(EnrollmentCreate(student_id=seed.student, course_id=seed.course))
    assert excinfo.value.status_code == 409


def test_enrollment_dates_are_iso_8601(admin_client, seed):
    enrollments = admin_client.get(f"/api/enrollments?student_id={seed.student}").get_json()["data"]
    enrolled_at = enrollments[0]["enrolled_at"]
    assert "T" in enrolled_at and enrolled_at.endswith("Z")
