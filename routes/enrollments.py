from flask import Blueprint, jsonify, request

from classes.enrollment_manager import EnrollmentFilter, EnrollmentManager
from classes.payment_manager import PaymentManager
from classes.validators import EnrollmentCreate, PaymentCreate, PaymentUpdate, parse_body
from models import db
from utils.utils import roles_required

enrollment_bp = Blueprint("enrollments", __name__)


@enrollment_bp.route("/enrollments", methods=["GET"])
@roles_required("admin")
def list_enrollments():
    filters = EnrollmentFilter.from_args(request.args)
    enrollments = EnrollmentManager(db.session).list_enrollments(filters)
    return jsonify({"success": True, "data": [e.to_dict() for e in enrollments]}), 200


@enrollment_bp.route("/enrollments", methods=["POST"])
@roles_required("admin")
def create_enrollment():
    data = parse_body(EnrollmentCreate, request.get_json(silent=True))
    enrollment = EnrollmentManager(db.session).enroll_student(data)
    return jsonify({"success": True, "data": enrollment.to_dict()}), 201


# Payments of one enrollment
@enrollment_bp.route("/enrollments/<int:enrollment_id>/payments", methods=["GET"])
@roles_required("admin")
def get_payments(enrollment_id):
    enrollment = PaymentManager(db.session).get_enrollment(enrollment_id)
    return jsonify({"success": True, "data": [p.to_dict() for p in enrollment.payments]}), 200


@enrollment_bp.route("/enrollments/<int:enrollment_id>/payments", methods=["POST"])
@roles_required("admin")
def add_payment(enrollment_id):
    data = parse_body(PaymentCreate, request.get_json(silent=True))
    payment = PaymentManager(db.session).add_payment(enrollment_id, data)
    return jsonify({
        "success": True,
        "data": payment.to_dict(),
        "payment_status": payment.enrollment.payment_status
    }), 201


@enrollment_bp.route("/payments/<int:payment_id>", methods=["PUT"])
@roles_required("admin")
def update_payment(payment_id):
    data = parse_body(PaymentUpdate, request.get_json(silent=True))
    payment = PaymentManager(db.session).update_payment(payment_id, data)
    return jsonify({
        "success": True,
        "data": payment.to_dict(),
        "payment_status": payment.enrollment.payment_status
    }), 200
