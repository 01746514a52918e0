from flask import Blueprint, jsonify, request

from classes.enrollment_manager import EnrollmentManager
from classes.progress_manager import Actor, ProgressManager
from classes.validators import ConfirmationPayload, parse_body
from models import db
from models.courses import Course
from models.enrollments import Enrollment
from utils.utils import current_user_id, roles_required

student_bp = Blueprint("student", __name__)


# Fetch student's courses
@student_bp.route("/courses", methods=["GET"])
@roles_required("student")
def get_enrolled_courses():
    student_id = current_user_id()

    courses = db.session.query(Course, Enrollment).join(
        Enrollment, Enrollment.course_id == Course.id
    ).filter(
        Enrollment.student_id == student_id,
        Enrollment.status != "CANCELLED"
    ).order_by(Course.title).all()

    return jsonify({"success": True, "data": [
        {**course.to_dict(), "enrollment_status": enrollment.status}
        for course, enrollment in courses
    ]})


# Syllabus progress for the current student
@student_bp.route("/courses/<int:course_id>/syllabus/progress", methods=["GET"])
@roles_required("student")
def get_syllabus_progress(course_id):
    student_id = current_user_id()
    EnrollmentManager(db.session).require_active_enrollment(student_id, course_id)

    data = ProgressManager(db.session).course_progress(student_id, course_id)
    return jsonify({"success": True, "data": data}), 200


# Student confirms a syllabus item (or an item-less phase) as completed
@student_bp.route("/courses/<int:course_id>/syllabus/<string:target_id>/confirm", methods=["POST"])
@roles_required("student")
def confirm_syllabus_item(course_id, target_id):
    student_id = current_user_id()
    EnrollmentManager(db.session).require_active_enrollment(student_id, course_id)

    payload = parse_body(ConfirmationPayload, request.get_json(silent=True))
    data = ProgressManager(db.session).confirm(
        student_id, course_id, target_id, Actor.STUDENT, payload.completed_at
    )
    return jsonify({"success": True, "data": data}), 200
