from flask import Blueprint, jsonify, request

from classes.enrollment_manager import EnrollmentManager
from classes.progress_manager import Actor, ProgressManager
from classes.validators import ConfirmationPayload, parse_body
from models import db
from models.course_tutors import CourseTutor
from models.courses import Course
from models.enrollments import Enrollment
from models.users import User
from utils.utils import current_user_id, roles_required

tutor_bp = Blueprint("tutor", __name__)


# Courses assigned to the tutor
@tutor_bp.route("/courses", methods=["GET"])
@roles_required("tutor")
def get_my_courses():
    tutor_id = current_user_id()

    courses = db.session.query(Course, CourseTutor.is_primary).join(
        CourseTutor, Course.id == CourseTutor.course_id
    ).filter(CourseTutor.tutor_id == tutor_id).order_by(Course.title).all()

    return jsonify({"success": True, "data": [
        {**course.to_dict(), "is_primary": is_primary} for course, is_primary in courses
    ]})


# Students enrolled in one of the tutor's courses
@tutor_bp.route("/courses/<int:course_id>/students", methods=["GET"])
@roles_required("tutor")
def get_course_students(course_id):
    EnrollmentManager(db.session).require_tutor_assignment(current_user_id(), course_id)

    rows = db.session.query(User, Enrollment).join(
        Enrollment, Enrollment.student_id == User.id
    ).filter(Enrollment.course_id == course_id).order_by(User.full_name).all()

    return jsonify({"success": True, "data": [
        {**student.to_dict(), "enrollment_id": enrollment.id, "enrollment_status": enrollment.status}
        for student, enrollment in rows
    ]})


# Syllabus progress of one student
@tutor_bp.route("/courses/<int:course_id>/students/<int:student_id>/progress", methods=["GET"])
@roles_required("tutor")
def get_student_progress(course_id, student_id):
    manager = EnrollmentManager(db.session)
    manager.require_tutor_assignment(current_user_id(), course_id)
    manager.require_active_enrollment(student_id, course_id, message="Student not enrolled")

    data = ProgressManager(db.session).course_progress(student_id, course_id)
    return jsonify({"success": True, "data": data}), 200


# Tutor confirms a syllabus item (or an item-less phase) for a student
@tutor_bp.route(
    "/courses/<int:course_id>/students/<int:student_id>/syllabus/<string:target_id>/confirm",
    methods=["POST"]
)
@roles_required("tutor")
def confirm_student_syllabus_item(course_id, student_id, target_id):
    enrollments = EnrollmentManager(db.session)
    enrollments.require_tutor_assignment(current_user_id(), course_id)

    progress = ProgressManager(db.session)
    # an unknown target answers 404 before the student enrollment check
    progress.resolve_target(course_id, target_id)
    enrollments.require_active_enrollment(student_id, course_id, message="Student not enrolled")

    payload = parse_body(ConfirmationPayload, request.get_json(silent=True))
    data = progress.confirm(student_id, course_id, target_id, Actor.TUTOR, payload.completed_at)
    return jsonify({"success": True, "data": data}), 200
