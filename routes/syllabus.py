import logging
from flask import Blueprint, jsonify, request

from classes.enrollment_manager import EnrollmentManager
from classes.validators import ItemCreate, PhaseCreate, TutorAssignment, parse_body
from models import db
from models.course_tutors import CourseTutor
from models.courses import Course
from models.syllabus_item import SyllabusItem
from models.syllabus_phase import SyllabusPhase
from utils.errors import NotFound
from utils.helpers import sanitize_html
from utils.utils import login_required, roles_required

logger = logging.getLogger(__name__)

syllabus_bp = Blueprint("syllabus", __name__)


def get_course_or_404(course_id):
    course = db.session.get(Course, course_id)
    if not course:
        raise NotFound("Course not found")
    return course


# Fetch a course's syllabus
@syllabus_bp.route("/<int:course_id>/syllabus/phases", methods=["GET"])
@login_required
def get_phases(course_id):
    get_course_or_404(course_id)
    phases = SyllabusPhase.query.filter_by(course_id=course_id).order_by(SyllabusPhase.order).all()

    return jsonify({"success": True, "data": {
        "phases": [phase.to_dict(include_items=True) for phase in phases],
        "items": [item.to_dict() for phase in phases for item in phase.items],
    }}), 200


# Add a phase to a course
@syllabus_bp.route("/<int:course_id>/syllabus/phases", methods=["POST"])
@roles_required("admin")
def add_phase(course_id):
    get_course_or_404(course_id)
    data = parse_body(PhaseCreate, request.get_json(silent=True))

    order = data.order if data.order is not None else SyllabusPhase.get_next_order(course_id)
    phase = SyllabusPhase(course_id=course_id, name=data.name, order=order)
    db.session.add(phase)
    db.session.commit()
    logger.info("Created syllabus phase %s in course %s", phase.id, course_id)

    return jsonify({"success": True, "data": phase.to_dict()}), 201


# Delete a phase along with its items and progress
@syllabus_bp.route("/<int:course_id>/syllabus/phases/<string:phase_id>", methods=["DELETE"])
@roles_required("admin")
def delete_phase(course_id, phase_id):
    get_course_or_404(course_id)
    phase = SyllabusPhase.query.filter_by(id=phase_id, course_id=course_id).first()
    if not phase:
        raise NotFound("Phase not found")

    db.session.delete(phase)
    db.session.commit()
    logger.info("Deleted syllabus phase %s from course %s", phase_id, course_id)

    return jsonify({"success": True, "data": {"message": "Phase deleted successfully"}}), 200


# Add an item to one of the course's phases
@syllabus_bp.route("/<int:course_id>/syllabus/items", methods=["POST"])
@roles_required("admin")
def add_item(course_id):
    get_course_or_404(course_id)
    data = parse_body(ItemCreate, request.get_json(silent=True))

    phase = SyllabusPhase.query.filter_by(id=data.phase_id, course_id=course_id).first()
    if not phase:
        raise NotFound("Phase not found")

    order = data.order if data.order is not None else SyllabusItem.get_next_order(phase.id)
    item = SyllabusItem(
        course_id=course_id,
        phase_id=phase.id,
        title=data.title,
        description=sanitize_html(data.description),
        order=order
    )
    db.session.add(item)
    db.session.commit()
    logger.info("Created syllabus item %s in phase %s", item.id, phase.id)

    return jsonify({"success": True, "data": item.to_dict()}), 201


# Course tutors
@syllabus_bp.route("/<int:course_id>/tutors", methods=["GET"])
@login_required
def get_course_tutors(course_id):
    get_course_or_404(course_id)
    tutors = CourseTutor.query.filter_by(course_id=course_id).all()
    return jsonify({"success": True, "data": [t.to_dict() for t in tutors]}), 200


@syllabus_bp.route("/<int:course_id>/tutors", methods=["PUT"])
@roles_required("admin")
def update_course_tutors(course_id):
    course = get_course_or_404(course_id)
    data = parse_body(TutorAssignment, request.get_json(silent=True))

    tutors = EnrollmentManager(db.session).assign_tutors(course, data.tutor_ids, data.primary_tutor_id)
    return jsonify({"success": True, "data": [t.to_dict() for t in tutors]}), 200
