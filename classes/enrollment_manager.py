import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import or_

from models.course_tutors import CourseTutor
from models.courses import Course
from models.enrollments import Enrollment
from models.users import User
from utils.errors import Conflict, Forbidden, NotFound, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnrollmentFilter:
    status: Optional[str] = None
    student_id: Optional[int] = None
    search: Optional[str] = None

    @classmethod
    def from_args(cls, args):
        student_id = args.get("student_id")
        if student_id is not None:
            try:
                student_id = int(student_id)
            except ValueError:
                raise ValidationError("student_id must be an integer")
        return cls(
            status=args.get("status") or None,
            student_id=student_id,
            search=(args.get("search") or "").strip() or None,
        )


class EnrollmentManager:
    def __init__(self, session):
        self.session = session

    def get_enrollment(self, student_id, course_id):
        return self.session.query(Enrollment).filter_by(
            student_id=student_id, course_id=course_id
        ).first()

    def require_active_enrollment(self, student_id, course_id, message="Not enrolled in course"):
        enrollment = self.get_enrollment(student_id, course_id)
        if enrollment is None or not enrollment.is_active:
            raise Forbidden(message)
        return enrollment

    def require_tutor_assignment(self, tutor_id, course_id):
        assignment = self.session.query(CourseTutor).filter_by(
            course_id=course_id, tutor_id=tutor_id
        ).first()
        if assignment is None:
            raise Forbidden("Course not assigned to you")
        return assignment

    def list_enrollments(self, filters):
        query = self.session.query(Enrollment).join(User, Enrollment.student_id == User.id)
        if filters.status:
            query = query.filter(Enrollment.status == filters.status)
        if filters.student_id is not None:
            query = query.filter(Enrollment.student_id == filters.student_id)
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.join(Course, Enrollment.course_id == Course.id).filter(or_(
                User.full_name.ilike(pattern),
                User.email.ilike(pattern),
                Course.title.ilike(pattern),
            ))
        return query.order_by(Enrollment.enrolled_at.desc(), Enrollment.id.desc()).all()

    def enroll_student(self, data):
        student = self.session.get(User, data.student_id)
        if student is None or student.role != "student":
            raise NotFound("Student not found")
        if self.session.get(Course, data.course_id) is None:
            raise NotFound("Course not found")
        if self.get_enrollment(data.student_id, data.course_id) is not None:
            raise Conflict("Student is already enrolled in this course")

        enrollment = Enrollment(
            student_id=data.student_id,
            course_id=data.course_id,
            status=data.status,
            final_price=data.final_price,
            currency=data.currency.upper(),
            payment_status="PENDING",
        )
        self.session.add(enrollment)
        self.session.commit()
        logger.info("Enrolled student %s in course %s", data.student_id, data.course_id)
        return enrollment

    def assign_tutors(self, course, tutor_ids, primary_tutor_id=None):
        """Replace the tutor set of ``course``."""
        tutor_ids = list(dict.fromkeys(tutor_ids))
        if primary_tutor_id is not None and primary_tutor_id not in tutor_ids:
            raise ValidationError("Primary tutor must be one of the assigned tutors")

        tutors = self.session.query(User).filter(User.id.in_(tutor_ids), User.role == "tutor").all() if tutor_ids else []
        if len(tutors) != len(tutor_ids):
            raise ValidationError("One or more tutors not found")

        self.session.query(CourseTutor).filter_by(course_id=course.id).delete()
        for tutor_id in tutor_ids:
            self.session.add(CourseTutor(
                course_id=course.id,
                tutor_id=tutor_id,
                is_primary=(tutor_id == primary_tutor_id)
            ))
        self.session.commit()
        logger.info("Assigned tutors %s to course %s", tutor_ids, course.id)
        return self.session.query(CourseTutor).filter_by(course_id=course.id).all()
