from types import SimpleNamespace

import pytest

from app import create_app
from models import db
from models.course_tutors import CourseTutor
from models.courses import Course
from models.enrollments import Enrollment
from models.syllabus_item import SyllabusItem
from models.syllabus_phase import SyllabusPhase
from models.users import User

PASSWORD = "secret-pass"


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


def make_user(email, role, full_name=None):
    user = User(email=email, full_name=full_name or email.split("@")[0].title(), role=role)
    user.set_password(PASSWORD)
    db.session.add(user)
    return user


@pytest.fixture
def seed(app):
    """One course with a two-item phase and an item-less phase.

    ``student`` is enrolled, ``outsider`` is not, ``tutor`` is assigned to the
    course and ``other_tutor`` is not.
    """
    admin = make_user("admin@example.com", "admin")
    student = make_user("student@example.com", "student", "Ada Student")
    outsider = make_user("outsider@example.com", "student", "Olly Outsider")
    tutor = make_user("tutor@example.com", "tutor", "Tess Tutor")
    other_tutor = make_user("other.tutor@example.com", "tutor")

    course = Course(title="Python Foundations", description="Intro course")
    other_course = Course(title="Data Engineering")
    db.session.add_all([course, other_course])
    db.session.flush()

    db.session.add(Enrollment(student_id=student.id, course_id=course.id, status="ACTIVE", final_price=300))
    db.session.add(CourseTutor(course_id=course.id, tutor_id=tutor.id, is_primary=True))

    basics = SyllabusPhase(course_id=course.id, name="Basics", order=0)
    project = SyllabusPhase(course_id=course.id, name="Capstone", order=1)
    foreign = SyllabusPhase(course_id=other_course.id, name="Pipelines", order=0)
    db.session.add_all([basics, project, foreign])
    db.session.flush()

    item_a = SyllabusItem(phase_id=basics.id, course_id=course.id, title="Variables", order=0)
    item_b = SyllabusItem(phase_id=basics.id, course_id=course.id, title="Functions", order=1)
    foreign_item = SyllabusItem(phase_id=foreign.id, course_id=other_course.id, title="Batch jobs", order=0)
    db.session.add_all([item_a, item_b, foreign_item])
    db.session.commit()

    return SimpleNamespace(
        admin=admin.id,
        student=student.id,
        outsider=outsider.id,
        tutor=tutor.id,
        other_tutor=other_tutor.id,
        course=course.id,
        other_course=other_course.id,
        basics=basics.id,
        project=project.id,
        foreign=foreign.id,
        item_a=item_a.id,
        item_b=item_b.id,
        foreign_item=foreign_item.id,
    )


@pytest.fixture
def login(app):
    def _login(email, password=PASSWORD):
        client = app.test_client()
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.get_json()
        return client
    return _login


@pytest.fixture
def student_client(seed, login):
    return login("student@example.com")


@pytest.fixture
def tutor_client(seed, login):
    return login("tutor@example.com")


@pytest.fixture
def admin_client(seed, login):
    return login("admin@example.com")
