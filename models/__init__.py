from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()

# Import models
from models.users import User

from models.courses import Course
from models.course_tutors import CourseTutor
from models.enrollments import Enrollment
from models.payments import Payment

from models.syllabus_phase import SyllabusPhase
from models.syllabus_item import SyllabusItem
from models.item_progress import ItemProgress
from models.phase_progress import PhaseProgress
