from models import db
from utils.helpers import format_datetime
from sqlalchemy.orm import relationship

class Course(db.Model):
    __tablename__ = "courses"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    phases = relationship(
        "SyllabusPhase",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="SyllabusPhase.order",
    )
    course_tutors = relationship("CourseTutor", back_populates="course", cascade="all, delete-orphan")
    enrollments = relationship("Enrollment", back_populates="course", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Course {self.title}>"

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "created_at": format_datetime(self.created_at)
        }
