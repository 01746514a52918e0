from models import db

class CourseTutor(db.Model):
    __tablename__ = 'course_tutors'

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    tutor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    is_primary = db.Column(db.Boolean, default=False, nullable=False)

    course = db.relationship("Course", back_populates="course_tutors")
    tutor = db.relationship("User")

    __table_args__ = (
        db.UniqueConstraint("course_id", "tutor_id", name="unique_course_tutor"),
    )

    def __repr__(self):
        return f"<CourseTutor Course {self.course_id} Tutor {self.tutor_id}>"

    def to_dict(self):
        return {
            "id": self.id,
            "course_id": self.course_id,
            "tutor_id": self.tutor_id,
            "is_primary": self.is_primary,
            "tutor": {
                "id": self.tutor.id,
                "full_name": self.tutor.full_name,
                "email": self.tutor.email,
            } if self.tutor else None,
        }
