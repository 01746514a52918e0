from models import db
from utils.helpers import format_datetime
from sqlalchemy.orm import relationship

ENROLLMENT_STATUSES = ("PENDING", "ACTIVE", "COMPLETED", "CANCELLED")
PAYMENT_STATUSES = ("PENDING", "PAID", "FAILED", "REFUNDED", "PARTIAL")


class Enrollment(db.Model):
    __tablename__ = 'enrollments'

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey('courses.id'), nullable=False)
    status = db.Column(db.String(20), default="ACTIVE", nullable=False)
    final_price = db.Column(db.Numeric(10, 2), default=0, nullable=False)
    currency = db.Column(db.String(3), default="USD", nullable=False)
    payment_status = db.Column(db.String(20), default="PENDING", nullable=False)
    enrolled_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    student = relationship("User", backref="enrollments")
    course = relationship("Course", back_populates="enrollments")
    payments = relationship(
        "Payment",
        back_populates="enrollment",
        cascade="all, delete-orphan",
        order_by="Payment.due_date",
    )

    __table_args__ = (
        db.UniqueConstraint("student_id", "course_id", name="unique_student_course"),
    )

    @property
    def is_active(self):
        return self.status != "CANCELLED"

    def __repr__(self):
        return f"<Enrollment Student {self.student_id} Course {self.course_id}>"

    def to_dict(self):
        return {
            "id": self.id,
            "student_id": self.student_id,
            "course_id": self.course_id,
            "status": self.status,
            "final_price": float(self.final_price or 0),
            "currency": self.currency,
            "payment_status": self.payment_status,
            "enrolled_at": format_datetime(self.enrolled_at),
            "student": {
                "id": self.student.id,
                "full_name": self.student.full_name,
                "email": self.student.email,
            } if self.student else None,
            "course_title": self.course.title if self.course else None,
        }
