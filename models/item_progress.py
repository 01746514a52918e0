from models import db
from sqlalchemy.orm import relationship
from utils.helpers import format_datetime


class ItemProgress(db.Model):
    __tablename__ = "item_progress"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    item_id = db.Column(db.String(36), db.ForeignKey("syllabus_items.id", ondelete="CASCADE"), nullable=False)
    completed_by_student = db.Column(db.Boolean, default=False, nullable=False)
    completed_by_tutor = db.Column(db.Boolean, default=False, nullable=False)
    completed_at = db.Column(db.DateTime, nullable=True)

    item = relationship("SyllabusItem", back_populates="progress")

    __table_args__ = (
        db.UniqueConstraint("student_id", "item_id", name="unique_student_item"),
    )

    def __repr__(self):
        return f"<ItemProgress Student {self.student_id} Item {self.item_id}>"

    def to_dict(self):
        return {
            "student_id": self.student_id,
            "item_id": self.item_id,
            "completed_by_student": self.completed_by_student,
            "completed_by_tutor": self.completed_by_tutor,
            "completed_at": format_datetime(self.completed_at),
        }
