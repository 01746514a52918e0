import uuid
from models import db
from sqlalchemy.orm import relationship


class SyllabusItem(db.Model):
    __tablename__ = "syllabus_items"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    phase_id = db.Column(db.String(36), db.ForeignKey("syllabus_phases.id", ondelete="CASCADE"), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    phase = relationship("SyllabusPhase", back_populates="items")
    progress = relationship("ItemProgress", back_populates="item", cascade="all, delete-orphan")

    @staticmethod
    def get_next_order(phase_id):
        last_item = SyllabusItem.query.filter_by(phase_id=phase_id).order_by(SyllabusItem.order.desc()).first()
        return (last_item.order + 1) if last_item else 0

    def __repr__(self):
        return f"<SyllabusItem {self.title} (Phase ID {self.phase_id})>"

    def to_dict(self):
        return {
            "id": self.id,
            "phase_id": self.phase_id,
            "course_id": self.course_id,
            "title": self.title,
            "description": self.description if self.description is not None else "",
            "order": self.order,
        }
