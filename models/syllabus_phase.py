import uuid
from models import db
from sqlalchemy.orm import relationship


class SyllabusPhase(db.Model):
    __tablename__ = "syllabus_phases"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    course = relationship("Course", back_populates="phases")
    items = relationship(
        "SyllabusItem",
        back_populates="phase",
        cascade="all, delete-orphan",
        order_by="SyllabusItem.order",
    )
    progress = relationship("PhaseProgress", back_populates="phase", cascade="all, delete-orphan")

    @staticmethod
    def get_next_order(course_id):
        last_phase = SyllabusPhase.query.filter_by(course_id=course_id).order_by(SyllabusPhase.order.desc()).first()
        return (last_phase.order + 1) if last_phase else 0

    def __repr__(self):
        return f"<SyllabusPhase {self.name} (Course ID {self.course_id})>"

    def to_dict(self, include_items=False):
        data = {
            "id": self.id,
            "course_id": self.course_id,
            "name": self.name,
            "order": self.order,
        }
        if include_items:
            data["items"] = [item.to_dict() for item in self.items]
        return data
