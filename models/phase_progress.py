from models import db
from sqlalchemy.orm import relationship
from utils.helpers import format_datetime


class PhaseProgress(db.Model):
    """Phase-level progress.

    For phases without items this is the only record of progress (the
    pre-item schema). For phases with items it holds the snapshot derived
    from the item rows.
    """
    __tablename__ = "phase_progress"

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    phase_id = db.Column(db.String(36), db.ForeignKey("syllabus_phases.id", ondelete="CASCADE"), nullable=False)
    completed_by_student = db.Column(db.Boolean, default=False, nullable=False)
    completed_by_tutor = db.Column(db.Boolean, default=False, nullable=False)
    completed_at = db.Column(db.DateTime, nullable=True)

    phase = relationship("SyllabusPhase", back_populates="progress")

    __table_args__ = (
        db.UniqueConstraint("student_id", "phase_id", name="unique_student_phase"),
    )

    @property
    def is_locked(self):
        return bool(self.completed_by_student and self.completed_by_tutor)

    def __repr__(self):
        return f"<PhaseProgress Student {self.student_id} Phase {self.phase_id}>"

    def to_dict(self):
        return {
            "student_id": self.student_id,
            "phase_id": self.phase_id,
            "completed_by_student": self.completed_by_student,
            "completed_by_tutor": self.completed_by_tutor,
            "completed_at": format_datetime(self.completed_at),
        }
