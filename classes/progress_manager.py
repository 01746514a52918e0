import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from models.item_progress import ItemProgress
from models.phase_progress import PhaseProgress
from models.syllabus_item import SyllabusItem
from models.syllabus_phase import SyllabusPhase
from utils.errors import NotFound, ValidationError
from utils.helpers import format_datetime, to_naive_utc, utcnow

logger = logging.getLogger(__name__)


class Actor(str, Enum):
    STUDENT = "student"
    TUTOR = "tutor"

    @property
    def flag(self):
        return "completed_by_student" if self is Actor.STUDENT else "completed_by_tutor"


@dataclass(frozen=True)
class PhaseStatus:
    completed_by_student: bool = False
    completed_by_tutor: bool = False
    completed_at: Optional[datetime] = None

    @property
    def is_complete(self):
        return self.completed_by_student and self.completed_by_tutor

    def to_dict(self):
        return {
            "completed_by_student": self.completed_by_student,
            "completed_by_tutor": self.completed_by_tutor,
            "completed_at": format_datetime(self.completed_at),
            "is_complete": self.is_complete,
        }


@dataclass
class Granular:
    """A phase whose progress is derived from its items."""
    items: List[SyllabusItem]
    progress: Dict[str, ItemProgress] = field(default_factory=dict)
    snapshot: Optional[PhaseProgress] = None


@dataclass
class Legacy:
    """A phase without items, tracked by its phase-level record alone."""
    record: Optional[PhaseProgress] = None


def compute_phase_status(source):
    """Derive a phase's status from a ``Granular`` or ``Legacy`` source.

    For granular phases each flag is the AND over all items, with a missing
    progress row counting as false. ``completed_at`` is stamped once, from the
    latest item completion, when both flags first hold. An existing stamp is
    never cleared.
    """
    if isinstance(source, Legacy):
        record = source.record
        if record is None:
            return PhaseStatus()
        return PhaseStatus(
            completed_by_student=bool(record.completed_by_student),
            completed_by_tutor=bool(record.completed_by_tutor),
            completed_at=record.completed_at,
        )

    rows = [source.progress.get(item.id) for item in source.items]
    by_tutor = all(row is not None and row.completed_by_tutor for row in rows)
    by_student = all(row is not None and row.completed_by_student for row in rows)
    previous = source.snapshot.completed_at if source.snapshot is not None else None

    completed_at = previous
    if by_tutor and by_student and previous is None:
        completed_at = max(
            (row.completed_at for row in rows if row.completed_at is not None),
            default=None,
        ) or utcnow()

    return PhaseStatus(
        completed_by_student=by_student,
        completed_by_tutor=by_tutor,
        completed_at=completed_at,
    )


class ProgressManager:
    """Syllabus progress for one student, tracked independently by student and tutor."""

    def __init__(self, session):
        self.session = session

    # Item progress store

    def upsert_item_progress(self, student_id, item_id, actor, completed_at=None):
        progress = self.session.query(ItemProgress).filter_by(
            student_id=student_id, item_id=item_id
        ).first()
        if progress is None:
            progress = ItemProgress(
                student_id=student_id,
                item_id=item_id,
                completed_by_student=False,
                completed_by_tutor=False,
            )
            self.session.add(progress)

        setattr(progress, actor.flag, True)
        progress.completed_at = to_naive_utc(completed_at) or utcnow()
        return progress

    def list_item_progress(self, student_id, item_ids):
        item_ids = list(item_ids)
        if not item_ids:
            return {}
        rows = self.session.query(ItemProgress).filter(
            ItemProgress.student_id == student_id,
            ItemProgress.item_id.in_(item_ids)
        ).all()
        return {row.item_id: row for row in rows}

    # Phase aggregation

    def get_phase_record(self, student_id, phase_id):
        return self.session.query(PhaseProgress).filter_by(
            student_id=student_id, phase_id=phase_id
        ).first()

    def load_phase_source(self, student_id, phase):
        record = self.get_phase_record(student_id, phase.id)
        if not phase.items:
            return Legacy(record=record)
        progress = self.list_item_progress(student_id, [item.id for item in phase.items])
        return Granular(items=list(phase.items), progress=progress, snapshot=record)

    def recompute_phase(self, student_id, phase):
        """Rebuild and store the phase-level snapshot of a phase with items."""
        source = self.load_phase_source(student_id, phase)
        if isinstance(source, Legacy):
            return source.record

        status = compute_phase_status(source)
        snapshot = source.snapshot
        if snapshot is None:
            snapshot = PhaseProgress(student_id=student_id, phase_id=phase.id)
            self.session.add(snapshot)

        snapshot.completed_by_student = status.completed_by_student
        snapshot.completed_by_tutor = status.completed_by_tutor
        snapshot.completed_at = status.completed_at
        return snapshot

    # Confirmation

    def resolve_target(self, course_id, target_id):
        """Return ``(item, phase)`` for an item id, or ``(None, phase)`` for a phase id."""
        item = self.session.query(SyllabusItem).filter_by(id=target_id, course_id=course_id).first()
        if item is not None and item.phase is not None and item.phase.course_id == course_id:
            return item, item.phase

        phase = self.session.query(SyllabusPhase).filter_by(id=target_id, course_id=course_id).first()
        if phase is None:
            raise NotFound("Phase not found")
        return None, phase

    def confirm_legacy_phase(self, student_id, phase, actor, completed_at=None):
        if phase.items:
            raise ValidationError("Phase has syllabus items; confirm the items individually")

        record = self.get_phase_record(student_id, phase.id)
        if record is None:
            record = PhaseProgress(
                student_id=student_id,
                phase_id=phase.id,
                completed_by_student=False,
                completed_by_tutor=False,
            )
            self.session.add(record)
        elif record.is_locked:
            return record

        setattr(record, actor.flag, True)
        if record.is_locked and record.completed_at is None:
            record.completed_at = to_naive_utc(completed_at) or utcnow()
        return record

    def _confirm(self, student_id, course_id, target_id, actor, completed_at):
        item, phase = self.resolve_target(course_id, target_id)

        if item is None:
            record = self.confirm_legacy_phase(student_id, phase, actor, completed_at)
            return {"item": None, "phase": record.to_dict()}

        progress = self.upsert_item_progress(student_id, item.id, actor, completed_at)
        snapshot = self.recompute_phase(student_id, phase)
        return {"item": progress.to_dict(), "phase": snapshot.to_dict()}

    def confirm(self, student_id, course_id, target_id, actor, completed_at=None):
        """Record ``actor``'s confirmation of an item (or legacy phase) and commit.

        The item write and the phase recompute land in a single commit. A
        unique-key collision from a concurrent first confirmation is retried once.
        """
        for attempt in range(2):
            try:
                result = self._confirm(student_id, course_id, target_id, actor, completed_at)
                self.session.commit()
            except IntegrityError:
                self.session.rollback()
                if attempt:
                    raise
                logger.warning(
                    "Concurrent confirmation for student %s target %s, retrying",
                    student_id, target_id
                )
                continue

            logger.info(
                "%s confirmed %s for student %s in course %s",
                actor.value, target_id, student_id, course_id
            )
            return result

    # Read projection

    def course_progress(self, student_id, course_id):
        phases = self.session.query(SyllabusPhase).filter_by(
            course_id=course_id
        ).order_by(SyllabusPhase.order).all()

        item_ids = [item.id for phase in phases for item in phase.items]
        progress = self.list_item_progress(student_id, item_ids)
        records = {}
        if phases:
            records = {
                r.phase_id: r for r in self.session.query(PhaseProgress).filter(
                    PhaseProgress.student_id == student_id,
                    PhaseProgress.phase_id.in_([p.id for p in phases])
                ).all()
            }

        phase_list = []
        for phase in phases:
            if phase.items:
                source = Granular(items=list(phase.items), progress=progress, snapshot=records.get(phase.id))
            else:
                source = Legacy(record=records.get(phase.id))
            status = compute_phase_status(source)

            items = []
            for item in phase.items:
                row = progress.get(item.id)
                items.append({
                    "item_id": item.id,
                    "title": item.title,
                    "description": item.description or "",
                    "order": item.order,
                    "completed_by_student": bool(row and row.completed_by_student),
                    "completed_by_tutor": bool(row and row.completed_by_tutor),
                    "completed_at": format_datetime(row.completed_at) if row else None,
                })

            phase_list.append({
                "phase_id": phase.id,
                "phase_name": phase.name,
                "order": phase.order,
                "items": items,
                **status.to_dict(),
            })

        return {"phases": phase_list, "summary": self.summarize(phase_list)}

    @staticmethod
    def summarize(phase_list):
        items = [item for phase in phase_list for item in phase["items"]]
        completed = sum(1 for i in items if i["completed_by_student"] and i["completed_by_tutor"])
        phases_completed = sum(1 for p in phase_list if p["is_complete"])
        return {
            "total_phases": len(phase_list),
            "phases_completed": phases_completed,
            "total_items": len(items),
            "items_confirmed_by_student": sum(1 for i in items if i["completed_by_student"]),
            "items_confirmed_by_tutor": sum(1 for i in items if i["completed_by_tutor"]),
            "items_completed": completed,
            "progress": round(completed / len(items) * 100, 2) if items else 0,
        }
