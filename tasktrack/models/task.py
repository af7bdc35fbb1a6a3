from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, String, Text
from sqlalchemy.orm import validates

from tasktrack.database import Base
from tasktrack.errors import ValidationError
from tasktrack.models.columns import UTCDateTime, new_id, utcnow
from tasktrack.schemas.common import FieldError

STATUSES = ("todo", "in-progress", "done")
PRIORITIES = ("low", "med", "high")


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(f"status IN {STATUSES}", name="ck_tasks_status"),
        CheckConstraint(f"priority IN {PRIORITIES}", name="ck_tasks_priority"),
        Index("ix_tasks_owner_status", "owner_id", "status"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="todo", index=True)
    priority = Column(String(10), nullable=False, default="med", index=True)
    due_date = Column(UTCDateTime, nullable=True)
    owner_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @validates("status")
    def _check_status(self, key, value):
        if value not in STATUSES:
            raise ValidationError(errors=[FieldError(field="status", message="Status must be one of: " + ", ".join(STATUSES))])
        return value

    @validates("priority")
    def _check_priority(self, key, value):
        if value not in PRIORITIES:
            raise ValidationError(errors=[FieldError(field="priority", message="Priority must be one of: " + ", ".join(PRIORITIES))])
        return value
