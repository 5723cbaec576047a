"""PersonalRecord - best value of one record type for one exercise at a point in time."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Float, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from forge.core.enums import RecordType
from forge.db.base import Base


class PersonalRecord(Base):
    """Never mutated: a better value creates a new row that supersedes this one."""

    __tablename__ = "personal_records"
    __table_args__ = (Index("ix_personal_records_exercise_type", "exercise_id", "record_type"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    exercise_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    record_type: Mapped[RecordType] = mapped_column(Enum(RecordType), nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    previous_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    achieved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    workout_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    set_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, index=True)  # Originating set

    def __init__(self, **kwargs):
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("achieved_at", datetime.now(timezone.utc))
        super().__init__(**kwargs)

    @property
    def improvement(self) -> float | None:
        if self.previous_value is None:
            return None
        return self.value - self.previous_value

    @property
    def improvement_percentage(self) -> float | None:
        if not self.previous_value:
            return None
        return (self.value - self.previous_value) / self.previous_value * 100
