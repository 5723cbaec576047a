"""Exercise model - read-only catalog entry referenced by workout exercises."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Enum, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from forge.core.enums import ExerciseCategory, MuscleGroup, TrackingType
from forge.db.base import Base

_ICON_BY_MUSCLE = {
    MuscleGroup.CHEST: "figure.arms.open",
    MuscleGroup.BACK: "figure.walk",
    MuscleGroup.SHOULDERS: "figure.boxing",
    MuscleGroup.BICEPS: "figure.strengthtraining.traditional",
    MuscleGroup.TRICEPS: "figure.strengthtraining.functional",
    MuscleGroup.FOREARMS: "hand.raised.fill",
    MuscleGroup.CORE: "figure.core.training",
    MuscleGroup.ABS: "figure.core.training",
    MuscleGroup.OBLIQUES: "figure.core.training",
    MuscleGroup.FULL_BODY: "figure.highintensity.intervaltraining",
    MuscleGroup.CARDIO: "figure.run",
}


class Exercise(Base):
    """Exercise definition with muscle targets, equipment and tracking type."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    primary_muscle: Mapped[MuscleGroup] = mapped_column(Enum(MuscleGroup), nullable=False)
    secondary_muscles: Mapped[list[str]] = mapped_column(JSON, default=list)
    equipment: Mapped[str | None] = mapped_column(String(50), nullable=True)
    category: Mapped[ExerciseCategory | None] = mapped_column(Enum(ExerciseCategory), nullable=True)
    tracking_type: Mapped[TrackingType] = mapped_column(
        Enum(TrackingType), default=TrackingType.WEIGHT_AND_REPS, nullable=False
    )
    is_system_exercise: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_premium: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)  # Catalog gating

    @property
    def icon_name(self) -> str:
        """Icon derived from the primary muscle (legs share one)."""
        return _ICON_BY_MUSCLE.get(self.primary_muscle, "figure.walk")

    def __init__(self, **kwargs):
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("created_at", datetime.now(timezone.utc))
        kwargs.setdefault("secondary_muscles", [])
        kwargs.setdefault("tracking_type", TrackingType.WEIGHT_AND_REPS)
        kwargs.setdefault("is_system_exercise", True)
        kwargs.setdefault("is_premium", False)
        super().__init__(**kwargs)
