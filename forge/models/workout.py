"""Workout aggregate: Workout -> WorkoutExercise -> ExerciseSet."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forge.core.enums import MoodLevel, SetType, TrackingType, WorkoutStatus, WorkoutType
from forge.core.timeutil import as_utc
from forge.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Workout(Base):
    """A workout session from start to completion or cancellation."""

    __tablename__ = "workouts"
    __table_args__ = (
        Index("ix_workouts_started_at", "started_at"),
        Index("ix_workouts_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)

    workout_type: Mapped[WorkoutType] = mapped_column(Enum(WorkoutType), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    ended_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    paused_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)  # Open pause
    paused_duration: Mapped[float] = mapped_column(Float, default=0.0)  # Seconds excluded from duration
    status: Mapped[WorkoutStatus] = mapped_column(
        Enum(WorkoutStatus), default=WorkoutStatus.IN_PROGRESS, nullable=False
    )

    # Session metrics, entered by hand or filled from the health platform
    calories_burned: Mapped[int | None] = mapped_column(Integer, nullable=True)
    average_heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_heart_rate: Mapped[int | None] = mapped_column(Integer, nullable=True)
    distance: Mapped[float | None] = mapped_column(Float, nullable=True)  # Meters
    elevation_gain: Mapped[float | None] = mapped_column(Float, nullable=True)  # Meters

    pre_workout_mood: Mapped[MoodLevel | None] = mapped_column(Enum(MoodLevel), nullable=True)
    post_workout_mood: Mapped[MoodLevel | None] = mapped_column(Enum(MoodLevel), nullable=True)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 1-5

    synced_to_health: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    health_external_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    exercises: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.order",
    )

    def __init__(self, **kwargs):
        now = kwargs.pop("now", None) or _now()
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        kwargs.setdefault("started_at", now)
        kwargs.setdefault("paused_duration", 0.0)
        kwargs.setdefault("status", WorkoutStatus.IN_PROGRESS)
        kwargs.setdefault("synced_to_health", False)
        kwargs.setdefault("exercises", [])
        super().__init__(**kwargs)

    def duration_at(self, now: datetime | None = None) -> float:
        """Elapsed seconds minus paused time (an open pause counts as paused), never negative."""
        now = as_utc(now or _now())
        end = as_utc(self.ended_at) if self.ended_at else now
        paused = self.paused_duration or 0.0
        if self.paused_at is not None and self.ended_at is None:
            paused += max(0.0, (now - as_utc(self.paused_at)).total_seconds())
        return max(0.0, (end - as_utc(self.started_at)).total_seconds() - paused)

    @property
    def duration(self) -> float:
        return self.duration_at()

    @property
    def total_volume(self) -> float:
        return sum(exercise.total_volume for exercise in self.exercises)

    @property
    def total_sets(self) -> int:
        return sum(len(exercise.sets) for exercise in self.exercises)

    @property
    def completed_sets(self) -> int:
        return sum(exercise.completed_sets_count for exercise in self.exercises)

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)

    @property
    def is_complete(self) -> bool:
        return self.status == WorkoutStatus.COMPLETED

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


class WorkoutExercise(Base):
    """One exercise performed within one workout. Exercise details are denormalized for display."""

    __tablename__ = "workout_exercises"
    __table_args__ = (Index("ix_workout_exercises_workout_id", "workout_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False
    )

    exercise_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    exercise_icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tracking_type: Mapped[TrackingType] = mapped_column(Enum(TrackingType), nullable=False)

    order: Mapped[int] = mapped_column(Integer, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    rest_between_sets: Mapped[float | None] = mapped_column(Float, nullable=True)  # Seconds

    sets: Mapped[list["ExerciseSet"]] = relationship(
        "ExerciseSet",
        cascade="all, delete-orphan",
        order_by="ExerciseSet.set_number",
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("created_at", _now())
        kwargs.setdefault("order", 0)
        kwargs.setdefault("sets", [])
        super().__init__(**kwargs)

    @property
    def total_volume(self) -> float:
        return sum(s.volume for s in self.sets if s.is_completed)

    @property
    def completed_sets_count(self) -> int:
        return sum(1 for s in self.sets if s.is_completed)

    @property
    def best_set(self) -> "ExerciseSet | None":
        from forge.services.metrics import best_set

        return best_set(self)

    @property
    def is_complete(self) -> bool:
        return bool(self.sets) and all(s.is_completed for s in self.sets)


class ExerciseSet(Base):
    """One set: weight/reps, duration, distance or calories depending on the tracking type."""

    __tablename__ = "exercise_sets"
    __table_args__ = (Index("ix_exercise_sets_workout_exercise_id", "workout_exercise_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    workout_exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=False
    )

    set_number: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-indexed, dense
    set_type: Mapped[SetType] = mapped_column(Enum(SetType), default=SetType.WORKING, nullable=False)

    weight: Mapped[float | None] = mapped_column(Float, nullable=True)  # User's unit (lbs or kg)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration: Mapped[float | None] = mapped_column(Float, nullable=True)  # Seconds
    distance: Mapped[float | None] = mapped_column(Float, nullable=True)  # Meters
    calories: Mapped[float | None] = mapped_column(Float, nullable=True)
    rpe: Mapped[float | None] = mapped_column(Float, nullable=True)  # 1-10

    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_personal_record: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __init__(self, **kwargs):
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("created_at", _now())
        kwargs.setdefault("set_type", SetType.WORKING)
        kwargs.setdefault("is_completed", False)
        kwargs.setdefault("is_personal_record", False)
        super().__init__(**kwargs)

    @property
    def volume(self) -> float:
        if not self.is_completed or self.weight is None or self.reps is None:
            return 0.0
        return float(self.weight) * int(self.reps)

    def measurement_as(self, tracking_type: TrackingType):
        """Typed measurement for the owning exercise's tracking type (None while blank)."""
        from forge.schemas.measurement import measurement_of

        return measurement_of(self, tracking_type)

    def complete(self, now: datetime | None = None) -> None:
        self.is_completed = True
        self.completed_at = now or _now()

    def uncomplete(self) -> None:
        self.is_completed = False
        self.completed_at = None
        self.is_personal_record = False
