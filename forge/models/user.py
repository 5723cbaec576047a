"""ForgeUser - single local profile holding denormalized lifetime stats and preferences."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Date, DateTime, Enum, Float, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from forge.core.enums import DistanceUnit, WeightUnit
from forge.db.base import Base


class ForgeUser(Base):
    """Stats are updated once per completed workout; never on cancellation."""

    __tablename__ = "forge_users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Preferences
    default_rest_seconds: Mapped[int] = mapped_column(Integer, default=90)
    week_starts_on_monday: Mapped[bool] = mapped_column(Boolean, default=True)
    tz_name: Mapped[str] = mapped_column(String(64), default="UTC")  # IANA zone for calendar days
    weight_unit: Mapped[WeightUnit] = mapped_column(Enum(WeightUnit), default=WeightUnit.POUNDS, nullable=False)
    distance_unit: Mapped[DistanceUnit] = mapped_column(
        Enum(DistanceUnit), default=DistanceUnit.MILES, nullable=False
    )

    # Stats
    total_workouts: Mapped[int] = mapped_column(Integer, default=0)
    total_duration: Mapped[float] = mapped_column(Float, default=0.0)  # Seconds
    total_volume: Mapped[float] = mapped_column(Float, default=0.0)
    current_streak: Mapped[int] = mapped_column(Integer, default=0)
    longest_streak: Mapped[int] = mapped_column(Integer, default=0)
    last_workout_on: Mapped[date | None] = mapped_column(Date, nullable=True)  # Local day of last counted workout
    personal_records: Mapped[int] = mapped_column(Integer, default=0)  # Earned in completed workouts

    def __init__(self, **kwargs):
        now = datetime.now(timezone.utc)
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("created_at", now)
        kwargs.setdefault("updated_at", now)
        kwargs.setdefault("default_rest_seconds", 90)
        kwargs.setdefault("week_starts_on_monday", True)
        kwargs.setdefault("tz_name", "UTC")
        kwargs.setdefault("weight_unit", WeightUnit.POUNDS)
        kwargs.setdefault("distance_unit", DistanceUnit.MILES)
        kwargs.setdefault("total_workouts", 0)
        kwargs.setdefault("total_duration", 0.0)
        kwargs.setdefault("total_volume", 0.0)
        kwargs.setdefault("current_streak", 0)
        kwargs.setdefault("longest_streak", 0)
        kwargs.setdefault("personal_records", 0)
        super().__init__(**kwargs)

    def display_weight(self, value: float, entered_in: WeightUnit | None = None) -> float:
        """A weight in the profile's unit, converted from the unit it was entered in."""
        return (entered_in or self.weight_unit).convert(value, self.weight_unit)

    def display_distance(self, meters: float) -> float:
        return self.distance_unit.convert(meters)
