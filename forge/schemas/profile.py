"""Profile schemas: preferences and lifetime stats."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from forge.core.enums import DistanceUnit, WeightUnit


class ProfileUpdate(BaseModel):
    """Only the fields present in the request body are changed."""

    display_name: str | None = Field(None, max_length=255)
    default_rest_seconds: int | None = Field(None, ge=0)
    week_starts_on_monday: bool | None = None
    tz_name: str | None = Field(None, max_length=64)
    weight_unit: WeightUnit | None = None
    distance_unit: DistanceUnit | None = None


class ProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    display_name: str | None = None
    default_rest_seconds: int
    week_starts_on_monday: bool
    tz_name: str
    weight_unit: WeightUnit
    distance_unit: DistanceUnit
    total_workouts: int = 0
    total_duration: float = 0.0
    total_volume: float = 0.0
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_on: date | None = None
    personal_records: int = 0
