"""Exercise catalog schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from forge.core.enums import ExerciseCategory, MuscleGroup, TrackingType


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    instructions: str | None = None
    primary_muscle: MuscleGroup
    secondary_muscles: list[MuscleGroup] = []
    equipment: str | None = Field(None, max_length=50)
    category: ExerciseCategory | None = None
    tracking_type: TrackingType = TrackingType.WEIGHT_AND_REPS


class ExerciseCreate(ExerciseBase):
    """Custom (user-created) exercise."""


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    icon_name: str
    is_system_exercise: bool = True
    is_premium: bool = False
