"""Workout, WorkoutExercise and ExerciseSet schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from forge.core.enums import MoodLevel, RecordType, SetType, TrackingType, WorkoutStatus, WorkoutType
from forge.schemas.measurement import Measurement


class ExerciseSetUpdate(BaseModel):
    """Only the fields present in the request body are changed."""

    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    duration: float | None = Field(None, ge=0)
    distance: float | None = Field(None, ge=0)
    calories: float | None = Field(None, ge=0)
    rpe: float | None = Field(None, ge=1, le=10)
    set_type: SetType | None = None


class MeasurementUpdate(BaseModel):
    measurement: Measurement


class ExerciseSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_exercise_id: UUID
    set_number: int
    set_type: SetType
    weight: float | None = None
    reps: int | None = None
    duration: float | None = None
    distance: float | None = None
    calories: float | None = None
    rpe: float | None = None
    is_completed: bool
    completed_at: datetime | None = None
    is_personal_record: bool = False
    volume: float = 0


class WorkoutExerciseCreate(BaseModel):
    exercise_id: UUID
    rest_between_sets: float | None = Field(None, ge=0)


class WorkoutExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_id: UUID
    exercise_id: UUID
    exercise_name: str
    exercise_icon: str | None = None
    tracking_type: TrackingType
    order: int
    notes: str | None = None
    rest_between_sets: float | None = None
    total_volume: float = 0
    completed_sets_count: int = 0
    sets: list[ExerciseSetRead] = []


class WorkoutCreate(BaseModel):
    workout_type: WorkoutType = WorkoutType.GYM
    name: str | None = Field(None, max_length=255)


class WorkoutDetailsUpdate(BaseModel):
    """Name, notes and session metrics; only fields present in the body are changed."""

    name: str | None = Field(None, max_length=255)
    notes: str | None = None
    calories_burned: int | None = Field(None, ge=0)
    average_heart_rate: int | None = Field(None, gt=0)
    max_heart_rate: int | None = Field(None, gt=0)
    distance: float | None = Field(None, ge=0)  # Meters
    elevation_gain: float | None = None  # Meters
    pre_workout_mood: MoodLevel | None = None
    post_workout_mood: MoodLevel | None = None
    rating: int | None = Field(None, ge=1, le=5)


class WorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    workout_type: WorkoutType
    name: str | None = None
    notes: str | None = None
    status: WorkoutStatus
    started_at: datetime
    ended_at: datetime | None = None
    paused_at: datetime | None = None
    paused_duration: float = 0
    duration: float = 0
    total_volume: float = 0
    total_sets: int = 0
    completed_sets: int = 0
    calories_burned: int | None = None
    average_heart_rate: int | None = None
    max_heart_rate: int | None = None
    distance: float | None = None
    elevation_gain: float | None = None
    pre_workout_mood: MoodLevel | None = None
    post_workout_mood: MoodLevel | None = None
    rating: int | None = None
    synced_to_health: bool = False


class WorkoutReadWithExercises(WorkoutRead):
    """Workout with nested exercises and sets (detail view)."""

    exercises: list[WorkoutExerciseRead] = []


class PersonalRecordRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    exercise_id: UUID
    exercise_name: str
    record_type: RecordType
    value: float
    previous_value: float | None = None
    improvement: float | None = None
    improvement_percentage: float | None = None
    achieved_at: datetime
    workout_id: UUID | None = None
    set_id: UUID | None = None


class SetCompletionRead(BaseModel):
    """Result of completing a set: the set and any personal records it produced."""

    set: ExerciseSetRead
    personal_records: list[PersonalRecordRead] = []
