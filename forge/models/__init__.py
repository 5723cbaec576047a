"""ORM models - import all so Base.metadata is complete for migrations."""

from forge.models.exercise import Exercise
from forge.models.personal_record import PersonalRecord
from forge.models.user import ForgeUser
from forge.models.workout import ExerciseSet, Workout, WorkoutExercise

__all__ = [
    "Exercise",
    "ExerciseSet",
    "ForgeUser",
    "PersonalRecord",
    "Workout",
    "WorkoutExercise",
]
