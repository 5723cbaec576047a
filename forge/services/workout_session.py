"""Set/exercise mutations on an in-progress workout.

Each operation changes the in-memory aggregate and then persists it with a
single store.save(), so renumbering, denormalized fields and any personal
records land in one transaction. Persistence failures propagate as
PersistenceError.
"""

from __future__ import annotations

import logging
import uuid

from forge.core.enums import SetType, WorkoutType
from forge.core.exceptions import NotFoundError, PreconditionError
from forge.core.timeutil import Clock, utcnow
from forge.models.exercise import Exercise
from forge.models.personal_record import PersonalRecord
from forge.models.workout import ExerciseSet, Workout, WorkoutExercise
from forge.repositories.base import WorkoutStore
from forge.schemas.measurement import Measurement, measurement_columns
from forge.services.pr_detection import (
    detect_personal_records,
    records_from_set,
    records_from_workout,
)

logger = logging.getLogger(__name__)

# Values carried over from the last completed set when adding a new one
PREFILL_FIELDS = ("weight", "reps", "duration", "distance", "calories")

# Workout fields editable outside the set flow
DETAIL_FIELDS = (
    "name",
    "notes",
    "calories_burned",
    "average_heart_rate",
    "max_heart_rate",
    "distance",
    "elevation_gain",
    "pre_workout_mood",
    "post_workout_mood",
    "rating",
)

_UNSET = object()


def find_exercise(workout: Workout, workout_exercise_id: uuid.UUID) -> WorkoutExercise:
    for exercise in workout.exercises:
        if exercise.id == workout_exercise_id:
            return exercise
    raise NotFoundError("WorkoutExercise", workout_exercise_id)


def find_set(workout: Workout, set_id: uuid.UUID) -> tuple[WorkoutExercise, ExerciseSet]:
    """The set and the exercise that owns it."""
    for exercise in workout.exercises:
        for set_ in exercise.sets:
            if set_.id == set_id:
                return exercise, set_
    raise NotFoundError("ExerciseSet", set_id)


def _owner_of(workout: Workout, set_: ExerciseSet) -> WorkoutExercise:
    owner, _ = find_set(workout, set_.id)
    return owner


def renumber_sets(workout_exercise: WorkoutExercise) -> None:
    for index, set_ in enumerate(workout_exercise.sets, start=1):
        set_.set_number = index


def reorder_exercises(workout: Workout) -> None:
    for index, exercise in enumerate(workout.exercises):
        exercise.order = index


class WorkoutSessionService:
    """Mutation API over one workout aggregate."""

    def __init__(
        self,
        store: WorkoutStore,
        *,
        clock: Clock = utcnow,
        default_rest_seconds: float | None = 90,
    ):
        self.store = store
        self.clock = clock
        self.default_rest_seconds = default_rest_seconds

    def _touch(self, workout: Workout) -> None:
        workout.updated_at = self.clock()

    async def _recheck_records(
        self, workout: Workout, owner: WorkoutExercise, set_: ExerciseSet
    ) -> tuple[list[PersonalRecord], list[PersonalRecord]]:
        """New records for an edited completed set, and the ones they replace."""
        if not set_.is_completed:
            return [], []
        stale = await records_from_set(self.store, set_)
        records = await detect_personal_records(
            self.store, workout, owner, set_, now=set_.completed_at or self.clock()
        )
        return records, stale

    async def create_workout(self, workout_type: WorkoutType, name: str | None = None) -> Workout:
        workout = Workout(workout_type=workout_type, name=name, now=self.clock())
        await self.store.save(workout)
        logger.info("Started %s workout %s", workout_type.value, workout.id)
        return workout

    async def add_exercise(
        self,
        workout: Workout,
        exercise: Exercise,
        *,
        rest_between_sets: float | None = None,
    ) -> WorkoutExercise:
        """Append the exercise with the next order index and one blank first set."""
        workout_exercise = WorkoutExercise(
            workout_id=workout.id,
            exercise_id=exercise.id,
            exercise_name=exercise.name,
            exercise_icon=exercise.icon_name,
            tracking_type=exercise.tracking_type,
            order=len(workout.exercises),
            rest_between_sets=rest_between_sets if rest_between_sets is not None else self.default_rest_seconds,
        )
        workout_exercise.sets.append(
            ExerciseSet(workout_exercise_id=workout_exercise.id, set_number=1)
        )
        workout.exercises.append(workout_exercise)
        self._touch(workout)
        await self.store.save(workout)
        return workout_exercise

    async def add_set(self, workout: Workout, workout_exercise: WorkoutExercise) -> ExerciseSet:
        """New set numbered count + 1, pre-filled from the last completed set if there is one."""
        previous = next((s for s in reversed(workout_exercise.sets) if s.is_completed), None)
        prefill = {field: getattr(previous, field) for field in PREFILL_FIELDS} if previous else {}
        set_ = ExerciseSet(
            workout_exercise_id=workout_exercise.id,
            set_number=len(workout_exercise.sets) + 1,
            **prefill,
        )
        workout_exercise.sets.append(set_)
        self._touch(workout)
        await self.store.save(workout)
        return set_

    async def update_set(
        self,
        workout: Workout,
        set_: ExerciseSet,
        *,
        weight=_UNSET,
        reps=_UNSET,
        duration=_UNSET,
        distance=_UNSET,
        calories=_UNSET,
        rpe=_UNSET,
        set_type: SetType | None = None,
    ) -> ExerciseSet:
        """
        Change only the given fields. Completion state is never touched, but a
        completed set whose values change has its personal records re-evaluated.
        """
        owner = _owner_of(workout, set_)
        changes = {
            "weight": weight,
            "reps": reps,
            "duration": duration,
            "distance": distance,
            "calories": calories,
            "rpe": rpe,
        }
        measured = False
        for field, value in changes.items():
            if value is not _UNSET:
                setattr(set_, field, value)
                measured = measured or field in PREFILL_FIELDS
        if set_type is not None:
            set_.set_type = set_type
        records, stale = await self._recheck_records(workout, owner, set_) if measured else ([], [])
        self._touch(workout)
        await self.store.save(workout, *records, delete=stale)
        return set_

    async def apply_measurement(
        self,
        workout: Workout,
        set_: ExerciseSet,
        measurement: Measurement,
    ) -> ExerciseSet:
        """Replace the set's values with a typed measurement matching the exercise."""
        owner = _owner_of(workout, set_)
        for field, value in measurement_columns(measurement, owner.tracking_type).items():
            setattr(set_, field, value)
        records, stale = await self._recheck_records(workout, owner, set_)
        self._touch(workout)
        await self.store.save(workout, *records, delete=stale)
        return set_

    async def update_details(self, workout: Workout, **details) -> Workout:
        """Set name, notes, session metrics, mood or rating. Fields not passed are left alone."""
        unknown = set(details) - set(DETAIL_FIELDS)
        if unknown:
            raise TypeError(f"Unknown workout fields: {', '.join(sorted(unknown))}")
        rating = details.get("rating")
        if rating is not None and not 1 <= rating <= 5:
            raise PreconditionError(f"Rating must be between 1 and 5, got {rating}")
        for field, value in details.items():
            setattr(workout, field, value)
        self._touch(workout)
        await self.store.save(workout)
        return workout

    async def complete_set(self, workout: Workout, set_: ExerciseSet) -> list[PersonalRecord]:
        """
        Mark done, stamp completed_at and record any personal bests it sets.
        Completing an already completed set changes nothing and returns no records.
        """
        owner = _owner_of(workout, set_)
        if set_.is_completed:
            return []
        now = self.clock()
        set_.complete(now)
        records = await detect_personal_records(self.store, workout, owner, set_, now=now)
        self._touch(workout)
        await self.store.save(workout, *records)
        if records:
            logger.info(
                "Set %s of %s set %d personal record(s)",
                set_.set_number,
                owner.exercise_name,
                len(records),
            )
        return records

    async def uncomplete_set(self, workout: Workout, set_: ExerciseSet) -> ExerciseSet:
        """Clear completion and the PR flag, retracting records this set created."""
        _owner_of(workout, set_)
        stale = await records_from_set(self.store, set_)
        set_.uncomplete()
        self._touch(workout)
        await self.store.save(workout, delete=stale)
        return set_

    async def delete_set(self, workout: Workout, set_: ExerciseSet) -> None:
        """Remove the set and renumber the rest 1..n in their existing order."""
        owner = _owner_of(workout, set_)
        stale = await records_from_set(self.store, set_)
        owner.sets.remove(set_)
        renumber_sets(owner)
        self._touch(workout)
        await self.store.save(workout, delete=stale)

    async def delete_exercise(self, workout: Workout, workout_exercise: WorkoutExercise) -> None:
        find_exercise(workout, workout_exercise.id)
        stale: list[PersonalRecord] = []
        for set_ in workout_exercise.sets:
            stale.extend(await records_from_set(self.store, set_))
        workout.exercises.remove(workout_exercise)
        reorder_exercises(workout)
        self._touch(workout)
        await self.store.save(workout, delete=stale)

    async def delete_workout(self, workout: Workout) -> None:
        """Explicit user delete; exercises, sets and the records they set go with it."""
        stale = await records_from_workout(self.store, workout)
        await self.store.delete_cascade(workout, also=stale)
        logger.info("Deleted workout %s", workout.id)
