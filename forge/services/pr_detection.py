"""PR detection: flag a completed set if it beats the stored best for that exercise."""

from __future__ import annotations

import uuid
from datetime import datetime

from forge.core.enums import RecordType, TrackingType
from forge.models.personal_record import PersonalRecord
from forge.models.workout import ExerciseSet, Workout, WorkoutExercise
from forge.repositories.base import WorkoutStore

APPLICABLE_RECORDS: dict[TrackingType, tuple[RecordType, ...]] = {
    TrackingType.WEIGHT_AND_REPS: (RecordType.MAX_WEIGHT, RecordType.MAX_REPS, RecordType.MAX_VOLUME),
    TrackingType.REPS_ONLY: (RecordType.MAX_REPS,),
    TrackingType.TIME_ONLY: (RecordType.LONGEST_TIME,),
    TrackingType.DISTANCE_AND_TIME: (RecordType.LONGEST_DISTANCE, RecordType.FASTEST_TIME),
    TrackingType.DISTANCE_ONLY: (RecordType.LONGEST_DISTANCE,),
    TrackingType.CALORIES_ONLY: (),
}


def record_values(set_: ExerciseSet, tracking_type: TrackingType) -> dict[RecordType, float]:
    """Candidate values of a set for each record type its tracking type supports (blank/zero values skipped)."""
    weight = float(set_.weight or 0)
    reps = int(set_.reps or 0)
    duration = float(set_.duration or 0)
    distance = float(set_.distance or 0)
    candidates = {
        RecordType.MAX_WEIGHT: weight,
        RecordType.MAX_REPS: float(reps),
        RecordType.MAX_VOLUME: weight * reps,
        RecordType.LONGEST_TIME: duration,
        RecordType.LONGEST_DISTANCE: distance,
        # Pace in seconds per km; only meaningful with both parts
        RecordType.FASTEST_TIME: duration / (distance / 1000) if distance > 0 and duration > 0 else 0.0,
    }
    return {
        record_type: candidates[record_type]
        for record_type in APPLICABLE_RECORDS.get(tracking_type, ())
        if candidates[record_type] > 0
    }


def is_improvement(record_type: RecordType, value: float, best: float | None) -> bool:
    """Strictly better than the prior best; a tie is not a record."""
    if best is None:
        return True
    if record_type.lower_is_better:
        return value < best
    return value > best


async def best_values(
    store: WorkoutStore,
    exercise_id,
    *,
    exclude_set_id: uuid.UUID | None = None,
) -> dict[RecordType, float]:
    """All-time best per record type from stored PersonalRecord rows, ignoring one set's own records."""
    records = await store.fetch(PersonalRecord, PersonalRecord.exercise_id == exercise_id)
    best: dict[RecordType, float] = {}
    for record in records:
        if exclude_set_id is not None and record.set_id == exclude_set_id:
            continue
        current = best.get(record.record_type)
        if current is None or is_improvement(record.record_type, record.value, current):
            best[record.record_type] = record.value
    return best


async def detect_personal_records(
    store: WorkoutStore,
    workout: Workout,
    workout_exercise: WorkoutExercise,
    set_: ExerciseSet,
    *,
    now: datetime,
) -> list[PersonalRecord]:
    """
    Compare a just-completed set against the exercise's stored bests.
    Records the set itself created earlier are not counted as prior bests.
    Sets is_personal_record on the set and returns the new (unsaved) records,
    each carrying the best it supersedes as previous_value.
    """
    if not set_.is_completed:
        return []
    prior = await best_values(store, workout_exercise.exercise_id, exclude_set_id=set_.id)
    records = [
        PersonalRecord(
            exercise_id=workout_exercise.exercise_id,
            exercise_name=workout_exercise.exercise_name,
            record_type=record_type,
            value=value,
            previous_value=prior.get(record_type),
            achieved_at=now,
            workout_id=workout.id,
            set_id=set_.id,
        )
        for record_type, value in record_values(set_, workout_exercise.tracking_type).items()
        if is_improvement(record_type, value, prior.get(record_type))
    ]
    set_.is_personal_record = bool(records)
    return records


async def records_from_set(store: WorkoutStore, set_: ExerciseSet) -> list[PersonalRecord]:
    return await store.fetch(PersonalRecord, PersonalRecord.set_id == set_.id)


async def records_from_workout(store: WorkoutStore, workout: Workout) -> list[PersonalRecord]:
    return await store.fetch(PersonalRecord, PersonalRecord.workout_id == workout.id)
