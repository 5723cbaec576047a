"""Workout session endpoints: create, exercises, sets and lifecycle."""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response

from forge.api.deps import (
    get_current_user,
    get_feature_gate,
    get_health_sync,
    get_lifecycle,
    get_session_service,
    get_store,
    get_workout_or_404,
)
from forge.core.enums import PremiumFeature, WorkoutStatus
from forge.core.exceptions import NotFoundError
from forge.core.timeutil import utcnow
from forge.models.exercise import Exercise
from forge.models.user import ForgeUser
from forge.models.workout import Workout
from forge.repositories.sqlalchemy_store import SqlAlchemyWorkoutStore
from forge.schemas.workout import (
    ExerciseSetRead,
    ExerciseSetUpdate,
    MeasurementUpdate,
    PersonalRecordRead,
    SetCompletionRead,
    WorkoutCreate,
    WorkoutDetailsUpdate,
    WorkoutExerciseCreate,
    WorkoutExerciseRead,
    WorkoutRead,
    WorkoutReadWithExercises,
)
from forge.services.health_sync import HealthSyncService
from forge.services.lifecycle import WorkoutLifecycle
from forge.services.subscription import FeatureGate
from forge.services.workout_session import WorkoutSessionService, find_exercise, find_set

router = APIRouter()


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    gate: FeatureGate = Depends(get_feature_gate),
    status: WorkoutStatus | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    limit: int = 50,
):
    """List workouts newest first, optionally filtered by status and date range. Free tier sees the last 7 days."""
    criteria = []
    cutoff = gate.history_cutoff(utcnow())
    if cutoff is not None and (from_date is None or from_date < cutoff):
        from_date = cutoff
    if from_date:
        criteria.append(Workout.started_at >= from_date)
    if to_date:
        criteria.append(Workout.started_at <= to_date)
    if status:
        criteria.append(Workout.status == status)
    return await store.fetch(Workout, *criteria, order_by=Workout.started_at.desc(), limit=limit)


@router.post("", response_model=WorkoutReadWithExercises, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    sessions: WorkoutSessionService = Depends(get_session_service),
    gate: FeatureGate = Depends(get_feature_gate),
):
    """Start a new workout."""
    if payload.workout_type not in gate.selectable_workout_types():
        raise HTTPException(status_code=403, detail="Workout type requires premium")
    return await sessions.create_workout(payload.workout_type, payload.name)


@router.get("/{workout_id}", response_model=WorkoutReadWithExercises)
async def get_workout(workout: Workout = Depends(get_workout_or_404)):
    """Workout with its exercises and sets in order."""
    return workout


@router.patch("/{workout_id}", response_model=WorkoutRead)
async def update_workout_details(
    payload: WorkoutDetailsUpdate,
    workout: Workout = Depends(get_workout_or_404),
    sessions: WorkoutSessionService = Depends(get_session_service),
):
    """Name, notes, heart rate, calories, mood and rating. Allowed in any status."""
    return await sessions.update_details(workout, **payload.model_dump(exclude_unset=True))


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(
    workout: Workout = Depends(get_workout_or_404),
    sessions: WorkoutSessionService = Depends(get_session_service),
):
    await sessions.delete_workout(workout)
    return Response(status_code=204)


# --- Exercises and sets ---


@router.post("/{workout_id}/exercises", response_model=WorkoutExerciseRead, status_code=201)
async def add_exercise(
    payload: WorkoutExerciseCreate,
    workout: Workout = Depends(get_workout_or_404),
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    sessions: WorkoutSessionService = Depends(get_session_service),
):
    """Append an exercise; it starts with one empty set."""
    exercise = await store.get(Exercise, payload.exercise_id)
    if exercise is None:
        raise NotFoundError("Exercise", payload.exercise_id)
    return await sessions.add_exercise(
        workout, exercise, rest_between_sets=payload.rest_between_sets
    )


@router.delete("/{workout_id}/exercises/{workout_exercise_id}", status_code=204)
async def delete_exercise(
    workout_exercise_id: uuid.UUID,
    workout: Workout = Depends(get_workout_or_404),
    sessions: WorkoutSessionService = Depends(get_session_service),
):
    await sessions.delete_exercise(workout, find_exercise(workout, workout_exercise_id))
    return Response(status_code=204)


@router.post(
    "/{workout_id}/exercises/{workout_exercise_id}/sets",
    response_model=ExerciseSetRead,
    status_code=201,
)
async def add_set(
    workout_exercise_id: uuid.UUID,
    workout: Workout = Depends(get_workout_or_404),
    sessions: WorkoutSessionService = Depends(get_session_service),
):
    """Add a set, pre-filled from the last completed one."""
    return await sessions.add_set(workout, find_exercise(workout, workout_exercise_id))


@router.patch("/{workout_id}/sets/{set_id}", response_model=ExerciseSetRead)
async def update_set(
    set_id: uuid.UUID,
    payload: ExerciseSetUpdate,
    workout: Workout = Depends(get_workout_or_404),
    sessions: WorkoutSessionService = Depends(get_session_service),
):
    """Update a set (partial). Completion is changed only through /complete and /uncomplete."""
    _, set_ = find_set(workout, set_id)
    return await sessions.update_set(workout, set_, **payload.model_dump(exclude_unset=True))


@router.put("/{workout_id}/sets/{set_id}/measurement", response_model=ExerciseSetRead)
async def put_measurement(
    set_id: uuid.UUID,
    payload: MeasurementUpdate,
    workout: Workout = Depends(get_workout_or_404),
    sessions: WorkoutSessionService = Depends(get_session_service),
):
    """Replace the set's values with a measurement matching the exercise's tracking type."""
    _, set_ = find_set(workout, set_id)
    return await sessions.apply_measurement(workout, set_, payload.measurement)


@router.post("/{workout_id}/sets/{set_id}/complete", response_model=SetCompletionRead)
async def complete_set(
    set_id: uuid.UUID,
    workout: Workout = Depends(get_workout_or_404),
    sessions: WorkoutSessionService = Depends(get_session_service),
):
    _, set_ = find_set(workout, set_id)
    records = await sessions.complete_set(workout, set_)
    return SetCompletionRead(
        set=ExerciseSetRead.model_validate(set_),
        personal_records=[PersonalRecordRead.model_validate(r) for r in records],
    )


@router.post("/{workout_id}/sets/{set_id}/uncomplete", response_model=ExerciseSetRead)
async def uncomplete_set(
    set_id: uuid.UUID,
    workout: Workout = Depends(get_workout_or_404),
    sessions: WorkoutSessionService = Depends(get_session_service),
):
    _, set_ = find_set(workout, set_id)
    return await sessions.uncomplete_set(workout, set_)


@router.delete("/{workout_id}/sets/{set_id}", status_code=204)
async def delete_set(
    set_id: uuid.UUID,
    workout: Workout = Depends(get_workout_or_404),
    sessions: WorkoutSessionService = Depends(get_session_service),
):
    """Delete a set; the remaining sets are renumbered from 1."""
    _, set_ = find_set(workout, set_id)
    await sessions.delete_set(workout, set_)
    return Response(status_code=204)


# --- Lifecycle ---


@router.post("/{workout_id}/pause", response_model=WorkoutRead)
async def pause_workout(
    workout: Workout = Depends(get_workout_or_404),
    lifecycle: WorkoutLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.pause(workout)


@router.post("/{workout_id}/resume", response_model=WorkoutRead)
async def resume_workout(
    workout: Workout = Depends(get_workout_or_404),
    lifecycle: WorkoutLifecycle = Depends(get_lifecycle),
):
    return await lifecycle.resume(workout)


@router.post("/{workout_id}/complete", response_model=WorkoutReadWithExercises)
async def complete_workout(
    workout: Workout = Depends(get_workout_or_404),
    user: ForgeUser = Depends(get_current_user),
    lifecycle: WorkoutLifecycle = Depends(get_lifecycle),
):
    """Finish the workout; updates lifetime totals and the streak."""
    return await lifecycle.complete(workout, user)


@router.post("/{workout_id}/cancel", response_model=WorkoutRead)
async def cancel_workout(
    workout: Workout = Depends(get_workout_or_404),
    lifecycle: WorkoutLifecycle = Depends(get_lifecycle),
):
    """Discard the workout; lifetime totals are untouched."""
    return await lifecycle.cancel(workout)


@router.post("/{workout_id}/health-export", response_model=WorkoutRead)
async def export_to_health(
    workout: Workout = Depends(get_workout_or_404),
    gate: FeatureGate = Depends(get_feature_gate),
    health: HealthSyncService = Depends(get_health_sync),
):
    """Write a completed workout to the connected health platform."""
    if not gate.has_access(PremiumFeature.HEALTH_SYNC):
        raise HTTPException(status_code=403, detail="Health sync requires premium")
    return await health.export_workout(workout)
