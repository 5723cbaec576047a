"""Exercise catalog endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query

from forge.api.deps import get_feature_gate, get_store
from forge.core.constants import EXERCISE_SUGGESTION_LIMIT
from forge.core.enums import MuscleGroup, TrackingType
from forge.core.exceptions import NotFoundError
from forge.models.exercise import Exercise
from forge.repositories.sqlalchemy_store import SqlAlchemyWorkoutStore
from forge.schemas.exercise import ExerciseCreate, ExerciseRead
from forge.services.insights import suggest_exercises
from forge.services.subscription import FeatureGate

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    gate: FeatureGate = Depends(get_feature_gate),
    muscle: MuscleGroup | None = None,
    tracking_type: TrackingType | None = None,
):
    """Exercises the current tier can pick, by name."""
    criteria = []
    if muscle:
        criteria.append(Exercise.primary_muscle == muscle)
    if tracking_type:
        criteria.append(Exercise.tracking_type == tracking_type)
    exercises = await store.fetch(Exercise, *criteria, order_by=Exercise.name)
    return gate.selectable_exercises(exercises)


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    gate: FeatureGate = Depends(get_feature_gate),
):
    """Create a custom exercise. The free tier is capped at a handful."""
    custom = await store.fetch(Exercise, Exercise.is_system_exercise.is_(False))
    if not gate.can_create_custom_exercise(len(custom)):
        raise HTTPException(status_code=403, detail="Custom exercise limit reached")
    data = payload.model_dump()
    data["secondary_muscles"] = [m.value for m in payload.secondary_muscles]
    exercise = Exercise(**data, is_system_exercise=False)
    await store.save(exercise)
    return exercise


@router.get("/suggestions", response_model=list[ExerciseRead])
async def exercise_suggestions(
    muscle: list[MuscleGroup] = Query(...),
    limit: int = Query(EXERCISE_SUGGESTION_LIMIT, ge=1, le=50),
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    gate: FeatureGate = Depends(get_feature_gate),
):
    """A random handful of selectable exercises that work any of the given muscles."""
    exercises = gate.selectable_exercises(await store.fetch(Exercise))
    return suggest_exercises(muscle, exercises, limit=limit)


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    store: SqlAlchemyWorkoutStore = Depends(get_store),
):
    exercise = await store.get(Exercise, exercise_id)
    if exercise is None:
        raise NotFoundError("Exercise", exercise_id)
    return exercise
