"""Set/exercise mutations: creation, pre-fill, renumbering, measurements, persistence."""

import pytest
from sqlalchemy import select

from forge.core.enums import MoodLevel, SetType, WorkoutStatus, WorkoutType
from forge.core.exceptions import (
    InvalidMeasurementError,
    NotFoundError,
    PersistenceError,
    PreconditionError,
)
from forge.models import ExerciseSet, Workout, WorkoutExercise
from forge.schemas.measurement import TimeOnly, WeightReps
from forge.services.workout_session import WorkoutSessionService, find_exercise, find_set


@pytest.mark.asyncio
async def test_create_workout_starts_in_progress(sessions, clock):
    workout = await sessions.create_workout(WorkoutType.RUNNING, "Morning run")
    assert workout.status == WorkoutStatus.IN_PROGRESS
    assert workout.started_at == clock.now
    assert workout.ended_at is None
    assert workout.exercises == []
    assert workout.name == "Morning run"


@pytest.mark.asyncio
async def test_add_exercise_creates_one_blank_set(sessions, gym_workout, bench_press, clock):
    clock.advance(minutes=2)
    we = await sessions.add_exercise(gym_workout, bench_press)

    assert we.order == 0
    assert we.workout_id == gym_workout.id
    assert we.exercise_name == "Bench Press"
    assert we.exercise_icon == bench_press.icon_name
    assert we.rest_between_sets == 90
    assert [s.set_number for s in we.sets] == [1]
    assert we.sets[0].weight is None and we.sets[0].reps is None
    assert not we.sets[0].is_completed
    assert gym_workout.updated_at == clock.now


@pytest.mark.asyncio
async def test_exercises_get_increasing_order(sessions, gym_workout, bench_press, squat):
    first = await sessions.add_exercise(gym_workout, bench_press)
    second = await sessions.add_exercise(gym_workout, squat, rest_between_sets=180)
    assert (first.order, second.order) == (0, 1)
    assert second.rest_between_sets == 180


@pytest.mark.asyncio
async def test_update_then_complete_set(sessions, gym_workout, bench_press):
    """Add set, enter 135x10, complete: volume is 1350 and completion is stamped."""
    we = await sessions.add_exercise(gym_workout, bench_press)
    set_ = await sessions.add_set(gym_workout, we)
    await sessions.update_set(gym_workout, set_, weight=135, reps=10)
    await sessions.complete_set(gym_workout, set_)

    assert set_.weight == 135
    assert set_.reps == 10
    assert set_.is_completed is True
    assert set_.completed_at is not None
    assert set_.volume == 1350


@pytest.mark.asyncio
async def test_add_set_prefills_from_last_completed(sessions, gym_workout, bench_press):
    we = await sessions.add_exercise(gym_workout, bench_press)
    first = we.sets[0]
    await sessions.update_set(gym_workout, first, weight=135, reps=10)
    await sessions.complete_set(gym_workout, first)

    second = await sessions.add_set(gym_workout, we)
    assert second.set_number == 2
    assert (second.weight, second.reps) == (135, 10)
    assert second.is_completed is False
    assert second.completed_at is None


@pytest.mark.asyncio
async def test_add_set_without_completed_sets_is_blank(sessions, gym_workout, bench_press):
    we = await sessions.add_exercise(gym_workout, bench_press)
    await sessions.update_set(gym_workout, we.sets[0], weight=60, reps=5)
    second = await sessions.add_set(gym_workout, we)
    assert second.weight is None
    assert second.reps is None


@pytest.mark.asyncio
async def test_update_set_leaves_completion_alone(sessions, gym_workout, bench_press):
    we = await sessions.add_exercise(gym_workout, bench_press)
    set_ = we.sets[0]
    await sessions.update_set(gym_workout, set_, weight=100, reps=8)
    await sessions.complete_set(gym_workout, set_)
    completed_at = set_.completed_at

    await sessions.update_set(gym_workout, set_, reps=9, set_type=SetType.FAILURE_SET)
    assert set_.is_completed is True
    assert set_.completed_at == completed_at
    assert set_.weight == 100
    assert set_.reps == 9
    assert set_.set_type == SetType.FAILURE_SET


@pytest.mark.asyncio
async def test_update_set_can_clear_a_value(sessions, gym_workout, bench_press):
    we = await sessions.add_exercise(gym_workout, bench_press)
    set_ = we.sets[0]
    await sessions.update_set(gym_workout, set_, weight=100, reps=8)
    await sessions.update_set(gym_workout, set_, weight=None)
    assert set_.weight is None
    assert set_.reps == 8


@pytest.mark.asyncio
async def test_delete_set_renumbers_preserving_order(sessions, gym_workout, bench_press):
    we = await sessions.add_exercise(gym_workout, bench_press)
    await sessions.add_set(gym_workout, we)
    await sessions.add_set(gym_workout, we)
    for weight, set_ in zip((10, 20, 30), we.sets):
        await sessions.update_set(gym_workout, set_, weight=weight)

    await sessions.delete_set(gym_workout, we.sets[0])

    assert [s.set_number for s in we.sets] == [1, 2]
    assert [s.weight for s in we.sets] == [20, 30]


@pytest.mark.asyncio
async def test_set_numbers_stay_dense_in_the_database(sessions, gym_workout, bench_press, session_maker):
    we = await sessions.add_exercise(gym_workout, bench_press)
    for _ in range(4):
        await sessions.add_set(gym_workout, we)
    await sessions.delete_set(gym_workout, we.sets[2])
    await sessions.delete_set(gym_workout, we.sets[0])
    await sessions.add_set(gym_workout, we)
    await sessions.delete_set(gym_workout, we.sets[-1])
    await sessions.add_set(gym_workout, we)

    assert [s.set_number for s in we.sets] == [1, 2, 3, 4]
    async with session_maker() as fresh:
        rows = await fresh.execute(
            select(ExerciseSet.set_number)
            .where(ExerciseSet.workout_exercise_id == we.id)
            .order_by(ExerciseSet.set_number)
        )
        assert list(rows.scalars()) == [1, 2, 3, 4]


@pytest.mark.asyncio
async def test_delete_exercise_reorders_remaining(sessions, gym_workout, bench_press, squat, plank):
    first = await sessions.add_exercise(gym_workout, bench_press)
    await sessions.add_exercise(gym_workout, squat)
    await sessions.add_exercise(gym_workout, plank)

    await sessions.delete_exercise(gym_workout, first)

    assert [e.exercise_name for e in gym_workout.exercises] == ["Back Squat", "Plank"]
    assert [e.order for e in gym_workout.exercises] == [0, 1]


@pytest.mark.asyncio
async def test_delete_workout_removes_children(sessions, gym_workout, bench_press, session_maker):
    we = await sessions.add_exercise(gym_workout, bench_press)
    await sessions.add_set(gym_workout, we)

    await sessions.delete_workout(gym_workout)

    async with session_maker() as fresh:
        assert (await fresh.execute(select(Workout))).scalars().all() == []
        assert (await fresh.execute(select(WorkoutExercise))).scalars().all() == []
        assert (await fresh.execute(select(ExerciseSet))).scalars().all() == []


@pytest.mark.asyncio
async def test_find_helpers_raise_not_found(sessions, gym_workout, bench_press):
    we = await sessions.add_exercise(gym_workout, bench_press)
    assert find_exercise(gym_workout, we.id) is we
    owner, set_ = find_set(gym_workout, we.sets[0].id)
    assert owner is we and set_ is we.sets[0]

    with pytest.raises(NotFoundError):
        find_exercise(gym_workout, gym_workout.id)
    with pytest.raises(NotFoundError):
        find_set(gym_workout, we.id)


@pytest.mark.asyncio
async def test_apply_measurement_matching_tracking_type(sessions, gym_workout, bench_press, plank):
    bench = await sessions.add_exercise(gym_workout, bench_press)
    hold = await sessions.add_exercise(gym_workout, plank)

    await sessions.apply_measurement(gym_workout, bench.sets[0], WeightReps(weight=80, reps=6))
    assert (bench.sets[0].weight, bench.sets[0].reps) == (80, 6)

    hold_set = hold.sets[0]
    hold_set.reps = 3
    await sessions.apply_measurement(gym_workout, hold_set, TimeOnly(duration=75))
    assert hold_set.duration == 75
    assert hold_set.reps is None
    assert isinstance(hold_set.measurement_as(hold.tracking_type), TimeOnly)


@pytest.mark.asyncio
async def test_apply_measurement_rejects_other_kind(sessions, gym_workout, bench_press):
    we = await sessions.add_exercise(gym_workout, bench_press)
    with pytest.raises(InvalidMeasurementError):
        await sessions.apply_measurement(gym_workout, we.sets[0], TimeOnly(duration=30))
    assert we.sets[0].duration is None


@pytest.mark.asyncio
async def test_update_details_sets_metrics_and_mood(sessions, gym_workout, session_maker, clock):
    clock.advance(minutes=30)
    await sessions.update_details(
        gym_workout,
        notes="Felt strong",
        calories_burned=420,
        average_heart_rate=128,
        max_heart_rate=171,
        pre_workout_mood=MoodLevel.LOW,
        post_workout_mood=MoodLevel.GREAT,
        rating=4,
    )

    assert gym_workout.updated_at == clock.now
    async with session_maker() as fresh:
        stored = (await fresh.execute(select(Workout))).scalar_one()
        assert (stored.calories_burned, stored.average_heart_rate, stored.max_heart_rate) == (420, 128, 171)
        assert stored.post_workout_mood is MoodLevel.GREAT
        assert stored.rating == 4
        assert stored.name is None


@pytest.mark.asyncio
async def test_update_details_rejects_bad_rating_and_unknown_fields(sessions, gym_workout):
    with pytest.raises(PreconditionError):
        await sessions.update_details(gym_workout, rating=6)
    assert gym_workout.rating is None
    with pytest.raises(TypeError):
        await sessions.update_details(gym_workout, status=WorkoutStatus.COMPLETED)
    assert gym_workout.status == WorkoutStatus.IN_PROGRESS


class FailingStore:
    """Store whose writes always fail; reads return nothing."""

    def __init__(self):
        self.saves = 0

    async def save(self, *entities, delete=()):
        self.saves += 1
        raise PersistenceError("disk full")

    async def fetch(self, model, *criteria, order_by=None, limit=None):
        return []

    async def get(self, model, entity_id, *, refresh=False):
        return None

    async def delete_cascade(self, entity, *, also=()):
        raise PersistenceError("disk full")


@pytest.mark.asyncio
async def test_persistence_failures_reach_the_caller(bench_press):
    store = FailingStore()
    service = WorkoutSessionService(store)
    with pytest.raises(PersistenceError):
        await service.create_workout(WorkoutType.GYM)

    workout = Workout(workout_type=WorkoutType.GYM)
    with pytest.raises(PersistenceError):
        await service.add_exercise(workout, bench_press)
    with pytest.raises(PersistenceError):
        await service.delete_workout(workout)
    assert store.saves == 2


@pytest.mark.asyncio
async def test_sqlalchemy_store_wraps_integrity_errors(store):
    orphan = ExerciseSet(set_number=1)  # no parent id
    with pytest.raises(PersistenceError):
        await store.save(orphan)
