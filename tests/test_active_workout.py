import pytest
from sqlalchemy.exc import OperationalError

from forge.core.config import Settings
from forge.core.enums import WorkoutStatus
from forge.core.exceptions import PersistenceError
from forge.services.active_workout import ActiveWorkout


@pytest.fixture
def active(gym_workout, user, sessions, lifecycle):
    user.default_rest_seconds = 120
    return ActiveWorkout(gym_workout, user, sessions, lifecycle, tick_interval=60)


@pytest.mark.asyncio
async def test_completing_a_set_starts_rest_from_user_default(active, bench_press):
    async with active:
        we = await active.add_exercise(bench_press)
        assert we.rest_between_sets == 120
        set_ = we.sets[0]
        await active.sessions.update_set(active.workout, set_, weight=60, reps=12)

        await active.complete_set(set_)

        assert active.rest_timer.is_active
        assert active.rest_timer.remaining == 120
        assert active.formatted_rest_time == "2:00"
        active.cancel_rest()
        assert active.formatted_rest_time == "0:00"


@pytest.mark.asyncio
async def test_rest_uses_the_exercise_setting(active, sessions, squat):
    async with active:
        we = await sessions.add_exercise(active.workout, squat, rest_between_sets=180)
        await sessions.update_set(active.workout, we.sets[0], weight=140, reps=5)
        await active.complete_set(we.sets[0])
        assert active.rest_timer.remaining == 180


@pytest.mark.asyncio
async def test_completing_a_done_set_leaves_rest_alone(active, bench_press):
    async with active:
        we = await active.add_exercise(bench_press)
        await active.sessions.update_set(active.workout, we.sets[0], weight=60, reps=12)
        await active.complete_set(we.sets[0])
        active.cancel_rest()

        assert await active.complete_set(we.sets[0]) == []

        assert not active.rest_timer.is_active
        assert active.rest_timer.remaining == 0


@pytest.mark.asyncio
async def test_pause_freezes_the_session_clock(active):
    async with active:
        active.session_timer.tick()
        await active.pause()
        active.session_timer.tick()
        assert active.workout.status == WorkoutStatus.PAUSED
        assert active.session_timer.elapsed == 60
        await active.resume()
        active.session_timer.tick()
        assert active.session_timer.elapsed == 120
        assert active.formatted_duration == "2:00"


@pytest.mark.asyncio
async def test_finish_stops_both_clocks_and_updates_user(active, bench_press, clock):
    async with active:
        we = await active.add_exercise(bench_press)
        await active.sessions.update_set(active.workout, we.sets[0], weight=100, reps=10)
        await active.complete_set(we.sets[0])
        clock.advance(minutes=40)

        await active.finish()

        assert active.workout.status == WorkoutStatus.COMPLETED
        assert not active.session_timer.is_running
        assert not active.rest_timer.is_active
        assert not active.session_timer.has_task and not active.rest_timer.has_task
        assert active.user.total_workouts == 1
        assert active.formatted_volume == "1.0k"
        assert active.formatted_duration == "40:00"


@pytest.mark.asyncio
async def test_discard_cancels_without_stats(active):
    async with active:
        await active.discard()
    assert active.workout.status == WorkoutStatus.CANCELLED
    assert active.user.total_workouts == 0
    assert not active.session_timer.is_running


@pytest.mark.asyncio
async def test_exit_without_finishing_stops_clocks(active):
    async with active:
        active.start_rest(30)
        assert active.session_timer.is_running
    assert not active.session_timer.has_task
    assert not active.rest_timer.has_task
    assert active.workout.status == WorkoutStatus.IN_PROGRESS


def test_clock_settings_come_from_config(gym_workout, user, sessions, lifecycle):
    settings = Settings(rest_timer_presets=(45, 90), timer_tick_seconds=0.5)
    active = ActiveWorkout.from_settings(gym_workout, user, sessions, lifecycle, settings)
    assert active.rest_timer.presets == (45, 90)
    assert active.session_timer.tick_interval == 0.5
    assert active.rest_timer.default_duration == user.default_rest_seconds


@pytest.mark.asyncio
async def test_reload_after_failed_save(active, bench_press, store, monkeypatch):
    async def broken_commit():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    async with active:
        we = await active.add_exercise(bench_press)
        monkeypatch.setattr(store.session, "commit", broken_commit)
        with pytest.raises(PersistenceError):
            await active.add_set(we)
        monkeypatch.undo()

        workout = await active.reload()

        assert workout is active.workout
        assert [e.exercise_name for e in workout.exercises] == ["Bench Press"]
        assert [s.set_number for s in workout.exercises[0].sets] == [1]
        assert active.user.default_rest_seconds == 120
        await active.add_set(workout.exercises[0])
        assert [s.set_number for s in workout.exercises[0].sets] == [1, 2]
