"""Live tracking of one workout: mutation and lifecycle calls plus its two clocks."""

from __future__ import annotations

import logging

from forge.core.config import Settings, get_settings
from forge.core.exceptions import NotFoundError
from forge.models.exercise import Exercise
from forge.models.personal_record import PersonalRecord
from forge.models.user import ForgeUser
from forge.models.workout import ExerciseSet, Workout, WorkoutExercise
from forge.services.lifecycle import WorkoutLifecycle
from forge.services.timers import RestTimer, SessionTimer, format_clock
from forge.services.workout_session import WorkoutSessionService, find_set

logger = logging.getLogger(__name__)


class ActiveWorkout:
    """
    Owns a SessionTimer and a RestTimer for the workout being tracked.

    Use as an async context manager: entering starts the session clock from
    the workout's persisted duration, leaving stops both clocks. Completing a
    set auto-starts the rest countdown with the exercise's rest_between_sets.
    The session clock is frozen while the workout is paused.

    A failed save (PersistenceError) rolls the database session back and
    expires the loaded workout; call reload() before touching it again.
    """

    def __init__(
        self,
        workout: Workout,
        user: ForgeUser,
        sessions: WorkoutSessionService,
        lifecycle: WorkoutLifecycle,
        *,
        presets: tuple[int, ...] = (30, 60, 90, 120, 180),
        tick_interval: float = 1.0,
    ):
        self.workout = workout
        self.user = user
        self.sessions = sessions
        self.lifecycle = lifecycle
        self.workout_id = workout.id
        self.user_id = user.id
        self.session_timer = SessionTimer(tick_interval=tick_interval)
        self.rest_timer = RestTimer(
            default_duration=user.default_rest_seconds,
            presets=presets,
            tick_interval=tick_interval,
        )

    @classmethod
    def from_settings(
        cls,
        workout: Workout,
        user: ForgeUser,
        sessions: WorkoutSessionService,
        lifecycle: WorkoutLifecycle,
        settings: Settings | None = None,
    ) -> "ActiveWorkout":
        settings = settings or get_settings()
        return cls(
            workout,
            user,
            sessions,
            lifecycle,
            presets=settings.rest_timer_presets,
            tick_interval=settings.timer_tick_seconds,
        )

    async def __aenter__(self) -> "ActiveWorkout":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def start(self) -> None:
        if self.workout.is_terminal:
            return
        self.session_timer.start(elapsed=self.workout.duration_at(self.lifecycle.clock()))
        if self.workout.paused_at is not None:
            self.session_timer.pause()

    async def close(self) -> None:
        self.session_timer.stop()
        self.rest_timer.cancel()
        await self.session_timer.close()
        await self.rest_timer.close()

    async def reload(self) -> Workout:
        """Re-read the workout and profile from the store, replacing expired in-memory state."""
        store = self.sessions.store
        workout = await store.get(Workout, self.workout_id, refresh=True)
        if workout is None:
            raise NotFoundError("Workout", self.workout_id)
        self.workout = workout
        self.user = await store.get(ForgeUser, self.user_id, refresh=True) or self.user
        return workout

    async def add_exercise(self, exercise: Exercise) -> WorkoutExercise:
        return await self.sessions.add_exercise(
            self.workout, exercise, rest_between_sets=self.user.default_rest_seconds
        )

    async def add_set(self, workout_exercise: WorkoutExercise) -> ExerciseSet:
        return await self.sessions.add_set(self.workout, workout_exercise)

    async def complete_set(self, set_: ExerciseSet) -> list[PersonalRecord]:
        """Complete the set and start the rest countdown; a set that was already done leaves the timer alone."""
        if set_.is_completed:
            return await self.sessions.complete_set(self.workout, set_)
        records = await self.sessions.complete_set(self.workout, set_)
        owner, _ = find_set(self.workout, set_.id)
        rest = owner.rest_between_sets
        self.rest_timer.start(rest if rest is not None else self.user.default_rest_seconds)
        return records

    async def uncomplete_set(self, set_: ExerciseSet) -> ExerciseSet:
        return await self.sessions.uncomplete_set(self.workout, set_)

    async def delete_set(self, set_: ExerciseSet) -> None:
        await self.sessions.delete_set(self.workout, set_)

    def start_rest(self, duration: float | None = None) -> None:
        self.rest_timer.start(duration)

    def cancel_rest(self) -> None:
        self.rest_timer.cancel()

    async def pause(self) -> Workout:
        await self.lifecycle.pause(self.workout)
        self.session_timer.pause()
        return self.workout

    async def resume(self) -> Workout:
        await self.lifecycle.resume(self.workout)
        self.session_timer.resume()
        return self.workout

    async def finish(self) -> Workout:
        await self.lifecycle.complete(self.workout, self.user)
        await self.close()
        logger.info("Finished workout %s in %s", self.workout.id, self.formatted_duration)
        return self.workout

    async def discard(self) -> Workout:
        await self.lifecycle.cancel(self.workout)
        await self.close()
        return self.workout

    @property
    def formatted_duration(self) -> str:
        if self.workout.is_terminal:
            return format_clock(self.workout.duration_at())
        return format_clock(self.session_timer.elapsed)

    @property
    def formatted_rest_time(self) -> str:
        return format_clock(self.rest_timer.remaining)

    @property
    def formatted_volume(self) -> str:
        volume = self.workout.total_volume
        if volume >= 1000:
            return f"{volume / 1000:.1f}k"
        return f"{volume:.0f}"
