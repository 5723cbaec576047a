"""Workout status transitions: in_progress <-> paused -> completed | cancelled."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo

from forge.core.enums import WorkoutStatus
from forge.core.exceptions import InvalidTransitionError
from forge.core.timeutil import Clock, as_utc, get_zone, local_day, utcnow
from forge.models.user import ForgeUser
from forge.models.workout import Workout
from forge.repositories.base import WorkoutStore
from forge.services.metrics import total_volume
from forge.services.pr_detection import records_from_workout
from forge.services.streak import advance_streak

logger = logging.getLogger(__name__)

# action -> (allowed source statuses, target status)
TRANSITIONS: dict[str, tuple[frozenset[WorkoutStatus], WorkoutStatus]] = {
    "pause": (frozenset({WorkoutStatus.IN_PROGRESS}), WorkoutStatus.PAUSED),
    "resume": (frozenset({WorkoutStatus.PAUSED}), WorkoutStatus.IN_PROGRESS),
    "complete": (
        frozenset({WorkoutStatus.IN_PROGRESS, WorkoutStatus.PAUSED}),
        WorkoutStatus.COMPLETED,
    ),
    "cancel": (
        frozenset({WorkoutStatus.IN_PROGRESS, WorkoutStatus.PAUSED}),
        WorkoutStatus.CANCELLED,
    ),
}


def can_transition(workout: Workout, action: str) -> bool:
    sources, _ = TRANSITIONS[action]
    return workout.status in sources


def _close_pause(workout: Workout, now: datetime) -> None:
    if workout.paused_at is not None:
        paused_for = (as_utc(now) - as_utc(workout.paused_at)).total_seconds()
        workout.paused_duration = (workout.paused_duration or 0.0) + max(0.0, paused_for)
        workout.paused_at = None


class WorkoutLifecycle:
    """
    Drives a workout through its states. An action not allowed from the
    current status raises InvalidTransitionError and changes nothing.
    Completion is the only transition that touches the user's stats;
    cancelling withdraws the personal records the workout set.
    """

    def __init__(self, store: WorkoutStore, *, clock: Clock = utcnow, tz: tzinfo | None = None):
        self.store = store
        self.clock = clock
        self.tz = tz

    def _check(self, workout: Workout, action: str) -> WorkoutStatus:
        sources, target = TRANSITIONS[action]
        if workout.status not in sources:
            raise InvalidTransitionError(workout.id, workout.status.value, action)
        return target

    def _log(self, workout: Workout, previous: WorkoutStatus) -> None:
        logger.info("Workout %s: %s -> %s", workout.id, previous.value, workout.status.value)

    async def pause(self, workout: Workout) -> Workout:
        target = self._check(workout, "pause")
        previous, now = workout.status, self.clock()
        workout.paused_at = now
        workout.status = target
        workout.updated_at = now
        await self.store.save(workout)
        self._log(workout, previous)
        return workout

    async def resume(self, workout: Workout) -> Workout:
        target = self._check(workout, "resume")
        previous, now = workout.status, self.clock()
        _close_pause(workout, now)
        workout.status = target
        workout.updated_at = now
        await self.store.save(workout)
        self._log(workout, previous)
        return workout

    async def complete(self, workout: Workout, user: ForgeUser) -> Workout:
        """Finish the workout and fold it into the user's totals and streak, saved together."""
        target = self._check(workout, "complete")
        earned = await records_from_workout(self.store, workout)
        previous, now = workout.status, self.clock()
        _close_pause(workout, now)
        workout.ended_at = now
        workout.status = target
        workout.updated_at = now

        user.total_workouts = (user.total_workouts or 0) + 1
        user.total_duration = (user.total_duration or 0.0) + workout.duration_at(now)
        user.total_volume = (user.total_volume or 0.0) + total_volume(workout)
        user.personal_records = (user.personal_records or 0) + len(earned)
        zone = self.tz or get_zone(user.tz_name or "UTC")
        advance_streak(user, local_day(now, zone))
        user.updated_at = now

        await self.store.save(workout, user)
        self._log(workout, previous)
        return workout

    async def cancel(self, workout: Workout) -> Workout:
        target = self._check(workout, "cancel")
        previous, now = workout.status, self.clock()
        stale = await records_from_workout(self.store, workout)
        for exercise in workout.exercises:
            for set_ in exercise.sets:
                set_.is_personal_record = False
        _close_pause(workout, now)
        workout.ended_at = now
        workout.status = target
        workout.updated_at = now
        await self.store.save(workout, delete=stale)
        self._log(workout, previous)
        return workout
