"""Training suggestions: recovery score, rest days, next workout type, weekly insight.

Pure functions over already-loaded workouts, like forge.services.metrics.
Only completed workouts count; an empty history is fully recovered.
"""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta, timezone, tzinfo
from typing import TYPE_CHECKING

from forge.core.constants import (
    EXERCISE_SUGGESTION_LIMIT,
    RECOVERY_WINDOW_DAYS,
    REST_DAY_THRESHOLD,
    SUGGESTION_HISTORY,
)
from forge.core.enums import MuscleGroup, WorkoutType
from forge.core.timeutil import local_day
from forge.services.metrics import completed_only, week_start

if TYPE_CHECKING:
    from forge.models.exercise import Exercise
    from forge.models.user import ForgeUser
    from forge.models.workout import Workout

# Candidates for the next workout, in tie-break order
SUGGESTED_TYPES = (
    WorkoutType.GYM,
    WorkoutType.RUNNING,
    WorkoutType.CYCLING,
    WorkoutType.SWIMMING,
    WorkoutType.HIIT,
    WorkoutType.YOGA,
)


def suggest_workout_type(workouts: Iterable["Workout"]) -> WorkoutType:
    """The candidate type done least often among the most recent workouts."""
    recent = sorted(completed_only(workouts), key=lambda w: w.started_at, reverse=True)
    counts = Counter(w.workout_type for w in recent[:SUGGESTION_HISTORY])
    return min(SUGGESTED_TYPES, key=lambda t: counts[t])


def recovery_score(
    workouts: Iterable["Workout"],
    *,
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> float:
    """
    0-100, higher is more recovered. Hours trained on each of the last three
    local days (today included) are weighted 1, 1/2, 1/3; each weighted hour
    costs 25 points.
    """
    completed = completed_only(workouts)
    if not completed:
        return 100.0
    today = local_day(now, tz)
    load = 0.0
    for offset in range(RECOVERY_WINDOW_DAYS):
        day = today - timedelta(days=offset)
        hours = sum(w.duration_at(now) / 3600 for w in completed if local_day(w.started_at, tz) == day)
        load += hours / (offset + 1)
    return max(0.0, min(100.0, 100 - load * 25))


def should_suggest_rest_day(
    workouts: Iterable["Workout"],
    *,
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> bool:
    return recovery_score(workouts, now=now, tz=tz) < REST_DAY_THRESHOLD


def generate_insight(
    workouts: Iterable["Workout"],
    user: "ForgeUser",
    *,
    now: datetime,
    tz: tzinfo = timezone.utc,
) -> str:
    completed = completed_only(workouts)
    if not completed:
        return "Start your fitness journey with a workout today!"
    first_day = week_start(local_day(now, tz), user.week_starts_on_monday)
    this_week = sum(1 for w in completed if local_day(w.started_at, tz) >= first_day)
    if this_week >= 5:
        return f"Great week! You've completed {this_week} workouts."
    if this_week >= 3:
        return "Good progress! Keep up the momentum."
    if user.current_streak:
        return f"You're on a {user.current_streak}-day streak! Don't break it."
    return "Ready to get back on track? Your body will thank you."


def suggest_exercises(
    target_muscles: Sequence[MuscleGroup],
    exercises: Iterable["Exercise"],
    *,
    limit: int = EXERCISE_SUGGESTION_LIMIT,
    rng: random.Random | None = None,
) -> list["Exercise"]:
    """A random pick of exercises hitting any target muscle, as primary or secondary."""
    targets = {MuscleGroup(m) for m in target_muscles}
    matching = [
        e
        for e in exercises
        if e.primary_muscle in targets or any(MuscleGroup(m) in targets for m in e.secondary_muscles or ())
    ]
    (rng or random).shuffle(matching)
    return matching[:limit]
