"""Derived training metrics: volume, best set, chart buckets, type breakdown.

Everything here is read-only over already-loaded workouts. Functions never
raise on empty input and never mutate the collections they are given.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import TYPE_CHECKING

from forge.core.constants import BUCKET_COUNTS, WORKOUT_TYPE_BREAKDOWN_LIMIT
from forge.core.enums import BucketGranularity, ChartMetric, WorkoutStatus
from forge.core.timeutil import as_utc, local_day
from forge.schemas.analytics import ChartPoint, SummaryStats, WorkoutTypeShare

if TYPE_CHECKING:
    from forge.models.workout import ExerciseSet, Workout, WorkoutExercise

_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


def total_volume(item: "Workout | WorkoutExercise") -> float:
    """Sum of weight x reps over completed sets of a workout or of one exercise in it."""
    exercises = getattr(item, "exercises", None)
    if exercises is not None:
        return sum(total_volume(exercise) for exercise in exercises)
    return sum(s.volume for s in item.sets if s.is_completed)


def best_set(workout_exercise: "WorkoutExercise") -> "ExerciseSet | None":
    """Completed set with the highest volume; the earliest completion wins a tie."""
    completed = [s for s in workout_exercise.sets if s.is_completed]
    if not completed:
        return None
    return min(
        completed,
        key=lambda s: (-s.volume, as_utc(s.completed_at) if s.completed_at else _FAR_FUTURE),
    )


def completed_only(workouts: Iterable["Workout"]) -> list["Workout"]:
    return [w for w in workouts if w.status == WorkoutStatus.COMPLETED]


def week_start(day: date, week_starts_on_monday: bool = True) -> date:
    offset = day.weekday() if week_starts_on_monday else (day.weekday() + 1) % 7
    return day - timedelta(days=offset)


def _shift_month(day: date, months: int) -> date:
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def bucket_start(day: date, granularity: BucketGranularity, week_starts_on_monday: bool = True) -> date:
    if granularity == BucketGranularity.DAY:
        return day
    if granularity == BucketGranularity.WEEK:
        return week_start(day, week_starts_on_monday)
    return day.replace(day=1)


def bucket_starts(
    today: date,
    granularity: BucketGranularity,
    week_starts_on_monday: bool = True,
) -> list[date]:
    """Oldest-first starts of the look-back window ending with the bucket containing today."""
    count = BUCKET_COUNTS[granularity]
    current = bucket_start(today, granularity, week_starts_on_monday)
    if granularity == BucketGranularity.DAY:
        return [current - timedelta(days=count - 1 - i) for i in range(count)]
    if granularity == BucketGranularity.WEEK:
        return [current - timedelta(weeks=count - 1 - i) for i in range(count)]
    return [_shift_month(current, -(count - 1 - i)) for i in range(count)]


def _metric_value(workout: "Workout", metric: ChartMetric, now: datetime) -> float:
    if metric == ChartMetric.COUNT:
        return 1.0
    if metric == ChartMetric.VOLUME:
        return total_volume(workout)
    return workout.duration_at(now) / 60


def progress_series(
    workouts: Iterable["Workout"],
    granularity: BucketGranularity,
    metric: ChartMetric,
    *,
    now: datetime,
    tz: tzinfo = timezone.utc,
    week_starts_on_monday: bool = True,
) -> list[ChartPoint]:
    """
    One point per bucket over the fixed window (7 days, 4 weeks or 12 months).
    Workouts are bucketed by the local day of started_at; empty buckets are 0.
    """
    starts = bucket_starts(local_day(now, tz), granularity, week_starts_on_monday)
    totals = {start: 0.0 for start in starts}
    for workout in completed_only(workouts):
        key = bucket_start(local_day(workout.started_at, tz), granularity, week_starts_on_monday)
        if key in totals:
            totals[key] += _metric_value(workout, metric, now)
    return [ChartPoint(bucket_start=start, value=round(totals[start], 2)) for start in starts]


def workout_type_breakdown(
    workouts: Iterable["Workout"],
    limit: int = WORKOUT_TYPE_BREAKDOWN_LIMIT,
) -> list[WorkoutTypeShare]:
    """Completed workouts grouped by type, most frequent first, capped to the top `limit`."""
    completed = completed_only(workouts)
    if not completed:
        return []
    counts = Counter(w.workout_type for w in completed)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0].value))
    total = len(completed)
    return [
        WorkoutTypeShare(workout_type=t, count=n, percentage=round(n / total * 100, 1))
        for t, n in ranked[:limit]
    ]


def summary_stats(
    workouts: Iterable["Workout"],
    *,
    now: datetime,
    tz: tzinfo = timezone.utc,
    week_starts_on_monday: bool = True,
) -> SummaryStats:
    completed = completed_only(workouts)
    this_week = week_start(local_day(now, tz), week_starts_on_monday)
    return SummaryStats(
        total_workouts=len(completed),
        total_duration_seconds=sum(w.duration_at(now) for w in completed),
        total_volume=sum(total_volume(w) for w in completed),
        workouts_this_week=sum(1 for w in completed if local_day(w.started_at, tz) >= this_week),
    )
