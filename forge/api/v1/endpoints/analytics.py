"""Progress charts, workout-type breakdown, lifetime summary and training insights."""

from __future__ import annotations

from datetime import datetime, timedelta

from fastapi import APIRouter, Depends

from forge.api.deps import get_current_user, get_store
from forge.core.constants import RECOVERY_WINDOW_DAYS, SUGGESTION_HISTORY
from forge.core.enums import BucketGranularity, ChartMetric, WorkoutStatus
from forge.core.timeutil import get_zone, local_day, utcnow
from forge.models.user import ForgeUser
from forge.models.workout import Workout
from forge.repositories.sqlalchemy_store import SqlAlchemyWorkoutStore
from forge.schemas.analytics import InsightSummary, ProgressSeries, SummaryStats, WorkoutTypeShare
from forge.services import insights, metrics

router = APIRouter()


async def _completed_since(store: SqlAlchemyWorkoutStore, since: datetime | None = None) -> list[Workout]:
    criteria = [Workout.status == WorkoutStatus.COMPLETED]
    if since is not None:
        criteria.append(Workout.started_at >= since)
    return await store.fetch(Workout, *criteria, order_by=Workout.started_at)


@router.get("/progress", response_model=ProgressSeries)
async def progress(
    granularity: BucketGranularity = BucketGranularity.WEEK,
    metric: ChartMetric = ChartMetric.COUNT,
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    user: ForgeUser = Depends(get_current_user),
):
    """
    One point per bucket: 7 days, 4 weeks or 12 months ending now.
    Empty buckets are returned with value 0.
    """
    now = utcnow()
    tz = get_zone(user.tz_name)
    first = metrics.bucket_starts(local_day(now, tz), granularity, user.week_starts_on_monday)[0]
    # One extra day of slack for zones ahead of UTC
    since = datetime.combine(first - timedelta(days=1), datetime.min.time(), tzinfo=now.tzinfo)
    workouts = await _completed_since(store, since)
    points = metrics.progress_series(
        workouts,
        granularity,
        metric,
        now=now,
        tz=tz,
        week_starts_on_monday=user.week_starts_on_monday,
    )
    return ProgressSeries(granularity=granularity, metric=metric, points=points)


@router.get("/workout-types", response_model=list[WorkoutTypeShare])
async def workout_types(
    limit: int = 5,
    store: SqlAlchemyWorkoutStore = Depends(get_store),
):
    """Most frequent workout types among completed workouts, with share of the total."""
    workouts = await _completed_since(store)
    return metrics.workout_type_breakdown(workouts, limit=limit)


@router.get("/summary", response_model=SummaryStats)
async def summary(
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    user: ForgeUser = Depends(get_current_user),
):
    workouts = await _completed_since(store)
    return metrics.summary_stats(
        workouts,
        now=utcnow(),
        tz=get_zone(user.tz_name),
        week_starts_on_monday=user.week_starts_on_monday,
    )


@router.get("/insights", response_model=InsightSummary)
async def insight_summary(
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    user: ForgeUser = Depends(get_current_user),
):
    """Recovery score from the last three days, a rest-day hint, the next workout type and a one-line message."""
    now = utcnow()
    tz = get_zone(user.tz_name)
    first_day = min(
        metrics.week_start(local_day(now, tz), user.week_starts_on_monday),
        local_day(now, tz) - timedelta(days=RECOVERY_WINDOW_DAYS),
    )
    since = datetime.combine(first_day - timedelta(days=1), datetime.min.time(), tzinfo=now.tzinfo)
    window = await _completed_since(store, since)
    recent = await store.fetch(
        Workout,
        Workout.status == WorkoutStatus.COMPLETED,
        order_by=Workout.started_at.desc(),
        limit=SUGGESTION_HISTORY,
    )
    score = insights.recovery_score(window, now=now, tz=tz)
    return InsightSummary(
        recovery_score=score,
        suggest_rest_day=insights.should_suggest_rest_day(window, now=now, tz=tz),
        suggested_workout_type=insights.suggest_workout_type(recent),
        message=insights.generate_insight(window, user, now=now, tz=tz),
    )
