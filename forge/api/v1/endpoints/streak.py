"""Streak calculation endpoint."""

from datetime import timedelta

from fastapi import APIRouter, Depends

from forge.api.deps import get_current_user, get_store
from forge.core.constants import STREAK_LOOKBACK_DAYS
from forge.core.enums import WorkoutStatus
from forge.core.timeutil import get_zone, local_day, utcnow
from forge.models.user import ForgeUser
from forge.models.workout import Workout
from forge.repositories.sqlalchemy_store import SqlAlchemyWorkoutStore
from forge.schemas.analytics import StreakSummary
from forge.services.streak import compute_streaks

router = APIRouter()


@router.get("", response_model=StreakSummary)
async def get_streak(
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    user: ForgeUser = Depends(get_current_user),
):
    """
    Returns current workout streak (consecutive local days with at least 1 completed
    workout), longest streak in the scanned history, and the date of the last workout.
    """
    now = utcnow()
    tz = get_zone(user.tz_name)
    cutoff = now - timedelta(days=STREAK_LOOKBACK_DAYS)
    workouts = await store.fetch(
        Workout,
        Workout.status == WorkoutStatus.COMPLETED,
        Workout.started_at >= cutoff,
    )
    days = [local_day(w.ended_at or w.started_at, tz) for w in workouts]
    return compute_streaks(days, local_day(now, tz))
