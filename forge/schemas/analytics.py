"""Analytics read models: chart points, type breakdown, streaks, summary."""

from datetime import date

from pydantic import BaseModel

from forge.core.enums import BucketGranularity, ChartMetric, WorkoutType


class ChartPoint(BaseModel):
    bucket_start: date
    value: float


class ProgressSeries(BaseModel):
    granularity: BucketGranularity
    metric: ChartMetric
    points: list[ChartPoint]


class WorkoutTypeShare(BaseModel):
    workout_type: WorkoutType
    count: int
    percentage: float  # 0-100 of all completed workouts


class StreakSummary(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: date | None = None


class SummaryStats(BaseModel):
    total_workouts: int = 0
    total_duration_seconds: float = 0.0
    total_volume: float = 0.0
    workouts_this_week: int = 0


class InsightSummary(BaseModel):
    """Recovery and what to do next."""

    recovery_score: float
    suggest_rest_day: bool
    suggested_workout_type: WorkoutType
    message: str
