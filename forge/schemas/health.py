from datetime import date, datetime

from pydantic import BaseModel


class DailyMetrics(BaseModel):
    """Activity totals for one day as reported by the health platform."""

    day: date
    fetched_at: datetime | None = None
    steps: int | None = None
    active_calories: float | None = None
    exercise_minutes: int | None = None
    resting_heart_rate: int | None = None
    average_heart_rate: int | None = None
    max_heart_rate: int | None = None
    walking_running_distance: float | None = None  # meters
    cycling_distance: float | None = None
    swimming_distance: float | None = None

    @property
    def total_distance(self) -> float:
        return (
            (self.walking_running_distance or 0)
            + (self.cycling_distance or 0)
            + (self.swimming_distance or 0)
        )

