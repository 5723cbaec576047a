"""Streak bookkeeping: consecutive local calendar days with at least one completed workout."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from forge.models.user import ForgeUser
from forge.schemas.analytics import StreakSummary

ONE_DAY = timedelta(days=1)


def advance_streak(user: ForgeUser, workout_day: date) -> None:
    """
    Fold one completed workout's local day into the user's streak.

    Same day as the last counted workout: unchanged. The next day: +1.
    Any larger gap (or no history): restart at 1. A day before the last counted
    one (clock moved backwards) leaves the streak alone.
    """
    last = user.last_workout_on
    current = user.current_streak or 0
    if last is None:
        current = 1
    elif workout_day == last:
        current = max(current, 1)
    elif workout_day == last + ONE_DAY:
        current += 1
    elif workout_day > last:
        current = 1

    user.current_streak = current
    user.longest_streak = max(user.longest_streak or 0, current)
    if last is None or workout_day > last:
        user.last_workout_on = workout_day


def compute_streaks(days: Iterable[date], today: date) -> StreakSummary:
    """
    Recompute streaks from scratch over a history of workout days.
    The current streak only counts if the last workout was today or yesterday.
    """
    workout_dates = sorted(set(days), reverse=True)
    if not workout_dates:
        return StreakSummary()

    last_workout = workout_dates[0]
    current_streak = 0
    if last_workout >= today - ONE_DAY:
        current_streak = 1
        for i in range(1, len(workout_dates)):
            if workout_dates[i] == workout_dates[i - 1] - ONE_DAY:
                current_streak += 1
            else:
                break

    longest = 1
    run = 1
    for i in range(1, len(workout_dates)):
        if workout_dates[i] == workout_dates[i - 1] - ONE_DAY:
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    return StreakSummary(
        current_streak=current_streak,
        longest_streak=longest,
        last_workout_date=last_workout,
    )
