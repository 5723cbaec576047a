"""Application constants."""

from forge.core.enums import BucketGranularity

# Chart look-back windows (number of buckets ending with the current one)
BUCKET_COUNTS = {
    BucketGranularity.DAY: 7,
    BucketGranularity.WEEK: 4,
    BucketGranularity.MONTH: 12,
}

# Workout-type breakdown shows the top N types
WORKOUT_TYPE_BREAKDOWN_LIMIT = 5

# Free tier limits (premium is unlimited)
FREE_WORKOUT_TYPES = 3
FREE_HISTORY_DAYS = 7
FREE_CUSTOM_EXERCISES = 5

# Streak endpoint scans at most ~14 months of history
STREAK_LOOKBACK_DAYS = 430

# Suggestions
SUGGESTION_HISTORY = 14  # most recent workouts considered for the next type
RECOVERY_WINDOW_DAYS = 3
REST_DAY_THRESHOLD = 50.0  # recovery score below this suggests a rest day
EXERCISE_SUGGESTION_LIMIT = 6
