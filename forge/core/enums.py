"""Shared enums for models and API."""

from enum import Enum

LB_TO_KG = 0.453592
KG_TO_LB = 2.20462
METERS_PER_MILE = 1609.344


class WorkoutStatus(str, Enum):
    """Lifecycle state of a workout session."""

    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (WorkoutStatus.COMPLETED, WorkoutStatus.CANCELLED)


class WorkoutType(str, Enum):
    """Kind of session (gym, running, yoga...)."""

    # Strength
    GYM = "gym"
    WEIGHTLIFTING = "weightlifting"
    CROSSFIT = "crossfit"
    BODYWEIGHT = "bodyweight"
    # Cardio
    RUNNING = "running"
    WALKING = "walking"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    ROWING = "rowing"
    ELLIPTICAL = "elliptical"
    STAIR_CLIMBER = "stair_climber"
    # HIIT & functional
    HIIT = "hiit"
    CIRCUIT_TRAINING = "circuit_training"
    BOXING = "boxing"
    KICKBOXING = "kickboxing"
    MARTIAL_ARTS = "martial_arts"
    # Climbing
    CLIMBING = "climbing"
    BOULDERING = "bouldering"
    # Mind-body
    YOGA = "yoga"
    PILATES = "pilates"
    STRETCHING = "stretching"
    # Sports
    TENNIS = "tennis"
    BASKETBALL = "basketball"
    SOCCER = "soccer"
    GOLF = "golf"
    BASEBALL = "baseball"
    VOLLEYBALL = "volleyball"
    # Other
    HIKING = "hiking"
    DANCE = "dance"
    OTHER = "other"


class TrackingType(str, Enum):
    """How an exercise is measured."""

    WEIGHT_AND_REPS = "weight_and_reps"  # Bench press: 135 x 10
    REPS_ONLY = "reps_only"  # Pull-ups
    TIME_ONLY = "time_only"  # Plank
    DISTANCE_AND_TIME = "distance_and_time"  # 5 km in 25 min
    DISTANCE_ONLY = "distance_only"  # Swimming 1000 m
    CALORIES_ONLY = "calories_only"  # General cardio


class SetType(str, Enum):
    """Set labeling."""

    WARMUP = "warmup"
    WORKING = "working"
    DROP_SET = "drop_set"
    FAILURE_SET = "failure_set"
    REST_PAUSE = "rest_pause"
    SUPER_SET = "super_set"


class RecordType(str, Enum):
    """Type of personal record."""

    MAX_WEIGHT = "max_weight"  # Heaviest weight
    MAX_REPS = "max_reps"  # Most reps at any weight
    MAX_VOLUME = "max_volume"  # Highest single-set weight x reps
    FASTEST_TIME = "fastest_time"  # Best pace over a distance (seconds per km)
    LONGEST_TIME = "longest_time"  # Longest duration
    LONGEST_DISTANCE = "longest_distance"  # Longest distance

    @property
    def lower_is_better(self) -> bool:
        return self is RecordType.FASTEST_TIME


class ExerciseCategory(str, Enum):
    COMPOUND = "compound"
    ISOLATION = "isolation"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    PLYOMETRIC = "plyometric"
    CALISTHENICS = "calisthenics"


class MuscleGroup(str, Enum):
    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FOREARMS = "forearms"
    QUADRICEPS = "quadriceps"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    CALVES = "calves"
    CORE = "core"
    ABS = "abs"
    OBLIQUES = "obliques"
    FULL_BODY = "full_body"
    CARDIO = "cardio"


class BucketGranularity(str, Enum):
    """Chart bucket size for time-bucketed aggregation."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class ChartMetric(str, Enum):
    COUNT = "count"
    VOLUME = "volume"
    DURATION = "duration"  # minutes


class AuthorizationStatus(str, Enum):
    """Result of asking the health platform for access."""

    AUTHORIZED = "authorized"
    DENIED = "denied"
    ERROR = "error"


class PremiumFeature(str, Enum):
    """Features gated behind the subscription."""

    UNLIMITED_WORKOUT_TYPES = "unlimited_workout_types"
    CUSTOM_EXERCISES = "custom_exercises"
    WORKOUT_NOTES = "workout_notes"
    REST_TIMER = "rest_timer"
    ALL_WORKOUT_PLANS = "all_workout_plans"
    ADVANCED_ANALYTICS = "advanced_analytics"
    PERSONAL_RECORDS = "personal_records"
    PROGRESS_CHARTS = "progress_charts"
    HEALTH_SYNC = "health_sync"
    UNLIMITED_HISTORY = "unlimited_history"

    @property
    def is_available_for_free(self) -> bool:
        return self in (PremiumFeature.REST_TIMER, PremiumFeature.WORKOUT_NOTES)


class WeightUnit(str, Enum):
    """Display unit for weights. Stored values are in the unit they were entered in."""

    POUNDS = "pounds"
    KILOGRAMS = "kilograms"

    @property
    def abbreviation(self) -> str:
        return "lbs" if self is WeightUnit.POUNDS else "kg"

    def convert(self, value: float, to: "WeightUnit") -> float:
        if self is to:
            return value
        if to is WeightUnit.KILOGRAMS:
            return value * LB_TO_KG
        return value * KG_TO_LB


class DistanceUnit(str, Enum):
    """Display unit for distances; sets and workouts store meters."""

    MILES = "miles"
    KILOMETERS = "kilometers"

    @property
    def abbreviation(self) -> str:
        return "mi" if self is DistanceUnit.MILES else "km"

    def convert(self, meters: float) -> float:
        if self is DistanceUnit.MILES:
            return meters / METERS_PER_MILE
        return meters / 1000


class MoodLevel(int, Enum):
    """Self-reported mood before/after a workout."""

    VERY_LOW = 1
    LOW = 2
    NEUTRAL = 3
    GOOD = 4
    GREAT = 5
