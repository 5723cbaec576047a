"""Per-tracking-type set measurements as a discriminated union.

The ORM row keeps nullable columns for every kind of value; these models are
the typed view of a set so that, for example, a plank can never carry reps.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from forge.core.enums import TrackingType
from forge.core.exceptions import InvalidMeasurementError


class _Measurement(BaseModel):
    model_config = ConfigDict(frozen=True)


class WeightReps(_Measurement):
    kind: Literal["weight_and_reps"] = "weight_and_reps"
    weight: float = Field(ge=0)
    reps: int = Field(ge=0)


class RepsOnly(_Measurement):
    kind: Literal["reps_only"] = "reps_only"
    reps: int = Field(ge=0)


class TimeOnly(_Measurement):
    kind: Literal["time_only"] = "time_only"
    duration: float = Field(ge=0, description="Seconds")


class DistanceTime(_Measurement):
    kind: Literal["distance_and_time"] = "distance_and_time"
    distance: float = Field(ge=0, description="Meters")
    duration: float = Field(ge=0, description="Seconds")

    @property
    def pace(self) -> float | None:
        """Seconds per kilometer."""
        if self.distance <= 0:
            return None
        return self.duration / (self.distance / 1000)


class DistanceOnly(_Measurement):
    kind: Literal["distance_only"] = "distance_only"
    distance: float = Field(ge=0, description="Meters")


class CaloriesOnly(_Measurement):
    kind: Literal["calories_only"] = "calories_only"
    calories: float = Field(ge=0)


Measurement = Annotated[
    Union[WeightReps, RepsOnly, TimeOnly, DistanceTime, DistanceOnly, CaloriesOnly],
    Field(discriminator="kind"),
]

# Columns each variant owns on ExerciseSet; everything else is cleared on apply
MEASURED_FIELDS = ("weight", "reps", "duration", "distance", "calories")


def measurement_of(set_, tracking_type: TrackingType) -> Measurement | None:
    """Typed view of a set's values, or None while the required values are still blank."""
    try:
        if tracking_type == TrackingType.WEIGHT_AND_REPS:
            return WeightReps(weight=set_.weight, reps=set_.reps)
        if tracking_type == TrackingType.REPS_ONLY:
            return RepsOnly(reps=set_.reps)
        if tracking_type == TrackingType.TIME_ONLY:
            return TimeOnly(duration=set_.duration)
        if tracking_type == TrackingType.DISTANCE_AND_TIME:
            return DistanceTime(distance=set_.distance, duration=set_.duration)
        if tracking_type == TrackingType.DISTANCE_ONLY:
            return DistanceOnly(distance=set_.distance)
        if tracking_type == TrackingType.CALORIES_ONLY:
            return CaloriesOnly(calories=set_.calories)
    except ValueError:
        return None
    return None


def measurement_columns(measurement: Measurement, tracking_type: TrackingType) -> dict[str, float | int | None]:
    """Column values for a measurement; rejects a variant that does not match the tracking type."""
    if measurement.kind != tracking_type.value:
        raise InvalidMeasurementError(
            f"{measurement.kind} measurement does not fit a {tracking_type.value} exercise"
        )
    values: dict[str, float | int | None] = {field: None for field in MEASURED_FIELDS}
    values.update(measurement.model_dump(exclude={"kind"}))
    return values
