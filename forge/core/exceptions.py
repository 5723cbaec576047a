"""Domain errors raised by the workout core. The API layer maps them to HTTP status codes."""

from __future__ import annotations

import uuid


class ForgeError(Exception):
    """Base for all recoverable workout-core errors."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidTransitionError(ForgeError):
    """Lifecycle transition not allowed from the workout's current status."""

    def __init__(self, workout_id: uuid.UUID | None, current: str, action: str):
        super().__init__(f"Cannot {action} workout {workout_id}: status is {current}")
        self.workout_id = workout_id
        self.current = current
        self.action = action


class NotFoundError(ForgeError):
    def __init__(self, entity: str, entity_id: object):
        super().__init__(f"{entity} with id={entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class PersistenceError(ForgeError):
    """Save/fetch/delete failed at the storage boundary."""


class InvalidMeasurementError(ForgeError):
    """Measurement variant does not fit the exercise's tracking type."""


class PreconditionError(ForgeError):
    """Call rejected before reaching a collaborator."""


class WorkoutNotCompleteError(PreconditionError):
    def __init__(self, workout_id: uuid.UUID | None):
        super().__init__(f"Workout {workout_id} is not completed")
        self.workout_id = workout_id


class HealthBridgeError(ForgeError):
    """The health platform refused or failed a request."""
