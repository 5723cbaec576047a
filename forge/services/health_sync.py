"""Export completed workouts to the platform health store and read daily activity back."""

from __future__ import annotations

import logging
from datetime import date
from typing import Protocol

from forge.core.enums import AuthorizationStatus
from forge.core.exceptions import HealthBridgeError, WorkoutNotCompleteError
from forge.core.timeutil import Clock, utcnow
from forge.models.workout import Workout
from forge.repositories.base import WorkoutStore
from forge.schemas.health import DailyMetrics

logger = logging.getLogger(__name__)


class HealthDataBridge(Protocol):
    """Platform health integration (HealthKit, Health Connect, ...)."""

    async def request_authorization(self) -> AuthorizationStatus: ...

    async def save_completed_workout(self, workout: Workout) -> str | None:
        """Write the workout; returns the platform's id for it when one is assigned."""
        ...

    async def fetch_daily_metrics(self, day: date) -> DailyMetrics: ...


class HealthSyncService:
    """
    Guards and records calls to a HealthDataBridge.

    Exporting a workout that is not completed is rejected with
    WorkoutNotCompleteError before the bridge is touched. Anything the bridge
    raises surfaces as HealthBridgeError.
    """

    def __init__(self, bridge: HealthDataBridge, store: WorkoutStore, *, clock: Clock = utcnow):
        self.bridge = bridge
        self.store = store
        self.clock = clock

    async def authorize(self) -> AuthorizationStatus:
        try:
            return await self.bridge.request_authorization()
        except HealthBridgeError:
            raise
        except Exception as exc:
            logger.exception("Health authorization request failed")
            raise HealthBridgeError(f"Authorization failed: {exc}") from exc

    async def export_workout(self, workout: Workout) -> Workout:
        if not workout.is_complete:
            raise WorkoutNotCompleteError(workout.id)
        try:
            external_id = await self.bridge.save_completed_workout(workout)
        except HealthBridgeError:
            raise
        except Exception as exc:
            logger.exception("Exporting workout %s to health store failed", workout.id)
            raise HealthBridgeError(f"Could not export workout {workout.id}: {exc}") from exc

        workout.synced_to_health = True
        workout.health_external_id = external_id
        workout.updated_at = self.clock()
        await self.store.save(workout)
        logger.info("Exported workout %s to health store", workout.id)
        return workout

    async def daily_metrics(self, day: date) -> DailyMetrics:
        try:
            metrics = await self.bridge.fetch_daily_metrics(day)
        except HealthBridgeError:
            raise
        except Exception as exc:
            logger.exception("Fetching health metrics for %s failed", day)
            raise HealthBridgeError(f"Could not read health metrics for {day}: {exc}") from exc
        if metrics.fetched_at is None:
            metrics = metrics.model_copy(update={"fetched_at": self.clock()})
        return metrics


class UnavailableHealthBridge:
    """Bridge used when no health platform is connected: every call is refused."""

    async def request_authorization(self) -> AuthorizationStatus:
        return AuthorizationStatus.DENIED

    async def save_completed_workout(self, workout: Workout) -> str | None:
        raise HealthBridgeError("Health data is not available on this platform")

    async def fetch_daily_metrics(self, day: date) -> DailyMetrics:
        raise HealthBridgeError("Health data is not available on this platform")
