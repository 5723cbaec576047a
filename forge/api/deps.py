"""Shared FastAPI dependencies: store, profile, services and the loaded workout."""

import uuid

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from forge.core.config import Settings, get_settings
from forge.core.exceptions import NotFoundError
from forge.core.timeutil import get_zone
from forge.db.session import get_db
from forge.models.user import ForgeUser
from forge.models.workout import Workout
from forge.repositories.sqlalchemy_store import SqlAlchemyWorkoutStore
from forge.services.health_sync import HealthDataBridge, HealthSyncService, UnavailableHealthBridge
from forge.services.lifecycle import WorkoutLifecycle
from forge.services.subscription import FeatureGate, StaticSubscription
from forge.services.users import get_or_create_user
from forge.services.workout_session import WorkoutSessionService


def get_store(db: AsyncSession = Depends(get_db)) -> SqlAlchemyWorkoutStore:
    return SqlAlchemyWorkoutStore(db)


async def get_current_user(
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ForgeUser:
    return await get_or_create_user(store, settings)


def get_session_service(
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    user: ForgeUser = Depends(get_current_user),
) -> WorkoutSessionService:
    return WorkoutSessionService(store, default_rest_seconds=user.default_rest_seconds)


def get_lifecycle(
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    user: ForgeUser = Depends(get_current_user),
) -> WorkoutLifecycle:
    return WorkoutLifecycle(store, tz=get_zone(user.tz_name))


def get_feature_gate(settings: Settings = Depends(get_settings)) -> FeatureGate:
    return FeatureGate(StaticSubscription(settings.premium_unlocked))


def get_health_bridge() -> HealthDataBridge:
    """No platform bridge on the server; apps override this dependency."""
    return UnavailableHealthBridge()


def get_health_sync(
    bridge: HealthDataBridge = Depends(get_health_bridge),
    store: SqlAlchemyWorkoutStore = Depends(get_store),
) -> HealthSyncService:
    return HealthSyncService(bridge, store)


async def get_workout_or_404(
    workout_id: uuid.UUID,
    store: SqlAlchemyWorkoutStore = Depends(get_store),
) -> Workout:
    workout = await store.get(Workout, workout_id)
    if workout is None:
        raise NotFoundError("Workout", workout_id)
    return workout
