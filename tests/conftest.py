"""Pytest configuration and shared fixtures: in-memory SQLite, services on a fake clock, API client."""

import os
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test DB before app imports so config/engine use it
os.environ.setdefault("DATABASE_DSN", "sqlite+aiosqlite://")

from forge.core.enums import ExerciseCategory, MuscleGroup, TrackingType, WorkoutType
from forge.db.base import Base
from forge.db.session import get_db
from forge.main import app
from forge.models import Exercise, ForgeUser
from forge.repositories import SqlAlchemyWorkoutStore
from forge.services.lifecycle import WorkoutLifecycle
from forge.services.workout_session import WorkoutSessionService

# A Monday morning
T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def store(db) -> SqlAlchemyWorkoutStore:
    return SqlAlchemyWorkoutStore(db)


@pytest.fixture
def sessions(store, clock) -> WorkoutSessionService:
    return WorkoutSessionService(store, clock=clock, default_rest_seconds=90)


@pytest.fixture
def lifecycle(store, clock) -> WorkoutLifecycle:
    return WorkoutLifecycle(store, clock=clock)


@pytest_asyncio.fixture
async def user(store) -> ForgeUser:
    user = ForgeUser(display_name="Test Athlete")
    await store.save(user)
    return user


@pytest_asyncio.fixture
async def bench_press(store) -> Exercise:
    exercise = Exercise(
        name="Bench Press",
        primary_muscle=MuscleGroup.CHEST,
        secondary_muscles=[MuscleGroup.TRICEPS.value, MuscleGroup.SHOULDERS.value],
        equipment="barbell",
        category=ExerciseCategory.COMPOUND,
        tracking_type=TrackingType.WEIGHT_AND_REPS,
    )
    await store.save(exercise)
    return exercise


@pytest_asyncio.fixture
async def squat(store) -> Exercise:
    exercise = Exercise(
        name="Back Squat",
        primary_muscle=MuscleGroup.QUADRICEPS,
        equipment="barbell",
        category=ExerciseCategory.COMPOUND,
    )
    await store.save(exercise)
    return exercise


@pytest_asyncio.fixture
async def plank(store) -> Exercise:
    exercise = Exercise(
        name="Plank",
        primary_muscle=MuscleGroup.CORE,
        equipment="bodyweight",
        tracking_type=TrackingType.TIME_ONLY,
    )
    await store.save(exercise)
    return exercise


@pytest_asyncio.fixture
async def run_5k(store) -> Exercise:
    exercise = Exercise(
        name="Outdoor Run",
        primary_muscle=MuscleGroup.CARDIO,
        tracking_type=TrackingType.DISTANCE_AND_TIME,
        category=ExerciseCategory.CARDIO,
    )
    await store.save(exercise)
    return exercise


@pytest_asyncio.fixture
async def gym_workout(sessions):
    return await sessions.create_workout(WorkoutType.GYM)


@pytest_asyncio.fixture
async def client(session_maker):
    """AsyncClient against the app with get_db bound to the per-test database."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
