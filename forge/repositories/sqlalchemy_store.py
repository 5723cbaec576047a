"""WorkoutStore backed by an async SQLAlchemy session."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from forge.core.exceptions import PersistenceError
from forge.models.workout import Workout, WorkoutExercise

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _eager_options(model: type) -> list:
    # Async sessions cannot lazy-load, so the aggregate is always fetched whole
    if model is Workout:
        return [selectinload(Workout.exercises).selectinload(WorkoutExercise.sets)]
    if model is WorkoutExercise:
        return [selectinload(WorkoutExercise.sets)]
    return []


class SqlAlchemyWorkoutStore:
    """Each save/delete is one commit; a failed commit is rolled back and re-raised as PersistenceError."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, *entities: Any, delete: Iterable[Any] = ()) -> None:
        try:
            self.session.add_all(entities)
            for entity in delete:
                await self.session.delete(entity)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Saving %d entities failed", len(entities))
            raise PersistenceError(f"Could not save changes: {exc}") from exc

    async def fetch(
        self,
        model: type[T],
        *criteria: Any,
        order_by: Any = None,
        limit: int | None = None,
    ) -> list[T]:
        stmt = select(model).where(*criteria).options(*_eager_options(model))
        if order_by is not None:
            clauses = order_by if isinstance(order_by, (list, tuple)) else (order_by,)
            stmt = stmt.order_by(*clauses)
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.exception("Fetching %s failed", model.__name__)
            raise PersistenceError(f"Could not load {model.__name__}: {exc}") from exc
        return list(result.scalars().all())

    async def get(self, model: type[T], entity_id: uuid.UUID, *, refresh: bool = False) -> T | None:
        try:
            return await self.session.get(
                model, entity_id, options=_eager_options(model), populate_existing=refresh
            )
        except SQLAlchemyError as exc:
            logger.exception("Loading %s %s failed", model.__name__, entity_id)
            raise PersistenceError(f"Could not load {model.__name__}: {exc}") from exc

    async def delete_cascade(self, entity: Any, *, also: Iterable[Any] = ()) -> None:
        try:
            for extra in also:
                await self.session.delete(extra)
            await self.session.delete(entity)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Deleting %s failed", type(entity).__name__)
            raise PersistenceError(f"Could not delete {type(entity).__name__}: {exc}") from exc
