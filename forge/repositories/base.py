"""Persistence port used by the workout core.

The core only needs to durably save an entity graph, fetch entities by simple
filters and delete an aggregate with everything it owns. Implementations must
raise PersistenceError instead of dropping failures.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class WorkoutStore(Protocol):
    async def save(self, *entities: Any, delete: Iterable[Any] = ()) -> None:
        """Persist entities (and delete the given ones) in one transaction."""
        ...

    async def fetch(
        self,
        model: type[T],
        *criteria: Any,
        order_by: Any = None,
        limit: int | None = None,
    ) -> list[T]:
        """Entities of a type matching all criteria."""
        ...

    async def get(self, model: type[T], entity_id: uuid.UUID, *, refresh: bool = False) -> T | None:
        """Entity by id; refresh=True reloads it from the database even if already in memory."""
        ...

    async def delete_cascade(self, entity: Any, *, also: Iterable[Any] = ()) -> None:
        """Delete an aggregate root, everything it owns and the `also` entities in one transaction."""
        ...
