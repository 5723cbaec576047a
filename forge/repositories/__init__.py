"""Persistence collaborators: the store port and its SQLAlchemy implementation."""

from forge.repositories.base import WorkoutStore
from forge.repositories.sqlalchemy_store import SqlAlchemyWorkoutStore

__all__ = ["SqlAlchemyWorkoutStore", "WorkoutStore"]
