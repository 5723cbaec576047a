"""Units on the profile, session metrics and mood on workouts, personal record counter.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from forge.core.enums import DistanceUnit, MoodLevel, WeightUnit


revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_ENUMS = (sa.Enum(WeightUnit), sa.Enum(DistanceUnit), sa.Enum(MoodLevel))


def upgrade() -> None:
    bind = op.get_bind()
    for enum in _ENUMS:
        enum.create(bind, checkfirst=True)

    with op.batch_alter_table("forge_users") as batch:
        batch.add_column(
            sa.Column("weight_unit", sa.Enum(WeightUnit), nullable=False, server_default=WeightUnit.POUNDS.name)
        )
        batch.add_column(
            sa.Column("distance_unit", sa.Enum(DistanceUnit), nullable=False, server_default=DistanceUnit.MILES.name)
        )
        batch.add_column(sa.Column("personal_records", sa.Integer(), nullable=False, server_default="0"))

    with op.batch_alter_table("workouts") as batch:
        batch.add_column(sa.Column("calories_burned", sa.Integer(), nullable=True))
        batch.add_column(sa.Column("average_heart_rate", sa.Integer(), nullable=True))
        batch.add_column(sa.Column("max_heart_rate", sa.Integer(), nullable=True))
        batch.add_column(sa.Column("distance", sa.Float(), nullable=True))
        batch.add_column(sa.Column("elevation_gain", sa.Float(), nullable=True))
        batch.add_column(sa.Column("pre_workout_mood", sa.Enum(MoodLevel), nullable=True))
        batch.add_column(sa.Column("post_workout_mood", sa.Enum(MoodLevel), nullable=True))
        batch.add_column(sa.Column("rating", sa.Integer(), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("workouts") as batch:
        for column in (
            "rating",
            "post_workout_mood",
            "pre_workout_mood",
            "elevation_gain",
            "distance",
            "max_heart_rate",
            "average_heart_rate",
            "calories_burned",
        ):
            batch.drop_column(column)

    with op.batch_alter_table("forge_users") as batch:
        batch.drop_column("personal_records")
        batch.drop_column("distance_unit")
        batch.drop_column("weight_unit")

    bind = op.get_bind()
    for enum in _ENUMS:
        enum.drop(bind, checkfirst=True)
