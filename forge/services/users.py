"""The single local profile."""

from zoneinfo import ZoneInfoNotFoundError

from forge.core.config import Settings
from forge.core.exceptions import PreconditionError
from forge.core.timeutil import get_zone, utcnow
from forge.models.user import ForgeUser
from forge.repositories.base import WorkoutStore

# Preferences the user may change; stats are only written by the lifecycle
PROFILE_FIELDS = (
    "display_name",
    "default_rest_seconds",
    "week_starts_on_monday",
    "tz_name",
    "weight_unit",
    "distance_unit",
)


async def get_or_create_user(store: WorkoutStore, settings: Settings) -> ForgeUser:
    """First profile in the store, created from the configured defaults if there is none."""
    users = await store.fetch(ForgeUser, order_by=ForgeUser.created_at, limit=1)
    if users:
        return users[0]
    user = ForgeUser(
        default_rest_seconds=settings.default_rest_seconds,
        tz_name=settings.user_timezone,
    )
    await store.save(user)
    return user


async def update_profile(store: WorkoutStore, user: ForgeUser, **changes) -> ForgeUser:
    unknown = set(changes) - set(PROFILE_FIELDS)
    if unknown:
        raise TypeError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
    tz_name = changes.get("tz_name")
    if tz_name is not None:
        try:
            get_zone(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise PreconditionError(f"Unknown time zone {tz_name!r}") from e
    for field, value in changes.items():
        setattr(user, field, value)
    user.updated_at = utcnow()
    await store.save(user)
    return user
