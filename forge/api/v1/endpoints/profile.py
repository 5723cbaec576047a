"""Local profile: preferences, units and lifetime stats."""

from fastapi import APIRouter, Depends

from forge.api.deps import get_current_user, get_store
from forge.models.user import ForgeUser
from forge.repositories.sqlalchemy_store import SqlAlchemyWorkoutStore
from forge.schemas.profile import ProfileRead, ProfileUpdate
from forge.services.users import update_profile

router = APIRouter()


@router.get("", response_model=ProfileRead)
async def get_profile(user: ForgeUser = Depends(get_current_user)):
    return user


@router.patch("", response_model=ProfileRead)
async def patch_profile(
    payload: ProfileUpdate,
    store: SqlAlchemyWorkoutStore = Depends(get_store),
    user: ForgeUser = Depends(get_current_user),
):
    """Change preferences. Stats are read-only here."""
    return await update_profile(store, user, **payload.model_dump(exclude_unset=True))
