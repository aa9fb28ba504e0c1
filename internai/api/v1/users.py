from fastapi import APIRouter, Depends

from internai.core.dependencies import get_store
from internai.core.security import CurrentUser, get_current_user
from internai.db.store import JobStore
from internai.schemas.users import ProfileUpdateRequest, UserProfile

router = APIRouter()


@router.get("/users/me", response_model=UserProfile)
def get_profile(user: CurrentUser = Depends(get_current_user), store: JobStore = Depends(get_store)):
    return store.get_user(user.id) or UserProfile(id=user.id)


@router.put("/users/me", response_model=UserProfile)
def update_profile(
    payload: ProfileUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    store: JobStore = Depends(get_store),
):
    # Only fields present in the body change; an explicit null region clears it.
    changes = payload.model_dump(exclude_unset=True)
    for field in ("name", "email", "skills"):
        if changes.get(field) is None:
            changes.pop(field, None)
    return store.upsert_user(user.id, changes)
