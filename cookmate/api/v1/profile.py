from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from cookmate.api.deps import get_profile_repo, get_user_id
from cookmate.core.models import UserProfile
from cookmate.services.exceptions import RepoError
from cookmate.services.repo.profile_repo import JSONUserProfileRepo

router = APIRouter(tags=["profile"])

# ---- Routes ------------------------------------------------------------------

@router.get("/api/v1/profile", response_model=UserProfile)
def get_profile(
    user_id: str = Depends(get_user_id),
    repo: JSONUserProfileRepo = Depends(get_profile_repo),
):
    try:
        # A user without a saved profile gets the defaults (no personalisation)
        return repo.get_profile(user_id) or UserProfile()
    except RepoError as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.put("/api/v1/profile", response_model=UserProfile)
def update_profile(
    profile: UserProfile,
    user_id: str = Depends(get_user_id),
    repo: JSONUserProfileRepo = Depends(get_profile_repo),
):
    try:
        repo.save_profile(user_id, profile)
        return profile
    except RepoError as e:
        raise HTTPException(status_code=500, detail=str(e))
