import logging

from fastapi import APIRouter, Depends, Request

from passport.auth import Principal, get_bearer_token, get_current_user
from passport.models import User
from passport.repositories import Repository, get_repository
from passport.schemas.user import PasswordChange, ProfileUpdate, UserResponse
from passport.services.identity_provider import IdentityProviderClient, get_identity_provider

router = APIRouter()
audit = logging.getLogger("passport.audit")


@router.get("", response_model=UserResponse)
async def get_user(current_user: Principal = Depends(get_current_user)):
    return UserResponse.model_validate(current_user.user)


@router.patch("/profile", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    repo: Repository = Depends(get_repository),
    current_user: Principal = Depends(get_current_user),
):
    # Role is not part of ProfileUpdate, so it cannot change here
    user = await repo.update(User, current_user.id, data.model_dump(exclude_unset=True))
    return UserResponse.model_validate(user)


@router.post("/change-password")
async def change_password(
    data: PasswordChange,
    request: Request,
    current_user: Principal = Depends(get_current_user),
    provider: IdentityProviderClient = Depends(get_identity_provider),
):
    await provider.change_password(get_bearer_token(request), data.new_password)
    audit.info("Password changed for user=%s", current_user.id)
    return {"message": "Password updated"}
