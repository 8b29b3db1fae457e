"""User registration, login, profile and admin management endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_context, get_current_user, require_admin
from app.context import AppContext
from app.dtos import (
    AdminUserUpdateRequest,
    ProfileUpdateRequest,
    UserAuthResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)
from app.services.user_service import UserService
from storefront_common.models import User

router = APIRouter(prefix="/users", tags=["Users"])

ACCESS_TOKEN_COOKIE = "access_token"


def _set_token_cookie(response: Response, ctx: AppContext, token: str) -> None:
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=ctx.settings.is_production,
        samesite="strict",
        max_age=ctx.settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path="/",
    )


@router.post(
    "",
    response_model=UserAuthResponse,
    response_model_by_alias=False,
    status_code=status.HTTP_201_CREATED,
)
def register_user(
    payload: UserRegisterRequest,
    response: Response,
    ctx: AppContext = Depends(get_context),
):
    result = UserService(ctx).register(payload)
    _set_token_cookie(response, ctx, result.token)
    return result


@router.post(
    "/login",
    response_model=UserAuthResponse,
    response_model_by_alias=False,
)
def login_user(
    payload: UserLoginRequest,
    response: Response,
    ctx: AppContext = Depends(get_context),
):
    result = UserService(ctx).login(payload)
    _set_token_cookie(response, ctx, result.token)
    return result


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout_user(response: Response):
    """Logout user by clearing the authentication cookie."""
    response.delete_cookie(key=ACCESS_TOKEN_COOKIE, path="/", httponly=True)


@router.get(
    "/profile",
    response_model=UserResponse,
    response_model_by_alias=False,
)
def get_profile(user: User = Depends(get_current_user)):
    return UserResponse.from_entity(user)


@router.put(
    "/profile",
    response_model=UserResponse,
    response_model_by_alias=False,
)
def update_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    ctx: AppContext = Depends(get_context),
):
    return UserService(ctx).update_profile(user, payload)


@router.get(
    "",
    response_model=List[UserResponse],
    response_model_by_alias=False,
)
def list_users(
    _: User = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    return UserService(ctx).list_users()


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    response_model_by_alias=False,
)
def get_user(
    user_id: str,
    _: User = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    return UserService(ctx).get_user(user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    response_model_by_alias=False,
)
def update_user(
    user_id: str,
    payload: AdminUserUpdateRequest,
    _: User = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    return UserService(ctx).admin_update(user_id, payload)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    admin: User = Depends(require_admin),
    ctx: AppContext = Depends(get_context),
):
    UserService(ctx).delete_user(user_id, admin)
