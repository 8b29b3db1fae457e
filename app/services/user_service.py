"""User account service: registration, login, profile and admin management."""

import logging
from typing import List

from app.context import AppContext
from app.dtos import (
    AdminUserUpdateRequest,
    ProfileUpdateRequest,
    UserAuthResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)
from app.services.auth_service import create_access_token
from storefront_common.exceptions import (
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from storefront_common.models import User
from storefront_common.security import verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class UserService:
    def __init__(self, ctx: AppContext):
        self.ctx = ctx
        self.users = ctx.users

    def register(self, payload: UserRegisterRequest) -> UserAuthResponse:
        try:
            user = self.users.create(payload.name, payload.email, payload.password)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        return self._with_token(user)

    def login(self, payload: UserLoginRequest) -> UserAuthResponse:
        try:
            user = self.users.find_by_email(payload.email)
        except NotFoundError:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not verify_password(payload.password, user.password_hash):
            logger.info("Rejected login", extra={"user_id": str(user.id)})
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return self._with_token(user)

    def update_profile(self, user: User, payload: ProfileUpdateRequest) -> UserResponse:
        # A rejected password must not leave the other fields half-applied
        if payload.password:
            try:
                self.users.check_new_password(payload.password)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
        if payload.name is not None:
            user.name = payload.name
        if payload.email is not None:
            user.email = payload.email
        user = self.users.save(user)
        if payload.password:
            try:
                user = self.users.update_password(user, payload.password)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
        return UserResponse.from_entity(user)

    def list_users(self) -> List[UserResponse]:
        return [UserResponse.from_entity(u) for u in self.users.list_all()]

    def get_user(self, user_id: str) -> UserResponse:
        return UserResponse.from_entity(self._get(user_id))

    def admin_update(self, user_id: str, payload: AdminUserUpdateRequest) -> UserResponse:
        user = self._get(user_id)
        if payload.name is not None:
            user.name = payload.name
        if payload.email is not None:
            user.email = payload.email
        if payload.is_admin is not None:
            user.is_admin = payload.is_admin
        return UserResponse.from_entity(self.users.save(user))

    def delete_user(self, user_id: str, acting_user: User) -> None:
        user = self._get(user_id)
        if user.id == acting_user.id:
            raise ValidationError("Admins cannot delete their own account")
        self.users.delete(user.id)
        logger.info(
            "Deleted user",
            extra={"user_id": str(user.id), "deleted_by": str(acting_user.id)},
        )

    def _get(self, user_id: str) -> User:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _with_token(self, user: User) -> UserAuthResponse:
        token = create_access_token(self.ctx.settings, subject=user.id)
        return UserAuthResponse.model_validate(
            {**user.model_dump(by_alias=True, exclude={"password_hash"}), "token": token}
        )
