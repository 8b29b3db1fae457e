"""User and authentication DTOs"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from .base import BaseResponse


class UserResponse(BaseResponse):
    name: str
    email: str
    is_admin: bool = False


class UserRegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class UserLoginRequest(BaseModel):
    email: str
    password: str


class UserAuthResponse(UserResponse):
    token: str


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=1, max_length=72)


class AdminUserUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = None
