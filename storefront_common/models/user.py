"""User entity - represents a user account in the database"""

from pydantic import Field

from .base import BaseEntity


class User(BaseEntity):
    name: str = Field(..., min_length=1)
    email: str
    password_hash: str
    is_admin: bool = False
