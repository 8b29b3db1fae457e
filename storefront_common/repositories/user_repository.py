"""Repository for user accounts.

Owns the password hashing hook: plaintext passwords only ever enter through
:meth:`UserRepository.create` and :meth:`UserRepository.update_password`,
each of which hashes exactly once. :meth:`UserRepository.save` never touches
``password_hash``.
"""

import logging
from typing import List

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from storefront_common.exceptions import (
    DataIntegrityError,
    DuplicateEmailError,
    NotFoundError,
)
from storefront_common.models.base import utcnow
from storefront_common.models.user import User
from storefront_common.repositories.base import BaseRepository, CollectionName
from storefront_common.security import (
    DEFAULT_ROUNDS,
    check_password,
    hash_password,
    is_password_hash,
    verify_password,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository(BaseRepository[User]):
    def __init__(self, db: Database, bcrypt_rounds: int = DEFAULT_ROUNDS):
        super().__init__(db, CollectionName.USERS, User)
        self.bcrypt_rounds = bcrypt_rounds
        self.collection.create_index("email", unique=True)

    def create(
        self, name: str, email: str, password: str, is_admin: bool = False
    ) -> User:
        user = User(
            name=name,
            email=normalize_email(email),
            password_hash=self._hash(password),
            is_admin=is_admin,
        )
        user.updated_at = user.created_at
        try:
            created = self.insert_one(user)
        except DuplicateKeyError as exc:
            raise DuplicateEmailError(user.email) from exc
        logger.info("Created user", extra={"user_id": str(created.id)})
        return created

    def find_by_email(self, email: str) -> User:
        user = self.find_one({"email": normalize_email(email)})
        if user is None:
            raise NotFoundError(f"No user with email {normalize_email(email)}")
        return user

    def list_all(self) -> List[User]:
        return self.find_many({}, sort=[("created_at", -1)])

    def update_password(self, user: User, new_password: str) -> User:
        """Re-hash and persist only when the password actually changed."""
        if not new_password:
            return user
        try:
            if verify_password(new_password, user.password_hash):
                return user
        except DataIntegrityError:
            logger.warning(
                "Replacing malformed password hash", extra={"user_id": str(user.id)}
            )

        password_hash = self._hash(new_password)
        now = utcnow()
        result = self.collection.update_one(
            {"_id": user.id},
            {"$set": {"password_hash": password_hash, "updated_at": now}},
        )
        if result.matched_count == 0:
            raise NotFoundError(f"User {user.id} not found")
        user.password_hash = password_hash
        user.updated_at = now
        return user

    def save(self, user: User) -> User:
        """Persist profile fields; ``password_hash`` is left as stored."""
        if user.id is None:
            raise ValueError("Cannot save a user that was never created")
        user.email = normalize_email(user.email)
        user.mark_updated()
        try:
            result = self.collection.update_one(
                {"_id": user.id},
                {
                    "$set": {
                        "name": user.name,
                        "email": user.email,
                        "is_admin": user.is_admin,
                        "updated_at": user.updated_at,
                    }
                },
            )
        except DuplicateKeyError as exc:
            raise DuplicateEmailError(user.email) from exc
        if result.matched_count == 0:
            raise NotFoundError(f"User {user.id} not found")
        return user

    def check_new_password(self, password: str) -> None:
        """Raise ValueError for a value :meth:`update_password` would refuse."""
        if is_password_hash(password):
            raise ValueError("Refusing to hash a value that is already a password hash")
        check_password(password)

    def _hash(self, password: str) -> str:
        self.check_new_password(password)
        return hash_password(password, rounds=self.bcrypt_rounds)


__all__ = ["UserRepository", "normalize_email"]
