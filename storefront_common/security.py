"""Password hashing backed by bcrypt.

Every call to :func:`hash_password` draws a fresh salt, so hashing the same
plaintext twice never yields the same stored value. Verification goes through
``bcrypt.checkpw`` which compares in constant time.
"""

from __future__ import annotations

import re

import bcrypt

from .exceptions import DataIntegrityError

DEFAULT_ROUNDS = 10
# bcrypt only reads the first 72 bytes; newer releases reject longer input
MAX_PASSWORD_BYTES = 72

_BCRYPT_HASH_RE = re.compile(r"^\$2[abxy]\$\d{2}\$[./A-Za-z0-9]{53}$")


def is_password_hash(value: object) -> bool:
    return isinstance(value, str) and bool(_BCRYPT_HASH_RE.match(value))


def check_password(password: str) -> None:
    if not password:
        raise ValueError("password must not be blank")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    check_password(password)
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Return True when ``password`` matches ``password_hash``.

    A wrong password is a plain ``False``. A stored hash that is not a bcrypt
    string means the record is corrupted and raises DataIntegrityError.
    """
    if not is_password_hash(password_hash):
        raise DataIntegrityError("Stored password hash is malformed")
    if not password or len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as exc:
        raise DataIntegrityError("Stored password hash is malformed") from exc
