from typing import Optional


class StorefrontError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UnauthorizedError(StorefrontError):
    status_code = 401


class ForbiddenError(StorefrontError):
    status_code = 403


class NotFoundError(StorefrontError):
    status_code = 404


class DuplicateEmailError(StorefrontError):
    status_code = 400

    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists")
        self.email = email


class ValidationError(StorefrontError):
    status_code = 400


class DataIntegrityError(StorefrontError):
    status_code = 500


class ConnectionFailureError(StorefrontError):
    status_code = 503
