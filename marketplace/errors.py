"""
Common Error Constants and Exceptions

Centralized error messages and the exceptions raised by the managers.
Storage backend failures are not wrapped; they reach the caller as-is.
"""

# User errors
ERROR_DUPLICATE_EMAIL = "Email already registered"
ERROR_INVALID_CREDENTIALS = "Invalid credentials"
ERROR_UNAUTHORIZED = "Unauthorized"

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"

# Generic errors
ERROR_NOT_FOUND = "Not found"


class MarketplaceError(Exception):
    """Base error for marketplace operations."""

    code = "MARKETPLACE_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class DuplicateEmailError(MarketplaceError):
    """Signup with an email that is already registered."""

    code = "DUPLICATE_EMAIL"

    def __init__(self, email: str, message: str = ERROR_DUPLICATE_EMAIL) -> None:
        super().__init__(message)
        self.email = email


class InvalidCredentialsError(MarketplaceError):
    """No user matches the (email, password) pair."""

    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = ERROR_INVALID_CREDENTIALS) -> None:
        super().__init__(message)


class NotFoundError(MarketplaceError):
    """Referenced record does not exist."""

    code = "NOT_FOUND"

    def __init__(self, record_id: str, message: str = ERROR_NOT_FOUND) -> None:
        super().__init__(message)
        self.record_id = record_id


class UnauthorizedError(MarketplaceError):
    """Operation needs an active session."""

    code = "UNAUTHORIZED"

    def __init__(self, message: str = ERROR_UNAUTHORIZED) -> None:
        super().__init__(message)


__all__ = [
    "ERROR_DUPLICATE_EMAIL",
    "ERROR_INVALID_CREDENTIALS",
    "ERROR_UNAUTHORIZED",
    "ERROR_PRODUCT_NOT_FOUND",
    "ERROR_NOT_FOUND",
    "MarketplaceError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "NotFoundError",
    "UnauthorizedError",
]
