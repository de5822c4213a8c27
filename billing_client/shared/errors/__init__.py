from .base import (
    DEFAULT_ERROR_MESSAGE,
    AppError,
    AuthenticationFailed,
    MalformedPersistedSession,
    RequestFailed,
    ValidationError,
)
from .validation import first_error_message, format_pydantic_errors

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "AppError",
    "AuthenticationFailed",
    "MalformedPersistedSession",
    "RequestFailed",
    "ValidationError",
    "first_error_message",
    "format_pydantic_errors",
]
