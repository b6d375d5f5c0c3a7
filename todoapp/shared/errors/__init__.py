from .base import (
    AppError,
    AuthenticationFailedError,
    ConfigurationError,
    ConflictError,
    DomainError,
    NotAuthenticatedError,
    NotFoundError,
    ValidationError,
)
from .http import error_response, register_error_handler

__all__ = [
    "AppError",
    "AuthenticationFailedError",
    "ConfigurationError",
    "ConflictError",
    "DomainError",
    "NotAuthenticatedError",
    "NotFoundError",
    "ValidationError",
    "error_response",
    "register_error_handler",
]
