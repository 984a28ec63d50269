"""
Error handling module for the mentor search client.

Provides the backend error taxonomy and user-facing message conversion.
"""

from .error_handler import (
    ErrorHandler,
    InvalidFiltersError,
    MalformedResponseError,
    MentorApiError,
    NetworkFailure,
    ServerError,
)

__all__ = [
    'ErrorHandler',
    'InvalidFiltersError',
    'MalformedResponseError',
    'MentorApiError',
    'NetworkFailure',
    'ServerError',
]
