"""
Error taxonomy and diagnostics for the mentor search client.

Transport failures and unsuccessful HTTP statuses are raised as distinct
exception types by the API client, then collapsed into a single
human-readable message by the ErrorHandler before they reach public state.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional


# Configure logging
logger = logging.getLogger(__name__)


class MentorApiError(Exception):
    """Base class for every failure talking to the mentorship backend."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class NetworkFailure(MentorApiError):
    """The request never produced an HTTP response (connection error, timeout)."""


class ServerError(MentorApiError):
    """The backend answered with a non-success HTTP status.

    Attributes:
        status: HTTP status code returned by the backend
        body: Raw response body, kept for diagnostics only
    """

    def __init__(
        self,
        message: str,
        status: int,
        url: Optional[str] = None,
        body: Optional[str] = None
    ):
        super().__init__(message, url=url)
        self.status = status
        self.body = body


class MalformedResponseError(ServerError):
    """The backend answered 2xx but the body was not a JSON object."""


class InvalidFiltersError(ValueError):
    """A MentorSearchFilters value violates one of its constraints."""


class ErrorHandler:
    """
    Converts exceptions into user-facing messages with logged diagnostics.

    The public search state only ever carries the message returned by
    describe(); the distinction between network and server failures lives
    in the log output.

    Attributes:
        default_message: Message used when an exception carries no text
    """

    def __init__(self, default_message: str = "Failed to fetch mentors"):
        self.default_message = default_message

    def describe(self, error: Exception, operation: str = "request") -> str:
        """
        Log an error with context and return the message to surface.

        Args:
            error: The exception raised by the failed operation
            operation: Short name of the operation, used in log lines

        Returns:
            Human-readable message suitable for display
        """
        self._log_error(operation, error)

        if isinstance(error, NetworkFailure):
            return f"Unable to reach the mentor service: {error}" if str(error) else self.default_message
        if isinstance(error, ServerError):
            return str(error) or f"Mentor service returned status {error.status}"
        return str(error) or self.default_message

    def diagnostics(self, error: Exception, operation: str) -> Dict[str, Any]:
        """
        Build a diagnostic context dictionary for an error.

        Args:
            error: The exception to describe
            operation: Name of the operation that failed

        Returns:
            Dictionary with timestamp, classification and request details
        """
        if isinstance(error, NetworkFailure):
            category = "network"
        elif isinstance(error, ServerError):
            category = "server"
        elif isinstance(error, InvalidFiltersError):
            category = "validation"
        else:
            category = "unexpected"

        return {
            'timestamp': datetime.now().isoformat(),
            'operation': operation,
            'category': category,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'status': getattr(error, 'status', None),
            'url': getattr(error, 'url', None),
        }

    def _log_error(self, operation: str, error: Exception) -> None:
        context = self.diagnostics(error, operation)

        logger.error(
            f"Operation failed: {operation} | "
            f"Category: {context['category']} | "
            f"Error: {context['error_type']}: {context['error_message']}"
        )
        logger.debug(f"Full error context: {context}")
