"""
Custom exceptions for the scrape pipeline with structured error context.

Each exception carries a human-readable message plus a context dictionary
(page index, status code, table name, ...) for logging and for the run's
error list.

Exception Hierarchy:
    ScraperError (base)
    ├── RemoteApiError
    │   ├── ApiTransportError
    │   ├── ApiStatusError
    │   └── ApiEnvelopeError
    ├── PersistenceError
    └── ConfigurationError

RemoteApiError and PersistenceError are recovered page by page inside the
scrape loop. Everything else escapes the loop and fails the invocation.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ScraperError(Exception):
    """
    Base exception for all scrape-related errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (page, api_url, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        """Format error message with context, for log lines."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += (
                f" | Caused by: {type(self.original_exception).__name__}: "
                f"{self.original_exception}"
            )

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Remote API Errors
# ============================================================================

class RemoteApiError(ScraperError):
    """
    Base exception for a page fetch that did not yield a usable envelope.

    Context should include:
        - api_url: The API endpoint that failed
        - page: Page index being fetched
    """
    pass


class ApiTransportError(RemoteApiError):
    """The HTTP call itself failed (connection error, timeout)."""
    pass


class ApiStatusError(RemoteApiError):
    """
    The API answered with a non-success HTTP status.

    Context should include:
        - status_code: HTTP status code
        - response_body: Response body (truncated)
    """
    pass


class ApiEnvelopeError(RemoteApiError):
    """
    The response body is not a usable envelope: not JSON, success=false,
    or missing/invalid pagination data.

    Context should include:
        - code: API result code (when success=false)
    """
    pass


# ============================================================================
# Persistence Errors
# ============================================================================

class PersistenceError(ScraperError):
    """
    Exception raised when the store rejects or fails a batch upsert.

    Context should include:
        - operation: Type of database operation (UPSERT)
        - table_name: Name of the table
        - batch_size: Number of rows in the failed batch
    """
    pass


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(ScraperError):
    """
    Exception raised when required external configuration is missing.

    Context should include:
        - setting: Name of the missing setting
    """
    pass
