"""
Logger exceptions.
"""
from typing import Any, Optional


class LoggingError(Exception):
    """Base exception for logger-related errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "logging_error",
        details: Optional[dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


class LoggerConfigurationError(LoggingError):
    """Raised when a logger configuration does not validate."""

    def __init__(
        self,
        message: str = "invalid logger configuration",
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None
    ):
        if field:
            details = details or {}
            details["field"] = field

        super().__init__(
            message=message,
            error_code="invalid_configuration",
            details=details
        )


class LoggerNotInitializedError(LoggingError):
    """Raised when a log method is called on a logger that was never built."""

    def __init__(self, message: str = "logger has not been initialized - panicking"):
        super().__init__(message=message, error_code="logger_not_initialized")


class LoggerPanicError(LoggingError):
    """Raised after a panic level record has been written."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message=message, error_code="logger_panic", details=details)


class LoggerSyncError(LoggingError):
    """Raised when buffered records cannot be flushed to their stream."""

    def __init__(
        self,
        message: str = "could not sync logger",
        stream: Optional[str] = None,
        details: Optional[dict[str, Any]] = None
    ):
        if stream:
            details = details or {}
            details["stream"] = stream

        super().__init__(
            message=message,
            error_code="logger_sync_failed",
            details=details
        )
