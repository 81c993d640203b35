"""
Error handling utilities for the setup wizard.

This module defines the error taxonomy for setup steps, the exceptions
steps raise internally, and a tracker that records and logs failures.
"""

import traceback
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .logging import get_logger


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification."""

    MISSING_INPUT = "missing_input"
    INVALID_CREDENTIAL = "invalid_credential"
    NETWORK = "network"
    CONFIGURATION = "configuration"


class SetupStepError(Exception):
    """Base error for failures a setup step reports as a failed status."""

    category = ErrorCategory.CONFIGURATION
    severity = ErrorSeverity.MEDIUM

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingInputError(SetupStepError):
    """A required argument was not supplied."""

    category = ErrorCategory.MISSING_INPUT
    severity = ErrorSeverity.LOW


class TokenValidationError(SetupStepError):
    """The remote service rejected the credential."""

    category = ErrorCategory.INVALID_CREDENTIAL
    severity = ErrorSeverity.MEDIUM

    def __init__(self, reason: str):
        super().__init__(f"Token invalid: {reason}")
        self.reason = reason


class ApiUnreachableError(SetupStepError):
    """The remote service could not be reached or answered garbage."""

    category = ErrorCategory.NETWORK
    severity = ErrorSeverity.HIGH

    def __init__(self, cause: Exception, secret: Optional[str] = None):
        detail = str(cause)
        if secret:
            detail = detail.replace(secret, "***")
        super().__init__(f"Cannot reach Telegram API: {detail}")
        self.cause = cause


@dataclass
class ErrorInfo:
    """Information about an error occurrence."""

    timestamp: datetime
    component: str
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    exception_type: str
    traceback: str
    context: Dict[str, Any]


class ErrorTracker:
    """
    Records errors raised during a wizard run and logs them.
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize error tracker.

        Args:
            max_errors: Maximum number of errors to keep in memory
        """
        self.max_errors = max_errors
        self.errors: List[ErrorInfo] = []
        self.error_counts: Dict[str, int] = {}
        self.logger = get_logger("error_tracker")

    def record_error(
        self,
        component: str,
        category: ErrorCategory,
        severity: ErrorSeverity,
        message: str,
        exception: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorInfo:
        """
        Record an error occurrence.

        Args:
            component: Component where error occurred
            category: Error category
            severity: Error severity
            message: Error message
            exception: Exception object if available
            context: Additional context information

        Returns:
            ErrorInfo object
        """
        error_info = ErrorInfo(
            timestamp=datetime.now(),
            component=component,
            category=category,
            severity=severity,
            message=message,
            exception_type=type(exception).__name__ if exception else "Unknown",
            traceback=(
                "".join(traceback.format_exception(type(exception), exception, exception.__traceback__))
                if exception
                else ""
            ),
            context=context or {},
        )

        self.errors.append(error_info)
        if len(self.errors) > self.max_errors:
            self.errors.pop(0)

        error_key = f"{component}.{category.value}.{severity.value}"
        self.error_counts[error_key] = self.error_counts.get(error_key, 0) + 1

        self.logger.error(
            f"Error recorded: {message}",
            extra={
                "error_component": component,
                "category": category.value,
                "severity": severity.value,
                "exception_type": error_info.exception_type,
                "context": context,
            },
        )

        return error_info

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics."""
        return {
            "total_errors": len(self.errors),
            "error_counts": self.error_counts.copy(),
            "category_breakdown": {
                category.value: len([e for e in self.errors if e.category == category])
                for category in ErrorCategory
            },
        }

    def clear(self):
        """Forget all recorded errors."""
        self.errors.clear()
        self.error_counts.clear()


# Global error tracker instance
_error_tracker: Optional[ErrorTracker] = None


def get_error_tracker() -> ErrorTracker:
    """Get global error tracker instance."""
    global _error_tracker
    if _error_tracker is None:
        _error_tracker = ErrorTracker()
    return _error_tracker
