"""
Error handling utilities for the story generation core.

Provides structured error payloads and custom exception classes.
"""

import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for story generation errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize API error.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            status_code: HTTP status code a surrounding service should use
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Structured error payload for callers that serialize errors."""
        payload = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(APIError):
    """Raised when input validation fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            details=details
        )


class ModelTimeoutError(APIError):
    """Raised when a model call does not settle before its deadline."""

    def __init__(self, message: str, timeout: float):
        super().__init__(
            message=message,
            error_code="MODEL_TIMEOUT",
            status_code=504,
            details={"timeout_seconds": timeout}
        )
        self.timeout = timeout


class ParseTimeoutError(APIError):
    """Raised inside the scene parser when its deadline passes."""

    def __init__(self, timeout: float):
        super().__init__(
            message=f"Story parsing timeout after {timeout:g} seconds",
            error_code="PARSE_TIMEOUT",
            status_code=500,
            details={"timeout_seconds": timeout}
        )


class StoryGenerationError(APIError):
    """
    Terminal failure of story generation.

    Raised once the attempt budget is spent or a non-retryable model error
    occurs. Callers are expected to switch to an alternate generator.
    """

    def __init__(self, attempts: int, last_error: Exception, retryable: bool = False):
        super().__init__(
            message=f"Story generation failed after {attempts} attempts: {last_error}",
            error_code="STORY_GENERATION_FAILED",
            status_code=503,
            details={
                "attempts": attempts,
                "last_error": str(last_error),
                "retryable": retryable,
            }
        )
        self.attempts = attempts
        self.last_error = last_error
