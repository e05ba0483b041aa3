"""Error types for the Scout APM API client."""

from __future__ import annotations

from typing import Any


class ScoutError(Exception):
    """Base class for all Scout API errors; also used for generic failures."""


class AuthError(ScoutError):
    """Raised when authentication fails (e.g. invalid or missing API key)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"Authentication failed: {self.message}"


class ApiError(ScoutError):
    """Raised when the API returns an error response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: Any = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message)

    def __str__(self) -> str:
        return f"API error: {self.message}"


__all__ = [
    "ApiError",
    "AuthError",
    "ScoutError",
]
