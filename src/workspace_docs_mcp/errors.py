"""Exception types raised by validators and the Google API client."""

from typing import Any


class ToolArgumentError(ValueError):
    """A tool argument is missing or has the wrong shape.

    Raised by validators before any remote call is made. The message names
    the first offending field, e.g. ``Invalid fileId: expected non-empty string``.
    """


class CredentialsNotConfiguredError(RuntimeError):
    """Google OAuth credentials are not available in the environment."""


class GoogleApiError(Exception):
    """A Google REST API call returned a non-success status.

    Attributes:
        status_code: HTTP status of the failed response.
        message: Error message reported by Google, or the response reason.
        reason: Machine-readable reason from the error body, when present.
    """

    def __init__(self, status_code: int, message: str, reason: str | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.reason = reason
        super().__init__(f"{status_code} {message}")

    @classmethod
    def from_response_body(cls, status_code: int, body: Any, fallback: str) -> "GoogleApiError":
        """Build an error from a Google JSON error body.

        Google APIs return ``{"error": {"code": 404, "message": "...",
        "errors": [{"reason": "notFound"}]}}``. OAuth endpoints return
        ``{"error": "invalid_grant", "error_description": "..."}``.
        """
        message = fallback
        reason = None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                message = error.get("message") or fallback
                details = error.get("errors") or []
                if details and isinstance(details[0], dict):
                    reason = details[0].get("reason")
                reason = reason or error.get("status")
            elif isinstance(error, str):
                reason = error
                message = body.get("error_description") or error
        return cls(status_code, message, reason)
