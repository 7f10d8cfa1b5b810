from __future__ import annotations

from typing import Any


class RevenueCatError(Exception):
    """Base exception for all revenuecat client errors."""


class NotConnected(RevenueCatError):
    """Raised when no client is registered for the requested alias."""


class ConfigurationError(RevenueCatError):
    """Raised when the client cannot be configured (e.g. no API key)."""


class TransportError(RevenueCatError):
    """Raised when the request never produced an HTTP response."""


class MalformedResponse(RevenueCatError):
    """Raised when a response body cannot be decoded into the expected type."""


class MalformedPage(MalformedResponse):
    """Raised when a list response is missing items or carries an unusable cursor."""


class PaginationLimitExceeded(MalformedPage):
    """Raised when a cursor chain does not terminate."""


class ApiError(RevenueCatError):
    """Raised for any non-2xx response from the API.

    The RevenueCat error body looks like::

        {"object": "error", "type": "resource_missing", "message": "...",
         "retryable": false, "doc_url": "...", "backoff_ms": 1000}

    Every key is optional here; servers and proxies do not always send it.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        error_type: str | None = None,
        retryable: bool | None = None,
        doc_url: str | None = None,
        backoff_ms: int | None = None,
        request_id: str | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.retryable = retryable
        self.doc_url = doc_url
        self.backoff_ms = backoff_ms
        self.request_id = request_id
        self.body = body

    def __str__(self) -> str:
        label = f"{self.status_code}"
        if self.error_type:
            label += f" {self.error_type}"
        return f"[{label}] {self.message}"


class BadRequest(ApiError):
    """Raised on 400 and 422 responses."""


class AuthenticationError(ApiError):
    """Raised on 401 responses."""


class PermissionDenied(ApiError):
    """Raised on 403 responses."""


class NotFound(ApiError):
    """Raised when the resource (or cursor context) no longer exists."""


class Conflict(ApiError):
    """Raised on 409 responses."""


class RateLimited(ApiError):
    """Raised on 429 responses."""

    def __init__(self, message: str, *, retry_after: float | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(ApiError):
    """Raised on 5xx responses."""


_STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: BadRequest,
    401: AuthenticationError,
    403: PermissionDenied,
    404: NotFound,
    409: Conflict,
    422: BadRequest,
    429: RateLimited,
}


def error_class_for_status(status_code: int) -> type[ApiError]:
    """Pick the most specific ApiError subclass for an HTTP status."""
    if status_code in _STATUS_ERRORS:
        return _STATUS_ERRORS[status_code]
    if status_code >= 500:
        return ServerError
    return ApiError
