from revenuecat.utils.exceptions import (
    RevenueCatError,
    ApiError,
    BadRequest,
    AuthenticationError,
    PermissionDenied,
    NotFound,
    Conflict,
    RateLimited,
    ServerError,
    TransportError,
    MalformedResponse,
    MalformedPage,
    PaginationLimitExceeded,
    NotConnected,
    ConfigurationError,
)
from revenuecat.utils.pagination import Page, extract_cursor, parse_page
from revenuecat.utils.settings import ClientSettings, resolve_settings
from revenuecat.utils.types import (
    QueryParams,
    PathParams,
    Headers,
    DEFAULT_MAX_PAGES,
)

__all__ = [
    "RevenueCatError",
    "ApiError",
    "BadRequest",
    "AuthenticationError",
    "PermissionDenied",
    "NotFound",
    "Conflict",
    "RateLimited",
    "ServerError",
    "TransportError",
    "MalformedResponse",
    "MalformedPage",
    "PaginationLimitExceeded",
    "NotConnected",
    "ConfigurationError",
    "Page",
    "extract_cursor",
    "parse_page",
    "ClientSettings",
    "resolve_settings",
    "QueryParams",
    "PathParams",
    "Headers",
    "DEFAULT_MAX_PAGES",
]
