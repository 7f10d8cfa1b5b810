from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from revenuecat.core.collection import PagedCollection
from revenuecat.core.endpoint import Endpoint
from revenuecat.lifecycle.observability import track_request
from revenuecat.utils.exceptions import (
    ApiError,
    MalformedResponse,
    RateLimited,
    TransportError,
    error_class_for_status,
)
from revenuecat.utils.pagination import Page, parse_page
from revenuecat.utils.settings import ClientSettings, resolve_settings
from revenuecat.utils.types import Headers, PathParams, QueryParams, USER_AGENT

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RevenueCatClient:
    """Async client for the RevenueCat REST API v2.

    Owns one ``httpx.AsyncClient``. Connection pooling, timeouts and
    connection-level retries are configured on it and left to httpx.

    Usage:
        async with RevenueCatClient("sk_...") as client:
            customers = CustomerService(client)
            async for customer in customers.list("proj_1"):
                ...
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        max_pages: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        settings: ClientSettings | None = None,
    ) -> None:
        self.settings = resolve_settings(
            settings,
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            max_pages=max_pages,
        )
        if transport is None:
            transport = httpx.AsyncHTTPTransport(retries=self.settings.max_retries)

        self._http = httpx.AsyncClient(
            base_url=self.settings.base_url,
            headers={
                "Authorization": f"Bearer {self.settings.api_key.get_secret_value()}",
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
            timeout=httpx.Timeout(self.settings.timeout),
            transport=transport,
            follow_redirects=False,
        )

    def __repr__(self) -> str:
        return f"RevenueCatClient(base_url={self.settings.base_url!r})"

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> RevenueCatClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # --- Raw requests ---

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        json: Any = None,
        headers: Headers | None = None,
    ) -> httpx.Response:
        """Send one request and return the response, raising on non-2xx status."""
        async with track_request(method.lower(), method, path) as ctx:
            return await self._send(ctx, method, path, params=params, json=json, headers=headers)

    # --- Endpoint-driven requests ---

    async def call(
        self,
        endpoint: Endpoint,
        *,
        path_params: PathParams | None = None,
        query: QueryParams | None = None,
        body: BaseModel | None = None,
        headers: Headers | None = None,
    ) -> Any:
        """Execute a non-paginated endpoint.

        Returns:
            The validated ``endpoint.response`` value, None when the endpoint
            declares no response, or the raw ``httpx.Response`` for raw endpoints.
        """
        target = endpoint.target(path_params, query)
        payload = _serialize_body(endpoint, body)

        async with track_request(endpoint.name, endpoint.method, endpoint.path) as ctx:
            response = await self._send(
                ctx,
                endpoint.method,
                target,
                json=payload,
                headers=_clean_headers(headers),
            )
            if endpoint.raw:
                return response
            if endpoint.response is None:
                return None

            data = _decode(response)
            try:
                return TypeAdapter(endpoint.response).validate_python(data)
            except ValidationError as e:
                raise MalformedResponse(
                    f"{endpoint.name}: response does not match {_type_name(endpoint.response)}: {e}"
                ) from e

    async def list_page(
        self,
        endpoint: Endpoint,
        *,
        path_params: PathParams | None = None,
        query: QueryParams | None = None,
    ) -> Page[Any]:
        """Fetch one page of a paginated endpoint.

        ``query`` may hold ``starting_after``; a None cursor is left out of
        the request entirely.

        Raises:
            ValueError: If ``query["limit"]`` is given and below 1
        """
        query = query or {}
        _check_limit(query.get("limit"))
        target = endpoint.target(path_params, query)

        async with track_request(endpoint.name, endpoint.method, endpoint.path) as ctx:
            response = await self._send(ctx, endpoint.method, target)
            page = parse_page(_decode(response), endpoint.response, size=query.get("limit"))
            ctx["result_count"] = len(page.items)
        return page

    def paginate(
        self,
        endpoint: Endpoint,
        *,
        path_params: PathParams | None = None,
        limit: int | None = None,
        **filters: Any,
    ) -> PagedCollection[Any]:
        """Bind a paginated endpoint and its filters into a lazy PagedCollection.

        Nothing is sent until the collection is consumed.

        Raises:
            ValueError: If limit < 1, or a filter or path parameter is invalid
        """
        if not endpoint.paginated:
            raise ValueError(f"{endpoint.name} is not a paginated endpoint")
        _check_limit(limit)
        if "starting_after" in filters:
            raise ValueError("starting_after is managed by the collection; use page(cursor)")

        # Validate eagerly so bad input fails before any network call
        endpoint.render_path(**(path_params or {}))
        endpoint.build_query(limit=limit, **filters)

        async def fetch_page(cursor: str | None) -> Page[Any]:
            return await self.list_page(
                endpoint,
                path_params=path_params,
                query={**filters, "limit": limit, "starting_after": cursor},
            )

        return PagedCollection(fetch_page, max_pages=self.settings.max_pages, name=endpoint.name)

    # --- Internal ---

    async def _send(self, ctx: dict[str, Any], method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.TransportError as e:
            logger.warning("%s %s failed before a response: %s", method, path, e)
            raise TransportError(f"{method} {path} failed: {e}") from e

        ctx["status_code"] = response.status_code
        logger.debug("%s %s -> %d", method, path, response.status_code)
        if response.is_error:
            raise _api_error(method, path, response)
        return response


def _api_error(method: str, path: str, response: httpx.Response) -> ApiError:
    """Classify a 4xx/5xx response into the ApiError hierarchy."""
    try:
        body: Any = response.json()
    except ValueError:
        body = response.text or None
    info = body if isinstance(body, dict) else {}

    error_cls = error_class_for_status(response.status_code)
    message = info.get("message") or response.reason_phrase or "HTTP error"
    kwargs: dict[str, Any] = {
        "status_code": response.status_code,
        "error_type": info.get("type"),
        "retryable": info.get("retryable"),
        "doc_url": info.get("doc_url"),
        "backoff_ms": info.get("backoff_ms"),
        "request_id": response.headers.get("x-request-id"),
        "body": body,
    }
    if error_cls is RateLimited:
        kwargs["retry_after"] = _retry_after(response, info.get("backoff_ms"))

    logger.warning(
        "%s %s returned %d (%s): %s",
        method,
        path,
        response.status_code,
        info.get("type") or error_cls.__name__,
        message,
    )
    return error_cls(message, **kwargs)


def _retry_after(response: httpx.Response, backoff_ms: Any) -> float | None:
    """Seconds to wait, from ``Retry-After`` (delta-seconds) or the body's ``backoff_ms``."""
    header = response.headers.get("retry-after")
    if header is not None:
        try:
            return max(float(header), 0.0)
        except ValueError:
            logger.debug("Ignoring non-numeric Retry-After: %r", header)
    if isinstance(backoff_ms, (int, float)):
        return backoff_ms / 1000
    return None


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponse(
            f"Expected JSON from {response.request.method} {response.request.url.path}, "
            f"got {response.headers.get('content-type', 'no content type')}"
        ) from e


def _serialize_body(endpoint: Endpoint, body: BaseModel | None) -> dict[str, Any] | None:
    if body is None:
        if endpoint.body is not None:
            raise TypeError(f"{endpoint.name} requires a {endpoint.body.__name__} body")
        return None
    if endpoint.body is not None and not isinstance(body, endpoint.body):
        raise TypeError(
            f"{endpoint.name} expects {endpoint.body.__name__}, got {type(body).__name__}"
        )
    if hasattr(body, "to_payload"):
        return body.to_payload()
    return body.model_dump(mode="json", by_alias=True, exclude_unset=True)


def _check_limit(limit: int | None) -> None:
    if limit is not None and limit < 1:
        raise ValueError("limit must be >= 1")


def _clean_headers(headers: Headers | None) -> Headers | None:
    if not headers:
        return None
    cleaned = {key: value for key, value in headers.items() if value is not None}
    return cleaned or None


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", repr(tp))
