from __future__ import annotations

from revenuecat.core.client import RevenueCatClient
from revenuecat.core.connection import get_client


class BaseService:
    """Binds a group of endpoints to a client.

    When no client is given, the one registered under ``alias`` is looked
    up on each call, so a service can be created before ``connect()``.
    """

    def __init__(self, client: RevenueCatClient | None = None, *, alias: str = "default") -> None:
        self._client = client
        self._alias = alias

    @property
    def client(self) -> RevenueCatClient:
        if self._client is not None:
            return self._client
        return get_client(self._alias)
