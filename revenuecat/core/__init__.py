from revenuecat.core.collection import PagedCollection
from revenuecat.core.endpoint import Endpoint
from revenuecat.core.client import RevenueCatClient
from revenuecat.core.connection import connect, disconnect, disconnect_all, get_client

__all__ = [
    "PagedCollection",
    "Endpoint",
    "RevenueCatClient",
    "connect",
    "disconnect",
    "disconnect_all",
    "get_client",
]
