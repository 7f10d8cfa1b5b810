from __future__ import annotations

import logging
from typing import Any

from revenuecat.core.client import RevenueCatClient
from revenuecat.utils.exceptions import NotConnected

logger = logging.getLogger(__name__)

_clients: dict[str, RevenueCatClient] = {}


def connect(api_key: str | None = None, *, alias: str = "default", **options: Any) -> RevenueCatClient:
    """Create a client and register it under an alias.

    Args:
        api_key: Secret API key; falls back to ``REVENUECAT_API_KEY``.
        alias: Registry name, for working with several projects or keys.
        **options: Passed through to :class:`RevenueCatClient`.

    Returns:
        The registered RevenueCatClient.

    Raises:
        ConfigurationError: If no API key can be resolved
    """
    previous = _clients.get(alias)
    if previous is not None and not previous.is_closed:
        logger.warning(f"Replacing open client registered as '{alias}'; close it with disconnect() first")

    client = RevenueCatClient(api_key, **options)
    _clients[alias] = client
    logger.info(f"Registered RevenueCat client for {client.settings.base_url} with alias '{alias}'")
    return client


async def disconnect(alias: str = "default") -> None:
    """Close and remove a registered client.

    Args:
        alias: Registry name to disconnect
    """
    client = _clients.pop(alias, None)
    if client is not None:
        await client.aclose()
        logger.info(f"Closed RevenueCat client (alias: '{alias}')")


async def disconnect_all() -> None:
    """Close every registered client."""
    for alias in list(_clients):
        await disconnect(alias)


def get_client(alias: str = "default") -> RevenueCatClient:
    """Retrieve a registered client or raise NotConnected.

    Args:
        alias: Registry name

    Returns:
        RevenueCatClient instance

    Raises:
        NotConnected: If no client exists for the alias
    """
    try:
        return _clients[alias]
    except KeyError:
        raise NotConnected(
            f"No client registered for alias '{alias}'. Call connect() first."
        )
