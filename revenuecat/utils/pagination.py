from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from urllib.parse import unquote, urlsplit

from pydantic import TypeAdapter, ValidationError

from revenuecat.utils.exceptions import MalformedPage

T = TypeVar("T")

CURSOR_PARAM = "starting_after"


@dataclass(frozen=True)
class Page(Generic[T]):
    """One batch of items from a list endpoint.

    ``next_cursor`` is None on the final page. An empty ``items`` list with
    a cursor is still a valid, non-final page.
    """

    items: list[T]
    next_cursor: str | None
    size: int | None = None

    @property
    def has_next(self) -> bool:
        return self.next_cursor is not None

    def __len__(self) -> int:
        return len(self.items)


def extract_cursor(next_page: str | None) -> str | None:
    """Pull the ``starting_after`` token out of a ``next_page`` URL.

    Only percent-decoding is applied to the value; ``+`` is kept as a
    literal plus sign. Escapes that are not valid UTF-8 decode to lone
    surrogates, so the exact bytes can be re-encoded later.

    Raises:
        MalformedPage: If a next_page URL is present but carries no token
    """
    if not next_page:
        return None

    query = urlsplit(next_page).query
    for pair in query.split("&"):
        key, _, value = pair.partition("=")
        if unquote(key) != CURSOR_PARAM:
            continue
        token = unquote(value, errors="surrogateescape")
        if not token:
            raise MalformedPage(f"Empty '{CURSOR_PARAM}' in next_page URL: {next_page!r}")
        return token

    raise MalformedPage(f"No '{CURSOR_PARAM}' in next_page URL: {next_page!r}")


def parse_page(payload: Any, item_type: type[T], size: int | None = None) -> Page[T]:
    """Validate a ``{items, next_page}`` list body into a Page.

    Raises:
        MalformedPage: If the body is not a list envelope or an item fails validation
    """
    if not isinstance(payload, dict) or "items" not in payload:
        raise MalformedPage("List response is missing 'items'")
    if not isinstance(payload["items"], list):
        raise MalformedPage("List response 'items' is not an array")

    # Resolve the cursor first so a bad page yields nothing at all
    next_cursor = extract_cursor(payload.get("next_page"))
    try:
        items = TypeAdapter(list[item_type]).validate_python(payload["items"])
    except ValidationError as e:
        raise MalformedPage(f"List response items do not match {item_type.__name__}: {e}") from e

    return Page(items=items, next_cursor=next_cursor, size=size)
