from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from revenuecat.utils.pagination import Page, extract_cursor

T = TypeVar("T")


class Record(BaseModel):
    """Base class for immutable API response records.

    Unknown fields are ignored so new server-side attributes never break parsing.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class RequestBody(BaseModel):
    """Base class for request bodies.

    Serialized with ``exclude_unset`` so an optional field that was never
    given is omitted, while one explicitly set to None is sent as null.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ListResponse(BaseModel, Generic[T]):
    """The ``{object: "list", items, next_page, url}`` envelope."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    object: str = "list"
    items: list[T]
    next_page: Optional[str] = None
    url: Optional[str] = None

    @property
    def next_cursor(self) -> str | None:
        return extract_cursor(self.next_page)

    def to_page(self) -> Page[T]:
        return Page(items=list(self.items), next_cursor=self.next_cursor)


class DeletedObject(Record):
    object: str
    id: str
    deleted_at: int


class MonetaryAmount(Record):
    currency: str
    gross: float
    commission: Optional[float] = None
    tax: Optional[float] = None
    proceeds: Optional[float] = None
