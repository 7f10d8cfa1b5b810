from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlencode

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class Endpoint:
    """Declarative description of one API operation.

    Services declare a table of these instead of hand-writing request code:

        LIST = Endpoint("list_customers", "GET", "/v2/projects/{project_id}/customers",
                        query=("limit", "starting_after", "search"),
                        response=Customer, paginated=True)

    For paginated endpoints ``response`` is the item type, not the envelope.
    """

    name: str
    method: str
    path: str
    query: tuple[str, ...] = ()
    body: type | None = None
    response: Any = None
    paginated: bool = False
    raw: bool = False

    @property
    def placeholders(self) -> list[str]:
        return _PLACEHOLDER.findall(self.path)

    def render_path(self, **path_params: str) -> str:
        """Substitute path placeholders, percent-encoding each value.

        Raises:
            ValueError: If a placeholder is missing, empty, or unexpected
        """
        expected = set(self.placeholders)
        unknown = set(path_params) - expected
        if unknown:
            raise ValueError(f"{self.name}: unknown path parameter(s) {sorted(unknown)}")

        def _sub(match: re.Match[str]) -> str:
            key = match.group(1)
            value = path_params.get(key)
            if value is None or str(value) == "":
                raise ValueError(f"{self.name}: path parameter '{key}' is required")
            return quote(str(value), safe="")

        return _PLACEHOLDER.sub(_sub, self.path)

    def build_query(self, **values: Any) -> list[tuple[str, str]]:
        """Turn keyword values into ordered query pairs.

        None values are dropped so an absent cursor never reaches the wire.
        Booleans become ``true``/``false`` and sequences repeat the key.

        Raises:
            ValueError: If a key is not declared for this endpoint
        """
        unknown = set(values) - set(self.query)
        if unknown:
            raise ValueError(f"{self.name}: unknown query parameter(s) {sorted(unknown)}")

        pairs: list[tuple[str, str]] = []
        for key in self.query:
            value = values.get(key)
            if value is None:
                continue
            if isinstance(value, (list, tuple)):
                pairs.extend((key, _format(v)) for v in value)
            else:
                pairs.append((key, _format(value)))
        return pairs

    def target(self, path_params: dict[str, str] | None = None, query: dict[str, Any] | None = None) -> str:
        """Render ``path?query`` for this endpoint.

        The query string is encoded here rather than by httpx, whose encoder
        leaves existing ``%xx`` sequences alone. Every value is encoded exactly
        once, so cursor tokens reach the server byte-for-byte, including
        bytes that are not valid UTF-8.
        """
        path = self.render_path(**(path_params or {}))
        pairs = self.build_query(**(query or {}))
        if not pairs:
            return path
        return f"{path}?{urlencode(pairs, safe='', errors='surrogateescape', quote_via=quote)}"


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
