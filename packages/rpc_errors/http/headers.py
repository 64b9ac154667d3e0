"""QoS header adapters for the httpx and Starlette response types."""

from __future__ import annotations

import httpx
from fastapi import Response

RETRY_AFTER_HEADER = "Retry-After"
LOCATION_HEADER = "Location"


class HttpxHeadersAdapter:
    """Reads and writes headers on an ``httpx.Response``."""

    def get_first_header(self, response: httpx.Response, name: str) -> str | None:
        values = response.headers.get_list(name)
        return values[0] if values else None

    def set_header(self, response: httpx.Response, name: str, value: str) -> None:
        response.headers[name] = value


class StarletteHeadersAdapter:
    """Reads and writes headers on a Starlette/FastAPI ``Response``."""

    def get_first_header(self, response: Response, name: str) -> str | None:
        values = response.headers.getlist(name)
        return values[0] if values else None

    def set_header(self, response: Response, name: str, value: str) -> None:
        response.headers[name] = value


HTTPX_HEADERS = HttpxHeadersAdapter()
STARLETTE_HEADERS = StarletteHeadersAdapter()
