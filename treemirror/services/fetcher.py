from __future__ import annotations

from typing import Protocol

from treemirror.domain.http_response import HttpResponse


class Fetcher(Protocol):
    """Open a URL and return a streaming HTTP-like response.

    This is intentionally small so tests can swap in an in-memory
    implementation instead of the network.
    """

    def open(self, url: str) -> HttpResponse: ...


class HttpServiceFetcher:
    def __init__(self, http_service):
        self._http_service = http_service

    def open(self, url: str) -> HttpResponse:
        return self._http_service.open(url)
