import logging
from typing import Callable, Iterator

import requests

from treemirror.domain.http_response import HttpResponse
from treemirror.exceptions import HttpFetchError

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


def is_html(content_type) -> bool:
    """True when a Content-Type header denotes an HTML page."""
    if not content_type:
        return False
    return content_type.split(";", 1)[0].strip().lower() in HTML_CONTENT_TYPES


class HttpService:
    """
    HTTP client wrapper for streaming GETs.

    Requires http_client callable for dependency injection (usually a
    `requests.Session.get`). Redirects are followed by the client; the
    returned HttpResponse carries the final URL and a lazy body.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: float = 30, chunk_size: int = 64 * 1024):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client
        self.chunk_size = chunk_size

    def open(self, url: str) -> HttpResponse:
        """GET `url` and return as soon as the headers of the final response arrive."""
        headers = {"User-Agent": self.user_agent}
        try:
            resp = self.http_client(
                url,
                headers=headers,
                timeout=self.timeout,
                stream=True,
                allow_redirects=True,
            )
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        final_url = getattr(resp, "url", None) or url
        ct = None
        if hasattr(resp, "headers"):
            ct = resp.headers.get("Content-Type")

        return HttpResponse(
            status_code=resp.status_code,
            url=final_url,
            content_type=ct,
            body=self._iter_body(resp, final_url),
            closer=resp.close,
        )

    def _iter_body(self, resp, url: str) -> Iterator[bytes]:
        try:
            yield from resp.iter_content(chunk_size=self.chunk_size)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e
