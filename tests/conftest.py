import threading
import time

import pytest

from treemirror.domain.http_response import HttpResponse
from treemirror.services.atomic_writer import AtomicFileWriter
from treemirror.services.link_extractor import LinkExtractor
from treemirror.services.mirror_executor import MirrorExecutor
from treemirror.services.symlink_mapper import SymlinkMapper


def listing(*names: str) -> bytes:
    """Render an Apache-style index page linking to `names`."""
    rows = "".join(f'<a href="{name}">{name}</a>\n' for name in names)
    return (
        "<html><body><h1>Index</h1>"
        '<a href="?C=N;O=D">Name</a> <a href="?C=M;O=A">Last modified</a>\n'
        '<a href="../">Parent Directory</a>\n'
        f"{rows}</body></html>"
    ).encode("utf-8")


class FakeRemote:
    """In-memory web server standing in for the network.

    `pages` maps URL -> (status, content_type, body) and `redirects` maps
    URL -> URL; redirects are followed like requests does.
    """

    def __init__(self, latency: float = 0.0):
        self.pages = {}
        self.redirects = {}
        self.failing_bodies = set()
        self.latency = latency
        self.calls = []
        self._lock = threading.Lock()
        self._in_flight = 0
        self.max_in_flight = 0

    def directory(self, url: str, *names: str) -> None:
        self.pages[url] = (200, "text/html; charset=utf-8", listing(*names))

    def file(self, url: str, body: bytes, content_type: str = "application/octet-stream") -> None:
        self.pages[url] = (200, content_type, body)

    def open(self, url: str) -> HttpResponse:
        with self._lock:
            self.calls.append(url)
            self._in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self._in_flight)
        try:
            if self.latency:
                time.sleep(self.latency)
            final = url
            hops = 0
            while final in self.redirects and hops < 10:
                final = self.redirects[final]
                hops += 1
            status, content_type, body = self.pages.get(final, (404, "text/html", b"not found"))
            if final in self.failing_bodies:
                chunks = self._broken_body(body)
            else:
                chunks = [body]
            return HttpResponse(status_code=status, url=final, content_type=content_type, body=chunks)
        finally:
            with self._lock:
                self._in_flight -= 1

    def _broken_body(self, body: bytes):
        from treemirror.exceptions import HttpFetchError

        yield body[: len(body) // 2]
        raise HttpFetchError("http://broken", ConnectionResetError("connection reset"))

    def call_count(self, url: str) -> int:
        with self._lock:
            return self.calls.count(url)


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
def make_executor():
    def _make(fetcher, repair_links: bool = False) -> MirrorExecutor:
        return MirrorExecutor(
            fetcher=fetcher,
            link_extractor=LinkExtractor(),
            atomic_writer=AtomicFileWriter(),
            symlink_mapper=SymlinkMapper(repair_stale=repair_links),
        )
    return _make


@pytest.fixture
def make_remote():
    return FakeRemote
