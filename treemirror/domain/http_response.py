from typing import Callable, Iterable, Iterator, NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Response from HTTP fetch operation.

    `url` is the final URL after redirects; `body` is consumed at most once.
    """
    status_code: int
    url: str
    content_type: Optional[str] = None
    body: Iterable[bytes] = ()
    closer: Optional[Callable[[], None]] = None

    @property
    def ok(self) -> bool:
        return 200 <= int(self.status_code) < 300

    def iter_bytes(self) -> Iterator[bytes]:
        for chunk in self.body:
            if chunk:
                yield chunk

    def read_all(self) -> bytes:
        return b"".join(self.iter_bytes())

    def close(self) -> None:
        if self.closer is not None:
            self.closer()
