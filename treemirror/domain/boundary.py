from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from treemirror.exceptions import OutOfBoundaryError
from treemirror.services.url_normalizer import normalize_url


@dataclass(frozen=True)
class BoundaryContext:
    """Host + path prefix that decides which URLs belong to the mirror.

    Ports are ignored when comparing hosts, so the same host served on a
    different port is still in scope.
    """

    host: str
    path_prefix: str = "/"

    @classmethod
    def from_url(cls, url: str) -> "BoundaryContext":
        canonical = normalize_url(url)
        parts = urlsplit(canonical)
        return cls(host=parts.hostname or "", path_prefix=parts.path or "/")

    def contains(self, url: str) -> bool:
        try:
            parts = urlsplit(normalize_url(url))
        except ValueError:
            return False
        if (parts.hostname or "") != self.host:
            return False
        return (parts.path or "/").startswith(self.path_prefix)

    def validate(self, url: str) -> None:
        """Raise OutOfBoundaryError unless `url` is inside this boundary."""
        if not self.contains(url):
            raise OutOfBoundaryError(url, str(self))

    def __str__(self) -> str:
        return f"{self.host}{self.path_prefix}"
