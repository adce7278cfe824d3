"""Custom exceptions for treemirror services."""


class MirrorError(Exception):
    """Base class for all errors raised while mirroring."""


class NetworkError(MirrorError):
    """A fetch failed or ended in a non-2xx status."""


class HttpFetchError(NetworkError):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class HttpStatusError(NetworkError):
    """Raised when the final response of a fetch is not 2xx."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"URL {url} got {status_code}")


class OutOfBoundaryError(MirrorError):
    """Raised when a (possibly redirected) URL leaves the mirrored host/path."""

    def __init__(self, url: str, boundary: str):
        self.url = url
        self.boundary = boundary
        super().__init__(f"URL {url} is outside of boundary {boundary}")


class MirrorFilesystemError(MirrorError):
    """Raised when creating, writing, linking or removing a local path fails."""

    def __init__(self, path: str, original: Exception):
        self.path = path
        self.original = original
        super().__init__(f"Filesystem operation failed for {path}: {original}")


class ParseError(MirrorError):
    """Startup-time configuration or seed errors."""


class SeedUrlError(ParseError):
    """Raised when a root URL cannot be used as a crawl seed."""

    def __init__(self, url: str, reason: str = "is not an absolute http(s) URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Seed URL '{url}' {reason}")


class ConfigNotFoundError(ParseError):
    """Raised when a requested mirror job file cannot be found or read."""

    def __init__(self, config_path: str, reason: str = "not found"):
        self.config_path = config_path
        self.reason = reason
        super().__init__(f"Config '{config_path}' {reason}")
