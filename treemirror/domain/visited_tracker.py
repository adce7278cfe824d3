import threading


class VisitedTracker:
    """
    Thread-safe set of canonical URLs that are being or have been crawled.

    `claim()` is the gate of the whole crawl: for any number of concurrent
    callers with the same URL exactly one gets True, and only that caller
    goes on to fetch it. Entries are never evicted during a run.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._visited: "set[str]" = set()

    def claim(self, url: str) -> bool:
        """Mark `url` as visited; return True only for the first claim."""
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True
