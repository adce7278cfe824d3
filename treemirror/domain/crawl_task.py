from typing import NamedTuple, Optional


class CrawlTask(NamedTuple):
    """One unit of crawl work: a canonical URL mirrored below `storage_root`."""
    url: str
    storage_root: str


class TaskOutcome(NamedTuple):
    """Result of running a single CrawlTask."""
    url: str
    failed: bool
    action: str
    """One of: visited, redirected, linked, listed, downloaded, exists, failed"""
    removed: int = 0
    queued: int = 0
    error: Optional[str] = None

    @classmethod
    def done(cls, url: str, action: str, *, removed: int = 0, queued: int = 0) -> "TaskOutcome":
        return cls(url=url, failed=False, action=action, removed=removed, queued=queued)

    @classmethod
    def failure(cls, url: str, error, *, action: str = "failed", queued: int = 0) -> "TaskOutcome":
        return cls(url=url, failed=True, action=action, queued=queued, error=str(error))
