import threading
from typing import Optional

from treemirror.domain.boundary import BoundaryContext
from treemirror.domain.config import MirrorConfig
from treemirror.domain.crawl_task import CrawlTask
from treemirror.domain.visited_tracker import VisitedTracker


class MirrorSession:
    """
    Shared state of one mirror run.

    Everything tasks of the same run must agree on lives here and is passed
    explicitly to every task: the boundary, the visited tracker, the fetch
    limiter and the supervisor that schedules child tasks. Two sessions
    never share any of these, so independent runs can execute side by side.
    """

    def __init__(
        self,
        config: MirrorConfig,
        boundary: Optional[BoundaryContext] = None,
        visited_tracker: Optional[VisitedTracker] = None,
        fetch_limiter: Optional[threading.BoundedSemaphore] = None,
        supervisor=None,
    ):
        self.config = config
        self.boundary = boundary if boundary is not None else BoundaryContext.from_url(config.boundary_url)
        self.visited_tracker = visited_tracker if visited_tracker is not None else VisitedTracker()
        self.fetch_limiter = (
            fetch_limiter if fetch_limiter is not None else threading.BoundedSemaphore(int(config.workers))
        )
        self.supervisor = supervisor

    @property
    def storage_root(self) -> str:
        return self.config.storage_root

    @property
    def dry_run(self) -> bool:
        return bool(self.config.dry_run)

    @property
    def recheck_directories(self) -> bool:
        return bool(self.config.recheck_directories)

    def claim(self, url: str) -> bool:
        """Delegate to visited tracker."""
        return self.visited_tracker.claim(url)

    def task_for(self, url: str) -> CrawlTask:
        return CrawlTask(url=url, storage_root=self.storage_root)

    def spawn(self, url: str) -> None:
        """Schedule a child task for `url` on the session supervisor."""
        if self.supervisor is None:
            raise RuntimeError("session has no supervisor attached")
        self.supervisor.submit(self.task_for(url))
