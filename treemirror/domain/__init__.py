"""Domain objects for treemirror - explicit re-exports to satisfy linters."""
from .boundary import BoundaryContext as BoundaryContext
from .config import MirrorConfig as MirrorConfig
from .crawl_task import CrawlTask as CrawlTask
from .crawl_task import TaskOutcome as TaskOutcome
from .entries import LocalEntry as LocalEntry
from .entries import RemoteEntry as RemoteEntry
from .entries import SyncDecision as SyncDecision
from .mirror_result import MirrorResult as MirrorResult
from .mirror_session import MirrorSession as MirrorSession

__all__ = [
    "BoundaryContext",
    "MirrorConfig",
    "CrawlTask",
    "TaskOutcome",
    "LocalEntry",
    "RemoteEntry",
    "SyncDecision",
    "MirrorResult",
    "MirrorSession",
]
