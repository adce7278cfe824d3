from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class LocalEntry:
    """One child of a local directory, keyed by its path below the storage root."""

    rel_path: str
    is_dir: bool
    is_symlink: bool = False


@dataclass(frozen=True)
class RemoteEntry:
    """One hyperlink of a remote directory page.

    `is_dir` comes from the trailing slash of the resolved link and `url` is
    the canonical absolute URL that will be crawled if the entry is missing.
    """

    rel_path: str
    is_dir: bool
    url: str


@dataclass(frozen=True)
class SyncDecision:
    to_fetch: List[RemoteEntry] = field(default_factory=list)
    to_remove: List[LocalEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.to_fetch and not self.to_remove
