from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class MirrorConfig:
    """Settings of one mirror run.

    `root_urls` are canonical seed URLs; the boundary defaults to the first
    of them. `workers` caps simultaneous in-flight requests while
    `pool_size` sizes the thread pool that processes tasks.
    """

    root_urls: tuple
    storage_root: str
    boundary: Optional[str] = None
    workers: int = 1
    pool_size: Optional[int] = None
    dry_run: bool = False
    bind_address: Optional[str] = None
    repair_links: bool = False
    recheck_directories: bool = True
    config_path: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.root_urls:
            raise ValueError("root_urls is required")
        if not self.storage_root:
            raise ValueError("storage_root is required")
        if int(self.workers) < 1:
            raise ValueError("workers must be a positive integer")
        if self.pool_size is not None and int(self.pool_size) < 1:
            raise ValueError("pool_size must be a positive integer")
        object.__setattr__(self, "root_urls", tuple(self.root_urls))

    @property
    def boundary_url(self) -> str:
        return self.boundary or self.root_urls[0]

    @property
    def effective_pool_size(self) -> int:
        if self.pool_size is not None:
            return int(self.pool_size)
        return max(4, int(self.workers) * 4)

    def __repr__(self):
        return (
            f"<MirrorConfig roots={list(self.root_urls)} storage={self.storage_root} "
            f"workers={self.workers} dry_run={self.dry_run}>"
        )
