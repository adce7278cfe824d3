"""Mirror result data model."""
from collections import Counter
from typing import Iterable, List, NamedTuple

from treemirror.domain.crawl_task import TaskOutcome


class MirrorResult(NamedTuple):
    """Aggregate of every task outcome of one mirror run.

    The CLI turns `ok` into the process exit status.
    """
    tasks: int
    downloaded: int
    linked: int
    listed: int
    removed: int
    skipped: int
    failed: int
    failures: List[TaskOutcome]

    @property
    def ok(self) -> bool:
        return self.failed == 0

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[TaskOutcome]) -> "MirrorResult":
        outcomes = list(outcomes)
        actions = Counter(o.action for o in outcomes if not o.failed)
        failures = [o for o in outcomes if o.failed]
        return cls(
            tasks=len(outcomes),
            downloaded=actions["downloaded"],
            linked=actions["linked"],
            listed=actions["listed"],
            removed=sum(o.removed for o in outcomes),
            skipped=actions["visited"] + actions["exists"],
            failed=len(failures),
            failures=failures,
        )
