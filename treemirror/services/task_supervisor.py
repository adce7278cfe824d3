from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List

from treemirror.domain.crawl_task import CrawlTask, TaskOutcome

logger = logging.getLogger(__name__)


class TaskSupervisor:
    """Run a growing set of CrawlTasks on a thread pool and wait for all of them.

    The outstanding-task counter is incremented before a task is scheduled
    and decremented after it finishes. A task submits its children before it
    finishes, so the counter only reaches zero once the whole tree is done.
    Every task leaves a TaskOutcome; exceptions escaping the handler are
    recorded as failures instead of being lost in the pool.

    A supervisor is single use: `join()` shuts the pool down.
    """

    def __init__(
        self,
        handler: Callable[[CrawlTask], TaskOutcome],
        *,
        max_workers: int = 4,
        thread_name_prefix: str = "treemirror",
    ):
        self._handler = handler
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=thread_name_prefix)
        self._cond = threading.Condition()
        self._outstanding = 0
        self._outcomes: List[TaskOutcome] = []

    @property
    def outstanding(self) -> int:
        with self._cond:
            return self._outstanding

    def submit(self, task: CrawlTask) -> Future:
        with self._cond:
            self._outstanding += 1
        try:
            return self._executor.submit(self._run, task)
        except RuntimeError:
            self._finish(None)
            raise

    def _run(self, task: CrawlTask) -> TaskOutcome:
        outcome = None
        try:
            outcome = self._handler(task)
        except Exception as e:
            logger.exception("Unexpected error while handling %s", task.url)
            outcome = TaskOutcome.failure(task.url, e)
        finally:
            self._finish(outcome)
        return outcome

    def _finish(self, outcome) -> None:
        with self._cond:
            if outcome is not None:
                self._outcomes.append(outcome)
            self._outstanding -= 1
            if self._outstanding == 0:
                self._cond.notify_all()

    def join(self, timeout=None) -> List[TaskOutcome]:
        """Block until no task is outstanding, then return all outcomes."""
        with self._cond:
            finished = self._cond.wait_for(lambda: self._outstanding == 0, timeout=timeout)
            outcomes = list(self._outcomes)
        if not finished:
            raise TimeoutError(f"{self.outstanding} tasks still outstanding")
        self._executor.shutdown(wait=True)
        return outcomes
