import logging
import os

from treemirror.domain.config import MirrorConfig
from treemirror.domain.crawl_task import CrawlTask, TaskOutcome
from treemirror.domain.http_response import HttpResponse
from treemirror.domain.mirror_result import MirrorResult
from treemirror.domain.mirror_session import MirrorSession
from treemirror.exceptions import (
    HttpStatusError,
    MirrorFilesystemError,
    NetworkError,
    OutOfBoundaryError,
)
from treemirror.services.atomic_writer import AtomicFileWriter
from treemirror.services.directory_reconciler import existing_directories, reconcile
from treemirror.services.fetcher import Fetcher
from treemirror.services.http_service import is_html
from treemirror.services.link_extractor import LinkExtractor
from treemirror.services.listing_builder import build_remote_entries
from treemirror.services.local_listing import read_local_entries, remove_local_entry
from treemirror.services.symlink_mapper import SymlinkMapper
from treemirror.services.task_supervisor import TaskSupervisor
from treemirror.services.url_normalizer import normalize_url, relative_path

logger = logging.getLogger(__name__)


class MirrorExecutor:
    """Mirror a remote directory tree given configured collaborators.

    This class owns the per-URL control flow: claim, fetch under the
    concurrency cap, classify, then link, list or download. It intentionally
    does NOT construct its collaborators (that stays in the DI container).
    Each call to `mirror()` gets a fresh MirrorSession.
    """

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        link_extractor: LinkExtractor,
        atomic_writer: AtomicFileWriter,
        symlink_mapper: SymlinkMapper,
        dir_mode: int = 0o755,
    ):
        self.fetcher = fetcher
        self.link_extractor = link_extractor
        self.atomic_writer = atomic_writer
        self.symlink_mapper = symlink_mapper
        self.dir_mode = dir_mode

    def mirror(self, config: MirrorConfig) -> MirrorResult:
        if config is None:
            raise ValueError("config is required for mirror")

        roots = [normalize_url(root_url) for root_url in config.root_urls]
        session = MirrorSession(config)
        session.supervisor = TaskSupervisor(
            lambda task: self.handle(task, session),
            max_workers=config.effective_pool_size,
        )
        logger.info(
            "Mirroring %d root(s) into %s (boundary %s, workers=%s, dry_run=%s)",
            len(config.root_urls),
            config.storage_root,
            session.boundary,
            config.workers,
            config.dry_run,
        )
        for root_url in roots:
            session.spawn(root_url)

        result = MirrorResult.from_outcomes(session.supervisor.join())
        logger.info(
            "Mirror finished: %d tasks, %d downloaded, %d linked, %d removed, %d failed",
            result.tasks,
            result.downloaded,
            result.linked,
            result.removed,
            result.failed,
        )
        return result

    def handle(self, task: CrawlTask, session: MirrorSession) -> TaskOutcome:
        """Run one task to completion, spawning child tasks on the session."""
        url = task.url
        logger.info("Handling URL %s", url)
        if not session.claim(url):
            logger.info("%s visited before.", url)
            return TaskOutcome.done(url, "visited")

        try:
            response = self._fetch(url, session)
        except NetworkError as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            return TaskOutcome.failure(url, e)

        try:
            return self._dispatch(task, response, session)
        except (NetworkError, OutOfBoundaryError) as e:
            logger.warning("Skipping %s: %s", url, e)
            return TaskOutcome.failure(url, e)
        except MirrorFilesystemError as e:
            logger.error("Filesystem error while handling %s: %s", url, e)
            return TaskOutcome.failure(url, e)
        finally:
            response.close()

    def _fetch(self, url: str, session: MirrorSession) -> HttpResponse:
        # The slot covers the request only, not the body processing.
        with session.fetch_limiter:
            return self.fetcher.open(url)

    def _dispatch(self, task: CrawlTask, response: HttpResponse, session: MirrorSession) -> TaskOutcome:
        logger.info("%s: %s", response.url, response.status_code)
        session.boundary.validate(response.url)
        if not response.ok:
            raise HttpStatusError(response.url, response.status_code)

        final_url = normalize_url(response.url)
        if final_url != task.url:
            return self._handle_redirect(task, final_url, session)
        if is_html(response.content_type):
            return self._handle_listing(task, response, session)
        return self._handle_download(task, response, session)

    def _handle_redirect(self, task: CrawlTask, final_url: str, session: MirrorSession) -> TaskOutcome:
        from_rel = relative_path(task.url)
        to_rel = relative_path(final_url)
        action = "redirected"
        error = None
        if from_rel != to_rel:
            from_path = os.path.join(task.storage_root, from_rel)
            to_path = os.path.join(task.storage_root, to_rel)
            try:
                if self.symlink_mapper.ensure_link(from_path, to_path):
                    action = "linked"
            except MirrorFilesystemError as e:
                logger.error("Create symlink %s -> %s failed: %s", from_path, to_path, e)
                error = e

        logger.info("Add %s to queue", final_url)
        session.spawn(final_url)
        if error is not None:
            return TaskOutcome.failure(task.url, error, queued=1)
        return TaskOutcome.done(task.url, action, queued=1)

    def _handle_listing(self, task: CrawlTask, response: HttpResponse, session: MirrorSession) -> TaskOutcome:
        folder_rel = relative_path(task.url)
        folder_path = os.path.join(task.storage_root, folder_rel)
        self._ensure_dir(folder_path)

        hrefs = self.link_extractor.extract_hrefs(response.read_all())
        remote = build_remote_entries(task.url, hrefs)
        local = read_local_entries(task.storage_root, folder_rel)
        decision = reconcile(remote, local)
        logger.info(
            "Listed %s: %d remote, %d local, %d to fetch, %d to remove",
            task.url,
            len(remote),
            len(local),
            len(decision.to_fetch),
            len(decision.to_remove),
        )

        removed = 0
        for entry in decision.to_remove:
            full_path = os.path.join(task.storage_root, entry.rel_path)
            try:
                remove_local_entry(full_path)
            except OSError as e:
                logger.error("Failed to remove old file %s: %s", full_path, e)
            else:
                logger.info("Old file %s successfully removed.", full_path)
                removed += 1

        queue = list(decision.to_fetch)
        if session.recheck_directories:
            queue.extend(existing_directories(remote, local))
        for entry in queue:
            logger.info("Add %s to queue", entry.url)
            session.spawn(entry.url)

        return TaskOutcome.done(task.url, "listed", removed=removed, queued=len(queue))

    def _handle_download(self, task: CrawlTask, response: HttpResponse, session: MirrorSession) -> TaskOutcome:
        rel = relative_path(task.url)
        if not rel:
            raise MirrorFilesystemError(task.storage_root, ValueError("site root is not a file"))
        download_path = os.path.join(task.storage_root, rel)
        if os.path.lexists(download_path):
            logger.info("%s exists.", download_path)
            return TaskOutcome.done(task.url, "exists")

        directory, name = os.path.split(download_path)
        self._ensure_dir(directory)
        logger.info("Downloading %s -> %s", task.url, download_path)
        if session.dry_run:
            logger.info("Dry run (not actually downloading) %s, leaving an empty placeholder", task.url)
            chunks = ()
        else:
            chunks = response.iter_bytes()
        self.atomic_writer.write(directory, name, chunks)
        return TaskOutcome.done(task.url, "downloaded")

    def _ensure_dir(self, path: str) -> None:
        try:
            os.makedirs(path, mode=self.dir_mode, exist_ok=True)
        except OSError as e:
            raise MirrorFilesystemError(path, e) from e
