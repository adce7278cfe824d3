import logging
import os
import uuid

from treemirror.exceptions import MirrorFilesystemError

logger = logging.getLogger(__name__)


class SymlinkMapper:
    """Represent a remote redirect as a relative local symlink.

    By default an existing entry at the link path is never touched, so a
    redirect whose target changed remotely keeps its old link. With
    `repair_stale=True`, an existing *symlink* pointing elsewhere is swapped
    atomically for the new one; files and directories are still left alone.
    """

    def __init__(self, repair_stale: bool = False, dir_mode: int = 0o755):
        self.repair_stale = bool(repair_stale)
        self.dir_mode = dir_mode

    def link_target(self, from_path: str, to_path: str) -> str:
        return os.path.relpath(to_path, os.path.dirname(from_path) or ".")

    def ensure_link(self, from_path: str, to_path: str) -> bool:
        """Create `from_path -> to_path`; return True if the filesystem changed."""
        target = self.link_target(from_path, to_path)
        if os.path.lexists(from_path):
            if self.repair_stale and os.path.islink(from_path) and os.readlink(from_path) != target:
                return self._replace_link(from_path, target)
            logger.debug("%s exists, keeping it", from_path)
            return False

        parent = os.path.dirname(from_path)
        try:
            if parent:
                os.makedirs(parent, mode=self.dir_mode, exist_ok=True)
            os.symlink(target, from_path)
        except FileExistsError:
            # created concurrently by another task
            return False
        except OSError as e:
            raise MirrorFilesystemError(from_path, e) from e
        logger.info("Created symlink %s -> %s", from_path, target)
        return True

    def _replace_link(self, from_path: str, target: str) -> bool:
        tmp_link = f"{from_path}.{uuid.uuid4().hex}.lnk"
        try:
            os.symlink(target, tmp_link)
            os.replace(tmp_link, from_path)
        except OSError as e:
            try:
                os.unlink(tmp_link)
            except OSError:
                pass
            raise MirrorFilesystemError(from_path, e) from e
        logger.info("Repaired stale symlink %s -> %s", from_path, target)
        return True
