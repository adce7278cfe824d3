import logging
import os
import shutil
from typing import List

from treemirror.domain.entries import LocalEntry
from treemirror.exceptions import MirrorFilesystemError
from treemirror.services.atomic_writer import is_temp_name

logger = logging.getLogger(__name__)


def read_local_entries(storage_root: str, folder_rel_path: str) -> List[LocalEntry]:
    """List the children of `storage_root/folder_rel_path`.

    Symlinks are reported as such and never followed, so a link created for
    a redirect is not mistaken for the directory or file it points to.
    Temporary files of downloads still in progress are left out.
    """
    folder_path = os.path.join(storage_root, folder_rel_path)
    entries = []
    try:
        with os.scandir(folder_path) as it:
            for child in it:
                if is_temp_name(child.name):
                    continue
                entries.append(
                    LocalEntry(
                        rel_path=os.path.join(folder_rel_path, child.name),
                        is_dir=child.is_dir(follow_symlinks=False),
                        is_symlink=child.is_symlink(),
                    )
                )
    except OSError as e:
        raise MirrorFilesystemError(folder_path, e) from e
    entries.sort(key=lambda e: e.rel_path)
    return entries


def remove_local_entry(path: str) -> None:
    """Delete a file, symlink or whole directory tree at `path`."""
    if os.path.islink(path) or not os.path.isdir(path):
        os.unlink(path)
    else:
        shutil.rmtree(path)
