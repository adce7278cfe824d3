"""Diff of a remote directory listing against the matching local directory."""
from typing import Iterable, List

from treemirror.domain.entries import LocalEntry, RemoteEntry, SyncDecision


def reconcile(remote: Iterable[RemoteEntry], local: Iterable[LocalEntry]) -> SyncDecision:
    """Compute which remote entries to fetch and which local entries to remove.

    Entries match on relative path and kind:

    - a local symlink matches a remote entry of either kind;
    - a local directory matches a remote directory, and also a remote entry
      without trailing slash (such hrefs usually redirect to the directory);
    - a local file only matches a remote file.

    A local file shadowing a remote directory is removed and the directory
    fetched. Matching entries are left alone; contents are never compared.
    """
    remote = list(remote)
    local = list(local)

    remote_paths = {r.rel_path for r in remote}
    remote_file_paths = {r.rel_path for r in remote if not r.is_dir}
    local_links = {entry.rel_path for entry in local if entry.is_symlink}
    local_dirs = {entry.rel_path for entry in local if entry.is_dir and not entry.is_symlink}
    local_files = {entry.rel_path for entry in local if not entry.is_dir and not entry.is_symlink}

    to_fetch = []
    seen = set()
    for r in remote:
        if r.rel_path in seen:
            continue
        seen.add(r.rel_path)
        if r.rel_path in local_links or r.rel_path in local_dirs:
            continue
        if not r.is_dir and r.rel_path in local_files:
            continue
        to_fetch.append(r)

    to_remove = []
    for entry in local:
        if entry.is_symlink or entry.is_dir:
            if entry.rel_path in remote_paths:
                continue
        elif entry.rel_path in remote_file_paths:
            continue
        to_remove.append(entry)

    return SyncDecision(to_fetch=to_fetch, to_remove=to_remove)


def existing_directories(remote: Iterable[RemoteEntry], local: Iterable[LocalEntry]) -> List[RemoteEntry]:
    """Remote entries already present locally as real directories.

    Their own contents may have changed remotely, so a full sync crawls them
    again even though reconciliation of the parent leaves them alone.
    """
    local_dirs = {entry.rel_path for entry in local if entry.is_dir and not entry.is_symlink}
    found = []
    seen = set()
    for r in remote:
        if r.rel_path in local_dirs and r.rel_path not in seen:
            seen.add(r.rel_path)
            found.append(r)
    return found
