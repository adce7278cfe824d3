import logging
import posixpath
from typing import Iterable, List
from urllib.parse import urljoin, urlsplit

from treemirror.domain.entries import RemoteEntry
from treemirror.services.url_normalizer import normalize_url, relative_path

logger = logging.getLogger(__name__)


def build_remote_entries(directory_url: str, hrefs: Iterable[str]) -> List[RemoteEntry]:
    """Turn the hrefs of a listing page into the directory's remote entries.

    Hrefs resolve against `directory_url` exactly as fetched, the way a
    browser would. Only direct children of the directory named by that URL
    are kept: same scheme and host, no query string and a parent path equal
    to the directory path. That drops parent links, column-sorting links,
    links elsewhere on the site and the sibling links of an HTML page served
    without trailing slash. The first occurrence of a path wins.
    """
    base = normalize_url(directory_url)
    base_parts = urlsplit(base)
    dir_path = urlsplit(normalize_url(base, is_directory=True)).path

    entries = []
    seen = set()
    for href in hrefs:
        if href is None or not href.strip():
            continue
        try:
            canonical = normalize_url(urljoin(base, href.strip()))
        except ValueError:
            logger.debug("Skipping (not http) %s on %s", href, base)
            continue

        parts = urlsplit(canonical)
        if parts.scheme != base_parts.scheme or parts.netloc != base_parts.netloc or parts.query:
            logger.debug("Skipping (foreign) %s on %s", canonical, base)
            continue

        parent, name = posixpath.split(parts.path.rstrip("/"))
        if not name or posixpath.join(parent, "") != dir_path:
            logger.debug("Skipping (not a child) %s on %s", canonical, base)
            continue

        rel = relative_path(canonical)
        if rel in seen:
            continue
        seen.add(rel)
        entries.append(RemoteEntry(rel_path=rel, is_dir=parts.path.endswith("/"), url=canonical))
    return entries
