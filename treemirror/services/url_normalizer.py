"""Canonical URLs and their mapping onto local relative paths.

A canonical URL has a lower-cased scheme and host, no default port, no
fragment, no `.`/`..` segments, no repeated slashes and a uniform
percent-encoding of its path. A trailing slash marks a directory.

Paths are normalized byte by byte: escapes of bytes that are not valid
UTF-8 (Latin-1 names on old servers) survive unchanged, and an encoded
`%2F` stays part of its segment.
"""
import os
from typing import List, Optional, Tuple
from urllib.parse import quote, unquote_to_bytes, urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}
_SEGMENT_SAFE = ":@!$&'()*+,;="


def _path_segments(path: str) -> Tuple[List[bytes], bool]:
    """Decode the segments of a raw URL path and resolve `.`/`..`.

    Returns the remaining segments and whether the path names a directory.
    """
    decoded = [unquote_to_bytes(seg) for seg in path.split("/")]
    trailing = decoded[-1] in (b"", b".", b"..")
    segments = []
    for seg in decoded:
        if seg in (b"", b"."):
            continue
        if seg == b"..":
            if segments:
                segments.pop()
            continue
        segments.append(seg)
    return segments, trailing


def _netloc(scheme: str, hostname: str, port: Optional[int]) -> str:
    host = f"[{hostname}]" if ":" in hostname else hostname
    if port is None or port == _DEFAULT_PORTS.get(scheme):
        return host
    return f"{host}:{port}"


def normalize_url(url: str, is_directory: Optional[bool] = None) -> str:
    """Return the canonical form of an absolute http(s) URL.

    `is_directory` forces (True) or strips (False) the trailing slash; when
    None the slash already present on the path decides.

    Raises ValueError for relative or non-http(s) URLs.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS or not parts.hostname:
        raise ValueError(f"not an absolute http(s) URL: {url!r}")

    segments, trailing = _path_segments(parts.path or "/")
    directory = trailing if is_directory is None else is_directory
    path = "/" + "/".join(quote(seg, safe=_SEGMENT_SAFE) for seg in segments)
    if directory and segments:
        path += "/"

    netloc = _netloc(scheme, parts.hostname, parts.port)
    return urlunsplit((scheme, netloc, path, parts.query, ""))


def relative_path(url: str) -> str:
    """Map a URL onto a path relative to the storage root.

    Uses the URL-decoded path segments only; host and query are ignored.
    Bytes that are not UTF-8 map onto the same bytes in the local name, and
    an encoded slash stays `%2F`. The site root maps to "".
    """
    segments, _ = _path_segments(urlsplit(url).path or "/")
    names = [seg.decode("utf-8", "surrogateescape").replace("/", "%2F") for seg in segments]
    if not names:
        return ""
    return os.path.join(*names)
