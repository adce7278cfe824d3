import pytest

from treemirror.domain.boundary import BoundaryContext
from treemirror.exceptions import OutOfBoundaryError


def test_from_url_takes_host_and_path():
    boundary = BoundaryContext.from_url("https://Example.com:8443/pub/")
    assert boundary.host == "example.com"
    assert boundary.path_prefix == "/pub/"


def test_contains_ignores_port():
    boundary = BoundaryContext.from_url("https://example.com/pub/")
    assert boundary.contains("https://example.com:8443/pub/file.txt")
    assert boundary.contains("http://example.com/pub/sub/")


def test_other_host_is_outside():
    boundary = BoundaryContext.from_url("https://example.com/pub/")
    assert not boundary.contains("https://cdn.example.com/pub/file.txt")


def test_other_path_is_outside():
    boundary = BoundaryContext.from_url("https://example.com/pub/")
    assert not boundary.contains("https://example.com/private/file.txt")
    assert not boundary.contains("https://example.com/pub/../private/file.txt")


def test_garbage_url_is_outside():
    boundary = BoundaryContext.from_url("https://example.com/")
    assert not boundary.contains("mailto:someone@example.com")


def test_validate_raises_typed_error():
    boundary = BoundaryContext.from_url("https://example.com/pub/")
    boundary.validate("https://example.com/pub/a")
    with pytest.raises(OutOfBoundaryError) as exc:
        boundary.validate("https://cdn.example.net/a")
    assert exc.value.url == "https://cdn.example.net/a"
    assert "example.com/pub/" in str(exc.value)
