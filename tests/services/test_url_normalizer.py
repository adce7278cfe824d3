import os

import pytest

from treemirror.services.url_normalizer import normalize_url, relative_path


def test_lowercases_scheme_and_host_and_drops_default_port_and_fragment():
    assert normalize_url("HTTP://Example.COM:80/a/b#frag") == "http://example.com/a/b"


def test_keeps_non_default_port():
    assert normalize_url("https://example.com:8443/x/") == "https://example.com:8443/x/"


def test_collapses_dot_segments():
    assert normalize_url("http://example.com/a/./b/../c") == "http://example.com/a/c"
    assert normalize_url("http://example.com/a/b/..") == "http://example.com/a/"
    assert normalize_url("http://example.com/../../a") == "http://example.com/a"


def test_single_trailing_slash_on_directories():
    assert normalize_url("http://example.com/dir//") == "http://example.com/dir/"
    assert normalize_url("http://example.com/dir", is_directory=True) == "http://example.com/dir/"
    assert normalize_url("http://example.com/dir/", is_directory=False) == "http://example.com/dir"


def test_empty_path_is_root():
    assert normalize_url("http://example.com") == "http://example.com/"
    assert normalize_url("http://example.com", is_directory=False) == "http://example.com/"


def test_percent_encoding_is_canonical():
    assert normalize_url("http://example.com/a b.txt") == "http://example.com/a%20b.txt"
    assert normalize_url("http://example.com/a%20b.txt") == "http://example.com/a%20b.txt"
    assert normalize_url("http://example.com/%7Euser/") == "http://example.com/~user/"


def test_query_is_kept():
    assert normalize_url("http://example.com/a?x=1#top") == "http://example.com/a?x=1"


def test_same_resource_normalizes_identically():
    variants = [
        "http://example.com/pub/a.txt",
        "HTTP://EXAMPLE.com:80/pub/./a.txt",
        "http://example.com/pub/sub/../a.txt#x",
        "http://example.com//pub/a%2Etxt",
    ]
    assert {normalize_url(v) for v in variants} == {"http://example.com/pub/a.txt"}


@pytest.mark.parametrize("url", ["/relative/path", "ftp://example.com/a", "mailto:a@b.c", ""])
def test_rejects_non_http_urls(url):
    with pytest.raises(ValueError):
        normalize_url(url)


def test_relative_path_decodes_segments():
    assert relative_path("http://example.com/pub/a%20b.txt") == os.path.join("pub", "a b.txt")
    assert relative_path("http://example.com/pub/sub/") == os.path.join("pub", "sub")
    assert relative_path("http://example.com/") == ""


def test_relative_path_never_escapes_root():
    assert relative_path("http://example.com/%2E%2E/%2E%2E/etc/passwd") == os.path.join("etc", "passwd")


def test_non_utf8_escapes_survive():
    assert normalize_url("http://h/pub/caf%E9.txt") == "http://h/pub/caf%E9.txt"
    assert normalize_url("http://h/pub/caf%e9.txt") == "http://h/pub/caf%E9.txt"
    assert normalize_url("http://h/pub/%FE") != normalize_url("http://h/pub/%FF")


def test_encoded_slash_stays_inside_segment():
    assert normalize_url("http://h/a%2fb/c") == "http://h/a%2Fb/c"
    assert normalize_url("http://h/a%2Fb") != normalize_url("http://h/a/b")


def test_utf8_names_use_one_encoding():
    assert normalize_url("http://h/pub/café.txt") == "http://h/pub/caf%C3%A9.txt"
    assert normalize_url("http://h/pub/caf%c3%a9.txt") == "http://h/pub/caf%C3%A9.txt"


def test_relative_path_keeps_raw_bytes_and_encoded_slash():
    latin = relative_path("http://h/pub/caf%E9.txt")
    assert os.fsencode(latin) == os.fsencode(os.path.join("pub", "")) + b"caf\xe9.txt"
    assert relative_path("http://h/pub/%FE") != relative_path("http://h/pub/%FF")
    assert relative_path("http://h/a%2Fb/c") == os.path.join("a%2Fb", "c")
    assert relative_path("http://h/pub/caf%C3%A9.txt") == os.path.join("pub", "café.txt")
