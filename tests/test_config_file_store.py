import pytest

from treemirror.exceptions import ConfigNotFoundError
from treemirror.services.config_file_store import ConfigFileStore


def test_load_yaml_dict_missing_file_raises(tmp_path):
    store = ConfigFileStore(configs_dir=str(tmp_path))
    with pytest.raises(ConfigNotFoundError) as exc:
        store.load_yaml_dict("missing.yml")
    assert exc.value.config_path == "missing.yml"


def test_load_yaml_dict_non_dict_raises(tmp_path):
    (tmp_path / "list.yml").write_text("- a\n- b\n", encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    with pytest.raises(ConfigNotFoundError):
        store.load_yaml_dict("list.yml")


def test_load_yaml_dict_invalid_yaml_raises(tmp_path):
    (tmp_path / "bad.yml").write_text(": this is not valid yaml", encoding="utf-8")
    store = ConfigFileStore(configs_dir=str(tmp_path))
    with pytest.raises(ConfigNotFoundError):
        store.load_yaml_dict("bad.yml")


def test_load_yaml_dict_dict_is_returned(tmp_path):
    (tmp_path / "ok.yml").write_text(
        "root_urls:\n  - http://example.com/pub/\nworkers: 4\n", encoding="utf-8"
    )
    store = ConfigFileStore(configs_dir=str(tmp_path))
    data = store.load_yaml_dict("ok.yml")
    assert data == {"root_urls": ["http://example.com/pub/"], "workers": 4}


def test_resolve_path_allows_absolute(tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    cfg = other / "abs.yml"
    cfg.write_text("dry_run: true\n", encoding="utf-8")

    store = ConfigFileStore(configs_dir=str(tmp_path))
    data = store.load_yaml_dict(str(cfg))
    assert data == {"dry_run": True}
