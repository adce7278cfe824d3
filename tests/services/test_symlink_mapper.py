import os

from treemirror.services.symlink_mapper import SymlinkMapper


def test_creates_relative_symlink(tmp_path):
    mapper = SymlinkMapper()
    from_path = tmp_path / "pub" / "a"
    to_path = tmp_path / "pub" / "b"
    (tmp_path / "pub").mkdir()
    to_path.write_text("target")

    assert mapper.ensure_link(str(from_path), str(to_path))
    assert os.path.islink(from_path)
    assert os.readlink(from_path) == "b"
    assert from_path.read_text() == "target"


def test_creates_intermediate_directories(tmp_path):
    mapper = SymlinkMapper()
    from_path = tmp_path / "x" / "y" / "link"
    to_path = tmp_path / "z" / "target"

    assert mapper.ensure_link(str(from_path), str(to_path))
    assert os.readlink(from_path) == os.path.join("..", "..", "z", "target")


def test_existing_file_is_never_overwritten(tmp_path):
    (tmp_path / "a").write_text("local")
    mapper = SymlinkMapper(repair_stale=True)
    assert not mapper.ensure_link(str(tmp_path / "a"), str(tmp_path / "b"))
    assert not os.path.islink(tmp_path / "a")
    assert (tmp_path / "a").read_text() == "local"


def test_stale_link_kept_by_default(tmp_path):
    os.symlink("old", tmp_path / "a")
    mapper = SymlinkMapper()
    assert not mapper.ensure_link(str(tmp_path / "a"), str(tmp_path / "new"))
    assert os.readlink(tmp_path / "a") == "old"


def test_stale_link_repaired_when_enabled(tmp_path):
    os.symlink("old", tmp_path / "a")
    mapper = SymlinkMapper(repair_stale=True)
    assert mapper.ensure_link(str(tmp_path / "a"), str(tmp_path / "new"))
    assert os.readlink(tmp_path / "a") == "new"
    assert sorted(os.listdir(tmp_path)) == ["a"]


def test_up_to_date_link_not_touched_when_repairing(tmp_path):
    os.symlink("b", tmp_path / "a")
    mapper = SymlinkMapper(repair_stale=True)
    assert not mapper.ensure_link(str(tmp_path / "a"), str(tmp_path / "b"))
