import logging

import pytest

from mixfolders.errors import DirectoryCreationFailure
from mixfolders.materializer import materialize, split_segments
from mixfolders.schemas import FolderList
from mixfolders.storage import LocalStorage


def _tree(root):
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*"))


@pytest.fixture
def project(tmp_path):
    (tmp_path / "Assets").mkdir()
    return tmp_path


class RefusingStorage(LocalStorage):
    """Refuses to create any directory whose name is in `refused`."""

    def __init__(self, base, refused):
        super().__init__(base)
        self.refused = set(refused)

    def create_directory(self, path):
        if path.rsplit("/", 1)[-1] in self.refused:
            raise PermissionError(f"permission denied: {path}")
        super().create_directory(path)


class RacingStorage(LocalStorage):
    """Another process creates the directory between the check and the create."""

    def create_directory(self, path):
        super().create_directory(path)
        raise FileExistsError(path)


def test_split_segments_skips_empty():
    assert split_segments("/Audio//BGM/") == ["Audio", "BGM"]
    assert split_segments("") == []
    assert split_segments("Physics Materials") == ["Physics Materials"]


def test_end_to_end_example(project):
    storage = LocalStorage(project)
    report = materialize(FolderList(folders=["Audio/BGM", "Audio/SE", "Sprites"]), "Assets", storage)

    assert report.ok
    assert report.created == ["Audio", "Audio/BGM", "Audio/SE", "Sprites"]
    assert report.already_present == []
    assert _tree(project / "Assets") == ["Audio", "Audio/BGM", "Audio/SE", "Sprites"]

    report = materialize(FolderList(folders=["Audio/BGM", "Textures"]), "Assets", storage)
    assert report.created == ["Textures"]
    assert report.already_present == ["Audio", "Audio/BGM"]
    assert _tree(project / "Assets") == ["Audio", "Audio/BGM", "Audio/SE", "Sprites", "Textures"]


def test_idempotent(project):
    storage = LocalStorage(project)
    config = FolderList.create_default()
    materialize(config, "Assets", storage)
    before = _tree(project)

    report = materialize(config, "Assets", storage)
    assert report.created == []
    assert _tree(project) == before


def test_only_missing_segment_created(project):
    (project / "Assets" / "A" / "B").mkdir(parents=True)
    report = materialize(FolderList(folders=["A/B/C"]), "Assets", LocalStorage(project))

    assert report.created == ["A/B/C"]
    assert report.already_present == ["A", "A/B"]
    assert [r.created for r in report.for_entry("A/B/C")] == [False, False, True]
    assert report.results[-1].path == "Assets/A/B/C"


def test_existing_content_untouched(project):
    keep = project / "Assets" / "Audio" / "theme.ogg"
    keep.parent.mkdir()
    keep.write_bytes(b"ogg")
    (project / "Assets" / "Unlisted").mkdir()

    materialize(FolderList(folders=["Audio/BGM"]), "Assets", LocalStorage(project))

    assert keep.read_bytes() == b"ogg"
    assert (project / "Assets" / "Unlisted").is_dir()


def test_order_independent(tmp_path):
    folders = ["Audio/BGM", "Sprites/UI", "Audio", "Textures/Terrain/Rock"]
    first, second = tmp_path / "first", tmp_path / "second"
    for d in (first, second):
        (d / "Assets").mkdir(parents=True)

    materialize(FolderList(folders=folders), "Assets", LocalStorage(first))
    materialize(FolderList(folders=list(reversed(folders))), "Assets", LocalStorage(second))
    assert _tree(first) == _tree(second)


def test_empty_entries_do_nothing(project):
    report = materialize(FolderList(folders=["", "/", "Sprites/"]), "Assets", LocalStorage(project))
    assert report.ok
    assert report.created == ["Sprites"]
    assert _tree(project / "Assets") == ["Sprites"]


def test_missing_root_is_created(tmp_path):
    report = materialize(FolderList(folders=["Scenes"]), "Assets", LocalStorage(tmp_path))
    assert report.created == ["Scenes"]
    assert (tmp_path / "Assets" / "Scenes").is_dir()


def test_failure_aborts_only_current_entry(project, caplog):
    storage = RefusingStorage(project, refused={"Locked"})
    config = FolderList(folders=["Audio", "Audio/Locked/Deep", "Sprites"])

    with caplog.at_level(logging.ERROR, logger="mixfolders"):
        report = materialize(config, "Assets", storage)

    assert not report.ok
    assert report.created == ["Audio", "Sprites"]
    assert not (project / "Assets" / "Audio" / "Locked").exists()

    failure = report.failures[0]
    assert failure.entry == "Audio/Locked/Deep"
    assert failure.segment == "Locked"
    assert failure.path == "Assets/Audio/Locked"
    assert "Assets/Audio/Locked" in caplog.text

    with pytest.raises(DirectoryCreationFailure):
        report.raise_for_failures()


def test_file_in_the_way_is_a_failure(project):
    (project / "Assets" / "Audio").write_text("not a folder", encoding="utf-8")
    report = materialize(FolderList(folders=["Audio/BGM"]), "Assets", LocalStorage(project))
    assert not report.ok
    assert report.failures[0].path == "Assets/Audio"
    assert (project / "Assets" / "Audio").read_text(encoding="utf-8") == "not a folder"


def test_concurrent_creation_tolerated(project):
    report = materialize(FolderList(folders=["Audio/BGM"]), "Assets", RacingStorage(project))
    assert report.ok
    assert report.already_present == ["Audio", "Audio/BGM"]
    assert (project / "Assets" / "Audio" / "BGM").is_dir()


def test_decisions_are_logged(project, caplog):
    (project / "Assets" / "Audio").mkdir()
    with caplog.at_level(logging.INFO, logger="mixfolders"):
        materialize(FolderList(folders=["Audio/BGM"]), "Assets", LocalStorage(project))
    assert "Folder already exists: Assets/Audio" in caplog.text
    assert "Created folder: Assets/Audio/BGM" in caplog.text


def test_relative_segments_rejected(project):
    storage = LocalStorage(project)
    config = FolderList(folders=["../Outside", "Audio/./BGM", "Sprites"])
    report = materialize(config, "Assets", storage)

    assert not (project / "Outside").exists()
    assert not (project / "Assets" / "Audio").exists()
    assert report.created == ["Sprites"]
    assert [f.entry for f in report.failures] == ["../Outside", "Audio/./BGM"]
    assert report.failures[0].segment == ".."
    assert report.failures[0].path == "Assets/.."
    assert report.failures[1].path == "Assets/Audio/."


def test_nested_root_is_created(tmp_path):
    report = materialize(FolderList(folders=["Maps"]), "Game/Content", LocalStorage(tmp_path))
    assert report.ok
    assert report.created == ["Maps"]
    assert (tmp_path / "Game" / "Content" / "Maps").is_dir()


def test_absolute_root(tmp_path):
    root = (tmp_path / "abs" / "Assets").as_posix()
    materialize(FolderList(folders=["Fonts"]), root, LocalStorage(tmp_path / "elsewhere"))
    assert (tmp_path / "abs" / "Assets" / "Fonts").is_dir()
    assert not (tmp_path / "elsewhere").exists()


def test_root_creation_failure(tmp_path):
    storage = RefusingStorage(tmp_path, refused={"Assets"})
    with pytest.raises(DirectoryCreationFailure) as exc:
        materialize(FolderList(folders=["Audio"]), "Assets", storage)
    assert exc.value.path == "Assets"
    assert exc.value.entry == ""
    assert not (tmp_path / "Assets").exists()
