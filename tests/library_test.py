from pathlib import Path

import pytest

from bulkverify.core.library.discovery import discover_titles
from bulkverify.core.library.library_locator import (
    LibraryFoldersNotFoundError,
    is_valid_install_dir,
    library_folders_file,
    locate_libraries,
)
from bulkverify.core.library.manifest_reader import parse_manifest, read_manifest, read_manifest_fields

TF2_MANIFEST = '''"AppState"
{
\t"appid"\t\t"440"
\t"Universe"\t\t"1"
\t"LauncherPath"\t\t"C:\\\\Program Files (x86)\\\\Steam\\\\steam.exe"
\t"name"\t\t"Team Fortress 2"
\t"StateFlags"\t\t"4"
\t"installdir"\t\t"Team Fortress 2"
\t"UserConfig"
\t{
\t\t"name"\t\t"Something Else"
\t}
}
'''


def _write_manifest(apps_dir: Path, appid: str, name: str = "") -> Path:
    apps_dir.mkdir(parents=True, exist_ok=True)
    path = apps_dir / f"appmanifest_{appid}.acf"
    path.write_text(f'"AppState"\n{{\n\t"appid"\t\t"{appid}"\n\t"name"\t\t"{name}"\n}}\n', encoding="utf-8")
    return path


def test_manifest_fields_from_realistic_manifest() -> None:
    fields = read_manifest_fields(TF2_MANIFEST)
    assert fields == {"appid": "440", "name": "Team Fortress 2"}


def test_manifest_with_no_matches() -> None:
    assert read_manifest_fields('"AppState"\n{\n}\n') == {"appid": None, "name": None}
    assert parse_manifest("garbage", Path("x.acf")) is None


def test_manifest_label_case_is_ignored() -> None:
    fields = read_manifest_fields('"appID"  "620"\n"Name"  "Portal 2"\n')
    assert fields == {"appid": "620", "name": "Portal 2"}


def test_manifest_empty_name_becomes_none() -> None:
    title = parse_manifest('"appid" "228980"\n"name" ""\n', Path("appmanifest_228980.acf"))
    assert title is not None
    assert title.appid == "228980"
    assert title.name is None
    assert title.label() == "228980"


def test_read_manifest_from_disk(tmp_path) -> None:
    path = tmp_path / "appmanifest_440.acf"
    path.write_text(TF2_MANIFEST, encoding="utf-8")

    title = read_manifest(path)

    assert title.appid == "440"
    assert title.name == "Team Fortress 2"
    assert title.manifest_path == path


def test_locate_libraries_unescapes_separators(tmp_path) -> None:
    vdf = tmp_path / "libraryfolders.vdf"
    vdf.write_text(
        '"libraryfolders"\n{\n'
        '\t"0"\n\t{\n\t\t"path"  "C:\\\\Games\\\\Lib1"\n\t\t"label"  ""\n\t}\n'
        '\t"1"\n\t{\n\t\t"path"  "D:\\\\Games\\\\Lib2"\n\t}\n}\n',
        encoding="utf-8",
    )

    assert locate_libraries(vdf) == ["C:\\Games\\Lib1", "D:\\Games\\Lib2"]


def test_locate_libraries_without_entries(tmp_path) -> None:
    vdf = tmp_path / "libraryfolders.vdf"
    vdf.write_text('"libraryfolders"\n{\n}\n', encoding="utf-8")

    assert locate_libraries(vdf) == []


def test_locate_libraries_missing_file(tmp_path) -> None:
    with pytest.raises(LibraryFoldersNotFoundError):
        locate_libraries(tmp_path / "nope.vdf")


def test_library_folders_file_location(tmp_path) -> None:
    assert library_folders_file(tmp_path) == tmp_path / "steamapps" / "libraryfolders.vdf"


def test_install_dir_validation(tmp_path) -> None:
    steam = tmp_path / "Steam"
    steam.mkdir()
    assert not is_valid_install_dir(steam)
    assert not is_valid_install_dir("")
    assert not is_valid_install_dir(tmp_path / "missing")

    (steam / "steam.exe").write_bytes(b"")
    assert is_valid_install_dir(steam)
    assert not is_valid_install_dir(steam / "steam.exe")


def test_discover_titles_across_libraries(tmp_path) -> None:
    lib1 = tmp_path / "lib1"
    lib2 = tmp_path / "lib2"
    _write_manifest(lib1 / "steamapps", "570", "Dota 2")
    _write_manifest(lib1 / "steamapps", "440", "Team Fortress 2")
    _write_manifest(lib2 / "steamapps", "440", "Team Fortress 2")
    _write_manifest(lib2 / "steamapps", "620", "Portal 2")
    (lib2 / "steamapps" / "appmanifest_999.acf").write_text('"AppState"\n{\n}\n', encoding="utf-8")

    titles = list(discover_titles([str(lib1), str(tmp_path / "gone"), str(lib2)]))

    assert [t.appid for t in titles] == ["440", "570", "620"]
    assert titles[0].manifest_path.parent == lib1 / "steamapps"
