from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.models import SettingsRecord
from src.utils.storage import PersistenceError, SettingsStore


def test_save_writes_all_five_string_fields(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "data.json")

    store.save_settings(SettingsRecord(webindex="http://portal", countindex="123", operatorindex="a"))

    data = json.loads((tmp_path / "data.json").read_text(encoding="utf-8"))
    assert data == {
        "webindex": "http://portal",
        "countindex": "123",
        "passwordindex": "",
        "operatorindex": "a",
        "autostartindex": "false",
    }


def test_save_then_load_returns_same_record(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "nested" / "data.json")
    record = SettingsRecord("http://portal", "学号", "pw", "d", "true")

    store.save_settings(record)

    assert store.exists()
    assert store.load_settings() == record


def test_save_overwrites_previous_record(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "data.json")
    store.save_settings(SettingsRecord(countindex="first"))
    store.save_settings(SettingsRecord(countindex="second"))

    assert store.load_settings().countindex == "second"


def test_missing_file_raises(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "data.json")

    assert not store.exists()
    with pytest.raises(PersistenceError):
        store.load_settings()


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_corrupt_file_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "data.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(PersistenceError):
        SettingsStore(path).load_settings()


def test_partial_file_loads_with_defaults(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"webindex": "http://portal"}), encoding="utf-8")

    record = SettingsStore(path).load_settings()

    assert record.webindex == "http://portal"
    assert record.autostartindex == "false"


def test_default_path_honours_config_dir_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAMPUS_AUTOLOGIN_CONFIG_DIR", str(tmp_path))

    assert SettingsStore().path == tmp_path / "data.json"


def test_unwritable_location_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    store = SettingsStore(blocker / "data.json")

    with pytest.raises(PersistenceError):
        store.save_settings(SettingsRecord())


def test_failed_replace_keeps_previous_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store = SettingsStore(tmp_path / "data.json")
    store.save_settings(SettingsRecord(countindex="kept", autostartindex="true"))

    def _interrupted(src, dst):
        raise OSError("interrupted")

    monkeypatch.setattr("src.utils.storage.os.replace", _interrupted)

    with pytest.raises(PersistenceError):
        store.save_settings(SettingsRecord(countindex="lost"))

    assert store.load_settings() == SettingsRecord(countindex="kept", autostartindex="true")
    assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


def test_save_leaves_no_temporary_files(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "data.json")

    store.save_settings(SettingsRecord(countindex="1"))
    store.save_settings(SettingsRecord(countindex="2"))

    assert [p.name for p in tmp_path.iterdir()] == ["data.json"]
