"""Tests for the bootstrap config file and the key-value store."""

from database.db_manager import DatabaseManager
from utils.app_config import get_storage_folder, load_config, save_config, set_storage_folder


def test_missing_or_corrupt_config_is_empty(tmp_path) -> None:
    """load_config never raises on bad files."""
    path = tmp_path / "config.json"
    if load_config(path) != {}:
        msg = "Missing config should be empty"
        raise AssertionError(msg)
    path.write_text("{broken", encoding="utf-8")
    if load_config(path) != {}:
        msg = "Corrupt config should be empty"
        raise AssertionError(msg)
    path.write_text("[1, 2]", encoding="utf-8")
    if load_config(path) != {}:
        msg = "Non-object config should be empty"
        raise AssertionError(msg)


def test_storage_folder_round_trip(tmp_path) -> None:
    """The folder is saved, read back and cleared, leaving no temp file."""
    path = tmp_path / "nested" / "config.json"
    set_storage_folder("/data/financas", path)
    if get_storage_folder(path) != "/data/financas":
        msg = "Expected the saved folder"
        raise AssertionError(msg)
    if path.with_suffix(".tmp").exists():
        msg = "Temporary file should be gone after saving"
        raise AssertionError(msg)
    set_storage_folder(None, path)
    if get_storage_folder(path) is not None:
        msg = "Folder should be cleared"
        raise AssertionError(msg)


def test_save_config_keeps_other_keys(tmp_path) -> None:
    """Unrelated settings survive a storage folder change."""
    path = tmp_path / "config.json"
    save_config({"storage_folder": "/a", "other": 1}, path)
    set_storage_folder("/b", path)
    if load_config(path) != {"storage_folder": "/b", "other": 1}:
        msg = f"Unexpected config {load_config(path)}"
        raise AssertionError(msg)


def test_open_creates_store_in_folder(tmp_path) -> None:
    """Opening a store in a new folder creates it and the schema."""
    folder = tmp_path / "store"
    db = DatabaseManager.open(str(folder))
    try:
        db.set_item("k", "v")
        if db.get_item("k") != "v" or "appearance_mode" not in db.keys():
            msg = f"Unexpected keys {db.keys()}"
            raise AssertionError(msg)
        db.remove_item("k")
        if db.get_item("k", "gone") != "gone":
            msg = "Removed keys should return the default"
            raise AssertionError(msg)
    finally:
        db.close()
    if not folder.is_dir():
        msg = "Store folder should exist"
        raise AssertionError(msg)
