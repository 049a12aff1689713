"""Bootstrap configuration read before the store is opened.

Holds the folder the key-value store lives in, so it cannot itself be kept
in the store. Config lives in ~/.financas/config.json.
"""
import json
import os
from pathlib import Path

from utils.logger import get_logger

CONFIG_DIR = Path.home() / ".financas"
CONFIG_FILE = CONFIG_DIR / "config.json"

logger = get_logger(__name__)


def load_config(path: Path | None = None) -> dict:
    """Returns {} on missing or corrupt file; never raises."""
    path = path or CONFIG_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(config: dict, path: Path | None = None) -> None:
    """Creates the config folder if needed; atomic write via .tmp + os.replace()."""
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, path)
    except OSError as e:
        logger.error("Could not save config %s: %s", path, e)
        tmp.unlink(missing_ok=True)
        raise


def get_storage_folder(path: Path | None = None) -> str | None:
    """Return config["storage_folder"] or None if not set."""
    return load_config(path).get("storage_folder")


def set_storage_folder(folder: str | None, path: Path | None = None) -> None:
    """Update storage_folder in config and save."""
    config = load_config(path)
    if folder is None:
        config.pop("storage_folder", None)
    else:
        config["storage_folder"] = folder
    save_config(config, path)
