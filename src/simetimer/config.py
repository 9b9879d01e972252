"""Load, save, and validate the JSON config at ~/.config/simetimer/config.json."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from simetimer.codec import FileFormat
from simetimer.errors import UnsupportedFormatError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "simetimer"
CONFIG_PATH = CONFIG_DIR / "config.json"

MIN_TABLE_SIZE = 0
MAX_TABLE_SIZE = 50

DEFAULTS: dict[str, dict[str, Any]] = {
    "file_format": {
        "value": FileFormat.PLAIN.value,
        "description": "Format for saving and loading projects: plain (tab-separated text) or byte (binary).",
    },
    "last_used_file": {
        "value": None,
        "description": "Project file last used to save or load. null = none yet.",
    },
    "load_last_file_on_startup": {
        "value": True,
        "description": "Open the last used project file when the app starts.",
    },
    "autosave": {
        "value": True,
        "description": "Save every change to the last used project file immediately.",
    },
    "ask_for_comment_on_stop": {
        "value": False,
        "description": "Ask for a comment when the clock is stopped.",
    },
    "ask_for_comment_on_cut": {
        "value": False,
        "description": "Ask for a comment when the running chunk is cut.",
    },
    "ask_for_save_on_load": {
        "value": True,
        "description": "Offer to save an unsaved project before loading another one.",
    },
    "ask_for_save_on_close": {
        "value": True,
        "description": "Offer to save an unsaved project before quitting.",
    },
    "table_size": {
        "value": 10,
        "description": f"Visible rows of the chunk table ({MIN_TABLE_SIZE}-{MAX_TABLE_SIZE}).",
    },
}


def _ensure_dir() -> None:
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)


def validate_config(values: dict[str, Any]) -> dict[str, Any]:
    """Reset out-of-range option values to their defaults. Returns *values*."""
    try:
        values["file_format"] = FileFormat.coerce(values.get("file_format")).value
    except UnsupportedFormatError:
        logger.warning("Invalid file_format %r in config; using default", values.get("file_format"))
        values["file_format"] = DEFAULTS["file_format"]["value"]

    size = values.get("table_size")
    if isinstance(size, bool) or not isinstance(size, int) or not MIN_TABLE_SIZE <= size <= MAX_TABLE_SIZE:
        logger.warning("Invalid table_size %r in config; using default", size)
        values["table_size"] = DEFAULTS["table_size"]["value"]

    used = values.get("last_used_file")
    if used is not None and not isinstance(used, str):
        values["last_used_file"] = None
    return values


def load_config() -> dict[str, Any]:
    """Return a flat dict of {key: value} from the config file, merged with defaults."""
    values: dict[str, Any] = {k: v["value"] for k, v in DEFAULTS.items()}

    if CONFIG_PATH.exists():
        try:
            raw = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
            for key, entry in raw.items():
                if key.startswith("_"):
                    continue
                if isinstance(entry, dict) and "value" in entry:
                    values[key] = entry["value"]
                else:
                    values[key] = entry
        except (json.JSONDecodeError, OSError, AttributeError) as exc:
            logger.warning("Could not read config at %s: %s", CONFIG_PATH, exc)

    return validate_config(values)


def save_config(values: dict[str, Any]) -> None:
    """Write current values back to the config file, preserving descriptions."""
    _ensure_dir()
    data: dict[str, Any] = {
        "_description": "SimeTimer configuration. Edit values below; descriptions are for reference."
    }
    for key, meta in DEFAULTS.items():
        data[key] = {
            "value": values.get(key, meta["value"]),
            "description": meta["description"],
        }
    CONFIG_PATH.write_text(
        json.dumps(data, indent=4, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    logger.info("Config saved to %s", CONFIG_PATH)


def get(key: str) -> Any:
    """Convenience: load config and return one value."""
    return load_config()[key]


def file_format(values: dict[str, Any]) -> FileFormat:
    return FileFormat.coerce(values.get("file_format", DEFAULTS["file_format"]["value"]))


def init_config_if_missing() -> bool:
    """Create default config file if it doesn't exist. Return True if created."""
    if CONFIG_PATH.exists():
        return False
    defaults = {k: v["value"] for k, v in DEFAULTS.items()}
    save_config(defaults)
    return True
