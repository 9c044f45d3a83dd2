"""Configuration for lineedit. Stores settings at ~/.lineedit/config.json."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lineedit.keybindings import EDITOR_COMMANDS
from lineedit.keys import KeyId

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".lineedit"
CONFIG_FILE_NAME = "config.json"
HISTORY_SUFFIX = ".history"

DEFAULT_HISTORY_SIZE = 10


@dataclass
class EditorConfig:
    history_dir: Path | None = None
    history_size: int = DEFAULT_HISTORY_SIZE
    tab_at_start_completes: bool = False
    keybindings: dict[str, KeyId | list[KeyId]] = field(default_factory=dict)


def get_config_dir() -> Path:
    return Path(os.environ.get("LINEEDIT_CONFIG_DIR", Path.home() / CONFIG_DIR_NAME))


def get_history_dir() -> Path:
    history_dir = os.environ.get("LINEEDIT_HISTORY_DIR")
    return Path(history_dir) if history_dir else get_config_dir()


def config_from_dict(data: dict[str, Any]) -> EditorConfig:
    """Deserialize an EditorConfig from a JSON-compatible dict.

    Raises:
        ValueError: if a setting has the wrong type or an invalid value.
    """
    config = EditorConfig()

    history_size = data.get("historySize", DEFAULT_HISTORY_SIZE)
    if not isinstance(history_size, int) or isinstance(history_size, bool) or history_size < 1:
        raise ValueError(f"historySize must be a positive integer, got {history_size!r}")
    config.history_size = history_size

    tab_completes = data.get("tabAtStartCompletes", False)
    if not isinstance(tab_completes, bool):
        raise ValueError(f"tabAtStartCompletes must be a boolean, got {tab_completes!r}")
    config.tab_at_start_completes = tab_completes

    keybindings = data.get("keybindings", {})
    if not isinstance(keybindings, dict):
        raise ValueError("keybindings must be an object")
    for command, keys in keybindings.items():
        if command not in EDITOR_COMMANDS:
            raise ValueError(f"keybindings: unknown editor command {command!r}")
        key_array = keys if isinstance(keys, list) else [keys]
        if not key_array or not all(isinstance(k, str) and k for k in key_array):
            raise ValueError(f"keybindings.{command} must be a key id or a list of key ids")
    config.keybindings = dict(keybindings)

    history_dir = data.get("historyDir")
    if history_dir is not None:
        if not isinstance(history_dir, str):
            raise ValueError("historyDir must be a string")
        config.history_dir = Path(history_dir).expanduser()

    return config


def config_to_dict(config: EditorConfig) -> dict[str, Any]:
    """Serialize an EditorConfig to a JSON-compatible dict."""
    data: dict[str, Any] = {
        "historySize": config.history_size,
        "tabAtStartCompletes": config.tab_at_start_completes,
        "keybindings": dict(config.keybindings),
    }
    if config.history_dir is not None:
        data["historyDir"] = str(config.history_dir)
    return data


def load_config(path: Path | None = None) -> EditorConfig:
    """Read the config file, falling back to defaults when missing or invalid."""
    config_path = path or get_config_dir() / CONFIG_FILE_NAME
    if not config_path.exists():
        return EditorConfig()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("top-level value must be an object")
        return config_from_dict(data)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring config %s: %s", config_path, e)
        return EditorConfig()


def save_config(config: EditorConfig, path: Path | None = None) -> None:
    config_path = path or get_config_dir() / CONFIG_FILE_NAME
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config_to_dict(config), indent=2), encoding="utf-8")


def history_path(name: str, config: EditorConfig | None = None) -> Path | None:
    """History file for the editor called *name*.

    Returns ``None`` when the history directory cannot be created, which
    leaves that editor without persistent history.
    """
    history_dir = (config.history_dir if config else None) or get_history_dir()
    try:
        history_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("History disabled, cannot create %s: %s", history_dir, e)
        return None
    return history_dir / f"{name}{HISTORY_SUFFIX}"
