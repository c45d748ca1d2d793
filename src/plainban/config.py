"""User configuration for plainban, read from a YAML file."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV = "PLAINBAN_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/plainban/config.yaml")

PLAINBAN_DEFAULTS: dict[str, Any] = {
    "default-density": "normal",
    "default-columns": ["To Do", "Doing", "Done"],
    "new-card-title": "New card",
    "editable-max-length": 20000,
    "log-level": "WARNING",
}


def _python_key(file_key: str) -> str:
    """Convert file-style key (hyphenated) to Python-style (underscored)."""
    return file_key.replace("-", "_")


def _coerce_value(file_key: str, raw: Any) -> Any:
    """Type-coerce a value using the default's type. Bad values fall back."""
    default = PLAINBAN_DEFAULTS.get(file_key)
    if default is None:
        return raw
    if isinstance(default, list):
        if isinstance(raw, str):
            return [part.strip() for part in raw.split(",") if part.strip()]
        if isinstance(raw, list):
            return [str(part).strip() for part in raw if str(part).strip()]
        return list(default)
    if isinstance(default, int):
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning("config %s: expected an integer, got %r", file_key, raw)
            return default
    return str(raw)


def config_path() -> Path:
    """$PLAINBAN_CONFIG if set, else ~/.config/plainban/config.yaml."""
    env = os.environ.get(CONFIG_ENV)
    return Path(env).expanduser() if env else DEFAULT_CONFIG_PATH.expanduser()


def read_config(path: str | Path | None = None) -> dict[str, Any]:
    """Read config into a flat {python_key: value} dict over the defaults.

    A missing file means defaults. An unreadable or malformed file logs a
    warning and also means defaults. Unknown keys pass through untouched.
    """
    path = Path(path) if path is not None else config_path()
    loaded: dict = {}
    if path.is_file():
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("could not read config %s: %s", path, e)
            loaded = {}
        if not isinstance(loaded, dict):
            logger.warning("config %s is not a mapping, ignoring it", path)
            loaded = {}

    result = {_python_key(k): v for k, v in PLAINBAN_DEFAULTS.items()}
    for file_key, raw in loaded.items():
        file_key = str(file_key)
        result[_python_key(file_key)] = _coerce_value(file_key, raw)
    return result
