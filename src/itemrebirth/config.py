"""Configuration loading from environment variables and itemrebirth.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_CONFIG_FILENAME = "itemrebirth.toml"
_DEFAULT_DATA_FILE = Path("items.txt")
_DEFAULT_EXPORT_DIR = Path("cards")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class ItemRebirthConfig:
    """Top-level configuration.

    Relative paths resolve against the current working directory.
    """

    data_file: Path = _DEFAULT_DATA_FILE
    export_dir: Path = _DEFAULT_EXPORT_DIR
    log_level: str = "WARNING"
    clear_screen: bool = True
    pause: bool = True


def _as_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return default


def load_config(config_path: Path | None = None) -> ItemRebirthConfig:
    """Load configuration from environment variables and optional itemrebirth.toml.

    Priority: environment variables > itemrebirth.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    else:
        # Search current dir and ~/.itemrebirth/
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path.home() / ".itemrebirth" / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text(encoding="utf-8"))
                break

    console_data = file_data.get("console", {})

    return ItemRebirthConfig(
        data_file=Path(
            os.getenv("ITEMREBIRTH_DATA_FILE", file_data.get("data_file", str(_DEFAULT_DATA_FILE)))
        ),
        export_dir=Path(
            os.getenv(
                "ITEMREBIRTH_EXPORT_DIR", file_data.get("export_dir", str(_DEFAULT_EXPORT_DIR))
            )
        ),
        log_level=os.getenv("ITEMREBIRTH_LOG_LEVEL", file_data.get("log_level", "WARNING")),
        clear_screen=_as_bool(
            os.getenv("ITEMREBIRTH_CLEAR_SCREEN", console_data.get("clear_screen")), True
        ),
        pause=_as_bool(os.getenv("ITEMREBIRTH_PAUSE", console_data.get("pause")), True),
    )
