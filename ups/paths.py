"""
Per-user locations for the ups data and config files.
"""

import os
import sys
from pathlib import Path

APP_NAME = "ups"


def user_data_dir() -> Path:
    """Platform data directory (XDG on Linux, Application Support on macOS, APPDATA on Windows)."""
    if sys.platform == "win32":
        base = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(base)
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")


def user_config_dir() -> Path:
    if sys.platform == "win32":
        return user_data_dir()
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")


def app_data_dir() -> Path:
    return user_data_dir() / APP_NAME


def data_path() -> Path:
    return app_data_dir() / "data"


def config_path() -> Path:
    return user_config_dir() / APP_NAME / "config.yaml"
