"""Per-user storage location."""

from __future__ import annotations

import os
import sys
from pathlib import Path

__all__ = ["APP_NAME", "home", "user_config_dir"]

APP_NAME = "kickout"


def home() -> Path:
    return Path.home()


def user_config_dir() -> Path:
    """Get the user-level configuration directory.

    Location: ~/.config/kickout/ (Linux/macOS, honoring XDG_CONFIG_HOME)
    or %APPDATA%/kickout/ (Windows).
    """
    if sys.platform == "win32":
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME
