"""
Path utilities for dev vs installed data locations.

Dev mode (running from a source checkout): ./workspace
Installed: the platform's per-user application data directory
"""
from __future__ import annotations

import os
import platform
from pathlib import Path

APP_NAME = "Sumway"


def is_source_checkout() -> bool:
    """Check if the package is running from the repository's src/ tree."""
    package_root = Path(__file__).resolve().parent.parent
    return (package_root.parent.parent / "pyproject.toml").exists() and package_root.parent.name == "src"


def get_app_data_dir() -> Path:
    """
    Get the application data directory for gradebook files.

    Installed: ~/Library/Application Support/Sumway (macOS)
               %LOCALAPPDATA%/Sumway (Windows)
               $XDG_DATA_HOME/Sumway or ~/.local/share/Sumway (Linux)
    Dev: workspace/
    """
    if is_source_checkout():
        return Path.cwd() / "workspace"

    system = platform.system()
    if system == "Windows":
        base = os.environ.get("LOCALAPPDATA", os.environ.get("APPDATA"))
        return Path(base) / APP_NAME if base else Path.home() / ".sumway"
    if system == "Darwin":
        return Path.home() / "Library/Application Support" / APP_NAME
    xdg = os.environ.get("XDG_DATA_HOME")
    return (Path(xdg) if xdg else Path.home() / ".local/share") / APP_NAME
