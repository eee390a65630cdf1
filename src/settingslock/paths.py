"""Locating the client's settings files on disk."""

from __future__ import annotations

import logging
import os
import pathlib
import sys

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAMES = ("IxpSettings.json", "ClientAppSettings.json")


def local_app_data_dir() -> pathlib.Path:
    """Return the per-user local application data directory."""
    if sys.platform.startswith("win"):
        base = os.environ.get("LOCALAPPDATA")
        if base:
            return pathlib.Path(base)
        return pathlib.Path.home() / "AppData" / "Local"
    if sys.platform == "darwin":
        return pathlib.Path.home() / "Library" / "Application Support"
    base = os.environ.get("XDG_DATA_HOME")
    if base:
        return pathlib.Path(base)
    return pathlib.Path.home() / ".local" / "share"


def client_versions_dir() -> pathlib.Path:
    """Directory where the client keeps one folder per installed version."""
    return local_app_data_dir() / "Roblox" / "Versions"


def ixp_settings_path() -> pathlib.Path:
    return local_app_data_dir() / "Roblox" / "ClientSettings" / "IxpSettings.json"


def desktop_dir() -> pathlib.Path:
    return pathlib.Path.home() / "Desktop"


def discover_default_directory(start_dir: str | None = None) -> pathlib.Path:
    """Return the directory the file picker should open in.

    Prefers *start_dir* when it exists, then the client versions directory,
    then the Desktop, then the home directory. Never raises: a missing
    candidate just moves on to the next one.
    """
    candidates: list[pathlib.Path] = []
    if start_dir:
        candidates.append(pathlib.Path(start_dir))
    candidates.extend([client_versions_dir(), desktop_dir()])

    for candidate in candidates:
        try:
            if candidate.is_dir():
                logger.debug("Default directory: %s", candidate)
                return candidate
        except OSError:
            continue

    logger.debug("No candidate directory found; falling back to home")
    return pathlib.Path.home()


def find_settings_files(versions_dir: pathlib.Path) -> list[pathlib.Path]:
    """Find every known settings file beneath *versions_dir*.

    Matches ``ClientSettings/ClientAppSettings.json`` inside version folders
    and any ``IxpSettings.json``. Returns an empty list when the directory is
    missing.
    """
    found: list[pathlib.Path] = []
    if not versions_dir.is_dir():
        return found

    for root, _dirs, files in os.walk(versions_dir):
        for name in files:
            if name not in SETTINGS_FILE_NAMES:
                continue
            path = pathlib.Path(root) / name
            if name == "ClientAppSettings.json" and path.parent.name != "ClientSettings":
                continue
            found.append(path)
    return sorted(found)
