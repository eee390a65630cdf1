"""Desktop app launcher using pywebview."""

from __future__ import annotations

import logging
import pathlib

import webview

from settingslock.api import SettingsAPI
from settingslock.config import AppConfig, default_config_dir, load_config
from settingslock.controller import SettingsController

logger = logging.getLogger(__name__)


def launch() -> None:
    """Launch the settings editor window."""
    html_dir = pathlib.Path(__file__).parent / "ui"
    index_html = html_dir / "index.html"

    config_dir = default_config_dir()
    try:
        config = load_config(config_dir=config_dir)
    except (ValueError, OSError) as exc:
        logger.warning("Ignoring unreadable config in %s: %s", config_dir, exc)
        config = AppConfig.default(config_dir=config_dir)
    controller = SettingsController(indent=config.indent, start_dir=config.start_dir)
    api = SettingsAPI(controller)

    window = webview.create_window(
        "Roblox Settings Editor",
        url=str(index_html) if index_html.exists() else None,
        js_api=api,
        width=900,
        height=700,
        min_size=(600, 450),
    )
    api.attach_window(window)
    logger.debug("Window created; starting event loop")

    webview.start()
