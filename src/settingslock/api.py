"""pywebview API bridge — exposes the settings controller to the web UI."""

from __future__ import annotations

import json
import threading
from typing import TYPE_CHECKING

from settingslock.controller import SettingsController

if TYPE_CHECKING:
    import webview


class SettingsAPI:
    """JS-callable API exposed via pywebview.

    pywebview runs each JS call on its own thread; ``_lock`` keeps calls into
    the controller one at a time.
    """

    def __init__(self, controller: SettingsController) -> None:
        self._controller = controller
        self._window: "webview.Window | None" = None
        self._lock = threading.Lock()

    def attach_window(self, window: "webview.Window") -> None:
        self._window = window

    def _state(self, **extra) -> str:
        payload = self._controller.view.as_dict()
        payload["current_path"] = self._controller.current_path
        payload.update(extra)
        return json.dumps(payload)

    def _open_dialog(self, directory: str, file_types: tuple) -> str | None:
        import webview
        result = self._window.create_file_dialog(
            webview.OPEN_DIALOG,
            directory=directory,
            file_types=file_types,
        )
        if not result:
            return None
        # Some backends return a bare string instead of a sequence.
        if isinstance(result, str):
            return result
        return result[0]

    def get_state(self) -> str:
        with self._lock:
            return self._state()

    def get_default_directory(self) -> str:
        with self._lock:
            directory = self._controller.discover_default_directory()
        return json.dumps({"directory": str(directory)})

    def select_file(self, path: str | None = None) -> str:
        with self._lock:
            if path is not None:
                self._controller.select(path)
                return self._state()
            if self._window is None:
                return json.dumps({"error": "Window not ready"})
            if not self._controller.pick_file(self._open_dialog):
                return self._state(cancelled=True)
            return self._state()

    def save_file(self, content: str) -> str:
        with self._lock:
            self._controller.save(content)
            return self._state()

    def toggle_lock(self) -> str:
        with self._lock:
            self._controller.toggle_lock()
            return self._state()
