"""File state controller: owns the open settings file and the form's state.

Every operation runs to completion, catches its own failures, and reports
the outcome through :attr:`ViewState.status`. Nothing here raises to the
caller except programming errors.
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
from typing import Callable, Optional

from settingslock.fsops import Filesystem, LocalFilesystem, is_read_only, set_read_only
from settingslock.jsonfmt import DEFAULT_INDENT, try_pretty_print
from settingslock.paths import discover_default_directory

logger = logging.getLogger(__name__)

NOT_SELECTED_LABEL = "Current File: Not Selected"
READY_STATUS = "Status: Select a settings file to begin."
LOCKED_LABEL = "Toggle Read-Only (LOCKED)"
UNLOCKED_LABEL = "Toggle Read-Only (UNLOCKED)"
IDLE_LOCK_LABEL = "Toggle Read-Only"

PICKER_FILE_TYPES = (
    "Roblox settings files (*.json)",
    "All files (*.*)",
)

# (directory, file_types) -> chosen path, or None when cancelled
FilePicker = Callable[[str, tuple], Optional[str]]


class NoFileSelectedError(ValueError):
    """An operation needed an open file but none has been selected."""


@dataclasses.dataclass
class ViewState:
    """The four slots of the form the controller drives."""

    buffer: str = ""
    file_label: str = NOT_SELECTED_LABEL
    status: str = READY_STATUS
    lock_enabled: bool = False
    lock_label: str = IDLE_LOCK_LABEL

    def as_dict(self) -> dict:
        return dataclasses.asdict(self)

    @property
    def is_error(self) -> bool:
        return self.status.startswith("ERROR")


def _error_message(exc: BaseException) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        if exc.filename:
            return f"{exc.strerror}: '{exc.filename}'"
        return exc.strerror
    return str(exc)


class SettingsController:
    """Mediates every read, write and attribute change on the current file."""

    def __init__(
        self,
        fs: Filesystem | None = None,
        indent: int = DEFAULT_INDENT,
        start_dir: str | None = None,
    ) -> None:
        self._fs = fs if fs is not None else LocalFilesystem()
        self._indent = indent
        self._start_dir = start_dir
        self.current_path: str | None = None
        self.view = ViewState()

    def discover_default_directory(self) -> pathlib.Path:
        return discover_default_directory(self._start_dir)

    def pick_file(self, picker: FilePicker) -> bool:
        """Ask *picker* for a file and select it.

        Returns False when the user cancelled; nothing else happens then.
        """
        chosen = picker(str(self.discover_default_directory()), PICKER_FILE_TYPES)
        if not chosen:
            logger.debug("File selection cancelled")
            return False
        self.select(chosen)
        return True

    def select(self, path: str) -> None:
        # The path sticks even if the load below fails.
        self.current_path = str(path)
        logger.info("Selected %s", self.current_path)
        self.load(self.current_path)

    def load(self, path: str) -> None:
        """Unlock, read and display *path*.

        A missing file resets the file label and disables the lock toggle.
        Any other OS error only updates the status line.
        """
        try:
            set_read_only(self._fs, path, False)
            content = self._fs.read_text(path)
            self.view.buffer = try_pretty_print(content, indent=self._indent)
            self.view.file_label = f"Current File: {path}"
            self.view.status = "Status: File loaded successfully."
            self.view.lock_enabled = True
            self.refresh_lock_label(path)
            logger.info("Loaded %s", path)
        except FileNotFoundError:
            logger.warning("Settings file not found: %s", path)
            self.view.status = "ERROR: File not found. Select a new file."
            self.view.file_label = NOT_SELECTED_LABEL
            self.view.lock_enabled = False
        except OSError as exc:
            logger.warning("Failed to load %s: %s", path, exc)
            self.view.status = f"ERROR loading file: {_error_message(exc)}"

    def _require_path(self, message: str) -> str:
        if not self.current_path:
            raise NoFileSelectedError(message)
        return self.current_path

    def save(self, text: str | None = None) -> None:
        """Write the buffer to the current file exactly as it is.

        If *text* is given it replaces the buffer first.
        """
        if text is not None:
            self.view.buffer = text
        try:
            path = self._require_path("ERROR: Please select a file first.")
        except NoFileSelectedError as exc:
            self.view.status = str(exc)
            return

        try:
            set_read_only(self._fs, path, False)
            self._fs.write_text(path, self.view.buffer)
        except (OSError, UnicodeError) as exc:
            logger.warning("Failed to save %s: %s", path, exc)
            self.view.status = f"ERROR saving file: {_error_message(exc)}"
            return
        logger.info("Saved %d characters to %s", len(self.view.buffer), path)
        self.view.status = "SUCCESS: Changes saved to file."

    def toggle_lock(self) -> None:
        try:
            path = self._require_path("ERROR: No file is selected.")
        except NoFileSelectedError as exc:
            self.view.status = str(exc)
            return

        try:
            was_read_only = is_read_only(self._fs, path)
            set_read_only(self._fs, path, not was_read_only)
            self.refresh_lock_label(path)
        except OSError as exc:
            logger.warning("Failed to toggle read-only on %s: %s", path, exc)
            self.view.status = f"ERROR toggling attribute: {_error_message(exc)}"
            return

        if was_read_only:
            self.view.status = "Status: File is now Writable (UNLOCKED)."
        else:
            self.view.status = "Status: File is now Read-Only (LOCKED)."
        logger.info("%s is now %s", path, "writable" if was_read_only else "read-only")

    def refresh_lock_label(self, path: str) -> None:
        """Set the lock label from the file's attributes as they are on disk now."""
        if is_read_only(self._fs, path):
            self.view.lock_label = LOCKED_LABEL
        else:
            self.view.lock_label = UNLOCKED_LABEL
