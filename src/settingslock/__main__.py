"""Allow running as `python -m settingslock`."""

import logging
import os
import pathlib
import sys
from logging.handlers import RotatingFileHandler

logger = logging.getLogger(__name__)


def _log_dir() -> pathlib.Path:
    if sys.platform == "darwin":
        return pathlib.Path.home() / "Library" / "Logs" / "SettingsLock"
    if sys.platform.startswith("win"):
        base = os.environ.get("LOCALAPPDATA") or str(pathlib.Path.home())
        return pathlib.Path(base) / "SettingsLock" / "logs"
    return pathlib.Path.home() / ".local" / "share" / "SettingsLock" / "logs"


def _console_level() -> int:
    name = os.environ.get("SETTINGSLOCK_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def _setup_logging() -> pathlib.Path | None:
    """Configure logging to both stderr and a rotating log file.

    The console level comes from ``SETTINGSLOCK_LOG_LEVEL`` (default WARNING).
    Calling this again replaces the handlers it added before.
    Returns the log file path, or None if file logging could not be set up.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_settingslock", False):
            root_logger.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler(sys.stderr)
    console._settingslock = True
    console.setLevel(_console_level())
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console)

    # File: everything (debug+), rotating 5MB x 3 files
    log_dir = _log_dir()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "settingslock.log"
        file_handler = RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        file_handler._settingslock = True
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root_logger.addHandler(file_handler)
        return log_file
    except OSError:
        root_logger.warning("Could not create log directory: %s", log_dir)
        return None


def main():
    if len(sys.argv) > 1 or os.environ.get("SETTINGSLOCK_CLI_ONLY") == "1":
        from settingslock.cli import main as cli_main
        cli_main()
        return

    log_file = _setup_logging()
    if log_file:
        logger.info("settingslock starting, log file: %s", log_file)

    try:
        from settingslock.app import launch
        launch()
    except ImportError:
        from settingslock.cli import main as cli_main
        cli_main()


if __name__ == "__main__":
    main()
