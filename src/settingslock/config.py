"""App-level configuration — file picker seed directory, JSON indent."""

from __future__ import annotations

import dataclasses
import json
import os
import pathlib
import sys

from settingslock.jsonfmt import DEFAULT_INDENT


@dataclasses.dataclass
class AppConfig:
    """Application-level settings stored in .config.json."""

    start_dir: str | None
    indent: int
    config_dir: pathlib.Path

    @classmethod
    def default(cls, config_dir: pathlib.Path) -> AppConfig:
        return cls(start_dir=None, indent=DEFAULT_INDENT, config_dir=config_dir)


def _config_path(config_dir: pathlib.Path) -> pathlib.Path:
    return config_dir / ".config.json"


def default_config_dir() -> pathlib.Path:
    """Return the platform-appropriate config directory."""
    if sys.platform == "darwin":
        return pathlib.Path.home() / "Library" / "Application Support" / "SettingsLock"
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA") or str(pathlib.Path.home())
        return pathlib.Path(base) / "SettingsLock"
    return pathlib.Path.home() / ".config" / "settingslock"


def check_indent(value: object) -> int:
    """Return *value* if it is a usable indent width, else raise ValueError."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"indent must be a whole number of zero or more, got {value!r}")
    return value


def save_config(config: AppConfig) -> None:
    check_indent(config.indent)
    path = _config_path(config.config_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {"start_dir": config.start_dir, "indent": config.indent}
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def load_config(config_dir: pathlib.Path) -> AppConfig:
    """Read .config.json from *config_dir*, or return defaults if it is absent.

    Raises:
        ValueError: If the file is not JSON or holds a value of the wrong shape.
    """
    path = _config_path(config_dir)
    if not path.exists():
        return AppConfig.default(config_dir=config_dir)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must hold a JSON object")
    start_dir = data.get("start_dir")
    if start_dir is not None and not isinstance(start_dir, str):
        raise ValueError(f"start_dir must be a path string, got {start_dir!r}")
    return AppConfig(
        start_dir=start_dir or None,
        indent=check_indent(data.get("indent", DEFAULT_INDENT)),
        config_dir=config_dir,
    )
