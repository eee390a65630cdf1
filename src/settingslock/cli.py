"""CLI entrypoint for settingslock."""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys

from settingslock.config import check_indent, default_config_dir, load_config, save_config
from settingslock.controller import SettingsController
from settingslock.fsops import LocalFilesystem, is_read_only
from settingslock.paths import client_versions_dir, find_settings_files, ixp_settings_path

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="settingslock",
        description="View, edit and lock a Roblox client settings file.",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: WARNING).",
    )
    parser.add_argument(
        "--config-dir", type=pathlib.Path, default=None,
        help="Directory holding .config.json (default: platform config dir).",
    )
    subparsers = parser.add_subparsers(dest="command")

    # where
    subparsers.add_parser("where", help="Show the default directory and known settings files.")

    # show
    show_parser = subparsers.add_parser("show", help="Print a settings file, pretty-printed if it is JSON.")
    show_parser.add_argument("path", type=pathlib.Path, help="Settings file.")

    # status
    status_parser = subparsers.add_parser("status", help="Show whether a settings file is read-only.")
    status_parser.add_argument("path", type=pathlib.Path, help="Settings file.")

    # toggle-lock
    toggle_parser = subparsers.add_parser("toggle-lock", help="Flip the read-only attribute.")
    toggle_parser.add_argument("path", type=pathlib.Path, help="Settings file.")

    # save
    save_parser = subparsers.add_parser("save", help="Overwrite a settings file with new text.")
    save_parser.add_argument("path", type=pathlib.Path, help="Settings file.")
    save_parser.add_argument("source", type=str, help="File to copy text from, or - for stdin.")

    # config
    config_parser = subparsers.add_parser("config", help="Show or update app settings.")
    config_parser.add_argument("--start-dir", type=str, default=None, help="Directory the file picker opens in.")
    config_parser.add_argument("--indent", type=int, default=None, help="Spaces per JSON indent level.")

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help(sys.stderr)
        sys.exit(2)

    config_dir = args.config_dir or default_config_dir()

    if args.command == "config":
        _cmd_config(args, config_dir)
        return

    try:
        config = load_config(config_dir=config_dir)
    except (ValueError, OSError) as exc:
        print(f"Error: could not read config: {exc}", file=sys.stderr)
        sys.exit(1)
    controller = SettingsController(indent=config.indent, start_dir=config.start_dir)

    if args.command == "where":
        _cmd_where(controller)
    elif args.command == "show":
        _cmd_show(args, controller)
    elif args.command == "status":
        _cmd_status(args)
    elif args.command == "toggle-lock":
        _cmd_toggle_lock(args, controller)
    elif args.command == "save":
        _cmd_save(args, controller)


def _select_or_exit(controller: SettingsController, path: pathlib.Path) -> None:
    controller.select(str(path))
    if controller.view.is_error:
        print(controller.view.status, file=sys.stderr)
        sys.exit(1)


def _cmd_where(controller: SettingsController) -> None:
    print(f"Default directory: {controller.discover_default_directory()}")
    fs = LocalFilesystem()
    candidates = find_settings_files(client_versions_dir())
    ixp = ixp_settings_path()
    if ixp.exists():
        candidates.append(ixp)
    if not candidates:
        print("No settings files found.")
        return
    for path in candidates:
        try:
            state = "LOCKED" if is_read_only(fs, str(path)) else "UNLOCKED"
        except OSError as exc:
            # Removed or unreadable since the walk; keep listing the rest.
            print(f"Error: {exc}", file=sys.stderr)
            continue
        print(f"  {path}  ({state})")


def _cmd_show(args: argparse.Namespace, controller: SettingsController) -> None:
    _select_or_exit(controller, args.path)
    print(controller.view.buffer)


def _cmd_status(args: argparse.Namespace) -> None:
    try:
        locked = is_read_only(LocalFilesystem(), str(args.path))
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    print("LOCKED" if locked else "UNLOCKED")


def _cmd_toggle_lock(args: argparse.Namespace, controller: SettingsController) -> None:
    # Loading clears read-only first, so capture the state beforehand.
    try:
        was_locked = is_read_only(LocalFilesystem(), str(args.path))
    except FileNotFoundError:
        print("ERROR: File not found. Select a new file.", file=sys.stderr)
        sys.exit(1)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    _select_or_exit(controller, args.path)
    if was_locked:
        print("Status: File is now Writable (UNLOCKED).")
        return
    controller.toggle_lock()
    if controller.view.is_error:
        print(controller.view.status, file=sys.stderr)
        sys.exit(1)
    print(controller.view.status)


def _cmd_save(args: argparse.Namespace, controller: SettingsController) -> None:
    try:
        if args.source == "-":
            text = sys.stdin.read()
        else:
            with open(args.source, "r", encoding="utf-8", newline="") as fh:
                text = fh.read()
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    _select_or_exit(controller, args.path)
    controller.save(text)
    if controller.view.is_error:
        print(controller.view.status, file=sys.stderr)
        sys.exit(1)
    print(controller.view.status)


def _cmd_config(args: argparse.Namespace, config_dir: pathlib.Path) -> None:
    try:
        config = load_config(config_dir=config_dir)
    except (ValueError, OSError) as exc:
        print(f"Error: could not read config: {exc}", file=sys.stderr)
        sys.exit(1)

    changed = False
    if args.start_dir is not None:
        config.start_dir = args.start_dir or None
        changed = True
    if args.indent is not None:
        try:
            config.indent = check_indent(args.indent)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        changed = True
    if changed:
        save_config(config)

    print(json.dumps({"start_dir": config.start_dir, "indent": config.indent}, indent=2))
