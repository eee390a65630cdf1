"""Filesystem access for the settings file: text I/O and the read-only flag."""

from __future__ import annotations

import enum
import os
import pathlib
import stat
from typing import Protocol


class FileAttribute(enum.Flag):
    """OS file attributes the editor cares about."""

    NONE = 0
    READ_ONLY = enum.auto()


class Filesystem(Protocol):
    def read_text(self, path: str) -> str: ...

    def write_text(self, path: str, text: str) -> None: ...

    def get_attributes(self, path: str) -> FileAttribute: ...

    def set_attributes(self, path: str, attributes: FileAttribute) -> None: ...

    def exists(self, path: str) -> bool: ...


class LocalFilesystem:
    """Blocking local-disk implementation of :class:`Filesystem`.

    ``READ_ONLY`` maps onto the owner write bit. On Windows, ``os.chmod`` with
    ``stat.S_IWRITE`` toggles the native read-only attribute; elsewhere it is
    the ``u+w`` permission.
    """

    def read_text(self, path: str) -> str:
        # Undecodable bytes become U+FFFD rather than failing the load.
        with open(path, "r", encoding="utf-8-sig", errors="replace", newline="") as fh:
            return fh.read()

    def write_text(self, path: str, text: str) -> None:
        # Encode before opening so a bad string never truncates the file.
        data = text.encode("utf-8")
        with open(path, "wb") as fh:
            fh.write(data)

    def get_attributes(self, path: str) -> FileAttribute:
        mode = os.stat(path).st_mode
        if mode & stat.S_IWRITE:
            return FileAttribute.NONE
        return FileAttribute.READ_ONLY

    def set_attributes(self, path: str, attributes: FileAttribute) -> None:
        mode = stat.S_IMODE(os.stat(path).st_mode)
        if attributes & FileAttribute.READ_ONLY:
            os.chmod(path, mode & ~stat.S_IWRITE)
        else:
            os.chmod(path, mode | stat.S_IWRITE)

    def exists(self, path: str) -> bool:
        return pathlib.Path(path).exists()


def set_read_only(fs: Filesystem, path: str, read_only: bool) -> None:
    """Add or remove ``READ_ONLY`` on *path*, keeping any other attributes."""
    attributes = fs.get_attributes(path)
    if read_only:
        fs.set_attributes(path, attributes | FileAttribute.READ_ONLY)
    else:
        fs.set_attributes(path, attributes & ~FileAttribute.READ_ONLY)


def is_read_only(fs: Filesystem, path: str) -> bool:
    return bool(fs.get_attributes(path) & FileAttribute.READ_ONLY)
