"""File helpers: extension lookup, copy and cross-device move."""

from __future__ import annotations

import contextlib
import errno
import os
import shutil
import uuid


def get_ext_name(path: str, default: str) -> str:
    """Return the extension of the last path element (dot included), or ``default``."""
    name = path.replace(os.sep, "/").rsplit("/", 1)[-1]
    idx = name.rfind(".")
    if idx < 0:
        return default
    return name[idx:]


def move(src: str, dst: str) -> None:
    """Rename ``src`` to ``dst``, copying when they live on different devices."""
    try:
        os.rename(src, dst)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        _move_cross_device(src, dst)


def copy(src: str, dst: str) -> None:
    """Copy file contents and permission bits from ``src`` to ``dst``."""
    mode = os.stat(src).st_mode
    shutil.copyfile(src, dst)
    os.chmod(dst, mode)


def _move_cross_device(src: str, dst: str) -> None:
    temp = f"{dst}.tempfile.{uuid.uuid4()}"
    try:
        copy(src, temp)
        os.rename(temp, dst)
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.remove(temp)
    with contextlib.suppress(OSError):
        os.remove(src)