# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for translating paths between the host shell and the Java runtime."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from os import PathLike
from pathlib import Path
from typing import Protocol

from ..process_utils import run_command

_Pathish = str | PathLike[str]


class PathConverter(Protocol):
    """Translate paths for the runtime (``native``) and for the host (``host``)."""

    def native(self, path: _Pathish) -> str:
        """Return ``path`` spelled the way the Java runtime expects it."""
        ...

    def host(self, path: _Pathish) -> Path:
        """Return ``path`` spelled the way the host filesystem APIs expect it."""
        ...


class PassthroughPaths:
    """No-op converter used on every host where the runtime shares our paths."""

    def native(self, path: _Pathish) -> str:
        return os.fspath(path)

    def host(self, path: _Pathish) -> Path:
        return Path(path)


class CygwinPaths:
    """Converter for Cygwin and MSYS shells driving a Windows JVM."""

    def __init__(self, runner: Callable[..., object] = run_command) -> None:
        self._runner = runner

    def native(self, path: _Pathish) -> str:
        return self._cygpath("-w", path)

    def host(self, path: _Pathish) -> Path:
        return Path(self._cygpath("-u", path))

    def _cygpath(self, mode: str, path: _Pathish) -> str:
        """Return ``cygpath`` output, or ``path`` unchanged when conversion fails."""

        raw = os.fspath(path)
        try:
            completed = self._runner(["cygpath", mode, raw], capture_output=True, check=False)
        except OSError:
            return raw
        if getattr(completed, "returncode", 0) != 0:
            return raw
        return str(getattr(completed, "stdout", "") or "").strip() or raw


def is_cygwin_host(platform: str | None = None) -> bool:
    """Return ``True`` when the interpreter itself is a Cygwin or MSYS build."""

    platform = sys.platform if platform is None else platform
    return platform.startswith(("cygwin", "msys"))


def default_path_converter() -> PathConverter:
    """Return the converter appropriate for the current host."""

    if is_cygwin_host():
        return CygwinPaths()
    return PassthroughPaths()


__all__ = [
    "CygwinPaths",
    "PassthroughPaths",
    "PathConverter",
    "default_path_converter",
    "is_cygwin_host",
]
