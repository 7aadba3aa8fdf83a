# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate the Java runtime used to run ktlint."""

from __future__ import annotations

import os
import re
import shutil
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from subprocess import TimeoutExpired  # nosec B404
from typing import Final

from .config import LauncherSettings
from .constants import ADD_OPENS_MIN_MAJOR, JAVA_HOME_ENV, MIN_JAVA_MAJOR
from .errors import IncompatibleHostError, RuntimeNotFoundError
from .filesystem.paths import PassthroughPaths, PathConverter
from .process_utils import run_command

_VERSION_PATTERN: Final[re.Pattern[str]] = re.compile(r'version "([^"]+)"')
_MAJOR_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(\d+)(?:\.(\d+))?")
_PROBE_TIMEOUT: Final[float] = 30.0

Which = Callable[[str], str | None]
VersionProbe = Callable[[Path], str | None]


@dataclass(frozen=True, slots=True)
class JavaRuntime:
    """Java executable selected for this run along with its version."""

    executable: Path
    version: str
    major: int

    @property
    def needs_add_opens(self) -> bool:
        """Return ``True`` when the JVM enforces strong encapsulation."""

        return self.major >= ADD_OPENS_MIN_MAJOR


def java_binary_name() -> str:
    return "java.exe" if sys.platform == "win32" else "java"


def parse_major(version: str) -> int | None:
    """Return the feature release number encoded in ``version``.

    Legacy ``1.x`` strings map to ``x`` (``1.8.0_292`` → 8); modern strings
    map to their first component (``17.0.2`` → 17).
    """

    match = _MAJOR_PATTERN.match(version.strip())
    if match is None:
        return None
    first, second = match.groups()
    if first == "1" and second is not None:
        return int(second)
    return int(first)


def probe_version(executable: Path) -> str | None:
    """Return the version reported by ``java -version``, if any.

    The JVM prints its banner on stderr; stdout is consulted as a fallback.
    """

    try:
        completed = run_command(
            [str(executable), "-version"],
            capture_output=True,
            check=False,
            timeout=_PROBE_TIMEOUT,
        )
    except (OSError, ValueError, TimeoutExpired):
        return None
    output = f"{completed.stderr or ''}\n{completed.stdout or ''}"
    match = _VERSION_PATTERN.search(output)
    return match.group(1) if match else None


def _is_executable(candidate: Path) -> bool:
    return candidate.is_file() and os.access(candidate, os.X_OK)


def find_java_executable(
    settings: LauncherSettings,
    *,
    paths: PathConverter | None = None,
    which: Which = shutil.which,
) -> Path:
    """Return the Java executable, preferring ``JAVA_HOME`` over ``PATH``.

    Raises:
        RuntimeNotFoundError: If ``JAVA_HOME`` is invalid or no ``java`` is on ``PATH``.
    """

    converter = paths if paths is not None else PassthroughPaths()
    if settings.java_home:
        home = converter.host(settings.java_home)
        candidate = home / "bin" / java_binary_name()
        if not _is_executable(candidate):
            raise RuntimeNotFoundError(
                f"{JAVA_HOME_ENV} is set to {settings.java_home!r} but {candidate} is not an executable"
            )
        return candidate.absolute()

    found = which("java")
    if not found:
        raise RuntimeNotFoundError(
            f"Java runtime not found: install Java {MIN_JAVA_MAJOR}+ or set {JAVA_HOME_ENV}"
        )
    return Path(found).absolute()


def locate_java(
    settings: LauncherSettings,
    *,
    paths: PathConverter | None = None,
    which: Which = shutil.which,
    probe: VersionProbe = probe_version,
) -> JavaRuntime:
    """Locate the runtime and verify that it is recent enough for ktlint.

    Raises:
        RuntimeNotFoundError: If no runtime can be located.
        IncompatibleHostError: If the version is unknown or below the minimum.
    """

    executable = find_java_executable(settings, paths=paths, which=which)
    version = probe(executable)
    if version is None:
        raise IncompatibleHostError(f"Unable to determine the version of {executable}")
    major = parse_major(version)
    if major is None or major < MIN_JAVA_MAJOR:
        raise IncompatibleHostError(
            f"ktlint requires Java {MIN_JAVA_MAJOR} or newer; {executable} is version {version}"
        )
    return JavaRuntime(executable=executable, version=version, major=major)


__all__ = [
    "JavaRuntime",
    "find_java_executable",
    "java_binary_name",
    "locate_java",
    "parse_major",
    "probe_version",
]
