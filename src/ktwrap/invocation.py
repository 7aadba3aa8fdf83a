# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Assemble and run the final ktlint command line."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from pathlib import Path
from subprocess import TimeoutExpired  # nosec B404
from typing import Final

from .config import LauncherSettings
from .constants import ADD_OPENS_FLAG, IDENTITY_PROPERTY, SARIF_REPORTER
from .environment import JavaRuntime
from .errors import RuntimeNotFoundError
from .filesystem.paths import PassthroughPaths, PathConverter
from .options import RunConfig
from .process_utils import execute, run_command

_TOOL_VERSION_PATTERN: Final[re.Pattern[str]] = re.compile(r"(\d+(?:\.\d+)+\S*)")

Executor = Callable[[Sequence[str]], int]


def reporter_argument(reporter: str, output: str | None) -> str:
    """Return the ``--reporter`` value, appending ``output=`` for file targets."""

    if output is None:
        return reporter
    return f"{reporter},output={output}"


def jvm_arguments(runtime: JavaRuntime, jar: Path, *, settings: LauncherSettings, paths: PathConverter) -> list[str]:
    """Return the runtime invocation up to and including ``-jar <jar>``."""

    args = [str(runtime.executable), f"-Xmx{settings.java_memory}", IDENTITY_PROPERTY]
    if runtime.needs_add_opens:
        args.append(ADD_OPENS_FLAG)
    args.extend(["-jar", paths.native(jar)])
    return args


def tool_arguments(config: RunConfig) -> list[str]:
    """Return the ktlint switches matching ``config`` in their fixed order."""

    args = [f"--reporter={reporter_argument(config.reporter, config.output_target())}"]
    if config.debug:
        args.append("--log-level=debug")
    if config.color:
        args.append("--color")
    if config.format:
        args.append("--format")
    if config.relative and config.reporter != SARIF_REPORTER:
        args.append("--relative")
    if config.verbose:
        args.append("--verbose")
    return args


def build_command(
    runtime: JavaRuntime,
    jar: Path,
    config: RunConfig,
    files: Sequence[str],
    *,
    settings: LauncherSettings,
    paths: PathConverter | None = None,
) -> list[str]:
    """Return the complete argument vector for one ktlint run."""

    converter = paths if paths is not None else PassthroughPaths()
    return [
        *jvm_arguments(runtime, jar, settings=settings, paths=converter),
        *tool_arguments(config),
        *files,
    ]


def run_ktlint(command: Sequence[str], *, executor: Executor = execute) -> int:
    """Run ``command`` with inherited stdio and return ktlint's exit status.

    Raises:
        RuntimeNotFoundError: If the Java executable cannot be started.
    """

    try:
        return executor(command)
    except OSError as exc:
        raise RuntimeNotFoundError(f"Unable to start {command[0]}: {exc}") from exc


def tool_version(
    runtime: JavaRuntime,
    jar: Path,
    *,
    settings: LauncherSettings,
    paths: PathConverter | None = None,
) -> str | None:
    """Return the version reported by ``ktlint --version``, if it can be read."""

    converter = paths if paths is not None else PassthroughPaths()
    command = [*jvm_arguments(runtime, jar, settings=settings, paths=converter), "--version"]
    try:
        completed = run_command(command, capture_output=True, check=False, timeout=60)
    except (OSError, ValueError, TimeoutExpired):
        return None
    output = (completed.stdout or "").strip() or (completed.stderr or "").strip()
    if not output:
        return None
    first_line = output.splitlines()[0].strip()
    match = _TOOL_VERSION_PATTERN.search(first_line)
    return match.group(1) if match else first_line


__all__ = [
    "build_command",
    "jvm_arguments",
    "reporter_argument",
    "run_ktlint",
    "tool_arguments",
    "tool_version",
]
