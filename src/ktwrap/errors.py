# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fatal launcher errors, each bound to a process exit status."""

from __future__ import annotations

from pathlib import Path

from .constants import USAGE, ExitCode


class LauncherError(RuntimeError):
    """Error raised when the launcher must stop with a specific exit status."""

    exit_code: ExitCode = ExitCode.TOOL_FAILURE

    def __init__(self, message: str, *, exit_code: ExitCode | None = None) -> None:
        """Initialise the error with a message and optional exit code override.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status overriding the class default.
        """

        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ArgumentError(LauncherError):
    """Command-line arguments could not be parsed; usage text accompanies it."""

    def __init__(self, message: str, *, usage: str = USAGE) -> None:
        super().__init__(message)
        self.usage = usage


class UnsupportedFlagError(ArgumentError):
    exit_code = ExitCode.UNSUPPORTED_FLAG


class MissingArgumentError(ArgumentError):
    exit_code = ExitCode.MISSING_ARGUMENT


class NoInputFilesError(LauncherError):
    """Explicit inputs were given but none of them resolved to a file."""

    exit_code = ExitCode.NO_INPUT_FILES

    def __init__(self, inputs: tuple[str, ...] | list[str]) -> None:
        super().__init__(f"No input files found for: {' '.join(inputs)}")
        self.inputs = tuple(inputs)


class RuntimeNotFoundError(LauncherError):
    exit_code = ExitCode.RUNTIME_NOT_FOUND


class IncompatibleHostError(LauncherError):
    exit_code = ExitCode.INCOMPATIBLE_HOST


class DownloadError(LauncherError):
    """Release metadata or the release asset could not be downloaded."""

    exit_code = ExitCode.DOWNLOAD_FAILURE

    def __init__(self, message: str, *, transcript: Path | None = None) -> None:
        """Initialise the error, pointing at the retained transcript when known.

        Args:
            message: Description of the failed step.
            transcript: Diagnostic log kept on disk for inspection.
        """

        if transcript is not None:
            message = f"{message} (details: {transcript})"
        super().__init__(message)
        self.transcript = transcript


__all__ = [
    "ArgumentError",
    "DownloadError",
    "IncompatibleHostError",
    "LauncherError",
    "MissingArgumentError",
    "NoInputFilesError",
    "RuntimeNotFoundError",
    "UnsupportedFlagError",
]
