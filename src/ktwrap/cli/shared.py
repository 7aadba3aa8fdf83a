# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for the CLI (user-facing logging and error reporting)."""

from __future__ import annotations

import logging
import re
import shlex
from collections.abc import Sequence
from dataclasses import dataclass

import typer
from rich.console import Console
from rich.text import Text

from ..errors import ArgumentError, LauncherError
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import report_error


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI settings."""

    console: Console
    use_emoji: bool
    debug_enabled: bool = False
    ci: bool = False
    _key_value_re: re.Pattern[str] = re.compile(r"([\w-]+)=(\".*?\"|\S+)")

    def ok(self, message: str) -> None:
        core_ok(message, use_emoji=self.use_emoji)

    def info(self, message: str) -> None:
        core_info(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` verbatim using Typer's echo helper."""

        typer.echo(message)

    def error(self, exc: LauncherError) -> None:
        """Report a fatal launcher error, followed by usage text for argument errors."""

        report_error(str(exc), ci=self.ci, title="ktwrap")
        if isinstance(exc, ArgumentError):
            typer.echo(exc.usage, err=True, nl=False)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled.

        Args:
            message: Debug payload rendered with simple ``key=value`` highlighting.
        """

        if not self.debug_enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            key, raw_value = match.group(1), match.group(2)
            text.append(key, style="bold magenta")
            text.append("=", style="dim")
            value_style = "bold blue" if key in {"command", "cmd"} else "bold green"
            text.append(raw_value, style=value_style)
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)

    def command(self, args: Sequence[str]) -> None:
        """Echo an external command line in debug mode."""

        self.debug(f"command={shlex.join(args)}")


class CLILogHandler(logging.Handler):
    """Forward stdlib log records to :meth:`CLILogger.debug`."""

    def __init__(self, logger: CLILogger) -> None:
        super().__init__(level=logging.DEBUG)
        self._logger = logger

    def emit(self, record: logging.LogRecord) -> None:
        self._logger.debug(f"{record.name}: {record.getMessage()}")


def build_cli_logger(*, emoji: bool, ci: bool = False) -> CLILogger:
    """Return a ``CLILogger`` bound to a dedicated stderr Rich console."""

    console = Console(highlight=False, stderr=True, soft_wrap=True)
    return CLILogger(console=console, use_emoji=emoji, ci=ci)


__all__ = ["CLILogHandler", "CLILogger", "build_cli_logger"]
