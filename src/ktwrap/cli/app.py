# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the launcher pipeline."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

import typer
from pydantic import ValidationError

from .. import __version__
from ..config import LauncherSettings
from ..console import detect_tty
from ..constants import CI_ENV, LATEST_TAG, LICENSE_TEXT, PROG_NAME, USAGE, ExitCode
from ..discovery import InputResolver
from ..environment import JavaRuntime, locate_java
from ..errors import LauncherError
from ..filesystem.paths import PathConverter, default_path_converter
from ..invocation import Executor, build_command, run_ktlint, tool_version
from ..logging import report_error
from ..options import ParseAction, RunConfig, parse_args
from ..process_utils import execute
from ..release import ReleaseFetcher, ensure_tool
from .shared import CLILogger, CLILogHandler, build_cli_logger

app = typer.Typer(
    name=PROG_NAME,
    help="Download ktlint on demand and lint Kotlin sources.",
    add_completion=False,
    pretty_exceptions_enable=False,
)


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
    add_help_option=False,
)
def launch(ctx: typer.Context) -> None:
    """Run ktlint on the given files, directories or patterns."""

    raise typer.Exit(code=run(list(ctx.args)))


def run(
    argv: Sequence[str],
    *,
    settings: LauncherSettings | None = None,
    paths: PathConverter | None = None,
    fetcher: ReleaseFetcher | None = None,
    executor: Executor = execute,
    cwd: Path | None = None,
) -> int:
    """Execute one launcher run and return the process exit status.

    Args:
        argv: Arguments following the program name.
        settings: Launcher settings; read from the environment when omitted.
        paths: Path converter; chosen for the host when omitted.
        fetcher: Release fetcher used when ktlint is not cached yet.
        executor: Callable running the final command and returning its status.
        cwd: Directory that relative inputs are resolved against.

    Returns:
        int: ``0`` on success, ktlint's own status, or a launcher exit code.
    """

    if settings is None:
        try:
            settings = LauncherSettings.from_environ()
        except ValidationError as exc:
            ci = os.environ.get(CI_ENV, "").strip().lower() == "true"
            report_error(f"Invalid launcher configuration: {exc}", ci=ci, title=PROG_NAME)
            return ExitCode.INCOMPATIBLE_HOST

    logger = build_cli_logger(emoji=detect_tty(), ci=settings.github_actions)
    try:
        config = parse_args(argv)
    except LauncherError as exc:
        logger.error(exc)
        return exc.exit_code

    if config.action is ParseAction.HELP:
        logger.echo(USAGE.rstrip("\n"))
        return ExitCode.OK
    if config.action is ParseAction.LICENSE:
        logger.echo(LICENSE_TEXT.rstrip("\n"))
        return ExitCode.OK

    logger.debug_enabled = config.debug
    package_logger = logging.getLogger("ktwrap")
    handler = CLILogHandler(logger)
    previous_level = package_logger.level
    if config.debug:
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.DEBUG)
    try:
        return _run_pipeline(
            config,
            settings=settings,
            paths=paths if paths is not None else default_path_converter(),
            fetcher=fetcher,
            executor=executor,
            cwd=cwd,
            logger=logger,
        )
    except LauncherError as exc:
        logger.error(exc)
        return exc.exit_code
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)


def _run_pipeline(
    config: RunConfig,
    *,
    settings: LauncherSettings,
    paths: PathConverter,
    fetcher: ReleaseFetcher | None,
    executor: Executor,
    cwd: Path | None,
    logger: CLILogger,
) -> int:
    logger.debug(f"config={config}")
    runtime = locate_java(settings, paths=paths)
    logger.debug(f"java={runtime.executable} version={runtime.version} major={runtime.major}")

    cached = settings.tool_path.is_file()
    if not cached:
        logger.info(
            f"Downloading ktlint ({settings.release_tag or LATEST_TAG}) from {settings.repository}"
        )
    jar = ensure_tool(settings, fetcher, show_progress=config.download_progress)
    if not cached:
        logger.ok(f"Installed ktlint at {jar}")
    logger.debug(f"ktlint={jar}")

    if config.version_requested:
        _print_versions(runtime, jar, settings=settings, paths=paths, logger=logger)
        return ExitCode.OK

    resolver = InputResolver(root=cwd, paths=paths, notify=logger.info)
    files = resolver.resolve(config.inputs)
    logger.debug(f"files={len(files)}")

    command = build_command(runtime, jar, config, files, settings=settings, paths=paths)
    logger.command(command)
    return run_ktlint(command, executor=executor)


def _print_versions(
    runtime: JavaRuntime,
    jar: Path,
    *,
    settings: LauncherSettings,
    paths: PathConverter,
    logger: CLILogger,
) -> None:
    logger.echo(f"{PROG_NAME} {__version__}")
    logger.echo(f"ktlint {tool_version(runtime, jar, settings=settings, paths=paths) or 'unknown'}")
    logger.echo(f"java {runtime.version} ({runtime.executable})")


def main() -> None:
    """Console-script entry point."""

    app(prog_name=PROG_NAME)


__all__ = ["app", "launch", "main", "run"]
