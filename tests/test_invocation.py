# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for assembling the ktlint command line."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from ktwrap import invocation
from ktwrap.config import LauncherSettings
from ktwrap.constants import ADD_OPENS_FLAG, IDENTITY_PROPERTY, REPORTERS, ExitCode
from ktwrap.environment import JavaRuntime
from ktwrap.errors import RuntimeNotFoundError
from ktwrap.invocation import build_command, reporter_argument, run_ktlint, tool_arguments, tool_version
from ktwrap.options import parse_args

JAR = Path("/cache/ktlint")


@pytest.mark.parametrize("reporter", REPORTERS)
def test_reporter_argument_for_stdout_and_files(reporter: str) -> None:
    assert reporter_argument(reporter, None) == reporter
    assert reporter_argument(reporter, "out/report") == f"{reporter},output=out/report"


@pytest.mark.parametrize("reporter", [name for name in REPORTERS if name != "sarif"])
def test_relative_flag_added_for_non_sarif_reporters(reporter: str) -> None:
    args = tool_arguments(parse_args(["--relative", "-r", reporter]))

    assert "--relative" in args


def test_relative_flag_never_added_for_sarif() -> None:
    assert "--relative" not in tool_arguments(parse_args(["--relative", "-r", "sarif"]))
    assert "--relative" not in tool_arguments(parse_args(["-r", "sarif"]))


def test_full_command_order(java17: JavaRuntime, settings: LauncherSettings) -> None:
    config = parse_args(["-v", "--relative", "-F", "--color", "-d", "-r", "json", "-o", "-"])

    command = build_command(java17, JAR, config, ["a.kt", "b.kt"], settings=settings)

    assert command == [
        "/opt/jdk/bin/java",
        "-Xmx512m",
        IDENTITY_PROPERTY,
        ADD_OPENS_FLAG,
        "-jar",
        "/cache/ktlint",
        "--reporter=json",
        "--log-level=debug",
        "--color",
        "--format",
        "--relative",
        "--verbose",
        "a.kt",
        "b.kt",
    ]


def test_add_opens_only_for_java_17_and_newer(java11: JavaRuntime, settings: LauncherSettings) -> None:
    command = build_command(java11, JAR, parse_args([]), [], settings=settings)

    assert ADD_OPENS_FLAG not in command
    assert command == [
        "/opt/jdk/bin/java",
        "-Xmx512m",
        IDENTITY_PROPERTY,
        "-jar",
        "/cache/ktlint",
        "--reporter=plain",
    ]


def test_default_report_file_is_used_for_file_reporters(java17: JavaRuntime, settings: LauncherSettings) -> None:
    command = build_command(java17, JAR, parse_args(["-r", "sarif", "--relative"]), [], settings=settings)

    assert "--reporter=sarif,output=report.sarif" in command
    assert "--relative" not in command


def test_memory_setting_is_honoured(java17: JavaRuntime, tmp_path: Path) -> None:
    settings = LauncherSettings(tool_dir=tmp_path, java_memory="2g")

    command = build_command(java17, JAR, parse_args([]), [], settings=settings)

    assert command[1] == "-Xmx2g"


def test_jar_path_goes_through_converter(java17: JavaRuntime, settings: LauncherSettings) -> None:
    class _WindowsPaths:
        def native(self, path: object) -> str:
            return "C:\\cache\\ktlint"

        def host(self, path: object) -> Path:
            return Path(str(path))

    command = build_command(java17, JAR, parse_args([]), [], settings=settings, paths=_WindowsPaths())

    assert command[command.index("-jar") + 1] == "C:\\cache\\ktlint"


def test_run_ktlint_propagates_exit_status() -> None:
    seen: list[list[str]] = []

    def _executor(command: list[str]) -> int:
        seen.append(list(command))
        return 1

    assert run_ktlint(["java", "-jar", "ktlint"], executor=_executor) == 1
    assert seen == [["java", "-jar", "ktlint"]]


def test_run_ktlint_reports_unstartable_runtime() -> None:
    def _executor(command: list[str]) -> int:
        raise FileNotFoundError(2, "No such file or directory", command[0])

    with pytest.raises(RuntimeNotFoundError, match="Unable to start /opt/jdk/bin/java") as excinfo:
        run_ktlint(["/opt/jdk/bin/java", "-jar", "ktlint"], executor=_executor)

    assert excinfo.value.exit_code == ExitCode.RUNTIME_NOT_FOUND


def test_tool_version_reads_first_line(
    monkeypatch: pytest.MonkeyPatch,
    java17: JavaRuntime,
    settings: LauncherSettings,
) -> None:
    captured: dict[str, list[str]] = {}

    def _fake_run(command: list[str], **_kwargs: object) -> SimpleNamespace:
        captured["command"] = list(command)
        return SimpleNamespace(returncode=0, stdout="ktlint version 1.3.1\n", stderr="")

    monkeypatch.setattr(invocation, "run_command", _fake_run)

    assert tool_version(java17, JAR, settings=settings) == "1.3.1"
    assert captured["command"][-1] == "--version"
    assert captured["command"][-2] == "/cache/ktlint"


def test_tool_version_unknown_when_launch_fails(
    monkeypatch: pytest.MonkeyPatch,
    java17: JavaRuntime,
    settings: LauncherSettings,
) -> None:
    def _boom(*_args: object, **_kwargs: object) -> None:
        raise FileNotFoundError("java")

    monkeypatch.setattr(invocation, "run_command", _boom)

    assert tool_version(java17, JAR, settings=settings) is None
