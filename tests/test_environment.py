# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for locating the Java runtime."""

from __future__ import annotations

import stat
from pathlib import Path
from types import SimpleNamespace

import pytest

from ktwrap import environment
from ktwrap.config import LauncherSettings
from ktwrap.constants import ExitCode
from ktwrap.environment import find_java_executable, locate_java, parse_major, probe_version
from ktwrap.errors import IncompatibleHostError, RuntimeNotFoundError


def _fake_java(home: Path) -> Path:
    binary = home / "bin" / "java"
    binary.parent.mkdir(parents=True)
    binary.write_text("#!/bin/sh\n", encoding="utf-8")
    binary.chmod(binary.stat().st_mode | stat.S_IXUSR)
    return binary


@pytest.mark.parametrize(
    ("version", "major"),
    [
        ("1.8.0_292", 8),
        ("11.0.21", 11),
        ("17.0.2", 17),
        ("21", 21),
        ("22-ea", 22),
        ("garbage", None),
    ],
)
def test_parse_major(version: str, major: int | None) -> None:
    assert parse_major(version) == major


def test_java_home_takes_precedence(tmp_path: Path) -> None:
    binary = _fake_java(tmp_path / "jdk")
    settings = LauncherSettings(java_home=str(tmp_path / "jdk"), tool_dir=tmp_path)

    found = find_java_executable(settings, which=lambda _name: "/usr/bin/java")

    assert found == binary


def test_invalid_java_home_is_fatal(tmp_path: Path) -> None:
    settings = LauncherSettings(java_home=str(tmp_path / "nowhere"), tool_dir=tmp_path)

    with pytest.raises(RuntimeNotFoundError) as excinfo:
        find_java_executable(settings, which=lambda _name: "/usr/bin/java")

    assert excinfo.value.exit_code == ExitCode.RUNTIME_NOT_FOUND
    assert "JAVA_HOME" in str(excinfo.value)


def test_search_path_is_used_without_java_home(settings: LauncherSettings) -> None:
    found = find_java_executable(settings, which=lambda _name: "/usr/lib/jvm/bin/java")

    assert found == Path("/usr/lib/jvm/bin/java")


def test_missing_runtime_is_fatal(settings: LauncherSettings) -> None:
    with pytest.raises(RuntimeNotFoundError):
        find_java_executable(settings, which=lambda _name: None)


def test_java_home_is_translated_for_the_host(tmp_path: Path) -> None:
    binary = _fake_java(tmp_path / "jdk")

    class _Paths:
        def native(self, path: object) -> str:
            return str(path)

        def host(self, path: object) -> Path:
            assert path == "C:\\Java\\jdk"
            return tmp_path / "jdk"

    settings = LauncherSettings(java_home="C:\\Java\\jdk", tool_dir=tmp_path)

    assert find_java_executable(settings, paths=_Paths()) == binary


def test_locate_java_derives_version(settings: LauncherSettings) -> None:
    runtime = locate_java(
        settings,
        which=lambda _name: "/usr/bin/java",
        probe=lambda _executable: "17.0.9",
    )

    assert runtime.executable == Path("/usr/bin/java")
    assert runtime.version == "17.0.9"
    assert runtime.major == 17
    assert runtime.needs_add_opens


def test_old_runtime_is_incompatible(settings: LauncherSettings) -> None:
    with pytest.raises(IncompatibleHostError) as excinfo:
        locate_java(settings, which=lambda _name: "/usr/bin/java", probe=lambda _executable: "1.8.0_292")

    assert excinfo.value.exit_code == ExitCode.INCOMPATIBLE_HOST


def test_unknown_version_is_incompatible(settings: LauncherSettings) -> None:
    with pytest.raises(IncompatibleHostError):
        locate_java(settings, which=lambda _name: "/usr/bin/java", probe=lambda _executable: None)


def test_probe_version_reads_stderr_banner(monkeypatch: pytest.MonkeyPatch) -> None:
    banner = 'openjdk version "21.0.1" 2023-10-17\nOpenJDK Runtime Environment\n'

    def _fake_run(command: list[str], **_kwargs: object) -> SimpleNamespace:
        assert command[1] == "-version"
        return SimpleNamespace(returncode=0, stdout="", stderr=banner)

    monkeypatch.setattr(environment, "run_command", _fake_run)

    assert probe_version(Path("/usr/bin/java")) == "21.0.1"


def test_probe_version_handles_launch_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*_args: object, **_kwargs: object) -> None:
        raise PermissionError("denied")

    monkeypatch.setattr(environment, "run_command", _boom)

    assert probe_version(Path("/usr/bin/java")) is None
