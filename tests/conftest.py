# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from ktwrap.config import LauncherSettings
from ktwrap.constants import (
    CI_ENV,
    JAVA_HOME_ENV,
    MEMORY_ENV,
    REPOSITORY_ENV,
    TIMEOUT_ENV,
    TOKEN_ENV,
    TOOL_DIR_ENV,
    VERSION_ENV,
)
from ktwrap.environment import JavaRuntime

_LAUNCHER_ENV = (
    CI_ENV,
    JAVA_HOME_ENV,
    MEMORY_ENV,
    REPOSITORY_ENV,
    TIMEOUT_ENV,
    TOKEN_ENV,
    TOOL_DIR_ENV,
    VERSION_ENV,
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's and CI's environment out of launcher tests."""
    for name in _LAUNCHER_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path: Path) -> LauncherSettings:
    """Return settings whose tool directory lives under ``tmp_path``."""
    return LauncherSettings(tool_dir=tmp_path / "bin")


@pytest.fixture
def java17() -> JavaRuntime:
    return JavaRuntime(executable=Path("/opt/jdk/bin/java"), version="17.0.2", major=17)


@pytest.fixture
def java11() -> JavaRuntime:
    return JavaRuntime(executable=Path("/opt/jdk/bin/java"), version="11.0.21", major=11)
