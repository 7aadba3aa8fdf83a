# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for environment-driven launcher settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from ktwrap.config import LauncherSettings
from ktwrap.constants import DEFAULT_REPOSITORY, PACKAGE_DIR


def test_defaults_from_empty_environment() -> None:
    settings = LauncherSettings.from_environ({})

    assert settings.java_home is None
    assert settings.github_actions is False
    assert settings.github_token is None
    assert settings.repository == DEFAULT_REPOSITORY
    assert settings.release_tag is None
    assert settings.tool_dir == PACKAGE_DIR / "bin"
    assert settings.tool_path == PACKAGE_DIR / "bin" / "ktlint"
    assert settings.java_memory == "512m"
    assert settings.download_timeout == 60


def test_values_are_read_from_environment(tmp_path: Path) -> None:
    settings = LauncherSettings.from_environ(
        {
            "JAVA_HOME": "/opt/jdk",
            "GITHUB_ACTIONS": "true",
            "GITHUB_TOKEN": "token",
            "KTWRAP_REPOSITORY": "example/ktlint-fork",
            "KTWRAP_KTLINT_VERSION": "1.2.1",
            "KTWRAP_TOOL_DIR": str(tmp_path),
            "KTWRAP_JAVA_MEMORY": "1g",
            "KTWRAP_DOWNLOAD_TIMEOUT": "5",
        }
    )

    assert settings.java_home == "/opt/jdk"
    assert settings.github_actions is True
    assert settings.github_token == "token"
    assert settings.repository == "example/ktlint-fork"
    assert settings.release_tag == "1.2.1"
    assert settings.tool_dir == tmp_path
    assert settings.java_memory == "1g"
    assert settings.download_timeout == 5


def test_empty_values_count_as_unset() -> None:
    settings = LauncherSettings.from_environ({"JAVA_HOME": "", "KTWRAP_REPOSITORY": "  "})

    assert settings.java_home is None
    assert settings.repository == DEFAULT_REPOSITORY


@pytest.mark.parametrize("value", ["false", "1", "yes"])
def test_ci_flag_requires_literal_true(value: str) -> None:
    assert LauncherSettings.from_environ({"GITHUB_ACTIONS": value}).github_actions is False


def test_latest_version_means_newest_release() -> None:
    assert LauncherSettings.from_environ({"KTWRAP_KTLINT_VERSION": "latest"}).release_tag is None


@pytest.mark.parametrize(
    "environ",
    [
        {"KTWRAP_REPOSITORY": "not-a-repo"},
        {"KTWRAP_JAVA_MEMORY": "lots"},
        {"KTWRAP_DOWNLOAD_TIMEOUT": "0"},
        {"KTWRAP_DOWNLOAD_TIMEOUT": "soon"},
    ],
)
def test_invalid_values_are_rejected(environ: dict[str, str]) -> None:
    with pytest.raises(ValidationError):
        LauncherSettings.from_environ(environ)


def test_token_is_hidden_from_repr() -> None:
    settings = LauncherSettings(github_token="s3cret")

    assert "s3cret" not in repr(settings)


def test_settings_are_frozen() -> None:
    settings = LauncherSettings()

    with pytest.raises(ValidationError):
        settings.repository = "other/repo"  # type: ignore[misc]
