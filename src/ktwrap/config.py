# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Launcher settings derived from the process environment."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    CI_ENV,
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_JAVA_MEMORY,
    DEFAULT_REPOSITORY,
    JAVA_HOME_ENV,
    LATEST_TAG,
    MEMORY_ENV,
    PACKAGE_DIR,
    REPOSITORY_ENV,
    TIMEOUT_ENV,
    TOKEN_ENV,
    TOOL_BINARY_NAME,
    TOOL_DIR_ENV,
    VERSION_ENV,
)

_MEMORY_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\d+[kKmMgG]?$")
_REPOSITORY_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[\w.-]+/[\w.-]+$")

_ENV_FIELDS: Final[dict[str, str]] = {
    "java_home": JAVA_HOME_ENV,
    "github_actions": CI_ENV,
    "github_token": TOKEN_ENV,
    "repository": REPOSITORY_ENV,
    "ktlint_version": VERSION_ENV,
    "tool_dir": TOOL_DIR_ENV,
    "java_memory": MEMORY_ENV,
    "download_timeout": TIMEOUT_ENV,
}


class LauncherSettings(BaseModel):
    """Immutable launcher configuration sourced from environment variables."""

    model_config = ConfigDict(frozen=True)

    java_home: str | None = None
    github_actions: bool = False
    github_token: str | None = Field(default=None, repr=False)
    repository: str = DEFAULT_REPOSITORY
    ktlint_version: str | None = None
    tool_dir: Path = PACKAGE_DIR / "bin"
    java_memory: str = DEFAULT_JAVA_MEMORY
    download_timeout: int = Field(default=DEFAULT_DOWNLOAD_TIMEOUT, gt=0)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "LauncherSettings":
        """Build settings from ``environ`` (defaults to :data:`os.environ`).

        Empty values are treated as unset so that ``FOO=`` never overrides a default.
        """

        source = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field_name, variable in _ENV_FIELDS.items():
            raw = source.get(variable, "").strip()
            if raw:
                values[field_name] = raw
        return cls.model_validate(values)

    @field_validator("github_actions", mode="before")
    @classmethod
    def _coerce_ci_flag(cls, value: object) -> bool:
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return bool(value)

    @field_validator("repository")
    @classmethod
    def _validate_repository(cls, value: str) -> str:
        if not _REPOSITORY_PATTERN.match(value):
            raise ValueError(f"repository must look like 'owner/name', got {value!r}")
        return value

    @field_validator("java_memory")
    @classmethod
    def _validate_memory(cls, value: str) -> str:
        if not _MEMORY_PATTERN.match(value):
            raise ValueError(f"java memory must look like '512m', got {value!r}")
        return value

    @field_validator("tool_dir", mode="before")
    @classmethod
    def _expand_tool_dir(cls, value: str | Path) -> Path:
        return Path(value).expanduser()

    @property
    def release_tag(self) -> str | None:
        """Return the pinned release tag, or ``None`` for the latest release."""

        if self.ktlint_version in (None, LATEST_TAG):
            return None
        return self.ktlint_version

    @property
    def tool_path(self) -> Path:
        """Location of the downloaded ktlint binary."""

        return self.tool_dir / TOOL_BINARY_NAME


__all__ = ["LauncherSettings"]
