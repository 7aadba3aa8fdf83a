# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across ktwrap modules."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import Final

PROG_NAME: Final[str] = "ktwrap"
PACKAGE_DIR: Final[Path] = Path(__file__).resolve().parent


class ExitCode(IntEnum):
    """Process exit statuses reported by the launcher."""

    OK = 0
    TOOL_FAILURE = 1
    RUNTIME_NOT_FOUND = 2
    DOWNLOAD_FAILURE = 3
    UNSUPPORTED_FLAG = 4
    MISSING_ARGUMENT = 6
    NO_INPUT_FILES = 7
    INCOMPATIBLE_HOST = 8


DEFAULT_REPORTER: Final[str] = "plain"
SARIF_REPORTER: Final[str] = "sarif"
STDOUT_SENTINEL: Final[str] = "-"

REPORTERS: Final[tuple[str, ...]] = (
    "plain",
    "plain?group_by_file",
    "json",
    SARIF_REPORTER,
    "checkstyle",
    "html",
)

DEFAULT_REPORT_OUTPUTS: Final[dict[str, str]] = {
    SARIF_REPORTER: "report.sarif",
    "json": "report.json",
    "checkstyle": "checkstyle-report.xml",
    "html": "report.html",
}

KOTLIN_EXTENSIONS: Final[tuple[str, ...]] = (".kt", ".kts")
WILDCARD: Final[str] = "*"

# Release assets that are never the tool itself.
SIGNATURE_SUFFIXES: Final[tuple[str, ...]] = (
    ".asc",
    ".sig",
    ".md5",
    ".sha1",
    ".sha256",
    ".sha512",
)

DEFAULT_REPOSITORY: Final[str] = "pinterest/ktlint"
LATEST_TAG: Final[str] = "latest"
GITHUB_API_URL: Final[str] = "https://api.github.com"
TOOL_BINARY_NAME: Final[str] = "ktlint"
DEFAULT_DOWNLOAD_TIMEOUT: Final[int] = 60
DOWNLOAD_CHUNK_SIZE: Final[int] = 65536

DEFAULT_JAVA_MEMORY: Final[str] = "512m"
MIN_JAVA_MAJOR: Final[int] = 11
ADD_OPENS_MIN_MAJOR: Final[int] = 17
IDENTITY_PROPERTY: Final[str] = f"-Dktwrap.launcher={PROG_NAME}"
ADD_OPENS_FLAG: Final[str] = "--add-opens=java.base/java.lang=ALL-UNNAMED"

JAVA_HOME_ENV: Final[str] = "JAVA_HOME"
CI_ENV: Final[str] = "GITHUB_ACTIONS"
TOKEN_ENV: Final[str] = "GITHUB_TOKEN"
REPOSITORY_ENV: Final[str] = "KTWRAP_REPOSITORY"
VERSION_ENV: Final[str] = "KTWRAP_KTLINT_VERSION"
TOOL_DIR_ENV: Final[str] = "KTWRAP_TOOL_DIR"
MEMORY_ENV: Final[str] = "KTWRAP_JAVA_MEMORY"
TIMEOUT_ENV: Final[str] = "KTWRAP_DOWNLOAD_TIMEOUT"

USAGE: Final[str] = f"""\
Usage: {PROG_NAME} [options] [<file|directory|"pattern">...]

Download ktlint on demand and lint Kotlin sources.

Options:
  -F, --format               Fix style violations where possible
  -r, --reporter=R           Report format: {", ".join(REPORTERS)}
  -o, --output=PATH          Write the report to PATH ('-' forces stdout)
      --color                Colorize output
      --relative             Print paths relative to the working directory
                             (ignored for the sarif reporter)
      --no-download-progress Do not display download progress
  -d, --debug                Trace launcher internals and echo the command
  -v, --verbose              Verbose ktlint output
  -V, --version              Print ktlint and Java versions, then exit
  -l, --license              Print the license, then exit
  -h, --help                 Print this help, then exit

Inputs may be files, directories (searched for {" and ".join(KOTLIN_EXTENSIONS)} files)
or quoted patterns containing '{WILDCARD}' that ktlint expands itself.
"""

LICENSE_TEXT: Final[str] = """\
MIT License

Copyright (c) 2025 Blackcat Informatics® Inc.

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""
