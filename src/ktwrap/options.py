# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate the launcher's argument vector into a :class:`RunConfig`.

The launcher accepts a small, fixed flag set that is deliberately parsed by
hand rather than through Click: value switches accept both attached
(``-rjson``, ``--reporter=json``) and detached (``-r json``,
``--reporter json``) values, unknown switches and missing values map to
dedicated exit statuses, and ``--`` is consumed without ending flag
processing.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Final

from .constants import DEFAULT_REPORT_OUTPUTS, DEFAULT_REPORTER, STDOUT_SENTINEL
from .errors import MissingArgumentError, UnsupportedFlagError

END_OF_OPTIONS: Final[str] = "--"


class ParseAction(StrEnum):
    """What the launcher should do once parsing has finished."""

    RUN = "run"
    HELP = "help"
    LICENSE = "license"


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Fully resolved user intentions for a single launcher run."""

    reporter: str = DEFAULT_REPORTER
    output: str | None = None
    color: bool = False
    debug: bool = False
    format: bool = False
    relative: bool = False
    verbose: bool = False
    download_progress: bool = True
    version_requested: bool = False
    action: ParseAction = ParseAction.RUN
    inputs: tuple[str, ...] = ()

    def output_target(self) -> str | None:
        """Return the report destination, or ``None`` for standard output.

        An explicit ``--output`` wins (``-`` forcing standard output); otherwise
        file-oriented reporters fall back to their conventional report name.
        """

        if self.output is not None:
            return None if self.output == STDOUT_SENTINEL else self.output
        return DEFAULT_REPORT_OUTPUTS.get(self.reporter)


@dataclass(frozen=True, slots=True)
class OptionValue:
    """Value extracted for a switch and the number of extra tokens it consumed."""

    value: str
    consumed: int


_VALUE_OPTIONS: Final[dict[str, str]] = {
    "-r": "reporter",
    "--reporter": "reporter",
    "-o": "output",
    "--output": "output",
}

_FLAG_OPTIONS: Final[dict[str, tuple[str, bool]]] = {
    "-F": ("format", True),
    "--format": ("format", True),
    "--color": ("color", True),
    "--relative": ("relative", True),
    "--no-download-progress": ("download_progress", False),
    "-d": ("debug", True),
    "--debug": ("debug", True),
    "-v": ("verbose", True),
    "--verbose": ("verbose", True),
    "-V": ("version_requested", True),
    "--version": ("version_requested", True),
}

_TERMINAL_OPTIONS: Final[dict[str, ParseAction]] = {
    "-h": ParseAction.HELP,
    "--help": ParseAction.HELP,
    "-l": ParseAction.LICENSE,
    "--license": ParseAction.LICENSE,
}


def split_option(token: str) -> tuple[str, str | None]:
    """Split ``token`` into its switch name and attached value.

    ``--name=value`` yields ``("--name", "value")`` and ``-xvalue`` yields
    ``("-x", "value")``. Tokens without an attached value return ``None``
    as the value; ``--name=`` returns an empty string.
    """

    if token.startswith("--"):
        name, separator, value = token.partition("=")
        return name, value if separator else None
    if len(token) > 2:
        return token[:2], token[2:]
    return token, None


def option_value(
    argv: Sequence[str],
    index: int,
    *,
    name: str,
    attached: str | None,
) -> OptionValue:
    """Return the value for the switch at ``argv[index]``.

    Args:
        argv: Full argument vector being parsed.
        index: Position of the switch within ``argv``.
        name: Switch name used in error messages.
        attached: Value attached to the switch token, if any.

    Returns:
        OptionValue: The value and how many following tokens were consumed.

    Raises:
        MissingArgumentError: If neither an attached nor a following value exists.
    """

    if attached is not None:
        if not attached:
            raise MissingArgumentError(f"Option requires an argument: {name}")
        return OptionValue(attached, 0)
    if index + 1 >= len(argv) or not argv[index + 1]:
        raise MissingArgumentError(f"Option requires an argument: {name}")
    return OptionValue(argv[index + 1], 1)


def parse_args(argv: Sequence[str]) -> RunConfig:
    """Parse ``argv`` (without the program name) into a :class:`RunConfig`.

    Raises:
        UnsupportedFlagError: For any unknown token starting with ``-``.
        MissingArgumentError: When ``--reporter``/``--output`` lack a value.
    """

    values: dict[str, Any] = {}
    inputs: list[str] = []
    index = 0
    while index < len(argv):
        token = argv[index]
        if token == END_OF_OPTIONS:
            # Consumed only; later tokens are still parsed as switches.
            index += 1
            continue
        if not token.startswith("-"):
            inputs.append(token)
            index += 1
            continue

        if token in _TERMINAL_OPTIONS:
            return RunConfig(action=_TERMINAL_OPTIONS[token], inputs=tuple(inputs), **values)
        if token in _FLAG_OPTIONS:
            field_name, enabled = _FLAG_OPTIONS[token]
            values[field_name] = enabled
            index += 1
            continue

        name, attached = split_option(token)
        if name not in _VALUE_OPTIONS:
            raise UnsupportedFlagError(f"Unsupported flag: {token}")
        parsed = option_value(argv, index, name=name, attached=attached)
        values[_VALUE_OPTIONS[name]] = parsed.value
        index += 1 + parsed.consumed

    return RunConfig(inputs=tuple(inputs), **values)


__all__ = [
    "END_OF_OPTIONS",
    "OptionValue",
    "ParseAction",
    "RunConfig",
    "option_value",
    "parse_args",
    "split_option",
]
