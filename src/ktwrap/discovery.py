# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve positional inputs into the file list handed to ktlint."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .constants import KOTLIN_EXTENSIONS, WILDCARD
from .errors import NoInputFilesError
from .filesystem.paths import PassthroughPaths, PathConverter

Notifier = Callable[[str], None]


def _print_notice(message: str) -> None:
    print(message)


@dataclass(slots=True)
class InputResolver:
    """Expand files, directories and wildcard patterns into concrete inputs.

    Relative inputs are checked against ``root`` but keep the spelling the
    user gave them, so ktlint reports paths the way they were typed.
    """

    root: Path | None = None
    paths: PathConverter = field(default_factory=PassthroughPaths)
    notify: Notifier = _print_notice

    def resolve(self, inputs: Sequence[str]) -> list[str]:
        """Return the sorted, de-duplicated inputs for ktlint.

        Args:
            inputs: Raw positional arguments in arrival order.

        Returns:
            list[str]: Normalised file paths and verbatim wildcard patterns.

        Raises:
            NoInputFilesError: If ``inputs`` is non-empty but nothing resolved.
        """

        collected: list[str] = []
        for entry in inputs:
            collected.extend(self._expand(entry))

        resolved = sorted(set(collected))
        if inputs and not resolved:
            raise NoInputFilesError(list(inputs))
        return resolved

    def _expand(self, entry: str) -> Iterator[str]:
        location = self._locate(entry)
        if location.is_file():
            yield self.paths.native(os.path.normpath(entry))
        elif WILDCARD in entry:
            yield entry
        elif location.is_dir():
            yield from self._walk(entry, location)
        else:
            self.notify(f"Skipping non-existent path: {entry}")

    def _locate(self, entry: str) -> Path:
        candidate = Path(entry)
        if self.root is None or candidate.is_absolute():
            return candidate
        return self.root / candidate

    def _walk(self, entry: str, location: Path) -> Iterator[str]:
        """Yield source files below ``location`` spelled relative to ``entry``."""

        for dirpath, dirnames, filenames in os.walk(location):
            dirnames.sort()
            relative = Path(dirpath).relative_to(location)
            for filename in filenames:
                if not filename.endswith(KOTLIN_EXTENSIONS):
                    continue
                if not (Path(dirpath) / filename).is_file():
                    continue
                yield self.paths.native(os.path.normpath(Path(entry) / relative / filename))


def resolve_inputs(
    inputs: Sequence[str],
    *,
    root: Path | None = None,
    paths: PathConverter | None = None,
    notify: Notifier | None = None,
) -> list[str]:
    """Resolve ``inputs`` with an :class:`InputResolver` built from the arguments."""

    resolver = InputResolver(
        root=root,
        paths=paths if paths is not None else PassthroughPaths(),
        notify=notify if notify is not None else _print_notice,
    )
    return resolver.resolve(inputs)


__all__ = ["InputResolver", "Notifier", "resolve_inputs"]
