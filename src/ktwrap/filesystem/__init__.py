# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem helpers."""

from __future__ import annotations

from .paths import CygwinPaths, PassthroughPaths, PathConverter, default_path_converter

__all__ = ["CygwinPaths", "PassthroughPaths", "PathConverter", "default_path_converter"]
