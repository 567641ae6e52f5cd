# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve smart-contract analysis findings into ESLint-style diagnostics."""

from __future__ import annotations

from importlib import metadata

__all__ = ["__version__"]

try:
    __version__ = metadata.version("swclint")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0"
