# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Finding remapping and per-contract normalisation."""

from __future__ import annotations

from .normalizer import IssueNormalizer
from .remap import MISSING_ID, UNKNOWN_SOURCE, remap_findings

__all__ = ("IssueNormalizer", "MISSING_ID", "UNKNOWN_SOURCE", "remap_findings")
