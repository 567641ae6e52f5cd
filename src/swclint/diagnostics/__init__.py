# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Diagnostics package exposing filtering, grouping, and deduplication helpers."""

from __future__ import annotations

from .dedupe import count_levels, dedupe_messages, dedupe_report, dedupe_reports, is_error
from .filtering import filter_diagnostics, keep
from .grouping import compare_line_column, compare_message_ranges, merge_by_path, sort_messages

__all__ = (
    "compare_line_column",
    "compare_message_ranges",
    "count_levels",
    "dedupe_messages",
    "dedupe_report",
    "dedupe_reports",
    "filter_diagnostics",
    "is_error",
    "keep",
    "merge_by_path",
    "sort_messages",
)
