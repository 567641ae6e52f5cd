# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Partition engine findings into per-source-file groups."""

from __future__ import annotations

import logging
from typing import Final

from ..core.models import AnalysisResult, FindingGroup, RawFinding, SourceLocation
from ..sourcemap.encoding import file_index_of

LOGGER = logging.getLogger(__name__)

UNKNOWN_SOURCE: Final[str] = "unknown"
MISSING_ID: Final[str] = "N/A"
NO_FILE_INDEX: Final[int] = -1


def _group_skeletons(result: AnalysisResult) -> list[FindingGroup]:
    """Return one empty group per unique source name known to ``result``."""

    groups: list[FindingGroup] = []
    seen: set[str] = set()

    def add(source: str, source_type: str | None, source_format: str | None) -> None:
        if source in seen:
            return
        seen.add(source)
        groups.append(
            FindingGroup(
                source_index=len(groups),
                source=source,
                source_type=source_type,
                source_format=source_format,
            ),
        )

    for source in result.source_list:
        add(source, result.source_type, result.source_format)
    for issue in result.issues:
        for location in issue.locations:
            for source in location.source_list:
                add(
                    source,
                    location.source_type or result.source_type,
                    location.source_format or result.source_format,
                )

    if result.issues and not groups:
        fallback = result.source or UNKNOWN_SOURCE
        LOGGER.debug("analysis result has no source list; attaching findings to %r", fallback)
        add(fallback, result.source_type, result.source_format)
    return groups


def _single_location_copy(issue: RawFinding, location: SourceLocation | None) -> RawFinding:
    return issue.model_copy(
        update={
            "swc_id": issue.swc_id or MISSING_ID,
            "swc_title": issue.swc_title or MISSING_ID,
            "locations": [location] if location is not None else [],
        },
    )


def _target_group(location: SourceLocation, result: AnalysisResult, groups: list[FindingGroup]) -> FindingGroup:
    """Return the group ``location`` belongs to, defaulting to the first one."""

    index = file_index_of(location.source_map)
    if index is None or index == NO_FILE_INDEX:
        LOGGER.debug("location %r names no source file; attaching to group 0", location.source_map)
        index = 0
    names = location.source_list or tuple(result.source_list)
    if 0 <= index < len(names):
        for group in groups:
            if group.source == names[index]:
                return group
    LOGGER.debug("source index %d of %r is not in the source list; attaching to group 0", index, location.source_map)
    return groups[0]


def remap_findings(result: AnalysisResult) -> list[FindingGroup]:
    """Group the findings of ``result`` by the source file they point at.

    Each location of a finding contributes one copy of the finding carrying
    only that location. Findings without any location are attached to the
    first group. A file index of ``-1`` is attributed to the first file.

    Args:
        result: Raw engine result.

    Returns:
        list[FindingGroup]: Groups in source-list order; empty when there are
        neither sources nor findings.
    """

    groups = _group_skeletons(result)
    for issue in result.issues:
        if not issue.locations:
            groups[0].issues.append(_single_location_copy(issue, None))
            continue
        for location in issue.locations:
            _target_group(location, result, groups).issues.append(_single_location_copy(issue, location))
    return groups


__all__ = ["MISSING_ID", "UNKNOWN_SOURCE", "remap_findings"]
