# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for diagnostic filtering and reporting."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.severity import DiagnosticLevel, level_from_name
from .errors import ConfigError

LOGGER = logging.getLogger(__name__)

SWC_PREFIX: Final[str] = "SWC-"
PROJECT_CONFIG_NAME: Final[str] = "swclint.json"
DEFAULT_STYLE: Final[str] = "stylish"
FULL_MESSAGE_STYLES: Final[frozenset[str]] = frozenset({"tap", "markdown", "json"})


def normalize_rule_id(value: object) -> str:
    """Return ``value`` in ``SWC-<id>`` form."""

    text = str(value).strip()
    if text.upper().startswith(SWC_PREFIX):
        return SWC_PREFIX + text[len(SWC_PREFIX) :].strip()
    return SWC_PREFIX + text


def parse_id_blacklist(value: object) -> tuple[str, ...]:
    """Return normalised rule ids from a blacklist option.

    Args:
        value: Comma-separated string, integer, sequence, or a falsy value.

    Returns:
        tuple[str, ...]: Rule ids in ``SWC-<id>`` form; empty when ``value`` is falsy.
    """

    if value is None or value is False or value == "":
        return ()
    if isinstance(value, str):
        items: Iterable[object] = value.split(",")
    elif isinstance(value, Iterable):
        items = value
    else:
        items = (value,)
    return tuple(normalize_rule_id(item) for item in items if str(item).strip())


def parse_severity_threshold(value: object) -> DiagnosticLevel:
    """Return the numeric threshold for a ``min-severity`` option.

    ``error`` maps to 2; anything else, including no value, to 1.
    """

    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return DiagnosticLevel(value)
        except ValueError as exc:
            raise ConfigError(f"invalid severity threshold {value!r}") from exc
    return level_from_name(str(value) if value else None)


class FilterConfig(BaseModel):
    """Severity threshold and rule-id blacklist applied to diagnostics."""

    model_config = ConfigDict(frozen=True)

    severity_threshold: Literal[1, 2] | None = None
    id_blacklist: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("id_blacklist", mode="before")
    @classmethod
    def _normalise_blacklist(cls, value: object) -> tuple[str, ...]:
        return parse_id_blacklist(value)


class ReportConfig(BaseModel):
    """Options controlling how findings become diagnostic reports."""

    model_config = ConfigDict(frozen=True)

    style: str = DEFAULT_STYLE
    debug: int = 0
    filters: FilterConfig = Field(default_factory=FilterConfig)

    @property
    def space_limited(self) -> bool:
        """Return ``True`` when messages should carry only the short description."""

        return self.style not in FULL_MESSAGE_STYLES


def load_project_config(root: Path) -> dict[str, Any]:
    """Return project-level defaults stored in ``swclint.json`` under ``root``.

    A missing or malformed file yields ``{}``.
    """

    path = root / PROJECT_CONFIG_NAME
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        LOGGER.debug("%s not found; default options apply", path)
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        LOGGER.debug("%s could not be read (%s); default options apply", path, exc)
        return {}
    if not isinstance(payload, dict):
        LOGGER.debug("%s does not hold a JSON object; default options apply", path)
        return {}
    return payload


def build_report_config(
    options: Mapping[str, Any],
    project: Mapping[str, Any] | None = None,
) -> ReportConfig:
    """Merge explicit ``options`` over ``project`` defaults into a :class:`ReportConfig`.

    Args:
        options: Explicitly supplied options; ``None`` values are treated as unset.
        project: Defaults loaded via :func:`load_project_config`.

    Returns:
        ReportConfig: Validated report configuration.

    Raises:
        ConfigError: If a merged value is invalid.
    """

    merged: dict[str, Any] = dict(project or {})
    merged.update({key: value for key, value in options.items() if value is not None})
    try:
        filters = FilterConfig(
            severity_threshold=int(parse_severity_threshold(merged.get("min-severity"))),
            id_blacklist=merged.get("swc-blacklist"),
        )
        return ReportConfig(
            style=merged.get("style") or DEFAULT_STYLE,
            debug=int(merged.get("debug") or 0),
            filters=filters,
        )
    except (ValidationError, ValueError, TypeError) as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc


__all__ = [
    "FilterConfig",
    "PROJECT_CONFIG_NAME",
    "ReportConfig",
    "build_report_config",
    "load_project_config",
    "normalize_rule_id",
    "parse_id_blacklist",
    "parse_severity_threshold",
]
