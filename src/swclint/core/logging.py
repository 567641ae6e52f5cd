# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console messages for CLI users and the package log handler."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

PACKAGE_LOGGER = "swclint"


def detect_tty() -> bool:
    """Return ``True`` when stderr appears to be backed by a terminal."""

    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=4)
def get_console(*, color: bool, emoji: bool) -> Console:
    """Return a stderr console configured for the presentation flags.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.

    Returns:
        Console: Cached console bound to standard error.
    """

    tty = detect_tty()
    return Console(
        stderr=True,
        color_system="auto" if color and tty else None,
        no_color=not (color and tty),
        emoji=emoji,
        highlight=False,
        soft_wrap=True,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, else an empty string."""

    return symbol if enable else ""


@dataclass(frozen=True, slots=True)
class _Tone:
    glyph: str
    style: str


_TONES: Final[dict[str, _Tone]] = {
    "info": _Tone("ℹ️ ", "cyan"),
    "warn": _Tone("⚠️ ", "yellow"),
    "fail": _Tone("❌ ", "bold red"),
}


def report_line(tone: str, msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print ``msg`` to stderr with the glyph and style of ``tone``.

    Args:
        tone: One of ``info``, ``warn`` or ``fail``.
        msg: Message text.
        use_emoji: Prefix the tone glyph when ``True``.
        use_color: Force colour on or off; ``None`` follows the terminal.
    """

    selected = _TONES[tone]
    color_enabled = detect_tty() if use_color is None else use_color
    text = Text(emoji(selected.glyph, use_emoji) + msg)
    if color_enabled:
        text.stylize(selected.style)
    get_console(color=color_enabled, emoji=use_emoji).print(text)


def section(title: str, *, use_color: bool) -> None:
    """Print a header separating per-contract output blocks."""

    console = get_console(color=use_color, emoji=True)
    if not use_color:
        console.print(f"\n== {title} ==")
        return
    console.print(Rule(title, style="dim"))


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message such as a written report path."""

    report_line("info", msg, use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning, used for engine log lines."""

    report_line("warn", msg, use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error such as a missing contract or an unreadable input."""

    report_line("fail", msg, use_emoji=use_emoji, use_color=use_color)


def configure_logging(*, debug: bool = False) -> logging.Logger:
    """Route package log records to a Rich handler on standard error.

    Degraded location decoding is reported at ``DEBUG`` level, so it only
    becomes visible when ``debug`` is set.

    Args:
        debug: Enable ``DEBUG`` level tracing.

    Returns:
        logging.Logger: The configured package logger.
    """

    level = logging.DEBUG if debug else logging.WARNING
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=debug,
            markup=False,
        )
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


__all__ = [
    "configure_logging",
    "detect_tty",
    "emoji",
    "fail",
    "get_console",
    "info",
    "report_line",
    "section",
    "warn",
]
