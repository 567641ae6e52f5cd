# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers shared by CLI commands: user messaging, exit errors, JSON input."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.text import Text

from ..core.logging import fail, info, section, warn


class CLIError(RuntimeError):
    """Command failure carrying the process exit status."""

    def __init__(self, message: str, *, exit_code: int = 2) -> None:
        """Store ``message`` and the status the command should exit with.

        Args:
            message: Text shown to the user on standard error.
            exit_code: Process exit status; malformed input uses 2.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class ConsoleReporter:
    """Routes command output: JSON to stdout, everything else to stderr."""

    console: Console
    use_emoji: bool
    use_color: bool = True
    verbose: bool = False

    def fail(self, message: str) -> None:
        """Report a failure on stderr."""

        fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        """Report a warning on stderr."""

        warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def info(self, message: str) -> None:
        """Report progress or a result location on stderr."""

        info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def section(self, title: str) -> None:
        """Start a titled block of stderr output."""

        section(title, use_color=self.use_color)

    def echo(self, document: str) -> None:
        """Write a result document to stdout."""

        typer.echo(document)

    def debug(self, message: str) -> None:
        """Print ``message`` only in verbose mode."""

        if not self.verbose:
            return
        line = Text("debug: ", style="dim cyan")
        line.append(message)
        self.console.print(line)


def build_reporter(*, emoji: bool, debug: bool = False, no_color: bool = False) -> ConsoleReporter:
    """Return a :class:`ConsoleReporter` bound to a fresh stderr console.

    Args:
        emoji: Allow emoji glyphs in messages.
        debug: Print debug messages.
        no_color: Disable colour output.

    Returns:
        ConsoleReporter: Reporter for one command invocation.
    """

    console = Console(stderr=True, no_color=no_color, highlight=False)
    return ConsoleReporter(console=console, use_emoji=emoji, use_color=not no_color, verbose=debug)


def read_json(path: Path) -> Any:
    """Return the JSON document stored at ``path``.

    Raises:
        CLIError: If the file cannot be read or parsed.
    """

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CLIError(f"cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CLIError(f"{path} is not valid JSON: {exc}") from exc


__all__ = ["CLIError", "ConsoleReporter", "build_reporter", "read_json"]
