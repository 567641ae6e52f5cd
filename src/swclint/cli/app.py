# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from ..artifacts import (
    CompiledArtifact,
    found_contract_names,
    load_artifacts,
    not_analyzed_contracts,
    not_found_contracts,
    unique_contracts,
)
from ..config import ReportConfig, build_report_config, load_project_config
from ..core.logging import configure_logging
from ..core.models import AnalysisResult, DiagnosticFileReport
from ..errors import SwcLintError
from ..pipeline import BatchOutcome, ContractJob, build_reports, exit_status, normalize_contracts, visible_logs
from .shared import CLIError, ConsoleReporter, build_reporter, read_json

app = typer.Typer(
    name="swclint",
    help="Turn smart-contract analysis findings into ESLint-style diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main_callback() -> None:
    """Resolve analysis findings to source locations."""


def parse_results(payload: Any) -> dict[str | None, list[AnalysisResult]]:
    """Return analysis results keyed by contract name (``None`` when unkeyed).

    Accepted layouts are a single result object, a list of result objects, or
    an object mapping contract names to either of those.
    """

    try:
        if isinstance(payload, list):
            return {None: [AnalysisResult.model_validate(item) for item in payload]}
        if isinstance(payload, Mapping) and ("issues" in payload or "sourceList" in payload):
            return {None: [AnalysisResult.model_validate(payload)]}
        if isinstance(payload, Mapping):
            keyed: dict[str | None, list[AnalysisResult]] = {}
            for name, value in payload.items():
                items = value if isinstance(value, list) else [value]
                keyed[str(name)] = [AnalysisResult.model_validate(item) for item in items]
            return keyed
    except ValidationError as exc:
        raise CLIError(f"malformed analysis results: {exc}") from exc
    raise CLIError("analysis results must be a JSON object or array")


def build_jobs(
    artifacts: Sequence[CompiledArtifact],
    results: Mapping[str | None, list[AnalysisResult]],
) -> list[ContractJob]:
    """Pair artifacts with their analysis results."""

    if None in results:
        if len(artifacts) != 1:
            raise CLIError(
                f"results are not keyed by contract name but the build holds {len(artifacts)} contracts",
            )
        return [ContractJob(artifact=artifacts[0], results=results[None])]
    return [
        ContractJob(artifact=artifact, results=results[artifact.contract_name])
        for artifact in artifacts
        if artifact.contract_name in results
    ]


def _report_problems(
    reporter: ConsoleReporter,
    outcome: BatchOutcome,
    *,
    requested: Sequence[str] | None,
    debug: bool,
) -> None:
    missing = not_analyzed_contracts(outcome.analyzed_names, requested)
    if missing:
        reporter.fail(f"These smart contracts were unable to be analyzed: {', '.join(missing)}")
    for contract in outcome.contracts:
        logs = visible_logs(contract.logs, debug=debug)
        if not logs:
            continue
        reporter.section(f"Analysis logs: {contract.source_path or contract.contract_name}")
        for log in logs:
            reporter.warn(f"{log.level}: {log.msg}")
    if outcome.errors:
        reporter.fail("Internal analysis errors encountered:")
        for error in outcome.errors:
            reporter.fail(error)


def _emit(reports: Sequence[DiagnosticFileReport], output: Path | None, reporter: ConsoleReporter) -> None:
    document = json.dumps([report.to_payload() for report in reports], indent=2)
    if output is None:
        reporter.echo(document)
        return
    output.write_text(document + "\n", encoding="utf-8")
    reporter.info(f"Wrote {len(reports)} file report(s) to {output}")


@app.command("report")
def report(
    build: Annotated[Path, typer.Argument(help="Compiled build JSON (single or multi-contract).")],
    results: Annotated[Path, typer.Argument(help="Raw analysis results JSON.")],
    contracts: Annotated[
        list[str] | None,
        typer.Option("--contract", "-c", help="Only report these contract names."),
    ] = None,
    min_severity: Annotated[
        str | None,
        typer.Option("--min-severity", help="Ignore findings below this level (warning|error)."),
    ] = None,
    swc_blacklist: Annotated[
        str | None,
        typer.Option("--swc-blacklist", help="Comma-separated SWC ids to ignore, e.g. 101,103."),
    ] = None,
    style: Annotated[
        str | None,
        typer.Option("--style", help="Report style; tap, markdown and json keep full messages."),
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write JSON here instead of stdout.")] = None,
    project_root: Annotated[
        Path | None,
        typer.Option("--project-root", help="Directory holding swclint.json defaults."),
    ] = None,
    jobs: Annotated[int, typer.Option("--jobs", "-j", min=1, help="Contracts normalised in parallel.")] = 4,
    debug: Annotated[bool, typer.Option("--debug", help="Show debug tracing and info-level engine logs.")] = False,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable coloured output.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in output.")] = False,
) -> None:
    """Normalise analysis results of BUILD into per-file diagnostic reports."""

    reporter = build_reporter(emoji=not no_emoji, debug=debug, no_color=no_color)
    configure_logging(debug=debug)
    try:
        config = _load_config(project_root or build.parent, min_severity, swc_blacklist, style, debug)
        artifacts = unique_contracts(load_artifacts(read_json(build)))
        requested = list(contracts) if contracts else None
        found = found_contract_names(artifacts, requested)
        missing = not_found_contracts(requested, found)
        if missing:
            reporter.fail(f"These smart contracts were not found: {', '.join(missing)}")
        selected = [artifact for artifact in artifacts if artifact.contract_name in found]
        job_list = build_jobs(selected, parse_results(read_json(results)))
        reporter.debug(f"normalising {len(job_list)} contract(s) with up to {jobs} worker(s)")
        outcome = normalize_contracts(job_list, config, max_workers=jobs)
    except CLIError as exc:
        reporter.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except SwcLintError as exc:
        reporter.fail(str(exc))
        raise typer.Exit(code=2) from exc
    except ValidationError as exc:
        reporter.fail(f"malformed build record: {exc}")
        raise typer.Exit(code=2) from exc

    reports = build_reports(outcome.contracts)
    _emit(reports, output, reporter)
    wanted = requested or found
    _report_problems(reporter, outcome, requested=wanted, debug=debug)
    raise typer.Exit(code=exit_status(reports, outcome, requested=wanted, debug=debug))


def _load_config(
    root: Path,
    min_severity: str | None,
    swc_blacklist: str | None,
    style: str | None,
    debug: bool,
) -> ReportConfig:
    options: dict[str, Any] = {
        "min-severity": min_severity,
        "swc-blacklist": swc_blacklist,
        "style": style,
        "debug": 1 if debug else None,
    }
    return build_report_config(options, load_project_config(root))


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "build_jobs", "main", "parse_results"]
