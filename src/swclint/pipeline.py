# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end conversion of analysis results into diagnostic reports."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Final

from .artifacts import CompiledArtifact, not_analyzed_contracts
from .config import ReportConfig
from .core.models import AnalysisResult, DiagnosticFileReport, EngineLog
from .diagnostics.dedupe import dedupe_reports
from .diagnostics.grouping import merge_by_path
from .errors import SwcLintError
from .findings.normalizer import IssueNormalizer
from .findings.remap import remap_findings

LOGGER = logging.getLogger(__name__)

HIDDEN_LOG_LEVEL: Final[str] = "info"
DEFAULT_WORKERS: Final[int] = 4


@dataclass(frozen=True, slots=True)
class ContractJob:
    """One artifact and the analysis results received for it."""

    artifact: CompiledArtifact
    results: Sequence[AnalysisResult]


@dataclass(slots=True)
class ContractReport:
    """Per-file reports and engine logs produced for one contract."""

    contract_name: str
    source_path: str
    reports: list[DiagnosticFileReport] = field(default_factory=list)
    logs: list[EngineLog] = field(default_factory=list)


@dataclass(slots=True)
class BatchOutcome:
    """Result of normalising many contracts."""

    contracts: list[ContractReport] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def analyzed_names(self) -> list[str]:
        """Return the names of successfully normalised contracts."""

        return [contract.contract_name for contract in self.contracts]


def normalize_contract(
    artifact: CompiledArtifact,
    results: Iterable[AnalysisResult],
    config: ReportConfig,
) -> ContractReport:
    """Convert all analysis results of one contract into per-file reports.

    Args:
        artifact: Compiled contract the results refer to.
        results: Raw engine results for ``artifact``.
        config: Reporting and filtering options.

    Returns:
        ContractReport: Reports (one per finding group) and engine logs.

    Raises:
        SwcLintError: If the artifact or a location is malformed, or the
            source map does not match the bytecode.
    """

    normalizer = IssueNormalizer(artifact)
    contract = ContractReport(contract_name=artifact.contract_name, source_path=artifact.source_path)
    for result in results:
        for group in remap_findings(result):
            contract.reports.append(
                normalizer.to_file_report(group, config.filters, config.space_limited),
            )
        contract.logs.extend(result.meta.logs)
    return contract


def _run_job(job: ContractJob, config: ReportConfig) -> ContractReport:
    return normalize_contract(job.artifact, job.results, config)


def normalize_contracts(
    jobs: Sequence[ContractJob],
    config: ReportConfig,
    *,
    max_workers: int = DEFAULT_WORKERS,
) -> BatchOutcome:
    """Normalise many contracts on a bounded thread pool.

    Each contract owns its own :class:`IssueNormalizer`, so jobs share no
    mutable state. A :class:`SwcLintError` in one contract is recorded in
    :attr:`BatchOutcome.errors` and does not stop the others. Contract order
    in the outcome follows ``jobs``.

    Args:
        jobs: Artifacts with their analysis results.
        config: Reporting and filtering options.
        max_workers: Upper bound on concurrently processed contracts.

    Returns:
        BatchOutcome: Successful contract reports plus error messages.
    """

    outcome = BatchOutcome()
    finished: dict[int, ContractReport] = {}
    failures: dict[int, str] = {}
    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        future_map = {executor.submit(_run_job, job, config): index for index, job in enumerate(jobs)}
        for future in as_completed(future_map):
            index = future_map[future]
            try:
                finished[index] = future.result()
            except SwcLintError as exc:
                name = jobs[index].artifact.contract_name
                LOGGER.debug("contract %s failed: %s", name, exc)
                failures[index] = f"{name}: {exc}"
    for index in range(len(jobs)):
        if index in finished:
            outcome.contracts.append(finished[index])
        elif index in failures:
            outcome.errors.append(failures[index])
    return outcome


def build_reports(contracts: Iterable[ContractReport]) -> list[DiagnosticFileReport]:
    """Merge per-contract reports by file path and drop duplicate messages."""

    flattened = [report for contract in contracts for report in contract.reports]
    return dedupe_reports(merge_by_path(flattened))


def visible_logs(logs: Iterable[EngineLog], *, debug: bool = False) -> list[EngineLog]:
    """Return engine logs worth showing; ``info`` logs only in debug mode."""

    return [log for log in logs if debug or log.level != HIDDEN_LOG_LEVEL]


def exit_status(
    reports: Sequence[DiagnosticFileReport],
    outcome: BatchOutcome,
    *,
    requested: Sequence[str] | None = None,
    debug: bool = False,
) -> int:
    """Return 1 when anything needs the user's attention, else 0.

    Attention is needed for any reported message, any visible engine log, any
    per-contract error, or a requested contract without results.
    """

    if any(report.messages for report in reports):
        return 1
    if outcome.errors:
        return 1
    if not_analyzed_contracts(outcome.analyzed_names, requested):
        return 1
    logs = [log for contract in outcome.contracts for log in contract.logs]
    return 1 if visible_logs(logs, debug=debug) else 0


__all__ = [
    "BatchOutcome",
    "ContractJob",
    "ContractReport",
    "build_reports",
    "exit_status",
    "normalize_contract",
    "normalize_contracts",
    "visible_logs",
]
