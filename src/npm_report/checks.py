"""Run all checks and produce the report."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from npm_report.collectors import collect_audit, collect_outdated, collect_unused
from npm_report.config import ReportConfig
from npm_report.log import ConsoleLog, ProgressLog
from npm_report.models import OUTDATED_SHEET, SECURITY_SHEET, UNUSED_SHEET, Row
from npm_report.report import write_report
from npm_report.rows import outdated_rows, security_rows, unused_rows

logger = logging.getLogger(__name__)


@dataclass
class ReportData:
    """Normalized rows for all three sheets."""

    outdated: list[Row] = field(default_factory=list)
    security: list[Row] = field(default_factory=list)
    unused: list[Row] = field(default_factory=list)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def summary(self) -> dict[str, int]:
        return {
            OUTDATED_SHEET: len(self.outdated),
            SECURITY_SHEET: len(self.security),
            UNUSED_SHEET: len(self.unused),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "summary": self.summary,
            "sheets": {
                OUTDATED_SHEET: self.outdated,
                SECURITY_SHEET: self.security,
                UNUSED_SHEET: self.unused,
            },
        }


def collect_all(
    config: ReportConfig, log: ProgressLog, parallel: bool = False
) -> tuple[dict[str, Any], dict[str, Any], dict[str, Any]]:
    """Run the three collectors and return (outdated, audit, unused).

    Collectors run one after another unless ``parallel`` is set. Either way an
    invalid ``npm outdated`` result raises.
    """
    if not parallel:
        outdated = collect_outdated(config, log)
        audit = collect_audit(config, log)
        unused = collect_unused(config, log)
        return outdated, audit, unused

    with ThreadPoolExecutor(max_workers=3) as executor:
        outdated_future = executor.submit(collect_outdated, config, log)
        audit_future = executor.submit(collect_audit, config, log)
        unused_future = executor.submit(collect_unused, config, log)
        return outdated_future.result(), audit_future.result(), unused_future.result()


def build_report_data(
    outdated: Any, audit: Any, unused: Any, config: ReportConfig | None = None
) -> ReportData:
    """Normalize raw collector output into rows."""
    config = config or ReportConfig()
    return ReportData(
        outdated=outdated_rows(outdated),
        security=security_rows(
            audit, fix_command=config.fix_command, manual_fix=config.manual_fix
        ),
        unused=unused_rows(unused),
    )


def generate_report(
    config: ReportConfig | None = None,
    log: ProgressLog | None = None,
    parallel: bool = False,
) -> tuple[Path, ReportData]:
    """Collect, normalize and write the workbook.

    Returns:
        Tuple of (report path, normalized rows).
    """
    config = config or ReportConfig()
    log = log or ConsoleLog()

    log.log("\n🚀 Running Full Security Check...\n")
    outdated, audit, unused = collect_all(config, log, parallel=parallel)
    data = build_report_data(outdated, audit, unused, config=config)
    logger.debug("Report summary: %s", data.summary)

    path = write_report(
        data.outdated, data.security, data.unused, config.resolved_output, log
    )
    return path, data


def run_checks(
    config: ReportConfig | None = None,
    log: ProgressLog | None = None,
    parallel: bool = False,
) -> Path:
    """Run every check and write the report. Returns the workbook path."""
    path, _ = generate_report(config=config, log=log, parallel=parallel)
    return path
