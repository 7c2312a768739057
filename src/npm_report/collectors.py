"""Collectors for the three npm checks.

Each collector runs one command and returns its parsed JSON. An empty or
missing result becomes ``{}``. Invalid JSON from ``npm audit`` or depcheck is
logged and also becomes ``{}``; invalid JSON from ``npm outdated`` is not
caught and aborts the run.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from npm_report.config import ReportConfig
from npm_report.log import ERROR, ProgressLog
from npm_report.runner import run_command

logger = logging.getLogger(__name__)


def _run(command: str, config: ReportConfig, log: ProgressLog) -> str | None:
    return run_command(command, log=log, cwd=config.cwd, timeout=config.timeout)


def collect_outdated(config: ReportConfig, log: ProgressLog) -> dict[str, Any]:
    """Run ``npm outdated --json``.

    Raises:
        json.JSONDecodeError: If the command printed something that isn't JSON.
    """
    log.log("🔍 Checking outdated packages...")
    output = _run(config.outdated_command, config, log)
    if not output:
        return {}
    data = json.loads(output)
    logger.debug("npm outdated reported %d entries", len(data) if isinstance(data, dict) else 0)
    return data


def collect_audit(config: ReportConfig, log: ProgressLog) -> dict[str, Any]:
    """Run ``npm audit --json``."""
    log.log("🔍 Running npm audit...")
    output = _run(config.audit_command, config, log)
    if not output:
        return {}
    try:
        return json.loads(output)
    except json.JSONDecodeError as e:
        log.log(f"JSON Parsing Error: {e}", level=ERROR)
        return {}


def collect_unused(config: ReportConfig, log: ProgressLog) -> dict[str, Any]:
    """Run depcheck to find dependencies nothing imports."""
    log.log("🔍 Checking for unused dependencies...")
    output = _run(config.unused_command, config, log)
    if not output:
        return {}
    try:
        return json.loads(output)
    except json.JSONDecodeError as e:
        log.log(f"JSON Parsing Error in depcheck: {e}", level=ERROR)
        return {}
