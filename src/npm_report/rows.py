"""Flatten collector output into spreadsheet rows.

Every function here is pure: it takes the parsed JSON from one collector and
returns a list of ``{column: text}`` dicts in source order.
"""

from __future__ import annotations

from typing import Any

from npm_report.config import DEFAULT_FIX_COMMAND, DEFAULT_MANUAL_FIX
from npm_report.models import (
    NO_DESCRIPTION,
    NOT_AVAILABLE,
    UNKNOWN,
    UNUSED_REASON,
    AuditEntry,
    OutdatedEntry,
    Row,
)


def outdated_rows(outdated: Any) -> list[Row]:
    """Build one row per package in ``npm outdated --json`` output."""
    if not isinstance(outdated, dict):
        return []

    rows: list[Row] = []
    for package, details in outdated.items():
        entry = OutdatedEntry.from_json(package, details)
        rows.append(
            {
                "Package Name": entry.package,
                "Current Version": entry.current or UNKNOWN,
                "Wanted Version": entry.wanted or UNKNOWN,
                "Latest Version": entry.latest or UNKNOWN,
                "Dependency Type": entry.type or UNKNOWN,
                "Needs Update": "YES" if entry.needs_update else "NO",
            }
        )
    return rows


def security_rows(
    audit: Any,
    fix_command: str = DEFAULT_FIX_COMMAND,
    manual_fix: str = DEFAULT_MANUAL_FIX,
) -> list[Row]:
    """Build one row per detailed advisory in ``npm audit --json`` output.

    ``via`` entries that merely name another package are skipped. Fix
    availability is taken from the package, not the individual advisory.
    """
    if not isinstance(audit, dict):
        return []
    vulnerabilities = audit.get("vulnerabilities")
    if not isinstance(vulnerabilities, dict):
        return []

    rows: list[Row] = []
    for package, details in vulnerabilities.items():
        entry = AuditEntry.from_json(package, details)
        for advisory in entry.details:
            rows.append(
                {
                    "Package Name": entry.package,
                    "Severity": advisory.severity or UNKNOWN,
                    "Vulnerability": advisory.title or NO_DESCRIPTION,
                    "Fix Available": "Yes" if entry.fix_available else "No",
                    "Recommended Fix": fix_command if entry.fix_available else manual_fix,
                    "Advisory URL": advisory.url or NOT_AVAILABLE,
                }
            )
    return rows


def unused_rows(unused: Any) -> list[Row]:
    """Build one row per name in depcheck's ``dependencies`` list."""
    if not isinstance(unused, dict):
        return []
    dependencies = unused.get("dependencies")
    if not isinstance(dependencies, list):
        return []
    return [{"Unused Dependency": str(dep), "Reason": UNUSED_REASON} for dep in dependencies]
