"""Typed views over npm's JSON output and the report's column layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

UNKNOWN = "Unknown"
NO_DESCRIPTION = "No description"
NOT_AVAILABLE = "N/A"
UNUSED_REASON = "Not imported in any file"

OUTDATED_SHEET = "Outdated Packages"
SECURITY_SHEET = "Security Issues"
UNUSED_SHEET = "Unused Dependencies"

OUTDATED_COLUMNS = (
    "Package Name",
    "Current Version",
    "Wanted Version",
    "Latest Version",
    "Dependency Type",
    "Needs Update",
)
SECURITY_COLUMNS = (
    "Package Name",
    "Severity",
    "Vulnerability",
    "Fix Available",
    "Recommended Fix",
    "Advisory URL",
)
UNUSED_COLUMNS = ("Unused Dependency", "Reason")

# Sheet order in the workbook
SHEETS: dict[str, tuple[str, ...]] = {
    OUTDATED_SHEET: OUTDATED_COLUMNS,
    SECURITY_SHEET: SECURITY_COLUMNS,
    UNUSED_SHEET: UNUSED_COLUMNS,
}

Row = dict[str, str]


@dataclass(frozen=True)
class OutdatedEntry:
    """One package from ``npm outdated --json``."""

    package: str
    current: str | None = None
    wanted: str | None = None
    latest: str | None = None
    type: str | None = None

    @property
    def needs_update(self) -> bool:
        """True when the installed and latest versions differ.

        Compared raw, so a missing version on one side still counts as a
        difference. JSON null and an absent key both load as None and compare
        equal, so ``{"current": null}`` with no ``latest`` reports no update.
        """
        return self.current != self.latest

    @classmethod
    def from_json(cls, package: str, details: Any) -> OutdatedEntry:
        if not isinstance(details, dict):
            return cls(package=package)
        return cls(
            package=package,
            current=details.get("current"),
            wanted=details.get("wanted"),
            latest=details.get("latest"),
            type=details.get("type"),
        )


@dataclass(frozen=True)
class AdvisoryName:
    """A ``via`` entry that only names another vulnerable package."""

    name: str


@dataclass(frozen=True)
class AdvisoryDetail:
    """A ``via`` entry carrying the advisory itself."""

    severity: str | None = None
    title: str | None = None
    url: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> AdvisoryDetail:
        return cls(
            severity=data.get("severity"),
            title=data.get("title"),
            url=data.get("url"),
        )


Advisory = Union[AdvisoryName, AdvisoryDetail]


def parse_via(via: Any) -> list[Advisory]:
    """Decode an audit ``via`` list into advisory variants.

    Strings become ``AdvisoryName``, objects become ``AdvisoryDetail``.
    Anything else is dropped.
    """
    if not isinstance(via, list):
        return []
    advisories: list[Advisory] = []
    for item in via:
        if isinstance(item, str):
            advisories.append(AdvisoryName(item))
        elif isinstance(item, dict):
            advisories.append(AdvisoryDetail.from_json(item))
    return advisories


@dataclass(frozen=True)
class AuditEntry:
    """One package from the ``vulnerabilities`` map of ``npm audit --json``."""

    package: str
    via: tuple[Advisory, ...] = ()
    fix_available: bool = False

    @property
    def details(self) -> list[AdvisoryDetail]:
        return [a for a in self.via if isinstance(a, AdvisoryDetail)]

    @classmethod
    def from_json(cls, package: str, details: Any) -> AuditEntry:
        if not isinstance(details, dict):
            return cls(package=package)
        # npm 7+ reports fixAvailable as true/false or as an object describing the fix
        return cls(
            package=package,
            via=tuple(parse_via(details.get("via"))),
            fix_available=bool(details.get("fixAvailable")),
        )
