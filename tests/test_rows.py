"""Tests for row normalization."""

from npm_report.models import (
    OUTDATED_COLUMNS,
    SECURITY_COLUMNS,
    UNUSED_COLUMNS,
    AdvisoryDetail,
    AdvisoryName,
    AuditEntry,
    OutdatedEntry,
    parse_via,
)
from npm_report.rows import outdated_rows, security_rows, unused_rows


class TestOutdatedRows:
    def test_full_entry(self):
        rows = outdated_rows(
            {
                "lodash": {
                    "current": "4.0.0",
                    "wanted": "4.17.0",
                    "latest": "4.17.21",
                    "type": "dependencies",
                }
            }
        )
        assert rows == [
            {
                "Package Name": "lodash",
                "Current Version": "4.0.0",
                "Wanted Version": "4.17.0",
                "Latest Version": "4.17.21",
                "Dependency Type": "dependencies",
                "Needs Update": "YES",
            }
        ]

    def test_up_to_date_entry(self):
        rows = outdated_rows({"react": {"current": "18.2.0", "wanted": "18.2.0", "latest": "18.2.0"}})
        assert rows[0]["Needs Update"] == "NO"
        assert rows[0]["Dependency Type"] == "Unknown"

    def test_missing_current_still_needs_update(self):
        # Not installed: npm omits "current"
        rows = outdated_rows({"express": {"wanted": "4.18.2", "latest": "4.18.2"}})
        assert rows[0]["Current Version"] == "Unknown"
        assert rows[0]["Needs Update"] == "YES"

    def test_both_versions_missing_is_no(self):
        rows = outdated_rows({"ghost": {}})
        assert rows[0]["Needs Update"] == "NO"
        assert rows[0]["Latest Version"] == "Unknown"

    def test_null_current_without_latest_is_no(self):
        rows = outdated_rows({"ghost": {"current": None}})
        assert rows[0]["Needs Update"] == "NO"

    def test_row_count_and_order_follow_source(self):
        data = {name: {"current": "1.0.0", "latest": "2.0.0"} for name in ["zod", "axios", "moment"]}
        rows = outdated_rows(data)
        assert len(rows) == 3
        assert [r["Package Name"] for r in rows] == ["zod", "axios", "moment"]

    def test_columns_in_fixed_order(self):
        rows = outdated_rows({"a": {}})
        assert tuple(rows[0]) == OUTDATED_COLUMNS

    def test_empty_and_malformed_input(self):
        assert outdated_rows({}) == []
        assert outdated_rows([]) == []
        assert outdated_rows(None) == []


class TestSecurityRows:
    def test_detailed_advisory(self):
        rows = security_rows(
            {
                "vulnerabilities": {
                    "lodash": {
                        "via": [
                            {
                                "severity": "high",
                                "title": "Prototype Pollution",
                                "url": "https://x",
                            }
                        ],
                        "fixAvailable": True,
                    }
                }
            }
        )
        assert rows == [
            {
                "Package Name": "lodash",
                "Severity": "high",
                "Vulnerability": "Prototype Pollution",
                "Fix Available": "Yes",
                "Recommended Fix": "npm audit fix --force",
                "Advisory URL": "https://x",
            }
        ]

    def test_plain_name_entries_are_skipped(self):
        audit = {
            "vulnerabilities": {
                "webpack": {
                    "via": ["terser", {"severity": "moderate", "title": "ReDoS"}],
                    "fixAvailable": False,
                }
            }
        }
        rows = security_rows(audit)
        assert len(rows) == 1
        assert rows[0]["Vulnerability"] == "ReDoS"
        assert rows[0]["Fix Available"] == "No"
        assert rows[0]["Recommended Fix"] == "Manual review"
        assert rows[0]["Advisory URL"] == "N/A"

    def test_placeholders_for_missing_fields(self):
        rows = security_rows({"vulnerabilities": {"x": {"via": [{}]}}})
        assert rows[0]["Severity"] == "Unknown"
        assert rows[0]["Vulnerability"] == "No description"
        assert rows[0]["Fix Available"] == "No"

    def test_fix_available_object_counts_as_fixable(self):
        audit = {
            "vulnerabilities": {
                "minimist": {
                    "via": [{"severity": "critical", "title": "Prototype Pollution"}],
                    "fixAvailable": {"name": "mkdirp", "version": "1.0.4", "isSemVerMajor": True},
                }
            }
        }
        assert security_rows(audit)[0]["Fix Available"] == "Yes"

    def test_one_row_per_detailed_advisory(self):
        audit = {
            "vulnerabilities": {
                "a": {"via": [{"title": "one"}, {"title": "two"}], "fixAvailable": True},
                "b": {"via": ["a"], "fixAvailable": True},
            }
        }
        rows = security_rows(audit)
        assert [r["Vulnerability"] for r in rows] == ["one", "two"]

    def test_custom_fix_text(self):
        audit = {"vulnerabilities": {"a": {"via": [{"title": "t"}], "fixAvailable": True}}}
        rows = security_rows(audit, fix_command="yarn upgrade", manual_fix="Review")
        assert rows[0]["Recommended Fix"] == "yarn upgrade"

    def test_missing_vulnerabilities_key(self):
        assert security_rows({}) == []
        assert security_rows({"auditReportVersion": 2}) == []

    def test_missing_via(self):
        assert security_rows({"vulnerabilities": {"a": {"fixAvailable": True}}}) == []

    def test_columns_in_fixed_order(self):
        rows = security_rows({"vulnerabilities": {"a": {"via": [{}]}}})
        assert tuple(rows[0]) == SECURITY_COLUMNS


class TestUnusedRows:
    def test_one_row_per_dependency(self):
        assert unused_rows({"dependencies": ["left-pad"]}) == [
            {"Unused Dependency": "left-pad", "Reason": "Not imported in any file"}
        ]

    def test_row_count_matches_list(self):
        rows = unused_rows({"dependencies": ["a", "b", "c"], "devDependencies": ["jest"]})
        assert len(rows) == 3
        assert tuple(rows[0]) == UNUSED_COLUMNS

    def test_missing_dependencies_key(self):
        assert unused_rows({}) == []
        assert unused_rows({"dependencies": None}) == []

    def test_non_list_dependencies_ignored(self):
        assert unused_rows({"dependencies": "left-pad"}) == []
        assert unused_rows({"dependencies": {"left-pad": True}}) == []


class TestAdvisoryParsing:
    def test_parse_via_variants(self):
        parsed = parse_via(["lodash", {"severity": "low", "title": "t", "url": "u"}, 42])
        assert parsed == [AdvisoryName("lodash"), AdvisoryDetail("low", "t", "u")]

    def test_parse_via_non_list(self):
        assert parse_via(None) == []
        assert parse_via("lodash") == []

    def test_audit_entry_details(self):
        entry = AuditEntry.from_json("pkg", {"via": ["dep", {"title": "x"}], "fixAvailable": True})
        assert entry.fix_available is True
        assert entry.details == [AdvisoryDetail(title="x")]

    def test_outdated_entry_needs_update(self):
        assert OutdatedEntry("a", current="1", latest="2").needs_update
        assert not OutdatedEntry("a", current="2", latest="2").needs_update
        assert OutdatedEntry.from_json("a", "garbage") == OutdatedEntry("a")
