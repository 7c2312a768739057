"""Pytest configuration for npm-report tests."""

import json
from unittest.mock import MagicMock

import pytest

from npm_report.config import ReportConfig
from npm_report.log import RecordingLog

OUTDATED_JSON = {
    "lodash": {
        "current": "4.0.0",
        "wanted": "4.17.0",
        "latest": "4.17.21",
        "type": "dependencies",
    }
}

AUDIT_JSON = {
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

UNUSED_JSON = {"dependencies": ["left-pad"]}


@pytest.fixture
def recording_log():
    """Log that keeps lines in memory instead of printing them."""
    return RecordingLog()


@pytest.fixture
def config(tmp_path):
    """Config writing the workbook into a temporary directory."""
    return ReportConfig(output_path=tmp_path / "npm_security_report.xlsx")


def completed(stdout: str = "", returncode: int = 0) -> MagicMock:
    """Stand-in for subprocess.CompletedProcess."""
    return MagicMock(returncode=returncode, stdout=stdout, stderr="")


def fake_npm(outdated=OUTDATED_JSON, audit=AUDIT_JSON, unused=UNUSED_JSON):
    """Build a subprocess.run side effect answering each npm command.

    Pass a dict to have it serialized, a string to return it verbatim.
    """

    def render(value):
        return value if isinstance(value, str) else json.dumps(value)

    def run(command, **kwargs):
        if "outdated" in command:
            return completed(render(outdated), returncode=1)
        if "audit" in command:
            return completed(render(audit), returncode=1)
        if "depcheck" in command:
            return completed(render(unused), returncode=255)
        raise AssertionError(f"unexpected command: {command}")

    return run


@pytest.fixture(name="fake_npm")
def fake_npm_fixture():
    """Factory for subprocess.run side effects, see ``fake_npm``."""
    return fake_npm


@pytest.fixture(name="completed")
def completed_fixture():
    """Factory for fake CompletedProcess objects."""
    return completed
