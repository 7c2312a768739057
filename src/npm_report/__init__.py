"""npm-report: outdated, audit and unused-dependency checks compiled into one workbook."""

from npm_report.checks import ReportData, generate_report, run_checks
from npm_report.version import VERSION

__version__ = VERSION
__all__ = ["__version__", "VERSION", "ReportData", "generate_report", "run_checks"]
