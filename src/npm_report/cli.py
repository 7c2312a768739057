"""CLI entry point."""

import argparse
import json
import sys
from pathlib import Path

from npm_report.checks import ReportData, generate_report
from npm_report.config import ReportConfig, load_config, save_config


def print_summary(path: Path, data: ReportData) -> None:
    """Print row counts per sheet.

    Args:
        path: Where the workbook was written.
        data: Normalized rows that went into it.
    """
    from rich import box
    from rich.console import Console
    from rich.table import Table

    console = Console()

    table = Table(title="npm Security Report", box=box.ROUNDED)
    table.add_column("Sheet")
    table.add_column("Rows", justify="right")
    for sheet, count in data.summary.items():
        table.add_row(sheet, str(count))
    console.print(table)

    needs_update = sum(1 for r in data.outdated if r["Needs Update"] == "YES")
    fixable = sum(1 for r in data.security if r["Fix Available"] == "Yes")
    console.print(
        f"\n[bold]Summary:[/] "
        f"[yellow]{needs_update} outdated[/], "
        f"[red]{len(data.security)} advisories[/] ({fixable} fixable), "
        f"[cyan]{len(data.unused)} unused[/]"
    )
    console.print(f"[dim]Written to {path}[/]")


def build_config(args: argparse.Namespace) -> ReportConfig:
    """Load the config file and apply command-line overrides."""
    config = load_config(Path(args.config) if args.config else None)
    if args.output:
        config.output_path = Path(args.output)
    if args.cwd:
        config.cwd = Path(args.cwd)
    return config


def main() -> int:
    """Main entry point for npm-report CLI.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = argparse.ArgumentParser(
        prog="npm-report",
        description="Compile npm outdated, npm audit and depcheck results into an Excel report",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="Workbook path (default: npm_security_report.xlsx)",
    )
    parser.add_argument("--config", metavar="FILE", help="Config file (TOML)")
    parser.add_argument("--cwd", metavar="DIR", help="Project directory to run the checks in")
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Run the three checks concurrently",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report rows as JSON (the workbook is still written)",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write a config file with default settings and exit",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__import__('npm_report').__version__}"
    )

    args = parser.parse_args()

    if args.init_config:
        config = load_config(Path(args.config) if args.config else None)
        written = save_config(config)
        print(f"Config written to: {written}")
        return 0

    config = build_config(args)

    log = None
    if args.json:
        from rich.console import Console

        from npm_report.log import ConsoleLog

        # Keep stdout clean for the JSON document
        log = ConsoleLog(console=Console(stderr=True, highlight=False))

    try:
        path, data = generate_report(config=config, log=log, parallel=args.parallel)
    except json.JSONDecodeError as e:
        print(f"❌ Could not parse npm outdated output: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"❌ Could not write report: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(data.to_dict(), indent=2, default=str))
    else:
        print_summary(path, data)
    return 0


if __name__ == "__main__":
    sys.exit(main())
