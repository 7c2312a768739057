"""Excel workbook output."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from npm_report.log import ProgressLog
from npm_report.models import OUTDATED_SHEET, SECURITY_SHEET, SHEETS, UNUSED_SHEET, Row

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="2E4057", end_color="2E4057", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
MAX_COLUMN_WIDTH = 80


def _cell_text(value: object) -> str:
    """Cell-safe text: control characters are not allowed in worksheets."""
    return ILLEGAL_CHARACTERS_RE.sub("", str(value))


def _fill_sheet(ws: Worksheet, columns: Sequence[str], rows: Sequence[Row]) -> None:
    ws.append(list(columns))
    for cell in ws[1]:
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for row in rows:
        ws.append([_cell_text(row.get(column, "")) for column in columns])
        # Keep registry text like "=HYPERLINK(...)" from being stored as a formula
        for cell in ws[ws.max_row]:
            cell.data_type = "s"

    # Size columns to their longest value
    for column in ws.columns:
        width = max(len(str(cell.value or "")) for cell in column)
        ws.column_dimensions[column[0].column_letter].width = min(width + 2, MAX_COLUMN_WIDTH)

    if rows:
        ws.freeze_panes = "A2"


def build_workbook(
    outdated: Sequence[Row],
    security: Sequence[Row],
    unused: Sequence[Row],
) -> Workbook:
    """Build the three-sheet workbook in memory.

    Sheets always exist and always carry their header row, even when there
    are no rows to report.
    """
    wb = Workbook()
    wb.remove(wb.active)

    by_sheet = {OUTDATED_SHEET: outdated, SECURITY_SHEET: security, UNUSED_SHEET: unused}
    for title, columns in SHEETS.items():
        _fill_sheet(wb.create_sheet(title=title), columns, by_sheet[title])
    return wb


def write_report(
    outdated: Sequence[Row],
    security: Sequence[Row],
    unused: Sequence[Row],
    path: Path | str,
    log: ProgressLog,
) -> Path:
    """Write the report to ``path``, replacing any existing file.

    Returns:
        The path written to.
    """
    log.log("📊 Generating Excel report...")
    path = Path(path)
    wb = build_workbook(outdated, security, unused)
    wb.save(path)
    logger.debug(
        "Wrote %d outdated, %d security, %d unused rows to %s",
        len(outdated),
        len(security),
        len(unused),
        path,
    )
    log.log(f"✅ Report generated: {path}")
    return path


def read_report(path: Path | str) -> dict[str, list[Row]]:
    """Read a report back into ``{sheet title: rows}``."""
    wb = load_workbook(path, read_only=True)
    try:
        sheets: dict[str, list[Row]] = {}
        for ws in wb.worksheets:
            values = list(ws.iter_rows(values_only=True))
            if not values:
                sheets[ws.title] = []
                continue
            header = [str(h) for h in values[0]]
            sheets[ws.title] = [
                {column: "" if value is None else str(value) for column, value in zip(header, row)}
                for row in values[1:]
            ]
        return sheets
    finally:
        wb.close()
