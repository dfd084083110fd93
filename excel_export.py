"""
Excel export functionality for Bill Splitter
"""
from __future__ import annotations
import logging
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import SplitConfiguration
from computations import amounts_owed, percentage_total, total_with_tip

logger = logging.getLogger(__name__)


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F81BD")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        if cell.value is None:
            continue
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            if cell.value is None:
                continue
            max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def _write_split_sheet(ws, config: SplitConfiguration) -> None:
    """
    Layout:
      rows 1-3  Bill / Tip % / Total with tip
      row 5     Person | Percentage | Amount owed
      rows 6..  one row per participant
      last row  TOTAL with SUM formulas
    """
    ws.append(["Bill", config.bill_amount])
    ws.append(["Tip %", config.tip_percentage])
    ws.append(["Total with tip", total_with_tip(config)])
    for r in range(1, 4):
        ws.cell(r, 1).font = Font(bold=True)
        ws.cell(r, 2).number_format = "0.00"
    ws.append([])

    ws.append(["Person", "Percentage", "Amount owed"])
    header_row = ws.max_row
    _style_header(ws, header_row)
    ws.freeze_panes = f"A{header_row + 1}"

    for p, amt in zip(config.participants, amounts_owed(config)):
        ws.append([p.name, p.percentage, amt])

    first, last = header_row + 1, ws.max_row
    ws.append([
        "TOTAL",
        f"=SUM(B{first}:B{last})",
        f"=SUM(C{first}:C{last})",
    ])
    ws.cell(ws.max_row, 1).font = Font(bold=True)
    if percentage_total(config) != 100:
        # flag a split that does not add up
        ws.cell(ws.max_row, 2).fill = PatternFill("solid", fgColor="F4CCCC")

    for r in range(first, ws.max_row + 1):
        ws.cell(r, 2).number_format = "0.##"
        ws.cell(r, 3).number_format = "0.00"
    _autosize_columns(ws)


def export_excel(
    config: SplitConfiguration,
    filepath: str,
    saved: Optional[List[SplitConfiguration]] = None,
) -> None:
    """
    Export to Excel file with sheets:
    - Current split
    - One sheet per saved split (Saved 1, Saved 2, ...)
    - Saved Splits overview
    """
    saved = saved or []
    wb = Workbook()
    ws = wb.active
    ws.title = "Current split"
    _write_split_sheet(ws, config)

    for i, snap in enumerate(saved, start=1):
        _write_split_sheet(wb.create_sheet(f"Saved {i}"), snap)

    if saved:
        ws = wb.create_sheet("Saved Splits")
        ws.append(["#", "Bill", "Tip %", "Total with tip", "People"])
        _style_header(ws, 1)
        ws.freeze_panes = "A2"
        for i, snap in enumerate(saved, start=1):
            ws.append([
                i,
                snap.bill_amount,
                snap.tip_percentage,
                total_with_tip(snap),
                ", ".join(p.name for p in snap.participants),
            ])
        for r in range(2, ws.max_row + 1):
            for c in (2, 4):
                ws.cell(r, c).number_format = "0.00"
        _autosize_columns(ws)

    wb.save(filepath)
    logger.info("Exported split with %d saved split(s) to %s", len(saved), filepath)
