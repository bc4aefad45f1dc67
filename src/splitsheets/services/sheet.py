from __future__ import annotations

from decimal import Decimal
from typing import Optional

from splitsheets.logging import get_logger
from splitsheets.models import (
    AMOUNT_COL,
    BREAKDOWN_HEADER,
    DEFAULT_DUE_LABEL,
    DESCRIPTION_COL,
    FIRST_DATA_ROW,
    HEADER_ROW,
    PAYER_COL,
    SPLIT_METHOD_COL,
    SUMMARY_PAYER,
    CellUpdate,
    LedgerResult,
    SplitMethod,
)
from splitsheets.services.ledger import recalculate_snapshot
from splitsheets.services.remainder import RemainderFill, compute_remainder
from splitsheets.services.rows import build_snapshot, cell, cell_text, find_participants
from splitsheets.sheets.table import Table
from splitsheets.utils.parse import parse_currency


log = get_logger(__name__)


def build_write_back(result: LedgerResult, width: int, header_breakdown: str = "") -> list[CellUpdate]:
    updates: list[CellUpdate] = []
    breakdown_col = result.breakdown_column

    if not header_breakdown:
        updates.append(CellUpdate(HEADER_ROW, breakdown_col, BREAKDOWN_HEADER))

    for breakdown in result.breakdowns:
        updates.append(CellUpdate(breakdown.row_number, breakdown_col, breakdown.text))

    summary_values: dict[int, object] = {
        DESCRIPTION_COL: result.due_label,
        PAYER_COL: SUMMARY_PAYER,
        AMOUNT_COL: result.total_text,
        breakdown_col: result.summary_text,
    }
    for col in range(1, max(width, breakdown_col) + 1):
        updates.append(CellUpdate(result.summary_row, col, summary_values.get(col, "")))

    return updates


def recalculate(table: Table, due_label: str = DEFAULT_DUE_LABEL) -> LedgerResult:
    """Recalculate the whole table and write the breakdowns and the summary row."""
    values = table.get_values()
    snapshot = build_snapshot(values)
    result = recalculate_snapshot(snapshot, due_label=due_label)

    header = values[HEADER_ROW - 1] if values else []
    updates = build_write_back(result, snapshot.width, cell_text(header, result.breakdown_column))
    table.update_cells(updates)
    log.info("sheet.write_back", cells=len(updates), breakdown_column=result.breakdown_column)

    log.info(
        "ledger.recalculated",
        valid_rows=len(result.breakdowns),
        summary_row=result.summary_row,
        total=result.total_text,
    )
    return result


def resolve_remainder(table: Table, row: int, col: int, value: object) -> Optional[RemainderFill]:
    values = table.get_values()
    if row > len(values) or not values:
        return None

    row_values = values[row - 1]
    method = SplitMethod.from_label(cell(row_values, SPLIT_METHOD_COL))
    fill = compute_remainder(
        method,
        find_participants(values[HEADER_ROW - 1]),
        row_values,
        edited_col=col,
        edited_value=value,
        amount=parse_currency(cell(row_values, AMOUNT_COL)),
    )
    if fill is None:
        return None

    table.update_cells([CellUpdate(row, fill.column, fill.cell_value)])
    log.info("remainder.filled", row=row, col=fill.column, remaining=str(fill.remaining))
    return fill


def apply_split_defaults(table: Table, row: int, method: SplitMethod) -> None:
    values = table.get_values()
    participants = find_participants(values[HEADER_ROW - 1] if values else [])
    if not participants:
        return

    default: object
    match method:
        case SplitMethod.PERCENTAGE:
            default = Decimal(1) / Decimal(len(participants))
        case SplitMethod.FIXED:
            default = ""
        case SplitMethod.EQUAL:
            default = True

    table.update_cells([CellUpdate(row, p.column, default) for p in participants])
    log.info("split.defaults", row=row, method=method.value)


def handle_edit(
    table: Table,
    row: int,
    col: int,
    value: object,
    due_label: str = DEFAULT_DUE_LABEL,
) -> Optional[LedgerResult]:
    if row < FIRST_DATA_ROW:
        if row == HEADER_ROW:
            return recalculate(table, due_label=due_label)
        return None

    if col == SPLIT_METHOD_COL:
        apply_split_defaults(table, row, SplitMethod.from_label(value))
        return None

    values = table.get_values()
    participants = find_participants(values[HEADER_ROW - 1] if values else [])
    if any(p.column == col for p in participants):
        resolve_remainder(table, row, col, value)

    return recalculate(table, due_label=due_label)
