from __future__ import annotations

from typing import Sequence

from splitsheets.models import (
    AMOUNT_COL,
    DESCRIPTION_COL,
    FIRST_DATA_ROW,
    FIRST_PARTICIPANT_COL,
    HEADER_ROW,
    PAYER_COL,
    SPLIT_METHOD_COL,
    ClassifiedRow,
    ExpenseRow,
    LedgerSnapshot,
    Participant,
    RowStatus,
    SplitMethod,
)
from splitsheets.utils.parse import ZERO, parse_currency


HEADER_SENTINELS = {"breakdown", "summary", "total"}
STALE_DESCRIPTION_MARKER = "Due:"
STALE_PAYER_MARKER = "Summary"


class NoParticipantsError(LookupError):
    pass


def cell(values: Sequence[object], col: int) -> object:
    index = col - 1
    if index < len(values):
        return values[index]
    return None


def cell_text(values: Sequence[object], col: int) -> str:
    value = cell(values, col)
    return "" if value is None else str(value).strip()


def find_participants(header: Sequence[object]) -> list[Participant]:
    participants: list[Participant] = []
    col = FIRST_PARTICIPANT_COL
    while col <= len(header):
        name = cell_text(header, col)
        if not name or name.lower() in HEADER_SENTINELS:
            break
        participants.append(Participant(name=name, column=col))
        col += 1
    return participants


def classify_row(row_number: int, values: Sequence[object], participants: Sequence[Participant]) -> ClassifiedRow:
    description = cell_text(values, DESCRIPTION_COL)
    payer = cell_text(values, PAYER_COL)

    if STALE_DESCRIPTION_MARKER in description or STALE_PAYER_MARKER in payer:
        return ClassifiedRow(row_number=row_number, status=RowStatus.STALE)

    amount = parse_currency(cell(values, AMOUNT_COL))
    if not amount.is_finite() or amount <= ZERO:
        return ClassifiedRow(row_number=row_number, status=RowStatus.SKIPPED)

    expense = ExpenseRow(
        row_number=row_number,
        description=description,
        payer=payer,
        amount=amount,
        split_method=SplitMethod.from_label(cell(values, SPLIT_METHOD_COL)),
        allocations={p.name: cell(values, p.column) for p in participants},
    )
    return ClassifiedRow(row_number=row_number, status=RowStatus.VALID, expense=expense)


def _is_blank_row(values: Sequence[object]) -> bool:
    return all(value is None or str(value).strip() == "" for value in values)


def last_populated_row(rows: Sequence[Sequence[object]]) -> int:
    last = len(rows)
    while last > HEADER_ROW and _is_blank_row(rows[last - 1]):
        last -= 1
    return last


def classify_rows(rows: Sequence[Sequence[object]], participants: Sequence[Participant]) -> list[ClassifiedRow]:
    classified: list[ClassifiedRow] = []
    for row_number in range(FIRST_DATA_ROW, last_populated_row(rows) + 1):
        classified.append(classify_row(row_number, rows[row_number - 1], participants))
    return classified


def build_snapshot(rows: Sequence[Sequence[object]]) -> LedgerSnapshot:
    header = rows[HEADER_ROW - 1] if rows else []
    participants = find_participants(header)
    if not participants:
        raise NoParticipantsError(
            f"No participant names found in the header row (column {FIRST_PARTICIPANT_COL} onwards)"
        )

    width = max((len(row) for row in rows), default=0)
    return LedgerSnapshot(
        participants=participants,
        rows=classify_rows(rows, participants),
        width=max(width, participants[-1].column + 1),
    )
