from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional, Sequence


HEADER_ROW = 1
FIRST_DATA_ROW = 2

DESCRIPTION_COL = 1
PAYER_COL = 2
AMOUNT_COL = 3
SPLIT_METHOD_COL = 4
FIRST_PARTICIPANT_COL = 5

BREAKDOWN_HEADER = "Breakdown"
SUMMARY_PAYER = "Summary"
DEFAULT_DUE_LABEL = "Due: 1st"


class SplitMethod(str, Enum):
    EQUAL = "equally"
    PERCENTAGE = "variably"
    FIXED = "fixed"

    @classmethod
    def from_label(cls, label: object) -> "SplitMethod":
        text = str(label).strip().lower() if label is not None else ""
        return SPLIT_METHOD_LABELS.get(text, cls.EQUAL)


SPLIT_METHOD_LABELS = {
    "equally": SplitMethod.EQUAL,
    "equal": SplitMethod.EQUAL,
    "variably": SplitMethod.PERCENTAGE,
    "variable": SplitMethod.PERCENTAGE,
    "percentage": SplitMethod.PERCENTAGE,
    "percent": SplitMethod.PERCENTAGE,
    "fixed": SplitMethod.FIXED,
}


class RowStatus(str, Enum):
    VALID = "valid"
    STALE = "stale"
    SKIPPED = "skipped"


@dataclass(slots=True, frozen=True)
class Participant:
    name: str
    column: int


@dataclass(slots=True)
class ExpenseRow:
    row_number: int
    description: str
    payer: str
    amount: Decimal
    split_method: SplitMethod
    allocations: Mapping[str, object]


@dataclass(slots=True)
class ClassifiedRow:
    row_number: int
    status: RowStatus
    expense: Optional[ExpenseRow] = None


@dataclass(slots=True)
class SplitResult:
    shares: dict[str, Decimal] = field(default_factory=dict)
    fragments: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return ", ".join(self.fragments)

    @property
    def is_empty(self) -> bool:
        return not self.shares


@dataclass(slots=True)
class RowBreakdown:
    row_number: int
    text: str


@dataclass(slots=True)
class Balance:
    name: str
    paid: Decimal
    owed: Decimal

    @property
    def amount(self) -> Decimal:
        return self.paid - self.owed


@dataclass(slots=True)
class LedgerSnapshot:
    participants: Sequence[Participant]
    rows: Sequence[ClassifiedRow]
    width: int

    @property
    def valid_rows(self) -> list[ExpenseRow]:
        return [row.expense for row in self.rows if row.expense is not None]

    @property
    def last_valid_row(self) -> int:
        valid = self.valid_rows
        return valid[-1].row_number if valid else HEADER_ROW

    @property
    def breakdown_column(self) -> int:
        return self.participants[-1].column + 1


@dataclass(slots=True)
class LedgerResult:
    participants: Sequence[Participant]
    breakdowns: Sequence[RowBreakdown]
    balances: Sequence[Balance]
    total: Decimal
    total_text: str
    summary_text: str
    summary_row: int
    breakdown_column: int
    due_label: str = DEFAULT_DUE_LABEL


@dataclass(slots=True, frozen=True)
class CellUpdate:
    row: int
    col: int
    value: object
