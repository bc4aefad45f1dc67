from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from splitsheets.models import (
    DEFAULT_DUE_LABEL,
    Balance,
    ExpenseRow,
    LedgerResult,
    LedgerSnapshot,
    Participant,
    RowBreakdown,
    SplitResult,
)
from splitsheets.services.split import calculate_split
from splitsheets.services.summary import format_balance_summary, format_total
from splitsheets.utils.parse import ZERO


class Ledger:
    """Running paid/owed totals for one recalculation pass."""

    def __init__(self, participants: Sequence[Participant]) -> None:
        self._names = [p.name for p in participants]
        self._paid: dict[str, Decimal] = {name: ZERO for name in self._names}
        self._owed: dict[str, Decimal] = {name: ZERO for name in self._names}
        self.total = ZERO

    def apply(self, expense: ExpenseRow, result: SplitResult) -> None:
        self.total += expense.amount
        if result.is_empty:
            return

        for name, share in result.shares.items():
            self._owed[name] += share
        if expense.payer in self._paid:
            self._paid[expense.payer] += expense.amount

    def paid(self, name: str) -> Decimal:
        return self._paid[name]

    def owed(self, name: str) -> Decimal:
        return self._owed[name]

    def balances(self) -> list[Balance]:
        return [Balance(name=name, paid=self._paid[name], owed=self._owed[name]) for name in self._names]


def recalculate_snapshot(snapshot: LedgerSnapshot, due_label: str = DEFAULT_DUE_LABEL) -> LedgerResult:
    ledger = Ledger(snapshot.participants)
    breakdowns: list[RowBreakdown] = []

    for expense in snapshot.valid_rows:
        result = calculate_split(expense)
        ledger.apply(expense, result)
        breakdowns.append(RowBreakdown(row_number=expense.row_number, text=result.text))

    balances = ledger.balances()
    return LedgerResult(
        participants=snapshot.participants,
        breakdowns=breakdowns,
        balances=balances,
        total=ledger.total,
        total_text=format_total(ledger.total),
        summary_text=format_balance_summary(balances),
        summary_row=snapshot.last_valid_row + 1,
        breakdown_column=snapshot.breakdown_column,
        due_label=due_label,
    )
