from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from splitsheets.models import Balance
from splitsheets.utils.parse import format_currency


SUMMARY_SEPARATOR = " | "

# Exact Decimal division leaves residues around 1e-27; anything above this is a real debt.
DIVISION_RESIDUE = Decimal("1e-9")


def format_balance_summary(balances: Iterable[Balance]) -> str:
    parts: list[str] = []
    for balance in balances:
        if balance.amount < -DIVISION_RESIDUE:
            parts.append(f"{balance.name} owes {format_currency(abs(balance.amount))}")
    return SUMMARY_SEPARATOR.join(parts)


def format_total(total: Decimal) -> str:
    return format_currency(total)
