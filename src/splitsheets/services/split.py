from __future__ import annotations

from decimal import Decimal
from typing import Mapping

from splitsheets.models import ExpenseRow, SplitMethod, SplitResult
from splitsheets.utils.parse import HUNDRED, ZERO, format_currency, is_checked, parse_currency, parse_percentage


def _build_result(shares: Mapping[str, Decimal], payer: str) -> SplitResult:
    result = SplitResult()
    for name, share in shares.items():
        if share <= ZERO:
            continue
        result.shares[name] = share
        if name != payer:
            result.fragments.append(f"{name} Pays: {format_currency(share)}")
    return result


def split_equal(amount: Decimal, payer: str, allocations: Mapping[str, object]) -> SplitResult:
    if amount < 0:
        raise ValueError("amount must be non-negative")

    selected = [name for name, value in allocations.items() if is_checked(value)]
    if not selected:
        return SplitResult()

    # The cent left over by the division is not redistributed.
    share = amount / Decimal(len(selected))
    return _build_result({name: share for name in selected}, payer)


def split_percentage(amount: Decimal, payer: str, allocations: Mapping[str, object]) -> SplitResult:
    if amount < 0:
        raise ValueError("amount must be non-negative")

    percents = {name: parse_percentage(value) for name, value in allocations.items()}

    if all(percent == ZERO for percent in percents.values()):
        # Checkboxes left over from an "equally" row split 100% between the checked people
        checked = [name for name, value in allocations.items() if is_checked(value)]
        if not checked:
            return SplitResult()
        equal_percent = HUNDRED / Decimal(len(checked))
        percents = {name: equal_percent for name in checked}

    return _build_result({name: amount * percent / HUNDRED for name, percent in percents.items()}, payer)


def split_fixed(amount: Decimal, payer: str, allocations: Mapping[str, object]) -> SplitResult:
    if amount < 0:
        raise ValueError("amount must be non-negative")

    # Fixed shares are taken as entered, even when they do not add up to the amount.
    return _build_result({name: parse_currency(value) for name, value in allocations.items()}, payer)


def calculate_split(expense: ExpenseRow) -> SplitResult:
    match expense.split_method:
        case SplitMethod.EQUAL:
            return split_equal(expense.amount, expense.payer, expense.allocations)
        case SplitMethod.PERCENTAGE:
            return split_percentage(expense.amount, expense.payer, expense.allocations)
        case SplitMethod.FIXED:
            return split_fixed(expense.amount, expense.payer, expense.allocations)
