"""Auto-fill of the last unknown percentage or fixed amount in a row."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional, Sequence

from splitsheets.logging import get_logger
from splitsheets.models import Participant, SplitMethod
from splitsheets.services.rows import cell
from splitsheets.utils.parse import HUNDRED, ZERO, parse_currency, parse_percentage


log = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class RemainderFill:
    column: int
    remaining: Decimal
    method: SplitMethod

    @property
    def cell_value(self) -> Decimal:
        # Percentages are stored as fractions so a "0%" number format renders them.
        if self.method is SplitMethod.PERCENTAGE:
            return self.remaining / HUNDRED
        return self.remaining


def compute_remainder(
    method: SplitMethod,
    participants: Sequence[Participant],
    row_values: Sequence[object],
    edited_col: int,
    edited_value: object,
    amount: Decimal,
) -> Optional[RemainderFill]:
    """
    Decide which allocation cell of a row receives the computed remainder.

    Only one cell is ever written. It is either the single empty cell among the
    others, or the other column when the table has exactly two participants.
    Returns None when the fill would be ambiguous or negative.
    """
    parse: Callable[[object], Decimal]
    if method is SplitMethod.PERCENTAGE:
        parse, target = parse_percentage, HUNDRED
    elif method is SplitMethod.FIXED:
        if amount <= ZERO:
            return None
        parse, target = parse_currency, amount
    else:
        return None

    columns = [p.column for p in participants]
    if len(columns) < 2 or edited_col not in columns:
        return None

    edited = parse(edited_value)
    filled_total = ZERO
    empty: list[int] = []
    for col in columns:
        if col == edited_col:
            continue
        value = parse(cell(row_values, col))
        if value > ZERO:
            filled_total += value
        else:
            empty.append(col)

    remaining = target - edited - filled_total
    if len(empty) == 1 and remaining >= ZERO:
        return RemainderFill(column=empty[0], remaining=remaining, method=method)

    if len(columns) == 2:
        other = columns[1] if columns[0] == edited_col else columns[0]
        remaining = target - edited
        if remaining >= ZERO:
            return RemainderFill(column=other, remaining=remaining, method=method)
        return None

    log.debug("remainder.ambiguous", empty_cells=len(empty), participants=len(columns))
    return None
