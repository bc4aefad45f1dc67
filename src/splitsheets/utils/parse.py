from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


ZERO = Decimal(0)
HUNDRED = Decimal(100)
CENT = Decimal("0.01")

_CURRENCY_NOISE = re.compile(r"[$€£¥,\s]")


def _to_decimal(value: object) -> Decimal:
    if isinstance(value, bool) or value is None:
        return ZERO
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        number = Decimal(str(value))
    else:
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return ZERO
    if not number.is_finite():
        return ZERO
    return number


def parse_currency(value: object) -> Decimal:
    """
    Parse an amount from a table cell.

    Supported formats:
    - 1234.56, 75 (numbers pass through)
    - "$1,234.56", "€ 20" (currency symbols and thousands separators are dropped)

    Empty or non-numeric input gives 0. Trailing text such as "12.50 USD" is not
    numeric and also gives 0.
    """
    if isinstance(value, str):
        cleaned = _CURRENCY_NOISE.sub("", value)
        if not cleaned:
            return ZERO
        return _to_decimal(cleaned)
    return _to_decimal(value)


def parse_percentage(value: object) -> Decimal:
    """
    Parse a percentage: "50%" -> 50, 0.5 -> 50, 50 -> 50.

    A number in (0, 1] is read as a fraction, so 1 becomes 100.
    """
    if value is None or isinstance(value, bool) or value == "":
        return ZERO

    text = str(value).strip()
    if "%" in text:
        return _to_decimal(text.replace("%", ""))

    number = _to_decimal(text)
    if ZERO < number <= 1:
        return number * HUNDRED
    return number


def is_checked(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value == 1
    if isinstance(value, str):
        return value.strip().upper() == "TRUE"
    return False


def format_currency(amount: Decimal) -> str:
    rounded = Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.2f}"
