"""
Utility functions for invoice amounts and display formatting.

Provides helpers for:
- Parsing user-typed and server-sent amounts into Decimals
- Formatting amounts to the active currency's decimal places
- Currency token lookup and date display

Amounts are kept as strings at the edges and as Decimals in between;
floats are never used for money.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

# Value an amount input holds when the user has typed only the decimal point
PLACEHOLDER_AMOUNT = "."

_CURRENCY_TOKENS = {
    "AUD": "A$",
    "CAD": "C$",
    "CNY": "¥",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "SGD": "S$",
    "USD": "$",
}


def is_placeholder(value: Any) -> bool:
    """Return True when the value is the bare decimal point placeholder."""
    return isinstance(value, str) and value.strip() == PLACEHOLDER_AMOUNT


def parse_amount(value: Any) -> Decimal:
    """
    Parse an amount into a Decimal.

    Empty input, the "." placeholder, garbage text and non-finite values all
    parse to zero.

    Args:
        value: String, int, float or Decimal amount.

    Returns:
        Finite Decimal value.
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip().replace(",", "")
        if not text or text == PLACEHOLDER_AMOUNT:
            return Decimal(0)
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return Decimal(0)
    if not amount.is_finite():
        return Decimal(0)
    return amount


def quantize(value: Any, decimal_places: int) -> Decimal:
    """Round half-up to the given number of decimal places."""
    exponent = Decimal(1).scaleb(-max(decimal_places, 0))
    return parse_amount(value).quantize(exponent, rounding=ROUND_HALF_UP)


def format_amount(value: Any, decimal_places: int) -> str:
    """
    Format an amount with exactly decimal_places digits after the point.

    Examples:
        format_amount("433.0000", 2) -> "433.00"
        format_amount(1.005, 2) -> "1.01"
    """
    return f"{quantize(value, decimal_places):f}"


def plain_amount(value: Any) -> str:
    """
    Return the shortest plain decimal string for an amount.

    Trailing zeros are dropped and exponents are never used, so "433.0000"
    becomes "433" and "1E+2" becomes "100".
    """
    amount = parse_amount(value)
    if amount == 0:
        return "0"
    return f"{amount.normalize():f}"


def currency_token(code: str | None) -> str:
    """Return the display symbol for a currency code."""
    if not code:
        return "$"
    return _CURRENCY_TOKENS.get(code.upper(), f"{code.upper()} ")


def format_currency(value: Any, code: str | None, decimal_places: int = 2) -> str:
    """
    Format a currency amount with its symbol and thousands separators.

    Returns:
        Formatted string like '$1,234.56'.
    """
    places = max(decimal_places, 0)
    return f"{currency_token(code)}{quantize(value, places):,.{places}f}"


def format_epoch_date(epoch_seconds: int | None) -> str:
    """Format an epoch timestamp (seconds) for display, or the N/A label."""
    if not epoch_seconds:
        return "N/A"
    return datetime.fromtimestamp(int(epoch_seconds), tz=timezone.utc).strftime(
        "%b %d, %Y"
    )
