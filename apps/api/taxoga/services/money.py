from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CURRENCY_SYMBOL = "₦"
ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = Decimal("12")

_STRIP_CHARS = re.compile(r"[₦,\s]")
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_LEADING_INTEGER = re.compile(r"[+-]?\d+")
# Amounts of 10**21 naira and above parse as zero.
_MAX_ADJUSTED_EXPONENT = 20
CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Convert an int, float, str or Decimal to Decimal (floats go through str)."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _sane(value: Decimal) -> Decimal:
    if not value.is_finite() or value <= 0 or value.adjusted() > _MAX_ADJUSTED_EXPONENT:
        return ZERO
    return value


def parse_amount(raw: Any) -> Decimal:
    """Parse a currency amount typed by a user.

    Strips the naira sign, thousands separators and whitespace, then reads the
    leading decimal number. Anything that does not parse, anything negative
    and anything absurdly large comes back as zero. Never raises.
    """
    if raw is None or isinstance(raw, bool):
        return ZERO
    if isinstance(raw, (int, float, Decimal)):
        try:
            value = to_decimal(raw)
        except (InvalidOperation, ValueError):
            return ZERO
        return _sane(value)

    match = _LEADING_NUMBER.match(_STRIP_CHARS.sub("", str(raw)))
    if not match:
        return ZERO
    try:
        value = Decimal(match.group(0))
    except InvalidOperation:
        return ZERO
    return _sane(value)


def parse_whole_amount(raw: Any) -> Decimal:
    """Like parse_amount, rounded half-up to a whole naira."""
    return max(ZERO, parse_amount(raw).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_year(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INTEGER.match(str(raw).strip())
    if not match:
        return None
    return int(match.group(0))


def format_amount(value: Any) -> str:
    """Render an amount as naira, e.g. ``₦1,250,000`` or ``₦1,250.50``."""
    amount = to_decimal(value)
    if amount == 0:
        return f"{CURRENCY_SYMBOL}0"
    if amount == amount.to_integral_value():
        return f"{CURRENCY_SYMBOL}{amount:,.0f}"
    return f"{CURRENCY_SYMBOL}{amount.quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"


def format_percent(value: Any) -> str:
    return f"{to_decimal(value):.2f}%"


def format_rate(value: Any) -> str:
    """Percentage without trailing zeros: ``25`` rather than ``25.00``."""
    rate = to_decimal(value).normalize()
    return f"{rate:f}"
