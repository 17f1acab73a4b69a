"""Display formatting for converted amounts, percentages and magnitudes.

Every formatter accepts missing input (None, NaN or an infinity) and renders
the placeholder instead of strings such as "$nan". Two-decimal rounding sends
ties away from zero, the way JavaScript's `toFixed(2)` does.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Final

from coindetails.currency_symbols import currency_prefix
from coindetails.utils.time import LONG_DATETIME, format_date_time as _format_dt

MISSING_PLACEHOLDER: Final[str] = "—"

# Checked in order; the first threshold the magnitude reaches wins.
MAGNITUDE_SUFFIXES: Final[tuple[tuple[float, str], ...]] = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)

_CENTS = Decimal("0.01")
# Enough digits to quantize the largest finite float to cents.
_CENTS_CONTEXT = Context(prec=400)


def is_missing(value: float | None) -> bool:
    """True for None, NaN, infinities and values that are not numbers."""
    if value is None:
        return True
    try:
        return not math.isfinite(value)
    except TypeError:
        return True


def _to_cents(value: float) -> Decimal:
    # repr() is the shortest decimal that round-trips, so 0.625 stays a tie.
    return Decimal(repr(value)).quantize(
        _CENTS, rounding=ROUND_HALF_UP, context=_CENTS_CONTEXT
    )


def round_half_up(value: float) -> float:
    """Rounds a finite value to two decimals, ties away from zero."""
    return float(_to_cents(value))


def fixed2(value: float) -> str:
    """Renders a finite value with exactly two decimals, ties away from zero."""
    return f"{_to_cents(value):f}"


def _abbreviate(amount: float) -> str | None:
    """Applies the K/M/B/T suffix, moving up a unit when rounding reaches 1000."""
    chosen = None
    for index, (threshold, _suffix) in enumerate(MAGNITUDE_SUFFIXES):
        if abs(amount) >= threshold:
            chosen = index
            break
    if chosen is None:
        # 999.995 rounds to 1000.00 and is shown as 1.00K.
        if abs(_to_cents(amount)) < 1000:
            return None
        chosen = len(MAGNITUDE_SUFFIXES) - 1
    threshold, suffix = MAGNITUDE_SUFFIXES[chosen]
    scaled = _to_cents(amount / threshold)
    if abs(scaled) >= 1000 and chosen > 0:
        threshold, suffix = MAGNITUDE_SUFFIXES[chosen - 1]
        scaled = _to_cents(amount / threshold)
    return f"{scaled:f}{suffix}"


def format_currency(
    amount: float | None,
    currency_code: str,
    placeholder: str = MISSING_PLACEHOLDER,
) -> str:
    """Renders `amount` with the currency symbol and two decimals.

    >>> format_currency(1234.5, "USD")
    '$1234.50'
    """
    if is_missing(amount):
        return placeholder
    return f"{currency_prefix(currency_code)}{fixed2(amount)}"


def format_change24(
    percent: float | None, placeholder: str = MISSING_PLACEHOLDER
) -> str:
    """Renders a signed percentage; zero carries a plus sign.

    Non-finite values (from a zero previous-day price) render the placeholder.
    """
    if is_missing(percent):
        return placeholder
    sign = "-" if percent < 0 else "+"
    text = fixed2(abs(percent))
    # -0.001 rounds to zero and is shown as +0.00%.
    if text == "0.00":
        sign = "+"
    return f"{sign}{text}%"


def format_market_cap_and_volume24(
    amount: float | None,
    currency_code: str,
    placeholder: str = MISSING_PLACEHOLDER,
) -> str:
    """Renders large amounts with a K/M/B/T suffix and the currency symbol."""
    if is_missing(amount):
        return placeholder
    abbreviated = _abbreviate(amount)
    if abbreviated is None:
        return format_currency(amount, currency_code, placeholder)
    return f"{currency_prefix(currency_code)}{abbreviated}"


def format_circulating_supply(
    amount: float | None,
    unit_override: str | None = None,
    placeholder: str = MISSING_PLACEHOLDER,
) -> str:
    """Renders a supply figure with a magnitude suffix and an optional unit."""
    if is_missing(amount):
        return placeholder
    text = _abbreviate(amount) or fixed2(amount)
    if unit_override:
        return f"{text} {unit_override}"
    return text


def format_date_time(
    timestamp: Any,
    pattern: str = LONG_DATETIME,
    placeholder: str = MISSING_PLACEHOLDER,
) -> str:
    """Renders a timestamp in UTC, or the placeholder when it cannot be parsed."""
    if timestamp is None:
        return placeholder
    try:
        return _format_dt(timestamp, pattern)
    except ValueError:
        return placeholder
