import enum
import math
from collections.abc import Sequence
from typing import Final

from loguru import logger

BASE_CURRENCY: Final[str] = "USD"

# Position of the previous-day sample in a newest-first rate series when the
# provider samples once per day.
DEFAULT_YESTERDAY_INDEX: Final[int] = 1

RateSeries = Sequence[float | None]


class AnchorMode(enum.StrEnum):
    """Which sample of a rate series applies to a conversion."""

    TODAY = "today"
    YESTERDAY = "yesterday"


def _usable_rate(rate_series: RateSeries, index: int) -> float | None:
    if index < 0 or index >= len(rate_series):
        return None
    rate = rate_series[index]
    if rate is None or (isinstance(rate, float) and math.isnan(rate)):
        return None
    return float(rate)


def select_rate(
    rate_series: RateSeries,
    anchor: AnchorMode | str,
    yesterday_index: int = DEFAULT_YESTERDAY_INDEX,
) -> float | None:
    """Picks the rate for an anchor from a newest-first rate series.

    `today` is the first sample. `yesterday` is the sample at
    `yesterday_index` and falls back to the `today` sample when that position
    is not available. Returns None when no usable rate exists.

    Raises:
        ValueError: If `anchor` is not a known anchor mode.
    """
    anchor = AnchorMode(anchor)
    if anchor is AnchorMode.YESTERDAY:
        rate = _usable_rate(rate_series, yesterday_index)
        if rate is not None:
            return rate
        logger.debug(
            f"No rate at index {yesterday_index} of a {len(rate_series)}-sample "
            "series; using the most recent rate for 'yesterday'."
        )
    return _usable_rate(rate_series, 0)


def convert(
    amount_usd: float | None,
    rate_series: RateSeries,
    target_currency: str,
    anchor: AnchorMode | str,
    *,
    yesterday_index: int = DEFAULT_YESTERDAY_INDEX,
) -> float | None:
    """Converts a USD amount into `target_currency`.

    Converting to USD is the identity and never looks at the rate series.
    When no rate can be selected the unconverted USD amount is returned, so
    a missing rate series never breaks rendering. Missing amounts (None) stay
    missing and NaN propagates through the multiplication.

    Args:
        amount_usd: The amount in USD.
        rate_series: USD to `target_currency` rates, newest first.
        target_currency: ISO 4217 code of the display currency.
        anchor: Whether to use the most recent or the previous-day rate.
        yesterday_index: Position of the previous-day rate in `rate_series`.

    Returns:
        The converted amount.
    """
    anchor = AnchorMode(anchor)
    if amount_usd is None:
        return None
    if target_currency.strip().upper() == BASE_CURRENCY:
        return amount_usd

    rate = select_rate(rate_series, anchor, yesterday_index)
    if rate is None:
        logger.debug(
            f"No {target_currency} rate available; "
            "falling back to the unconverted USD amount."
        )
        return amount_usd
    return amount_usd * rate
