import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Final

from loguru import logger

from coindetails.converter import (
    DEFAULT_YESTERDAY_INDEX,
    AnchorMode,
    RateSeries,
    convert,
)
from coindetails.currency_symbols import currency_prefix
from coindetails.formatting import round_half_up
from coindetails.utils.time import to_utc_millis

# Index of the close-equivalent value in a raw [time, open, high, low, close] point.
VALUE_INDEX: Final[int] = 4

FormattedPoint = tuple[int, float | None]


def _point_value(point: Sequence[Any]) -> float | None:
    if len(point) <= VALUE_INDEX:
        return None
    value = point[VALUE_INDEX]
    if value is None or isinstance(value, bool):
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def format_series(
    raw_points: Sequence[Sequence[Any]],
    rate_series: RateSeries,
    target_currency: str,
    *,
    yesterday_index: int = DEFAULT_YESTERDAY_INDEX,
) -> list[FormattedPoint]:
    """Converts raw chart points into `(utc_millis, value)` pairs.

    One output point is produced per input point, in input order. Every point
    is converted with the current rate; historical points are not matched to
    the rate of their own day. A missing, NaN or infinite value yields None so
    the chart can draw a gap. Values are rounded to two decimals with ties
    away from zero.

    Args:
        raw_points: `[timestamp, open, high, low, close, ...]` sequences.
        rate_series: USD to `target_currency` rates, newest first.
        target_currency: ISO 4217 code of the display currency.
        yesterday_index: Passed through to the converter.

    Returns:
        The formatted points, values rounded to two decimals.

    Raises:
        ValueError: If a point is not a non-empty sequence or its timestamp
            cannot be parsed.
    """
    formatted: list[FormattedPoint] = []
    missing = 0
    for point in raw_points:
        if not isinstance(point, list | tuple) or not point:
            err_msg = f"Chart point has no timestamp: {point!r}"
            raise ValueError(err_msg)
        timestamp = to_utc_millis(point[0])
        value = _point_value(point)
        if value is None:
            missing += 1
            formatted.append((timestamp, None))
            continue
        converted = convert(
            value,
            rate_series,
            target_currency,
            AnchorMode.TODAY,
            yesterday_index=yesterday_index,
        )
        if not math.isfinite(converted):
            missing += 1
            formatted.append((timestamp, None))
            continue
        formatted.append((timestamp, round_half_up(converted)))

    if missing:
        logger.debug(f"{missing} of {len(formatted)} chart points have no value.")
    return formatted


def extract_series_values(payload: Any) -> list[Sequence[Any]]:
    """Returns the raw points of the first series in a chart response.

    A chart response is `[{"Series": [{"values": [...]}]}]`. Anything that
    does not have that shape yields an empty list. Points are returned as
    delivered, malformed ones included, so `format_series` sees every point.
    """
    try:
        values = payload[0]["Series"][0]["values"]
    except (IndexError, KeyError, TypeError):
        logger.debug("Chart payload has no series values.")
        return []
    if not isinstance(values, list):
        return []
    return list(values)


@dataclass(frozen=True)
class ChartPayloads:
    """Raw chart responses for the two metrics, across all venues and one venue."""

    ma120_all: Any = None
    vol120_all: Any = None
    ma120_venue: Any = None
    vol120_venue: Any = None


@dataclass(frozen=True)
class ChartSeries:
    """Display-ready chart data in one currency."""

    currency: str
    venue: str
    axis_title: str
    currency_symbol: str
    ma120_all: list[FormattedPoint] = field(default_factory=list)
    vol120_all: list[FormattedPoint] = field(default_factory=list)
    ma120_venue: list[FormattedPoint] = field(default_factory=list)
    vol120_venue: list[FormattedPoint] = field(default_factory=list)


def assemble_charts(
    payloads: ChartPayloads,
    rate_series: RateSeries,
    target_currency: str,
    venue: str = "Simex",
    *,
    yesterday_index: int = DEFAULT_YESTERDAY_INDEX,
) -> ChartSeries:
    """Formats all four chart responses against one rate series and currency."""

    def _format(payload: Any) -> list[FormattedPoint]:
        return format_series(
            extract_series_values(payload),
            rate_series,
            target_currency,
            yesterday_index=yesterday_index,
        )

    return ChartSeries(
        currency=target_currency,
        venue=venue,
        axis_title=f"Price ({target_currency})",
        currency_symbol=currency_prefix(target_currency),
        ma120_all=_format(payloads.ma120_all),
        vol120_all=_format(payloads.vol120_all),
        ma120_venue=_format(payloads.ma120_venue),
        vol120_venue=_format(payloads.vol120_venue),
    )
