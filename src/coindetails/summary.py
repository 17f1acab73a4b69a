import math
from dataclasses import dataclass

from loguru import logger

from coindetails.converter import DEFAULT_YESTERDAY_INDEX, AnchorMode, convert
from coindetails.formatting import (
    MISSING_PLACEHOLDER,
    format_change24,
    format_circulating_supply,
    format_currency,
    format_date_time,
    format_market_cap_and_volume24,
)
from coindetails.models import CoinSnapshot, ExchangeQuote
from coindetails.utils.time import LONG_DATETIME, SHORT_TIME


@dataclass(frozen=True)
class CoinSummary:
    """Headline figures of the detail screen."""

    coin_name: str
    coin_symbol: str
    price: float | None
    price_formatted: str
    change24: float | None
    change24_formatted: str
    rank: int | None
    volume24_formatted: str
    circulating_supply_formatted: str


@dataclass(frozen=True)
class TradeRow:
    pair: str
    volume: float | None
    estimated_price: float | None
    estimated_price_formatted: str
    time_formatted: str


@dataclass(frozen=True)
class ExchangeRow:
    name: str
    price: float | None
    price_formatted: str
    volume24: float | None
    volume24_formatted: str
    volume_yesterday_usd: float | None
    time_formatted: str
    last_trades: tuple[TradeRow, ...]


@dataclass(frozen=True)
class CoinDetails:
    """Summary record plus exchange rows, all in one currency."""

    currency: str
    summary: CoinSummary
    exchanges: tuple[ExchangeRow, ...]


def compute_change24(today: float | None, yesterday: float | None) -> float | None:
    """Percentage change from `yesterday` to `today`.

    A zero previous value gives inf or nan instead of raising.
    """
    if today is None or yesterday is None:
        return None
    delta = today - yesterday
    if yesterday == 0:
        if delta == 0 or math.isnan(delta):
            return float("nan")
        return float("inf") if delta > 0 else float("-inf")
    return delta / yesterday * 100


def _exchange_row(
    exchange: ExchangeQuote,
    rate_series: tuple[float | None, ...],
    currency: str,
    yesterday_index: int,
    placeholder: str,
) -> ExchangeRow:
    price = convert(
        exchange.price,
        rate_series,
        currency,
        AnchorMode.TODAY,
        yesterday_index=yesterday_index,
    )
    volume = convert(
        exchange.volume_yesterday_usd,
        rate_series,
        currency,
        AnchorMode.YESTERDAY,
        yesterday_index=yesterday_index,
    )
    trades = []
    for trade in exchange.last_trades:
        estimated = convert(
            trade.estimated_usd_price,
            rate_series,
            currency,
            AnchorMode.TODAY,
            yesterday_index=yesterday_index,
        )
        trades.append(
            TradeRow(
                pair=trade.pair,
                volume=trade.volume,
                estimated_price=estimated,
                estimated_price_formatted=format_currency(
                    estimated, currency, placeholder
                ),
                time_formatted=format_date_time(trade.time, SHORT_TIME, placeholder),
            )
        )
    return ExchangeRow(
        name=exchange.name,
        price=price,
        price_formatted=format_currency(price, currency, placeholder),
        volume24=volume,
        volume24_formatted=format_market_cap_and_volume24(
            volume, currency, placeholder
        ),
        volume_yesterday_usd=exchange.volume_yesterday_usd,
        time_formatted=format_date_time(exchange.time, LONG_DATETIME, placeholder),
        last_trades=tuple(trades),
    )


def assemble_summary(
    snapshot: CoinSnapshot,
    target_currency: str,
    *,
    rank: int | None = None,
    yesterday_index: int = DEFAULT_YESTERDAY_INDEX,
    placeholder: str = MISSING_PLACEHOLDER,
) -> CoinDetails:
    """Builds the display record for one snapshot in one currency.

    All conversions use the snapshot's rate series and `target_currency`, so a
    single call never mixes rates. Exchanges are ordered by their raw USD
    volume of the previous day, largest first, which keeps the order the same
    in every currency. The snapshot is not modified.
    """
    coin = snapshot.coin
    rates = snapshot.rate_series
    currency = target_currency.strip().upper()
    logger.debug(
        f"Assembling {coin.symbol or '?'} details in {currency} "
        f"({len(rates)} rate samples, {len(snapshot.exchanges)} exchanges)."
    )

    price = convert(
        coin.price, rates, currency, AnchorMode.TODAY, yesterday_index=yesterday_index
    )
    price_yesterday = convert(
        coin.price_yesterday,
        rates,
        currency,
        AnchorMode.YESTERDAY,
        yesterday_index=yesterday_index,
    )
    change24 = compute_change24(price, price_yesterday)
    volume24 = convert(
        coin.volume_yesterday_usd,
        rates,
        currency,
        AnchorMode.YESTERDAY,
        yesterday_index=yesterday_index,
    )

    summary = CoinSummary(
        coin_name=coin.name,
        coin_symbol=coin.symbol,
        price=price,
        price_formatted=format_currency(price, currency, placeholder),
        change24=change24,
        change24_formatted=format_change24(change24, placeholder),
        rank=rank,
        volume24_formatted=format_market_cap_and_volume24(
            volume24, currency, placeholder
        ),
        circulating_supply_formatted=format_circulating_supply(
            coin.circulating_supply, None, placeholder
        ),
    )

    ordered = sorted(snapshot.exchanges, key=lambda e: e.sort_volume, reverse=True)
    rows = tuple(
        _exchange_row(e, rates, currency, yesterday_index, placeholder)
        for e in ordered
    )
    return CoinDetails(currency=currency, summary=summary, exchanges=rows)
