"""Typed views of the provider's coin snapshot payload.

Parsing is lenient: absent or non-numeric amounts become None so the
formatters can render a placeholder instead of failing the whole screen.
"""

import math
from dataclasses import dataclass, field
from typing import Any

from loguru import logger


def _to_float(value: Any) -> float | None:
    """Coerces a payload number (or numeric string) to float, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            logger.debug(f"Ignoring non-numeric amount '{value}'.")
            return None
    return None


def _rate_series(change: Any) -> list[float | None]:
    if not isinstance(change, dict):
        return []
    rates = change.get("USD")
    if not isinstance(rates, list):
        return []
    return [_to_float(rate) for rate in rates]


@dataclass(frozen=True)
class Trade:
    """One of an exchange's most recent trades."""

    pair: str = ""
    volume: float | None = None
    estimated_usd_price: float | None = None
    time: Any = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Trade":
        return cls(
            pair=str(data.get("Pair") or ""),
            volume=_to_float(data.get("Volume")),
            estimated_usd_price=_to_float(data.get("EstimatedUSDPrice")),
            time=data.get("Time"),
        )


@dataclass(frozen=True)
class ExchangeQuote:
    """A single venue's quote for the coin."""

    name: str = ""
    price: float | None = None
    volume_yesterday_usd: float | None = None
    time: Any = None
    last_trades: tuple[Trade, ...] = ()

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "ExchangeQuote":
        trades = data.get("LastTrades") or []
        return cls(
            name=str(data.get("Name") or ""),
            price=_to_float(data.get("Price")),
            volume_yesterday_usd=_to_float(data.get("VolumeYesterdayUSD")),
            time=data.get("Time"),
            last_trades=tuple(
                Trade.from_payload(t) for t in trades if isinstance(t, dict)
            ),
        )

    @property
    def sort_volume(self) -> float:
        """Raw USD volume used for ordering; missing volumes sort last."""
        volume = self.volume_yesterday_usd
        if volume is None or math.isnan(volume):
            return -math.inf
        return volume


@dataclass(frozen=True)
class CoinInfo:
    """Headline figures for the coin, all in USD."""

    name: str = ""
    symbol: str = ""
    price: float | None = None
    price_yesterday: float | None = None
    volume_yesterday_usd: float | None = None
    circulating_supply: float | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "CoinInfo":
        return cls(
            name=str(data.get("Name") or ""),
            symbol=str(data.get("Symbol") or ""),
            price=_to_float(data.get("Price")),
            price_yesterday=_to_float(data.get("PriceYesterday")),
            volume_yesterday_usd=_to_float(data.get("VolumeYesterdayUSD")),
            circulating_supply=_to_float(data.get("CirculatingSupply")),
        )


@dataclass(frozen=True)
class CoinSnapshot:
    """Everything the detail screen needs from one provider response."""

    coin: CoinInfo
    rate_series: tuple[float | None, ...] = ()
    exchanges: tuple[ExchangeQuote, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CoinSnapshot":
        """Builds a snapshot from the decoded JSON of a symbol lookup.

        Raises:
            ValueError: If the payload has no `Coin` object.
        """
        coin = payload.get("Coin") if isinstance(payload, dict) else None
        if not isinstance(coin, dict):
            err_msg = "Snapshot payload has no 'Coin' object."
            raise ValueError(err_msg)
        exchanges = payload.get("Exchanges") or []
        return cls(
            coin=CoinInfo.from_payload(coin),
            rate_series=tuple(_rate_series(payload.get("Change"))),
            exchanges=tuple(
                ExchangeQuote.from_payload(e) for e in exchanges if isinstance(e, dict)
            ),
        )
