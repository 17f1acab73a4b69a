from dataclasses import dataclass

from loguru import logger

from coindetails.config import DisplaySettings
from coindetails.models import CoinSnapshot
from coindetails.series import ChartPayloads, ChartSeries, assemble_charts
from coindetails.summary import CoinDetails, assemble_summary


@dataclass(frozen=True)
class CoinDetailsView:
    """Everything the presentation layer renders for one coin."""

    details: CoinDetails
    charts: ChartSeries | None


class CoinDetailsSession:
    """Holds the latest snapshot, chart data and currency for one coin.

    Any change is followed by an explicit recompute, so the view always
    reflects a single (snapshot, currency) pair. Charts are only formatted once
    a snapshot, and with it the rate series, is available.
    """

    def __init__(
        self,
        display: DisplaySettings | None = None,
        currency: str | None = None,
        rank: int | None = None,
    ) -> None:
        self.display = display or DisplaySettings()
        self._currency = (currency or self.display.default_currency).strip().upper()
        self._rank = rank
        self._snapshot: CoinSnapshot | None = None
        self._charts: ChartPayloads | None = None
        self._view: CoinDetailsView | None = None

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def view(self) -> CoinDetailsView | None:
        """The last computed view, or None before the first snapshot."""
        return self._view

    def set_snapshot(self, snapshot: CoinSnapshot) -> CoinDetailsView:
        self._snapshot = snapshot
        return self._recompute()

    def set_charts(self, payloads: ChartPayloads) -> CoinDetailsView | None:
        self._charts = payloads
        if self._snapshot is None:
            logger.debug("Chart data held until a snapshot provides rates.")
            return None
        return self._recompute()

    def set_currency(self, currency: str) -> CoinDetailsView | None:
        currency = currency.strip().upper()
        if currency == self._currency:
            return self._view
        logger.info(f"Display currency changed from {self._currency} to {currency}.")
        self._currency = currency
        if self._snapshot is None:
            return None
        return self._recompute()

    def set_rank(self, rank: int | None) -> CoinDetailsView | None:
        self._rank = rank
        if self._snapshot is None:
            return None
        return self._recompute()

    def _recompute(self) -> CoinDetailsView:
        snapshot = self._snapshot
        if snapshot is None:
            err_msg = "Cannot compute a view without a snapshot."
            raise RuntimeError(err_msg)
        index = self.display.yesterday_rate_index
        details = assemble_summary(
            snapshot,
            self._currency,
            rank=self._rank,
            yesterday_index=index,
            placeholder=self.display.missing_placeholder,
        )
        charts = None
        if self._charts is not None:
            charts = assemble_charts(
                self._charts,
                snapshot.rate_series,
                self._currency,
                self.display.chart_venue,
                yesterday_index=index,
            )
        self._view = CoinDetailsView(details=details, charts=charts)
        return self._view
