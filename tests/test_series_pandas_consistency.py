import math

import pandas as pd
import pytest

from coindetails.series import format_series

# --- Synthetic Chart Data ---
# (ISO timestamp with offset, close value); None marks a gap in the feed.
SYNTHETIC_POINTS = [
    ("2021-01-01T00:00:00Z", 29001.17),
    ("2021-01-01T02:00:00+01:00", 29120.5),
    ("2021-01-01T02:00:00Z", None),
    ("2021-01-01T03:00:00.250Z", 29388.019),
    ("2020-12-31T22:00:00-06:00", 29500.0),
    ("2021-01-01T05:00:00Z", 0.004),
]


def pandas_reference(
    points: list[tuple[str, float | None]], rate: float
) -> list[tuple[int, float | None]]:
    """Converts the synthetic points with pandas, as an independent ground truth."""
    df = pd.DataFrame(points, columns=["timestamp", "close"])
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True, format="ISO8601")
    epoch = pd.Timestamp("1970-01-01", tz="UTC")
    df["millis"] = (df["timestamp"] - epoch) // pd.Timedelta(milliseconds=1)
    df["value"] = (df["close"].astype(float) * rate).round(2)

    return [
        (int(millis), None if math.isnan(value) else float(value))
        for millis, value in zip(df["millis"], df["value"], strict=True)
    ]


@pytest.mark.parametrize(("currency", "rate"), [("EUR", 0.8213), ("JPY", 103.25)])
def test_format_series_matches_pandas(currency: str, rate: float) -> None:
    raw = [[ts, 0, 0, 0, close] for ts, close in SYNTHETIC_POINTS]
    formatted = format_series(raw, [rate, 1.0], currency)
    expected = pandas_reference(SYNTHETIC_POINTS, rate)

    assert [ts for ts, _ in formatted] == [ts for ts, _ in expected]
    for (_, got), (_, want) in zip(formatted, expected, strict=True):
        if want is None:
            assert got is None
        else:
            assert got == pytest.approx(want, abs=0.01)
