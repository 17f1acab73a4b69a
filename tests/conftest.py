from typing import Any

import pytest


@pytest.fixture
def snapshot_payload() -> dict[str, Any]:
    """A symbol lookup response shaped like the provider's, in USD."""
    return {
        "Coin": {
            "Symbol": "BTC",
            "Name": "Bitcoin",
            "Price": 100.0,
            "PriceYesterday": 80.0,
            "VolumeYesterdayUSD": 2_500_000.0,
            "CirculatingSupply": 18_500_000.0,
            "Time": "2021-01-01T00:00:00Z",
        },
        "Change": {"USD": [1.0]},
        "Exchanges": [
            {
                "Name": "Small",
                "Price": 101.0,
                "VolumeYesterdayUSD": 100.0,
                "Time": "2021-01-01T00:00:00Z",
                "LastTrades": [
                    {
                        "Pair": "BTC-USDT",
                        "Volume": 0.5,
                        "EstimatedUSDPrice": 100.5,
                        "Time": "2021-01-01T13:05:09Z",
                    }
                ],
            },
            {
                "Name": "Large",
                "Price": 99.5,
                "VolumeYesterdayUSD": 500.0,
                "Time": "2021-01-02T13:05:09Z",
                "LastTrades": [],
            },
            {
                "Name": "Tiny",
                "Price": None,
                "VolumeYesterdayUSD": 10.0,
                "Time": None,
            },
        ],
    }
