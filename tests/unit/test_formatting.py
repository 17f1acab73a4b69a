import pytest

from coindetails.formatting import (
    MISSING_PLACEHOLDER,
    format_change24,
    format_circulating_supply,
    format_currency,
    format_date_time,
    format_market_cap_and_volume24,
)


def test_format_currency_uses_symbol_and_two_decimals() -> None:
    assert format_currency(1234.5, "USD") == "$1234.50"
    assert format_currency(0.123, "EUR") == "€0.12"
    assert format_currency(-7, "GBP") == "£-7.00"


def test_format_currency_unknown_code_uses_code_as_prefix() -> None:
    assert format_currency(10, "XYZ") == "XYZ10.00"


@pytest.mark.parametrize("missing", [None, float("nan")])
def test_format_currency_missing_renders_placeholder(missing: float | None) -> None:
    assert format_currency(missing, "USD") == MISSING_PLACEHOLDER
    assert format_currency(missing, "USD", placeholder="") == ""


@pytest.mark.parametrize(
    ("percent", "expected"),
    [
        (3.2149, "+3.21%"),
        (-0.05, "-0.05%"),
        (0.0, "+0.00%"),
        (-0.001, "+0.00%"),
        (25.0, "+25.00%"),
    ],
)
def test_format_change24(percent: float, expected: str) -> None:
    assert format_change24(percent) == expected


@pytest.mark.parametrize(
    "value", [None, float("nan"), float("inf"), float("-inf")]
)
def test_format_change24_non_finite_renders_placeholder(value: float | None) -> None:
    assert format_change24(value) == MISSING_PLACEHOLDER


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (2_500_000, "$2.50M"),
        (999, "$999.00"),
        (1_000, "$1.00K"),
        (1_234_567_890, "$1.23B"),
        (3.5e12, "$3.50T"),
        (0, "$0.00"),
    ],
)
def test_format_market_cap_and_volume24(amount: float, expected: str) -> None:
    assert format_market_cap_and_volume24(amount, "USD") == expected


def test_format_market_cap_other_currency() -> None:
    assert format_market_cap_and_volume24(4_200_000_000, "EUR") == "€4.20B"
    assert format_market_cap_and_volume24(4_200_000_000, "XYZ") == "XYZ4.20B"


def test_format_market_cap_missing() -> None:
    assert format_market_cap_and_volume24(float("nan"), "USD") == MISSING_PLACEHOLDER


def test_format_circulating_supply() -> None:
    assert format_circulating_supply(18_500_000) == "18.50M"
    assert format_circulating_supply(18_500_000, "BTC") == "18.50M BTC"
    assert format_circulating_supply(512) == "512.00"
    assert format_circulating_supply(None) == MISSING_PLACEHOLDER


def test_format_date_time_placeholder_for_bad_input() -> None:
    assert format_date_time(None) == MISSING_PLACEHOLDER
    assert format_date_time("garbage") == MISSING_PLACEHOLDER


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(0.625, "$0.63"), (1000.125, "$1000.13"), (-0.625, "$-0.63"), (2.675, "$2.68")],
)
def test_format_currency_ties_round_away_from_zero(
    amount: float, expected: str
) -> None:
    assert format_currency(amount, "USD") == expected


def test_format_change24_ties_round_away_from_zero() -> None:
    assert format_change24(0.125) == "+0.13%"
    assert format_change24(-0.125) == "-0.13%"


@pytest.mark.parametrize("amount", [float("inf"), float("-inf")])
def test_infinite_amounts_render_placeholder(amount: float) -> None:
    assert format_currency(amount, "USD") == MISSING_PLACEHOLDER
    assert format_market_cap_and_volume24(amount, "USD") == MISSING_PLACEHOLDER
    assert format_circulating_supply(amount, "BTC") == MISSING_PLACEHOLDER


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (999.995, "$1.00K"),
        (999_999, "$1.00M"),
        (-999_999, "$-1.00M"),
        (999_999_999, "$1.00B"),
        (999_995_000_000, "$1.00T"),
    ],
)
def test_rounding_up_to_1000_moves_to_the_next_suffix(
    amount: float, expected: str
) -> None:
    assert format_market_cap_and_volume24(amount, "USD") == expected


def test_format_circulating_supply_rolls_over_suffix() -> None:
    assert format_circulating_supply(999_999, "BTC") == "1.00M BTC"
