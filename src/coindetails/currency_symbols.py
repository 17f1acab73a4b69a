"""ISO 4217 currency code to display symbol table."""

from typing import Final

CURRENCY_SYMBOLS: Final[dict[str, str]] = {
    "AED": "د.إ",
    "ARS": "$",
    "AUD": "$",
    "BDT": "৳",
    "BGN": "лв",
    "BRL": "R$",
    "BTC": "₿",
    "CAD": "$",
    "CHF": "CHF",
    "CLP": "$",
    "CNY": "¥",
    "COP": "$",
    "CZK": "Kč",
    "DKK": "kr",
    "EGP": "£",
    "ETH": "Ξ",
    "EUR": "€",
    "GBP": "£",
    "HKD": "$",
    "HUF": "Ft",
    "IDR": "Rp",
    "ILS": "₪",
    "INR": "₹",
    "ISK": "kr",
    "JPY": "¥",
    "KES": "KSh",
    "KRW": "₩",
    "MXN": "$",
    "MYR": "RM",
    "NGN": "₦",
    "NOK": "kr",
    "NZD": "$",
    "PHP": "₱",
    "PKR": "₨",
    "PLN": "zł",
    "RON": "lei",
    "RUB": "₽",
    "SAR": "﷼",
    "SEK": "kr",
    "SGD": "$",
    "THB": "฿",
    "TRY": "₺",
    "TWD": "NT$",
    "UAH": "₴",
    "USD": "$",
    "VND": "₫",
    "ZAR": "R",
}


def get_currency_symbol(currency_code: str) -> str | None:
    """Returns the display symbol for a currency code, or None if unknown."""
    return CURRENCY_SYMBOLS.get(currency_code.strip().upper())


def currency_prefix(currency_code: str) -> str:
    """Returns the symbol for a currency code, falling back to the code itself."""
    return get_currency_symbol(currency_code) or currency_code
