"""
YieldPlus — Currency Resolver & Price Formatting

Maps a country name to its display currency and renders prices for
recommendation text and presentation layers.

Lookup is by exact country name (case-sensitive, no trimming). Unknown
countries fall back to USD rather than failing. The table is a read-only
mapping built once at import and can be swapped per call for tests or
alternative deployments.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Mapping, NamedTuple

import structlog

from yieldplus.config import settings

logger = structlog.get_logger(__name__)

# en-US toLocaleString renders at most 3 fraction digits
_THREE_DP = Decimal("0.001")


class Currency(NamedTuple):
    """Display currency for a country."""
    symbol: str
    code: str


DEFAULT_CURRENCY = Currency(symbol="$", code="USD")

CURRENCY_TABLE: Mapping[str, Currency] = MappingProxyType({
    "Nigeria": Currency(symbol="₦", code="NGN"),
    "Kenya": Currency(symbol="KSh", code="KES"),
    "Ghana": Currency(symbol="₵", code="GHS"),
    "South Africa": Currency(symbol="R", code="ZAR"),
    "Tanzania": Currency(symbol="TSh", code="TZS"),
    "Uganda": Currency(symbol="USh", code="UGX"),
    "Ethiopia": Currency(symbol="Br", code="ETB"),
})


def get_currency(
    country: str,
    table: Mapping[str, Currency] = CURRENCY_TABLE,
) -> Currency:
    """
    Resolve the display currency for a country.

    Args:
        country: Canonical country name, e.g. "Kenya".
        table: Country → Currency mapping (default: CURRENCY_TABLE).

    Returns:
        The mapped Currency, or DEFAULT_CURRENCY ($/USD) when unmapped.
    """
    currency = table.get(country)
    if currency is None:
        logger.debug("currency_fallback", country=country, code=DEFAULT_CURRENCY.code)
        return DEFAULT_CURRENCY
    return currency


def _format_amount(amount: Decimal | int | float) -> str:
    """Render like en-US toLocaleString: '1,234.5', '1,562.5', '800'."""
    value = Decimal(str(amount)).quantize(_THREE_DP, rounding=ROUND_HALF_UP)
    if value == 0:
        value = abs(value)
    text = f"{value:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_price(
    price: Decimal | int | float,
    country: str | None = None,
    unit: str | None = None,
    table: Mapping[str, Currency] = CURRENCY_TABLE,
) -> str:
    """
    Format a price with its currency symbol and unit.

    Examples:
        >>> format_price(Decimal("1562.5"), "Nigeria", "kg")
        '₦1,562.5 per kg'
        >>> format_price(Decimal("40"), "Atlantis", "bag")
        '$40 per bag'
    """
    currency = get_currency(country if country is not None else settings.DEFAULT_COUNTRY, table)
    unit = unit if unit is not None else settings.DEFAULT_UNIT
    return f"{currency.symbol}{_format_amount(price)} per {unit}"
