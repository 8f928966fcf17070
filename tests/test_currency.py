"""
YieldPlus — Currency Resolver & Price Formatting Tests

Validates:
- Exact, case-sensitive country lookup with USD fallback
- en-US style amount rendering (thousands separators, <= 3 decimals)
- Injectable, read-only currency table
"""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType

import pytest

from yieldplus.utils.currency import (
    CURRENCY_TABLE,
    DEFAULT_CURRENCY,
    Currency,
    format_price,
    get_currency,
)


class TestGetCurrency:
    """Country → currency lookup."""

    @pytest.mark.parametrize(
        "country,symbol,code",
        [
            ("Nigeria", "₦", "NGN"),
            ("Kenya", "KSh", "KES"),
            ("Ghana", "₵", "GHS"),
            ("South Africa", "R", "ZAR"),
            ("Tanzania", "TSh", "TZS"),
            ("Uganda", "USh", "UGX"),
            ("Ethiopia", "Br", "ETB"),
        ],
    )
    def test_known_countries(self, country: str, symbol: str, code: str) -> None:
        assert get_currency(country) == Currency(symbol=symbol, code=code)

    def test_unknown_country_falls_back_to_usd(self) -> None:
        assert get_currency("Atlantis") == Currency(symbol="$", code="USD")
        assert get_currency("Atlantis") is DEFAULT_CURRENCY

    def test_lookup_is_case_sensitive(self) -> None:
        """No normalization: 'nigeria' is not 'Nigeria'."""
        assert get_currency("nigeria") == DEFAULT_CURRENCY

    def test_lookup_does_not_trim(self) -> None:
        assert get_currency(" Kenya") == DEFAULT_CURRENCY

    def test_custom_table(self) -> None:
        table = MappingProxyType({"Mars": Currency(symbol="M", code="MRS")})
        assert get_currency("Mars", table) == Currency(symbol="M", code="MRS")
        assert get_currency("Nigeria", table) == DEFAULT_CURRENCY

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            CURRENCY_TABLE["Mars"] = Currency(symbol="M", code="MRS")  # type: ignore[index]


class TestFormatPrice:
    """Price rendering with symbol and unit."""

    def test_fractional_price_with_thousands_separator(self) -> None:
        assert format_price(Decimal("1562.5"), "Nigeria", "kg") == "₦1,562.5 per kg"

    def test_whole_price_has_no_decimals(self) -> None:
        assert format_price(1875, "Kenya", "bag") == "KSh1,875 per bag"

    def test_trailing_zeros_dropped(self) -> None:
        assert format_price(Decimal("7.00"), "Ghana", "kg") == "₵7 per kg"

    def test_large_amount(self) -> None:
        assert format_price(Decimal("1234567.891"), "Uganda", "tonne") == "USh1,234,567.891 per tonne"

    def test_rounds_to_three_decimals(self) -> None:
        assert format_price(Decimal("0.1235"), "Ethiopia", "kg") == "Br0.124 per kg"

    def test_zero(self) -> None:
        assert format_price(Decimal("0"), "Nigeria", "kg") == "₦0 per kg"

    def test_defaults_to_nigeria_per_kg(self) -> None:
        assert format_price(Decimal("100")) == "₦100 per kg"

    def test_unknown_country_uses_dollar(self) -> None:
        assert format_price(Decimal("40"), "Atlantis", "crate") == "$40 per crate"

    @pytest.mark.parametrize("country", ["Nigeria", "Kenya", "South Africa", "Tanzania"])
    def test_contains_symbol_and_unit(self, country: str) -> None:
        text = format_price(Decimal("2500.75"), country, "basket")
        assert get_currency(country).symbol in text
        assert text.endswith(" per basket")
