"""
YieldPlus — Selling Recommendation

Sell-or-store decision for a harvest. First matching rule wins:

    1. Trend falling, or current price >= expected → SELL_NOW
    2. No storage available                        → SELL_NOW
    3. Expected gain <= storage cost to target     → SELL_NOW
    4. Holding period <= 1 month                   → STORE_SHORT
    5. Otherwise                                   → STORE_MEDIUM

Holding period = ceil(days until forecast date / 30). Amounts in the
reasoning text are formatted in the currency of the analysed location.
"""

from __future__ import annotations

import math
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

import structlog

from yieldplus.config import RecommendationCode, TrendDirection, settings
from yieldplus.models.analysis import PriceForecast, PriceTrend, SellingRecommendation
from yieldplus.utils.currency import format_price

logger = structlog.get_logger(__name__)

_ONE_DP = Decimal("0.1")
_HUNDRED = Decimal("100")
_ZERO = Decimal("0")


def _one_dp(value: Decimal) -> Decimal:
    return value.quantize(_ONE_DP, rounding=ROUND_HALF_UP)


def _increase_potential_pct(forecast: PriceForecast) -> Decimal:
    if forecast.current_price == _ZERO:
        return _ZERO
    return (forecast.expected_price - forecast.current_price) / forecast.current_price * _HUNDRED


def months_until(target: date, reference_date: date) -> int:
    """Whole storage months (rounded up) between reference_date and target."""
    days = (target - reference_date).days
    return math.ceil(days / settings.DAYS_PER_STORAGE_MONTH)


def _storage_cost(value: Decimal | int | float) -> Decimal:
    """Monthly storage cost as Decimal; negative or non-numeric costs count as 0."""
    try:
        cost = Decimal(str(value))
    except InvalidOperation:
        cost = None
    if cost is None or not cost.is_finite() or cost < _ZERO:
        logger.warning("recommendation_negative_storage_cost", storage_cost_per_month=str(value))
        return _ZERO
    return cost


def get_selling_recommendation(
    forecast: PriceForecast,
    trend: PriceTrend,
    can_store: bool = False,
    storage_cost_per_month: Decimal = _ZERO,
    country: str | None = None,
    unit: str | None = None,
    reference_date: date | None = None,
) -> SellingRecommendation:
    """
    Decide whether to sell now or store until the forecast date.

    Args:
        forecast: Price forecast for the target date.
        trend: Recent price trend.
        can_store: Whether the farmer has storage.
        storage_cost_per_month: Storage cost per month, same currency as prices.
        country: Country for currency formatting (default: the forecast
                 location's country, else DEFAULT_COUNTRY).
        unit: Unit for formatted amounts (default: DEFAULT_UNIT).
        reference_date: "Today" (default: today). Allows testing with fixed dates.

    Returns:
        SellingRecommendation with decision code and reasoning text.
    """
    storage_cost = _storage_cost(storage_cost_per_month)

    if reference_date is None:
        reference_date = date.today()
    if country is None:
        country = forecast.location.country or settings.DEFAULT_COUNTRY

    potential = _increase_potential_pct(forecast)
    current = forecast.current_price
    expected = forecast.expected_price

    if trend.direction == TrendDirection.FALLING or current >= expected:
        state = "declining" if trend.direction == TrendDirection.FALLING else "favorable"
        outlook = "drop" if expected < current else "stabilize"
        result = SellingRecommendation(
            recommendation=RecommendationCode.SELL_NOW,
            reasoning=(
                f"Current price is {state}. "
                f"Forecast suggests prices may {outlook}."
            ),
        )
    elif not can_store:
        result = SellingRecommendation(
            recommendation=RecommendationCode.SELL_NOW,
            reasoning="No storage available. Sell immediately to avoid quality deterioration.",
        )
    else:
        months_to_hold = months_until(forecast.forecast_date, reference_date)
        total_storage_cost = storage_cost * months_to_hold
        expected_gain = expected - current
        net_gain = expected_gain - total_storage_cost

        if expected_gain <= total_storage_cost:
            result = SellingRecommendation(
                recommendation=RecommendationCode.SELL_NOW,
                reasoning=(
                    f"Expected price increase ({_one_dp(potential)}%) "
                    f"won't cover storage costs of {format_price(total_storage_cost, country, unit)}."
                ),
            )
        elif months_to_hold <= 1:
            result = SellingRecommendation(
                recommendation=RecommendationCode.STORE_SHORT,
                reasoning=(
                    f"Prices expected to rise {_one_dp(potential)}% in next month. "
                    f"Net gain after storage: {format_price(net_gain, country, unit)}."
                ),
            )
        else:
            result = SellingRecommendation(
                recommendation=RecommendationCode.STORE_MEDIUM,
                reasoning=(
                    f"Prices expected to peak in {months_to_hold} months. "
                    f"Potential net gain: {format_price(net_gain, country, unit)}."
                ),
            )

    logger.info(
        "recommendation_made",
        crop=forecast.crop,
        recommendation=result.recommendation.value,
        trend_direction=trend.direction.value,
        current_price=str(current),
        expected_price=str(expected),
        can_store=can_store,
        storage_cost_per_month=str(storage_cost),
        country=country,
    )
    return result
