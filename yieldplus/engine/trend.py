"""
YieldPlus — Price Trend Calculator

Classifies the recent price move of a commodity series.

Algorithm:
    1. Fewer than 2 observations → stable / 0% / "insufficient data" / low.
    2. Sort by date descending (ties keep input order).
    3. Compare the newest observation with the one at index min(n-1, 7),
       i.e. roughly one week back, or the oldest available.
    4. percent_change = (recent - previous) / previous × 100, 2 dp, ties
       rounded toward +infinity.
    5. Volatility from the population coefficient of variation of all prices:
       CV < 10 → low, CV < 25 → medium, else high.
    6. Direction: change > +5% → rising, < -5% → falling, else stable.

Division-by-zero cases (previous price 0, mean price 0) resolve to 0%
change and low volatility instead of raising.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_CEILING
from typing import Sequence

import structlog

from yieldplus.config import TrendDirection, Volatility, settings
from yieldplus.models.analysis import PriceTrend
from yieldplus.models.price import PriceObservation

logger = structlog.get_logger(__name__)

_TWO_DP = Decimal("0.01")
_HUNDRED = Decimal("100")
_ZERO = Decimal("0")

INSUFFICIENT_DATA_PERIOD = "insufficient data"


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(_TWO_DP, rounding=ROUND_HALF_CEILING)


def sort_by_recency(observations: Sequence[PriceObservation]) -> list[PriceObservation]:
    """
    Return a new list ordered most recent first.

    Python's sort is stable, so same-date observations keep their input
    order and results are reproducible across calls.
    """
    return sorted(observations, key=lambda obs: obs.observed_on, reverse=True)


def _coefficient_of_variation(prices: list[Decimal]) -> Decimal:
    """Population std-dev / mean × 100. Returns 0 when the mean is 0."""
    mean = sum(prices, _ZERO) / len(prices)
    if mean == _ZERO:
        return _ZERO
    variance = sum(((p - mean) ** 2 for p in prices), _ZERO) / len(prices)
    return variance.sqrt() / mean * _HUNDRED


def _classify_volatility(cv: Decimal) -> Volatility:
    if cv < settings.VOLATILITY_LOW_CV_PCT:
        return Volatility.LOW
    if cv < settings.VOLATILITY_MEDIUM_CV_PCT:
        return Volatility.MEDIUM
    return Volatility.HIGH


def _classify_direction(percent_change: Decimal, threshold: Decimal) -> TrendDirection:
    if percent_change > threshold:
        return TrendDirection.RISING
    if percent_change < -threshold:
        return TrendDirection.FALLING
    return TrendDirection.STABLE


def calculate_trend(
    observations: Sequence[PriceObservation],
    lookback_index: int | None = None,
    direction_threshold: Decimal | None = None,
) -> PriceTrend:
    """
    Calculate the price trend of a series.

    Args:
        observations: Price observations in any order.
        lookback_index: Position (after sorting newest first) of the comparison
                        point (default: TREND_LOOKBACK_INDEX, i.e. ~1 week).
        direction_threshold: Percent move needed to call a direction
                             (default: TREND_DIRECTION_THRESHOLD_PCT).

    Returns:
        PriceTrend with 2 dp percent change.
    """
    if len(observations) < 2:
        logger.debug("trend_insufficient_data", observations=len(observations))
        return PriceTrend(
            direction=TrendDirection.STABLE,
            percent_change=_ZERO,
            period=INSUFFICIENT_DATA_PERIOD,
            volatility=Volatility.LOW,
        )

    lookback = lookback_index if lookback_index is not None else settings.TREND_LOOKBACK_INDEX
    threshold = (
        direction_threshold
        if direction_threshold is not None
        else settings.TREND_DIRECTION_THRESHOLD_PCT
    )

    ordered = sort_by_recency(observations)
    recent = ordered[0]
    previous = ordered[min(len(ordered) - 1, lookback)]

    if previous.price == _ZERO:
        logger.warning(
            "trend_zero_previous_price",
            crop=previous.crop_name,
            observed_on=previous.observed_on.isoformat(),
        )
        raw_change = _ZERO
    else:
        raw_change = (recent.price - previous.price) / previous.price * _HUNDRED

    cv = _coefficient_of_variation([obs.price for obs in ordered])
    volatility = _classify_volatility(cv)
    direction = _classify_direction(raw_change, threshold)
    days = (recent.observed_on - previous.observed_on).days

    trend = PriceTrend(
        direction=direction,
        percent_change=_quantize(raw_change),
        period=f"Last {days} days",
        volatility=volatility,
    )

    logger.debug(
        "trend_calculated",
        observations=len(ordered),
        recent_price=str(recent.price),
        previous_price=str(previous.price),
        percent_change=str(trend.percent_change),
        coefficient_of_variation=str(_quantize(cv)),
        direction=direction.value,
        volatility=volatility.value,
    )
    return trend
