"""
YieldPlus — Seasonal Price Pattern

Pools observations by calendar month (all years together) and expresses each
month's average as an index against the annual average (100 = average).

Only months with data count towards the annual average; empty months report
average 0 and index 0 and never drag the denominator down.

Index → movement:
    >= 115 peak | >= 105 rising | <= 85 trough | <= 95 falling | else stable
"""

from __future__ import annotations

import calendar
from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

import structlog

from yieldplus.config import TypicalMovement, settings
from yieldplus.models.analysis import SeasonalPricePattern
from yieldplus.models.price import PriceObservation

logger = structlog.get_logger(__name__)

_TWO_DP = Decimal("0.01")
_ONE = Decimal("1")
_HUNDRED = Decimal("100")
_ZERO = Decimal("0")


def classify_movement(price_index: int) -> TypicalMovement:
    """Map a monthly price index to its typical movement."""
    if price_index >= settings.SEASONAL_PEAK_INDEX:
        return TypicalMovement.PEAK
    if price_index >= settings.SEASONAL_RISING_INDEX:
        return TypicalMovement.RISING
    if price_index <= settings.SEASONAL_TROUGH_INDEX:
        return TypicalMovement.TROUGH
    if price_index <= settings.SEASONAL_FALLING_INDEX:
        return TypicalMovement.FALLING
    return TypicalMovement.STABLE


def calculate_seasonal_pattern(
    observations: Sequence[PriceObservation],
) -> list[SeasonalPricePattern]:
    """
    Build the 12-month seasonal profile of a price series.

    Returns:
        Exactly 12 SeasonalPricePattern entries, January first.
    """
    monthly_prices: dict[int, list[Decimal]] = defaultdict(list)
    for obs in observations:
        monthly_prices[obs.observed_on.month].append(obs.price)

    averages: dict[int, Decimal] = {}
    for month in range(1, 13):
        prices = monthly_prices.get(month, [])
        averages[month] = sum(prices, _ZERO) / len(prices) if prices else _ZERO

    populated = [avg for avg in averages.values() if avg > _ZERO]
    annual_average = sum(populated, _ZERO) / len(populated) if populated else _ZERO

    patterns: list[SeasonalPricePattern] = []
    for month in range(1, 13):
        average_price = averages[month].quantize(_TWO_DP, rounding=ROUND_HALF_UP)
        price_index = 0
        movement = TypicalMovement.STABLE
        if annual_average > _ZERO and average_price > _ZERO:
            price_index = int(
                (average_price / annual_average * _HUNDRED).quantize(_ONE, rounding=ROUND_HALF_UP)
            )
            movement = classify_movement(price_index)

        patterns.append(
            SeasonalPricePattern(
                month=month,
                month_name=calendar.month_name[month],
                average_price=average_price,
                price_index=price_index,
                typical_movement=movement,
            )
        )

    logger.debug(
        "seasonal_pattern_calculated",
        observations=len(observations),
        months_with_data=len(populated),
        annual_average=str(annual_average.quantize(_TWO_DP, rounding=ROUND_HALF_UP)),
    )
    return patterns
