"""
YieldPlus — Price Forecaster

Point forecast for a target date, combining the seasonal profile with a
damped trend:

    expected = current × (target_index / current_index)
    expected *= 1 + (trend% / 100) × (months / 4) × 0.5

where `months` is the month-of-year distance between the target date and
today. When either month has no seasonal index the current price is carried
forward unchanged.

Confidence comes purely from observation count:
    >= 50 excellent (80) | >= 20 good (65) | >= 5 fair (50) | else poor (50)

interval = expected × (100 - confidence) / 100 × 0.3
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

import structlog

from yieldplus.config import DataQuality, settings
from yieldplus.engine.seasonal import calculate_seasonal_pattern
from yieldplus.engine.trend import calculate_trend, sort_by_recency
from yieldplus.models.analysis import ConfidenceInterval, PriceForecast
from yieldplus.models.price import Location, PriceObservation

logger = structlog.get_logger(__name__)

_TWO_DP = Decimal("0.01")
_ONE_DP = Decimal("0.1")
_ONE = Decimal("1")
_HUNDRED = Decimal("100")
_ZERO = Decimal("0")

LIMITED_DATA_REASONING = "Based on limited data"


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(_TWO_DP, rounding=ROUND_HALF_UP)


def assess_data_quality(observation_count: int) -> tuple[DataQuality, int]:
    """Return (data_quality, confidence) for a series length."""
    if observation_count >= settings.DATA_QUALITY_EXCELLENT_MIN:
        return DataQuality.EXCELLENT, settings.CONFIDENCE_EXCELLENT
    if observation_count >= settings.DATA_QUALITY_GOOD_MIN:
        return DataQuality.GOOD, settings.CONFIDENCE_GOOD
    if observation_count >= settings.DATA_QUALITY_FAIR_MIN:
        return DataQuality.FAIR, settings.CONFIDENCE_FAIR
    return DataQuality.POOR, settings.CONFIDENCE_DEFAULT


def generate_forecast(
    crop: str,
    location: Location,
    observations: Sequence[PriceObservation],
    target_date: date,
    reference_date: date | None = None,
) -> PriceForecast:
    """
    Forecast the price of `crop` at `target_date`.

    Args:
        crop: Crop identifier, copied into the forecast.
        location: Where the series was observed.
        observations: Full price history, any order.
        target_date: Date to forecast for (usually the harvest date).
        reference_date: "Today" for the month arithmetic (default: today).
                        Allows testing with fixed dates.

    Returns:
        PriceForecast. Empty history yields a zero forecast with poor quality.
    """
    if reference_date is None:
        reference_date = date.today()

    trend = calculate_trend(observations)
    seasonal = {pattern.month: pattern for pattern in calculate_seasonal_pattern(observations)}

    ordered = sort_by_recency(observations)
    current_price = ordered[0].price if ordered else _ZERO

    data_quality, confidence = assess_data_quality(len(observations))

    target_pattern = seasonal.get(target_date.month)
    current_pattern = seasonal.get(reference_date.month)

    expected_price = current_price
    reasoning = LIMITED_DATA_REASONING
    if (
        target_pattern is not None
        and current_pattern is not None
        and current_pattern.price_index > 0
        and target_pattern.price_index > 0
    ):
        seasonal_ratio = Decimal(target_pattern.price_index) / Decimal(current_pattern.price_index)
        expected_price = current_price * seasonal_ratio

        months_to_target = abs(target_date.month - reference_date.month)
        trend_multiplier = _ONE + (
            (trend.percent_change / _HUNDRED)
            * (Decimal(months_to_target) / settings.TREND_MONTHS_DIVISOR)
            * settings.TREND_DAMPING
        )
        expected_price = expected_price * trend_multiplier

        change_pct = trend.percent_change.quantize(_ONE_DP, rounding=ROUND_HALF_UP)
        reasoning = (
            f"Based on seasonal pattern ({target_pattern.typical_movement.value} period) "
            f"and recent {trend.direction.value} trend ({change_pct}%)."
        )
    else:
        logger.debug(
            "forecast_seasonal_unavailable",
            crop=crop,
            target_month=target_date.month,
            current_month=reference_date.month,
        )

    uncertainty = Decimal(100 - confidence) / _HUNDRED
    interval = expected_price * uncertainty * settings.INTERVAL_SCALE

    forecast = PriceForecast(
        crop=crop,
        location=location,
        current_price=current_price,
        forecast_date=target_date,
        expected_price=_quantize(expected_price),
        confidence_interval=ConfidenceInterval(
            low=_quantize(expected_price - interval),
            high=_quantize(expected_price + interval),
        ),
        confidence=confidence,
        reasoning=reasoning,
        data_quality=data_quality,
    )

    logger.info(
        "forecast_generated",
        crop=crop,
        state=location.state,
        observations=len(observations),
        current_price=str(current_price),
        expected_price=str(forecast.expected_price),
        confidence=confidence,
        data_quality=data_quality.value,
        forecast_date=target_date.isoformat(),
    )
    return forecast
