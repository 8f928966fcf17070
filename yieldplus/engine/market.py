"""
YieldPlus — Market Analyzer

Top-level composition: trend → seasonal pattern → forecast → recommendation,
assembled into one MarketAnalysis report. Pure and side-effect free; empty
history degrades to a zero forecast and a sell-now recommendation.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

import structlog

from yieldplus.config import settings
from yieldplus.engine.forecast import generate_forecast
from yieldplus.engine.recommendation import get_selling_recommendation
from yieldplus.engine.seasonal import calculate_seasonal_pattern
from yieldplus.engine.trend import calculate_trend, sort_by_recency
from yieldplus.models.analysis import MarketAnalysis
from yieldplus.models.price import Location, PriceObservation

logger = structlog.get_logger(__name__)


def analyze_market(
    crop: str,
    location: Location,
    observations: Sequence[PriceObservation],
    target_harvest_date: date,
    can_store: bool = False,
    storage_cost: Decimal = Decimal("0"),
    reference_date: date | None = None,
) -> MarketAnalysis:
    """
    Produce the full market report for one crop at one location.

    Args:
        crop: Crop identifier.
        location: Location of the series; its country drives currency text.
        observations: Full price history, any order.
        target_harvest_date: Date the harvest will be ready to sell.
        can_store: Whether the farmer has storage.
        storage_cost: Storage cost per month.
        reference_date: "Today" (default: today).

    Returns:
        MarketAnalysis with the 20 most recent observations attached.
    """
    if reference_date is None:
        reference_date = date.today()

    ordered = sort_by_recency(observations)
    current = ordered[0] if ordered else None

    trend = calculate_trend(observations)
    seasonal_pattern = calculate_seasonal_pattern(observations)
    forecast = generate_forecast(
        crop, location, observations, target_harvest_date, reference_date=reference_date
    )
    selling = get_selling_recommendation(
        forecast,
        trend,
        can_store=can_store,
        storage_cost_per_month=storage_cost,
        unit=current.unit if current is not None else None,
        reference_date=reference_date,
    )

    analysis = MarketAnalysis(
        crop=crop,
        location=location,
        current_price=current,
        historical_prices=ordered[: settings.HISTORY_LIMIT],
        trend=trend,
        seasonal_pattern=seasonal_pattern,
        forecast=forecast,
        recommendation=selling.reasoning,
        recommendation_code=selling.recommendation,
    )

    logger.info(
        "market_analyzed",
        crop=crop,
        state=location.state,
        observations=len(ordered),
        trend_direction=trend.direction.value,
        recommendation=selling.recommendation.value,
    )
    return analysis
