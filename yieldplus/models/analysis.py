"""
YieldPlus — Derived Analysis Models

Ephemeral results of the analytics engine. Derived fresh on every call and
never persisted by the engine itself.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from yieldplus.config import (
    DataQuality,
    RecommendationCode,
    TrendDirection,
    TypicalMovement,
    Volatility,
)
from yieldplus.models.price import Location, PriceObservation


class PriceTrend(BaseModel):
    """Direction, magnitude and volatility of the recent price move."""

    model_config = {"frozen": True}

    direction: TrendDirection
    percent_change: Decimal
    period: str
    volatility: Volatility


class SeasonalPricePattern(BaseModel):
    """One calendar month of the seasonal profile (100 = annual average)."""

    model_config = {"frozen": True}

    month: int = Field(..., ge=1, le=12)
    month_name: str
    average_price: Decimal
    price_index: int
    typical_movement: TypicalMovement


class ConfidenceInterval(BaseModel):
    model_config = {"frozen": True}

    low: Decimal
    high: Decimal


class PriceForecast(BaseModel):
    """Point forecast for a target date with a symmetric confidence band."""

    model_config = {"frozen": True}

    crop: str
    location: Location
    current_price: Decimal
    forecast_date: date
    expected_price: Decimal
    confidence_interval: ConfidenceInterval
    confidence: int = Field(..., ge=0, le=100)
    reasoning: str
    data_quality: DataQuality


class SellingRecommendation(BaseModel):
    model_config = {"frozen": True}

    recommendation: RecommendationCode
    reasoning: str


class MarketAnalysis(BaseModel):
    """
    Composite market report.

    `recommendation` carries the reasoning text (as the original report did);
    the discrete decision is exposed separately as `recommendation_code`.
    """

    model_config = {"frozen": True}

    crop: str
    location: Location
    current_price: PriceObservation | None
    historical_prices: list[PriceObservation]
    trend: PriceTrend
    seasonal_pattern: list[SeasonalPricePattern]
    forecast: PriceForecast
    recommendation: str
    recommendation_code: RecommendationCode
