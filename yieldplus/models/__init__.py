"""
Models package — export all domain models.
"""

from yieldplus.models.analysis import (
    ConfidenceInterval,
    MarketAnalysis,
    PriceForecast,
    PriceTrend,
    SeasonalPricePattern,
    SellingRecommendation,
)
from yieldplus.models.price import Location, PriceObservation

__all__ = [
    "ConfidenceInterval",
    "Location",
    "MarketAnalysis",
    "PriceForecast",
    "PriceObservation",
    "PriceTrend",
    "SeasonalPricePattern",
    "SellingRecommendation",
]
