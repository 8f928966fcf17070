"""
YieldPlus — Configuration & Constants

Every threshold, tier boundary and magic number used by the market analytics
engine lives here. No hardcoded values in business logic.

Usage:
    from yieldplus.config import settings
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from pydantic_settings import BaseSettings


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ConfidenceTag(str, Enum):
    """Reliability of a single price observation, as tagged by its source."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TrendDirection(str, Enum):
    """Direction of the most recent price move."""
    RISING = "rising"     # change > +5%
    FALLING = "falling"   # change < -5%
    STABLE = "stable"


class Volatility(str, Enum):
    """Coefficient-of-variation band over the full price series."""
    LOW = "low"           # CV < 10%
    MEDIUM = "medium"     # 10% <= CV < 25%
    HIGH = "high"         # CV >= 25%


class TypicalMovement(str, Enum):
    """Seasonal classification of a month's price index."""
    PEAK = "peak"         # index >= 115
    RISING = "rising"     # 105 <= index < 115
    FALLING = "falling"   # 85 < index <= 95
    TROUGH = "trough"     # index <= 85
    STABLE = "stable"


class DataQuality(str, Enum):
    """Forecast data quality, driven by observation count only."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class RecommendationCode(str, Enum):
    """Sell-or-store decision."""
    SELL_NOW = "sell_now"
    STORE_SHORT = "store_short"
    STORE_MEDIUM = "store_medium"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Central configuration for the YieldPlus market analytics engine.

    Loads from environment variables with fallback defaults.
    """

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    LOG_LEVEL: str = "INFO"

    # -----------------------------------------------------------------------
    # Presentation defaults
    # -----------------------------------------------------------------------
    DEFAULT_COUNTRY: str = "Nigeria"
    DEFAULT_UNIT: str = "kg"
    HISTORY_LIMIT: int = 20                 # Rows kept in MarketAnalysis.historical_prices

    # -----------------------------------------------------------------------
    # Trend Calculator
    # Compare the newest observation with the one ~1 week back (index 7)
    # -----------------------------------------------------------------------
    TREND_LOOKBACK_INDEX: int = 7
    TREND_DIRECTION_THRESHOLD_PCT: Decimal = Decimal("5")
    VOLATILITY_LOW_CV_PCT: Decimal = Decimal("10")
    VOLATILITY_MEDIUM_CV_PCT: Decimal = Decimal("25")

    # -----------------------------------------------------------------------
    # Seasonal Pattern Calculator (price index, 100 = annual average)
    # -----------------------------------------------------------------------
    SEASONAL_PEAK_INDEX: int = 115
    SEASONAL_RISING_INDEX: int = 105
    SEASONAL_FALLING_INDEX: int = 95
    SEASONAL_TROUGH_INDEX: int = 85

    # -----------------------------------------------------------------------
    # Forecaster — data quality tiers by observation count
    # -----------------------------------------------------------------------
    DATA_QUALITY_EXCELLENT_MIN: int = 50
    DATA_QUALITY_GOOD_MIN: int = 20
    DATA_QUALITY_FAIR_MIN: int = 5
    CONFIDENCE_EXCELLENT: int = 80
    CONFIDENCE_GOOD: int = 65
    CONFIDENCE_FAIR: int = 50
    CONFIDENCE_DEFAULT: int = 50

    # expected *= 1 + (trend% / 100) × (months / 4) × 0.5
    TREND_MONTHS_DIVISOR: Decimal = Decimal("4")
    TREND_DAMPING: Decimal = Decimal("0.5")

    # interval = expected × (100 - confidence) / 100 × 0.3
    INTERVAL_SCALE: Decimal = Decimal("0.3")

    # -----------------------------------------------------------------------
    # Selling-Recommendation Engine
    # -----------------------------------------------------------------------
    DAYS_PER_STORAGE_MONTH: int = 30


# Singleton instance
settings = Settings()
