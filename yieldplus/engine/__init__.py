from yieldplus.engine.forecast import assess_data_quality, generate_forecast
from yieldplus.engine.market import analyze_market
from yieldplus.engine.recommendation import get_selling_recommendation
from yieldplus.engine.seasonal import calculate_seasonal_pattern
from yieldplus.engine.trend import calculate_trend, sort_by_recency

__all__ = [
    "analyze_market",
    "assess_data_quality",
    "calculate_seasonal_pattern",
    "calculate_trend",
    "generate_forecast",
    "get_selling_recommendation",
    "sort_by_recency",
]
