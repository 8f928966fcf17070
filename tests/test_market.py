"""Integration tests for the market analyzer (trend → seasonal → forecast → recommendation)."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from yieldplus.config import DataQuality, RecommendationCode, TrendDirection, Volatility
from yieldplus.engine.market import analyze_market
from yieldplus.models.price import Location

KANO = Location(state="KANO", country="Nigeria")


class TestEmptyHistory:
    """No observations degrade to defaults, never raise."""

    def test_defaults(self, reference_date) -> None:
        analysis = analyze_market("Maize", KANO, [], date(2024, 7, 15), reference_date=reference_date)

        assert analysis.current_price is None
        assert analysis.historical_prices == []
        assert analysis.trend.direction == TrendDirection.STABLE
        assert analysis.trend.percent_change == Decimal("0")
        assert analysis.trend.period == "insufficient data"
        assert analysis.trend.volatility == Volatility.LOW
        assert len(analysis.seasonal_pattern) == 12
        assert analysis.forecast.current_price == Decimal("0")
        assert analysis.forecast.confidence == 50
        assert analysis.forecast.data_quality == DataQuality.POOR
        assert analysis.recommendation_code == RecommendationCode.SELL_NOW


class TestComposition:
    def test_history_truncated_to_twenty_most_recent(self, obs, reference_date) -> None:
        start = date(2024, 1, 1)
        history = [obs(str(100 + i), start + timedelta(days=i)) for i in range(30)]

        analysis = analyze_market(
            "Maize", KANO, history, date(2024, 7, 15), reference_date=reference_date
        )

        assert len(analysis.historical_prices) == 20
        assert analysis.historical_prices[0].observed_on == date(2024, 1, 30)
        assert analysis.historical_prices[-1].observed_on == date(2024, 1, 11)
        assert analysis.current_price == history[-1]

    def test_recommendation_is_reasoning_text(self, obs, reference_date) -> None:
        history = [obs("100", "2024-01-01"), obs("80", "2024-01-08")]

        analysis = analyze_market(
            "Maize", KANO, history, date(2024, 7, 15), reference_date=reference_date
        )

        assert analysis.trend.direction == TrendDirection.FALLING
        assert analysis.recommendation_code == RecommendationCode.SELL_NOW
        assert analysis.recommendation.startswith("Current price is declining.")

    def test_store_with_location_currency(self, obs, reference_date) -> None:
        """March → July seasonal lift of 1.5× with storage at 5/month for 5 months."""
        accra = Location(state="Greater Accra", country="Ghana")
        history = [
            obs("100", "2023-03-10", country="Ghana"),
            obs("150", "2023-07-10", country="Ghana"),
            obs("100", "2024-03-10", country="Ghana"),
        ]

        analysis = analyze_market(
            "Maize",
            accra,
            history,
            date(2024, 7, 15),
            can_store=True,
            storage_cost=Decimal("5"),
            reference_date=reference_date,
        )

        assert analysis.forecast.expected_price == Decimal("150.00")
        assert analysis.recommendation_code == RecommendationCode.STORE_MEDIUM
        assert analysis.recommendation == (
            "Prices expected to peak in 5 months. Potential net gain: ₵25 per kg."
        )

    def test_negative_storage_cost_counts_as_free(self, obs, reference_date) -> None:
        history = [obs("100", "2023-03-10"), obs("150", "2023-07-10"), obs("100", "2024-03-10")]

        analysis = analyze_market(
            "Maize", KANO, history, date(2024, 7, 15), can_store=True,
            storage_cost=Decimal("-1"), reference_date=reference_date,
        )

        assert analysis.recommendation_code == RecommendationCode.STORE_MEDIUM
        assert analysis.recommendation == (
            "Prices expected to peak in 5 months. Potential net gain: ₦50 per kg."
        )

    def test_unit_taken_from_latest_observation(self, obs, reference_date) -> None:
        history = [
            obs("100", "2023-03-10", unit="bag"),
            obs("150", "2023-07-10", unit="bag"),
            obs("100", "2024-03-10", unit="bag"),
        ]
        analysis = analyze_market(
            "Maize", KANO, history, date(2024, 7, 15), can_store=True,
            reference_date=reference_date,
        )
        assert analysis.recommendation.endswith("per bag.")

    def test_input_not_mutated(self, obs, reference_date) -> None:
        history = [obs("100", "2024-01-08"), obs("90", "2024-01-01"), obs("95", "2024-01-04")]
        snapshot = list(history)
        analyze_market("Maize", KANO, history, date(2024, 7, 15), reference_date=reference_date)
        assert history == snapshot

    def test_report_serializes_to_json(self, obs, reference_date) -> None:
        history = [obs("100", "2024-01-01"), obs("120", "2024-01-08")]
        analysis = analyze_market(
            "Maize", KANO, history, date(2024, 7, 15), reference_date=reference_date
        )
        payload = analysis.model_dump(mode="json")
        assert payload["trend"]["direction"] == "rising"
        assert payload["recommendation_code"] in {"sell_now", "store_short", "store_medium"}
        assert len(payload["seasonal_pattern"]) == 12
