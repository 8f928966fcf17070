"""
YieldPlus — Shared pytest Fixtures

Provides common fixtures for all test modules:
- PriceObservation factory with sensible defaults
- Fixed reference date so no test depends on the wall clock
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable

import pytest
import structlog

from yieldplus.models.price import PriceObservation


ObservationFactory = Callable[..., PriceObservation]


def make_observation(
    price: Decimal | str | int,
    observed_on: date | str,
    **overrides,
) -> PriceObservation:
    """Build an observation for a Kano maize series unless overridden."""
    fields = {
        "crop_name": "Maize yellow",
        "state": "KANO",
        "country": "Nigeria",
        "unit": "kg",
        "source": "test",
    }
    fields.update(overrides)
    return PriceObservation(price=price, observed_on=observed_on, **fields)


@pytest.fixture
def obs() -> ObservationFactory:
    """Factory fixture: obs("100", "2024-01-01", state="KADUNA")."""
    return make_observation


@pytest.fixture
def reference_date() -> date:
    """Fixed 'today' for forecast and recommendation tests."""
    return date(2024, 3, 15)


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog configuration a test applied (e.g. via main())."""
    yield
    structlog.reset_defaults()
