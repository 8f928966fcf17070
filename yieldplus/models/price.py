"""
YieldPlus — Price Observation Model

A single recorded market quote for a crop. Created by the caller's ingestion
layer (bulk upload or manual entry) and never modified by the analytics
engine, which only borrows a read-only sequence of these for one call.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, Field, field_validator

from yieldplus.config import ConfidenceTag


class Location(BaseModel):
    """Where a price series was observed. `sub_region` is the LGA/district."""

    model_config = {"frozen": True}

    state: str
    sub_region: str | None = None
    country: str | None = None


class PriceObservation(BaseModel):
    """One immutable market price quote."""

    model_config = {"frozen": True}

    crop_name: str = Field(..., description="Crop identifier, e.g. 'Maize yellow'")
    variety: str | None = Field(default=None, description="Variety or price category")
    state: str = Field(..., description="State / province")
    sub_region: str | None = Field(default=None, description="LGA or district")
    market_name: str | None = Field(default=None, description="Market or outlet type")
    country: str | None = Field(default=None, description="Country name, used for currency")
    price: Decimal = Field(..., ge=0, description="Price per unit, local currency")
    unit: str = Field(default="kg", description="Unit of measure")
    observed_on: date = Field(..., description="Observation date (day granularity)")
    source: str = Field(default="manual", description="Data source identifier")
    confidence: ConfidenceTag = Field(default=ConfidenceTag.MEDIUM)

    @field_validator("price", mode="before")
    @classmethod
    def parse_decimal(cls, v: Any) -> Decimal:
        """Convert price values to Decimal via str. Never use float for money."""
        if isinstance(v, Decimal):
            return v
        try:
            return Decimal(str(v).strip())
        except (InvalidOperation, ValueError) as e:
            raise ValueError(f"price must be numeric, got {v!r}") from e

    @property
    def location(self) -> Location:
        return Location(state=self.state, sub_region=self.sub_region, country=self.country)
