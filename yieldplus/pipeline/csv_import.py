"""
YieldPlus — Market Price CSV Import

Parses bulk market price exports into PriceObservation records.

Expected columns (header row required, tab- or comma-separated):

    Date | State | LGA | Outlet Type | Country | Sector | Food Item | Price Category | UPRICE

Dates are DD/MM/YYYY. Bad rows are skipped, never fatal: the result carries
the parsed observations, the number of skipped rows and the first 10 error
messages.
"""

from __future__ import annotations

import csv
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Sequence

import structlog
from pydantic import BaseModel, Field, ValidationError

from yieldplus.config import settings
from yieldplus.models.price import PriceObservation

logger = structlog.get_logger(__name__)

EXPECTED_COLUMNS = 9
MAX_REPORTED_ERRORS = 10

_BOM = "\ufeff"

# Column positions
_DATE, _STATE, _LGA, _OUTLET, _COUNTRY, _SECTOR, _FOOD_ITEM, _CATEGORY, _PRICE = range(9)


class CsvImportResult(BaseModel):
    """Outcome of a bulk CSV import."""

    observations: list[PriceObservation] = Field(default_factory=list)
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)


class _RowError(ValueError):
    pass


def detect_separator(header_line: str) -> str:
    """Tab when the header has more tabs than commas, else comma."""
    return "\t" if header_line.count("\t") > header_line.count(",") else ","


def _parse_date(raw: str) -> date:
    text = raw.strip()
    if not text:
        raise _RowError("Empty date")
    parts = text.split("/")
    if len(parts) != 3:
        raise _RowError(f'Invalid date format "{text}" (expected DD/MM/YYYY)')
    day, month, year = (p.strip() for p in parts)
    if len(year) != 4 or not (day.isdigit() and month.isdigit() and year.isdigit()):
        raise _RowError(f'Invalid date "{text}"')
    try:
        return date(int(year), int(month), int(day))
    except ValueError as e:
        raise _RowError(f'Invalid date "{text}"') from e


def _parse_price(raw: str) -> Decimal:
    text = raw.strip()
    if not text:
        raise _RowError("Empty price")
    try:
        price = Decimal(text)
    except InvalidOperation as e:
        raise _RowError(f'Invalid price "{text}"') from e
    if not price.is_finite() or price < 0:
        raise _RowError(f'Invalid price "{text}"')
    return price


def _parse_row(values: Sequence[str], unit: str, source: str) -> PriceObservation:
    if len(values) < EXPECTED_COLUMNS:
        raise _RowError(f"Only {len(values)} columns (expected {EXPECTED_COLUMNS})")

    observed_on = _parse_date(values[_DATE])
    price = _parse_price(values[_PRICE])

    required = [values[i].strip() for i in (_STATE, _LGA, _OUTLET, _SECTOR, _FOOD_ITEM, _CATEGORY)]
    if not all(required):
        raise _RowError("Missing required field(s)")
    state, lga, outlet, _sector, food_item, category = required

    try:
        return PriceObservation(
            crop_name=food_item,
            variety=category,
            state=state,
            sub_region=lga,
            market_name=outlet,
            country=values[_COUNTRY].strip() or None,
            price=price,
            unit=unit,
            observed_on=observed_on,
            source=source,
        )
    except ValidationError as e:
        raise _RowError(f"Invalid record ({e.error_count()} validation errors)") from e


def parse_market_csv(
    text: str,
    unit: str | None = None,
    source: str = "bulk_upload",
) -> CsvImportResult:
    """
    Parse a market price export into observations.

    Args:
        text: Full file contents.
        unit: Unit of measure to stamp on every row (default: DEFAULT_UNIT).
        source: Source identifier to stamp on every row.

    Returns:
        CsvImportResult. A file without a header and at least one data row
        returns no observations and a single error.
    """
    unit = unit if unit is not None else settings.DEFAULT_UNIT

    if text.startswith(_BOM):
        text = text[1:]

    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        logger.warning("csv_import_empty", lines=len(lines))
        return CsvImportResult(
            errors=["CSV file must have at least a header row and one data row"],
        )

    separator = detect_separator(lines[0])
    result = CsvImportResult()

    for line_no, values in enumerate(csv.reader(lines[1:], delimiter=separator), start=1):
        try:
            result.observations.append(_parse_row(values, unit, source))
        except _RowError as e:
            result.skipped += 1
            if len(result.errors) < MAX_REPORTED_ERRORS:
                result.errors.append(f"Line {line_no}: {e}")

    logger.info(
        "csv_import_complete",
        separator="tab" if separator == "\t" else "comma",
        parsed=len(result.observations),
        skipped=result.skipped,
    )
    return result


def filter_observations(
    observations: Iterable[PriceObservation],
    crop: str | None = None,
    state: str | None = None,
) -> list[PriceObservation]:
    """Select one crop/state series. Matching is exact but case-insensitive."""
    crop_key = crop.casefold() if crop else None
    state_key = state.casefold() if state else None
    return [
        obs
        for obs in observations
        if (crop_key is None or obs.crop_name.casefold() == crop_key)
        and (state_key is None or obs.state.casefold() == state_key)
    ]
