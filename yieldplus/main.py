"""
YieldPlus — Command-line Entrypoint

Imports a market price export, selects one crop/state series and prints the
market analysis report as JSON.

Usage:
    python -m yieldplus.main prices.tsv --crop "Maize yellow" --state KANO \\
        --target-date 2026-11-15 --can-store --storage-cost 25
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

import structlog

from yieldplus.config import settings
from yieldplus.engine.market import analyze_market
from yieldplus.models.price import Location
from yieldplus.pipeline.csv_import import filter_observations, parse_market_csv


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def _configure_logging(log_level: str = "INFO") -> None:
    """
    Set up structured logging with JSON output on stderr.

    stdout is reserved for the report itself.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Argument Parsing
# ---------------------------------------------------------------------------


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date '{value}' (expected YYYY-MM-DD)") from e


def _parse_cost(value: str) -> Decimal:
    try:
        cost = Decimal(value)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"invalid amount '{value}'") from e
    if not cost.is_finite() or cost < 0:
        raise argparse.ArgumentTypeError(f"storage cost must be non-negative, got '{value}'")
    return cost


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yieldplus",
        description="Analyse a crop's market prices and recommend when to sell.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m yieldplus.main prices.tsv --crop "Maize yellow" --state KANO --target-date 2026-11-15
  python -m yieldplus.main prices.csv --crop Sorghum --state Kaduna --target-date 2027-01-10 \\
      --can-store --storage-cost 25
""",
    )
    parser.add_argument("csv_path", type=Path, help="Market price export (tab or comma separated).")
    parser.add_argument("--crop", required=True, help="Food item to analyse (case-insensitive).")
    parser.add_argument("--state", required=True, help="State to analyse (case-insensitive).")
    parser.add_argument("--country", default=None, help="Country for currency display.")
    parser.add_argument(
        "--target-date",
        type=_parse_date,
        required=True,
        help="Expected harvest/sale date, YYYY-MM-DD.",
    )
    parser.add_argument("--can-store", action="store_true", help="Storage is available.")
    parser.add_argument(
        "--storage-cost",
        type=_parse_cost,
        default=Decimal("0"),
        help="Storage cost per month (default: 0).",
    )
    parser.add_argument("--unit", default=None, help=f"Unit of measure (default: {settings.DEFAULT_UNIT}).")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.LOG_LEVEL,
        help="Log level (default: %(default)s).",
    )
    return parser


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)
    logger = structlog.get_logger(__name__)

    try:
        text = args.csv_path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Failed to read {args.csv_path}: {e}", file=sys.stderr)
        return 1

    imported = parse_market_csv(text, unit=args.unit)
    for error in imported.errors:
        logger.warning("csv_row_skipped", detail=error)

    series = filter_observations(imported.observations, crop=args.crop, state=args.state)
    if not series:
        print(
            f"No observations for crop '{args.crop}' in state '{args.state}' "
            f"({len(imported.observations)} rows imported).",
            file=sys.stderr,
        )
        return 1

    sample = series[0]
    location = Location(
        state=sample.state,
        sub_region=None,
        country=args.country or sample.country,
    )

    analysis = analyze_market(
        crop=sample.crop_name,
        location=location,
        observations=series,
        target_harvest_date=args.target_date,
        can_store=args.can_store,
        storage_cost=args.storage_cost,
    )
    print(analysis.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
