"""Command-line entry point for part price forecasts.

  poforecast forecast --part 888012 --months 6 --currency USD
  poforecast ahead    --part 888012 --months-ahead 6

`forecast` measures the horizon from the last month of training data and
prints the full diagnostic report.  `ahead` re-bases the forecast on the
current calendar month and prints the recent purchase history followed by
the price predictions for the requested window.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from poforecast.domain.exceptions import (
    ForecastError,
    InsufficientAlignedHistoryError,
    InsufficientHistoryError,
    InvalidArgumentError,
    RepositoryError,
)
from poforecast.domain.models.forecast import ForecastOptions, ForecastResult, WindowedForecast
from poforecast.domain.services.forecasting import PriceForecastService
from poforecast.domain.services.window import ForecastWindowService
from poforecast.infrastructure.settings import Settings
from poforecast.infrastructure.wiring import open_repositories

logger = logging.getLogger(__name__)

EXIT_INVALID_ARGUMENT = 2
EXIT_INSUFFICIENT_HISTORY = 3
EXIT_REPOSITORY_FAILURE = 4


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"true", "1", "yes"}:
        return True
    if lowered in {"false", "0", "no"}:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _parse_confidence(value: str) -> float:
    try:
        level = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc
    if not 0.0 < level < 1.0:
        raise argparse.ArgumentTypeError("confidence must be strictly between 0 and 1")
    return level


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="poforecast",
        description="Forecast a part's nominal purchase price from PO history and CPI.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    commands = parser.add_subparsers(dest="command", required=True)

    detailed = commands.add_parser(
        "forecast", help="Forecast N months after the last month of training data."
    )
    detailed.add_argument("--months", type=_positive_int, required=True, help="Forecast horizon in months.")

    ahead = commands.add_parser(
        "ahead", help="Forecast N months after the current calendar month."
    )
    ahead.add_argument(
        "--months-ahead", type=_positive_int, required=True, help="Months after the current month (1-60)."
    )
    ahead.add_argument(
        "--history", type=_positive_int, default=10, help="Number of past monthly prices to show."
    )

    for sub in (detailed, ahead):
        sub.add_argument("--part", required=True, help="Part code to forecast.")
        sub.add_argument("--currency", default=None, help="Currency filter (e.g. USD).")
        sub.add_argument("--log", type=_parse_bool, default=True, help="Forecast in log space (true|false).")
        sub.add_argument("--confidence", type=_parse_confidence, default=0.95, help="Confidence level in (0, 1).")
        sub.add_argument("--min-points", type=_positive_int, default=24, help="Minimum monthly points required.")
        sub.add_argument("--po", type=Path, default=None, help="Purchase-order CSV (CSV mode only).")
        sub.add_argument("--cpi", type=Path, default=None, help="CPI CSV (CSV mode only).")
    return parser


# ─────────────────────────────────────────────────────────────────────────── #
# Formatting                                                                   #
# ─────────────────────────────────────────────────────────────────────────── #


def _fmt_month(value: date | None) -> str:
    return value.isoformat() if value is not None else "(null)"


def _fmt(value: Decimal, places: int) -> str:
    return f"{value:.{places}f}"


def _coverage_lines(result: ForecastResult) -> list[str]:
    d = result.diagnostics
    return [
        "---- Data Coverage ----",
        f"PO Range:   {_fmt_month(d.first_po_month)} --> {_fmt_month(d.last_po_month)}",
        f"CPI Range:  {_fmt_month(d.first_cpi_month)} --> {_fmt_month(d.last_cpi_month)}",
        f"Aligned:    {_fmt_month(d.first_aligned_month)} --> {_fmt_month(d.last_aligned_month)}",
        f"Months before join: {d.monthly_points_before_join}",
        f"Months after join:  {d.monthly_points_used}",
        f"Dropped (no CPI):   {d.months_dropped_due_to_missing_cpi}",
        "",
    ]


def format_report(result: ForecastResult) -> str:
    d = result.diagnostics
    price, cpi = d.price_spectral, d.cpi_spectral
    lines = [
        f"PART_CODE={result.part_code}",
        f"Last training month: {result.last_training_month.isoformat()}",
        f"Monthly points used: {d.monthly_points_used}",
        f"Base CPI: {d.base_cpi}",
        f"Price SSA: window={price.window_size}, seriesLen={price.series_length}, "
        f"train={price.train_size}, rank={price.rank}",
        f"CPI   SSA: window={cpi.window_size}, seriesLen={cpi.series_length}, "
        f"train={cpi.train_size}, rank={cpi.rank}",
        "",
        *_coverage_lines(result),
    ]
    for p in result.points:
        lines.append(
            f"{p.month.isoformat()}  nominal={_fmt(p.nominal_forecast, 4)}  "
            f"95%=[{_fmt(p.lower95_nominal, 4)}, {_fmt(p.upper95_nominal, 4)}]  "
            f"CPI={_fmt(p.cpi_forecast, 3)}  real={_fmt(p.real_forecast, 4)}"
        )
    return "\n".join(lines)


def format_window_report(window: WindowedForecast) -> str:
    lines = [
        f"PART_CODE={window.part_code}",
        f"Today: {window.today.isoformat()} (current month={window.current_month.isoformat()})",
        f"Last training month: {window.last_training_month.isoformat()}",
        f"Requested: {window.months_ahead} months ahead of current month "
        f"({window.start_month.isoformat()} --> {window.end_month.isoformat()})",
        "",
        *_coverage_lines(window.result),
        f"---- Previous purchase prices for Part Code {window.part_code} (Price per Unit) ----",
    ]
    if window.history:
        lines.extend(
            f"{h.month.isoformat()}  Price Per Unit={_fmt(h.avg_nominal_price, 4)}" for h in window.history
        )
    else:
        lines.append("No purchase history found for this part code (after currency filter).")
    lines.append("")
    lines.append(
        f"---- Forecast Price for Part Code {window.part_code} "
        f"(Nominal PRICE_PER_UNIT + Expected Inflation) in the next {window.months_ahead} months ----"
    )
    if window.points:
        lines.extend(
            f"{p.month.isoformat()}  Price Prediction={_fmt(p.nominal_forecast, 4)}" for p in window.points
        )
    else:
        lines.append("No forecast points available for the requested window.")
    return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────── #
# Commands                                                                     #
# ─────────────────────────────────────────────────────────────────────────── #


async def _run(args: argparse.Namespace, settings: Settings) -> str:
    options = ForecastOptions(
        use_log_transform=args.log,
        confidence_level=args.confidence,
        min_monthly_points=args.min_points,
    )
    currency = args.currency or settings.default_currency

    async with open_repositories(settings, po_path=args.po, cpi_path=args.cpi) as repos:
        service = PriceForecastService(repos.purchase_orders, repos.cpi)
        if args.command == "forecast":
            result = await service.forecast_nominal_price_next_months(
                args.part, args.months, currency_code=currency, options=options
            )
            return format_report(result)
        window = await ForecastWindowService(service).forecast_months_ahead(
            args.part,
            args.months_ahead,
            currency_code=currency,
            options=options,
            history_limit=args.history,
        )
        return format_window_report(window)


def main(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = settings or Settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        report = asyncio.run(_run(args, settings))
    except (InvalidArgumentError, ValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INVALID_ARGUMENT
    except (InsufficientHistoryError, InsufficientAlignedHistoryError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_INSUFFICIENT_HISTORY
    except RepositoryError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_REPOSITORY_FAILURE
    except ForecastError as exc:
        logger.exception("Forecast failed")
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(report)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
