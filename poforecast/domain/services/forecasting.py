"""Price forecast orchestration.

Sequences the pure services for one part code:

  load prices -> monthly average -> [InsufficientHistory]
  load CPI    -> align           -> [InsufficientAlignedHistory]
  base CPI = CPI of the last aligned month
  real = nominal · base / cpi  -> (optional log) -> SSA forecast
  CPI series (natural scale)   -> SSA forecast
  (optional un-log) -> re-inflate with the forecast CPI path -> clamp >= 0

The only suspension points are the two repository reads.  Everything after
them is synchronous, deterministic computation with no shared state, so
concurrent calls for any part codes are independent.  Repository
exceptions propagate unchanged and are never retried.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import numpy as np

from poforecast.domain.calendar import add_months
from poforecast.domain.exceptions import (
    InsufficientAlignedHistoryError,
    InsufficientHistoryError,
    InvalidArgumentError,
)
from poforecast.domain.models.forecast import (
    ForecastDiagnostics,
    ForecastOptions,
    ForecastPoint,
    ForecastResult,
    PriceForecastRequest,
)
from poforecast.domain.models.series import MonthlyPricePoint
from poforecast.domain.repositories.cpi import CpiRepository
from poforecast.domain.repositories.purchase_orders import PurchaseOrderRepository

from .aggregation import MonthlyAggregator
from .alignment import CpiAligner
from .inflation import InflationAdjuster
from .log_transform import LogStabilizer
from .spectral import SpectralForecaster

logger = logging.getLogger(__name__)

_ZERO = Decimal(0)

NOTES = (
    "Forecast REAL price via SSA, forecast CPI via SSA, then re-inflate to nominal "
    "using the CPI of the last aligned month as base."
)


def _to_decimal(value: float) -> Decimal:
    """Shortest decimal that round-trips the float."""
    return Decimal(repr(float(value)))


class PriceForecastService:
    """Forecast a part's nominal purchase price in inflation-aware fashion.

    The service depends only on the repository interfaces; which backend
    sits behind them (CSV files, SQL tables, test doubles) is decided at the
    application boundary.  One SpectralForecaster instance serves both the
    price and the CPI sub-forecasts so the two always decompose identically.
    """

    def __init__(
        self,
        purchase_orders: PurchaseOrderRepository,
        cpi: CpiRepository,
        forecaster: SpectralForecaster | None = None,
    ) -> None:
        self._purchase_orders = purchase_orders
        self._cpi = cpi
        self._forecaster = forecaster or SpectralForecaster()
        self._aggregator = MonthlyAggregator()
        self._aligner = CpiAligner()

    # ─────────────────────────────────────────────────────────────────── #
    # Public API                                                           #
    # ─────────────────────────────────────────────────────────────────── #

    async def forecast(self, request: PriceForecastRequest) -> ForecastResult:
        """Run a forecast described by a request envelope."""
        return await self.forecast_nominal_price_next_months(
            request.part_code,
            request.months,
            currency_code=request.currency_code,
            options=request.options,
        )

    async def forecast_nominal_price_next_months(
        self,
        part_code: str,
        months: int,
        currency_code: str | None = None,
        options: ForecastOptions | None = None,
    ) -> ForecastResult:
        """Forecast the nominal unit price for `months` months after the last training month.

        The horizon is measured from the last CPI-aligned month of history,
        not from today.  See ForecastWindowService for re-basing on the
        current calendar month.

        Raises:
            InvalidArgumentError: Blank part code or non-positive months.
            InsufficientHistoryError: Too few monthly price points.
            InsufficientAlignedHistoryError: Too few months left after the CPI join.
        """
        if part_code is None or not part_code.strip():
            raise InvalidArgumentError("part_code must be a non-empty string.")
        if months <= 0:
            raise InvalidArgumentError(f"months must be positive, got {months}.")
        options = options or ForecastOptions()
        required = options.min_monthly_points

        # 1) prices
        lines = await self._purchase_orders.get_lines(part_code, currency_code)
        monthly = self._aggregator.build_monthly_avg_price(lines)
        logger.debug("PART_CODE=%s: %d order lines -> %d months", part_code, len(lines), len(monthly))
        if len(monthly) < required:
            raise InsufficientHistoryError(part_code, len(monthly), required)

        # 2) CPI join
        cpi_map = self._aligner.build_cpi_map(await self._cpi.get_monthly_cpi())
        alignment = self._aligner.align(monthly, cpi_map)
        aligned = alignment.points
        if alignment.dropped_count:
            logger.debug(
                "PART_CODE=%s: dropped %d month(s) without CPI", part_code, alignment.dropped_count
            )
        if len(aligned) < required:
            raise InsufficientAlignedHistoryError(part_code, len(aligned), required)

        last_training_month = aligned[-1].month
        base_cpi = aligned[-1].cpi_value

        # 3) real series, optionally in log space
        real_series = [
            InflationAdjuster.to_real(p.nominal_price, p.cpi_value, base_cpi) for p in aligned
        ]
        eps = options.log_epsilon
        if options.use_log_transform:
            model_series = [LogStabilizer.to_log(v, eps) for v in real_series]
        else:
            model_series = real_series

        # 4) forecasts
        price_fc = self._forecaster.forecast(model_series, months, options.confidence_level)
        cpi_fc = self._forecaster.forecast(
            [p.cpi_value for p in aligned], months, options.confidence_level
        )

        real_point = self._back_transform(price_fc.forecast, options)
        real_lower = self._back_transform(price_fc.lower, options)
        real_upper = self._back_transform(price_fc.upper, options)

        # 5) re-inflate
        points: list[ForecastPoint] = []
        for i in range(months):
            cpi = _to_decimal(cpi_fc.forecast[i])
            points.append(
                ForecastPoint(
                    month=add_months(last_training_month, i + 1),
                    real_forecast=real_point[i],
                    nominal_forecast=self._nominal(real_point[i], cpi, base_cpi),
                    cpi_forecast=cpi,
                    lower95_nominal=self._nominal(real_lower[i], cpi, base_cpi),
                    upper95_nominal=self._nominal(real_upper[i], cpi, base_cpi),
                )
            )

        cpi_months = list(cpi_map)
        diagnostics = ForecastDiagnostics(
            first_po_month=monthly[0].month,
            last_po_month=monthly[-1].month,
            first_cpi_month=cpi_months[0] if cpi_months else None,
            last_cpi_month=cpi_months[-1] if cpi_months else None,
            first_aligned_month=aligned[0].month,
            last_aligned_month=last_training_month,
            monthly_points_before_join=len(monthly),
            monthly_points_used=len(aligned),
            months_dropped_due_to_missing_cpi=alignment.dropped_count,
            base_cpi=base_cpi,
            notes=NOTES,
            price_spectral=price_fc.params,
            cpi_spectral=cpi_fc.params,
        )

        logger.info(
            "PART_CODE=%s: forecast %d month(s) from %s using %d aligned months (base CPI %s)",
            part_code,
            months,
            last_training_month.isoformat(),
            len(aligned),
            base_cpi,
        )
        return ForecastResult(
            part_code=part_code,
            last_training_month=last_training_month,
            points=points,
            diagnostics=diagnostics,
        )

    async def get_monthly_history(
        self,
        part_code: str,
        currency_code: str | None = None,
        limit: int | None = None,
    ) -> list[MonthlyPricePoint]:
        """Return the monthly average nominal price history for display.

        When limit is given only the most recent `limit` months are kept;
        the result is always ascending by month.
        """
        if part_code is None or not part_code.strip():
            raise InvalidArgumentError("part_code must be a non-empty string.")
        if limit is not None and limit <= 0:
            raise InvalidArgumentError(f"limit must be positive, got {limit}.")
        lines = await self._purchase_orders.get_lines(part_code, currency_code)
        monthly = self._aggregator.build_monthly_avg_price(lines)
        return monthly[-limit:] if limit else monthly

    # ─────────────────────────────────────────────────────────────────── #
    # Internal                                                             #
    # ─────────────────────────────────────────────────────────────────── #

    @staticmethod
    def _back_transform(values: np.ndarray, options: ForecastOptions) -> list[Decimal]:
        decimals = [_to_decimal(v) for v in values]
        if not options.use_log_transform:
            return decimals
        return [LogStabilizer.from_log(v, options.log_epsilon) for v in decimals]

    @staticmethod
    def _nominal(real: Decimal, cpi: Decimal, base_cpi: Decimal) -> Decimal:
        return max(InflationAdjuster.to_nominal(real, cpi, base_cpi), _ZERO)
