"""Re-basing a forecast on the current calendar month.

PriceForecastService measures its horizon from the last training month.
Front ends that want "N months after this month" use the discovery
protocol implemented here:

  1. probe with months=1 to learn last_training_month
  2. gap = max(months_between(last_training_month, current_month), 0)
  3. forecast gap + N months
  4. keep points in [current_month + 1 .. current_month + N]

Step 3 relies on the forecaster's monotonic-extension property: the probe
and the full run agree on every month they share.
"""

from __future__ import annotations

import logging
from datetime import date

from poforecast.domain.calendar import add_months, month_start, months_between
from poforecast.domain.exceptions import InvalidArgumentError
from poforecast.domain.models.forecast import ForecastOptions, WindowedForecast

from .forecasting import PriceForecastService

logger = logging.getLogger(__name__)

MAX_MONTHS_AHEAD = 60


class ForecastWindowService:
    def __init__(self, forecasts: PriceForecastService) -> None:
        self._forecasts = forecasts

    async def forecast_months_ahead(
        self,
        part_code: str,
        months_ahead: int,
        currency_code: str | None = None,
        options: ForecastOptions | None = None,
        today: date | None = None,
        history_limit: int = 10,
    ) -> WindowedForecast:
        """Forecast the `months_ahead` months following today's month.

        Args:
            part_code: Part to forecast.
            months_ahead: Display window length, 1..60.
            currency_code: Optional currency filter passed to the repository.
            options: Forecast options; defaults when None.
            today: Reference date; date.today() when None.
            history_limit: Number of most recent monthly prices to include.

        Raises:
            InvalidArgumentError: months_ahead outside 1..60 or blank part code.
        """
        if not 1 <= months_ahead <= MAX_MONTHS_AHEAD:
            raise InvalidArgumentError(
                f"months_ahead must be between 1 and {MAX_MONTHS_AHEAD}, got {months_ahead}."
            )
        today = today or date.today()
        current_month = month_start(today)

        probe = await self._forecasts.forecast_nominal_price_next_months(
            part_code, 1, currency_code=currency_code, options=options
        )
        gap = max(months_between(probe.last_training_month, current_month), 0)
        horizon = gap + months_ahead
        logger.debug(
            "PART_CODE=%s: last training month %s, gap %d, horizon %d",
            part_code,
            probe.last_training_month.isoformat(),
            gap,
            horizon,
        )

        result = await self._forecasts.forecast_nominal_price_next_months(
            part_code, horizon, currency_code=currency_code, options=options
        )
        start_month = add_months(current_month, 1)
        end_month = add_months(current_month, months_ahead)
        points = [p for p in result.points if start_month <= p.month <= end_month]

        history = await self._forecasts.get_monthly_history(
            part_code, currency_code=currency_code, limit=history_limit
        )

        return WindowedForecast(
            part_code=result.part_code,
            today=today,
            current_month=current_month,
            last_training_month=result.last_training_month,
            months_ahead=months_ahead,
            start_month=start_month,
            end_month=end_month,
            horizon_requested=horizon,
            points=points,
            history=history,
            result=result,
        )
