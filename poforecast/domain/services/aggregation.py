"""Monthly aggregation of purchase-order prices."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from poforecast.domain.calendar import month_start
from poforecast.domain.models.observations import PriceObservation
from poforecast.domain.models.series import MonthlyPricePoint


class MonthlyAggregator:
    """Collapse order lines into one average nominal price per calendar month.

    Input is expected to be pre-filtered to one part code and (optionally)
    one currency by the repository.  Empty input yields an empty series;
    minimum-history rules are enforced by the orchestrator, not here.
    """

    def build_monthly_avg_price(
        self,
        observations: Iterable[PriceObservation],
    ) -> list[MonthlyPricePoint]:
        """Group by (year, month) of order_date and average price_per_unit.

        The mean is an exact decimal: sum of prices divided by line count.

        Returns:
            One MonthlyPricePoint per month present, ascending by month.
        """
        buckets: dict[date, list[Decimal]] = defaultdict(list)
        for obs in observations:
            buckets[month_start(obs.order_date)].append(obs.price_per_unit)

        return [
            MonthlyPricePoint(
                month=month,
                avg_nominal_price=sum(prices, Decimal(0)) / len(prices),
            )
            for month, prices in sorted(buckets.items())
        ]
