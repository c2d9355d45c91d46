"""CPI lookup construction and the monthly price / CPI inner join."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from poforecast.domain.models.observations import CpiObservation
from poforecast.domain.models.series import AlignedPoint, MonthlyPricePoint


@dataclass
class AlignmentResult:
    """Outcome of joining a monthly price series against the CPI map.

    points keeps the price series order (ascending by month).
    dropped_months lists price months that had no CPI reading.
    """

    points: list[AlignedPoint]
    dropped_months: list[date] = field(default_factory=list)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped_months)


class CpiAligner:
    """Build a month -> CPI lookup and inner-join monthly prices against it.

    The class is stateless; the CPI map is rebuilt from the observations
    passed to each call.
    """

    def build_cpi_map(self, observations: Iterable[CpiObservation]) -> dict[date, Decimal]:
        """Collapse CPI observations to one value per month.

        When several observations share a month the highest cpi_value wins,
        independent of input order.  The returned dict iterates in ascending
        month order.
        """
        cpi_map: dict[date, Decimal] = {}
        for obs in observations:
            current = cpi_map.get(obs.month)
            if current is None or obs.cpi_value > current:
                cpi_map[obs.month] = obs.cpi_value
        return dict(sorted(cpi_map.items()))

    def align(
        self,
        monthly: Sequence[MonthlyPricePoint],
        cpi_map: dict[date, Decimal],
    ) -> AlignmentResult:
        """Inner-join monthly prices with CPI on the exact month key.

        Unmatched months are dropped silently and reported in
        AlignmentResult.dropped_months; deciding whether the remaining
        history is sufficient is the caller's job.
        """
        points: list[AlignedPoint] = []
        dropped: list[date] = []
        for point in monthly:
            cpi = cpi_map.get(point.month)
            if cpi is None:
                dropped.append(point.month)
                continue
            points.append(
                AlignedPoint(month=point.month, nominal_price=point.avg_nominal_price, cpi_value=cpi)
            )
        return AlignmentResult(points=points, dropped_months=dropped)
