"""Tests for CpiAligner: CPI map construction and the inner join."""

from datetime import date
from decimal import Decimal

import pytest

from poforecast.domain.calendar import add_months
from poforecast.domain.models import CpiObservation, MonthlyPricePoint
from poforecast.domain.services import CpiAligner


@pytest.fixture
def aligner() -> CpiAligner:
    return CpiAligner()


class TestBuildCpiMap:
    def test_duplicate_month_keeps_highest(self, aligner):
        cpi_map = aligner.build_cpi_map(
            [
                CpiObservation(month=date(2024, 1, 1), cpi_value=Decimal(300)),
                CpiObservation(month=date(2024, 1, 15), cpi_value=Decimal(305)),
            ]
        )
        assert cpi_map == {date(2024, 1, 1): Decimal(305)}

    def test_tie_break_independent_of_order(self, aligner):
        cpi_map = aligner.build_cpi_map(
            [
                CpiObservation(month=date(2024, 1, 1), cpi_value=Decimal(305)),
                CpiObservation(month=date(2024, 1, 1), cpi_value=Decimal(300)),
            ]
        )
        assert cpi_map[date(2024, 1, 1)] == Decimal(305)

    def test_keys_ascending(self, aligner):
        cpi_map = aligner.build_cpi_map(
            [
                CpiObservation(month=date(2024, 3, 1), cpi_value=Decimal(3)),
                CpiObservation(month=date(2024, 1, 1), cpi_value=Decimal(1)),
            ]
        )
        assert list(cpi_map) == [date(2024, 1, 1), date(2024, 3, 1)]

    def test_empty(self, aligner):
        assert aligner.build_cpi_map([]) == {}


class TestAlign:
    def test_drop_accounting(self, aligner):
        start = date(2022, 1, 1)
        monthly = [
            MonthlyPricePoint(month=add_months(start, i), avg_nominal_price=Decimal(100)) for i in range(30)
        ]
        cpi_map = {add_months(start, i): Decimal(300) for i in range(2, 30)}

        result = aligner.align(monthly, cpi_map)

        assert len(result.points) == 28
        assert result.dropped_count == 2
        assert result.dropped_months == [date(2022, 1, 1), date(2022, 2, 1)]

    def test_carries_price_and_cpi(self, aligner):
        monthly = [MonthlyPricePoint(month=date(2024, 1, 1), avg_nominal_price=Decimal("12.5"))]
        result = aligner.align(monthly, {date(2024, 1, 1): Decimal("310.1")})
        point = result.points[0]
        assert (point.nominal_price, point.cpi_value) == (Decimal("12.5"), Decimal("310.1"))

    def test_cpi_only_months_ignored(self, aligner):
        monthly = [MonthlyPricePoint(month=date(2024, 1, 1), avg_nominal_price=Decimal(1))]
        cpi_map = {date(2023, 12, 1): Decimal(1), date(2024, 1, 1): Decimal(2)}
        result = aligner.align(monthly, cpi_map)
        assert [p.month for p in result.points] == [date(2024, 1, 1)]
        assert result.dropped_count == 0
