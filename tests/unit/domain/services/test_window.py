"""Tests for ForecastWindowService: re-basing the forecast on the current month."""

from datetime import date

import pytest

from poforecast.domain.exceptions import InsufficientHistoryError, InvalidArgumentError
from poforecast.domain.services import ForecastWindowService, PriceForecastService

from repository_doubles import constant_repositories, trending_repositories


@pytest.fixture
def window_service() -> ForecastWindowService:
    return ForecastWindowService(PriceForecastService(*trending_repositories()))


async def test_window_after_gap(window_service):
    # Training ends 2024-12; today is mid-March 2025, so the gap is 3 months.
    window = await window_service.forecast_months_ahead("888012", 6, today=date(2025, 3, 15))

    assert window.current_month == date(2025, 3, 1)
    assert window.last_training_month == date(2024, 12, 1)
    assert window.horizon_requested == 9
    assert (window.start_month, window.end_month) == (date(2025, 4, 1), date(2025, 9, 1))
    assert [p.month for p in window.points] == [
        date(2025, 4, 1),
        date(2025, 5, 1),
        date(2025, 6, 1),
        date(2025, 7, 1),
        date(2025, 8, 1),
        date(2025, 9, 1),
    ]


async def test_window_points_match_underlying_forecast(window_service):
    window = await window_service.forecast_months_ahead("888012", 2, today=date(2025, 1, 10))
    by_month = {p.month: p for p in window.result.points}
    assert all(by_month[p.month] == p for p in window.points)


async def test_no_gap_when_training_reaches_current_month(window_service):
    window = await window_service.forecast_months_ahead("888012", 3, today=date(2024, 12, 31))
    assert window.horizon_requested == 3
    assert window.points[0].month == date(2025, 1, 1)


async def test_window_before_training_end_is_empty(window_service):
    window = await window_service.forecast_months_ahead("888012", 2, today=date(2023, 6, 1))
    assert window.horizon_requested == 2
    assert window.points == []


async def test_history_attached(window_service):
    window = await window_service.forecast_months_ahead(
        "888012", 1, today=date(2025, 1, 1), history_limit=4
    )
    assert [h.month for h in window.history] == [
        date(2024, 9, 1),
        date(2024, 10, 1),
        date(2024, 11, 1),
        date(2024, 12, 1),
    ]


async def test_defaults_to_today():
    service = ForecastWindowService(PriceForecastService(*constant_repositories()))
    window = await service.forecast_months_ahead("888012", 1)
    assert window.today == date.today()


@pytest.mark.parametrize("months_ahead", [0, 61])
async def test_months_ahead_out_of_range(window_service, months_ahead):
    with pytest.raises(InvalidArgumentError):
        await window_service.forecast_months_ahead("888012", months_ahead)


async def test_sixty_months_allowed(window_service):
    window = await window_service.forecast_months_ahead("888012", 60, today=date(2025, 1, 1))
    assert len(window.points) == 60


async def test_errors_from_probe_propagate(window_service):
    with pytest.raises(InsufficientHistoryError):
        await window_service.forecast_months_ahead("UNKNOWN", 3, today=date(2025, 1, 1))
