"""Forecast configuration and result models.

ForecastOptions: per-call configuration (log transform, minimum history, confidence)
PriceForecastRequest: request envelope built by front ends
SpectralParams: decomposition geometry actually used by one forecaster call
ForecastPoint: one forecast month (real, nominal, CPI, nominal bounds)
ForecastDiagnostics: coverage dates, counts, base CPI and both geometries
ForecastResult: the full answer for one part code
WindowedForecast: a forecast re-based on the current calendar month
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from poforecast.domain.calendar import month_start

from .series import MonthlyPricePoint


class ForecastOptions(BaseModel):
    """Immutable per-call forecast configuration.

    log_epsilon is added before taking the logarithm so that a zero price
    still maps to a finite value; keep it tiny relative to the prices.
    confidence_level must lie strictly inside (0, 1).
    """

    model_config = ConfigDict(frozen=True)

    use_log_transform: bool = True
    log_epsilon: Decimal = Field(default=Decimal("0.0001"), gt=0)
    min_monthly_points: int = Field(default=24, ge=1)
    confidence_level: float = Field(default=0.95, gt=0.0, lt=1.0)


class PriceForecastRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    part_code: str = Field(min_length=1)
    months: int = Field(default=6, gt=0)
    currency_code: str | None = None
    options: ForecastOptions = Field(default_factory=ForecastOptions)


class SpectralParams(BaseModel):
    """Decomposition geometry used for one series.

    rank is the number of singular components retained; 0 means the series
    carried no signal energy and the forecast repeated the last observation.
    """

    model_config = ConfigDict(frozen=True)

    train_size: int = Field(gt=0)
    window_size: int = Field(gt=0)
    series_length: int = Field(gt=0)
    horizon: int = Field(gt=0)
    rank: int = Field(default=0, ge=0)


class ForecastPoint(BaseModel):
    """One forecast month.  Nominal values are clamped to be non-negative."""

    model_config = ConfigDict(frozen=True)

    month: date
    real_forecast: Decimal
    nominal_forecast: Decimal = Field(ge=0)
    cpi_forecast: Decimal
    lower95_nominal: Decimal = Field(ge=0)
    upper95_nominal: Decimal = Field(ge=0)

    @field_validator("month")
    @classmethod
    def _first_of_month(cls, value: date) -> date:
        return month_start(value)


class ForecastDiagnostics(BaseModel):
    model_config = ConfigDict(frozen=True)

    # coverage
    first_po_month: date | None = None
    last_po_month: date | None = None
    first_cpi_month: date | None = None
    last_cpi_month: date | None = None
    first_aligned_month: date | None = None
    last_aligned_month: date | None = None

    # counts
    monthly_points_before_join: int = Field(default=0, ge=0)
    monthly_points_used: int = Field(default=0, ge=0)
    months_dropped_due_to_missing_cpi: int = Field(default=0, ge=0)

    # model
    base_cpi: Decimal
    notes: str = ""
    price_spectral: SpectralParams
    cpi_spectral: SpectralParams


class ForecastResult(BaseModel):
    """Forecast for one part code.

    points starts at last_training_month + 1 and is contiguous monthly for
    exactly the requested horizon.
    """

    model_config = ConfigDict(frozen=True)

    part_code: str
    last_training_month: date
    points: list[ForecastPoint]
    diagnostics: ForecastDiagnostics

    @field_validator("last_training_month")
    @classmethod
    def _first_of_month(cls, value: date) -> date:
        return month_start(value)


class WindowedForecast(BaseModel):
    """Forecast sliced to the months following the current calendar month.

    horizon_requested is the horizon actually sent to the forecaster
    (gap between last_training_month and current_month, plus months_ahead).
    points covers [start_month .. end_month]; history holds the most recent
    monthly purchase prices for display.
    """

    model_config = ConfigDict(frozen=True)

    part_code: str
    today: date
    current_month: date
    last_training_month: date
    months_ahead: int = Field(gt=0)
    start_month: date
    end_month: date
    horizon_requested: int = Field(gt=0)
    points: list[ForecastPoint]
    history: list[MonthlyPricePoint]
    result: ForecastResult
